"""
Result normalization engine for web API exploration.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from dateutil import parser as date_parser
from pydantic import ValidationError

from models.enums import BugPriority, IssueState, StepKind, SupportLevel
from models.schema import (
    BROWSERS,
    STEP_DEFINITIONS,
    ApiNameResult,
    BrowserSupport,
    BrowserSupportResult,
    BugsResult,
    ChromiumBug,
    ChromiumChange,
    ChromiumStatus,
    ExplainerInfo,
    ExplainerResult,
    GitHubIssue,
    IntroductionResult,
    IssuesResult,
    PredictionResult,
    StatusResult,
    StepResult,
    SupportStatus,
)


logger = logging.getLogger(__name__)


# Version strings reported when a browser is detected on a page
DETECTED_VERSIONS = {
    "chrome": "88+",
    "firefox": "85+",
    "safari": "14+",
    "edge": "88+",
}


class CatalogMatcher:
    """Matches free-text queries against the catalog of known web APIs."""

    CATALOG = [
        "Fetch API",
        "WebSocket API",
        "Geolocation API",
        "Web Audio API",
        "WebRTC API",
        "Service Workers API",
        "Push API",
        "Notifications API",
        "File API",
        "IndexedDB API",
        "Web Storage API",
        "WebGL API",
        "Canvas API",
        "Web Animations API",
        "Intersection Observer API",
        "Resize Observer API",
        "Mutation Observer API",
        "Performance API",
        "Web Crypto API",
        "Web Assembly API",
    ]

    DEFAULT = "Fetch API"

    @classmethod
    def match(cls, query: str) -> Optional[str]:
        """
        Find the first catalog entry matching a query.

        An entry matches when it contains the normalized query, or when
        the query contains the entry without its " api" suffix.

        Args:
            query: Raw user query

        Returns:
            Catalog entry or None if nothing matches
        """
        normalized = query.lower().strip()
        if not normalized:
            return None

        for entry in cls.CATALOG:
            lowered = entry.lower()
            if normalized in lowered or lowered.replace(" api", "") in normalized:
                return entry

        return None

    @classmethod
    def resolve(cls, query: str) -> str:
        """Catalog match, or the default API name."""
        return cls.match(query) or cls.DEFAULT


class ResultNormalizer:
    """Maps resolver payloads and raw source items into report records."""

    def __init__(self):
        self._handlers: Dict[StepKind, Callable[[Any], StepResult]] = {
            StepKind.API_NAME: self._api_name,
            StepKind.INTRODUCTION: self._introduction,
            StepKind.BROWSER_SUPPORT: self._browser_support,
            StepKind.EXPLAINER: self._explainer,
            StepKind.ISSUES: self._issues,
            StepKind.BUGS: self._bugs,
            StepKind.STATUS: self._status,
            StepKind.PREDICTION: self._prediction,
        }

    def normalize(self, step: Union[int, StepKind], payload: Any) -> StepResult:
        """
        Wrap a resolver payload into the result record for a step.

        Args:
            step: Step id (1..8) or StepKind
            payload: Value returned by the step's resolver

        Returns:
            Step result record

        Raises:
            ValueError: If the step is unknown or the payload is unusable
        """
        kind = step if isinstance(step, StepKind) else kind_for_step(step)
        return self._handlers[kind](payload)

    # ------------------------------------------------------------------
    # Per-step payloads
    # ------------------------------------------------------------------

    @staticmethod
    def _api_name(payload: str) -> ApiNameResult:
        return ApiNameResult(api_name=(payload or "").strip())

    @staticmethod
    def _introduction(payload: Any) -> IntroductionResult:
        return IntroductionResult(
            description=_field(payload, "description") or "",
            mdn_url=_field(payload, "mdn_url") or "",
        )

    @staticmethod
    def _browser_support(payload: BrowserSupport) -> BrowserSupportResult:
        return BrowserSupportResult(browser_support=payload)

    @staticmethod
    def _explainer(payload: Optional[ExplainerInfo]) -> ExplainerResult:
        return ExplainerResult(explainer=payload)

    @staticmethod
    def _issues(payload: Optional[List[GitHubIssue]]) -> IssuesResult:
        return IssuesResult(issues=list(payload or []))

    @staticmethod
    def _bugs(payload: Optional[List[ChromiumBug]]) -> BugsResult:
        return BugsResult(bugs=list(payload or []))

    @staticmethod
    def _status(payload: ChromiumStatus) -> StatusResult:
        return StatusResult(
            summary=payload.summary,
            recent_changes=list(payload.recent_changes or []),
        )

    @staticmethod
    def _prediction(payload: str) -> PredictionResult:
        return PredictionResult(prediction=payload)

    # ------------------------------------------------------------------
    # Raw source items
    # ------------------------------------------------------------------

    @staticmethod
    def doc_fields(item: Dict[str, Any]) -> Dict[str, Optional[str]]:
        """Description and URL from an MDN search document."""
        excerpt = _text(item.get("excerpt")) or _text(item.get("summary"))
        url = _text(item.get("mdn_url"))
        if url and url.startswith("/"):
            url = f"https://developer.mozilla.org{url}"
        return {"description": excerpt or None, "mdn_url": url}

    @staticmethod
    def issue_from_github(item: Dict[str, Any]) -> Optional[GitHubIssue]:
        """
        Convert a GitHub search item into a GitHubIssue.

        Items without a number, title or URL are dropped (None).
        """
        try:
            state = item.get("state") or IssueState.OPEN.value
            return GitHubIssue(
                id=int(item["number"]),
                title=item["title"],
                url=item["html_url"],
                state=IssueState(state) if state in ("open", "closed") else IssueState.OPEN,
                created_at=_iso_date(item.get("created_at")),
                author=(item.get("user") or {}).get("login") or item.get("author") or "github-user",
            )
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
            logger.debug(f"Dropping unusable issue item: {e}")
            return None

    @staticmethod
    def explainer_from_repo(item: Dict[str, Any], api_name: str) -> Optional[ExplainerInfo]:
        """Convert a repository search item into an ExplainerInfo."""
        url = item.get("html_url")
        if not url:
            return None
        owner = item.get("owner")
        author = owner.get("login") if isinstance(owner, dict) else owner
        try:
            return ExplainerInfo(
                title=f"{api_name} Explainer",
                description=item.get("description") or f"A comprehensive explainer for the {api_name}",
                url=url,
                author=author,
                date=_iso_date(item.get("updated_at")),
            )
        except ValidationError as e:
            logger.debug(f"Dropping unusable repository item: {e}")
            return None

    @staticmethod
    def bug_from_record(item: Dict[str, Any]) -> Optional[ChromiumBug]:
        try:
            priority = item.get("priority") or BugPriority.P2.value
            return ChromiumBug(
                id=str(item["id"]),
                title=item["title"],
                url=item["url"],
                priority=BugPriority(priority) if priority in BugPriority.__members__ else BugPriority.P2,
                status=item.get("status") or "Untriaged",
                assignee=item.get("assignee"),
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.debug(f"Dropping unusable bug record: {e}")
            return None

    @staticmethod
    def status_from_record(record: Dict[str, Any]) -> Optional[ChromiumStatus]:
        if not isinstance(record, dict):
            return None
        summary = _text(record.get("summary"))
        if not summary:
            return None
        changes: List[ChromiumChange] = []
        raw_changes = record.get("recent_changes")
        for change in raw_changes if isinstance(raw_changes, list) else []:
            if not isinstance(change, dict):
                continue
            try:
                changes.append(ChromiumChange(**change))
            except (TypeError, ValidationError):
                continue
        return ChromiumStatus(summary=summary, recent_changes=changes)

    @staticmethod
    def support_from_presence(presence: Dict[str, bool]) -> BrowserSupport:
        """Build a support matrix from browser-name presence flags."""
        matrix = {}
        for browser in BROWSERS:
            if presence.get(browser):
                matrix[browser] = SupportStatus(
                    version=DETECTED_VERSIONS[browser],
                    status=SupportLevel.SUPPORTED,
                )
            else:
                matrix[browser] = SupportStatus(
                    version="Not supported",
                    status=SupportLevel.NOT_SUPPORTED,
                )
        return BrowserSupport(**matrix)


def kind_for_step(step_id: int) -> StepKind:
    """Result kind for a pipeline position."""
    for definition in STEP_DEFINITIONS:
        if definition.id == step_id:
            return definition.kind
    raise ValueError(f"Unknown step id: {step_id}")


def _text(value: Any) -> Optional[str]:
    """Stripped string value, or None for blanks and non-strings."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _field(payload: Any, name: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(name)
    return getattr(payload, name, None)


def _iso_date(raw: Optional[str]) -> Optional[str]:
    """Best-effort timestamp normalization to ISO-8601."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).isoformat()
    except (ValueError, TypeError, AttributeError):
        pass
    try:
        return date_parser.parse(raw).isoformat()
    except (ValueError, TypeError, OverflowError):
        return raw
