"""
Exploration Orchestrator.

Ties together the resolvers and the ResultNormalizer into the eight-step
exploration pipeline:

  1. Resolve the user's query to a canonical API name
  2. API introduction + MDN URL
  3. Browser support
  4. Explainer search
  5. GitHub issues
  6. Chromium bugs
  7. Chromium status
  8. Future prediction

Steps run strictly in order. Step 1's name is passed to every later
step; a failing step is marked ``error`` and the run continues.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Callable, Dict, List, Optional

import httpx

from models.enums import StepKind
from models.schema import STEP_DEFINITIONS, APIInfo, ExplorationStep
from normalizer.engine import CatalogMatcher, ResultNormalizer
from resolvers import (
    BrowserSupportResolver,
    BugsResolver,
    DescriptionResolver,
    ExplainerResolver,
    IssuesResolver,
    NameResolver,
    PredictionResolver,
    Resolver,
    StatusResolver,
)
from settings import ExplorerConfig
from sources.client import ChromiumBugTracker, GitHubClient, MDNClient, SyntheticChromiumTracker
from sources.scraper import PageScraper


logger = logging.getLogger(__name__)

StepCallback = Callable[[ExplorationStep], None]

CANCELLED_MESSAGE = "Exploration cancelled"


class Explorer:
    """
    Main orchestrator for web API exploration.

    Usage:
        explorer = Explorer(config=ExplorerConfig.from_env())
        steps = explorer.run("websocket", on_update=print)

    Collaborators (clients, scraper, bug tracker, random source) can be
    injected; anything left out is built from ``config``.
    """

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        mdn: Optional[MDNClient] = None,
        github: Optional[GitHubClient] = None,
        scraper: Optional[PageScraper] = None,
        tracker: Optional[ChromiumBugTracker] = None,
        rng: Optional[random.Random] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._config = config or ExplorerConfig()
        self._rng = rng or random.Random()
        self._normalizer = ResultNormalizer()

        mdn = mdn or MDNClient(config=self._config, transport=transport)
        github = github or GitHubClient(config=self._config, transport=transport)
        scraper = scraper or PageScraper(config=self._config, transport=transport)
        tracker = tracker or SyntheticChromiumTracker(rng=self._rng)

        shared = {"config": self._config, "normalizer": self._normalizer}
        self._resolvers: Dict[StepKind, Resolver] = {
            StepKind.API_NAME: NameResolver(mdn=mdn, **shared),
            StepKind.INTRODUCTION: DescriptionResolver(mdn=mdn, scraper=scraper, **shared),
            StepKind.BROWSER_SUPPORT: BrowserSupportResolver(mdn=mdn, scraper=scraper, **shared),
            StepKind.EXPLAINER: ExplainerResolver(github=github, scraper=scraper, **shared),
            StepKind.ISSUES: IssuesResolver(github=github, scraper=scraper, **shared),
            StepKind.BUGS: BugsResolver(tracker=tracker, rng=self._rng, **shared),
            StepKind.STATUS: StatusResolver(tracker=tracker, **shared),
            StepKind.PREDICTION: PredictionResolver(rng=self._rng, **shared),
        }

    def resolver(self, kind: StepKind) -> Resolver:
        return self._resolvers[kind]

    def run(
        self,
        user_query: str,
        on_update: Optional[StepCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ExplorationStep]:
        """
        Execute the full eight-step exploration.

        Never raises; every returned step is ``completed`` or ``error``.

        Args:
            user_query: Free-text API name typed by the user
            on_update: Called with the step after every status change
            cancel_event: When set, remaining steps end as cancelled

        Returns:
            The eight steps, in pipeline order
        """
        steps = [ExplorationStep.from_definition(d) for d in STEP_DEFINITIONS]

        # Used by steps 2-8 if step 1 fails
        api_name = user_query.strip() or CatalogMatcher.DEFAULT

        for step, definition in zip(steps, STEP_DEFINITIONS):
            step.start()
            self._notify(on_update, step)

            if cancel_event is not None and cancel_event.is_set():
                step.fail(CANCELLED_MESSAGE)
                self._notify(on_update, step)
                continue

            target = user_query if definition.kind == StepKind.API_NAME else api_name
            try:
                payload = self._resolvers[definition.kind].resolve(target)
                result = self._normalizer.normalize(definition.kind, payload)
            except Exception as e:
                logger.warning(f"Step {step.id} ({step.title}) failed for '{target}': {e}")
                step.fail(f"Failed to fetch data: {str(e) or type(e).__name__}")
            else:
                step.complete(result)
                if definition.kind == StepKind.API_NAME:
                    api_name = result.api_name
                    logger.info(f"Resolved '{user_query}' to '{api_name}'")

            self._notify(on_update, step)

        return steps

    def get_api_info(self, api_name: str) -> APIInfo:
        """
        Resolve every report domain for an already-known API name.

        Unlike ``run`` this raises ResolverError if a required domain
        cannot be resolved (only possible with mock data disabled).
        """
        documentation = self._resolvers[StepKind.INTRODUCTION].resolve(api_name)
        return APIInfo(
            name=api_name,
            description=documentation.description,
            mdn_url=documentation.mdn_url,
            browser_support=self._resolvers[StepKind.BROWSER_SUPPORT].resolve(api_name),
            explainer=self._resolvers[StepKind.EXPLAINER].resolve(api_name),
            github_issues=self._resolvers[StepKind.ISSUES].resolve(api_name),
            chromium_bugs=self._resolvers[StepKind.BUGS].resolve(api_name),
            chromium_status=self._resolvers[StepKind.STATUS].resolve(api_name),
            future_prediction=self._resolvers[StepKind.PREDICTION].resolve(api_name),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _notify(on_update: Optional[StepCallback], step: ExplorationStep) -> None:
        if on_update is None:
            return
        try:
            on_update(step)
        except Exception:
            logger.exception(f"on_update callback failed for step {step.id}")


def perform_exploration(
    user_query: str,
    config: Optional[ExplorerConfig] = None,
    on_update: Optional[StepCallback] = None,
    cancel_event: Optional[threading.Event] = None,
    **collaborators,
) -> List[ExplorationStep]:
    """Run one exploration with a fresh Explorer."""
    explorer = Explorer(config=config, **collaborators)
    return explorer.run(user_query, on_update=on_update, cancel_event=cancel_event)
