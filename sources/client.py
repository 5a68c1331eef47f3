"""
Structured source clients.

Supports:
  - MDN Web Docs search API (name resolution, documents, compat lookups)
  - GitHub search API (issues + repositories)
  - Chromium bug portal (stubbed; no public API is integrated)

Credentials are read from ExplorerConfig (environment / .env).
"""

from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from settings import ExplorerConfig


logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A source answered, but with a payload we cannot use."""


# ------------------------------------------------------------------
# Abstract client
# ------------------------------------------------------------------

class SourceClient(ABC):
    """Base JSON client with caching + rate limiting."""

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._config = config or ExplorerConfig()
        self._transport = transport
        self._last_request: float = 0
        self._rate_limit = self._config.rate_limit
        self._cache: Dict[str, Any] = {}
        self._cache_ttl: float = self._config.cache_ttl
        self._cache_ts: Dict[str, float] = {}

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    def _headers(self) -> Dict[str, str]:
        return {}

    def _get_json(
        self,
        url: str,
        params: Dict[str, Any],
        timeout: float,
    ) -> Dict[str, Any]:
        """GET ``url`` and return the decoded JSON object."""
        cache_key = f"{url}?{sorted(params.items())}"
        if cache_key in self._cache:
            ts = self._cache_ts.get(cache_key, 0)
            if time.time() - ts < self._cache_ttl:
                logger.debug(f"{self.provider_name}: cache hit for {url}")
                return self._cache[cache_key]

        # rate limit
        elapsed = time.time() - self._last_request
        if elapsed < self._rate_limit:
            time.sleep(self._rate_limit - elapsed)
        self._last_request = time.time()

        logger.debug(f"{self.provider_name}: GET {url} {params}")
        with httpx.Client(timeout=timeout, transport=self._transport) as client:
            resp = client.get(url, params=params, headers=self._headers())
            resp.raise_for_status()
            try:
                data = resp.json()
            except ValueError as e:
                raise SourceError(f"{self.provider_name}: invalid JSON from {url}") from e

        if not isinstance(data, dict):
            raise SourceError(f"{self.provider_name}: unexpected payload from {url}")

        self._cache[cache_key] = data
        self._cache_ts[cache_key] = time.time()
        return data


# ------------------------------------------------------------------
# MDN
# ------------------------------------------------------------------

class MDNClient(SourceClient):
    """MDN Web Docs search (https://developer.mozilla.org/api/v1)."""

    @property
    def provider_name(self) -> str:
        return "mdn"

    def search(
        self,
        query: str,
        locale: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Search documentation; returns raw ``documents`` items in rank order."""
        params: Dict[str, Any] = {"q": query, "locale": locale or self._config.locale}
        if category:
            params["category"] = category
        data = self._get_json(
            f"{self._config.mdn_api_base}/search",
            params,
            timeout=self._config.mdn_timeout,
        )
        return _items(data, "documents")

    def documents(self, query: str, locale: Optional[str] = None) -> List[Dict[str, Any]]:
        """Look up documents for an API name."""
        data = self._get_json(
            f"{self._config.mdn_api_base}/documents",
            {"q": query, "locale": locale or self._config.locale},
            timeout=self._config.mdn_timeout,
        )
        return _items(data, "documents")


# ------------------------------------------------------------------
# GitHub
# ------------------------------------------------------------------

class GitHubClient(SourceClient):
    """GitHub REST search API (issues + repositories)."""

    @property
    def provider_name(self) -> str:
        return "github"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self._config.github_token:
            headers["Authorization"] = f"Bearer {self._config.github_token}"
        return headers

    def search_issues(
        self,
        query: str,
        sort: str = "created",
        order: str = "desc",
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        data = self._get_json(
            f"{self._config.github_api_base}/search/issues",
            {"q": query, "sort": sort, "order": order, "per_page": limit},
            timeout=self._config.github_timeout,
        )
        return _items(data, "items")[:limit]

    def search_repositories(
        self,
        query: str,
        org: Optional[str] = None,
        sort: str = "updated",
        order: str = "desc",
    ) -> List[Dict[str, Any]]:
        if org:
            query = f"{query} org:{org}"
        data = self._get_json(
            f"{self._config.github_api_base}/search/repositories",
            {"q": query, "sort": sort, "order": order},
            timeout=self._config.github_timeout,
        )
        return _items(data, "items")


# ------------------------------------------------------------------
# Chromium bug portal
# ------------------------------------------------------------------

BUG_ASSIGNEES = ["chromium-dev", "perf-team", "blink-reviews", "security-team"]


class ChromiumBugTracker(ABC):
    """
    Chromium bug portal interface.

    There is no public API integrated; replace ``SyntheticChromiumTracker``
    with a real implementation to query the tracker.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    def search(self, query: str) -> List[Dict[str, Any]]:
        """Return raw bug records matching ``query``."""
        ...

    @abstractmethod
    def status(self, api_name: str) -> Dict[str, Any]:
        """Return ``{"summary": str, "recent_changes": [...]}`` for an API."""
        ...


class SyntheticChromiumTracker(ChromiumBugTracker):
    """Produces plausible bug and status records from templates."""

    ISSUES_URL = "https://issues.chromium.org/issues"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    @property
    def provider_name(self) -> str:
        return "chromium_synthetic"

    def search(self, query: str) -> List[Dict[str, Any]]:
        templates = [
            ("Implement {name} feature", "P1", "Assigned"),
            ("Fix {name} compatibility issue", "P2", "Open"),
        ]
        bugs: List[Dict[str, Any]] = []
        for title, priority, status in templates:
            number = self._rng.randint(100000, 999999)
            bugs.append(
                {
                    "id": f"chromium:{number}",
                    "title": title.format(name=query),
                    "url": f"{self.ISSUES_URL}/{number}",
                    "priority": priority,
                    "status": status,
                    "assignee": self._rng.choice(BUG_ASSIGNEES),
                }
            )
        return bugs

    def status(self, api_name: str) -> Dict[str, Any]:
        return {
            "summary": (
                f"{api_name} is fully implemented in Chromium with good performance "
                "and stability. Recent updates have improved compatibility and "
                "added new features."
            ),
            "recent_changes": [
                {
                    "commit": "abc123",
                    "description": f"Add {api_name} feature support",
                    "date": "2024-01-20",
                    "author": "chromium-dev",
                },
                {
                    "commit": "def456",
                    "description": f"Fix {api_name} memory leak issue",
                    "date": "2024-01-15",
                    "author": "memory-team",
                },
                {
                    "commit": "ghi789",
                    "description": f"Improve {api_name} error handling",
                    "date": "2024-01-10",
                    "author": "stability-team",
                },
            ],
        }


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _items(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """Pull a list of dict items out of a response, skipping junk."""
    raw = data.get(key) or []
    if not isinstance(raw, list):
        raise SourceError(f"'{key}' is not a list")
    return [item for item in raw if isinstance(item, dict)]
