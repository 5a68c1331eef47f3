"""
Chromium resolvers: bug portal records and implementation status.

Both go through a ``ChromiumBugTracker``. The default tracker is
synthetic; pass a real one to the resolver to query the portal.
"""

from __future__ import annotations

import random
from typing import List, Optional

from models.enums import BugPriority, Tier
from models.schema import ChromiumBug, ChromiumStatus
from sources.client import ChromiumBugTracker, SyntheticChromiumTracker

from .base import Resolver


class BugsResolver(Resolver):
    """Chromium bugs mentioning the API."""

    NAME = "bugs"
    TIERS = (Tier.API,)

    def __init__(
        self,
        tracker: Optional[ChromiumBugTracker] = None,
        rng: Optional[random.Random] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._rng = rng or random.Random()
        self._tracker = tracker or SyntheticChromiumTracker(rng=self._rng)

    def _from_api(self, api_name: str) -> List[ChromiumBug]:
        bugs = []
        for record in self._tracker.search(api_name):
            bug = self._normalizer.bug_from_record(record)
            if bug is not None:
                bugs.append(bug)
        return bugs

    def _synthesize(self, api_name: str) -> List[ChromiumBug]:
        bugs = []
        for title, priority, status, assignee in (
            ("Implement missing {name} feature in Chromium", BugPriority.P1, "Assigned", "chromium-dev"),
            ("Fix {name} performance regression", BugPriority.P2, "Open", "perf-team"),
        ):
            number = self._rng.randint(100000, 999999)
            bugs.append(
                ChromiumBug(
                    id=f"chromium:{number}",
                    title=title.format(name=api_name),
                    url=f"{SyntheticChromiumTracker.ISSUES_URL}/{number}",
                    priority=priority,
                    status=status,
                    assignee=assignee,
                )
            )
        return bugs

    def _exhausted(self, api_name: str) -> List[ChromiumBug]:
        return []


class StatusResolver(Resolver):
    """Chromium implementation summary with recent changes."""

    NAME = "status"
    TIERS = (Tier.API,)

    def __init__(self, tracker: Optional[ChromiumBugTracker] = None, **kwargs):
        super().__init__(**kwargs)
        self._tracker = tracker or SyntheticChromiumTracker()

    def _from_api(self, api_name: str) -> Optional[ChromiumStatus]:
        return self._normalizer.status_from_record(self._tracker.status(api_name))

    def _synthesize(self, api_name: str) -> ChromiumStatus:
        return ChromiumStatus(
            summary=f"{api_name} is implemented in Chromium.",
            recent_changes=[],
        )
