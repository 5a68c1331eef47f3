"""
GitHub-backed resolvers: design explainers and web-platform-tests issues.
"""

from __future__ import annotations

from typing import List, Optional

from models.enums import IssueState
from models.schema import ExplainerInfo, GitHubIssue
from sources.client import GitHubClient
from sources.scraper import PageScraper

from .base import Resolver


EXPLAINER_ORG = "WICG"
ISSUES_REPO = "web-platform-tests/wpt"


def explainer_slug(api_name: str) -> str:
    """'Web Audio API' -> 'web-audio-api'"""
    return "-".join(api_name.lower().split())


class ExplainerResolver(Resolver):
    """
    Find a community-group explainer repository for an API.

    No explainer is a valid answer: when neither the search API nor the
    search page turns one up, the resolver returns None. Nothing is
    templated, so the answer does not depend on ``use_mock_data``.
    """

    NAME = "explainer"
    SYNTHESIS_IS_MOCK = False

    def __init__(
        self,
        github: Optional[GitHubClient] = None,
        scraper: Optional[PageScraper] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._github = github or GitHubClient(config=self._config)
        self._scraper = scraper or PageScraper(config=self._config)

    def _from_api(self, api_name: str) -> Optional[ExplainerInfo]:
        repos = self._github.search_repositories(
            f"{explainer_slug(api_name)} explainer",
            org=EXPLAINER_ORG,
            sort="updated",
            order="desc",
        )
        for repo in repos:
            explainer = self._normalizer.explainer_from_repo(repo, api_name)
            if explainer is not None:
                return explainer
        return None

    def _from_scrape(self, api_name: str) -> Optional[ExplainerInfo]:
        repo = self._scraper.search_explainer(api_name, EXPLAINER_ORG)
        if repo is None:
            return None
        return ExplainerInfo(
            title=f"{api_name} Explainer",
            description=f"A comprehensive explainer for the {api_name}",
            url=repo["html_url"],
            author=repo["owner"],
        )

    def _synthesize(self, api_name: str) -> None:
        return None


class IssuesResolver(Resolver):
    """Open web-platform-tests issues mentioning the API, newest first."""

    NAME = "issues"

    def __init__(
        self,
        github: Optional[GitHubClient] = None,
        scraper: Optional[PageScraper] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._github = github or GitHubClient(config=self._config)
        self._scraper = scraper or PageScraper(config=self._config)

    @property
    def _limit(self) -> int:
        return min(self._config.max_search_results, 5)

    def _from_api(self, api_name: str) -> List[GitHubIssue]:
        items = self._github.search_issues(
            f"{api_name} repo:{ISSUES_REPO} is:issue is:open",
            sort="created",
            order="desc",
            limit=self._limit,
        )
        return self._convert(items)

    def _from_scrape(self, api_name: str) -> List[GitHubIssue]:
        items = self._scraper.scrape_issues(api_name, ISSUES_REPO, limit=self._limit)
        return self._convert(items)

    def _synthesize(self, api_name: str) -> List[GitHubIssue]:
        base = f"https://github.com/{ISSUES_REPO}/issues"
        return [
            GitHubIssue(
                id=1234,
                title=f"Add support for new {api_name} feature",
                url=f"{base}/1234",
                state=IssueState.OPEN,
                created_at="2024-01-15",
                author="webdev-user",
            ),
            GitHubIssue(
                id=1235,
                title=f"Fix {api_name} compatibility issue with Safari",
                url=f"{base}/1235",
                state=IssueState.OPEN,
                created_at="2024-01-10",
                author="browser-team",
            ),
        ]

    def _exhausted(self, api_name: str) -> List[GitHubIssue]:
        return []

    def _convert(self, items) -> List[GitHubIssue]:
        issues = []
        for item in items:
            issue = self._normalizer.issue_from_github(item)
            if issue is not None:
                issues.append(issue)
        return issues[: self._limit]
