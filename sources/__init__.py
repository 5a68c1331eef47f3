"""
Sources — structured API clients and the HTML scraping fallback.
"""

from .client import (
    SourceClient,
    SourceError,
    MDNClient,
    GitHubClient,
    ChromiumBugTracker,
    SyntheticChromiumTracker,
)
from .scraper import PageScraper, DocPage

__all__ = [
    "SourceClient",
    "SourceError",
    "MDNClient",
    "GitHubClient",
    "ChromiumBugTracker",
    "SyntheticChromiumTracker",
    "PageScraper",
    "DocPage",
]
