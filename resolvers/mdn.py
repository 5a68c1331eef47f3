"""
MDN-backed resolvers: API introduction and browser support.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models.enums import SupportLevel
from models.schema import BrowserSupport, SupportStatus
from sources.client import MDNClient
from sources.scraper import PageScraper, doc_page_slug

from .base import Resolver


@dataclass
class Documentation:
    """Introduction text and canonical reference URL for an API."""

    description: str
    mdn_url: str


def default_browser_support() -> BrowserSupport:
    """The fixed support matrix used when no page data is available."""
    return BrowserSupport(
        chrome=SupportStatus(version="88+", status=SupportLevel.SUPPORTED),
        firefox=SupportStatus(version="85+", status=SupportLevel.SUPPORTED),
        safari=SupportStatus(version="14+", status=SupportLevel.SUPPORTED),
        edge=SupportStatus(version="88+", status=SupportLevel.SUPPORTED),
    )


class DescriptionResolver(Resolver):
    """Description + MDN URL for an API name."""

    NAME = "introduction"

    def __init__(
        self,
        mdn: Optional[MDNClient] = None,
        scraper: Optional[PageScraper] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._mdn = mdn or MDNClient(config=self._config)
        self._scraper = scraper or PageScraper(config=self._config)

    def _from_api(self, api_name: str) -> Optional[Documentation]:
        documents = self._mdn.documents(api_name)
        if not documents:
            return None
        fields = self._normalizer.doc_fields(documents[0])
        return Documentation(
            description=fields["description"] or self._template_description(api_name),
            mdn_url=fields["mdn_url"] or self._template_url(api_name),
        )

    def _from_scrape(self, api_name: str) -> Documentation:
        page = self._scraper.scrape_doc_page(api_name)
        return Documentation(
            description=page.description or f"The {api_name} provides web functionality.",
            mdn_url=page.url,
        )

    def _synthesize(self, api_name: str) -> Documentation:
        return Documentation(
            description=self._template_description(api_name),
            mdn_url=self._template_url(api_name),
        )

    @staticmethod
    def _template_description(api_name: str) -> str:
        lowered = api_name.lower()
        topic = lowered.replace(" api", "") if "api" in lowered else "web functionality"
        return (
            f"The {api_name} provides a modern interface for {topic}. "
            "It offers a powerful and flexible way to interact with web technologies."
        )

    def _template_url(self, api_name: str) -> str:
        return f"{self._config.mdn_docs_base}/{doc_page_slug(api_name)}"


class BrowserSupportResolver(Resolver):
    """
    Per-browser support for an API name.

    The structured tier only confirms that MDN has compatibility data;
    it does not parse it.
    """

    NAME = "browser_support"

    def __init__(
        self,
        mdn: Optional[MDNClient] = None,
        scraper: Optional[PageScraper] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._mdn = mdn or MDNClient(config=self._config)
        self._scraper = scraper or PageScraper(config=self._config)

    def _from_api(self, api_name: str) -> Optional[BrowserSupport]:
        documents = self._mdn.documents(f"{api_name} browser compatibility")
        if not documents:
            return None
        return default_browser_support()

    def _from_scrape(self, api_name: str) -> BrowserSupport:
        presence = self._scraper.scrape_browser_support(api_name)
        return self._normalizer.support_from_presence(presence)

    def _synthesize(self, api_name: str) -> BrowserSupport:
        return default_browser_support()
