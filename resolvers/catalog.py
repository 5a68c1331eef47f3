"""
API name resolution — MDN search, then the offline catalog.
"""

from __future__ import annotations

import logging
from typing import Optional

from models.enums import Tier
from normalizer.engine import CatalogMatcher
from sources.client import MDNClient

from .base import Resolver


logger = logging.getLogger(__name__)

SEARCH_CATEGORY = "Web APIs"


class NameResolver(Resolver):
    """
    Resolve a free-text query to a canonical API name.

    There is no scraping tier; the catalog fuzzy match is the last tier
    and falls back to ``CatalogMatcher.DEFAULT``, so the result is never
    empty.
    """

    NAME = "api_name"
    TIERS = (Tier.API,)
    SYNTHESIS_IS_MOCK = False

    def __init__(self, mdn: Optional[MDNClient] = None, **kwargs):
        super().__init__(**kwargs)
        self._mdn = mdn or MDNClient(config=self._config)

    def _from_api(self, query: str) -> Optional[str]:
        needle = query.lower().strip()
        if not needle:
            return None

        documents = self._mdn.search(query.strip(), category=SEARCH_CATEGORY)
        for doc in documents:
            title = doc.get("title")
            if not isinstance(title, str):
                continue
            title = title.strip()
            lowered = title.lower()
            if "api" in lowered and needle in lowered:
                return title
        return None

    def _synthesize(self, query: str) -> str:
        match = CatalogMatcher.match(query)
        if match is None:
            logger.info(f"No catalog match for '{query}', using {CatalogMatcher.DEFAULT}")
            return CatalogMatcher.DEFAULT
        return match
