"""
Resolver base class — the three-tier fallback chain.

Every resolver produces one domain's data for a resolved API name:

    Tier 1 (structured API) → Tier 2 (page scraping) → Tier 3 (synthesis)

A tier that errors, times out or returns nothing usable is logged and
the chain moves on. Tiers are tried once each, in order, never raced.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

import httpx

from models.enums import Tier
from normalizer.engine import ResultNormalizer
from settings import ExplorerConfig
from sources.client import SourceError


logger = logging.getLogger(__name__)

# Errors that mean "this tier could not answer"
TIER_ERRORS = (httpx.HTTPError, SourceError, ValueError)


class ResolverError(Exception):
    """Every enabled tier of a resolver failed."""


class Resolver(ABC):
    """
    Abstract base class for all resolvers.

    Subclasses implement ``_from_api`` / ``_from_scrape`` for the tiers
    listed in ``TIERS`` and always implement ``_synthesize``.
    """

    NAME: str = "base"
    TIERS: Tuple[Tier, ...] = (Tier.API, Tier.SCRAPE)

    # Synthesis made from templates counts as mock data and honours
    # ``use_mock_data``; resolvers whose last tier is real logic
    # (catalog matching, predictions) turn this off.
    SYNTHESIS_IS_MOCK: bool = True

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        normalizer: Optional[ResultNormalizer] = None,
    ) -> None:
        self._config = config or ExplorerConfig()
        self._normalizer = normalizer or ResultNormalizer()
        self.last_tier: Optional[Tier] = None

    def resolve(self, api_name: str) -> Any:
        """
        Run the fallback chain for ``api_name``.

        Returns:
            The first usable value, from the lowest tier that produced one

        Raises:
            ResolverError: If no tier produced a value and synthesis is disabled
        """
        self.last_tier = None

        for tier in self.TIERS:
            if tier == Tier.SCRAPE and not self._config.use_web_scraping:
                continue

            fetch = self._from_api if tier == Tier.API else self._from_scrape
            try:
                value = fetch(api_name)
            except TIER_ERRORS as e:
                logger.info(f"{self.NAME}: {tier.name} tier failed for '{api_name}': {e}")
                continue

            if self._usable(value):
                logger.debug(f"{self.NAME}: resolved '{api_name}' via {tier.name}")
                self.last_tier = tier
                return value

            logger.info(f"{self.NAME}: {tier.name} tier had no match for '{api_name}'")

        if self.SYNTHESIS_IS_MOCK and not self._config.use_mock_data:
            return self._exhausted(api_name)

        self.last_tier = Tier.SYNTHESIS
        return self._synthesize(api_name)

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    def _from_api(self, api_name: str) -> Any:
        return None

    def _from_scrape(self, api_name: str) -> Any:
        return None

    @abstractmethod
    def _synthesize(self, api_name: str) -> Any:
        """Templated value; must not fail."""
        raise NotImplementedError

    def _exhausted(self, api_name: str) -> Any:
        """Called when every tier missed and synthesis is disabled."""
        raise ResolverError(f"{self.NAME}: no source could resolve '{api_name}'")

    @staticmethod
    def _usable(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, (list, tuple, str)) and not value:
            return False
        return True
