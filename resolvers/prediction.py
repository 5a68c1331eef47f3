"""
Future-evolution prediction.
"""

from __future__ import annotations

import random
from typing import Optional

from .base import Resolver


PREDICTIONS = [
    "{name} is expected to see continued adoption and enhancement. We predict new "
    "features will be added in the next 2-3 years, with improved performance "
    "optimizations and better integration with other web APIs.",
    "{name} will likely become a standard part of modern web development toolkits, "
    "with improved browser support and developer tooling.",
    "{name} is expected to evolve with new specifications and implementations, "
    "providing better performance and developer experience.",
]


class PredictionResolver(Resolver):
    """Picks one templated prediction uniformly at random."""

    NAME = "prediction"
    TIERS = ()
    SYNTHESIS_IS_MOCK = False

    def __init__(self, rng: Optional[random.Random] = None, **kwargs):
        super().__init__(**kwargs)
        self._rng = rng or random.Random()

    def _synthesize(self, api_name: str) -> str:
        return self._rng.choice(PREDICTIONS).format(name=api_name)
