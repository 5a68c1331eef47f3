"""
Normalizer package initialization.
"""

from .engine import CatalogMatcher, ResultNormalizer, kind_for_step

__all__ = [
    "CatalogMatcher",
    "ResultNormalizer",
    "kind_for_step",
]
