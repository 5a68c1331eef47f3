"""
Resolvers — one per report domain, each a three-tier fallback chain.
"""

from .base import Resolver, ResolverError
from .catalog import NameResolver
from .mdn import DescriptionResolver, BrowserSupportResolver, Documentation, default_browser_support
from .github import ExplainerResolver, IssuesResolver
from .chromium import BugsResolver, StatusResolver
from .prediction import PredictionResolver

__all__ = [
    "Resolver",
    "ResolverError",
    "NameResolver",
    "DescriptionResolver",
    "BrowserSupportResolver",
    "Documentation",
    "default_browser_support",
    "ExplainerResolver",
    "IssuesResolver",
    "BugsResolver",
    "StatusResolver",
    "PredictionResolver",
]
