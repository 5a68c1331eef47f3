"""
Explorer configuration — endpoints, timeouts, credentials and tier toggles.

Values come from the environment (optionally a ``.env`` file).

Usage:
    config = ExplorerConfig.from_env()
    explorer = Explorer(config=config)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


@dataclass
class ExplorerConfig:
    """Explorer configuration."""

    mdn_api_base: str = "https://developer.mozilla.org/api/v1"
    mdn_docs_base: str = "https://developer.mozilla.org/en-US/docs/Web/API"
    github_api_base: str = "https://api.github.com"
    github_web_base: str = "https://github.com"
    github_token: str = ""

    # seconds
    mdn_timeout: float = 5.0
    github_timeout: float = 5.0
    scraping_timeout: float = 10.0

    user_agent: str = DEFAULT_USER_AGENT
    locale: str = "en-US"

    # seconds between requests to the same source
    rate_limit: float = 1.0
    cache_ttl: float = 3600

    # fallback tiers
    use_web_scraping: bool = True
    use_mock_data: bool = True

    max_search_results: int = 5

    @classmethod
    def from_env(cls, dotenv: bool = True) -> ExplorerConfig:
        """Load configuration from environment variables."""
        if dotenv:
            load_dotenv()
        return cls(
            mdn_api_base=os.getenv("MDN_API_BASE", cls.mdn_api_base),
            mdn_docs_base=os.getenv("MDN_DOCS_BASE", cls.mdn_docs_base),
            github_api_base=os.getenv("GITHUB_API_BASE", cls.github_api_base),
            github_web_base=os.getenv("GITHUB_WEB_BASE", cls.github_web_base),
            github_token=os.getenv("GITHUB_TOKEN", ""),
            mdn_timeout=float(os.getenv("MDN_TIMEOUT", "5")),
            github_timeout=float(os.getenv("GITHUB_TIMEOUT", "5")),
            scraping_timeout=float(os.getenv("SCRAPING_TIMEOUT", "10")),
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
            locale=os.getenv("MDN_LOCALE", cls.locale),
            rate_limit=float(os.getenv("RATE_LIMIT_DELAY", "1.0")),
            cache_ttl=float(os.getenv("CACHE_TTL", "3600")),
            use_web_scraping=_env_bool("USE_WEB_SCRAPING", True),
            use_mock_data=_env_bool("USE_MOCK_DATA", True),
            max_search_results=int(os.getenv("MAX_SEARCH_RESULTS", "5")),
        )
