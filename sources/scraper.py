"""
Page Scraper — fetch documentation / tracker pages and pattern-extract
partial results when the structured APIs are unavailable.

Rules:
  - Best effort only. Every method may raise httpx.HTTPError; callers
    treat that as a fallback trigger.
  - Never invent data: a field that is not on the page comes back as None
    (or an empty list), and the resolver decides what to do with it.
  - Shallow only: one page per call, no spidering.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx
from selectolax.parser import HTMLParser

from models.schema import BROWSERS
from settings import ExplorerConfig


ISSUE_HREF_RE = re.compile(r"^(?:https://github\.com)?/([\w.-]+/[\w.-]+)/issues/(\d+)/?$")
REPO_HREF_RE = re.compile(r"^(?:https://github\.com)?/([\w.-]+)/([\w.-]+)/?$")

# First path segments on github.com that are never repository owners
RESERVED_OWNERS = {
    "search", "login", "signup", "features", "pricing", "topics",
    "explore", "marketplace", "settings", "orgs", "about", "sponsors",
    "collections", "trending", "enterprise", "site", "contact",
}


@dataclass
class DocPage:
    """Fields scraped from an MDN reference page."""

    url: str
    title: Optional[str] = None
    description: Optional[str] = None


def doc_page_slug(api_name: str) -> str:
    """'Web Audio API' -> 'Web_Audio_API'"""
    return "_".join(api_name.split())


class PageScraper:
    """
    Fetch pages and extract API data with simple HTML patterns.

    Constraints:
      - Rate limited (1 req/sec default)
      - Cached by URL
      - Bounded timeout (10 s default)
    """

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._config = config or ExplorerConfig()
        self._transport = transport
        self._rate_limit = self._config.rate_limit
        self._last_request: float = 0
        self._cache: Dict[str, str] = {}
        self._cache_ts: Dict[str, float] = {}
        self._cache_ttl = self._config.cache_ttl

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    def fetch_page(self, url: str) -> str:
        """Fetch a single page with caching and rate limiting."""
        if url in self._cache:
            ts = self._cache_ts.get(url, 0)
            if time.time() - ts < self._cache_ttl:
                return self._cache[url]

        elapsed = time.time() - self._last_request
        if elapsed < self._rate_limit:
            time.sleep(self._rate_limit - elapsed)
        self._last_request = time.time()

        headers = {"User-Agent": self._config.user_agent}
        with httpx.Client(
            follow_redirects=True,
            timeout=self._config.scraping_timeout,
            transport=self._transport,
        ) as client:
            resp = client.get(url, headers=headers)
            resp.raise_for_status()
            html = resp.text

        self._cache[url] = html
        self._cache_ts[url] = time.time()
        return html

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def doc_page_url(self, api_name: str) -> str:
        return f"{self._config.mdn_docs_base}/{doc_page_slug(api_name)}"

    def issue_search_url(self, api_name: str, repo: str) -> str:
        return f"{self._config.github_web_base}/{repo}/issues?q={quote(api_name)}"

    def repo_search_url(self, query: str) -> str:
        return f"{self._config.github_web_base}/search?q={quote(query)}&type=repositories"

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def scrape_doc_page(self, api_name: str) -> DocPage:
        """Title and meta description of the API's MDN reference page."""
        url = self.doc_page_url(api_name)
        tree = HTMLParser(self.fetch_page(url))

        title = None
        title_node = tree.css_first("title")
        if title_node is not None:
            title = title_node.text(strip=True) or None

        description = None
        meta = tree.css_first('meta[name="description"]')
        if meta is not None:
            description = (meta.attributes.get("content") or "").strip() or None

        return DocPage(url=url, title=title, description=description)

    def scrape_browser_support(self, api_name: str) -> Dict[str, bool]:
        """
        Which browser names appear anywhere on the reference page.

        This is a keyword test, not a compat-table parse.
        """
        body = self.fetch_page(self.doc_page_url(api_name)).lower()
        return {browser: browser in body for browser in BROWSERS}

    def scrape_issues(
        self,
        api_name: str,
        repo: str,
        limit: int = 5,
    ) -> List[Dict[str, object]]:
        """Up to ``limit`` issue links from the tracker's search page."""
        tree = HTMLParser(self.fetch_page(self.issue_search_url(api_name, repo)))

        issues: List[Dict[str, object]] = []
        seen: set = set()
        for node in tree.css("a[href]"):
            href = node.attributes.get("href") or ""
            m = ISSUE_HREF_RE.match(href)
            if not m or m.group(1).lower() != repo.lower():
                continue
            number = int(m.group(2))
            title = node.text(strip=True)
            if number in seen or not title:
                continue
            seen.add(number)
            issues.append(
                {
                    "number": number,
                    "title": title,
                    "html_url": f"{self._config.github_web_base}/{m.group(1)}/issues/{number}",
                }
            )
            if len(issues) >= limit:
                break
        return issues

    def search_explainer(self, api_name: str, org: str) -> Optional[Dict[str, str]]:
        """First repository link owned by ``org`` on a web search page."""
        query = f"{api_name} explainer org:{org}"
        tree = HTMLParser(self.fetch_page(self.repo_search_url(query)))

        for node in tree.css("a[href]"):
            href = node.attributes.get("href") or ""
            m = REPO_HREF_RE.match(href)
            if not m:
                continue
            owner, name = m.group(1), m.group(2)
            if owner.lower() in RESERVED_OWNERS or owner.lower() != org.lower():
                continue
            return {
                "full_name": f"{owner}/{name}",
                "html_url": f"{self._config.github_web_base}/{owner}/{name}",
                "owner": owner,
            }
        return None
