"""
Shared fixtures: configs with no rate limiting and stub HTTP transports.
"""

import random

import httpx
import pytest

from settings import ExplorerConfig
from sources.client import ChromiumBugTracker, SourceError


@pytest.fixture
def config():
    return ExplorerConfig(rate_limit=0)


@pytest.fixture
def offline_transport():
    """Every request fails as if the network were down."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network unreachable", request=request)

    return httpx.MockTransport(handler)


def route_transport(routes):
    """
    Transport answering by URL path.

    ``routes`` maps a path (e.g. "/api/v1/search") to either a dict
    (JSON body), a str (HTML body), an int (status code) or an exception
    class to raise.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        answer = routes.get(request.url.path)
        if answer is None:
            return httpx.Response(404, text="not found")
        if isinstance(answer, type) and issubclass(answer, Exception):
            raise answer("stubbed failure", request=request)
        if isinstance(answer, int):
            return httpx.Response(answer)
        if isinstance(answer, dict):
            return httpx.Response(200, json=answer)
        return httpx.Response(200, text=answer)

    return httpx.MockTransport(handler)


class BrokenTracker(ChromiumBugTracker):
    """A bug tracker whose every call fails."""

    @property
    def provider_name(self) -> str:
        return "broken"

    def search(self, query):
        raise SourceError("tracker unavailable")

    def status(self, api_name):
        raise SourceError("tracker unavailable")


@pytest.fixture
def broken_tracker():
    return BrokenTracker()


@pytest.fixture
def seeded_rng():
    return random.Random(42)


@pytest.fixture
def make_transport():
    return route_transport
