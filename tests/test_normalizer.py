"""
Tests for normalizer.
"""

import pytest

from models.enums import BugPriority, IssueState, StepKind, SupportLevel
from models.schema import BrowserSupport, ChromiumStatus, ExplainerInfo
from normalizer.engine import CatalogMatcher, ResultNormalizer, kind_for_step
from resolvers.mdn import Documentation, default_browser_support


def test_catalog_matcher_exact_name():
    """Test matching a full catalog name."""
    assert CatalogMatcher.match("Fetch API") == "Fetch API"
    assert CatalogMatcher.match("fetch api") == "Fetch API"


def test_catalog_matcher_lowercase_fragment():
    """Test fragments without the API suffix."""
    assert CatalogMatcher.match("websocket") == "WebSocket API"
    assert CatalogMatcher.match("geolocation") == "Geolocation API"
    assert CatalogMatcher.match("  IndexedDB ") == "IndexedDB API"


def test_catalog_matcher_query_contains_entry():
    """Test queries that contain a catalog entry."""
    assert CatalogMatcher.match("how do I use web audio in a game") == "Web Audio API"
    assert CatalogMatcher.match("webgl2 rendering") == "WebGL API"


def test_catalog_matcher_no_match():
    """Test unknown queries."""
    assert CatalogMatcher.match("quantum teleportation") is None
    assert CatalogMatcher.match("") is None
    assert CatalogMatcher.match("   ") is None


def test_catalog_resolve_defaults():
    """Test default name for unknown queries."""
    assert CatalogMatcher.resolve("quantum teleportation") == "Fetch API"
    assert CatalogMatcher.resolve("") == "Fetch API"


def test_catalog_size():
    assert len(CatalogMatcher.CATALOG) == 20
    assert all(entry.endswith(" API") for entry in CatalogMatcher.CATALOG)


def test_kind_for_step():
    assert kind_for_step(1) == StepKind.API_NAME
    assert kind_for_step(8) == StepKind.PREDICTION
    with pytest.raises(ValueError):
        kind_for_step(9)


class TestResultNormalizer:
    def setup_method(self):
        self.normalizer = ResultNormalizer()

    def test_api_name(self):
        result = self.normalizer.normalize(1, "  WebSocket API ")
        assert result.kind == StepKind.API_NAME
        assert result.api_name == "WebSocket API"

    def test_introduction_from_dataclass(self):
        result = self.normalizer.normalize(
            2, Documentation(description="desc", mdn_url="https://x")
        )
        assert result.description == "desc"
        assert result.mdn_url == "https://x"

    def test_introduction_from_dict(self):
        result = self.normalizer.normalize(StepKind.INTRODUCTION, {"description": "d"})
        assert result.description == "d"
        assert result.mdn_url == ""

    def test_browser_support(self):
        result = self.normalizer.normalize(3, default_browser_support())
        assert isinstance(result.browser_support, BrowserSupport)

    def test_absent_explainer(self):
        result = self.normalizer.normalize(4, None)
        assert result.kind == StepKind.EXPLAINER
        assert result.explainer is None

    def test_none_lists_become_empty(self):
        assert self.normalizer.normalize(5, None).issues == []
        assert self.normalizer.normalize(6, None).bugs == []

    def test_status(self):
        result = self.normalizer.normalize(7, ChromiumStatus(summary="ok"))
        assert result.summary == "ok"
        assert result.recent_changes == []

    def test_prediction(self):
        assert self.normalizer.normalize(8, "soon").prediction == "soon"

    # --- raw items -------------------------------------------------

    def test_doc_fields_relative_url(self):
        fields = ResultNormalizer.doc_fields(
            {"title": "Fetch API", "summary": "Fetches.", "mdn_url": "/en-US/docs/Web/API/Fetch_API"}
        )
        assert fields["description"] == "Fetches."
        assert fields["mdn_url"] == "https://developer.mozilla.org/en-US/docs/Web/API/Fetch_API"

    def test_doc_fields_missing(self):
        fields = ResultNormalizer.doc_fields({})
        assert fields == {"description": None, "mdn_url": None}

    def test_issue_from_github(self):
        issue = ResultNormalizer.issue_from_github(
            {
                "number": 42,
                "title": "fetch() hangs",
                "html_url": "https://github.com/web-platform-tests/wpt/issues/42",
                "state": "open",
                "created_at": "2024-02-01T10:00:00Z",
                "user": {"login": "alice"},
            }
        )
        assert issue.id == 42
        assert issue.state == IssueState.OPEN
        assert issue.author == "alice"
        assert issue.created_at.startswith("2024-02-01T10:00:00")

    def test_issue_without_title_dropped(self):
        assert ResultNormalizer.issue_from_github({"number": 1, "html_url": "u"}) is None

    def test_scraped_issue_has_no_timestamp(self):
        issue = ResultNormalizer.issue_from_github(
            {"number": 7, "title": "t", "html_url": "https://github.com/a/b/issues/7"}
        )
        assert issue.created_at is None
        assert issue.author == "github-user"

    def test_explainer_from_repo(self):
        explainer = ResultNormalizer.explainer_from_repo(
            {
                "html_url": "https://github.com/WICG/fetch-explainer",
                "description": None,
                "owner": {"login": "WICG"},
                "updated_at": "2024-03-01T00:00:00Z",
            },
            "Fetch API",
        )
        assert explainer.title == "Fetch API Explainer"
        assert explainer.author == "WICG"
        assert "Fetch API" in explainer.description

    def test_explainer_without_url_is_none(self):
        assert ResultNormalizer.explainer_from_repo({"description": "x"}, "Fetch API") is None

    def test_bug_unknown_priority_defaults(self):
        bug = ResultNormalizer.bug_from_record(
            {"id": "chromium:1", "title": "t", "url": "u", "priority": "urgent"}
        )
        assert bug.priority == BugPriority.P2

    def test_bug_missing_fields_dropped(self):
        assert ResultNormalizer.bug_from_record({"id": "chromium:1"}) is None

    def test_status_without_summary(self):
        assert ResultNormalizer.status_from_record({"recent_changes": []}) is None

    def test_status_skips_bad_changes(self):
        status = ResultNormalizer.status_from_record(
            {
                "summary": "s",
                "recent_changes": [
                    {"commit": "a", "description": "d", "date": "2024-01-01", "author": "x"},
                    {"commit": "b"},
                ],
            }
        )
        assert len(status.recent_changes) == 1

    def test_doc_fields_non_string_values(self):
        fields = ResultNormalizer.doc_fields({"excerpt": 3, "summary": "Fetches.", "mdn_url": 7})
        assert fields == {"description": "Fetches.", "mdn_url": None}

    def test_issue_api_url_is_not_a_link(self):
        issue = ResultNormalizer.issue_from_github(
            {
                "number": 3,
                "title": "t",
                "url": "https://api.github.com/repos/web-platform-tests/wpt/issues/3",
            }
        )
        assert issue is None

    def test_issue_malformed_user_dropped(self):
        item = {"number": 3, "title": "t", "html_url": "https://github.com/a/b/issues/3", "user": "x"}
        assert ResultNormalizer.issue_from_github(item) is None

    def test_issue_non_string_date(self):
        issue = ResultNormalizer.issue_from_github(
            {"number": 3, "title": "t", "html_url": "https://github.com/a/b/issues/3", "created_at": 17}
        )
        assert issue.created_at is None

    def test_status_non_dict_record(self):
        assert ResultNormalizer.status_from_record(["summary"]) is None
        assert ResultNormalizer.status_from_record({"summary": 5}) is None

    def test_status_non_list_changes(self):
        status = ResultNormalizer.status_from_record({"summary": "s", "recent_changes": "abc"})
        assert status.recent_changes == []

    def test_bug_non_dict_record(self):
        assert ResultNormalizer.bug_from_record("chromium:1") is None

    def test_support_from_presence(self):
        support = ResultNormalizer.support_from_presence(
            {"chrome": True, "firefox": False, "safari": True, "edge": False}
        )
        assert support.chrome.version == "88+"
        assert support.chrome.status == SupportLevel.SUPPORTED
        assert support.firefox.version == "Not supported"
        assert support.firefox.status == SupportLevel.NOT_SUPPORTED


def test_explainer_rejects_blank_fields():
    """A partially-filled explainer cannot be built."""
    with pytest.raises(ValueError):
        ExplainerInfo(title="", url="https://x")
    with pytest.raises(ValueError):
        ExplainerInfo(title="T", url="   ")
