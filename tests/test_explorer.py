"""
Tests for the exploration pipeline.
"""

import random
import threading

import pytest

from explorer import CANCELLED_MESSAGE, Explorer, build_api_info, perform_exploration
from models.enums import StepKind, StepStatus
from models.schema import APIInfo
from resolvers import ResolverError
from settings import ExplorerConfig
from sources.client import MDNClient


class ExplodingMDN(MDNClient):
    """MDN client whose search fails with an unexpected error."""

    def search(self, query, locale=None, category=None):
        raise RuntimeError("search backend exploded")


def offline_explorer(config, transport, tracker, seed=1, **kwargs):
    return Explorer(
        config=config,
        transport=transport,
        tracker=tracker,
        rng=random.Random(seed),
        **kwargs,
    )


class TestExplorerRun:
    def test_eight_terminal_steps_in_order(self, config, offline_transport):
        steps = Explorer(config=config, transport=offline_transport).run("websocket")
        assert [s.id for s in steps] == list(range(1, 9))
        assert all(s.is_terminal for s in steps)
        assert steps[0].title == "Search Relevant API"
        assert steps[7].title == "Future Prediction"

    def test_everything_offline_still_completes(self, config, offline_transport, broken_tracker):
        steps = offline_explorer(config, offline_transport, broken_tracker).run("Fetch API")

        assert all(s.status == StepStatus.COMPLETED for s in steps)
        assert all(s.error is None for s in steps)
        results = {s.result.kind: s.result for s in steps}
        assert results[StepKind.API_NAME].api_name == "Fetch API"
        assert "Fetch API" in results[StepKind.INTRODUCTION].description
        assert results[StepKind.EXPLAINER].explainer is None
        assert all("Fetch API" in i.title for i in results[StepKind.ISSUES].issues)
        assert all("Fetch API" in b.title for b in results[StepKind.BUGS].bugs)
        assert "Fetch API" in results[StepKind.STATUS].summary
        assert "Fetch API" in results[StepKind.PREDICTION].prediction

    def test_resolved_name_reaches_later_steps(self, config, offline_transport):
        steps = Explorer(config=config, transport=offline_transport).run("geolocation")
        assert steps[0].result.api_name == "Geolocation API"
        assert "Geolocation API" in steps[1].result.description

    def test_blank_query_uses_default(self, config, offline_transport):
        steps = Explorer(config=config, transport=offline_transport).run("   ")
        assert steps[0].status == StepStatus.COMPLETED
        assert steps[0].result.api_name == "Fetch API"

    def test_same_seed_same_report(self, config, offline_transport, broken_tracker):
        first = offline_explorer(config, offline_transport, broken_tracker, seed=3).run("push")
        second = offline_explorer(config, offline_transport, broken_tracker, seed=3).run("push")
        assert [s.model_dump() for s in first] == [s.model_dump() for s in second]

    def test_step_one_failure_uses_raw_query(self, config, offline_transport):
        explorer = Explorer(
            config=config,
            transport=offline_transport,
            mdn=ExplodingMDN(config=config, transport=offline_transport),
        )
        steps = explorer.run("  geolocation ")

        assert steps[0].status == StepStatus.ERROR
        assert steps[0].result is None
        assert steps[0].error.startswith("Failed to fetch data:")
        assert "search backend exploded" in steps[0].error
        assert all(s.status == StepStatus.COMPLETED for s in steps[1:])
        assert "geolocation" in steps[1].result.description

    def test_malformed_mdn_payloads_still_complete(self, config, make_transport):
        transport = make_transport(
            {
                "/api/v1/search": {"documents": [{"title": 5}]},
                "/api/v1/documents": {"documents": [{"excerpt": "x", "mdn_url": 7}]},
            }
        )
        steps = Explorer(config=config, transport=transport, rng=random.Random(2)).run("websocket")

        assert all(s.status == StepStatus.COMPLETED for s in steps)
        assert steps[0].result.api_name == "WebSocket API"
        assert steps[1].result.description == "x"
        assert steps[1].result.mdn_url.endswith("/WebSocket_API")

    def test_failing_step_does_not_stop_run(self, offline_transport, broken_tracker):
        config = ExplorerConfig(rate_limit=0, use_mock_data=False)
        steps = offline_explorer(config, offline_transport, broken_tracker).run("Fetch API")

        by_kind = {kind: step for kind, step in zip(StepKind, steps)}
        assert by_kind[StepKind.API_NAME].status == StepStatus.COMPLETED
        assert by_kind[StepKind.INTRODUCTION].status == StepStatus.ERROR
        assert by_kind[StepKind.BROWSER_SUPPORT].status == StepStatus.ERROR
        assert by_kind[StepKind.STATUS].status == StepStatus.ERROR
        assert by_kind[StepKind.EXPLAINER].result.explainer is None
        assert by_kind[StepKind.ISSUES].result.issues == []
        assert by_kind[StepKind.BUGS].result.bugs == []
        assert by_kind[StepKind.PREDICTION].status == StepStatus.COMPLETED


class TestProgressReporting:
    def test_each_step_reported_loading_then_terminal(self, config, offline_transport):
        seen = []
        Explorer(config=config, transport=offline_transport).run(
            "websocket", on_update=lambda step: seen.append((step.id, step.status))
        )

        assert len(seen) == 16
        for step_id in range(1, 9):
            statuses = [status for sid, status in seen if sid == step_id]
            assert statuses == [StepStatus.LOADING, StepStatus.COMPLETED]

    def test_steps_reported_in_order(self, config, offline_transport):
        ids = []
        Explorer(config=config, transport=offline_transport).run(
            "websocket", on_update=lambda step: ids.append(step.id)
        )
        assert ids == sorted(ids)

    def test_callback_errors_are_ignored(self, config, offline_transport):
        def explode(step):
            raise RuntimeError("ui went away")

        steps = Explorer(config=config, transport=offline_transport).run("websocket", on_update=explode)
        assert all(s.status == StepStatus.COMPLETED for s in steps)


class TestCancellation:
    def test_cancel_before_start(self, config, offline_transport):
        cancel = threading.Event()
        cancel.set()
        steps = Explorer(config=config, transport=offline_transport).run("websocket", cancel_event=cancel)
        assert all(s.status == StepStatus.ERROR for s in steps)
        assert all(s.error == CANCELLED_MESSAGE for s in steps)

    def test_cancel_midway(self, config, offline_transport):
        cancel = threading.Event()

        def on_update(step):
            if step.id == 3 and step.status == StepStatus.COMPLETED:
                cancel.set()

        steps = Explorer(config=config, transport=offline_transport).run(
            "websocket", on_update=on_update, cancel_event=cancel
        )
        assert [s.status for s in steps[:3]] == [StepStatus.COMPLETED] * 3
        assert all(s.error == CANCELLED_MESSAGE for s in steps[3:])


class TestPerformExploration:
    def test_never_raises(self, offline_transport, broken_tracker):
        config = ExplorerConfig(rate_limit=0, use_mock_data=False, use_web_scraping=False)
        steps = perform_exploration(
            "anything at all", config=config, transport=offline_transport, tracker=broken_tracker
        )
        assert len(steps) == 8
        assert all(s.is_terminal for s in steps)

    def test_passes_collaborators(self, config, offline_transport):
        steps = perform_exploration(
            "websocket", config=config, transport=offline_transport, rng=random.Random(5)
        )
        assert steps[0].result.api_name == "WebSocket API"


class TestApiInfo:
    def test_get_api_info(self, config, offline_transport, broken_tracker):
        info = offline_explorer(config, offline_transport, broken_tracker).get_api_info("Push API")
        assert isinstance(info, APIInfo)
        assert info.name == "Push API"
        assert info.mdn_url.endswith("/Push_API")
        assert len(info.github_issues) == 2

    def test_get_api_info_raises_without_mock_data(self, offline_transport, broken_tracker):
        config = ExplorerConfig(rate_limit=0, use_mock_data=False)
        explorer = offline_explorer(config, offline_transport, broken_tracker)
        with pytest.raises(ResolverError):
            explorer.get_api_info("Push API")

    def test_build_from_completed_run(self, config, offline_transport, broken_tracker):
        steps = offline_explorer(config, offline_transport, broken_tracker).run("Fetch API")
        info = build_api_info(steps)
        assert info.name == "Fetch API"
        assert info.description
        assert info.future_prediction
        assert len(info.chromium_bugs) == 2

    def test_build_with_errors_uses_defaults(self, offline_transport, broken_tracker):
        config = ExplorerConfig(rate_limit=0, use_mock_data=False)
        steps = offline_explorer(config, offline_transport, broken_tracker).run("Fetch API")
        info = build_api_info(steps)
        assert info.description == ""
        assert info.chromium_status.summary == ""
        assert info.browser_support.chrome.version == "88+"

    def test_build_name_from_query_when_step_one_failed(self, config, offline_transport):
        explorer = Explorer(
            config=config,
            transport=offline_transport,
            mdn=ExplodingMDN(config=config, transport=offline_transport),
        )
        info = build_api_info(explorer.run(" push "), user_query=" push ")
        assert info.name == "push"
