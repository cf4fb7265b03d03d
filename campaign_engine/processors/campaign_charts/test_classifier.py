"""
Tests for the chart classifier and summarizer pipeline.

Usage:
    python -m pytest campaign_engine/processors/campaign_charts/test_classifier.py
"""
import copy
import logging

import pytest

from campaign_engine.processors.campaign_charts.classifier import classify
from campaign_engine.processors.campaign_charts.core.diagnostics import (
    EMPTY_CATEGORY,
    GATE_REJECTED,
    INVALID_BAG,
    INVALID_SERIES,
    MALFORMED_POINT,
    NO_SERIES_FOUND,
)
from campaign_engine.processors.campaign_charts.schemas import RenderTypeEnum
from campaign_engine.processors.campaign_charts.summarizer import summarize


def _run(bag, registry, diagnostics=None):
    return summarize(classify(bag, registry, diagnostics), diagnostics)


def _chart_ids(results):
    return {r.key: [c.id for c in r.charts] for r in results}


class TestScenarios:

    def test_single_performance_series(self, registry):
        results = _run({"performanceData": [{"name": "CTR", "value": 2.1}]}, registry)
        assert len(results) == 1
        assert results[0].key == "performance"
        assert [c.id for c in results[0].charts] == ["performance"]
        chart = results[0].charts[0]
        assert chart.render_type == RenderTypeEnum.BAR
        assert chart.height_hint == 300
        assert chart.data[0].name == "CTR"
        assert chart.data[0].value == 2.1

    def test_all_zero_health_is_hidden(self, registry, diagnostics):
        results = _run({"campaignHealthData": [{"name": "Active", "value": 0}]}, registry, diagnostics)
        assert results == []
        assert GATE_REJECTED in diagnostics.codes()

    def test_positive_health_is_pie_in_overview(self, registry):
        results = _run({"campaignHealthData": [{"name": "Active", "value": 5}]}, registry)
        assert [r.key for r in results] == ["overview"]
        chart = results[0].charts[0]
        assert chart.id == "health"
        assert chart.render_type == RenderTypeEnum.PIE

    def test_empty_bag(self, registry, diagnostics):
        results = _run({}, registry, diagnostics)
        assert results == []
        assert diagnostics.codes()[-1] == NO_SERIES_FOUND
        assert diagnostics.at_least(logging.WARNING) == []

    def test_non_array_series_is_excluded(self, registry, diagnostics):
        results = _run({"deviceClicksData": "not-an-array"}, registry, diagnostics)
        assert results == []
        assert diagnostics.by_code(INVALID_SERIES)[0].series_key == "deviceClicksData"


class TestInvariants:

    def test_deterministic(self, registry, campaign_bag):
        first = [r.model_dump_json(by_alias=True) for r in _run(campaign_bag, registry)]
        second = [r.model_dump_json(by_alias=True) for r in _run(campaign_bag, registry)]
        assert first == second

    def test_order_ignores_bag_key_order(self, registry, campaign_bag):
        reversed_bag = dict(reversed(list(campaign_bag.items())))
        forward = _run(campaign_bag, registry)
        backward = _run(reversed_bag, registry)
        assert [r.key for r in forward] == ["overview", "performance", "engagement", "video", "device", "platform"]
        assert [r.model_dump() for r in forward] == [r.model_dump() for r in backward]

    def test_unregistered_keys_never_matter(self, registry, campaign_bag):
        baseline = _run(campaign_bag, registry)
        noisy = dict(campaign_bag)
        noisy.update({
            "overview": [{"name": "x", "value": 1}],
            "__proto__": [{"name": "x", "value": 1}],
            "weatherData": [{"name": "sunny", "value": 30}],
        })
        noisy.pop("customBreakdownData")
        assert [r.model_dump() for r in _run(noisy, registry)] == [r.model_dump() for r in baseline]

    def test_only_malformed_points_never_charted(self, registry):
        results = _run({"deviceSpendData": [{"name": 1, "value": "x"}]}, registry)
        assert results == []

    @pytest.mark.parametrize("key", ["campaignHealthData", "roiData", "engagementData"])
    def test_gated_series(self, registry, key):
        zeros = [{"name": "a", "value": 0}, {"name": "b", "value": 0}]
        assert _run({key: zeros}, registry) == []

        one_positive = zeros + [{"name": "c", "value": 0.5}]
        results = _run({key: one_positive}, registry)
        assert len(results) == 1
        assert len(results[0].charts[0].data) == 3

    def test_gate_sees_only_valid_points(self, registry, diagnostics):
        bag = {"roiData": [{"name": 1, "value": 5}, {"name": "ROAS", "value": 0}]}
        assert _run(bag, registry, diagnostics) == []
        assert diagnostics.codes()[:2] == [MALFORMED_POINT, GATE_REJECTED]

    def test_unprintable_item_does_not_abort_run(self, registry, diagnostics):
        class Unprintable:
            def __repr__(self):
                raise RuntimeError("no repr")

        bag = {"performanceData": [Unprintable(), {"name": "CTR", "value": 2.1}]}
        results = _run(bag, registry, diagnostics)
        assert _chart_ids(results) == {"performance": ["performance"]}
        assert diagnostics.by_code(MALFORMED_POINT)[0].context["item"] == "<Unprintable>"

    def test_ungated_zero_series_is_shown(self, registry):
        results = _run({"deviceClicksData": [{"name": "desktop", "value": 0}]}, registry)
        assert _chart_ids(results) == {"device": ["deviceClicks"]}

    def test_bag_is_not_mutated(self, registry, campaign_bag):
        snapshot = copy.deepcopy(campaign_bag)
        _run(campaign_bag, registry)
        assert campaign_bag == snapshot


class TestClassify:

    def test_unfiltered_result_lists_every_active_category(self, registry):
        results = classify({"videoData": [{"name": "Views", "value": 10}]}, registry)
        assert [r.key for r in results] == ["overview", "performance", "engagement", "video", "device", "platform"]
        assert [len(r.charts) for r in results] == [0, 0, 0, 1, 0, 0]
        assert results[3].title == "Video Performance"
        assert results[3].description == "Video engagement and completion metrics"

    @pytest.mark.parametrize("bag", [None, [], "chart data", 42, [("performanceData", [])]])
    def test_non_mapping_bag_is_no_data(self, registry, diagnostics, bag):
        assert classify(bag, registry, diagnostics) == []
        assert diagnostics.codes() == [INVALID_BAG]

    def test_charts_follow_route_order_within_category(self, registry):
        bag = {
            "engagementData": [{"name": "Likes", "value": 4}],
            "actionValuesData": [{"name": "purchase", "value": 99.5}],
            "actionsData": [{"name": "link_click", "value": 12}],
        }
        results = _run(bag, registry)
        assert _chart_ids(results) == {"engagement": ["actions", "actionValues", "engagement"]}

    def test_inactive_categories_are_skipped(self, registry):
        bag = {
            "hourlyClicksData": [{"name": "00:00", "value": 41}],
            "regionalSpendData": [{"name": "Texas", "value": 12.5}],
            "genderCTRData": [{"name": "female", "value": 1.2}],
        }
        assert _run(bag, registry) == []

    def test_retired_categories_can_be_enabled(self, full_registry):
        bag = {
            "hourlyClicksData": [{"name": "00:00", "value": 41}],
            "regionalSpendData": [{"name": "Texas", "value": 12.5}],
            "genderCTRData": [{"name": "female", "value": 1.2}],
        }
        results = _run(bag, full_registry)
        assert _chart_ids(results) == {
            "geographic": ["regionalSpend"],
            "temporal": ["hourlyClicks"],
            "demographic": ["genderCTR"],
        }
        assert results[1].charts[0].render_type == RenderTypeEnum.LINE

    def test_each_call_returns_fresh_objects(self, registry):
        bag = {"performanceData": [{"name": "CTR", "value": 2.1}]}
        first = classify(bag, registry)
        second = classify(bag, registry)
        first[1].charts.clear()
        assert len(second[1].charts) == 1

    def test_uses_process_registry_by_default(self):
        results = classify({"performanceData": [{"name": "CTR", "value": 2.1}]})
        assert any(r.charts for r in results)


class TestCampaignFixture:

    def test_expected_charts(self, registry, campaign_bag):
        results = _run(campaign_bag, registry)
        assert _chart_ids(results) == {
            "overview": ["health"],
            "performance": ["performance"],
            "engagement": ["actions", "actionValues"],
            "video": ["video"],
            "device": ["deviceImpressions", "deviceClicks"],
            "platform": ["publisherPlatformSpend"],
        }

    def test_expected_diagnostics(self, registry, campaign_bag, diagnostics):
        _run(campaign_bag, registry, diagnostics)
        assert len(diagnostics.by_code(MALFORMED_POINT)) == 3
        assert sorted(d.series_key for d in diagnostics.by_code(INVALID_SERIES)) == [
            "deviceCTRData", "engagementData",
        ]
        assert [d.series_key for d in diagnostics.by_code(GATE_REJECTED)] == ["roiData"]
        assert diagnostics.by_code(EMPTY_CATEGORY) == []
        assert diagnostics.by_code(NO_SERIES_FOUND) == []

    def test_malformed_points_are_filtered_not_fatal(self, registry, campaign_bag):
        results = _run(campaign_bag, registry)
        engagement = next(r for r in results if r.key == "engagement")
        actions = engagement.charts[0]
        assert [p.name for p in actions.data] == ["link_click", "landing_page_view", "add_to_cart", "purchase"]
        assert [p.value for p in engagement.charts[1].data] == [6523.5]
