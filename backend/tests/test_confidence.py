"""Tests for confidence and recency blending."""
from datetime import datetime, timedelta, timezone

import pytest

from rift_counter.models.analysis import Uncertainty
from rift_counter.models.champion import DataSource
from rift_counter.services.scorers.confidence import (
    average_source_weight,
    calculate_build_confidence,
    compute_overall_confidence,
    freshest_fetch,
    get_recency_weight,
    recency_weight_for_age,
)

NOW = datetime(2025, 12, 1, tzinfo=timezone.utc)


class TestBuildConfidence:
    @pytest.mark.parametrize("value,expected", [
        (1, 100),
        (0, 0),
        (0.5, 50),
        (1.5, 100),
        (-1, 0),
    ])
    def test_uniform_inputs(self, value, expected):
        assert calculate_build_confidence(value, value, value) == expected

    def test_weights(self):
        assert calculate_build_confidence(1, 0, 0) == 40
        assert calculate_build_confidence(0, 1, 0) == 30
        assert calculate_build_confidence(0, 0, 1) == 30

    def test_rounds_half_up(self):
        # 30 * 0.25 = 7.5
        assert calculate_build_confidence(0, 0.25, 0) == 8

    def test_garbage_counts_as_zero(self):
        assert calculate_build_confidence(None, float("nan"), "x") == 0


class TestRecency:
    @pytest.mark.parametrize("age,expected", [
        (3, 1.0),
        (7, 0.9),
        (10, 0.9),
        (14, 0.7),
        (21, 0.7),
        (45, 0.5),
        (60, 0.3),
        (90, 0.3),
    ])
    def test_buckets(self, age, expected):
        assert recency_weight_for_age(age) == expected

    def test_no_data(self):
        assert get_recency_weight(None, NOW) == 0.3

    def test_from_timestamp(self):
        assert get_recency_weight(NOW - timedelta(days=2), NOW) == 1.0
        assert get_recency_weight(NOW - timedelta(days=7), NOW) == 0.9

    def test_freshest_fetch(self):
        sources = [
            DataSource("a", fetched=NOW - timedelta(days=5)),
            DataSource("b", fetched=None),
            DataSource("c", fetched=NOW - timedelta(days=1)),
        ]
        assert freshest_fetch(sources) == NOW - timedelta(days=1)
        assert freshest_fetch([]) is None


class TestSourceWeights:
    def test_average(self):
        sources = [DataSource("WildRiftFire"), DataSource("Community")]
        assert average_source_weight(sources, {"WildRiftFire": 1.0, "Community": 0.6}) == pytest.approx(0.8)

    def test_unknown_source_counts_half(self):
        sources = [DataSource("WildRiftFire"), DataSource("Blog")]
        assert average_source_weight(sources, {"WildRiftFire": 1.0}) == pytest.approx(0.75)

    def test_no_sources(self):
        assert average_source_weight([], {"WildRiftFire": 1.0}) == 0.5


class TestOverallConfidence:
    def test_base_only(self):
        assert compute_overall_confidence([], [], Uncertainty.LOW) == 70

    def test_running_average(self):
        # (70 + 90) / 2 = 80, then (80 + 60) / 2 = 70
        assert compute_overall_confidence([80, 100], [60], Uncertainty.LOW) == 70

    def test_uncertainty_penalty(self):
        assert compute_overall_confidence([90], [], Uncertainty.MEDIUM) == 68
        assert compute_overall_confidence([], [], Uncertainty.HIGH) == 49

    def test_upper_and_lower_bounds(self):
        assert compute_overall_confidence([100], [100], Uncertainty.LOW) == 93
        assert compute_overall_confidence([0], [0], Uncertainty.HIGH) == 30
