"""Tests for lane-scoped matchup metrics."""
from dataclasses import fields
from itertools import product

import pytest

from rift_counter.models.champion import Champion, Lane
from rift_counter.models.matchup import MatchupMetrics, StoredMatchup
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.matchup_metrics import (
    STORED_RANGE_BLEND_WEIGHT,
    MatchupMetricsCalculator,
    merge_stored_metrics,
)


def make_champion(champion_id, range_type="melee", **scores):
    return Champion.from_dict({
        "id": champion_id,
        "name": champion_id.title(),
        "lanes": ["mid"],
        "range_type": range_type,
        **scores,
    })


@pytest.fixture
def calculator():
    return MatchupMetricsCalculator()


def assert_in_bounds(metrics: MatchupMetrics):
    for f in fields(metrics):
        low, high = MatchupMetrics.BOUNDS[f.name]
        assert low <= getattr(metrics, f.name) <= high, f.name


class TestFactors:
    def test_range_advantage(self, calculator):
        ranged = make_champion("ranged", "ranged")
        melee = make_champion("melee")
        assert calculator.compute_factors(ranged, melee).range_advantage == 20
        assert calculator.compute_factors(melee, ranged).range_advantage == -15
        assert calculator.compute_factors(melee, melee).range_advantage == 0

    def test_missing_scores_count_as_zero(self, calculator):
        empty = Champion.from_dict({"id": "empty", "mobility": None, "cc": "n/a"})
        factors = calculator.compute_factors(empty, empty)
        assert factors.mobility_diff == 0
        assert factors.cc_comparison == 0
        assert factors.burst_vs_sustain == 0


class TestComputedMetrics:
    def test_melee_burst_challenger_vs_ranged_sustain_opponent(self, calculator):
        challenger = make_champion("brawler", mobility=2, burst=9, cc=2)
        ranged_opponent = make_champion("healer", "ranged", sustain=8, waveclear=7)
        melee_opponent = make_champion("dummy")

        metrics = calculator.compute_metrics(challenger, ranged_opponent, Lane.MID)
        baseline = calculator.compute_metrics(challenger, melee_opponent, Lane.MID)

        assert metrics.poke_advantage < 0
        assert metrics.kill_potential < baseline.kill_potential

    def test_metrics_stay_in_bounds_for_extremes(self, calculator):
        profiles = [
            make_champion("max", "ranged", mobility=10, cc=10, burst=10, sustain=10, waveclear=10, roam=10, scale=10),
            make_champion("min"),
            make_champion("huge", "ranged", mobility=1000, burst=1000, scale=-1000),
        ]
        for challenger, opponent in product(profiles, repeat=2):
            assert_in_bounds(calculator.compute_metrics(challenger, opponent))

    def test_seed_data_pairs_stay_in_bounds(self, calculator):
        store = KnowledgeStore()
        champions = store.get_all_champions()
        for challenger, opponent in product(champions, repeat=2):
            assert_in_bounds(calculator.compute_metrics(challenger, opponent))


class TestStoredMatchups:
    def test_stored_metrics_are_blended_with_range(self):
        stored = StoredMatchup(
            challenger_id="ranged",
            opponent_id="melee",
            lane=Lane.MID,
            metrics=MatchupMetrics.from_dict({"lane_dominance": 25, "kill_potential": 45}),
        )
        lookup_calls = []

        def lookup(challenger_id, opponent_id, lane):
            lookup_calls.append((challenger_id, opponent_id, lane))
            return stored

        calculator = MatchupMetricsCalculator(lookup)
        metrics = calculator.compute_metrics(
            make_champion("ranged", "ranged"), make_champion("melee"), Lane.MID
        )

        assert lookup_calls == [("ranged", "melee", Lane.MID)]
        assert metrics.lane_dominance == pytest.approx(25 + STORED_RANGE_BLEND_WEIGHT * 20)
        assert metrics.kill_potential == 45

    def test_no_lane_skips_lookup(self):
        def lookup(*args):
            raise AssertionError("lookup should not be called without a lane")

        calculator = MatchupMetricsCalculator(lookup)
        calculator.compute_metrics(make_champion("a"), make_champion("b"))

    def test_merge_clamps(self):
        factors = MatchupMetricsCalculator().compute_factors(
            make_champion("ranged", "ranged"), make_champion("melee")
        )
        stored = MatchupMetrics.from_dict({"lane_dominance": 100})
        assert merge_stored_metrics(stored, factors).lane_dominance == 100

    def test_seed_stored_matchup_is_used(self):
        store = KnowledgeStore()
        calculator = MatchupMetricsCalculator(store.get_stored_matchup)
        syndra = store.get_champion_by_id("syndra")
        yasuo = store.get_champion_by_id("yasuo")
        metrics = calculator.compute_metrics(syndra, yasuo, Lane.MID)
        # 35 stored + 0.3 * 20 range advantage
        assert metrics.lane_dominance == pytest.approx(41)
        assert metrics.poke_advantage == 55
