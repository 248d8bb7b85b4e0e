"""Tests for the player-centric matchup vector."""
from dataclasses import fields
from itertools import product

import pytest

from rift_counter.models.champion import Champion
from rift_counter.models.matchup import MatchupVector
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.matchup_vector import MatchupVectorCalculator


@pytest.fixture
def calculator():
    return MatchupVectorCalculator()


def test_mirror_matchup_diffs_are_zero(calculator):
    store = KnowledgeStore()
    for champion in store.get_all_champions():
        vector = calculator.compute(champion, champion)
        assert vector.mobility_diff == 0
        assert vector.cc_diff == 0
        assert vector.sustain_diff == 0
        assert vector.waveclear_diff == 0
        assert vector.scaling_diff == 0


def test_all_fields_within_bounds(calculator):
    store = KnowledgeStore()
    champions = store.get_all_champions() + [
        Champion.from_dict({"id": "huge", "range_type": "ranged", "burst": 500, "mobility": -500}),
        Champion.from_dict({"id": "blank"}),
    ]
    for player, enemy in product(champions, repeat=2):
        vector = calculator.compute(player, enemy)
        for f in fields(vector):
            low, high = MatchupVector.BOUNDS[f.name]
            assert low <= getattr(vector, f.name) <= high, f.name


def test_ranged_vs_melee_poke(calculator):
    ranged = Champion.from_dict({"id": "ranged", "range_type": "ranged", "waveclear": 5})
    melee = Champion.from_dict({"id": "melee", "sustain": 5})
    # 25 * 1.5 + 15 + 5 * 2 - 5 * 3
    assert calculator.compute(ranged, melee).poke_advantage == pytest.approx(47.5)
    # -20 * 1.5 - 10
    assert calculator.compute(melee, ranged).poke_advantage == pytest.approx(-40)


def test_diff_scaling(calculator):
    fast = Champion.from_dict({"id": "fast", "mobility": 8})
    slow = Champion.from_dict({"id": "slow", "mobility": 3})
    assert calculator.compute(fast, slow).mobility_diff == 60
    assert calculator.compute(slow, fast).mobility_diff == -60
