"""Tests for the player-centric tactical breakdown."""
from unittest.mock import MagicMock

import pytest

from rift_counter.models.champion import Champion
from rift_counter.models.matchup import MatchupVector
from rift_counter.models.tactics import ChampionCapability, TacticPhase
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.tactical_engine import UNIVERSAL_CONDITIONALS, TacticalEngine


def make_champion(champion_id, **data):
    return Champion.from_dict({"id": champion_id, "name": champion_id.title(), **data})


def vector(**values):
    defaults = dict(
        lane_dominance=0.0,
        all_in_potential=50.0,
        poke_advantage=0.0,
        mobility_diff=0.0,
        cc_diff=0.0,
        sustain_diff=0.0,
        waveclear_diff=0.0,
        scaling_diff=0.0,
    )
    defaults.update(values)
    return MatchupVector(**defaults)


@pytest.fixture
def engine():
    return TacticalEngine()


@pytest.fixture
def seeded_engine():
    return TacticalEngine(KnowledgeStore())


class TestStageTactics:
    def test_even_fallbacks(self, engine):
        early, mid, late = engine.generate_stage_tactics(make_champion("a"), vector())
        assert early.reasoning == "Even matchup - farm well and trade efficiently."
        assert mid.reasoning == "Similar scaling - gain advantages through macro."
        assert late.phase == TacticPhase.LATE
        assert [t.confidence for t in (early, mid, late)] == [75, 72, 68]

    def test_dominant_and_outscaled(self, engine):
        early, mid, _ = engine.generate_stage_tactics(
            make_champion("a"), vector(lane_dominance=30, scaling_diff=-30)
        )
        assert early.reasoning == "You have lane dominance - press early advantage."
        assert mid.reasoning == "Enemy outscales - force early objectives."

    def test_late_uses_role_advice(self, engine):
        late = engine.generate_stage_tactics(make_champion("a", tags=["mage"]), vector())[2]
        assert late.reasoning == "As mage, maximize damage while staying safe."


class TestAbilityWindows:
    def test_no_capability_no_windows(self, engine):
        assert engine.generate_ability_windows(make_champion("a"), make_champion("b")) == []

    def test_zed_windows(self, seeded_engine):
        store = seeded_engine.store
        windows = seeded_engine.generate_ability_windows(
            store.get_champion_by_id("lux"), store.get_champion_by_id("zed")
        )
        shadow = windows[0]
        assert shadow.trigger == "Zed uses Living Shadow (W) aggressively"
        assert shadow.window == "11-16s trade window"
        assert shadow.action == "All-in immediately - no escape available"
        assert shadow.risk == "low"

        death_mark_engage, death_mark_track = windows[1], windows[2]
        assert death_mark_engage.window == "60-100s"
        assert death_mark_track.trigger == "Zed just used ultimate"
        assert death_mark_track.window == "100s until available again"

    def test_short_cooldowns_skip_trade_windows(self):
        store = MagicMock()
        store.get_capability.return_value = ChampionCapability.from_dict("yasuo", {
            "key_abilities": [{"ability": "Q", "name": "Steel Tempest", "cooldown": 4, "is_engage_key": True}],
        })
        engine = TacticalEngine(store)
        assert engine.generate_ability_windows(make_champion("a"), make_champion("yasuo")) == []

    def test_player_engage_ultimate(self):
        store = MagicMock()
        store.get_capability.side_effect = lambda cid: ChampionCapability.from_dict(cid, {
            "key_abilities": [{"ability": "R", "name": "Unstoppable Force", "cooldown": 90, "is_engage_key": True}],
        }) if cid == "malphite" else None
        engine = TacticalEngine(store)
        windows = engine.generate_ability_windows(make_champion("malphite"), make_champion("b"))
        assert [w.trigger for w in windows] == ["Your Unstoppable Force is available"]


class TestConditionalsAndTips:
    def test_universal_conditionals_always_present(self, engine):
        tactics = engine.generate_conditional_tactics(make_champion("a"), make_champion("b"), vector())
        assert tactics == list(UNIVERSAL_CONDITIONALS)

    def test_assassin_and_scaling_additions(self, engine):
        tactics = engine.generate_conditional_tactics(
            make_champion("a", roam=8),
            make_champion("b", tags=["assassin"]),
            vector(scaling_diff=-40),
        )
        conditions = [t.condition for t in tactics[len(UNIVERSAL_CONDITIONALS):]]
        assert conditions == [
            "Enemy assassin hits 6 before you",
            "Game reaches 15+ minutes",
            "Wave is pushed and enemy is low",
        ]

    def test_micro_tips(self, engine):
        tips = engine.generate_micro_tips(
            make_champion("zed", burst=9, roam=7), vector(poke_advantage=30, waveclear_diff=-30)
        )
        categories = [t.category for t in tips]
        assert categories == ["trading", "positioning", "farming", "vision", "vision"]

    def test_micro_tips_include_enemy_capability_tips(self, seeded_engine):
        zed = seeded_engine.store.get_champion_by_id("zed")
        tips = seeded_engine.generate_micro_tips(zed, vector())
        assert "Trade back hard when his W shadow is down" in [t.tip for t in tips]


class TestLaneStrategyAndWinConditions:
    def test_lane_strategy_shape(self, engine):
        strategy = engine.generate_lane_strategy(make_champion("a", tags=["tank"]), make_champion("b"), vector())
        assert strategy.early[-1] == "Ward river at 2:30 for first gank timing"
        assert len(strategy.mid) == 3
        assert strategy.late[0] == "Look for engage angles around objectives"

    @pytest.mark.parametrize("values,prefix", [
        ({"scaling_diff": 30}, "Scale to late game"),
        ({"scaling_diff": -30}, "Snowball early"),
        ({"lane_dominance": 30}, "Dominate lane"),
        ({"lane_dominance": -30}, "Survive laning phase"),
        ({}, "Win through superior mechanics"),
    ])
    def test_win_conditions(self, engine, values, prefix):
        win, avoid = engine.generate_win_conditions(make_champion("b"), vector(**values))
        assert win.startswith(prefix)
        assert avoid


def test_build_breakdown(seeded_engine):
    store = seeded_engine.store
    breakdown = seeded_engine.build_breakdown(store.get_champion_by_id("ahri"), store.get_champion_by_id("zed"))
    assert len(breakdown.stage_tactics) == 3
    assert breakdown.ability_windows
    assert len(breakdown.conditional_tactics) >= len(UNIVERSAL_CONDITIONALS)
    assert breakdown.win_condition and breakdown.avoid_condition
