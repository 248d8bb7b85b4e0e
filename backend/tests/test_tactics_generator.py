"""Tests for lane tactics, power spikes and ability warnings."""
import pytest

from rift_counter.models.champion import Champion, RoleTag
from rift_counter.models.matchup import MatchupMetrics
from rift_counter.models.tactics import TacticPhase
from rift_counter.services.tactics_generator import (
    LATE_GAME_ROLE_ADVICE,
    ROLE_TAG_PRECEDENCE,
    TacticsGenerator,
    late_game_advice,
    primary_role_tag,
)


@pytest.fixture
def generator():
    return TacticsGenerator()


def make_champion(champion_id, **data):
    return Champion.from_dict({"id": champion_id, "name": champion_id.title(), **data})


def metrics(**values):
    return MatchupMetrics.from_dict(values)


def test_role_advice_covers_every_tag():
    assert set(LATE_GAME_ROLE_ADVICE) == set(RoleTag)
    assert set(ROLE_TAG_PRECEDENCE) == set(RoleTag)


def test_primary_role_tag_precedence():
    assert primary_role_tag(make_champion("x", tags=["tank", "assassin"])) == RoleTag.ASSASSIN
    assert primary_role_tag(make_champion("x", tags=["support", "mage"])) == RoleTag.MAGE
    assert primary_role_tag(make_champion("x")) is None


class TestGenerateTactics:
    def test_three_phases_in_order(self, generator):
        tactics = generator.generate_tactics(make_champion("a"), make_champion("b"), metrics())
        assert [t.phase for t in tactics] == [TacticPhase.EARLY, TacticPhase.MID, TacticPhase.TEAMFIGHT]
        assert [t.priority for t in tactics] == [5, 4, 3]
        assert all(t.steps for t in tactics)

    def test_even_matchup_fallbacks(self, generator):
        early, mid, _ = generator.generate_tactics(make_champion("a"), make_champion("b"), metrics())
        assert early.reasoning == "Even matchup - farm well and trade efficiently"
        assert len(early.steps) == 2
        assert mid.reasoning == "Even matchup - gain advantages through macro"

    def test_dominant_early(self, generator):
        early = generator.generate_tactics(
            make_champion("a"), make_champion("b"), metrics(lane_dominance=40, poke_advantage=30)
        )[0]
        actions = [s.action for s in early.steps]
        assert actions[0] == "Trade aggressively at levels 1-2"
        assert "Use abilities to poke before engaging" in actions

    def test_losing_early_and_gank_warning(self, generator):
        early = generator.generate_tactics(
            make_champion("a"), make_champion("b"), metrics(lane_dominance=-40, gank_vulnerability=80)
        )[0]
        assert early.reasoning == "Enemy has early pressure - survive to scale"
        assert any(s.timing == "2:30" for s in early.steps)

    def test_mid_game_scaling(self, generator):
        mid = generator.generate_tactics(
            make_champion("a"), make_champion("b"), metrics(scale_comparison=-50)
        )[1]
        assert [s.action for s in mid.steps] == ["Force plays before enemy scales"]

    def test_teamfight_burst_warning_names_opponent(self, generator):
        teamfight = generator.generate_tactics(
            make_champion("a"), make_champion("zed", burst=9), metrics()
        )[2]
        assert "Zed's burst combo" in teamfight.steps[0].action

    def test_teamfight_falls_back_to_role_advice(self, generator):
        teamfight = generator.generate_tactics(
            make_champion("a", tags=["tank"]), make_champion("b"), metrics()
        )[2]
        steps, reasoning, _ = LATE_GAME_ROLE_ADVICE[RoleTag.TANK]
        assert [s.action for s in teamfight.steps] == list(steps)
        assert teamfight.reasoning == reasoning

    def test_teamfight_generic_without_tags(self, generator):
        teamfight = generator.generate_tactics(make_champion("a"), make_champion("b"), metrics())[2]
        assert teamfight.reasoning == late_game_advice(make_champion("a"))[1]


class TestPowerSpikes:
    def test_ordering_and_advantage(self, generator):
        you = make_champion("you", power_spikes=[
            {"type": "item", "value": "Luden's Echo", "strength": 0.8, "notes": "First item"},
            {"type": "level", "value": "11", "strength": 0.5, "notes": "Second rank ult"},
        ])
        enemy = make_champion("zed", power_spikes=[
            {"type": "time", "value": "14:00", "strength": 0.6, "notes": "Two items"},
            {"type": "level", "value": "6", "strength": 0.9, "notes": "Death Mark"},
        ])
        spikes = generator.generate_power_spikes(you, enemy)

        assert [s.time for s in spikes] == ["Level 6", "Level 11", "Luden's Echo", "14:00"]
        assert [s.type for s in spikes] == ["level", "level", "item", "time"]
        assert spikes[0].champion == "enemy"
        assert spikes[0].advantage == "enemy"
        assert spikes[0].description == "Zed: Death Mark"
        assert spikes[1].advantage == "neutral"
        assert spikes[2].advantage == "you"

    def test_no_spikes(self, generator):
        assert generator.generate_power_spikes(make_champion("a"), make_champion("b")) == []


class TestAbilityWarnings:
    def test_ultimate_and_cc(self, generator):
        enemy = make_champion("leona", cc=9, abilities={"ultimate": {"name": "Solar Flare", "description": "AoE stun"}})
        warnings = generator.generate_ability_warnings(enemy)
        assert [w.ability for w in warnings] == ["Ultimate", "CC Abilities"]
        assert warnings[0].warning == "AoE stun"
        assert all(w.champion_id == "leona" for w in warnings)

    def test_cc_threshold_is_exclusive(self, generator):
        assert generator.generate_ability_warnings(make_champion("x", cc=6)) == []
