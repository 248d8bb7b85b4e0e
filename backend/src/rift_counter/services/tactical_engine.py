"""Player-centric tactical breakdown.

Used when the user already picked a champion: stage tactics, ability
cooldown windows, conditional tactics, micro tips, lane strategy and
win/avoid conditions, all derived from a MatchupVector plus per-champion
capability records.
"""
import math
from typing import Optional

from rift_counter.models.champion import Champion, RoleTag
from rift_counter.models.matchup import MatchupVector
from rift_counter.models.tactics import (
    AbilityWindowTactic,
    ConditionalTactic,
    KeyAbility,
    LaneStrategy,
    MicroTip,
    Tactic,
    TacticalBreakdown,
    TacticPhase,
    TacticStep,
)
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.matchup_vector import MatchupVectorCalculator
from rift_counter.services.tactics_generator import late_game_advice
from rift_counter.utils.numbers import safe_number

ESCAPE_WINDOW_MIN_COOLDOWN = 10
ENGAGE_WINDOW_MIN_COOLDOWN = 8

UNIVERSAL_CONDITIONALS: tuple[ConditionalTactic, ...] = (
    ConditionalTactic(
        condition="Enemy jungler not visible for 30+ seconds",
        action="Ward river/tri-bush, hug tower side of lane",
        priority="must", phase="early", icon="warning",
    ),
    ConditionalTactic(
        condition="Your jungler pings for gank",
        action="Slow push wave, bait enemy forward, save CC for gank",
        priority="should", phase="early", icon="tip",
    ),
    ConditionalTactic(
        condition="Your lane opponent is missing",
        action="Ping immediately, shove wave, follow or take plates",
        priority="must", phase="mid", icon="warning",
    ),
    ConditionalTactic(
        condition="Dragon spawns in 30 seconds",
        action="Shove wave, recall if needed, rotate early",
        priority="should", phase="mid", icon="info",
    ),
    ConditionalTactic(
        condition="Herald is up and jungler is topside",
        action="Push wave, rotate for Herald if lane is winning",
        priority="consider", phase="mid", icon="tip",
    ),
    ConditionalTactic(
        condition="Baron spawns soon and team is ahead",
        action="Group with team, maintain vision control",
        priority="must", phase="late", icon="warning",
    ),
    ConditionalTactic(
        condition="Wave is pushing towards you",
        action="Let it crash into tower, freeze if safe",
        priority="should", phase="all", icon="tip",
    ),
    ConditionalTactic(
        condition="You have item advantage after recall",
        action="Look for aggressive trade when returning to lane",
        priority="should", phase="early", icon="tip",
    ),
    ConditionalTactic(
        condition="You are behind 0/2 or more",
        action="Focus on safe CS, avoid fights, wait for team",
        priority="must", phase="all", icon="warning",
    ),
)


def _name(champion: Champion) -> str:
    return champion.display_name or champion.name


def _fmt_seconds(value: float) -> str:
    return f"{value:g}"


class TacticalEngine:
    """Builds a TacticalBreakdown for a player champion against their lane enemy."""

    def __init__(
        self,
        store: Optional[KnowledgeStore] = None,
        vector_calculator: Optional[MatchupVectorCalculator] = None,
    ):
        self.store = store
        self.vector_calculator = vector_calculator or MatchupVectorCalculator()

    def _key_abilities(self, champion: Champion) -> tuple[KeyAbility, ...]:
        capability = self.store.get_capability(champion.id) if self.store else None
        return capability.key_abilities if capability else ()

    def _champion_tips(self, champion: Champion) -> tuple[MicroTip, ...]:
        capability = self.store.get_capability(champion.id) if self.store else None
        return capability.micro_tips if capability else ()

    def compute_vector(self, player: Champion, enemy: Champion) -> MatchupVector:
        return self.vector_calculator.compute(player, enemy)

    def build_breakdown(
        self,
        player: Champion,
        enemy: Champion,
        vector: Optional[MatchupVector] = None,
    ) -> TacticalBreakdown:
        vector = vector or self.compute_vector(player, enemy)
        win, avoid = self.generate_win_conditions(enemy, vector)
        return TacticalBreakdown(
            stage_tactics=self.generate_stage_tactics(player, vector),
            ability_windows=self.generate_ability_windows(player, enemy),
            conditional_tactics=self.generate_conditional_tactics(player, enemy, vector),
            micro_tips=self.generate_micro_tips(enemy, vector),
            lane_strategy=self.generate_lane_strategy(player, enemy, vector),
            win_condition=win,
            avoid_condition=avoid,
        )

    def generate_stage_tactics(self, player: Champion, vector: MatchupVector) -> list[Tactic]:
        """Early, mid and late tactics; each stage has an even-matchup fallback."""
        if vector.lane_dominance > 20:
            early_steps = [
                TacticStep("Trade aggressively at level 1-2", timing="First wave"),
                TacticStep("Push for level 2 advantage", timing="Second wave"),
            ]
            early_reasoning = "You have lane dominance - press early advantage."
        elif vector.lane_dominance < -20:
            early_steps = [
                TacticStep("Focus on safe farming", timing="Levels 1-3"),
                TacticStep("Stay near tower if pushed", timing="Early game"),
            ]
            early_reasoning = "Enemy has early pressure - survive and scale."
        else:
            early_steps = [
                TacticStep("Trade when abilities available"),
                TacticStep("Match enemy push"),
            ]
            early_reasoning = "Even matchup - farm well and trade efficiently."

        if vector.scaling_diff < -20:
            mid_steps = [
                TacticStep("Force fights - you need to end early", timing="After first item"),
                TacticStep("Roam to snowball leads"),
            ]
            mid_reasoning = "Enemy outscales - force early objectives."
        elif vector.scaling_diff > 20:
            mid_steps = [
                TacticStep("Farm safely, avoid risky plays"),
                TacticStep("Group for objectives when ready", timing="After second item"),
            ]
            mid_reasoning = "You outscale - focus on consistent farming."
        else:
            mid_steps = [
                TacticStep("Look for roam opportunities"),
                TacticStep("Contest objectives with team"),
            ]
            mid_reasoning = "Similar scaling - gain advantages through macro."

        late_actions, late_reasoning, _ = late_game_advice(player)

        return [
            Tactic(
                id="early-game",
                title="Early Game (Levels 1-5)",
                phase=TacticPhase.EARLY,
                steps=early_steps,
                reasoning=early_reasoning,
                priority=5,
                confidence=75,
            ),
            Tactic(
                id="mid-game",
                title="Mid Game (Levels 6-10)",
                phase=TacticPhase.MID,
                steps=mid_steps,
                reasoning=mid_reasoning,
                priority=4,
                confidence=72,
            ),
            Tactic(
                id="late-game",
                title="Late Game (Levels 11+)",
                phase=TacticPhase.LATE,
                steps=[TacticStep(action) for action in late_actions],
                reasoning=late_reasoning,
                priority=3,
                confidence=68,
            ),
        ]

    def generate_ability_windows(self, player: Champion, enemy: Champion) -> list[AbilityWindowTactic]:
        """Trade windows opened by the enemy's key ability cooldowns."""
        windows = []
        enemy_name = _name(enemy)
        for ability in self._key_abilities(enemy):
            cooldown = safe_number(ability.cooldown)
            label = f"{ability.name} ({ability.ability})"

            if ability.is_escape and cooldown >= ESCAPE_WINDOW_MIN_COOLDOWN:
                windows.append(AbilityWindowTactic(
                    trigger=f"{enemy_name} uses {label} aggressively",
                    window=f"{math.floor(cooldown * 0.7)}-{_fmt_seconds(cooldown)}s trade window",
                    action=(
                        "All-in immediately - no escape available"
                        if ability.is_engage_key
                        else "Trade aggressively - escape on cooldown"
                    ),
                    risk="low",
                    phase="all",
                ))

            if ability.is_engage_key and not ability.is_escape and cooldown >= ENGAGE_WINDOW_MIN_COOLDOWN:
                windows.append(AbilityWindowTactic(
                    trigger=f"{enemy_name} misses or wastes {label}",
                    window=f"{math.floor(cooldown * 0.6)}-{_fmt_seconds(cooldown)}s",
                    action="Step forward for trades - key ability unavailable",
                    risk="medium",
                    phase="all",
                ))

            if ability.ability == "R":
                windows.append(AbilityWindowTactic(
                    trigger=f"{enemy_name} just used ultimate",
                    window=f"{_fmt_seconds(cooldown)}s until available again",
                    action="Play more aggressive - ultimate on cooldown",
                    risk="medium",
                    phase="mid",
                ))

        for ability in self._key_abilities(player):
            if ability.is_engage_key and ability.ability == "R":
                windows.append(AbilityWindowTactic(
                    trigger=f"Your {ability.name} is available",
                    window="Look for engage opportunity",
                    action=f"Use {ability.ability} when enemy key abilities are down",
                    risk="medium",
                    phase="mid",
                ))
        return windows

    def generate_conditional_tactics(
        self, player: Champion, enemy: Champion, vector: MatchupVector
    ) -> list[ConditionalTactic]:
        tactics = list(UNIVERSAL_CONDITIONALS)

        if vector.lane_dominance < -20:
            tactics.append(ConditionalTactic(
                condition="Enemy is zoning you from CS",
                action="Give up some CS, stay in XP range, wait for jungler",
                priority="should", phase="early", icon="tip",
            ))
        if vector.lane_dominance > 20:
            tactics.append(ConditionalTactic(
                condition="You hit level 2 first",
                action="Look for immediate trade - level advantage is huge",
                priority="should", phase="early", icon="tip",
            ))
        if enemy.has_tag(RoleTag.ASSASSIN):
            tactics.append(ConditionalTactic(
                condition="Enemy assassin hits 6 before you",
                action="Play far back, respect kill threat, ping for assistance",
                priority="must", phase="early", icon="warning",
            ))
        if vector.scaling_diff > 25:
            tactics.append(ConditionalTactic(
                condition="Game reaches 15+ minutes",
                action="You outscale - look for teamfights, avoid 1v1s",
                priority="should", phase="late", icon="info",
            ))
        if vector.scaling_diff < -25:
            tactics.append(ConditionalTactic(
                condition="Game reaches 15+ minutes",
                action="Enemy outscales - force objectives, end early",
                priority="must", phase="late", icon="warning",
            ))
        if safe_number(player.roam) >= 7:
            tactics.append(ConditionalTactic(
                condition="Wave is pushed and enemy is low",
                action="Roam to help jungler or side lanes",
                priority="consider", phase="mid", icon="tip",
            ))
        return tactics

    def generate_micro_tips(self, enemy: Champion, vector: MatchupVector) -> list[MicroTip]:
        enemy_name = _name(enemy)
        tips = []
        if vector.poke_advantage > 15:
            tips.append(MicroTip(
                tip=f"Poke {enemy_name} when they go for CS",
                category="trading",
                timing="When enemy last-hits",
            ))
        if safe_number(enemy.burst) >= 8:
            tips.append(MicroTip(
                tip=f"Don't stand still - {enemy_name} has high burst",
                category="positioning",
            ))
        if vector.waveclear_diff < -20:
            tips.append(MicroTip(tip="Save abilities for wave management, not poke", category="farming"))

        tips.append(MicroTip(
            tip="Ward pixel brush at 2:30 - standard jungle timing",
            category="vision",
            timing="2:30 game time",
        ))

        if safe_number(enemy.roam) >= 7:
            tips.append(MicroTip(tip=f"{enemy_name} roams well - keep river warded", category="vision"))

        tips.extend(self._champion_tips(enemy))
        return tips

    def generate_lane_strategy(
        self, player: Champion, enemy: Champion, vector: MatchupVector
    ) -> LaneStrategy:
        strategy = LaneStrategy()

        if vector.lane_dominance > 20:
            strategy.early.extend([
                "Trade aggressively at levels 1-2",
                "Push for level 2 first - 7th minion kills",
                f"Zone {_name(enemy)} from CS when possible",
            ])
        elif vector.lane_dominance < -20:
            strategy.early.extend([
                "Focus on safe CS under tower",
                "Give up minions rather than HP",
                "Wait for jungle help or level 5 power spike",
            ])
        else:
            strategy.early.extend([
                "Trade when enemy uses abilities on wave",
                "Match enemy push to prevent roams",
                "Look for favorable trades when abilities are up",
            ])
        strategy.early.append("Ward river at 2:30 for first gank timing")

        if vector.scaling_diff < -15:
            strategy.mid.extend([
                "Force fights - you need to snowball",
                "Roam aggressively after shoving wave",
                "Contest every dragon and herald",
            ])
        elif vector.scaling_diff > 15:
            strategy.mid.extend([
                "Farm safely - you outscale",
                "Group only for guaranteed objectives",
                "Avoid risky solo plays",
            ])
        else:
            strategy.mid.extend([
                "Look for roams when lane is pushed",
                "Contest objectives with team",
                "Build according to game state",
            ])

        _, _, late_lines = late_game_advice(player)
        strategy.late.extend(late_lines)
        return strategy

    def generate_win_conditions(self, enemy: Champion, vector: MatchupVector) -> tuple[str, str]:
        enemy_name = _name(enemy)
        if vector.scaling_diff > 20:
            return (
                f"Scale to late game - you outscale {enemy_name}. Farm safely, avoid "
                "unnecessary fights, and group for objectives after 2-3 items.",
                "Feeding early kills, taking risky 1v1s, or letting enemy snowball other lanes.",
            )
        if vector.scaling_diff < -20:
            return (
                f"Snowball early - {enemy_name} outscales you. Get kills in lane, roam "
                "aggressively, and force early objectives.",
                "Passive farming, letting game go late, or taking even trades.",
            )
        if vector.lane_dominance > 25:
            return (
                f"Dominate lane and spread your lead. Punish {enemy_name} early, deny CS, "
                "and roam with priority.",
                "Overextending without vision, or letting enemy farm back into the game.",
            )
        if vector.lane_dominance < -25:
            return (
                "Survive laning phase without falling too far behind. Call for jungle help, "
                "farm safely, and look for outplay opportunities.",
                f"Taking fights without a clear advantage, or standing in {enemy_name}'s kill range.",
            )
        return (
            "Win through superior mechanics and macro. Trade efficiently, roam at good "
            "timings, and play around your power spikes.",
            "Coinflip fights, wasting summoner spells, or ignoring map plays.",
        )
