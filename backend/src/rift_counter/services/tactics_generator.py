"""Phase-scoped lane tactics, power-spike timeline and ability warnings."""
from typing import Optional

from rift_counter.models.champion import Champion, RoleTag, SpikeType
from rift_counter.models.matchup import MatchupMetrics
from rift_counter.models.tactics import (
    AbilityWarning,
    PowerSpikeEntry,
    Tactic,
    TacticPhase,
    TacticStep,
)
from rift_counter.utils.numbers import safe_number

DOMINANCE_THRESHOLD = 20
SPIKE_ADVANTAGE_THRESHOLD = 0.7
HIGH_CC = 6
HIGH_BURST = 7

SPIKE_TYPE_ORDER = {
    SpikeType.LEVEL: 1,
    SpikeType.ITEM: 2,
    SpikeType.TIME: 3,
}

# Tag precedence when a champion carries several role tags
ROLE_TAG_PRECEDENCE = (
    RoleTag.ASSASSIN,
    RoleTag.MAGE,
    RoleTag.MARKSMAN,
    RoleTag.FIGHTER,
    RoleTag.TANK,
    RoleTag.SUPPORT,
)

# Late-game / teamfight advice per role tag: (steps, reasoning, lane strategy lines)
LATE_GAME_ROLE_ADVICE: dict[RoleTag, tuple[tuple[str, ...], str, tuple[str, ...]]] = {
    RoleTag.ASSASSIN: (
        ("Look for picks on isolated enemies", "Flank in teamfights"),
        "As assassin, eliminate priority targets.",
        (
            "Flank in teamfights for backline access",
            "Pick off isolated enemies before objectives",
            "Wait for key enemy cooldowns before engaging",
        ),
    ),
    RoleTag.MAGE: (
        ("Stay in backline, deal consistent damage", "Use abilities to zone from objectives"),
        "As mage, maximize damage while staying safe.",
        (
            "Stay with team - you are high priority target",
            "Use abilities to zone enemies from objectives",
            "Position behind frontline in fights",
        ),
    ),
    RoleTag.MARKSMAN: (
        ("Attack the closest safe target", "Stay behind your frontline"),
        "As marksman, sustained damage from safety wins fights.",
        (
            "Hit whatever is in range without stepping up",
            "Keep a summoner spell for the enemy divers",
            "Take side-lane farm only with vision",
        ),
    ),
    RoleTag.FIGHTER: (
        ("Threaten the backline from the side", "Split push when your team can hold"),
        "As fighter, pressure the map and dive carries.",
        (
            "Split push when your team can hold mid",
            "Dive carries once the frontline commits",
            "Group for baron and elder",
        ),
    ),
    RoleTag.TANK: (
        ("Engage on the enemy carries", "Peel for your carries after the engage"),
        "As tank, start fights and absorb damage.",
        (
            "Look for engage angles around objectives",
            "Peel for carries after the initial engage",
            "Hold vision in front of your team",
        ),
    ),
    RoleTag.SUPPORT: (
        ("Protect your carry", "Place deep vision before objectives"),
        "As support, enable your carries and control vision.",
        (
            "Sweep and place vision before objectives",
            "Stay with your carry in fights",
            "Save disengage for enemy divers",
        ),
    ),
}

GENERIC_LATE_ADVICE = (
    ("Group with team for objectives", "Play around key cooldowns"),
    "Focus on your teamfight role.",
    ("Group with team for objectives", "Play around your win condition"),
)


def primary_role_tag(champion: Champion) -> Optional[RoleTag]:
    tags = getattr(champion, "tags", frozenset()) or frozenset()
    for tag in ROLE_TAG_PRECEDENCE:
        if tag in tags:
            return tag
    return None


def late_game_advice(champion: Champion) -> tuple[tuple[str, ...], str, tuple[str, ...]]:
    tag = primary_role_tag(champion)
    if tag is None:
        return GENERIC_LATE_ADVICE
    return LATE_GAME_ROLE_ADVICE[tag]


def _name(champion: Champion) -> str:
    return champion.display_name or champion.name


class TacticsGenerator:
    """Rule tables turning lane metrics into early, mid and teamfight tactics.

    Every phase always yields at least one step: when no threshold is
    crossed the phase falls back to even-matchup advice.
    """

    def generate_tactics(
        self,
        challenger: Champion,
        opponent: Champion,
        metrics: MatchupMetrics,
    ) -> list[Tactic]:
        return [
            self._early_tactic(metrics),
            self._mid_tactic(metrics),
            self._teamfight_tactic(challenger, opponent),
        ]

    def _early_tactic(self, metrics: MatchupMetrics) -> Tactic:
        steps: list[TacticStep] = []
        if metrics.lane_dominance > DOMINANCE_THRESHOLD:
            steps.append(TacticStep("Trade aggressively at levels 1-2", timing="Levels 1-2"))
            steps.append(TacticStep("Push for level 2 first to establish pressure"))
            reasoning = "You have lane advantage - press it early"
        elif metrics.lane_dominance < -DOMINANCE_THRESHOLD:
            steps.append(TacticStep("Play safe and farm from range if possible", timing="Levels 1-3"))
            steps.append(TacticStep("Avoid extended trades"))
            reasoning = "Enemy has early pressure - survive to scale"
        else:
            reasoning = "Even matchup - farm well and trade efficiently"

        if metrics.poke_advantage > 20:
            steps.append(TacticStep("Use abilities to poke before engaging"))
        if metrics.gank_vulnerability > 60:
            steps.append(TacticStep(
                "Ward river by 2:30 - high gank vulnerability",
                timing="2:30",
            ))

        if not steps:
            steps = [
                TacticStep("Trade when your abilities are up and theirs are down"),
                TacticStep("Match the enemy push to avoid giving roam windows"),
            ]

        return Tactic(
            id="early-lane",
            title="Early Lane (Levels 1-5)",
            phase=TacticPhase.EARLY,
            steps=steps,
            reasoning=reasoning,
            priority=5,
        )

    def _mid_tactic(self, metrics: MatchupMetrics) -> Tactic:
        steps: list[TacticStep] = []
        if metrics.roam_advantage > 20:
            steps.append(TacticStep("Look for roam opportunities after pushing wave", timing="After first item"))
        if metrics.objective_control > 60:
            steps.append(TacticStep("Contest dragon/herald when your jungler is nearby"))
        if metrics.scale_comparison > 30:
            steps.append(TacticStep("Focus on farming - you outscale"))
        elif metrics.scale_comparison < -30:
            steps.append(TacticStep("Force plays before enemy scales"))

        reasoning = "Transition strategy based on power curves"
        if not steps:
            steps = [
                TacticStep("Look for roam opportunities when the wave is pushed"),
                TacticStep("Contest objectives with your team"),
            ]
            reasoning = "Even matchup - gain advantages through macro"

        return Tactic(
            id="mid-game",
            title="Mid Game (Levels 6-10)",
            phase=TacticPhase.MID,
            steps=steps,
            reasoning=reasoning,
            priority=4,
        )

    def _teamfight_tactic(self, challenger: Champion, opponent: Champion) -> Tactic:
        steps: list[TacticStep] = []
        if safe_number(challenger.cc) > HIGH_CC:
            steps.append(TacticStep("Look for key CC on priority targets"))
        if safe_number(challenger.burst) > HIGH_BURST:
            steps.append(TacticStep("Flank or wait for enemy to use key abilities before engaging"))
        if safe_number(opponent.burst) > HIGH_BURST:
            steps.append(TacticStep(f"Watch for {_name(opponent)}'s burst combo - don't get caught"))

        reasoning = "Maximize your champion's strengths in fights"
        if not steps:
            role_steps, reasoning, _ = late_game_advice(challenger)
            steps = [TacticStep(action) for action in role_steps]

        return Tactic(
            id="teamfight",
            title="Teamfighting",
            phase=TacticPhase.TEAMFIGHT,
            steps=steps,
            reasoning=reasoning,
            priority=3,
        )

    def generate_power_spikes(self, you: Champion, enemy: Champion) -> list[PowerSpikeEntry]:
        """Merge both champions' spikes into one timeline.

        Ordered level < item < time; level spikes by level number. Spikes
        stronger than 0.7 give the owning side the advantage.
        """
        entries: list[tuple[tuple[int, float], PowerSpikeEntry]] = []
        for owner, champion in (("you", you), ("enemy", enemy)):
            for spike in champion.power_spikes:
                is_level = spike.type == SpikeType.LEVEL
                description = spike.notes if owner == "you" else f"{_name(enemy)}: {spike.notes}"
                entry = PowerSpikeEntry(
                    time=f"Level {spike.value}" if is_level else str(spike.value),
                    type=spike.type.value,
                    champion=owner,
                    description=description,
                    advantage=owner if spike.strength > SPIKE_ADVANTAGE_THRESHOLD else "neutral",
                )
                level = safe_number(spike.value) if is_level else 0.0
                entries.append(((SPIKE_TYPE_ORDER[spike.type], level), entry))

        entries.sort(key=lambda pair: pair[0])
        return [entry for _, entry in entries]

    def generate_ability_warnings(self, enemy: Champion) -> list[AbilityWarning]:
        warnings = []
        ultimate = enemy.abilities.ultimate
        if ultimate is not None:
            warnings.append(AbilityWarning(
                champion_id=enemy.id,
                ability="Ultimate",
                warning=ultimate.description or ultimate.name,
                counterplay="Track cooldown and play safe when available",
            ))
        if safe_number(enemy.cc) > HIGH_CC:
            warnings.append(AbilityWarning(
                champion_id=enemy.id,
                ability="CC Abilities",
                warning=f"{_name(enemy)} has strong CC - avoid getting caught",
                counterplay="Position carefully and consider Mercury Treads or QSS",
            ))
        return warnings
