"""Tactical advice models and per-champion capability records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_counter.utils.numbers import safe_number


class TacticPhase(str, Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"
    TEAMFIGHT = "teamfight"


@dataclass
class TacticStep:
    action: str
    timing: Optional[str] = None
    condition: Optional[str] = None


@dataclass
class Tactic:
    """Phase-scoped list of actions with a one-line rationale."""

    id: str
    title: str
    phase: TacticPhase
    steps: list[TacticStep]
    reasoning: str
    priority: int  # 1-5, higher = more important
    confidence: Optional[int] = None


@dataclass
class SkillCombo:
    name: str
    sequence: str
    description: str
    timing: str = ""
    difficulty: str = "medium"  # easy / medium / hard
    damage: str = "medium"  # low / medium / high / lethal


@dataclass
class PowerSpikeEntry:
    time: str  # "Level 6", "Infinity Edge", "14:00"
    type: str  # level / item / time
    champion: str  # "you" or "enemy"
    description: str
    advantage: str  # "you", "enemy" or "neutral"


@dataclass
class AbilityWarning:
    champion_id: str
    ability: str
    warning: str
    counterplay: str


@dataclass
class AbilityWindowTactic:
    """A trade window opened by an enemy ability going on cooldown."""

    trigger: str
    window: str
    action: str
    risk: str  # low / medium / high
    phase: str  # early / mid / late / all


@dataclass
class ConditionalTactic:
    condition: str
    action: str
    priority: str  # must / should / consider
    phase: str  # early / mid / late / all
    icon: Optional[str] = None  # warning / info / tip


@dataclass
class MicroTip:
    tip: str
    category: str  # trading / farming / positioning / vision / objective
    timing: Optional[str] = None


@dataclass
class LaneStrategy:
    early: list[str] = field(default_factory=list)
    mid: list[str] = field(default_factory=list)
    late: list[str] = field(default_factory=list)


@dataclass
class TacticalBreakdown:
    """Player-centric plan built from a MatchupVector."""

    stage_tactics: list[Tactic]
    ability_windows: list[AbilityWindowTactic]
    conditional_tactics: list[ConditionalTactic]
    micro_tips: list[MicroTip]
    lane_strategy: LaneStrategy
    win_condition: str
    avoid_condition: str


@dataclass(frozen=True)
class KeyAbility:
    """An ability worth tracking the cooldown of."""

    ability: str  # Q / W / E / R
    name: str
    cooldown: float
    is_escape: bool = False
    is_engage_key: bool = False
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "KeyAbility":
        return cls(
            ability=str(data.get("ability", "")).upper(),
            name=str(data.get("name", "")),
            cooldown=safe_number(data.get("cooldown")),
            is_escape=bool(data.get("is_escape", False)),
            is_engage_key=bool(data.get("is_engage_key", False)),
            description=str(data.get("description", "") or ""),
        )


@dataclass(frozen=True)
class ChampionCapability:
    """Champion-specific combo, key-ability and tip data."""

    champion_id: str
    combos: tuple[SkillCombo, ...] = ()
    key_abilities: tuple[KeyAbility, ...] = ()
    micro_tips: tuple[MicroTip, ...] = ()

    @classmethod
    def from_dict(cls, champion_id: str, data: dict) -> "ChampionCapability":
        combos = []
        for combo in data.get("combos") or []:
            combos.append(SkillCombo(
                name=str(combo.get("name", "")),
                sequence=str(combo.get("sequence", "")),
                description=str(combo.get("description", combo.get("notes", "")) or ""),
                timing=str(combo.get("timing", "") or ""),
                difficulty=str(combo.get("difficulty", "medium")),
                damage=str(combo.get("damage", "medium")),
            ))
        tips = [
            MicroTip(tip=str(t.get("tip", "")), category=str(t.get("category", "trading")), timing=t.get("timing"))
            for t in data.get("micro_tips") or []
        ]
        return cls(
            champion_id=champion_id.lower(),
            combos=tuple(combos),
            key_abilities=tuple(KeyAbility.from_dict(a) for a in data.get("key_abilities") or []),
            micro_tips=tuple(tips),
        )
