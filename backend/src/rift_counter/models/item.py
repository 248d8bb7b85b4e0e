"""Item, build and build-recommendation models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rift_counter.models.champion import DataSource
from rift_counter.utils.numbers import clamp, safe_number


class ThreatTag(str, Enum):
    """Enemy-team threats that trigger item and boots substitutions."""

    HEAVY_AD = "heavyAD"
    HEAVY_AP = "heavyAP"
    HEAVY_HEAL = "heavyHeal"
    HEAVY_CC = "heavyCC"
    HEAVY_CRIT = "heavyCrit"
    MOBILE_THREAT = "mobileThreat"
    TANK_HEAVY = "tankHeavy"
    BURST_THREAT = "burstThreat"
    POKE_HEAVY = "pokeHeavy"

    @classmethod
    def parse(cls, value: str) -> Optional["ThreatTag"]:
        """Resolve a raw trigger string (case-insensitive); None if unknown."""
        if isinstance(value, cls):
            return value
        lowered = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


class BuildType(str, Enum):
    DEFAULT = "default"
    SITUATIONAL = "situational"
    OFF_META = "off-meta"


class RecommendationType(str, Enum):
    DEFAULT = "default"
    SITUATIONAL = "situational"
    COUNTER = "counter"


@dataclass(frozen=True)
class Item:
    """Static item record."""

    id: str
    name: str
    cost: int = 0
    stats: dict[str, float] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    description: str = ""
    passive: Optional[str] = None
    active: Optional[str] = None
    build_path: tuple[str, ...] = ()
    builds_into: tuple[str, ...] = ()
    situational_against: frozenset[ThreatTag] = frozenset()

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        triggers = (ThreatTag.parse(t) for t in data.get("situational_against", data.get("situationalAgainst")) or [])
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name", data.get("id", ""))),
            cost=int(safe_number(data.get("cost"))),
            stats={str(k): safe_number(v) for k, v in (data.get("stats") or {}).items()},
            tags=tuple(str(t) for t in data.get("tags") or []),
            description=str(data.get("description", "") or ""),
            passive=data.get("passive"),
            active=data.get("active"),
            build_path=tuple(data.get("build_path", data.get("buildPath")) or []),
            builds_into=tuple(data.get("builds_into", data.get("buildsInto")) or []),
            situational_against=frozenset(t for t in triggers if t is not None),
        )


@dataclass(frozen=True)
class EmblemPage:
    """Rune page: one keystone plus primary and secondary sets."""

    keystone: str = ""
    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EmblemPage":
        data = data or {}
        return cls(
            keystone=str(data.get("keystone", "")),
            primary=tuple(data.get("primary") or []),
            secondary=tuple(data.get("secondary") or []),
        )


@dataclass(frozen=True)
class SituationalSwap:
    """Replace original_item with swap_item when trigger is among detected threats."""

    original_item: str
    swap_item: str
    trigger: ThreatTag
    reason: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Optional["SituationalSwap"]:
        trigger = ThreatTag.parse(data.get("trigger", ""))
        if trigger is None:
            return None
        return cls(
            original_item=str(data.get("original_item", data.get("originalItem", ""))),
            swap_item=str(data.get("swap_item", data.get("swapItem", ""))),
            trigger=trigger,
            reason=str(data.get("reason", "") or ""),
        )


@dataclass(frozen=True)
class Build:
    """Stored build template for one champion."""

    id: str
    champion_id: str
    name: str
    type: BuildType = BuildType.DEFAULT
    playstyle: str = ""
    items: tuple[str, ...] = ()
    boots: str = ""
    emblems: EmblemPage = field(default_factory=EmblemPage)
    situational_swaps: tuple[SituationalSwap, ...] = ()
    skill_order: str = ""
    notes: str = ""
    confidence: float = 0.0  # 0-100
    sources: tuple[DataSource, ...] = ()
    meta_weight: float = 0.0  # 0-1

    @classmethod
    def from_dict(cls, data: dict) -> "Build":
        try:
            build_type = BuildType(str(data.get("type", "default")).lower())
        except ValueError:
            build_type = BuildType.OFF_META
        swaps = (
            SituationalSwap.from_dict(s)
            for s in data.get("situational_swaps", data.get("situationalSwaps")) or []
        )
        return cls(
            id=str(data.get("id", "")),
            champion_id=str(data.get("champion_id") or data.get("championId") or "").lower(),
            name=str(data.get("name", "")),
            type=build_type,
            playstyle=str(data.get("playstyle", "") or ""),
            items=tuple(data.get("items") or []),
            boots=str(data.get("boots", "") or ""),
            emblems=EmblemPage.from_dict(data.get("emblems")),
            situational_swaps=tuple(s for s in swaps if s is not None),
            skill_order=str(data.get("skill_order", data.get("skillOrder", "")) or ""),
            notes=str(data.get("notes", "") or ""),
            confidence=clamp(safe_number(data.get("confidence")), 0, 100),
            sources=tuple(DataSource.from_dict(s) for s in data.get("sources") or []),
            meta_weight=clamp(safe_number(data.get("meta_weight", data.get("metaWeight"))), 0, 1),
        )


@dataclass
class BuildRecommendation:
    """One recommended build variant returned to the caller."""

    type: RecommendationType
    build_id: str
    items: list[str]
    boots: str
    emblems: EmblemPage
    confidence: int  # 0-100
    reasoning: str
    sources: list[DataSource] = field(default_factory=list)
    swaps_applied: list[SituationalSwap] = field(default_factory=list)
    skill_order: str = ""
