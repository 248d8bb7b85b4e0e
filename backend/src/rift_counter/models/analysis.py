"""Analysis context and response models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from rift_counter.models.champion import ChampionSummary, DataSource
from rift_counter.models.item import BuildRecommendation, SituationalSwap
from rift_counter.models.matchup import CounterPick, MatchupVector
from rift_counter.models.tactics import (
    AbilityWarning,
    PowerSpikeEntry,
    SkillCombo,
    Tactic,
    TacticalBreakdown,
)


class Uncertainty(str, Enum):
    """Coarse label for how stale or contested the underlying data is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class DataFreshness:
    uncertainty: Uncertainty
    patch_version: str
    reason: Optional[str] = None
    data_freshness: str = "fresh"  # fresh / stale / outdated
    patch_date: Optional[str] = None


@dataclass(frozen=True)
class DataContext:
    """Everything about data trust that a computation may depend on.

    Built once per request and passed down explicitly; engine code never
    reads source status, patch info or the clock from anywhere else.
    """

    freshness: DataFreshness
    reliability_weights: dict[str, float]
    patch_version: str
    now: datetime
    sources: tuple[DataSource, ...] = ()


@dataclass
class AnalysisOptions:
    prefer_counters: bool = False
    max_counters: Optional[int] = None


@dataclass
class AnalysisResponse:
    """Complete analysis payload handed to the presentation layer."""

    normalized_enemies: list[ChampionSummary]
    lane: str
    lane_enemy: Optional[ChampionSummary]
    counters: list[CounterPick]
    tactics: list[Tactic]
    builds: list[BuildRecommendation]
    skill_combos: list[SkillCombo]
    power_spikes: list[PowerSpikeEntry]
    ability_warnings: list[AbilityWarning]
    confidence: int
    uncertainty: Uncertainty
    uncertainty_reason: Optional[str]
    sources: list[DataSource]
    last_refreshed: str  # ISO timestamp
    patch_version: Optional[str] = None
    your_champion: Optional[ChampionSummary] = None
    matchup_vector: Optional[MatchupVector] = None
    tactical_breakdown: Optional[TacticalBreakdown] = None
    suggested_swaps: list[SituationalSwap] = field(default_factory=list)
