"""Data models for the matchup and build recommendation engine."""

from rift_counter.models.champion import (
    AbilityInfo,
    AbilitySummary,
    BaseStats,
    Champion,
    ChampionSummary,
    DamageProfile,
    DataSource,
    Lane,
    PowerSpike,
    RangeType,
    RoleTag,
    SpikeType,
)
from rift_counter.models.item import (
    Build,
    BuildRecommendation,
    BuildType,
    EmblemPage,
    Item,
    RecommendationType,
    SituationalSwap,
    ThreatTag,
)
from rift_counter.models.matchup import (
    CounterPick,
    MatchupFactors,
    MatchupMetrics,
    MatchupVector,
    StoredMatchup,
)
from rift_counter.models.analysis import (
    AnalysisOptions,
    AnalysisResponse,
    DataContext,
    DataFreshness,
    Uncertainty,
)

__all__ = [
    "AbilityInfo",
    "AbilitySummary",
    "BaseStats",
    "Champion",
    "ChampionSummary",
    "DamageProfile",
    "DataSource",
    "Lane",
    "PowerSpike",
    "RangeType",
    "RoleTag",
    "SpikeType",
    "Build",
    "BuildRecommendation",
    "BuildType",
    "EmblemPage",
    "Item",
    "RecommendationType",
    "SituationalSwap",
    "ThreatTag",
    "CounterPick",
    "MatchupFactors",
    "MatchupMetrics",
    "MatchupVector",
    "StoredMatchup",
    "AnalysisOptions",
    "AnalysisResponse",
    "DataContext",
    "DataFreshness",
    "Uncertainty",
]
