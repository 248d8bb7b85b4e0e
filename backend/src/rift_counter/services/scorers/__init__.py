"""Core scoring components for the recommendation engine."""
from rift_counter.services.scorers.matchup_metrics import (
    STORED_RANGE_BLEND_WEIGHT,
    MatchupMetricsCalculator,
    merge_stored_metrics,
)
from rift_counter.services.scorers.matchup_vector import MatchupVectorCalculator
from rift_counter.services.scorers.confidence import (
    average_source_weight,
    calculate_build_confidence,
    compute_overall_confidence,
    get_recency_weight,
    recency_weight_for_age,
)

__all__ = [
    "STORED_RANGE_BLEND_WEIGHT",
    "MatchupMetricsCalculator",
    "merge_stored_metrics",
    "MatchupVectorCalculator",
    "average_source_weight",
    "calculate_build_confidence",
    "compute_overall_confidence",
    "get_recency_weight",
    "recency_weight_for_age",
]
