"""Confidence and freshness blending.

Build confidence is a fixed linear blend of source agreement, data recency
and source trust. Overall response confidence folds counter and build
confidences into a running base, then discounts it by data uncertainty.
"""
from datetime import datetime
from typing import Iterable, Optional

from rift_counter.models.analysis import Uncertainty
from rift_counter.models.champion import DataSource
from rift_counter.utils.numbers import clamp, round_half_up, safe_number

DEFAULT_SOURCE_WEIGHT = 0.5
NO_DATA_RECENCY_WEIGHT = 0.3

# (max age in days, exclusive) -> weight
RECENCY_BUCKETS = (
    (7, 1.0),
    (14, 0.9),
    (30, 0.7),
    (60, 0.5),
)

OVERALL_BASE_CONFIDENCE = 70.0
OVERALL_MIN_CONFIDENCE = 30
OVERALL_MAX_CONFIDENCE = 95

UNCERTAINTY_PENALTY = {
    Uncertainty.LOW: 1.0,
    Uncertainty.MEDIUM: 0.85,
    Uncertainty.HIGH: 0.7,
}


def calculate_build_confidence(
    source_agreement: float,
    recency_weight: float,
    avg_source_weight: float,
) -> int:
    """Blend the three signals (each nominally 0-1) into a 0-100 confidence.

    Examples:
        >>> calculate_build_confidence(1, 1, 1)
        100
        >>> calculate_build_confidence(0.5, 0.5, 0.5)
        50
        >>> calculate_build_confidence(1.5, 1.5, 1.5)
        100
    """
    raw = (
        40 * safe_number(source_agreement)
        + 30 * safe_number(recency_weight)
        + 30 * safe_number(avg_source_weight)
    )
    return int(clamp(round_half_up(raw), 0, 100))


def recency_weight_for_age(age_days: float) -> float:
    """Map data age in days to a recency weight. Boundaries fall to the lower bucket."""
    age_days = safe_number(age_days)
    for max_age, weight in RECENCY_BUCKETS:
        if age_days < max_age:
            return weight
    return NO_DATA_RECENCY_WEIGHT


def get_recency_weight(last_updated: Optional[datetime], now: datetime) -> float:
    if last_updated is None:
        return NO_DATA_RECENCY_WEIGHT
    age_days = (now - last_updated).total_seconds() / 86400
    return recency_weight_for_age(age_days)


def freshest_fetch(sources: Iterable[DataSource]) -> Optional[datetime]:
    fetched = [s.fetched for s in sources if s.fetched is not None]
    return max(fetched) if fetched else None


def average_source_weight(
    sources: Iterable[DataSource],
    weights: dict[str, float],
) -> float:
    """Mean configured weight of the contributing sources.

    Sources without a configured weight count as 0.5; no sources at all
    also yields 0.5.
    """
    values = [
        safe_number(weights.get(source.name, DEFAULT_SOURCE_WEIGHT))
        for source in sources
    ]
    if not values:
        return DEFAULT_SOURCE_WEIGHT
    return sum(values) / len(values)


def compute_overall_confidence(
    counter_confidences: Iterable[float],
    build_confidences: Iterable[float],
    uncertainty: Uncertainty,
) -> int:
    """Fold counter and build confidences into one 30-95 integer."""
    confidence = OVERALL_BASE_CONFIDENCE

    counter_confidences = [safe_number(c) for c in counter_confidences]
    if counter_confidences:
        avg = sum(counter_confidences) / len(counter_confidences)
        confidence = (confidence + avg) / 2

    build_confidences = [safe_number(c) for c in build_confidences]
    if build_confidences:
        avg = sum(build_confidences) / len(build_confidences)
        confidence = (confidence + avg) / 2

    confidence *= UNCERTAINTY_PENALTY.get(uncertainty, 1.0)

    return round_half_up(clamp(confidence, OVERALL_MIN_CONFIDENCE, OVERALL_MAX_CONFIDENCE))
