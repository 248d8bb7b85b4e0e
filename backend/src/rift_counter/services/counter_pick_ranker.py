"""Ranks lane counter picks against a single opponent."""
import logging
from typing import Optional

from rift_counter.models.analysis import DataContext
from rift_counter.models.champion import Champion, DataSource, Lane
from rift_counter.models.matchup import CounterPick, MatchupMetrics
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.matchup_metrics import MatchupMetricsCalculator
from rift_counter.utils.numbers import clamp, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
MAX_LIMIT = 10

SCORE_WEIGHTS = {
    "lane_dominance": 0.35,
    "kill_potential": 0.25,
    "poke_advantage": 0.15,
    "scale_comparison": 0.15,  # absolute value
    "gank_safety": 0.10,  # 100 - gank_vulnerability
}

# (metric, threshold, phrase) in the order phrases are considered
REASON_RULES = (
    ("lane_dominance", 30, "strong lane presence"),
    ("kill_potential", 60, "high kill potential"),
    ("poke_advantage", 20, "effective poke"),
    ("scale_comparison", 30, "outscales in late game"),
    ("waveclear_diff", 30, "superior waveclear"),
)
MAX_REASONS = 2
DEFAULT_REASON = "favorable matchup overall"

ANALYSIS_SOURCE_NAME = "RiftCounter Analysis"
ANALYSIS_SOURCE_RELIABILITY = 75


def composite_score(metrics: MatchupMetrics) -> float:
    """Weighted counter score; higher is a better counter."""
    return (
        metrics.lane_dominance * SCORE_WEIGHTS["lane_dominance"]
        + metrics.kill_potential * SCORE_WEIGHTS["kill_potential"]
        + metrics.poke_advantage * SCORE_WEIGHTS["poke_advantage"]
        + abs(metrics.scale_comparison) * SCORE_WEIGHTS["scale_comparison"]
        + (100 - metrics.gank_vulnerability) * SCORE_WEIGHTS["gank_safety"]
    )


def counter_confidence(score: float) -> int:
    return int(clamp(round_half_up(50 + score * 0.3), 40, 95))


def difficulty_for_score(score: float) -> str:
    if score > 70:
        return "easy"
    if score > 50:
        return "medium"
    return "hard"


def counter_reason(counter: Champion, opponent: Champion, metrics: MatchupMetrics) -> str:
    reasons = [
        phrase
        for metric, threshold, phrase in REASON_RULES
        if getattr(metrics, metric) > threshold
    ][:MAX_REASONS]
    if not reasons:
        reasons = [DEFAULT_REASON]
    counter_name = counter.display_name or counter.name
    opponent_name = opponent.display_name or opponent.name
    return f"{counter_name} has {' and '.join(reasons)} against {opponent_name}"


class CounterPickRanker:
    """Scores every lane-eligible champion against an opponent and keeps the best."""

    def __init__(
        self,
        store: KnowledgeStore,
        metrics_calculator: Optional[MatchupMetricsCalculator] = None,
        max_limit: int = MAX_LIMIT,
    ):
        self.store = store
        self.max_limit = max_limit
        self.metrics_calculator = metrics_calculator or MatchupMetricsCalculator(
            store.get_stored_matchup
        )

    def get_counter_picks(
        self,
        opponent_id: str,
        lane: Lane,
        context: DataContext,
        limit: int = DEFAULT_LIMIT,
    ) -> list[CounterPick]:
        """Return up to ``limit`` counters (capped at ``max_limit``), best first.

        Unknown opponents and lanes without other candidates yield an empty list.
        """
        opponent = self.store.get_champion_by_id(opponent_id)
        if opponent is None:
            logger.debug(f"No counters: unknown opponent {opponent_id}")
            return []

        limit = max(1, min(int(limit or DEFAULT_LIMIT), self.max_limit))

        scored: list[tuple[Champion, float, MatchupMetrics]] = []
        for candidate in self.store.get_champions_by_lane(lane):
            if candidate.id == opponent.id:
                continue
            metrics = self.metrics_calculator.compute_metrics(candidate, opponent, lane)
            scored.append((candidate, composite_score(metrics), metrics))

        # list.sort is stable: equal scores keep lane-roster order
        scored.sort(key=lambda entry: entry[1], reverse=True)

        provenance = DataSource(
            name=ANALYSIS_SOURCE_NAME,
            url="",
            fetched=context.now,
            reliability=ANALYSIS_SOURCE_RELIABILITY,
        )
        return [
            CounterPick(
                champion=candidate.summary(),
                reason=counter_reason(candidate, opponent, metrics),
                confidence=counter_confidence(score),
                score=round(score, 2),
                difficulty=difficulty_for_score(score),
                matchup_metrics=metrics,
                sources=[provenance],
            )
            for candidate, score, metrics in scored[:limit]
        ]
