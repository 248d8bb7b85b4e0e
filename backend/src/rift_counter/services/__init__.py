"""Business logic services."""

from rift_counter.services.analysis_cache import AnalysisCache, analysis_fingerprint
from rift_counter.services.analysis_service import AnalysisService
from rift_counter.services.build_aggregator import BuildAggregator, detect_threats
from rift_counter.services.counter_pick_ranker import CounterPickRanker

__all__ = [
    "AnalysisCache",
    "analysis_fingerprint",
    "AnalysisService",
    "BuildAggregator",
    "detect_threats",
    "CounterPickRanker",
]
