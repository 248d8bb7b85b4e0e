"""Orchestrates one analysis request into an AnalysisResponse."""
import logging
from dataclasses import asdict
from typing import Optional

from rift_counter.models.analysis import AnalysisOptions, AnalysisResponse, DataContext
from rift_counter.models.champion import Champion, Lane
from rift_counter.models.item import SituationalSwap
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.analysis_cache import AnalysisCache, analysis_fingerprint, analysis_key
from rift_counter.services.build_aggregator import BuildAggregator
from rift_counter.services.combo_generator import ComboGenerator
from rift_counter.services.counter_pick_ranker import CounterPickRanker
from rift_counter.services.scorers.confidence import compute_overall_confidence
from rift_counter.services.scorers.matchup_metrics import MatchupMetricsCalculator
from rift_counter.services.tactical_engine import TacticalEngine
from rift_counter.services.tactics_generator import TacticsGenerator
from rift_counter.utils.champion_normalizer import UnknownChampionError
from rift_counter.utils.lane_normalizer import normalize_lane_strict

logger = logging.getLogger(__name__)


def find_lane_enemy(enemies: list[Champion], lane: Lane) -> Optional[Champion]:
    """First enemy eligible for the lane, in input order."""
    return next((e for e in enemies if lane in e.lanes), None)


class AnalysisService:
    """Runs the full pipeline: normalize, rank counters, tactics, builds, confidence.

    Raises InvalidLaneError / UnknownChampionError for unresolvable input;
    everything downstream degrades to empty lists instead of raising.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        cache: Optional[AnalysisCache] = None,
        cache_ttl: int = 1800,
        default_counter_limit: int = 5,
        max_counter_limit: int = 10,
    ):
        self.store = store
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.default_counter_limit = default_counter_limit
        self.metrics_calculator = MatchupMetricsCalculator(store.get_stored_matchup)
        self.ranker = CounterPickRanker(
            store, self.metrics_calculator, max_limit=max_counter_limit
        )
        self.tactics_generator = TacticsGenerator()
        self.combo_generator = ComboGenerator(store)
        self.tactical_engine = TacticalEngine(store)
        self.build_aggregator = BuildAggregator(store)

    def resolve_enemies(self, enemies: list[str]) -> list[str]:
        resolved, failed = [], []
        for raw in enemies:
            champion_id = self.store.resolve_champion(raw)
            if champion_id is None:
                failed.append(raw)
            else:
                resolved.append(champion_id)
        if failed:
            raise UnknownChampionError(failed)
        return resolved

    def resolve_own_champion(self, your_champion: Optional[str]) -> Optional[str]:
        if not your_champion:
            return None
        champion_id = self.store.resolve_champion(your_champion)
        if champion_id is None:
            raise UnknownChampionError([your_champion], code="UNKNOWN_CHAMPION")
        return champion_id

    def analyze(
        self,
        enemies: list[str],
        lane: str,
        context: DataContext,
        your_champion: Optional[str] = None,
        options: Optional[AnalysisOptions] = None,
    ) -> AnalysisResponse:
        options = options or AnalysisOptions()
        normalized_lane = normalize_lane_strict(lane)
        enemy_ids = self.resolve_enemies(enemies)
        own_id = self.resolve_own_champion(your_champion)

        key = analysis_key(
            analysis_fingerprint(enemy_ids, normalized_lane.value, own_id, asdict(options))
        )
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Analysis cache hit {key}")
                return cached

        response = self._compute(enemy_ids, normalized_lane, own_id, options, context)

        if self.cache is not None:
            self.cache.set(key, response, ttl=self.cache_ttl)
        return response

    def _compute(
        self,
        enemy_ids: list[str],
        lane: Lane,
        own_id: Optional[str],
        options: AnalysisOptions,
        context: DataContext,
    ) -> AnalysisResponse:
        enemy_champions = self.store.get_champions_by_ids(enemy_ids)
        lane_enemy = find_lane_enemy(enemy_champions, lane)
        own = self.store.get_champion_by_id(own_id)

        counters = []
        if lane_enemy is not None and (own is None or options.prefer_counters):
            limit = options.max_counters or self.default_counter_limit
            counters = self.ranker.get_counter_picks(lane_enemy.id, lane, context, limit=limit)

        # Advice is generated for the user's champion, or for the top counter
        subject = own
        if subject is None and counters:
            subject = self.store.get_champion_by_id(counters[0].champion.id)

        tactics, skill_combos, power_spikes, builds = [], [], [], []
        if subject is not None:
            skill_combos = self.combo_generator.generate_skill_combos(subject)
            builds = self.build_aggregator.generate_build_recommendations(
                subject.id, enemy_champions, lane, context
            )
            if lane_enemy is not None:
                metrics = self.metrics_calculator.compute_metrics(subject, lane_enemy, lane)
                tactics = self.tactics_generator.generate_tactics(subject, lane_enemy, metrics)
                power_spikes = self.tactics_generator.generate_power_spikes(subject, lane_enemy)

        matchup_vector = None
        tactical_breakdown = None
        suggested_swaps: list[SituationalSwap] = []
        if own is not None:
            base_builds = self.build_aggregator.get_champion_builds(own.id)
            base_items = list(base_builds[0].items) if base_builds else []
            suggested_swaps = self.build_aggregator.suggest_situational_swaps(
                own, enemy_champions, base_items
            )
            if lane_enemy is not None:
                matchup_vector = self.tactical_engine.compute_vector(own, lane_enemy)
                tactical_breakdown = self.tactical_engine.build_breakdown(own, lane_enemy, matchup_vector)

        ability_warnings = []
        for enemy in enemy_champions:
            ability_warnings.extend(self.tactics_generator.generate_ability_warnings(enemy))

        freshness = context.freshness
        confidence = compute_overall_confidence(
            [c.confidence for c in counters],
            [b.confidence for b in builds],
            freshness.uncertainty,
        )

        logger.debug(
            f"Analyzed {enemy_ids} in {lane.value}: lane_enemy={lane_enemy.id if lane_enemy else None} "
            f"counters={len(counters)} builds={len(builds)} confidence={confidence}"
        )

        return AnalysisResponse(
            normalized_enemies=[c.summary() for c in enemy_champions],
            lane=lane.value,
            lane_enemy=lane_enemy.summary() if lane_enemy else None,
            counters=counters,
            tactics=tactics,
            builds=builds,
            skill_combos=skill_combos,
            power_spikes=power_spikes,
            ability_warnings=ability_warnings,
            confidence=confidence,
            uncertainty=freshness.uncertainty,
            uncertainty_reason=freshness.reason,
            sources=list(context.sources),
            last_refreshed=context.now.isoformat(),
            patch_version=context.patch_version,
            your_champion=own.summary() if own else None,
            matchup_vector=matchup_vector,
            tactical_breakdown=tactical_breakdown,
            suggested_swaps=suggested_swaps,
        )
