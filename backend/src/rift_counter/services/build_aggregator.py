"""Build aggregation: threat detection, situational swaps and build variants."""
import logging
from typing import Optional

from rift_counter.models.analysis import DataContext
from rift_counter.models.champion import Champion, Lane, RoleTag
from rift_counter.models.item import (
    Build,
    BuildRecommendation,
    BuildType,
    RecommendationType,
    SituationalSwap,
    ThreatTag,
)
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.confidence import (
    average_source_weight,
    calculate_build_confidence,
    freshest_fetch,
    get_recency_weight,
)
from rift_counter.utils.numbers import clamp, round_half_up, safe_number

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3
COUNTER_MIN_THREATS = 2
SITUATIONAL_CONFIDENCE_BONUS = 5
RELEVANT_SWAP_AGREEMENT_BONUS = 0.02
SINGLE_SOURCE_CORROBORATION = 0.9
MULTI_SOURCE_CORROBORATION = 1.0

THREAT_DESCRIPTIONS: dict[ThreatTag, str] = {
    ThreatTag.HEAVY_AD: "heavy physical damage",
    ThreatTag.HEAVY_AP: "heavy magic damage",
    ThreatTag.HEAVY_HEAL: "high healing and sustain",
    ThreatTag.HEAVY_CC: "lots of crowd control",
    ThreatTag.HEAVY_CRIT: "multiple crit-based carries",
    ThreatTag.MOBILE_THREAT: "highly mobile threats",
    ThreatTag.TANK_HEAVY: "multiple tanks",
    ThreatTag.BURST_THREAT: "high burst damage",
    ThreatTag.POKE_HEAVY: "long-range poke",
}

# First matching threat picks the boots
BOOTS_PRIORITY: tuple[tuple[ThreatTag, str], ...] = (
    (ThreatTag.HEAVY_CC, "mercury-treads"),
    (ThreatTag.HEAVY_AD, "plated-steelcaps"),
    (ThreatTag.MOBILE_THREAT, "boots-of-swiftness"),
)

# Team-composition swap suggestions: trigger -> (mage-side item, other item)
COMPOSITION_SWAP_ITEMS: dict[ThreatTag, tuple[str, str]] = {
    ThreatTag.HEAVY_AD: ("zhonyas-hourglass", "plated-steelcaps"),
    ThreatTag.HEAVY_AP: ("banshees-veil", "mercury-treads"),
    ThreatTag.MOBILE_THREAT: ("zhonyas-hourglass", "guardian-angel"),
    ThreatTag.HEAVY_HEAL: ("morellonomicon", "mortal-reminder"),
}
COMPOSITION_SHARE_THRESHOLD = 60
MOBILE_ASSASSIN_MOBILITY = 7
HEALER_SUSTAIN = 7


def detect_threats(enemies: list[Champion]) -> list[ThreatTag]:
    """Derive roster-level threat tags from the enemy champions.

    Damage threats use the mean per-champion physical/magic share; the rest
    are head counts. An empty roster has no threats.
    """
    if not enemies:
        return []

    physical_share = sum(e.damage_profile.physical_share for e in enemies) / len(enemies)
    magic_share = sum(e.damage_profile.magic_share for e in enemies) / len(enemies)

    healers = sum(1 for e in enemies if safe_number(e.sustain) > 6)
    cc_heavy = sum(1 for e in enemies if safe_number(e.cc) > 6)
    mobile = sum(1 for e in enemies if safe_number(e.mobility) > 7)
    tanks = sum(1 for e in enemies if e.has_tag(RoleTag.TANK))
    bursty = sum(1 for e in enemies if safe_number(e.burst) > 7)
    pokers = sum(1 for e in enemies if e.is_ranged and e.has_tag(RoleTag.MAGE))
    crit = sum(1 for e in enemies if e.has_tag(RoleTag.MARKSMAN))

    checks = (
        (ThreatTag.HEAVY_AD, physical_share > 0.7),
        (ThreatTag.HEAVY_AP, magic_share > 0.6),
        (ThreatTag.HEAVY_HEAL, healers >= 2),
        (ThreatTag.HEAVY_CC, cc_heavy >= 3),
        (ThreatTag.MOBILE_THREAT, mobile >= 2),
        (ThreatTag.TANK_HEAVY, tanks >= 2),
        (ThreatTag.BURST_THREAT, bursty >= 2),
        (ThreatTag.POKE_HEAVY, pokers >= 2),
        (ThreatTag.HEAVY_CRIT, crit >= 2),
    )
    return [tag for tag, triggered in checks if triggered]


def apply_situational_swaps(
    build: Build, threats: list[ThreatTag]
) -> tuple[list[str], list[SituationalSwap]]:
    """Apply every swap whose trigger is present and whose original item is in the build."""
    items = list(build.items)
    applied = []
    for swap in build.situational_swaps:
        if swap.trigger not in threats:
            continue
        if swap.original_item in items:
            items[items.index(swap.original_item)] = swap.swap_item
            applied.append(swap)
    return items, applied


def determine_boots(threats: list[ThreatTag], default_boots: str) -> str:
    for trigger, boots in BOOTS_PRIORITY:
        if trigger in threats:
            return boots
    return default_boots


def describe_threats(threats: list[ThreatTag]) -> str:
    return ", ".join(THREAT_DESCRIPTIONS[t] for t in threats)


class BuildAggregator:
    """Turns stored build templates into confidence-ranked recommendations."""

    def __init__(self, store: Optional[KnowledgeStore] = None):
        self.store = store or KnowledgeStore()

    def get_champion_builds(self, champion_id: str) -> list[Build]:
        """All builds for a champion, highest base confidence first."""
        builds = self.store.get_builds_for_champion(champion_id)
        builds.sort(key=lambda b: b.confidence, reverse=True)
        return builds

    def compute_variant_confidence(
        self,
        build: Build,
        threats: list[ThreatTag],
        context: DataContext,
        bonus: float = 0,
    ) -> int:
        """Confidence for one variant built from ``build``.

        Source agreement scales the template's base confidence by its meta
        weight and how many distinct sources back it, plus a small bump per
        swap relevant to the detected threats.
        """
        distinct_sources = {s.name for s in build.sources}
        corroboration = (
            MULTI_SOURCE_CORROBORATION if len(distinct_sources) >= 2 else SINGLE_SOURCE_CORROBORATION
        )
        relevant_swaps = sum(1 for s in build.situational_swaps if s.trigger in threats)
        source_agreement = (
            build.confidence / 100 * (0.7 + 0.3 * build.meta_weight) * corroboration
            + RELEVANT_SWAP_AGREEMENT_BONUS * relevant_swaps
        )
        recency = get_recency_weight(freshest_fetch(build.sources), context.now)
        avg_weight = average_source_weight(build.sources, context.reliability_weights)

        confidence = calculate_build_confidence(source_agreement, recency, avg_weight)
        return int(clamp(round_half_up(confidence + bonus), 0, 100))

    def generate_build_recommendations(
        self,
        champion_id: str,
        enemies: list[Champion],
        lane: Optional[Lane],
        context: DataContext,
    ) -> list[BuildRecommendation]:
        """Default, situational and counter variants, best first, at most three."""
        builds = self.get_champion_builds(champion_id)
        if not builds:
            logger.debug(f"No builds stored for {champion_id}")
            return []

        threats = detect_threats(enemies)
        logger.debug(f"Threats for {champion_id} ({lane}): {[t.value for t in threats]}")

        default_build = next((b for b in builds if b.type == BuildType.DEFAULT), builds[0])
        situational_build = next((b for b in builds if b.type == BuildType.SITUATIONAL), None)

        recommendations = [
            BuildRecommendation(
                type=RecommendationType.DEFAULT,
                build_id=default_build.id,
                items=list(default_build.items),
                boots=default_build.boots,
                emblems=default_build.emblems,
                confidence=self.compute_variant_confidence(default_build, threats, context),
                reasoning="Standard build for consistent performance",
                sources=list(default_build.sources),
                skill_order=default_build.skill_order,
            )
        ]

        if threats:
            items, applied = apply_situational_swaps(default_build, threats)
            if applied:
                template = situational_build or default_build
                recommendations.append(BuildRecommendation(
                    type=RecommendationType.SITUATIONAL,
                    build_id=default_build.id,
                    items=items,
                    boots=determine_boots(threats, template.boots),
                    emblems=template.emblems,
                    confidence=self.compute_variant_confidence(
                        template, threats, context, bonus=SITUATIONAL_CONFIDENCE_BONUS
                    ),
                    reasoning=f"Adjusted for enemy team: {describe_threats(threats)}",
                    sources=list(template.sources),
                    swaps_applied=applied,
                    skill_order=default_build.skill_order,
                ))

        if situational_build is not None and len(threats) >= COUNTER_MIN_THREATS:
            items, applied = apply_situational_swaps(situational_build, threats)
            recommendations.append(BuildRecommendation(
                type=RecommendationType.COUNTER,
                build_id=situational_build.id,
                items=items,
                boots=determine_boots(threats, situational_build.boots),
                emblems=situational_build.emblems,
                confidence=self.compute_variant_confidence(situational_build, threats, context),
                reasoning=f"Counter build for this team composition: {describe_threats(threats)}",
                sources=list(situational_build.sources),
                swaps_applied=applied,
                skill_order=situational_build.skill_order,
            ))

        recommendations.sort(key=lambda r: r.confidence, reverse=True)
        return recommendations[:MAX_RECOMMENDATIONS]

    def suggest_situational_swaps(
        self,
        player: Champion,
        enemies: list[Champion],
        base_items: list[str],
    ) -> list[SituationalSwap]:
        """Suggest last-slot swaps from the enemy team's damage mix and threats."""
        total_physical = sum(safe_number(e.damage_profile.physical) for e in enemies)
        total_magic = sum(safe_number(e.damage_profile.magic) for e in enemies)
        total = total_physical + total_magic
        ad_share = total_physical / total * 100 if total > 0 else 50
        ap_share = total_magic / total * 100 if total > 0 else 50

        last_slot = base_items[-1] if base_items else "Last slot"
        mage_side = player.damage_profile.magic_share > 0.5

        def swap(trigger: ThreatTag, reason: str) -> SituationalSwap:
            mage_item, other_item = COMPOSITION_SWAP_ITEMS[trigger]
            return SituationalSwap(
                original_item=last_slot,
                swap_item=mage_item if mage_side else other_item,
                trigger=trigger,
                reason=reason,
            )

        swaps = []
        if ad_share >= COMPOSITION_SHARE_THRESHOLD:
            swaps.append(swap(
                ThreatTag.HEAVY_AD,
                f"Enemy team is {round_half_up(ad_share)}% AD - build armor early",
            ))
        if ap_share >= COMPOSITION_SHARE_THRESHOLD:
            swaps.append(swap(
                ThreatTag.HEAVY_AP,
                f"Enemy team is {round_half_up(ap_share)}% AP - build magic resist",
            ))

        assassins = [
            e for e in enemies
            if e.has_tag(RoleTag.ASSASSIN) and safe_number(e.mobility) >= MOBILE_ASSASSIN_MOBILITY
        ]
        if assassins:
            name = assassins[0].display_name or assassins[0].name
            swaps.append(swap(ThreatTag.MOBILE_THREAT, f"{name} is a mobile assassin - build defensive"))

        healers = [e for e in enemies if safe_number(e.sustain) >= HEALER_SUSTAIN]
        if healers:
            name = healers[0].display_name or healers[0].name
            swaps.append(swap(ThreatTag.HEAVY_HEAL, f"{name} has high sustain - build anti-heal"))

        return swaps

    def format_build_for_display(self, recommendation: BuildRecommendation) -> dict:
        """Resolve item ids to display names, falling back to the id."""
        def entry(item_id: str) -> dict:
            item = self.store.get_item_by_id(item_id)
            return {"id": item_id, "name": item.name if item else item_id}

        return {
            "items": [entry(item_id) for item_id in recommendation.items],
            "boots": entry(recommendation.boots),
            "reasoning": recommendation.reasoning,
        }
