"""Lane-scoped matchup metrics between a challenger and an opponent."""
from typing import Optional

from rift_counter.models.champion import Champion, Lane
from rift_counter.models.matchup import MatchupFactors, MatchupMetrics, StoredMatchup
from rift_counter.utils.numbers import clamp, safe_number

# Tunable: share of the computed range advantage folded into a stored
# (human-curated) lane dominance value.
STORED_RANGE_BLEND_WEIGHT = 0.3


def _score(champion: Champion, attr: str) -> float:
    return safe_number(getattr(champion, attr, 0.0))


def _is_ranged(champion: Champion) -> bool:
    return getattr(champion, "is_ranged", False) is True


def _is_melee(champion: Champion) -> bool:
    return getattr(champion, "is_melee", False) is True


def merge_stored_metrics(stored: MatchupMetrics, factors: MatchupFactors) -> MatchupMetrics:
    """Blend curated metrics with the computed range interaction.

    Stored values are kept as the base; only lane_dominance is nudged by
    ``STORED_RANGE_BLEND_WEIGHT * range_advantage``. The result is clamped.
    """
    return MatchupMetrics(
        lane_dominance=safe_number(stored.lane_dominance)
        + STORED_RANGE_BLEND_WEIGHT * factors.range_advantage,
        kill_potential=stored.kill_potential,
        poke_advantage=stored.poke_advantage,
        waveclear_diff=stored.waveclear_diff,
        roam_advantage=stored.roam_advantage,
        objective_control=stored.objective_control,
        scale_comparison=stored.scale_comparison,
        gank_vulnerability=stored.gank_vulnerability,
    ).clamped()


class MatchupMetricsCalculator:
    """Computes MatchupMetrics for a challenger against a lane opponent.

    Pure with respect to its inputs: the optional stored-matchup lookup is a
    read-only callable supplied by the caller (normally
    ``KnowledgeStore.get_stored_matchup``).
    """

    def __init__(self, stored_matchup_lookup=None):
        self._stored_lookup = stored_matchup_lookup

    def compute_factors(self, challenger: Champion, opponent: Champion) -> MatchupFactors:
        """Raw comparison factors; missing attributes count as zero."""
        if _is_ranged(challenger) and _is_melee(opponent):
            range_advantage = 20.0
        elif _is_melee(challenger) and _is_ranged(opponent):
            range_advantage = -15.0
        else:
            range_advantage = 0.0

        burst_vs_sustain = (
            (_score(challenger, "burst") * 3 - _score(opponent, "sustain") * 2)
            - (_score(opponent, "burst") * 3 - _score(challenger, "sustain") * 2)
        )

        return MatchupFactors(
            range_advantage=range_advantage,
            mobility_diff=(_score(challenger, "mobility") - _score(opponent, "mobility")) * 5,
            cc_comparison=(_score(challenger, "cc") - _score(opponent, "cc")) * 4,
            burst_vs_sustain=burst_vs_sustain,
            waveclear_diff=(_score(challenger, "waveclear") - _score(opponent, "waveclear")) * 3,
            scaling_diff=(_score(challenger, "scale") - _score(opponent, "scale")) * 4,
            damage_type_mismatch=self._damage_type_mismatch(challenger, opponent),
        )

    @staticmethod
    def _damage_type_mismatch(challenger: Champion, opponent: Champion) -> float:
        """How well the challenger's damage split cuts through the opponent's resistances."""
        profile = getattr(challenger, "damage_profile", None)
        stats = getattr(opponent, "base_stats", None)
        physical = safe_number(getattr(profile, "physical", 0.0))
        magic = safe_number(getattr(profile, "magic", 0.0))
        armor = safe_number(getattr(stats, "armor", 0.0))
        magic_resist = safe_number(getattr(stats, "magic_resist", 0.0))
        return physical * (100 - armor) / 100 * 10 + magic * (100 - magic_resist) / 100 * 10

    def compute_metrics(
        self,
        challenger: Champion,
        opponent: Champion,
        lane: Optional[Lane] = None,
    ) -> MatchupMetrics:
        """Compute lane metrics, preferring a stored matchup record when one exists."""
        factors = self.compute_factors(challenger, opponent)

        stored = self._lookup_stored(challenger, opponent, lane)
        if stored is not None:
            return merge_stored_metrics(stored.metrics, factors)

        return self.metrics_from_factors(challenger, opponent, factors)

    def metrics_from_factors(
        self, challenger: Champion, opponent: Champion, factors: MatchupFactors
    ) -> MatchupMetrics:
        challenger_ranged = 20 if _is_ranged(challenger) else 0
        opponent_ranged = 20 if _is_ranged(opponent) else 0
        challenger_melee = 10 if _is_melee(challenger) else 0

        return MatchupMetrics(
            lane_dominance=clamp(
                factors.range_advantage
                + factors.mobility_diff * 0.5
                + factors.cc_comparison * 0.5
                + factors.burst_vs_sustain * 0.3,
                -100, 100,
            ),
            kill_potential=clamp(
                50
                + _score(challenger, "burst") * 3
                + _score(challenger, "cc") * 2
                - _score(opponent, "mobility") * 2
                - _score(opponent, "sustain"),
                0, 100,
            ),
            poke_advantage=clamp(
                factors.range_advantage + challenger_ranged - opponent_ranged,
                -100, 100,
            ),
            waveclear_diff=clamp(factors.waveclear_diff * 3, -100, 100),
            roam_advantage=clamp(
                (_score(challenger, "mobility") - _score(opponent, "mobility")) * 5
                + _score(challenger, "roam") * 3
                - _score(opponent, "roam") * 3,
                -100, 100,
            ),
            objective_control=clamp(
                50 + _score(challenger, "burst") * 2 + _score(challenger, "sustain"),
                0, 100,
            ),
            scale_comparison=clamp(factors.scaling_diff * 3, -100, 100),
            gank_vulnerability=clamp(
                50
                - _score(challenger, "mobility") * 3
                - _score(challenger, "cc") * 2
                + challenger_melee,
                0, 100,
            ),
        )

    def _lookup_stored(
        self, challenger: Champion, opponent: Champion, lane: Optional[Lane]
    ) -> Optional[StoredMatchup]:
        if self._stored_lookup is None or lane is None:
            return None
        return self._stored_lookup(challenger.id, opponent.id, lane)
