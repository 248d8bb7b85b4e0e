"""Player-centric matchup vector between the user's champion and their lane enemy."""
from rift_counter.models.champion import Champion
from rift_counter.models.matchup import MatchupVector
from rift_counter.utils.numbers import clamp, safe_number

DIFF_SCALE = 12


class MatchupVectorCalculator:
    """Computes the 8-field MatchupVector used by the tactical breakdown.

    Unlike lane metrics this has no lane and no stored-data override: it is a
    straight comparison of the two champions' profile scores.
    """

    def compute(self, player: Champion, enemy: Champion) -> MatchupVector:
        player_ranged = getattr(player, "is_ranged", False) is True
        player_melee = getattr(player, "is_melee", False) is True
        enemy_ranged = getattr(enemy, "is_ranged", False) is True
        enemy_melee = getattr(enemy, "is_melee", False) is True

        if player_ranged and enemy_melee:
            range_bonus = 25.0
        elif player_melee and enemy_ranged:
            range_bonus = -20.0
        else:
            range_bonus = 0.0

        p = {attr: safe_number(getattr(player, attr, 0.0)) for attr in _PROFILE}
        e = {attr: safe_number(getattr(enemy, attr, 0.0)) for attr in _PROFILE}

        lane_dominance = clamp(
            range_bonus
            + (p["burst"] - e["burst"]) * 5
            + (p["waveclear"] - e["waveclear"]) * 3
            + (p["sustain"] - e["sustain"]) * 4,
            -100, 100,
        )
        all_in_potential = clamp(
            50 + p["burst"] * 4 + p["cc"] * 3 - e["mobility"] * 3 - e["sustain"] * 2,
            0, 100,
        )
        poke_advantage = clamp(
            range_bonus * 1.5
            + (15 if player_ranged else 0)
            - (10 if player_melee else 0)
            + p["waveclear"] * 2
            - e["sustain"] * 3,
            -100, 100,
        )

        return MatchupVector(
            lane_dominance=lane_dominance,
            all_in_potential=all_in_potential,
            poke_advantage=poke_advantage,
            mobility_diff=_diff(p, e, "mobility"),
            cc_diff=_diff(p, e, "cc"),
            sustain_diff=_diff(p, e, "sustain"),
            waveclear_diff=_diff(p, e, "waveclear"),
            scaling_diff=_diff(p, e, "scale"),
        )


_PROFILE = ("mobility", "cc", "burst", "sustain", "waveclear", "scale")


def _diff(player: dict, enemy: dict, attr: str) -> float:
    # Mirror matchups must come out as exactly 0.0
    return clamp((player[attr] - enemy[attr]) * DIFF_SCALE, -100, 100)
