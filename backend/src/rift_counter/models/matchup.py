"""Matchup scoring models.

``MatchupMetrics`` (lane-scoped, used for counter-picking) and
``MatchupVector`` (player-centric, used when the user already picked) are
deliberately separate types: they use different formulas and different
bounds and must not be merged.
"""

from dataclasses import dataclass, field, fields
from typing import Optional

from rift_counter.models.champion import ChampionSummary, DataSource, Lane
from rift_counter.utils.numbers import clamp, safe_number

SIGNED_BOUNDS = (-100.0, 100.0)
UNSIGNED_BOUNDS = (0.0, 100.0)


@dataclass(frozen=True)
class MatchupFactors:
    """Intermediate comparison factors; unbounded, never returned to callers."""

    range_advantage: float
    mobility_diff: float
    cc_comparison: float
    burst_vs_sustain: float
    waveclear_diff: float
    scaling_diff: float
    damage_type_mismatch: float


@dataclass(frozen=True)
class MatchupMetrics:
    """Lane matchup scores from the challenger's perspective."""

    lane_dominance: float  # -100 to 100 (negative = opponent favored)
    kill_potential: float  # 0-100
    poke_advantage: float  # -100 to 100
    waveclear_diff: float  # -100 to 100
    roam_advantage: float  # -100 to 100
    objective_control: float  # 0-100
    scale_comparison: float  # -100 to 100 (positive = challenger scales better)
    gank_vulnerability: float  # 0-100 (higher = more vulnerable)

    BOUNDS = {
        "lane_dominance": SIGNED_BOUNDS,
        "kill_potential": UNSIGNED_BOUNDS,
        "poke_advantage": SIGNED_BOUNDS,
        "waveclear_diff": SIGNED_BOUNDS,
        "roam_advantage": SIGNED_BOUNDS,
        "objective_control": UNSIGNED_BOUNDS,
        "scale_comparison": SIGNED_BOUNDS,
        "gank_vulnerability": UNSIGNED_BOUNDS,
    }

    def clamped(self) -> "MatchupMetrics":
        """Return a copy with every field coerced to a finite value inside its bounds."""
        return MatchupMetrics(**{
            f.name: clamp(safe_number(getattr(self, f.name)), *self.BOUNDS[f.name])
            for f in fields(self)
        })

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "MatchupMetrics":
        data = data or {}
        return cls(**{
            f.name: safe_number(data.get(f.name, data.get(_camel(f.name))))
            for f in fields(cls)
        }).clamped()


@dataclass(frozen=True)
class MatchupVector:
    """Player-vs-lane-enemy comparison. all_in_potential is 0-100, the rest are ±100."""

    lane_dominance: float
    all_in_potential: float
    poke_advantage: float
    mobility_diff: float
    cc_diff: float
    sustain_diff: float
    waveclear_diff: float
    scaling_diff: float

    BOUNDS = {
        "lane_dominance": SIGNED_BOUNDS,
        "all_in_potential": UNSIGNED_BOUNDS,
        "poke_advantage": SIGNED_BOUNDS,
        "mobility_diff": SIGNED_BOUNDS,
        "cc_diff": SIGNED_BOUNDS,
        "sustain_diff": SIGNED_BOUNDS,
        "waveclear_diff": SIGNED_BOUNDS,
        "scaling_diff": SIGNED_BOUNDS,
    }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class StoredMatchup:
    """Human-curated matchup record; takes priority over computed metrics."""

    challenger_id: str
    opponent_id: str
    lane: Lane
    metrics: MatchupMetrics
    notes: tuple[str, ...] = ()
    sources: tuple[DataSource, ...] = ()
    confidence: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> Optional["StoredMatchup"]:
        try:
            lane = Lane(str(data.get("lane", "")).lower())
        except ValueError:
            return None
        return cls(
            challenger_id=str(data.get("challenger_id", data.get("challengerId", ""))).lower(),
            opponent_id=str(data.get("opponent_id", data.get("opponentId", ""))).lower(),
            lane=lane,
            metrics=MatchupMetrics.from_dict(data.get("metrics")),
            notes=tuple(data.get("notes") or []),
            sources=tuple(DataSource.from_dict(s) for s in data.get("sources") or []),
            confidence=clamp(safe_number(data.get("confidence")), 0, 100),
        )


@dataclass
class CounterPick:
    """A ranked counter-pick suggestion against a lane opponent."""

    champion: ChampionSummary
    reason: str
    confidence: int  # 40-95
    score: float
    difficulty: str  # "easy", "medium", "hard"
    matchup_metrics: MatchupMetrics
    sources: list[DataSource] = field(default_factory=list)
