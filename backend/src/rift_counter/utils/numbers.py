"""Numeric helpers shared by every scoring formula.

Attribute tables come from hand-maintained seed data, so any field may be
missing, ``None`` or garbage. Formulas read values through ``safe_number``
and return them through ``clamp`` so nothing unbounded or non-finite reaches
a response.
"""

import math
from typing import Any


def safe_number(value: Any) -> float:
    """Coerce a raw attribute to a finite float, treating bad input as 0.0.

    Examples:
        >>> safe_number(7)
        7.0
        >>> safe_number(None)
        0.0
        >>> safe_number(float("nan"))
        0.0
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]. Non-finite input collapses to the nearest safe value."""
    if math.isnan(value):
        return max(low, min(high, 0.0))
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
