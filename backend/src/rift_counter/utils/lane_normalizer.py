"""Centralized lane normalization utility.

All lane normalization in the codebase should use this module to ensure
consistency. The canonical format is the ``Lane`` enum value:
baron, jungle, mid, adc, support.
"""

from typing import Optional

from rift_counter.models.champion import Lane

# Comprehensive mapping from any known lane format to canonical Lane
LANE_ALIASES: dict[str, Lane] = {
    # Baron lane (solo top) variations
    "baron": Lane.BARON,
    "top": Lane.BARON,
    "toplane": Lane.BARON,
    "top laner": Lane.BARON,
    "solo": Lane.BARON,
    "baron lane": Lane.BARON,

    # Jungle variations
    "jungle": Lane.JUNGLE,
    "jungler": Lane.JUNGLE,
    "jng": Lane.JUNGLE,
    "jg": Lane.JUNGLE,

    # Mid lane variations
    "mid": Lane.MID,
    "middle": Lane.MID,
    "midlane": Lane.MID,
    "mid laner": Lane.MID,

    # Dragon lane carry variations - all normalize to "adc"
    "adc": Lane.ADC,
    "bot": Lane.ADC,
    "bottom": Lane.ADC,
    "carry": Lane.ADC,
    "ad carry": Lane.ADC,
    "marksman": Lane.ADC,
    "dragon": Lane.ADC,
    "duo": Lane.ADC,

    # Support variations
    "support": Lane.SUPPORT,
    "sup": Lane.SUPPORT,
    "supp": Lane.SUPPORT,
}


class InvalidLaneError(ValueError):
    """Raised when a lane string cannot be resolved to a canonical lane."""

    code = "INVALID_LANE"

    def __init__(self, lane: Optional[str]):
        self.lane = lane
        super().__init__(f"Invalid lane: {lane}")


def normalize_lane(lane: Optional[str]) -> Optional[Lane]:
    """Normalize a lane string to a canonical Lane.

    Args:
        lane: Lane string in any known format (e.g., "top", "BOT", "Middle")

    Returns:
        Canonical Lane, or None if invalid/None

    Examples:
        >>> normalize_lane("top")
        <Lane.BARON: 'baron'>
        >>> normalize_lane(" BOT ")
        <Lane.ADC: 'adc'>
        >>> normalize_lane("river") is None
        True
    """
    if lane is None:
        return None
    if isinstance(lane, Lane):
        return lane
    return LANE_ALIASES.get(lane.strip().lower())


def normalize_lane_strict(lane: Optional[str]) -> Lane:
    """Normalize a lane string, raising InvalidLaneError if unknown."""
    normalized = normalize_lane(lane)
    if normalized is None:
        raise InvalidLaneError(lane)
    return normalized


def is_valid_lane(lane: Optional[str]) -> bool:
    """Check if a lane string can be normalized."""
    return normalize_lane(lane) is not None
