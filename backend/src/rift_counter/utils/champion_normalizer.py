"""Champion name normalization.

Resolves free-text user input ("Lee Sin", "lee-sin", "TF", "kat") to a
champion id using the loaded champion records as the source of truth.
"""

import re
from typing import Iterable, Optional, Sequence

from rift_counter.models.champion import Champion

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


class UnknownChampionError(ValueError):
    """Raised when one or more champion inputs cannot be resolved."""

    def __init__(self, inputs: Sequence[str], code: str = "UNKNOWN_CHAMPIONS"):
        self.inputs = list(inputs)
        self.code = code
        super().__init__(f"Could not identify champions: {', '.join(self.inputs)}")


def normalize_key(value: Optional[str]) -> str:
    """Lowercase and strip everything but letters and digits.

    Examples:
        >>> normalize_key("Lee Sin")
        'leesin'
        >>> normalize_key("Kai'Sa")
        'kaisa'
    """
    if not value:
        return ""
    return _NON_ALNUM_RE.sub("", str(value).lower())


def build_alias_index(champions: Iterable[Champion]) -> dict[str, str]:
    """Map every id, name, display name and alias (as normalized keys) to a champion id.

    Ids and names win over aliases when two champions would claim the same key.
    """
    index: dict[str, str] = {}
    aliases: dict[str, str] = {}
    for champion in champions:
        for value in (champion.id, champion.name, champion.display_name):
            key = normalize_key(value)
            if key:
                index.setdefault(key, champion.id)
        for alias in champion.aliases:
            key = normalize_key(alias)
            if key:
                aliases.setdefault(key, champion.id)
    for key, champion_id in aliases.items():
        index.setdefault(key, champion_id)
    return index


def normalize_champion_input(value: Optional[str], alias_index: dict[str, str]) -> Optional[str]:
    """Resolve one input to a champion id, or None if it matches nothing."""
    if not value or not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    if cleaned in alias_index.values():
        return cleaned
    return alias_index.get(normalize_key(cleaned))
