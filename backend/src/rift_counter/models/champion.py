"""Champion attribute models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from rift_counter.utils.numbers import clamp, safe_number


class Lane(str, Enum):
    """Map roles a champion can be assigned to."""

    BARON = "baron"
    JUNGLE = "jungle"
    MID = "mid"
    ADC = "adc"
    SUPPORT = "support"


class RoleTag(str, Enum):
    """Champion class tags."""

    ASSASSIN = "assassin"
    FIGHTER = "fighter"
    MAGE = "mage"
    MARKSMAN = "marksman"
    SUPPORT = "support"
    TANK = "tank"


class RangeType(str, Enum):
    MELEE = "melee"
    RANGED = "ranged"


class SpikeType(str, Enum):
    """Power spike milestone kinds, in timeline order."""

    LEVEL = "level"
    ITEM = "item"
    TIME = "time"


def _enum_set(enum_cls, values) -> set:
    """Parse a list of raw strings into enum members, dropping unknown values."""
    members = set()
    for value in values or []:
        try:
            members.add(enum_cls(str(value).strip().lower()))
        except ValueError:
            continue
    return members


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class DataSource:
    """Provenance entry backing a fact."""

    name: str
    url: str = ""
    fetched: Optional[datetime] = None
    reliability: float = 0.0  # 0-100

    @classmethod
    def from_dict(cls, data: dict) -> "DataSource":
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url", "") or ""),
            fetched=parse_timestamp(data.get("fetched")),
            reliability=clamp(safe_number(data.get("reliability")), 0, 100),
        )


@dataclass(frozen=True)
class DamageProfile:
    """Damage split. Values are relative weights, not percentages."""

    physical: float = 0.0
    magic: float = 0.0
    true_damage: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DamageProfile":
        data = data or {}
        return cls(
            physical=safe_number(data.get("physical")),
            magic=safe_number(data.get("magic")),
            true_damage=safe_number(data.get("true_damage", data.get("trueDamage"))),
        )

    @property
    def total(self) -> float:
        return self.physical + self.magic + self.true_damage

    @property
    def physical_share(self) -> float:
        """Physical fraction of total damage (0.0 when the profile is empty)."""
        return self.physical / self.total if self.total > 0 else 0.0

    @property
    def magic_share(self) -> float:
        return self.magic / self.total if self.total > 0 else 0.0


@dataclass(frozen=True)
class BaseStats:
    health: float = 0.0
    mana: float = 0.0
    armor: float = 0.0
    magic_resist: float = 0.0
    attack_damage: float = 0.0
    attack_speed: float = 0.0
    move_speed: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BaseStats":
        data = data or {}
        return cls(
            health=safe_number(data.get("health")),
            mana=safe_number(data.get("mana")),
            armor=safe_number(data.get("armor")),
            magic_resist=safe_number(data.get("magic_resist", data.get("magicResist"))),
            attack_damage=safe_number(data.get("attack_damage", data.get("attackDamage"))),
            attack_speed=safe_number(data.get("attack_speed", data.get("attackSpeed"))),
            move_speed=safe_number(data.get("move_speed", data.get("moveSpeed"))),
        )


@dataclass(frozen=True)
class PowerSpike:
    """A milestone where a champion becomes noticeably stronger."""

    type: SpikeType
    value: str  # level number, item name, or game time
    strength: float  # 0-1
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Optional["PowerSpike"]:
        try:
            spike_type = SpikeType(str(data.get("type", "")).lower())
        except ValueError:
            return None
        return cls(
            type=spike_type,
            value=str(data.get("value", "")),
            strength=clamp(safe_number(data.get("strength", data.get("power"))), 0, 1),
            notes=str(data.get("notes", "") or ""),
        )


@dataclass(frozen=True)
class AbilityInfo:
    name: str = ""
    description: str = ""
    cooldown: tuple[float, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["AbilityInfo"]:
        if not data:
            return None
        cooldown = data.get("cooldown") or []
        if not isinstance(cooldown, list):
            cooldown = [cooldown]
        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "") or ""),
            cooldown=tuple(safe_number(cd) for cd in cooldown),
        )


@dataclass(frozen=True)
class AbilitySummary:
    passive: Optional[AbilityInfo] = None
    q: Optional[AbilityInfo] = None
    w: Optional[AbilityInfo] = None
    e: Optional[AbilityInfo] = None
    ultimate: Optional[AbilityInfo] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AbilitySummary":
        data = data or {}
        return cls(
            passive=AbilityInfo.from_dict(data.get("passive")),
            q=AbilityInfo.from_dict(data.get("q")),
            w=AbilityInfo.from_dict(data.get("w")),
            e=AbilityInfo.from_dict(data.get("e")),
            ultimate=AbilityInfo.from_dict(data.get("ultimate")),
        )


@dataclass(frozen=True)
class Champion:
    """Static per-patch champion record. Profile scores are 0-10."""

    id: str
    name: str
    display_name: str = ""
    aliases: tuple[str, ...] = ()
    lanes: frozenset[Lane] = frozenset()
    tags: frozenset[RoleTag] = frozenset()
    range_type: RangeType = RangeType.MELEE
    base_stats: BaseStats = field(default_factory=BaseStats)
    mobility: float = 0.0
    cc: float = 0.0
    burst: float = 0.0
    sustain: float = 0.0
    waveclear: float = 0.0
    roam: float = 0.0
    scale: float = 0.0
    damage_profile: DamageProfile = field(default_factory=DamageProfile)
    power_spikes: tuple[PowerSpike, ...] = ()
    abilities: AbilitySummary = field(default_factory=AbilitySummary)
    sources: tuple[DataSource, ...] = ()
    last_updated: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Champion":
        """Build a champion from a seed-data record.

        Missing or malformed profile scores load as 0.0; unknown lanes and tags
        are dropped rather than rejected.
        """
        champion_id = str(data.get("id") or "").lower()
        name = str(data.get("name", champion_id))
        spikes = [PowerSpike.from_dict(s) for s in data.get("power_spikes", data.get("powerSpikes")) or []]
        range_raw = str(data.get("range_type", data.get("rangeType", "melee"))).lower()
        return cls(
            id=champion_id,
            name=name,
            display_name=str(data.get("display_name", data.get("displayName")) or name),
            aliases=tuple(str(a) for a in data.get("aliases") or []),
            lanes=frozenset(_enum_set(Lane, data.get("lanes", data.get("roles")))),
            tags=frozenset(_enum_set(RoleTag, data.get("tags"))),
            range_type=RangeType.RANGED if range_raw == "ranged" else RangeType.MELEE,
            base_stats=BaseStats.from_dict(data.get("base_stats", data.get("baseStats"))),
            mobility=safe_number(data.get("mobility")),
            cc=safe_number(data.get("cc")),
            burst=safe_number(data.get("burst")),
            sustain=safe_number(data.get("sustain")),
            waveclear=safe_number(data.get("waveclear")),
            roam=safe_number(data.get("roam")),
            scale=safe_number(data.get("scale")),
            damage_profile=DamageProfile.from_dict(data.get("damage_profile", data.get("damageProfile"))),
            power_spikes=tuple(s for s in spikes if s is not None),
            abilities=AbilitySummary.from_dict(data.get("abilities")),
            sources=tuple(DataSource.from_dict(s) for s in data.get("sources") or []),
            last_updated=parse_timestamp(data.get("last_updated", data.get("lastUpdated"))),
        )

    @property
    def is_ranged(self) -> bool:
        return self.range_type == RangeType.RANGED

    @property
    def is_melee(self) -> bool:
        return self.range_type == RangeType.MELEE

    def has_tag(self, tag: RoleTag) -> bool:
        return tag in self.tags

    def summary(self) -> "ChampionSummary":
        return ChampionSummary(
            id=self.id,
            name=self.name,
            display_name=self.display_name or self.name,
            lanes=sorted(lane.value for lane in self.lanes),
            tags=sorted(tag.value for tag in self.tags),
        )


@dataclass
class ChampionSummary:
    """Simplified champion for list views and response payloads."""

    id: str
    name: str
    display_name: str
    lanes: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
