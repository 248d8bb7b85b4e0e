"""Read-only attribute store backed by the knowledge JSON files."""

import json
import logging
from pathlib import Path
from typing import Optional

from rift_counter.models.champion import Champion, ChampionSummary, Lane, RoleTag
from rift_counter.models.item import Build, Item
from rift_counter.models.matchup import StoredMatchup
from rift_counter.models.tactics import ChampionCapability
from rift_counter.utils.champion_normalizer import (
    build_alias_index,
    normalize_champion_input,
    normalize_key,
)

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """In-memory champion, item, build and stored-matchup tables.

    Records are loaded wholesale at construction (process start or refresh)
    and never mutated afterwards. Lookups for missing ids return None or an
    empty list; nothing here raises for absent data.
    """

    def __init__(self, knowledge_dir: Optional[Path] = None):
        if knowledge_dir is None:
            knowledge_dir = Path(__file__).parents[4] / "knowledge"
        self.knowledge_dir = Path(knowledge_dir)
        self._champions: dict[str, Champion] = {}
        self._items: dict[str, Item] = {}
        self._builds: dict[str, list[Build]] = {}
        self._matchups: dict[tuple[str, str, Lane], StoredMatchup] = {}
        self._capabilities: dict[str, ChampionCapability] = {}
        self._alias_index: dict[str, str] = {}
        self._load_data()

    def _read_json(self, filename: str) -> Optional[dict]:
        path = self.knowledge_dir / filename
        if not path.exists():
            logger.warning(f"{filename} not found at {path}")
            return None
        try:
            with open(path) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load {filename}: {e}")
            return None

    def _load_data(self) -> None:
        """Load all knowledge tables."""
        data = self._read_json("champions.json") or {}
        for record in data.get("champions", []):
            champion = Champion.from_dict(record)
            if champion.id:
                self._champions[champion.id] = champion

        data = self._read_json("items.json") or {}
        for record in data.get("items", []):
            item = Item.from_dict(record)
            if item.id:
                self._items[item.id] = item

        data = self._read_json("builds.json") or {}
        for record in data.get("builds", []):
            build = Build.from_dict(record)
            if build.champion_id:
                self._builds.setdefault(build.champion_id, []).append(build)

        data = self._read_json("matchups.json") or {}
        for record in data.get("matchups", []):
            matchup = StoredMatchup.from_dict(record)
            if matchup is not None:
                key = (matchup.challenger_id, matchup.opponent_id, matchup.lane)
                self._matchups[key] = matchup

        data = self._read_json("champion_capabilities.json") or {}
        for champion_id, record in data.get("champions", {}).items():
            self._capabilities[champion_id.lower()] = ChampionCapability.from_dict(champion_id, record)

        self._alias_index = build_alias_index(self._champions.values())
        logger.info(
            f"Loaded {len(self._champions)} champions, {len(self._items)} items, "
            f"{sum(len(b) for b in self._builds.values())} builds from {self.knowledge_dir}"
        )

    # ------------------------------------------------------------------
    # Champions
    # ------------------------------------------------------------------

    def get_champion_by_id(self, champion_id: Optional[str]) -> Optional[Champion]:
        if not champion_id:
            return None
        return self._champions.get(champion_id.lower())

    def get_champions_by_ids(self, champion_ids: list[str]) -> list[Champion]:
        """Resolve ids in order, silently dropping unknown ones."""
        resolved = (self.get_champion_by_id(cid) for cid in champion_ids)
        return [c for c in resolved if c is not None]

    def get_champions_by_lane(self, lane: Lane) -> list[Champion]:
        """All champions eligible for a lane, in seed-data order."""
        return [c for c in self._champions.values() if lane in c.lanes]

    def get_all_champions(self) -> list[Champion]:
        return list(self._champions.values())

    def get_champion_summaries(
        self,
        lane: Optional[Lane] = None,
        tag: Optional[RoleTag] = None,
        search: Optional[str] = None,
    ) -> list[ChampionSummary]:
        """List champion summaries, optionally filtered by lane, tag and name substring."""
        needle = normalize_key(search)
        summaries = []
        for champion in self._champions.values():
            if lane is not None and lane not in champion.lanes:
                continue
            if tag is not None and tag not in champion.tags:
                continue
            if needle and not any(
                needle in normalize_key(value)
                for value in (champion.id, champion.name, champion.display_name, *champion.aliases)
            ):
                continue
            summaries.append(champion.summary())
        return summaries

    def resolve_champion(self, value: Optional[str]) -> Optional[str]:
        """Normalize free-text champion input to an id (None when unresolvable)."""
        return normalize_champion_input(value, self._alias_index)

    # ------------------------------------------------------------------
    # Items, builds, stored matchups, capabilities
    # ------------------------------------------------------------------

    def get_item_by_id(self, item_id: Optional[str]) -> Optional[Item]:
        if not item_id:
            return None
        return self._items.get(item_id)

    def get_all_items(self) -> list[Item]:
        return list(self._items.values())

    def get_builds_for_champion(self, champion_id: Optional[str]) -> list[Build]:
        if not champion_id:
            return []
        return list(self._builds.get(champion_id.lower(), []))

    def get_all_builds(self) -> list[Build]:
        return [build for builds in self._builds.values() for build in builds]

    def get_stored_matchup(
        self, challenger_id: str, opponent_id: str, lane: Lane
    ) -> Optional[StoredMatchup]:
        return self._matchups.get((challenger_id, opponent_id, lane))

    def get_all_stored_matchups(self) -> list[StoredMatchup]:
        return list(self._matchups.values())

    def get_capability(self, champion_id: Optional[str]) -> Optional[ChampionCapability]:
        if not champion_id:
            return None
        return self._capabilities.get(champion_id.lower())

    def get_capability_ids(self) -> list[str]:
        return list(self._capabilities)
