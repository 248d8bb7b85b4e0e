#!/usr/bin/env python3
"""Audit knowledge data integrity.

Checks:
1. Builds: do referenced champions and items exist? Are swap triggers known threats?
2. Stored matchups: do they reference known champions eligible for the lane?
3. Capabilities: which champions have no combo/key-ability record?
4. Lanes: does every lane have enough candidates for counter-picking?
5. Freshness: how old is the newest source per champion?
"""

import argparse
import json
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path

from rift_counter.models.champion import Lane
from rift_counter.models.item import ThreatTag
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.services.scorers.confidence import freshest_fetch

MIN_LANE_CANDIDATES = 3


def audit_builds(store: KnowledgeStore) -> list[str]:
    problems = []
    for build in store.get_all_builds():
        if store.get_champion_by_id(build.champion_id) is None:
            problems.append(f"{build.id}: unknown champion {build.champion_id!r}")
        for item_id in [*build.items, build.boots]:
            if item_id and store.get_item_by_id(item_id) is None:
                problems.append(f"{build.id}: unknown item {item_id!r}")
        for swap in build.situational_swaps:
            if store.get_item_by_id(swap.swap_item) is None:
                problems.append(f"{build.id}: unknown swap item {swap.swap_item!r}")
    return problems


def audit_swap_triggers(knowledge_dir: Path) -> list[str]:
    """Unknown triggers are dropped on load, so check the raw file."""
    path = knowledge_dir / "builds.json"
    if not path.exists():
        return []
    with open(path) as f:
        data = json.load(f)

    problems = []
    for build in data.get("builds", []):
        for swap in build.get("situational_swaps") or []:
            trigger = swap.get("trigger", "")
            if ThreatTag.parse(trigger) is None:
                problems.append(f"{build.get('id')}: unknown swap trigger {trigger!r}")
    return problems


def audit_matchups(store: KnowledgeStore) -> list[str]:
    problems = []
    for matchup in store.get_all_stored_matchups():
        label = f"{matchup.challenger_id} vs {matchup.opponent_id}"
        for champion_id in (matchup.challenger_id, matchup.opponent_id):
            champion = store.get_champion_by_id(champion_id)
            if champion is None:
                problems.append(f"{label}: unknown champion {champion_id!r}")
            elif matchup.lane not in champion.lanes:
                problems.append(f"{label}: {champion_id} not eligible for {matchup.lane.value}")
    return problems


def main():
    parser = argparse.ArgumentParser(description="Audit knowledge JSON integrity")
    parser.add_argument(
        "--knowledge-dir",
        type=Path,
        default=Path(__file__).parents[2] / "knowledge",
        help="Directory holding champions.json, items.json, builds.json",
    )
    args = parser.parse_args()

    store = KnowledgeStore(args.knowledge_dir)
    champions = store.get_all_champions()

    print("=" * 70)
    print("KNOWLEDGE DATA AUDIT")
    print("=" * 70)

    print(f"\n--- COUNTS ---")
    print(f"Champions: {len(champions)}")
    print(f"Items: {len(store.get_all_items())}")
    builds_by_type = defaultdict(int)
    for build in store.get_all_builds():
        builds_by_type[build.type.value] += 1
    print(f"Builds: {dict(builds_by_type)}")
    print(f"Stored matchups: {len(store.get_all_stored_matchups())}")
    print(f"Capability records: {len(store.get_capability_ids())}")

    print(f"\n--- BUILD COVERAGE ---")
    missing = [c.id for c in champions if not store.get_builds_for_champion(c.id)]
    print(f"Champions without builds: {len(missing)}")
    for champion_id in missing:
        print(f"  {champion_id}")

    print(f"\n--- BUILD REFERENCES ---")
    build_problems = audit_builds(store) + audit_swap_triggers(args.knowledge_dir)
    for problem in build_problems:
        print(f"  {problem}")
    if not build_problems:
        print("  OK")

    print(f"\n--- STORED MATCHUPS ---")
    matchup_problems = audit_matchups(store)
    for problem in matchup_problems:
        print(f"  {problem}")
    if not matchup_problems:
        print("  OK")

    print(f"\n--- CAPABILITIES ---")
    orphans = [cid for cid in store.get_capability_ids() if store.get_champion_by_id(cid) is None]
    for champion_id in orphans:
        print(f"  record for unknown champion {champion_id!r}")
    uncovered = [c.id for c in champions if store.get_capability(c.id) is None]
    print(f"Champions using role-tag fallbacks: {len(uncovered)}")
    for champion_id in uncovered:
        print(f"  {champion_id}")

    print(f"\n--- LANE ROSTERS ---")
    thin_lanes = []
    for lane in Lane:
        count = len(store.get_champions_by_lane(lane))
        flag = "" if count >= MIN_LANE_CANDIDATES else "  <-- too few for counter-picking"
        if flag:
            thin_lanes.append(lane.value)
        print(f"  {lane.value:<8} {count}{flag}")

    print(f"\n--- FRESHNESS ---")
    now = datetime.now(timezone.utc)
    for champion in champions:
        fetched = freshest_fetch(champion.sources)
        age = f"{(now - fetched).days}d" if fetched else "never"
        print(f"  {champion.id:<16} {age}")

    total = len(build_problems) + len(matchup_problems) + len(orphans) + len(thin_lanes)
    print(f"\n{'=' * 70}")
    print(f"{total} problem(s) found")
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
