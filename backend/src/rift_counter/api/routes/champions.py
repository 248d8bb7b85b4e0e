"""REST endpoints for champion lookups."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from rift_counter.api.routes.analyze import input_error
from rift_counter.models.champion import Champion, RoleTag
from rift_counter.utils.lane_normalizer import InvalidLaneError, normalize_lane_strict

router = APIRouter(prefix="/api/champions", tags=["champions"])


def _get_champion_or_404(request: Request, champion_id: str) -> Champion:
    store = request.app.state.knowledge_store
    resolved = store.resolve_champion(champion_id)
    champion = store.get_champion_by_id(resolved)
    if champion is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "CHAMPION_NOT_FOUND", "message": f"Champion not found: {champion_id}"},
        )
    return champion


def _serialize_champion(champion: Champion) -> dict:
    data = asdict(champion)
    data["lanes"] = sorted(lane.value for lane in champion.lanes)
    data["tags"] = sorted(tag.value for tag in champion.tags)
    return data


@router.get("")
async def list_champions(
    request: Request,
    lane: Optional[str] = None,
    tag: Optional[str] = None,
    search: Optional[str] = None,
):
    """List champion summaries, filtered by lane, role tag and name."""
    try:
        normalized_lane = normalize_lane_strict(lane) if lane else None
    except InvalidLaneError as e:
        raise input_error(e)

    role_tag = None
    if tag:
        try:
            role_tag = RoleTag(tag.strip().lower())
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail={"code": "INVALID_TAG", "message": f"Invalid tag: {tag}"},
            )

    summaries = request.app.state.knowledge_store.get_champion_summaries(
        lane=normalized_lane, tag=role_tag, search=search
    )
    return {"data": [asdict(s) for s in summaries], "total": len(summaries)}


@router.get("/{champion_id}")
async def get_champion(request: Request, champion_id: str):
    champion = _get_champion_or_404(request, champion_id)
    return {"champion": _serialize_champion(champion), "sources": [asdict(s) for s in champion.sources]}


@router.get("/{champion_id}/builds")
async def get_champion_builds(request: Request, champion_id: str):
    """Stored builds for a champion, highest confidence first."""
    champion = _get_champion_or_404(request, champion_id)
    aggregator = request.app.state.analysis_service.build_aggregator
    builds = aggregator.get_champion_builds(champion.id)
    return {
        "champion_id": champion.id,
        "builds": [asdict(b) for b in builds],
        "sources": [asdict(s) for b in builds for s in b.sources],
    }


@router.get("/{champion_id}/counters")
async def get_champion_counters(
    request: Request,
    champion_id: str,
    lane: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=10),
):
    """Counter picks against a champion. Lane defaults to the champion's alphabetically first lane."""
    champion = _get_champion_or_404(request, champion_id)
    try:
        normalized_lane = normalize_lane_strict(lane) if lane else None
    except InvalidLaneError as e:
        raise input_error(e)

    if normalized_lane is None:
        lanes = sorted(champion.lanes, key=lambda lane_: lane_.value)
        if not lanes:
            return {"champion_id": champion.id, "lane": None, "counters": []}
        normalized_lane = lanes[0]

    service = request.app.state.analysis_service
    context = request.app.state.source_status.build_context()
    counters = service.ranker.get_counter_picks(
        champion.id,
        normalized_lane,
        context,
        limit=limit or service.default_counter_limit,
    )
    return {
        "champion_id": champion.id,
        "lane": normalized_lane.value,
        "counters": [asdict(c) for c in counters],
    }
