"""REST endpoints for data source status and patch notifications."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from rift_counter.services.analysis_cache import ANALYSIS_PREFIX

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sources", tags=["sources"])


class PatchNotification(BaseModel):
    version: str
    date: str


@router.get("")
async def get_sources(request: Request):
    """Per-source status plus current patch and freshness."""
    repo = request.app.state.source_status
    freshness = repo.get_data_freshness()
    return {
        "sources": [asdict(s) for s in repo.get_sources_status()],
        "patch_version": freshness.patch_version,
        "patch_date": freshness.patch_date,
        "data_freshness": freshness.data_freshness,
        "uncertainty": freshness.uncertainty,
        "uncertainty_reason": freshness.reason,
    }


@router.post("/patch")
async def notify_patch(request: Request, body: PatchNotification):
    """Record a new patch: sources go stale and cached analyses are dropped."""
    repo = request.app.state.source_status
    repo.update_patch_info(body.version, body.date)
    repo.mark_all_stale()

    invalidated = 0
    cache = request.app.state.analysis_cache
    if cache is not None:
        invalidated = cache.invalidate_prefix(ANALYSIS_PREFIX)
    logger.info(f"Patch {body.version} recorded, {invalidated} cached analyses invalidated")

    return {"patch_version": body.version, "patch_date": body.date, "invalidated": invalidated}
