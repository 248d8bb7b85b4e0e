"""REST endpoint for matchup analysis."""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from rift_counter.models.analysis import AnalysisOptions
from rift_counter.utils.champion_normalizer import UnknownChampionError
from rift_counter.utils.lane_normalizer import InvalidLaneError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyze", tags=["analyze"])


class AnalyzeOptionsRequest(BaseModel):
    prefer_counters: bool = False
    max_counters: Optional[int] = Field(default=None, ge=1, le=10)


class AnalyzeRequest(BaseModel):
    enemies: list[str] = Field(min_length=1, max_length=5)
    lane: str
    your_champion: Optional[str] = None
    options: Optional[AnalyzeOptionsRequest] = None


def input_error(error: ValueError) -> HTTPException:
    """Map an input-resolution error to a 400 with a stable code."""
    return HTTPException(
        status_code=400,
        detail={"code": getattr(error, "code", "INVALID_INPUT"), "message": str(error)},
    )


@router.post("")
async def analyze(request: Request, body: AnalyzeRequest):
    """Analyze an enemy lineup for a lane and return counters, tactics and builds."""
    service = request.app.state.analysis_service
    context = request.app.state.source_status.build_context()
    options = AnalysisOptions(
        prefer_counters=body.options.prefer_counters if body.options else False,
        max_counters=body.options.max_counters if body.options else None,
    )

    try:
        response = service.analyze(
            enemies=body.enemies,
            lane=body.lane,
            context=context,
            your_champion=body.your_champion,
            options=options,
        )
    except (InvalidLaneError, UnknownChampionError) as e:
        logger.info(f"Rejected analysis request: {e}")
        raise input_error(e)

    return asdict(response)
