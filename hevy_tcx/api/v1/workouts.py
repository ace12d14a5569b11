"""Workouts API: fetch a Hevy workout so the capture hook can pick it up."""

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path

from hevy_tcx.api.deps import get_runtime
from hevy_tcx.api.v1.capture import capture_status
from hevy_tcx.schemas.capture import CaptureStatus
from hevy_tcx.services.hevy_client import fetch_workout
from hevy_tcx.services.runtime import CaptureRuntime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.post(
    "/{short_id}/fetch",
    response_model=CaptureStatus,
    summary="Fetch a workout from Hevy",
    responses={502: {"description": "Hevy API error"}},
)
async def fetch_hevy_workout(
    runtime: Annotated[CaptureRuntime, Depends(get_runtime)],
    short_id: str = Path(..., min_length=1, max_length=64),
) -> CaptureStatus:
    """Request the workout; a matching response is captured by the client hook, not here."""
    try:
        await fetch_workout(short_id)
    except httpx.HTTPStatusError as e:
        raise HTTPException(status_code=502, detail=f"Hevy API returned {e.response.status_code}") from e
    except httpx.RequestError as e:
        logger.warning("Hevy request failed: %s", e)
        raise HTTPException(status_code=502, detail="Hevy API unreachable. Please try again.") from e
    except ValueError:
        # Body was not JSON; the hook already ignored it
        logger.info("Hevy workout %s returned a non-JSON body", short_id)
    return capture_status(runtime)
