"""Capture API: status of the captured workout, page location, JSON upload."""

import json
from collections.abc import Mapping
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from hevy_tcx.api.deps import get_runtime
from hevy_tcx.schemas.capture import CaptureStatus, LocationUpdate
from hevy_tcx.services.runtime import CaptureRuntime
from hevy_tcx.services.validator import is_workout_record

router = APIRouter(prefix="/capture", tags=["capture"])

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def capture_status(runtime: CaptureRuntime) -> CaptureStatus:
    payload = runtime.slot.get()
    short_id = payload.get("short_id") if isinstance(payload, Mapping) else None
    return CaptureStatus(
        captured=payload is not None,
        short_id=str(short_id) if short_id else None,
        location=runtime.page.location,
        export_visible=runtime.control.visible,
        export_label=runtime.control.label,
    )


@router.get("/status", response_model=CaptureStatus, summary="Captured workout and export control state")
def get_status(runtime: Annotated[CaptureRuntime, Depends(get_runtime)]) -> CaptureStatus:
    return capture_status(runtime)


@router.post("/location", response_model=CaptureStatus, summary="Report current page location")
def post_location(
    body: LocationUpdate,
    runtime: Annotated[CaptureRuntime, Depends(get_runtime)],
) -> CaptureStatus:
    """Store the location and re-evaluate export visibility right away."""
    runtime.page.location = body.url
    runtime.watcher.check()
    return capture_status(runtime)


@router.post(
    "/upload",
    response_model=CaptureStatus,
    summary="Capture a workout from a JSON file",
    responses={400: {"description": "Empty or invalid JSON"}, 422: {"description": "Not a workout record"}},
)
async def upload_workout_json(
    runtime: Annotated[CaptureRuntime, Depends(get_runtime)],
    file: Annotated[UploadFile, File(description="Workout JSON file")],
) -> CaptureStatus:
    """Parse a pre-captured workout JSON and relay it like a network capture."""
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file.")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400, detail="File too large (max 10MB)")
    try:
        data = json.loads(content)
    except ValueError:
        raise HTTPException(status_code=400, detail="Could not parse JSON file.")
    if not is_workout_record(data):
        raise HTTPException(status_code=422, detail="JSON is not a workout record (needs biometrics and exercises).")
    runtime.publish(data)
    return capture_status(runtime)
