"""Export API: download the captured workout as a TCX file."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from hevy_tcx.api.deps import get_runtime
from hevy_tcx.core.errors import NoWorkoutCaptured, TcxExportError
from hevy_tcx.services.export import build_export
from hevy_tcx.services.runtime import CaptureRuntime

router = APIRouter(prefix="/export", tags=["export"])


@router.get(
    "/tcx",
    summary="Download captured workout as TCX",
    response_class=Response,
    responses={
        200: {"content": {"application/vnd.garmin.tcx+xml": {}}},
        404: {"description": "No workout captured yet"},
        422: {"description": "Workout could not be converted"},
    },
)
def download_tcx(
    runtime: Annotated[CaptureRuntime, Depends(get_runtime)],
    sport: str | None = Query(default=None, max_length=32),
) -> Response:
    try:
        export = build_export(runtime.slot, sport=sport)
    except NoWorkoutCaptured as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TcxExportError as e:
        raise HTTPException(status_code=422, detail=f"Error converting data: {e}")
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{export.filename}"',
            "X-Sample-Count": str(export.sample_count),
        },
    )
