"""Export captured workouts as TCX files: filename, serialization, delivery."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from hevy_tcx.config import settings
from hevy_tcx.core.errors import NoWorkoutCaptured, TcxExportError
from hevy_tcx.schemas.tcx import ExportReport, ExportStatus, TcxExport
from hevy_tcx.services.capture_store import PayloadSlot
from hevy_tcx.services.tcx import workout_to_tcx

logger = logging.getLogger(__name__)

TCX_MEDIA_TYPE = "application/vnd.garmin.tcx+xml"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")

# deliver(content, filename, media_type)
Deliver = Callable[[str, str, str], None]


def export_filename(payload: Mapping[str, Any]) -> str:
    """hevy-workout-<short_id>.tcx, with a placeholder id when short_id is missing."""
    workout_id = payload.get("short_id") if isinstance(payload, Mapping) else None
    if not workout_id:
        return f"{settings.export_filename_prefix}{settings.unknown_workout_id}.tcx"
    # Filename ends up in a Content-Disposition header
    safe_id = _UNSAFE_FILENAME_CHARS.sub("_", str(workout_id))
    return f"{settings.export_filename_prefix}{safe_id}.tcx"


def build_export(slot: PayloadSlot, sport: str | None = None) -> TcxExport:
    """
    Serialize the captured payload into a deliverable artifact.
    Raises NoWorkoutCaptured if nothing was captured, TcxExportError if conversion fails.
    """
    payload = slot.get()
    if payload is None:
        raise NoWorkoutCaptured()
    try:
        document = workout_to_tcx(payload, sport=sport)
        filename = export_filename(payload)
    except Exception as e:
        logger.warning("TCX conversion failed: %s", e)
        raise TcxExportError(str(e)) from e
    for warning in document.warnings:
        logger.warning("Export %s: %s", filename, warning)
    return TcxExport(
        filename=filename,
        content=document.content,
        media_type=TCX_MEDIA_TYPE,
        sample_count=document.sample_count,
        start_time=document.start_time,
    )


def export_captured(slot: PayloadSlot, deliver: Deliver, sport: str | None = None) -> ExportReport:
    """Export trigger for non-HTTP hosts: never raises, reports the outcome instead."""
    try:
        export = build_export(slot, sport=sport)
    except NoWorkoutCaptured as e:
        return ExportReport(status=ExportStatus.NO_DATA, message=str(e))
    except TcxExportError as e:
        return ExportReport(status=ExportStatus.ERROR, message=f"Error converting data: {e}")
    try:
        deliver(export.content, export.filename, export.media_type)
    except OSError as e:
        logger.warning("Delivering %s failed: %s", export.filename, e)
        return ExportReport(status=ExportStatus.ERROR, message=f"Error writing file: {e}", filename=export.filename)
    logger.info(
        "Exported %s (%d heart rate samples, workout date %s)",
        export.filename,
        export.sample_count,
        export.start_time,
    )
    return ExportReport(
        status=ExportStatus.OK,
        message=f"Converted {export.sample_count} heart rate samples.",
        filename=export.filename,
        sample_count=export.sample_count,
    )
