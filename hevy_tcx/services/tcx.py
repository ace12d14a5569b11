"""
TCX (Training Center XML) serialization for captured Hevy workouts.

Produces a single-activity, single-lap document with a heart-rate track.
The track is bracketed by two synthetic trackpoints at the workout's start and
end times so importers see the full duration even when the watch recorded
samples only for part of it.

All functions are pure (no I/O, no shared state); the input record is never mutated.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from lxml import etree

from hevy_tcx.config import settings
from hevy_tcx.core.errors import TcxSerializationError
from hevy_tcx.schemas.tcx import TcxDocument

logger = logging.getLogger(__name__)

TCX_NS = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"
ACTIVITY_EXT_NS = "http://www.garmin.com/xmlschemas/ActivityExtension/v2"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
TCX_SCHEMA_LOCATION = f"{TCX_NS} http://www.garmin.com/xmlschemas/TrainingCenterDatabasev2.xsd"
NSMAP = {None: TCX_NS, "x": ACTIVITY_EXT_NS, "xsi": XSI_NS}

NO_SAMPLES_WARNING = "No heart rate samples found in 'biometrics.heart_rate_samples'."

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def workout_to_tcx(
    record: Mapping[str, Any],
    sport: str | None = None,
    creator_name: str | None = None,
    author_name: str | None = None,
) -> TcxDocument:
    """
    Convert a workout record to a TCX document.

    Raises TcxSerializationError when a time, calorie or heart-rate field is
    not numeric or a sample is not an object.
    """
    if not isinstance(record, Mapping):
        raise TcxSerializationError("Workout record must be a JSON object")

    start_sec = _number(record.get("start_time") or 0, "start_time")
    end_sec = _number(record.get("end_time") or 0, "end_time")
    total_seconds = end_sec - start_sec  # negative durations pass through
    start_iso = format_timestamp_ms(start_sec * 1000)
    end_iso = format_timestamp_ms(end_sec * 1000)

    biometrics = record.get("biometrics") or {}
    if not isinstance(biometrics, Mapping):
        raise TcxSerializationError("biometrics must be a JSON object")
    calories = _number(biometrics.get("total_calories") or 0, "total_calories")
    samples = sort_samples(biometrics.get("heart_rate_samples") or [])

    warnings: list[str] = []
    if not samples:
        warnings.append(NO_SAMPLES_WARNING)
        logger.warning(NO_SAMPLES_WARNING)

    trackpoints: list[tuple[str, int]] = []
    if samples:
        trackpoints.append((start_iso, _boundary_bpm(samples[0], "first")))
    sample_count = 0
    for sample in samples:
        ts_ms = sample.get("timestamp_ms")
        bpm = sample.get("bpm")
        if ts_ms and bpm:
            trackpoints.append((format_timestamp_ms(ts_ms), round_bpm(bpm)))
            sample_count += 1
    if samples:
        trackpoints.append((end_iso, _boundary_bpm(samples[-1], "last")))

    root = _build_document(
        sport=sport or settings.tcx_sport,
        start_iso=start_iso,
        total_seconds=format_number(total_seconds),
        calories=format_number(calories),
        trackpoints=trackpoints,
        creator_name=creator_name or settings.tcx_creator_name,
        author_name=author_name or settings.tcx_author_name,
    )
    content = etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True).decode("utf-8")
    return TcxDocument(content=content, sample_count=sample_count, start_time=start_iso, warnings=warnings)


def sort_samples(samples: Any) -> list[Mapping[str, Any]]:
    """Return samples ordered by timestamp_ms (stable; missing timestamps sort as 0)."""
    if not isinstance(samples, (list, tuple)):
        raise TcxSerializationError("heart_rate_samples must be a list")
    for sample in samples:
        if not isinstance(sample, Mapping):
            raise TcxSerializationError(f"Heart rate sample must be an object, got {sample!r}")
    return sorted(samples, key=lambda s: _number(s.get("timestamp_ms") or 0, "timestamp_ms"))


def format_timestamp_ms(ts_ms: Any) -> str:
    """Epoch milliseconds -> 2025-12-03T13:02:12.000Z (fractional milliseconds truncated)."""
    value = _number(ts_ms, "timestamp")
    try:
        moment = _EPOCH + timedelta(milliseconds=value)
    except (OverflowError, ValueError) as e:
        raise TcxSerializationError(f"Timestamp out of range: {ts_ms!r}") from e
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def round_bpm(bpm: Any) -> int:
    """Round half up to the nearest integer (110.5 -> 111)."""
    value = _number(bpm, "bpm")
    if math.isnan(value) or math.isinf(value):
        raise TcxSerializationError(f"bpm must be finite, got {bpm!r}")
    return math.floor(value + 0.5)


def format_number(value: int | float) -> str:
    """Integral values print without a fractional part (250.0 -> '250')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _number(value: Any, field: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TcxSerializationError(f"{field} must be numeric, got {value!r}")
    return value


def _boundary_bpm(sample: Mapping[str, Any], which: str) -> int:
    """Boundary points use the first/last sorted sample even if it fails the trackpoint filter."""
    bpm = sample.get("bpm")
    if bpm is None:
        raise TcxSerializationError(f"The {which} heart rate sample has no bpm for the boundary trackpoint")
    return round_bpm(bpm)


def _el(parent: etree._Element, tag: str, text: str | None = None, **attrib: str) -> etree._Element:
    el = etree.SubElement(parent, f"{{{TCX_NS}}}{tag}", attrib=attrib)
    if text is not None:
        el.text = text
    return el


def _build_document(
    sport: str,
    start_iso: str,
    total_seconds: str,
    calories: str,
    trackpoints: list[tuple[str, int]],
    creator_name: str,
    author_name: str,
) -> etree._Element:
    root = etree.Element(f"{{{TCX_NS}}}TrainingCenterDatabase", nsmap=NSMAP)
    root.set(f"{{{XSI_NS}}}schemaLocation", TCX_SCHEMA_LOCATION)

    activities = _el(root, "Activities")
    activity = _el(activities, "Activity", Sport=sport)
    _el(activity, "Id", start_iso)

    lap = _el(activity, "Lap", StartTime=start_iso)
    _el(lap, "TotalTimeSeconds", total_seconds)
    _el(lap, "DistanceMeters", "0.0")
    _el(lap, "Calories", calories)
    _el(lap, "Intensity", "Active")
    _el(lap, "TriggerMethod", "Manual")
    track = _el(lap, "Track")
    for time_iso, bpm in trackpoints:
        point = _el(track, "Trackpoint")
        _el(point, "Time", time_iso)
        heart_rate = _el(point, "HeartRateBpm")
        _el(heart_rate, "Value", str(bpm))

    creator = _el(activity, "Creator")
    creator.set(f"{{{XSI_NS}}}type", "Device_t")
    _el(creator, "Name", creator_name)

    extensions = _el(activity, "Extensions")
    lx = etree.SubElement(extensions, f"{{{ACTIVITY_EXT_NS}}}LX")
    _el(lx, "ActiveSeconds", total_seconds)
    _el(lx, "ElapsedSeconds", total_seconds)
    _el(lx, "DistanceMeters", "0")
    _el(lx, "KiloCalories", calories)

    author = _el(root, "Author")
    author.set(f"{{{XSI_NS}}}type", "Application_t")
    _el(author, "Name", author_name)
    return root
