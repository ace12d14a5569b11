"""Tests for the export trigger: filename, no-data and conversion failures."""

from unittest.mock import MagicMock

import pytest

from hevy_tcx.core.errors import NO_DATA_MESSAGE, NoWorkoutCaptured, TcxExportError
from hevy_tcx.schemas.tcx import ExportStatus
from hevy_tcx.services.capture_store import PayloadSlot
from hevy_tcx.services.export import TCX_MEDIA_TYPE, build_export, export_captured, export_filename


def _slot(payload=None) -> PayloadSlot:
    slot = PayloadSlot()
    if payload is not None:
        slot.set(payload)
    return slot


def test_export_filename_uses_short_id(workout):
    assert export_filename(workout) == "hevy-workout-aB3dE5.tcx"


def test_export_filename_placeholder_without_short_id(workout):
    workout.pop("short_id")
    assert export_filename(workout) == "hevy-workout-UNKNOWN-ID.tcx"
    assert export_filename({"short_id": ""}) == "hevy-workout-UNKNOWN-ID.tcx"


def test_export_filename_strips_header_unsafe_chars():
    assert export_filename({"short_id": 'a"b\r\nc'}) == "hevy-workout-a_b__c.tcx"


def test_build_export_empty_slot_raises_no_data():
    with pytest.raises(NoWorkoutCaptured) as exc:
        build_export(_slot())
    assert str(exc.value) == NO_DATA_MESSAGE


def test_build_export_wraps_serializer_faults(workout):
    workout["start_time"] = "not a number"
    with pytest.raises(TcxExportError) as exc:
        build_export(_slot(workout))
    assert "start_time must be numeric" in str(exc.value)


def test_build_export_success(workout):
    export = build_export(_slot(workout))
    assert export.filename == "hevy-workout-aB3dE5.tcx"
    assert export.media_type == TCX_MEDIA_TYPE
    assert export.sample_count == 3
    assert export.start_time == "2025-12-03T13:00:00.000Z"
    assert "<TrainingCenterDatabase" in export.content


def test_export_captured_delivers_file(workout):
    deliver = MagicMock()
    report = export_captured(_slot(workout), deliver)
    assert report.status == ExportStatus.OK
    assert report.filename == "hevy-workout-aB3dE5.tcx"
    assert report.sample_count == 3
    deliver.assert_called_once()
    content, filename, media_type = deliver.call_args.args
    assert filename == "hevy-workout-aB3dE5.tcx"
    assert media_type == TCX_MEDIA_TYPE
    assert content.startswith("<?xml")


def test_export_captured_no_data_does_not_raise():
    deliver = MagicMock()
    report = export_captured(_slot(), deliver)
    assert report.status == ExportStatus.NO_DATA
    assert "REFRESH" in report.message
    deliver.assert_not_called()


def test_export_captured_reports_conversion_error(workout):
    workout["biometrics"]["heart_rate_samples"] = [{"timestamp_ms": 1764766812000, "bpm": "high"}]
    deliver = MagicMock()
    report = export_captured(_slot(workout), deliver)
    assert report.status == ExportStatus.ERROR
    assert report.message.startswith("Error converting data: ")
    deliver.assert_not_called()


def test_export_captured_reports_write_error(workout):
    deliver = MagicMock(side_effect=PermissionError("read-only"))
    report = export_captured(_slot(workout), deliver)
    assert report.status == ExportStatus.ERROR
    assert "read-only" in report.message


def test_export_reads_without_clearing(workout):
    slot = _slot(workout)
    build_export(slot)
    assert slot.get() == workout
