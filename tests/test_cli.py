"""Tests for the file-based converter CLI."""

import json
import logging

from lxml import etree

from hevy_tcx.cli import main


def test_convert_writes_tcx(tmp_path, workout, caplog):
    caplog.set_level(logging.INFO)
    src = tmp_path / "input.json"
    dst = tmp_path / "output.tcx"
    src.write_text(json.dumps(workout), encoding="utf-8")

    code = main(["convert", "--input", str(src), "--output", str(dst)])

    assert code == 0
    root = etree.fromstring(dst.read_bytes())
    assert root.tag.endswith("TrainingCenterDatabase")
    assert "Success! Created 'output.tcx'" in caplog.text
    assert "Converted 3 heart rate samples." in caplog.text
    assert "Workout Date: 2025-12-03T13:00:00.000Z" in caplog.text


def test_convert_missing_input_writes_nothing(tmp_path, caplog):
    dst = tmp_path / "output.tcx"
    code = main(["convert", "--input", str(tmp_path / "missing.json"), "--output", str(dst)])
    assert code == 1
    assert not dst.exists()
    assert "Could not read missing.json" in caplog.text


def test_convert_invalid_json_writes_nothing(tmp_path, caplog):
    src = tmp_path / "input.json"
    src.write_text("{not json", encoding="utf-8")
    dst = tmp_path / "output.tcx"
    code = main(["convert", "--input", str(src), "--output", str(dst)])
    assert code == 1
    assert not dst.exists()
    assert "Could not parse input.json" in caplog.text


def test_convert_without_samples_warns(tmp_path, workout, caplog):
    workout["biometrics"]["heart_rate_samples"] = []
    src = tmp_path / "input.json"
    src.write_text(json.dumps(workout), encoding="utf-8")
    dst = tmp_path / "output.tcx"

    code = main(["convert", "--input", str(src), "--output", str(dst), "--sport", "Other"])

    assert code == 0
    assert dst.exists()
    assert "No heart rate samples found" in caplog.text
    assert "Converted 0 heart rate samples." in caplog.text
