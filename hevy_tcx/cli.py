"""
Command-line converter: read a pre-captured Hevy workout JSON, write a TCX file.

Usage: hevy-tcx convert [--input input.json] [--output output.tcx] [--sport Other]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from hevy_tcx.config import settings
from hevy_tcx.core.errors import HevyTcxError, WorkoutFileError
from hevy_tcx.services.tcx import workout_to_tcx

logger = logging.getLogger("hevy_tcx.cli")


def load_workout(path: Path) -> Any:
    """Read and parse a workout JSON file. Raises WorkoutFileError."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise WorkoutFileError(f"Could not read {path.name}: {e}") from e
    except ValueError as e:
        raise WorkoutFileError(f"Could not parse {path.name}: {e}") from e


def convert(input_path: Path, output_path: Path, sport: str | None = None) -> int:
    """Convert input_path to output_path; returns a process exit code."""
    try:
        data = load_workout(input_path)
        document = workout_to_tcx(data, sport=sport)
    except HevyTcxError as e:
        logger.error("Error: %s", e)
        return 1
    for warning in document.warnings:
        logger.warning("Warning: %s", warning)

    try:
        output_path.write_text(document.content, encoding="utf-8")
    except OSError as e:
        logger.error("Error writing file: %s", e)
        return 1
    logger.info("Success! Created '%s'", output_path.name)
    logger.info("Converted %d heart rate samples.", document.sample_count)
    logger.info("Workout Date: %s", document.start_time)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hevy-tcx", description="Convert Hevy workout JSON to TCX")
    sub = parser.add_subparsers(dest="command", required=True)
    conv = sub.add_parser("convert", help="Convert a workout JSON file to TCX")
    conv.add_argument("--input", type=Path, default=Path(settings.input_filename), help="Workout JSON file")
    conv.add_argument("--output", type=Path, default=Path(settings.output_filename), help="TCX file to write")
    conv.add_argument("--sport", default=settings.tcx_sport, help="TCX Activity Sport attribute")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)
    args = build_parser().parse_args(argv)
    if args.command == "convert":
        return convert(args.input, args.output, sport=args.sport)
    return 2


if __name__ == "__main__":
    sys.exit(main())
