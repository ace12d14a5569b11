"""Exception hierarchy for capture, serialization and export."""

from __future__ import annotations

NO_DATA_MESSAGE = (
    "No workout data captured yet. "
    "Please REFRESH the page so the network request can be intercepted."
)


class HevyTcxError(Exception):
    """Base exception for all hevy_tcx errors."""


class NoWorkoutCaptured(HevyTcxError):
    """Export requested before any workout payload was captured."""

    def __init__(self, message: str = NO_DATA_MESSAGE) -> None:
        super().__init__(message)


class TcxSerializationError(HevyTcxError, ValueError):
    """Workout record has a field the serializer cannot convert."""


class TcxExportError(HevyTcxError):
    """Serialization failed during export; no artifact was produced."""


class WorkoutFileError(HevyTcxError):
    """Workout JSON file could not be read or parsed."""
