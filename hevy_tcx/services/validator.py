"""Cheap shape check telling workout records apart from other API responses."""

from collections.abc import Mapping
from typing import Any


def is_workout_record(value: Any) -> bool:
    """True if value is an object with truthy `biometrics` and `exercises`. Never raises."""
    if not isinstance(value, Mapping):
        return False
    return bool(value.get("biometrics")) and bool(value.get("exercises"))
