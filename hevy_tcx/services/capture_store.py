"""
Single-slot holder for the most recently captured workout payload.
Each capture replaces the previous one (last write wins); exports only read it.
"""
from __future__ import annotations

import threading
from typing import Any


class PayloadSlot:
    """Owned container for the captured workout; safe to set from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._payload: dict[str, Any] | None = None
        self._captures = 0

    def set(self, payload: dict[str, Any] | None) -> None:
        with self._lock:
            self._payload = payload
            self._captures += 1

    def get(self) -> dict[str, Any] | None:
        with self._lock:
            return self._payload

    @property
    def is_empty(self) -> bool:
        return self.get() is None

    @property
    def capture_count(self) -> int:
        """Number of captures accepted so far (replaced ones included)."""
        with self._lock:
            return self._captures
