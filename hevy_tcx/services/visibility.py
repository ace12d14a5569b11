"""
Export control visibility: shown only on a workout detail page once a workout
has been captured. The page location is polled (APScheduler interval job).
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from apscheduler.schedulers.base import BaseScheduler

from hevy_tcx.config import settings
from hevy_tcx.services.capture_store import PayloadSlot

logger = logging.getLogger(__name__)

EXPORT_LABEL = "Export TCX"
WATCH_JOB_ID = "export-visibility"


def is_workout_page(location: str | None, marker: str | None = None) -> bool:
    return bool(location) and (marker or settings.workout_page_marker) in location


class ExportControl:
    """State of the export button; created lazily the first time it is shown."""

    def __init__(self) -> None:
        self.created = False
        self.visible = False
        self.label: str | None = None

    def ensure_visible(self) -> None:
        if not self.created:
            self.created = True
            self.label = EXPORT_LABEL
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def mark_ready(self) -> None:
        """Visual cue that data is ready; only touches an existing control."""
        if self.created:
            self.label = EXPORT_LABEL


class PageState:
    """Last page location reported by the client."""

    def __init__(self, location: str | None = None) -> None:
        self.location = location

    def get(self) -> str | None:
        return self.location


class LocationWatcher:
    """Keeps the export control in sync with page location and capture state."""

    def __init__(
        self,
        get_location: Callable[[], str | None],
        slot: PayloadSlot,
        control: ExportControl,
        marker: str | None = None,
    ) -> None:
        self._get_location = get_location
        self._slot = slot
        self._control = control
        self._marker = marker or settings.workout_page_marker
        self._last_location: str | None = None

    def check(self) -> bool:
        """Show or hide the control; returns whether it is visible."""
        location = self._get_location()
        self._last_location = location
        if is_workout_page(location, self._marker) and not self._slot.is_empty:
            self._control.ensure_visible()
        else:
            self._control.hide()
        return self._control.visible

    def poll(self) -> None:
        """Interval tick: re-check only when the user navigated."""
        location = self._get_location()
        if location != self._last_location:
            logger.debug("Location changed to %s", location)
            self.check()

    def on_capture(self, payload: Any) -> None:
        self._control.mark_ready()
        self.check()

    def schedule(self, scheduler: BaseScheduler, seconds: float | None = None) -> None:
        scheduler.add_job(
            self.poll,
            "interval",
            seconds=seconds or settings.visibility_poll_seconds,
            id=WATCH_JOB_ID,
            replace_existing=True,
        )
