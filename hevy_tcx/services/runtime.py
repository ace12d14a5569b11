"""Wiring of the capture pipeline owned by one app instance."""

from __future__ import annotations

from typing import Any

from hevy_tcx.config import settings
from hevy_tcx.services.capture_store import PayloadSlot
from hevy_tcx.services.interceptor import WorkoutCaptureHook
from hevy_tcx.services.relay import CaptureReceiver, RelayChannel, send_workout
from hevy_tcx.services.visibility import ExportControl, LocationWatcher, PageState


class CaptureRuntime:
    """Channel, slot, receiver and export control; hook publishes into the channel."""

    def __init__(self, location: str | None = None) -> None:
        self.channel = RelayChannel()
        self.slot = PayloadSlot()
        self.receiver = CaptureReceiver(self.channel, self.slot)
        self.page = PageState(location)
        self.control = ExportControl()
        self.watcher = LocationWatcher(self.page.get, self.slot, self.control)
        self.receiver.on_capture(self.watcher.on_capture)
        self.hook = WorkoutCaptureHook(settings.hevy_workout_url_prefix, self.publish)

    def publish(self, payload: Any) -> None:
        send_workout(self.channel, payload)

    def start(self) -> None:
        self.receiver.start()
        self.watcher.check()

    def stop(self) -> None:
        self.receiver.stop()


def build_runtime(location: str | None = None) -> CaptureRuntime:
    runtime = CaptureRuntime(location)
    runtime.start()
    return runtime
