"""Tests for export control visibility polling."""

from unittest.mock import MagicMock

from hevy_tcx.services.capture_store import PayloadSlot
from hevy_tcx.services.visibility import (
    EXPORT_LABEL,
    WATCH_JOB_ID,
    ExportControl,
    LocationWatcher,
    PageState,
    is_workout_page,
)

WORKOUT_PAGE = "https://hevy.com/workout/aB3dE5"
FEED_PAGE = "https://hevy.com/feed"


def _watcher(location=None, payload=None):
    page = PageState(location)
    slot = PayloadSlot()
    if payload is not None:
        slot.set(payload)
    control = ExportControl()
    return page, slot, control, LocationWatcher(page.get, slot, control)


def test_is_workout_page():
    assert is_workout_page(WORKOUT_PAGE)
    assert not is_workout_page(FEED_PAGE)
    assert not is_workout_page(None)


def test_hidden_until_captured():
    _, _, control, watcher = _watcher(WORKOUT_PAGE)
    assert watcher.check() is False
    assert control.created is False


def test_shown_on_workout_page_with_capture(workout):
    _, _, control, watcher = _watcher(WORKOUT_PAGE, workout)
    assert watcher.check() is True
    assert control.created is True
    assert control.label == EXPORT_LABEL


def test_hidden_after_navigating_away(workout):
    page, _, control, watcher = _watcher(WORKOUT_PAGE, workout)
    watcher.check()
    page.location = FEED_PAGE
    watcher.poll()
    assert control.visible is False
    assert control.created is True


def test_poll_only_rechecks_on_navigation(workout):
    page, slot, control, watcher = _watcher(WORKOUT_PAGE)
    watcher.check()
    slot.set(workout)
    watcher.poll()
    assert control.visible is False
    page.location = "https://hevy.com/workout/zZ9yY8"
    watcher.poll()
    assert control.visible is True


def test_capture_shows_control_immediately(workout):
    _, slot, control, watcher = _watcher(WORKOUT_PAGE)
    slot.set(workout)
    watcher.on_capture(workout)
    assert control.visible is True


def test_schedule_adds_interval_job():
    _, _, _, watcher = _watcher()
    scheduler = MagicMock()
    watcher.schedule(scheduler, 1.0)
    scheduler.add_job.assert_called_once_with(
        watcher.poll, "interval", seconds=1.0, id=WATCH_JOB_ID, replace_existing=True
    )
