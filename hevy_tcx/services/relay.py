"""
One-way relay carrying captured workouts from the request-issuing side
to the privileged side that holds the capture slot.

The channel stamps every message with the window that posted it; the receiver
only trusts messages posted by the channel itself and carrying the expected tag,
so other code sharing the channel cannot inject fake workouts.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from hevy_tcx.config import settings
from hevy_tcx.services.capture_store import PayloadSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageEvent:
    """A message as seen by listeners: who posted it and what."""

    source: object
    data: Any


Listener = Callable[[MessageEvent], None]


class RelayChannel:
    """Same-window broadcast channel."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def post_message(self, data: Any, sender: object | None = None) -> None:
        """
        Deliver data to every listener. sender defaults to this channel ("self");
        messages coming from anywhere else must pass their own identity.
        """
        event = MessageEvent(source=self if sender is None else sender, data=data)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Relay listener %r failed", listener)


def send_workout(channel: RelayChannel, payload: Any, tag: str | None = None) -> None:
    """Send side: post a tagged workout payload on the channel."""
    channel.post_message({"type": tag or settings.relay_message_tag, "payload": payload})


class CaptureReceiver:
    """Receive side: authenticates relay messages and stores accepted payloads."""

    def __init__(
        self,
        channel: RelayChannel,
        slot: PayloadSlot,
        tag: str | None = None,
    ) -> None:
        self._channel = channel
        self._slot = slot
        self._tag = tag or settings.relay_message_tag
        self._on_capture: list[Callable[[dict[str, Any]], None]] = []

    def start(self) -> None:
        self._channel.subscribe(self.handle)

    def stop(self) -> None:
        self._channel.unsubscribe(self.handle)

    def on_capture(self, callback: Callable[[dict[str, Any]], None]) -> None:
        """Register a callback run after each accepted capture."""
        self._on_capture.append(callback)

    def is_trusted(self, event: MessageEvent) -> bool:
        """Sender must be this window and the tag must match."""
        if event.source is not self._channel:
            return False
        data = event.data
        return isinstance(data, Mapping) and data.get("type") == self._tag

    def handle(self, event: MessageEvent) -> None:
        if not self.is_trusted(event):
            logger.debug("Ignoring relay message from %r", event.source)
            return
        payload = event.data.get("payload")
        self._slot.set(payload)
        short_id = payload.get("short_id") if isinstance(payload, Mapping) else None
        logger.info("Workout data captured (short_id=%s)", short_id)
        for callback in self._on_capture:
            callback(payload)
