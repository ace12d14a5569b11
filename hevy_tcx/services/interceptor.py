"""
Response hooks that watch shared httpx clients for Hevy workout payloads.

Hooks are observational: they never raise into the caller, never change the
response, and only read the body of responses under the watched URL prefix.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from hevy_tcx.services.validator import is_workout_record

logger = logging.getLogger(__name__)


class WorkoutCaptureHook:
    """Inspect responses under url_prefix and publish workout records."""

    def __init__(self, url_prefix: str, publish: Callable[[Any], None]) -> None:
        self.url_prefix = url_prefix
        self._publish = publish

    def matches(self, response: httpx.Response) -> bool:
        return str(response.request.url).startswith(self.url_prefix)

    def on_response(self, response: httpx.Response) -> None:
        """Hook for httpx.Client."""
        try:
            if not self.matches(response):
                return
            response.read()
            self._inspect(response)
        except Exception:
            logger.exception("Capture hook failed for %s", response.request.url)

    async def on_response_async(self, response: httpx.Response) -> None:
        """Hook for httpx.AsyncClient."""
        try:
            if not self.matches(response):
                return
            await response.aread()
            self._inspect(response)
        except Exception:
            logger.exception("Capture hook failed for %s", response.request.url)

    def _inspect(self, response: httpx.Response) -> None:
        try:
            data = json.loads(response.content)
        except ValueError:
            logger.debug("Non-JSON body from %s, skipping", response.request.url)
            return
        if not is_workout_record(data):
            return
        logger.debug("Workout record seen at %s", response.request.url)
        self._publish(data)


def install_capture_hook(
    client: httpx.Client | httpx.AsyncClient,
    hook: WorkoutCaptureHook,
) -> None:
    """Append hook to the client's response hooks (async variant for AsyncClient)."""
    callback = hook.on_response_async if isinstance(client, httpx.AsyncClient) else hook.on_response
    hooks = client.event_hooks
    responses = list(hooks.get("response", []))
    if callback not in responses:
        responses.append(callback)
    client.event_hooks = {**hooks, "response": responses}
