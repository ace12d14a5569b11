"""
Hevy API client: fetch a single workout by short id.
Requests go through the shared clients, so the capture hook sees every response.
"""
import logging
from typing import Any

import httpx

from hevy_tcx.config import settings
from hevy_tcx.services.http_client import get_http_client, get_sync_http_client

logger = logging.getLogger(__name__)


def workout_url(short_id: str) -> str:
    return f"{settings.hevy_workout_url_prefix.rstrip('/')}/{(short_id or '').strip()}"


def _headers() -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if settings.hevy_api_key:
        headers["x-api-key"] = settings.hevy_api_key
    if settings.hevy_auth_token:
        headers["auth-token"] = settings.hevy_auth_token
    return headers


def _log_response_error(method: str, url: str, response: httpx.Response) -> None:
    """Log HTTP error without sensitive data."""
    body = (response.text or "")[:500]
    logger.warning("Hevy %s %s -> %s body=%s", method, url, response.status_code, body)


async def fetch_workout(short_id: str) -> Any:
    """GET a workout through the shared async client. Raises httpx.HTTPStatusError on 4xx/5xx."""
    url = workout_url(short_id)
    r = await get_http_client().get(url, headers=_headers())
    if r.status_code >= 400:
        _log_response_error("GET", url, r)
    r.raise_for_status()
    return r.json() if r.content else None


def fetch_workout_sync(short_id: str) -> Any:
    """Same as fetch_workout, through the shared sync client."""
    url = workout_url(short_id)
    r = get_sync_http_client().get(url, headers=_headers())
    if r.status_code >= 400:
        _log_response_error("GET", url, r)
    r.raise_for_status()
    return r.json() if r.content else None
