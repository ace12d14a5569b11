"""
Shared long-lived httpx clients (async and sync) for Hevy API calls.
Initialized in app lifespan; both carry the workout capture hook when one is given.
"""
from __future__ import annotations

import httpx

from hevy_tcx.services.interceptor import WorkoutCaptureHook, install_capture_hook

_http_client: httpx.AsyncClient | None = None
_sync_http_client: httpx.Client | None = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared async HTTP client. Must be initialized via init_http_client() first."""
    if _http_client is None:
        raise RuntimeError("HTTP client not initialized; ensure app lifespan has run init_http_client().")
    return _http_client


def get_sync_http_client() -> httpx.Client:
    """Return the shared sync HTTP client. Must be initialized via init_http_client() first."""
    if _sync_http_client is None:
        raise RuntimeError("HTTP client not initialized; ensure app lifespan has run init_http_client().")
    return _sync_http_client


def init_http_client(
    timeout: float = 30.0,
    capture_hook: WorkoutCaptureHook | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sync_transport: httpx.BaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create and store the shared clients. Call from app lifespan startup."""
    global _http_client, _sync_http_client
    if _http_client is not None:
        return _http_client
    _http_client = httpx.AsyncClient(timeout=timeout, transport=transport)
    _sync_http_client = httpx.Client(timeout=timeout, transport=sync_transport)
    if capture_hook is not None:
        install_capture_hook(_http_client, capture_hook)
        install_capture_hook(_sync_http_client, capture_hook)
    return _http_client


async def close_http_client() -> None:
    """Close the shared clients. Call from app lifespan shutdown."""
    global _http_client, _sync_http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
    if _sync_http_client is not None:
        _sync_http_client.close()
        _sync_http_client = None
