"""Pytest configuration and shared fixtures."""

import copy

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hevy_tcx.main import app
from hevy_tcx.services.runtime import build_runtime

pytest_plugins = ["pytest_asyncio"]

WORKOUT = {
    "id": "b8f1c2d4-0000-4000-8000-000000000001",
    "short_id": "aB3dE5",
    "title": "Push Day",
    "start_time": 1764766800,
    "end_time": 1764770400,
    "exercises": [{"title": "Bench Press (Barbell)", "sets": [{"weight_kg": 80, "reps": 8}]}],
    "biometrics": {
        "total_calories": 412,
        "heart_rate_samples": [
            {"timestamp_ms": 1764766932000, "bpm": 98.4},
            {"timestamp_ms": 1764766812000, "bpm": 91},
            {"timestamp_ms": 1764767052000, "bpm": 131.5},
        ],
    },
}


@pytest.fixture
def workout() -> dict:
    """Fresh copy of a realistic captured workout record."""
    return copy.deepcopy(WORKOUT)


@pytest.fixture
def runtime():
    rt = build_runtime()
    yield rt
    rt.stop()


@pytest_asyncio.fixture
async def client(runtime):
    """AsyncClient against the app with a fresh capture runtime (lifespan not run)."""
    app.state.runtime = runtime
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.state.runtime = None
