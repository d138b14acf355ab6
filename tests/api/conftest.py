"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from flightplan.api.app import app
from flightplan.config import Settings
from flightplan.persistence.snapshot_store import MemorySnapshotStore
from flightplan.services.container import build_container

METAR = {
    "icaoId": "KORD",
    "reportTime": "2025-06-15T08:51:00Z",
    "temp": 18.0,
    "dewp": 12.0,
    "wdir": 270,
    "wspd": 10,
    "visib": "10+",
    "altim": 1015.0,
    "fltcat": "VFR",
    "clouds": [{"cover": "FEW", "base": 3000}],
    "rawOb": "METAR KORD 150851Z 27010KT 10SM FEW030 18/12 A2997",
}

NOTAM = {
    "id": "A1234/25",
    "location": "KORD",
    "Qcode": "QMRLC",
    "startdate": "2025-06-15T06:00:00Z",
    "enddate": "2025-06-16T06:00:00Z",
    "all": "RWY 10L/28R CLSD",
}


def _upstream(request: httpx.Request) -> httpx.Response:
    if request.url.host == "wx.test":
        return httpx.Response(200, json=[METAR])
    if request.url.host == "icao.test":
        return httpx.Response(200, json=[NOTAM])
    return httpx.Response(404)


@pytest.fixture
def settings():
    return Settings(
        avwx_base_url="https://wx.test/metar",
        icao_base_url="https://icao.test/api",
        icao_api_key="test-key",
    )


@pytest.fixture
async def container(settings):
    """Service graph on in-memory snapshots with mocked upstream APIs."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(_upstream))
    built = build_container(settings, snapshots=MemorySnapshotStore(), http_client=http)
    await built.orchestrator.initialize()
    yield built
    await built.orchestrator.cleanup()
    await built.aclose()


@pytest.fixture
def test_app(container):
    """FastAPI app bound to the test container (lifespan is not run)."""
    app.state.container = container
    yield app
    del app.state.container


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
