"""Tests for the ICAO NOTAM client and Q-code classification."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from flightplan.contracts.enums import NotamCategory, NotamType, Priority
from flightplan.services.notam_client import IcaoNotamClient, classify

RUNWAY_CLOSURE = {
    "id": "A1234/25",
    "location": "KORD",
    "Qcode": "QMRLC",
    "Subject": "Runway",
    "Condition": "Closed",
    "startdate": "2025-06-15T06:00:00Z",
    "enddate": "2025-06-16T06:00:00Z",
    "all": "A1234/25 NOTAMN Q) KZAU/QMRLC/IV/NBO/A/000/999 E) RWY 10L/28R CLSD",
}


class TestClassify:
    def test_runway_closure_is_critical(self):
        notam_type, classification = classify("QMRLC")
        assert notam_type == NotamType.RUNWAY
        assert classification.category == NotamCategory.CLOSURE
        assert classification.severity == Priority.CRITICAL
        assert classification.impact_level == "critical"

    def test_taxiway_closure_is_high(self):
        notam_type, classification = classify("QMXLC")
        assert notam_type == NotamType.TAXIWAY
        assert classification.severity == Priority.HIGH

    def test_obstacle_change(self):
        notam_type, classification = classify("QOBCH")
        assert notam_type == NotamType.OBSTACLE
        assert classification.category == NotamCategory.CHANGE
        assert classification.severity == Priority.LOW

    def test_airspace_restriction(self):
        notam_type, classification = classify("QRTCA")
        assert notam_type == NotamType.AIRSPACE
        assert classification.severity == Priority.MEDIUM

    @pytest.mark.parametrize("q_code", [None, "", "Q", "QXXXX"])
    def test_unknown_codes(self, q_code):
        notam_type, classification = classify(q_code)
        assert notam_type == NotamType.GENERAL
        assert classification.category == NotamCategory.INFORMATION


class TestIcaoNotamClient:
    def test_api_key_required(self):
        with pytest.raises(ValueError):
            IcaoNotamClient("")

    async def test_fetch_current(self):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=[RUNWAY_CLOSURE, {"id": "X", "location": None}])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = IcaoNotamClient("secret", http, base_url="https://icao.test/api/")
            [notam] = await client.fetch_current(["kord"])

        request = captured[0]
        assert request.url.path == "/api/notams-realtime-list"
        assert request.url.params["locations"] == "KORD"
        assert request.url.params["api_key"] == "secret"

        assert notam.number == "A1234/25"
        assert notam.airport == "KORD"
        assert notam.type == NotamType.RUNWAY
        assert notam.effective_from == datetime(2025, 6, 15, 6, tzinfo=timezone.utc)
        assert notam.is_active_at(datetime(2025, 6, 15, 12, tzinfo=timezone.utc))
        assert not notam.is_active_at(datetime(2025, 6, 17, tzinfo=timezone.utc))

    async def test_permanent_notam_without_end(self):
        permanent = {**RUNWAY_CLOSURE, "enddate": "PERM"}
        transport = httpx.MockTransport(lambda req: httpx.Response(200, json=[permanent]))
        async with httpx.AsyncClient(transport=transport) as http:
            [notam] = await IcaoNotamClient("k", http).fetch_current(["KORD"])
        assert notam.effective_to is None

    async def test_server_error_propagates(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(500))
        async with httpx.AsyncClient(transport=transport) as http:
            with pytest.raises(httpx.HTTPStatusError):
                await IcaoNotamClient("k", http).fetch_current(["KORD"])
