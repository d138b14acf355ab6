"""Tests for METAR client with mocked HTTP responses."""

from __future__ import annotations

import httpx
import pytest

from flightplan.contracts.enums import CloudCover, FlightConditions
from flightplan.services.weather.metar_client import AviationWeatherClient, flight_conditions

SAMPLE_METAR = {
    "icaoId": "KORD",
    "reportTime": "2025-06-15T08:51:00Z",
    "temp": 18.0,
    "dewp": 12.0,
    "wdir": 270,
    "wspd": 10,
    "wgst": 18,
    "visib": "10+",
    "altim": 1015.0,
    "fltcat": "VFR",
    "clouds": [
        {"cover": "FEW", "base": 3000},
        {"cover": "SCT", "base": 5000},
    ],
    "rawOb": "METAR KORD 150851Z 27010G18KT 10SM FEW030 SCT050 18/12 A2997",
}


def _client_returning(payload, captured: list | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(200, json=payload)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestAviationWeatherClient:
    async def test_fetch_current(self):
        async with _client_returning([SAMPLE_METAR]) as http:
            client = AviationWeatherClient(http)
            [report] = await client.fetch_current(["kord"])
        assert report.airport == "KORD"
        assert report.temperature_c == 18.0
        assert report.wind.direction_deg == 270
        assert report.wind.gust_kt == 18
        assert report.visibility_sm == 10.0
        assert report.conditions == FlightConditions.VFR
        assert report.clouds[0].cover == CloudCover.FEW
        assert report.clouds[0].base_ft == 3000
        assert report.ceiling_ft is None
        assert report.raw_metar.startswith("METAR KORD")

    async def test_request_parameters(self):
        captured: list[httpx.Request] = []
        async with _client_returning([], captured) as http:
            client = AviationWeatherClient(http, base_url="https://wx.test/metar")
            await client.fetch_current(["kord", "KMDW"])
        request = captured[0]
        assert request.url.host == "wx.test"
        assert request.url.params["ids"] == "KORD,KMDW"
        assert request.url.params["format"] == "json"

    async def test_no_airports_no_request(self):
        captured: list[httpx.Request] = []
        async with _client_returning([], captured) as http:
            assert await AviationWeatherClient(http).fetch_current([]) == []
        assert captured == []

    async def test_keeps_newest_observation_per_station(self):
        older = {**SAMPLE_METAR, "reportTime": "2025-06-15T07:51:00Z", "temp": 15.0}
        async with _client_returning([SAMPLE_METAR, older]) as http:
            reports = await AviationWeatherClient(http).fetch_current(["KORD"])
        assert len(reports) == 1
        assert reports[0].temperature_c == 18.0

    async def test_ceiling_from_bkn_layer(self):
        metar = {
            **SAMPLE_METAR,
            "fltcat": None,
            "visib": 6,
            "clouds": [
                {"cover": "FEW", "base": 2000},
                {"cover": "OVC", "base": 6000},
                {"cover": "BKN", "base": 2800},
            ],
        }
        async with _client_returning([metar]) as http:
            [report] = await AviationWeatherClient(http).fetch_current(["KORD"])
        assert report.ceiling_ft == 2800
        assert report.conditions == FlightConditions.MVFR

    async def test_variable_wind_has_no_vector(self):
        metar = {**SAMPLE_METAR, "wdir": "VRB", "wspd": 3}
        async with _client_returning([metar]) as http:
            [report] = await AviationWeatherClient(http).fetch_current(["KORD"])
        assert report.wind is None

    async def test_http_error_propagates(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(503))
        async with httpx.AsyncClient(transport=transport) as http:
            with pytest.raises(httpx.HTTPStatusError):
                await AviationWeatherClient(http).fetch_current(["KORD"])


class TestFlightConditions:
    @pytest.mark.parametrize(
        "ceiling, visibility, expected",
        [
            (None, None, FlightConditions.VFR),
            (5000, 10, FlightConditions.VFR),
            (3000, 10, FlightConditions.MVFR),
            (5000, 4, FlightConditions.MVFR),
            (800, 10, FlightConditions.IFR),
            (5000, 2, FlightConditions.IFR),
            (400, 10, FlightConditions.LIFR),
            (5000, 0.5, FlightConditions.LIFR),
        ],
    )
    def test_categories(self, ceiling, visibility, expected):
        assert flight_conditions(ceiling, visibility) == expected
