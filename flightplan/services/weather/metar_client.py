"""NOAA Aviation Weather Center METAR client."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

import httpx

from flightplan.contracts.common import Wind
from flightplan.contracts.enums import CloudCover, FlightConditions
from flightplan.contracts.weather import CloudLayer, WeatherReport

logger = logging.getLogger(__name__)

BASE_URL = "https://aviationweather.gov/api/data/metar"

_COVER_MAP = {
    "SKC": CloudCover.SKC,
    "CLR": CloudCover.CLR,
    "FEW": CloudCover.FEW,
    "SCT": CloudCover.SCT,
    "BKN": CloudCover.BKN,
    "OVC": CloudCover.OVC,
}


class WeatherProvider(Protocol):
    async def fetch_current(self, airports: list[str]) -> list[WeatherReport]: ...


class AviationWeatherClient:
    """Async HTTP client for current METAR observations."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        base_url: str = BASE_URL,
        timeout: float = 15.0,
    ):
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url

    async def fetch_current(self, airports: list[str]) -> list[WeatherReport]:
        """Fetch the latest METAR for each airport. Airports without one are omitted."""
        if not airports:
            return []
        resp = await self._client.get(
            self._base_url,
            params={"ids": ",".join(a.upper() for a in airports), "format": "json"},
        )
        resp.raise_for_status()
        data = resp.json() or []

        # NOAA may return several observations per station, newest first
        latest: dict[str, WeatherReport] = {}
        for entry in data:
            report = _parse_metar(entry)
            if report.airport not in latest:
                latest[report.airport] = report
        logger.debug("Fetched %d METARs for %s", len(latest), airports)
        return list(latest.values())

    async def aclose(self) -> None:
        await self._client.aclose()


def _parse_metar(raw: dict) -> WeatherReport:
    """Parse a single NOAA METAR JSON entry into a WeatherReport."""
    obs_time_str = raw.get("reportTime", raw.get("obsTime", ""))
    try:
        obs_time = datetime.fromisoformat(obs_time_str.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        obs_time = datetime.now(tz=timezone.utc)

    clouds: list[CloudLayer] = []
    for layer in raw.get("clouds", []):
        cover = _COVER_MAP.get(layer.get("cover", ""))
        if cover is not None:
            clouds.append(CloudLayer(cover=cover, base_ft=layer.get("base")))

    # Ceiling: lowest BKN or OVC
    ceiling = None
    for cl in clouds:
        if cl.cover in (CloudCover.BKN, CloudCover.OVC) and cl.base_ft is not None:
            if ceiling is None or cl.base_ft < ceiling:
                ceiling = cl.base_ft

    visibility = _parse_visibility(raw.get("visib"))
    conditions = raw.get("fltcat")
    if conditions not in {c.value for c in FlightConditions}:
        conditions = flight_conditions(ceiling, visibility)

    return WeatherReport(
        airport=raw.get("icaoId", raw.get("stationId", "ZZZZ")),
        observed_at=obs_time,
        conditions=conditions,
        raw_metar=raw.get("rawOb"),
        wind=_parse_wind(raw),
        visibility_sm=visibility,
        ceiling_ft=ceiling,
        clouds=clouds,
        temperature_c=raw.get("temp"),
        dewpoint_c=raw.get("dewp"),
        altimeter_hpa=raw.get("altim"),
    )


def _parse_wind(raw: dict) -> Wind | None:
    direction, speed = raw.get("wdir"), raw.get("wspd")
    # "VRB" and missing directions carry no usable wind vector
    if not isinstance(direction, (int, float)) or speed is None:
        return None
    return Wind(direction_deg=direction, speed_kt=speed, gust_kt=raw.get("wgst"))


def _parse_visibility(visib) -> float | None:
    """NOAA returns statute miles, sometimes as '10+'."""
    if visib is None:
        return None
    try:
        return float(str(visib).rstrip("+"))
    except ValueError:
        return None


def flight_conditions(ceiling_ft: int | None, visibility_sm: float | None) -> FlightConditions:
    """FAA flight category from ceiling and visibility, worst of the two."""
    ceiling = ceiling_ft if ceiling_ft is not None else 99999
    visibility = visibility_sm if visibility_sm is not None else 99.0
    if ceiling < 500 or visibility < 1:
        return FlightConditions.LIFR
    if ceiling < 1000 or visibility < 3:
        return FlightConditions.IFR
    if ceiling <= 3000 or visibility <= 5:
        return FlightConditions.MVFR
    return FlightConditions.VFR
