"""Weather store: latest report per airport."""

from __future__ import annotations

from datetime import timedelta

from flightplan.contracts.weather import WeatherReport
from flightplan.persistence.snapshot_store import SnapshotStore
from flightplan.persistence.stores.base import AirportCacheStore
from flightplan.services.weather.metar_client import WeatherProvider

WEATHER_KEY = "flight-plan-weather"


class WeatherStore(AirportCacheStore[WeatherReport]):
    def __init__(
        self,
        snapshots: SnapshotStore,
        provider: WeatherProvider | None = None,
        refresh_threshold: timedelta = timedelta(minutes=15),
    ):
        super().__init__(
            WeatherReport, snapshots, WEATHER_KEY, "weather", provider, refresh_threshold
        )

    def _merge(self, airports: list[str], fetched: list[WeatherReport]) -> list[WeatherReport]:
        latest: dict[str, WeatherReport] = {}
        for report in fetched:
            current = latest.get(report.airport)
            if current is None or report.observed_at > current.observed_at:
                latest[report.airport] = report

        merged = []
        for report in latest.values():
            existing = self._cached(report.airport)
            if existing:
                # Replace in place: one report per airport
                report = report.model_copy(
                    update={"id": existing[0].id, "created_at": existing[0].created_at}
                )
            merged.append(report)
        return merged

    async def get_for_airport(self, airport: str) -> WeatherReport | None:
        self._require_initialized()
        cached = self._cached(airport)
        return cached[0].model_copy(deep=True) if cached else None
