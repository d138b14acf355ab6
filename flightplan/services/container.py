"""Builds the service graph from settings and registers it with the orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

import httpx

from flightplan.config import Settings
from flightplan.persistence.snapshot_store import (
    FirestoreSnapshotStore,
    MemorySnapshotStore,
    SnapshotStore,
)
from flightplan.persistence.stores.aircraft_store import AircraftStore
from flightplan.persistence.stores.notam_store import NotamStore
from flightplan.persistence.stores.route_store import RouteStore
from flightplan.persistence.stores.weather_store import WeatherStore
from flightplan.services.chart_service import ChartService
from flightplan.services.magnetic import FixedVariation
from flightplan.services.notam_client import IcaoNotamClient
from flightplan.services.orchestrator import ServiceOrchestrator
from flightplan.services.planning_service import PlanningService
from flightplan.services.route_engine import RouteEngine
from flightplan.services.weather.metar_client import AviationWeatherClient

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    orchestrator: ServiceOrchestrator
    engine: RouteEngine
    routes: RouteStore
    aircraft: AircraftStore
    weather: WeatherStore
    notams: NotamStore
    charts: ChartService
    planning: PlanningService
    http_client: httpx.AsyncClient | None = None

    async def aclose(self) -> None:
        """Close the shared HTTP client used by the weather and NOTAM providers."""
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None


def build_container(
    settings: Settings,
    *,
    snapshots: SnapshotStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> ServiceContainer:
    """Wire every store and collaborator. Nothing is initialized here."""
    if snapshots is None:
        if settings.persistence == "firestore":
            snapshots = FirestoreSnapshotStore(project=settings.firestore_project)
        else:
            snapshots = MemorySnapshotStore()

    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout_s)

    variation = None
    if settings.magnetic_variation_deg is not None:
        variation = FixedVariation(settings.magnetic_variation_deg)
    engine = RouteEngine(variation)

    notam_provider = None
    if settings.icao_api_key:
        notam_provider = IcaoNotamClient(
            settings.icao_api_key, http_client, base_url=settings.icao_base_url
        )
    else:
        logger.warning("ICAO_API_KEY not set; NOTAM refresh is disabled")

    routes = RouteStore(snapshots, engine)
    aircraft = AircraftStore(snapshots)
    weather = WeatherStore(
        snapshots,
        AviationWeatherClient(http_client, base_url=settings.avwx_base_url),
        timedelta(minutes=settings.weather_refresh_minutes),
    )
    notams = NotamStore(
        snapshots, notam_provider, timedelta(minutes=settings.notam_refresh_minutes)
    )
    charts = ChartService(settings.chart_tile_url, timeout=settings.http_timeout_s)

    orchestrator = ServiceOrchestrator()
    orchestrator.register("route", routes)
    orchestrator.register("aircraft", aircraft)
    orchestrator.register("weather", weather)
    orchestrator.register("notam", notams)
    orchestrator.register("chart", charts)

    return ServiceContainer(
        settings=settings,
        orchestrator=orchestrator,
        engine=engine,
        routes=routes,
        aircraft=aircraft,
        weather=weather,
        notams=notams,
        charts=charts,
        planning=PlanningService(routes, aircraft, engine),
        http_client=http_client,
    )
