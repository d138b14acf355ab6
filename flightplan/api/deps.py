"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from flightplan.contracts.result import ServiceResult
from flightplan.persistence.stores.aircraft_store import AircraftStore
from flightplan.persistence.stores.notam_store import NotamStore
from flightplan.persistence.stores.route_store import RouteStore
from flightplan.persistence.stores.weather_store import WeatherStore
from flightplan.services.container import ServiceContainer
from flightplan.services.planning_service import PlanningService

# Failure code -> HTTP status for facade results
_STATUS_BY_CODE = {
    "NOT_INITIALIZED": 503,
    "VALIDATION_ERROR": 422,
}


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=503, detail="Services not started")
    return container


# ------------------------------------------------------------------
# Stores and facade (singletons from the container)
# ------------------------------------------------------------------


def get_route_store(container: ServiceContainer = Depends(get_container)) -> RouteStore:
    return container.routes


def get_aircraft_store(container: ServiceContainer = Depends(get_container)) -> AircraftStore:
    return container.aircraft


def get_weather_store(container: ServiceContainer = Depends(get_container)) -> WeatherStore:
    return container.weather


def get_notam_store(container: ServiceContainer = Depends(get_container)) -> NotamStore:
    return container.notams


def get_planning(container: ServiceContainer = Depends(get_container)) -> PlanningService:
    return container.planning


def unwrap(result: ServiceResult):
    """Return the result data, or raise an HTTP error carrying the failure."""
    if result.success:
        return result.data
    error = result.error
    raise HTTPException(
        status_code=_STATUS_BY_CODE.get(error.code, 422),
        detail=error.model_dump(),
    )
