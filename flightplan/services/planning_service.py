"""Planning facade: engine calls over stored routes and aircraft, as typed results.

Every operation returns a ``ServiceResult``. Domain errors become
``ServiceResult.fail(code, message, **details)``; anything else propagates.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from datetime import date
from typing import TypeVar

from flightplan.contracts.aircraft import AircraftProfile
from flightplan.contracts.common import Wind
from flightplan.contracts.loading import LoadingData
from flightplan.contracts.performance import CruiseResult, DistanceResult, FuelPlan
from flightplan.contracts.result import ServiceResult
from flightplan.contracts.route import NavigationLog, Route
from flightplan.contracts.waypoint import Waypoint
from flightplan.errors import FlightPlanError, PlanValidationError
from flightplan.persistence.stores.aircraft_store import AircraftStore
from flightplan.persistence.stores.route_store import RouteStore
from flightplan.services import performance, weight_balance
from flightplan.services.route_engine import RouteEngine, build_navigation_log

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlanningService:
    def __init__(self, routes: RouteStore, aircraft: AircraftStore, engine: RouteEngine):
        self._routes = routes
        self._aircraft = aircraft
        self._engine = engine

    async def _run(self, operation: str, func: Callable[[], Awaitable[T]]) -> ServiceResult[T]:
        started = time.perf_counter()
        try:
            data = await func()
        except FlightPlanError as exc:
            logger.info("%s failed: [%s] %s", operation, exc.code, exc)
            return ServiceResult.from_error(exc, operation)
        elapsed = (time.perf_counter() - started) * 1000
        return ServiceResult.ok(data, duration_ms=elapsed, operation=operation)

    async def _route(self, route_id: str) -> Route:
        route = await self._routes.get(route_id)
        if route is None:
            raise PlanValidationError(f"route {route_id} not found", field="route_id")
        return route

    async def _profile(self, aircraft_id: str | None) -> AircraftProfile:
        if aircraft_id is None:
            profile = await self._aircraft.get_default()
        else:
            profile = await self._aircraft.get(aircraft_id)
        if profile is None:
            raise PlanValidationError(f"aircraft {aircraft_id} not found", field="aircraft_id")
        return profile

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    async def compute_route(
        self,
        waypoints: list[Waypoint],
        cruise_speed_kt: float | None = None,
        fuel_burn_rate: float | None = None,
        *,
        name: str | None = None,
        wind: Wind | None = None,
        on: date | None = None,
    ) -> ServiceResult[Route]:
        async def run() -> Route:
            return self._engine.compute_route(
                waypoints, cruise_speed_kt, fuel_burn_rate, name=name, wind=wind, on=on
            )

        return await self._run("compute_route", run)

    async def navigation_log(self, route_id: str, fuel_on_board: float) -> ServiceResult[NavigationLog]:
        async def run() -> NavigationLog:
            return build_navigation_log(await self._route(route_id), fuel_on_board)

        return await self._run("navigation_log", run)

    async def insert_waypoint(self, route_id: str, index: int, waypoint: Waypoint) -> ServiceResult[Route]:
        async def run() -> Route:
            route = await self._route(route_id)
            return await self._routes.save(self._engine.insert_waypoint(route, index, waypoint))

        return await self._run("insert_waypoint", run)

    async def remove_waypoint(self, route_id: str, waypoint_id: str) -> ServiceResult[Route]:
        async def run() -> Route:
            route = await self._route(route_id)
            return await self._routes.save(self._engine.remove_waypoint(route, waypoint_id))

        return await self._run("remove_waypoint", run)

    async def replace_waypoint(
        self, route_id: str, waypoint_id: str, waypoint: Waypoint
    ) -> ServiceResult[Route]:
        async def run() -> Route:
            route = await self._route(route_id)
            return await self._routes.save(
                self._engine.replace_waypoint(route, waypoint_id, waypoint)
            )

        return await self._run("replace_waypoint", run)

    async def move_waypoint(self, route_id: str, from_index: int, to_index: int) -> ServiceResult[Route]:
        async def run() -> Route:
            route = await self._route(route_id)
            return await self._routes.save(self._engine.move_waypoint(route, from_index, to_index))

        return await self._run("move_waypoint", run)

    async def reverse_route(self, route_id: str) -> ServiceResult[Route]:
        async def run() -> Route:
            route = await self._route(route_id)
            return await self._routes.save(self._engine.reverse_route(route))

        return await self._run("reverse_route", run)

    # ------------------------------------------------------------------
    # Weight & balance
    # ------------------------------------------------------------------

    async def loading(
        self,
        station_weights: dict[str, float],
        fuel_qty: float,
        aircraft_id: str | None = None,
    ) -> ServiceResult[LoadingData]:
        async def run() -> LoadingData:
            profile = await self._profile(aircraft_id)
            return weight_balance.compute_loading(profile, station_weights, fuel_qty)

        return await self._run("loading", run)

    # ------------------------------------------------------------------
    # Performance
    # ------------------------------------------------------------------

    async def takeoff(
        self, weight: float, altitude_ft: float, temperature_c: float, aircraft_id: str | None = None
    ) -> ServiceResult[DistanceResult]:
        async def run() -> DistanceResult:
            profile = await self._profile(aircraft_id)
            return performance.takeoff_performance(profile.performance, weight, altitude_ft, temperature_c)

        return await self._run("takeoff", run)

    async def landing(
        self, weight: float, altitude_ft: float, temperature_c: float, aircraft_id: str | None = None
    ) -> ServiceResult[DistanceResult]:
        async def run() -> DistanceResult:
            profile = await self._profile(aircraft_id)
            return performance.landing_performance(profile.performance, weight, altitude_ft, temperature_c)

        return await self._run("landing", run)

    async def climb(
        self, weight: float, altitude_ft: float, temperature_c: float, aircraft_id: str | None = None
    ) -> ServiceResult[float]:
        async def run() -> float:
            profile = await self._profile(aircraft_id)
            return performance.climb_rate(profile.performance, weight, altitude_ft, temperature_c)

        return await self._run("climb", run)

    async def cruise(self, altitude_ft: float, aircraft_id: str | None = None) -> ServiceResult[CruiseResult]:
        async def run() -> CruiseResult:
            profile = await self._profile(aircraft_id)
            return performance.cruise_performance(profile.performance, altitude_ft)

        return await self._run("cruise", run)

    async def fuel_plan(
        self,
        route_id: str,
        aircraft_id: str | None = None,
        *,
        reserve_min: float = performance.VFR_DAY_RESERVE_MIN,
        fuel_on_board: float | None = None,
    ) -> ServiceResult[FuelPlan]:
        """Fuel plan for a stored route flown by a stored aircraft.

        Uses the route's computed total time and its fuel burn rate.
        """

        async def run() -> FuelPlan:
            route = await self._route(route_id)
            profile = await self._profile(aircraft_id)
            if route.total_time_min is None or route.fuel_burn_rate is None:
                raise PlanValidationError(
                    "Route needs a cruise speed and fuel burn rate for fuel planning",
                    field="route_id",
                )
            capacity = profile.weight_balance.fuel_capacity
            return performance.plan_fuel(
                route.total_time_min,
                route.fuel_burn_rate,
                usable_capacity=capacity.usable,
                unusable=capacity.unusable,
                reserve_min=reserve_min,
                fuel_on_board=fuel_on_board,
            )

        return await self._run("fuel_plan", run)
