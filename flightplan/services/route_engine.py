"""Route computation: leg geometry, route totals, navigation log, route edits.

All computation is synchronous and works on already-resident values. Legs
are rebuilt from the waypoint coordinates on every call, so the derived
distance and course can never go stale relative to the waypoints.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from flightplan.contracts.common import Wind
from flightplan.contracts.route import (
    NavigationLog,
    NavigationLogEntry,
    NavigationLogSummary,
    Route,
    RouteLeg,
)
from flightplan.contracts.waypoint import Waypoint
from flightplan.errors import FuelExhaustedError, PlanValidationError
from flightplan.services.geodesy import haversine_nm, initial_bearing_deg, midpoint, wind_triangle
from flightplan.services.magnetic import MagneticVariationSource
from flightplan.services.units import normalize_degrees

logger = logging.getLogger(__name__)

# Tolerance for float noise when checking fuel going below zero
_FUEL_EPSILON = 1e-9


class RouteEngine:
    """Derives legs and totals from waypoints.

    The magnetic variation source is optional; without it (or when it
    fails) magnetic courses default to true courses and the legs are
    flagged ``magnetic_converted=False``.
    """

    def __init__(self, variation_source: MagneticVariationSource | None = None):
        self._variation_source = variation_source

    # ------------------------------------------------------------------
    # Legs
    # ------------------------------------------------------------------

    def compute_leg(
        self,
        from_wp: Waypoint,
        to_wp: Waypoint,
        *,
        cruise_speed_kt: float | None = None,
        fuel_burn_rate: float | None = None,
        wind: Wind | None = None,
        on: date | None = None,
    ) -> RouteLeg:
        distance = haversine_nm(from_wp.coordinates, to_wp.coordinates)
        if from_wp.coordinates == to_wp.coordinates:
            distance = 0.0

        true_course: float | None = None
        magnetic_course: float | None = None
        variation: float | None = None
        converted = False
        if distance > 0:
            true_course = initial_bearing_deg(from_wp.coordinates, to_wp.coordinates)
            variation = self._variation_at_midpoint(from_wp, to_wp, on)
            if variation is None:
                magnetic_course = true_course
            else:
                magnetic_course = normalize_degrees(true_course - variation)
                converted = True

        wind_correction: float | None = None
        ground_speed: float | None = None
        if cruise_speed_kt is not None:
            ground_speed = cruise_speed_kt
            if wind is not None and true_course is not None:
                try:
                    wind_correction, ground_speed = wind_triangle(
                        true_course, cruise_speed_kt, wind.direction_deg, wind.speed_kt
                    )
                except ValueError as exc:
                    raise PlanValidationError(
                        f"Leg {from_wp.identifier}-{to_wp.identifier}: {exc}", field="wind"
                    ) from exc
                if ground_speed <= 0:
                    raise PlanValidationError(
                        f"Leg {from_wp.identifier}-{to_wp.identifier}: "
                        f"no progress against a {wind.speed_kt:.0f} kt wind",
                        field="wind",
                    )

        estimated_time: float | None = None
        fuel_burn: float | None = None
        if ground_speed is not None:
            estimated_time = distance / ground_speed * 60.0
            if fuel_burn_rate is not None:
                fuel_burn = estimated_time / 60.0 * fuel_burn_rate

        return RouteLeg(
            from_waypoint=from_wp,
            to_waypoint=to_wp,
            distance_nm=distance,
            true_course_deg=true_course,
            magnetic_course_deg=magnetic_course,
            magnetic_variation_deg=variation,
            magnetic_converted=converted,
            wind_correction_deg=wind_correction,
            ground_speed_kt=ground_speed,
            estimated_time_min=estimated_time,
            fuel_burn=fuel_burn,
        )

    def _variation_at_midpoint(
        self, from_wp: Waypoint, to_wp: Waypoint, on: date | None
    ) -> float | None:
        if self._variation_source is None:
            return None
        mid = midpoint(from_wp.coordinates, to_wp.coordinates)
        when = on or datetime.now(tz=timezone.utc).date()
        try:
            return self._variation_source.variation_at(mid, when)
        except Exception as exc:
            logger.warning(
                "Magnetic variation unavailable for %s-%s: %s",
                from_wp.identifier, to_wp.identifier, exc,
            )
            return None

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def compute_route(
        self,
        waypoints: list[Waypoint],
        cruise_speed_kt: float | None = None,
        fuel_burn_rate: float | None = None,
        *,
        name: str | None = None,
        wind: Wind | None = None,
        on: date | None = None,
    ) -> Route:
        """Build a new route with legs and totals from an ordered waypoint list."""
        if name is None:
            name = _default_name(waypoints)
        route = Route(
            name=name,
            waypoints=[wp.model_copy(deep=True) for wp in waypoints],
            cruise_speed_kt=cruise_speed_kt,
            fuel_burn_rate=fuel_burn_rate,
            wind=wind,
        )
        return self.recompute(route, on=on)

    def recompute(self, route: Route, *, on: date | None = None) -> Route:
        """Return a copy of *route* with legs and totals rebuilt from its waypoints."""
        legs = [
            self.compute_leg(
                route.waypoints[i],
                route.waypoints[i + 1],
                cruise_speed_kt=route.cruise_speed_kt,
                fuel_burn_rate=route.fuel_burn_rate,
                wind=route.wind,
                on=on,
            )
            for i in range(len(route.waypoints) - 1)
        ]
        total_distance, total_time, total_fuel = _totals(legs)
        return route.model_copy(
            deep=True,
            update={
                "legs": legs,
                "total_distance_nm": total_distance,
                "total_time_min": total_time,
                "total_fuel": total_fuel,
            },
        )

    # ------------------------------------------------------------------
    # Route edits. Each returns a recomputed copy.
    # ------------------------------------------------------------------

    def insert_waypoint(self, route: Route, index: int, waypoint: Waypoint) -> Route:
        if not 0 <= index <= len(route.waypoints):
            raise PlanValidationError(
                f"Insert index {index} outside 0..{len(route.waypoints)}", field="index"
            )
        waypoints = list(route.waypoints)
        waypoints.insert(index, waypoint)
        return self._with_waypoints(route, waypoints)

    def remove_waypoint(self, route: Route, waypoint_id: str) -> Route:
        waypoints = [wp for wp in route.waypoints if wp.id != waypoint_id]
        if len(waypoints) == len(route.waypoints):
            raise PlanValidationError(f"Waypoint {waypoint_id} not in route", field="waypoint_id")
        return self._with_waypoints(route, waypoints)

    def replace_waypoint(self, route: Route, waypoint_id: str, waypoint: Waypoint) -> Route:
        """Swap a waypoint (e.g. after a coordinate edit), keeping its position."""
        index = _index_of(route, waypoint_id)
        waypoints = list(route.waypoints)
        waypoints[index] = waypoint
        return self._with_waypoints(route, waypoints)

    def move_waypoint(self, route: Route, from_index: int, to_index: int) -> Route:
        size = len(route.waypoints)
        for field, value in (("from_index", from_index), ("to_index", to_index)):
            if not 0 <= value < size:
                raise PlanValidationError(f"Index {value} outside 0..{size - 1}", field=field)
        waypoints = list(route.waypoints)
        waypoints.insert(to_index, waypoints.pop(from_index))
        return self._with_waypoints(route, waypoints)

    def reverse_route(self, route: Route) -> Route:
        return self._with_waypoints(route, list(reversed(route.waypoints)))

    def _with_waypoints(self, route: Route, waypoints: list[Waypoint]) -> Route:
        # Old legs reference the previous waypoint order; drop them before recomputing
        draft = route.model_copy(update={"waypoints": waypoints, "legs": []})
        return self.recompute(draft)


def _default_name(waypoints: list[Waypoint]) -> str:
    if len(waypoints) >= 2:
        return f"{waypoints[0].identifier}-{waypoints[-1].identifier}"
    if waypoints:
        return waypoints[0].identifier
    return "New route"


def _index_of(route: Route, waypoint_id: str) -> int:
    for i, wp in enumerate(route.waypoints):
        if wp.id == waypoint_id:
            return i
    raise PlanValidationError(f"Waypoint {waypoint_id} not in route", field="waypoint_id")


def _totals(legs: list[RouteLeg]) -> tuple[float, float | None, float | None]:
    """Sum distance, time and fuel. Time/fuel are None if any leg lacks them."""
    if not legs:
        return 0.0, 0.0, 0.0
    total_distance = sum(leg.distance_nm for leg in legs)
    times = [leg.estimated_time_min for leg in legs]
    total_time = None if any(t is None for t in times) else sum(times)
    fuels = [leg.fuel_burn for leg in legs]
    total_fuel = None if any(f is None for f in fuels) else sum(fuels)
    return total_distance, total_time, total_fuel


# ---------------------------------------------------------------------------
# Navigation log
# ---------------------------------------------------------------------------


def build_navigation_log(route: Route, fuel_on_board: float) -> NavigationLog:
    """Per-leg log with cumulative distance, time and fuel remaining.

    Raises ``FuelExhaustedError`` at the first leg whose running burn
    exceeds *fuel_on_board*, and ``PlanValidationError`` when leg times or
    fuel burns have not been computed (no cruise speed or burn rate).
    """
    if fuel_on_board < 0:
        raise PlanValidationError("Fuel on board cannot be negative", field="fuel_on_board")

    entries: list[NavigationLogEntry] = []
    cumulative_distance = 0.0
    cumulative_time = 0.0
    running_burn = 0.0
    for i, leg in enumerate(route.legs):
        if leg.estimated_time_min is None or leg.fuel_burn is None:
            raise PlanValidationError(
                f"Leg {i + 1} has no time/fuel estimate; set cruise speed and fuel burn rate",
                field="legs",
            )
        cumulative_distance += leg.distance_nm
        cumulative_time += leg.estimated_time_min
        running_burn += leg.fuel_burn
        remaining = fuel_on_board - running_burn
        if remaining < -_FUEL_EPSILON:
            raise FuelExhaustedError(i, leg.to_waypoint.identifier, remaining)

        entries.append(
            NavigationLogEntry(
                leg_id=leg.id,
                waypoint=leg.to_waypoint.identifier,
                course_deg=leg.magnetic_course_deg,
                distance_nm=leg.distance_nm,
                estimated_time_min=leg.estimated_time_min,
                cumulative_distance_nm=cumulative_distance,
                cumulative_time_min=cumulative_time,
                fuel_burn=leg.fuel_burn,
                fuel_remaining=max(remaining, 0.0),
                notes=leg.notes,
            )
        )

    average_gs = None
    if cumulative_time > 0:
        average_gs = cumulative_distance / (cumulative_time / 60.0)

    summary = NavigationLogSummary(
        total_distance_nm=cumulative_distance,
        total_time_min=cumulative_time,
        total_fuel=running_burn,
        average_ground_speed_kt=average_gs,
        fuel_on_board=fuel_on_board,
        fuel_at_destination=max(fuel_on_board - running_burn, 0.0),
    )
    return NavigationLog(route_id=route.id, legs=entries, summary=summary)
