"""Route, RouteLeg, NavigationLog: ordered waypoint sequence with derived legs.

Route and RouteLeg are **persisted** by the route store under the
``flight-plan-routes`` snapshot key. Leg geometry, times and fuel are
recomputed from the waypoints on every save, so a stored leg is never stale
relative to its waypoints.

NavigationLog is **calculated**, never stored.
"""

from datetime import datetime
from typing import Self

from pydantic import Field, model_validator

from flightplan.contracts.common import PlanModel, Wind, utc_now
from flightplan.contracts.waypoint import Waypoint, new_id


class RouteLeg(PlanModel):
    """A direct segment between two consecutive waypoints.

    Geometry fields are pure functions of the two coordinates. Course fields
    are ``None`` on a zero-distance leg (duplicate consecutive waypoints).
    ``magnetic_converted`` is False when no variation was available and the
    magnetic course was defaulted to the true course.
    """

    id: str = Field(default_factory=new_id)
    from_waypoint: Waypoint
    to_waypoint: Waypoint

    distance_nm: float = Field(..., ge=0, description="Great-circle distance in NM")
    true_course_deg: float | None = Field(default=None, ge=0, lt=360)
    magnetic_course_deg: float | None = Field(default=None, ge=0, lt=360)
    magnetic_variation_deg: float | None = Field(
        default=None, description="Variation at the leg midpoint, east positive"
    )
    magnetic_converted: bool = True

    wind_correction_deg: float | None = None
    ground_speed_kt: float | None = Field(default=None, gt=0)
    estimated_time_min: float | None = Field(default=None, ge=0)
    fuel_burn: float | None = Field(default=None, ge=0)
    notes: str | None = None

    @property
    def course_defined(self) -> bool:
        return self.true_course_deg is not None


class Route(PlanModel):
    """An ordered sequence of waypoints with derived legs and totals."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    waypoints: list[Waypoint] = Field(default_factory=list)
    legs: list[RouteLeg] = Field(default_factory=list)

    total_distance_nm: float = Field(default=0.0, ge=0)
    total_time_min: float | None = Field(default=None, ge=0)
    total_fuel: float | None = Field(default=None, ge=0)

    cruise_altitude_ft: int | None = Field(default=None, ge=0, le=60000)
    cruise_speed_kt: float | None = Field(default=None, gt=0)
    fuel_burn_rate: float | None = Field(
        default=None, gt=0, description="Fuel burn per hour, aircraft fuel units"
    )
    wind: Wind | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    is_active: bool = False

    @model_validator(mode="after")
    def validate_leg_chain(self) -> Self:
        if not self.legs:
            return self
        if len(self.legs) != len(self.waypoints) - 1:
            raise ValueError(
                f"Expected {len(self.waypoints) - 1} legs for "
                f"{len(self.waypoints)} waypoints, got {len(self.legs)}"
            )
        for i, leg in enumerate(self.legs):
            if (
                leg.from_waypoint.id != self.waypoints[i].id
                or leg.to_waypoint.id != self.waypoints[i + 1].id
            ):
                raise ValueError(f"Leg {i} does not connect waypoints {i} and {i + 1}")
        return self

    def identifiers(self) -> list[str]:
        return [wp.identifier for wp in self.waypoints]


class RoutePatch(PlanModel):
    """Fields of a route that may be updated in place.

    Waypoint edits go through the route edit operations instead, so that
    legs are always recomputed.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    cruise_altitude_ft: int | None = Field(default=None, ge=0, le=60000)
    cruise_speed_kt: float | None = Field(default=None, gt=0)
    fuel_burn_rate: float | None = Field(default=None, gt=0)
    wind: Wind | None = None


# ---------------------------------------------------------------------------
# Navigation log (calculated, never persisted)
# ---------------------------------------------------------------------------


class NavigationLogEntry(PlanModel):
    leg_id: str
    waypoint: str = Field(..., description="Identifier of the waypoint reached")
    course_deg: float | None = Field(
        default=None, description="Magnetic course (true if unconverted)"
    )
    distance_nm: float = Field(..., ge=0)
    estimated_time_min: float = Field(..., ge=0)
    cumulative_distance_nm: float = Field(..., ge=0)
    cumulative_time_min: float = Field(..., ge=0)
    fuel_burn: float = Field(..., ge=0)
    fuel_remaining: float = Field(..., ge=0)
    notes: str | None = None


class NavigationLogSummary(PlanModel):
    total_distance_nm: float = Field(..., ge=0)
    total_time_min: float = Field(..., ge=0)
    total_fuel: float = Field(..., ge=0)
    average_ground_speed_kt: float | None = Field(default=None, ge=0)
    fuel_on_board: float = Field(..., ge=0)
    fuel_at_destination: float = Field(..., ge=0)


class NavigationLog(PlanModel):
    route_id: str | None = None
    legs: list[NavigationLogEntry]
    summary: NavigationLogSummary
    generated_at: datetime = Field(default_factory=utc_now)
