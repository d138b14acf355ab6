"""Tabulated aircraft performance and the results derived from it.

Tables are sparse: each entry is a measured data point, not a cell of a
dense grid. Lookups go through ``flightplan.services.performance``, which
refuses to extrapolate past the recorded data.
"""

from datetime import datetime

from pydantic import Field

from flightplan.contracts.common import PlanModel, utc_now


class TakeoffLandingEntry(PlanModel):
    weight: float = Field(..., gt=0)
    altitude_ft: float
    temperature_c: float
    distance_ft: float = Field(..., ge=0, description="Total distance over 50 ft obstacle")
    ground_roll_ft: float = Field(..., ge=0)


class ClimbEntry(PlanModel):
    weight: float = Field(..., gt=0)
    altitude_ft: float
    temperature_c: float
    rate_fpm: float


class RangeEntry(PlanModel):
    altitude_ft: float
    speed_kt: float = Field(..., gt=0)
    fuel_burn: float = Field(..., gt=0, description="Per hour, aircraft fuel units")
    range_nm: float = Field(..., ge=0)


class CruiseEntry(PlanModel):
    altitude_ft: float
    speed_kt: float = Field(..., gt=0)
    fuel_burn: float = Field(..., gt=0, description="Per hour, aircraft fuel units")


class PerformanceData(PlanModel):
    takeoff: list[TakeoffLandingEntry] = Field(default_factory=list)
    landing: list[TakeoffLandingEntry] = Field(default_factory=list)
    climb: list[ClimbEntry] = Field(default_factory=list)
    range: list[RangeEntry] = Field(default_factory=list)
    cruise: list[CruiseEntry] = Field(default_factory=list)
    service_ceiling_ft: float | None = Field(default=None, gt=0)


# ---------------------------------------------------------------------------
# Calculated results (never persisted)
# ---------------------------------------------------------------------------


class DistanceResult(PlanModel):
    distance_ft: float
    ground_roll_ft: float


class CruiseResult(PlanModel):
    speed_kt: float
    fuel_burn: float


class FuelPlan(PlanModel):
    """Trip, reserve and loading figures for one flight."""

    trip_time_min: float = Field(..., ge=0)
    fuel_burn_rate: float = Field(..., gt=0)
    trip_fuel: float = Field(..., ge=0)
    reserve_min: float = Field(..., ge=0)
    reserve_fuel: float = Field(..., ge=0)
    unusable_fuel: float = Field(..., ge=0)
    total_required: float = Field(..., ge=0)
    recommended_load: float = Field(..., ge=0)
    fuel_on_board: float | None = Field(default=None, ge=0)
    sufficient: bool | None = Field(
        default=None, description="Fuel on board covers the total required"
    )
    endurance_min: float = Field(..., ge=0, description="With fuel on board or recommended load")
    calculated_at: datetime = Field(default_factory=utc_now)
