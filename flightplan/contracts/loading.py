"""Loading snapshot: the result of a weight & balance calculation.

**Calculated** from the current inputs every time; never persisted and
never mutated in place.
"""

from datetime import datetime

from pydantic import Field

from flightplan.contracts.common import PlanModel, utc_now
from flightplan.contracts.enums import CGStatus, FuelUnit


class StationLoad(PlanModel):
    """Weight placed at one station of the aircraft."""

    station_id: str = Field(..., min_length=1, description="References WeightStation.id")
    weight: float = Field(..., ge=0)
    arm: float
    moment: float


class LoadingData(PlanModel):
    aircraft_id: str | None = None
    stations: list[StationLoad] = Field(default_factory=list)
    fuel_quantity: float = Field(..., ge=0)
    fuel_unit: FuelUnit
    fuel_weight: float = Field(..., ge=0)

    total_weight: float
    total_moment: float
    cg_position: float
    cg_status: CGStatus

    calculated_at: datetime = Field(default_factory=utc_now)

    @property
    def within_limits(self) -> bool:
        return self.cg_status == CGStatus.WITHIN_LIMITS
