"""Aircraft profile with weight & balance, performance and equipment data.

Persisted by the aircraft store under the ``flight-plan-aircraft`` snapshot
key. Weights, arms and fuel quantities use the units declared in
``WeightBalanceData.units``.
"""

from datetime import datetime
from typing import Self

from pydantic import Field, model_validator

from flightplan.contracts.common import PlanModel
from flightplan.contracts.enums import (
    AircraftCategory,
    ArmUnit,
    FuelUnit,
    StationType,
    WeightUnit,
)
from flightplan.contracts.performance import PerformanceData
from flightplan.contracts.waypoint import new_id


class WeightStation(PlanModel):
    """A loading station with a fixed lever arm: seats, baggage, cargo."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, description="e.g. 'Front seats'")
    max_weight: float = Field(..., gt=0)
    arm: float
    type: StationType
    position: int = Field(default=0, description="Display order")


class CGPoint(PlanModel):
    """CG limits at one gross weight."""

    weight: float = Field(..., gt=0)
    forward: float
    aft: float

    @model_validator(mode="after")
    def validate_order(self) -> Self:
        if self.forward > self.aft:
            raise ValueError(
                f"Forward limit {self.forward} is aft of aft limit {self.aft} "
                f"at weight {self.weight}"
            )
        return self


class CGEnvelope(PlanModel):
    """Safe CG corridor as a function of gross weight.

    Between two points the forward and aft limits are linearly interpolated.
    """

    points: list[CGPoint] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_increasing(self) -> Self:
        weights = [p.weight for p in self.points]
        for lower, upper in zip(weights, weights[1:]):
            if upper <= lower:
                raise ValueError(
                    f"CG envelope weights must be strictly increasing, got {weights}"
                )
        return self


class FuelCapacity(PlanModel):
    total: float = Field(..., gt=0)
    usable: float = Field(..., gt=0)
    unusable: float = Field(default=0.0, ge=0)
    arm: float

    @model_validator(mode="after")
    def validate_usable(self) -> Self:
        if self.usable > self.total:
            raise ValueError(f"Usable fuel {self.usable} exceeds total {self.total}")
        return self


class UnitSettings(PlanModel):
    weight: WeightUnit = WeightUnit.LBS
    arm: ArmUnit = ArmUnit.INCHES
    fuel: FuelUnit = FuelUnit.GAL


class WeightBalanceData(PlanModel):
    empty_weight: float = Field(..., gt=0)
    empty_weight_arm: float
    empty_weight_moment: float | None = Field(
        default=None, description="Defaults to empty_weight * empty_weight_arm"
    )
    max_gross_weight: float = Field(..., gt=0)
    stations: list[WeightStation] = Field(default_factory=list)
    cg_envelope: CGEnvelope
    fuel_capacity: FuelCapacity
    units: UnitSettings = Field(default_factory=UnitSettings)

    @model_validator(mode="after")
    def fill_moment(self) -> Self:
        if self.empty_weight_moment is None:
            self.empty_weight_moment = self.empty_weight * self.empty_weight_arm
        ids = [s.id for s in self.stations]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Station ids must be unique, got {ids}")
        return self

    def station(self, station_id: str) -> WeightStation | None:
        for s in self.stations:
            if s.id == station_id:
                return s
        return None


class NavigationEquipment(PlanModel):
    gps: bool = False
    vor: bool = False
    ndb: bool = False
    ils: bool = False
    rnav: bool = False
    waas: bool = False


class CommunicationEquipment(PlanModel):
    com1: bool = True
    com2: bool = False
    transponder: str = Field(default="mode-c", pattern=r"^(none|mode-a|mode-c|mode-s)$")
    adsb: str = Field(default="none", pattern=r"^(none|out|in-out)$")


class InstrumentEquipment(PlanModel):
    attitude: bool = True
    heading: bool = True
    altimeter: bool = True
    airspeed: bool = True
    vsi: bool = True
    dme: bool = False
    autopilot: bool = False
    weather_radar: bool = False
    stormscope: bool = False


class EquipmentData(PlanModel):
    navigation: NavigationEquipment = Field(default_factory=NavigationEquipment)
    communication: CommunicationEquipment = Field(default_factory=CommunicationEquipment)
    instruments: InstrumentEquipment = Field(default_factory=InstrumentEquipment)
    equipment_suffix: str = Field(default="", max_length=8, description="e.g. 'G'")


class AircraftProfile(PlanModel):
    """A configured aircraft available for planning."""

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=200)
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    tail_number: str | None = Field(default=None, pattern=r"^[A-Z0-9-]+$")
    category: AircraftCategory = AircraftCategory.SINGLE_ENGINE

    weight_balance: WeightBalanceData
    performance: PerformanceData = Field(default_factory=PerformanceData)
    equipment: EquipmentData = Field(default_factory=EquipmentData)

    is_default: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AircraftPatch(PlanModel):
    """Fields of an aircraft profile that may be updated in place."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    make: str | None = None
    model: str | None = None
    tail_number: str | None = Field(default=None, pattern=r"^[A-Z0-9-]+$")
    category: AircraftCategory | None = None
    weight_balance: WeightBalanceData | None = None
    performance: PerformanceData | None = None
    equipment: EquipmentData | None = None
