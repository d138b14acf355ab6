"""Flight planning data contracts: Pydantic v2 models.

Persisted (snapshot store, one key per collection)
--------------------------------------------------
- ``Route``: ``flight-plan-routes``
- ``AircraftProfile``: ``flight-plan-aircraft``
- ``WeatherReport``: ``flight-plan-weather``
- ``Notam``: ``flight-plan-notams``

Calculated (never persisted)
----------------------------
- ``RouteLeg`` geometry, time and fuel (recomputed on every route save)
- ``NavigationLog``: per-leg fuel and time log
- ``LoadingData``: weight & balance snapshot with CG classification
- ``DistanceResult`` / ``CruiseResult`` / ``FuelPlan``: performance lookups
"""

from flightplan.contracts.enums import (
    AircraftCategory,
    ArmUnit,
    CGStatus,
    CloudCover,
    FlightConditions,
    FuelUnit,
    NotamCategory,
    NotamType,
    OrchestratorState,
    Priority,
    RouteFormat,
    ServiceState,
    StationType,
    WaypointType,
    WeightUnit,
)
from flightplan.contracts.common import LatLng, PlanModel, Wind, apply_patch
from flightplan.contracts.result import ServiceError, ServiceResult
from flightplan.contracts.waypoint import Waypoint
from flightplan.contracts.route import (
    NavigationLog,
    NavigationLogEntry,
    NavigationLogSummary,
    Route,
    RouteLeg,
    RoutePatch,
)
from flightplan.contracts.performance import (
    ClimbEntry,
    CruiseEntry,
    CruiseResult,
    DistanceResult,
    FuelPlan,
    PerformanceData,
    RangeEntry,
    TakeoffLandingEntry,
)
from flightplan.contracts.aircraft import (
    AircraftPatch,
    AircraftProfile,
    CGEnvelope,
    CGPoint,
    EquipmentData,
    FuelCapacity,
    UnitSettings,
    WeightBalanceData,
    WeightStation,
)
from flightplan.contracts.loading import LoadingData, StationLoad
from flightplan.contracts.weather import CloudLayer, WeatherReport
from flightplan.contracts.notam import Notam, NotamClassification
from flightplan.contracts.service import ServiceStatus

__all__ = [
    # Enums
    "AircraftCategory",
    "ArmUnit",
    "CGStatus",
    "CloudCover",
    "FlightConditions",
    "FuelUnit",
    "NotamCategory",
    "NotamType",
    "OrchestratorState",
    "Priority",
    "RouteFormat",
    "ServiceState",
    "StationType",
    "WaypointType",
    "WeightUnit",
    # Common
    "LatLng",
    "PlanModel",
    "Wind",
    "apply_patch",
    # Result
    "ServiceError",
    "ServiceResult",
    # Domain models
    "Waypoint",
    "NavigationLog",
    "NavigationLogEntry",
    "NavigationLogSummary",
    "Route",
    "RouteLeg",
    "RoutePatch",
    "ClimbEntry",
    "CruiseEntry",
    "CruiseResult",
    "DistanceResult",
    "FuelPlan",
    "PerformanceData",
    "RangeEntry",
    "TakeoffLandingEntry",
    "AircraftPatch",
    "AircraftProfile",
    "CGEnvelope",
    "CGPoint",
    "EquipmentData",
    "FuelCapacity",
    "UnitSettings",
    "WeightBalanceData",
    "WeightStation",
    "LoadingData",
    "StationLoad",
    "CloudLayer",
    "WeatherReport",
    "Notam",
    "NotamClassification",
    "ServiceStatus",
]
