"""Domain exceptions raised by the planning engines, stores and orchestrator.

Every exception carries a machine-readable ``code`` so the planning facade
can turn it into a ``ServiceResult.fail(...)`` without string matching.
"""

from __future__ import annotations


class FlightPlanError(Exception):
    """Base exception for all flight planning errors."""

    code = "FLIGHT_PLAN_ERROR"

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {}


class NotInitializedError(FlightPlanError):
    """Raised when a store or service is used before ``initialize()`` completed."""

    code = "NOT_INITIALIZED"

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"{service} service not initialized")

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {"service": self.service}


class PlanValidationError(FlightPlanError):
    """Input violates a structural constraint (station overload, malformed route)."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {"field": self.field}


class DivisionUndefinedError(FlightPlanError):
    """CG position is undefined because the total weight is not positive."""

    code = "DIVISION_UNDEFINED"

    def __init__(self, total_weight: float):
        self.total_weight = total_weight
        super().__init__(f"CG undefined for total weight {total_weight}")

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {"total_weight": self.total_weight}


class PerformanceDataOutOfRangeError(FlightPlanError):
    """A performance query falls outside the tabulated data on one dimension."""

    code = "PERFORMANCE_DATA_OUT_OF_RANGE"

    def __init__(self, dimension: str, value: float, low: float | None, high: float | None):
        self.dimension = dimension
        self.value = value
        self.low = low
        self.high = high
        if low is None or high is None:
            bounds = "no data"
        else:
            bounds = f"[{low}, {high}]"
        super().__init__(f"{dimension}={value} outside tabulated range {bounds}")

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {
            "dimension": self.dimension,
            "value": self.value,
            "low": self.low,
            "high": self.high,
        }


class EnvelopeRangeExceededError(FlightPlanError):
    """Gross weight is outside the weights covered by the CG envelope."""

    code = "ENVELOPE_RANGE_EXCEEDED"

    def __init__(self, weight: float, low: float, high: float):
        self.weight = weight
        self.low = low
        self.high = high
        super().__init__(f"Weight {weight} outside CG envelope range [{low}, {high}]")

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {"weight": self.weight, "low": self.low, "high": self.high}


class FuelExhaustedError(FlightPlanError):
    """Running fuel would go negative before reaching a waypoint."""

    code = "FUEL_EXHAUSTED"

    def __init__(self, leg_index: int, waypoint: str, fuel_remaining: float):
        self.leg_index = leg_index
        self.waypoint = waypoint
        self.fuel_remaining = fuel_remaining
        super().__init__(
            f"Fuel exhausted on leg {leg_index + 1} before reaching {waypoint} "
            f"(remaining {fuel_remaining:.1f})"
        )

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {
            "leg_index": self.leg_index,
            "waypoint": self.waypoint,
            "fuel_remaining": round(self.fuel_remaining, 2),
        }


class ServiceInitFailure(FlightPlanError):
    """A registered service failed to initialize."""

    code = "SERVICE_INIT_FAILURE"

    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Service initialization failed: {service}")

    def details(self) -> dict[str, str | int | float | bool | None]:
        return {"service": self.service}
