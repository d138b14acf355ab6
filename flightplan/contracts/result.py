"""Typed outcome of a planning facade operation.

Callers branch on ``success`` instead of catching domain exceptions. A
failure carries the ``code`` of the ``FlightPlanError`` subclass that caused
it plus that error's structured ``details``.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from flightplan.contracts.common import utc_now
from flightplan.errors import FlightPlanError

T = TypeVar("T")

DetailValue = str | int | float | bool | None


class ServiceError(BaseModel):
    code: str = Field(..., description="Error code, e.g. FUEL_EXHAUSTED")
    message: str
    details: dict[str, DetailValue] | None = None


class ServiceResult(BaseModel, Generic[T]):
    """Either ``data`` (success) or ``error`` (failure), never both."""

    success: bool
    data: T | None = None
    error: ServiceError | None = None
    operation: str | None = Field(default=None, description="Facade operation name")
    duration_ms: float | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def ok(
        cls, data: T, duration_ms: float | None = None, operation: str | None = None
    ) -> "ServiceResult[T]":
        return cls(success=True, data=data, duration_ms=duration_ms, operation=operation)

    @classmethod
    def fail(
        cls, code: str, message: str, operation: str | None = None, **details: DetailValue
    ) -> "ServiceResult[T]":
        error = ServiceError(code=code, message=message, details=details or None)
        return cls(success=False, error=error, operation=operation)

    @classmethod
    def from_error(cls, exc: FlightPlanError, operation: str | None = None) -> "ServiceResult[T]":
        return cls.fail(exc.code, str(exc), operation, **exc.details())
