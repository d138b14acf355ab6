"""Self-reported status of a lifecycle-managed service."""

from datetime import datetime

from pydantic import Field

from flightplan.contracts.common import PlanModel, utc_now


class ServiceStatus(PlanModel):
    healthy: bool
    last_update: datetime | None = Field(default_factory=utc_now)
    error_count: int = Field(default=0, ge=0)
    response_time_ms: float | None = Field(default=None, ge=0)
    degraded: bool = False
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
