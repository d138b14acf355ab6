"""NOTAMs: externally sourced notices, cached by airport identifier.

Persisted by the NOTAM store under the ``flight-plan-notams`` snapshot key.
Classification is supplied by the provider; the engine only looks NOTAMs up
by airport, checks their effective period and their age.
"""

from datetime import datetime, timedelta

from pydantic import Field, field_validator

from flightplan.contracts.common import PlanModel, utc_now
from flightplan.contracts.enums import NotamCategory, NotamType, Priority


class NotamClassification(PlanModel):
    severity: Priority = Priority.MEDIUM
    category: NotamCategory = NotamCategory.INFORMATION
    impact_level: str = Field(
        default="low", pattern=r"^(none|low|medium|high|critical)$"
    )


class Notam(PlanModel):
    id: str | None = None
    number: str = Field(..., min_length=1, description="Issuer's NOTAM number, e.g. A1234/25")
    airport: str = Field(..., min_length=3, max_length=4)
    type: NotamType = NotamType.GENERAL
    raw: str = ""
    subject: str | None = None
    condition: str | None = None
    effective_from: datetime
    effective_to: datetime | None = None
    classification: NotamClassification = Field(default_factory=NotamClassification)

    last_update: datetime = Field(default_factory=utc_now)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("airport", mode="before")
    @classmethod
    def upper_airport(cls, v: str) -> str:
        return v.strip().upper()

    def is_active_at(self, moment: datetime) -> bool:
        if self.effective_from > moment:
            return False
        if self.effective_to is not None and self.effective_to < moment:
            return False
        return True

    def is_stale(self, now: datetime, threshold: timedelta) -> bool:
        return now - self.last_update > threshold
