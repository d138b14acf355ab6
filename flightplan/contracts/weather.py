"""Weather reports: externally sourced, cached by airport identifier.

Persisted by the weather store under the ``flight-plan-weather`` snapshot
key. The engine only keys, ages and serves these reports; decoding raw
METAR/TAF text is the provider's job.
"""

from datetime import datetime, timedelta

from pydantic import Field, field_validator

from flightplan.contracts.common import PlanModel, Wind, utc_now
from flightplan.contracts.enums import CloudCover, FlightConditions


class CloudLayer(PlanModel):
    cover: CloudCover
    base_ft: int | None = Field(default=None, ge=0, description="Cloud base in ft AGL")


class WeatherReport(PlanModel):
    """Current observation for one airport."""

    id: str | None = None
    airport: str = Field(..., min_length=3, max_length=4)
    observed_at: datetime
    conditions: FlightConditions
    raw_metar: str | None = None

    wind: Wind | None = None
    visibility_sm: float | None = Field(default=None, ge=0)
    ceiling_ft: int | None = Field(default=None, ge=0, description="Lowest BKN/OVC, ft AGL")
    clouds: list[CloudLayer] = Field(default_factory=list)
    temperature_c: float | None = None
    dewpoint_c: float | None = None
    altimeter_hpa: float | None = None

    last_update: datetime = Field(default_factory=utc_now)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("airport", mode="before")
    @classmethod
    def upper_airport(cls, v: str) -> str:
        return v.strip().upper()

    def is_stale(self, now: datetime, threshold: timedelta) -> bool:
        return now - self.last_update > threshold
