"""Runtime settings read from the environment."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from flightplan.services.chart_service import DEFAULT_TILE_URL
from flightplan.services.notam_client import ICAO_BASE_URL
from flightplan.services.weather.metar_client import BASE_URL as AVWX_BASE_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Variable names are the field names in upper case, except the backend
    switch, which reads ``FLIGHTPLAN_PERSISTENCE``. Empty variables are
    treated as unset.
    """

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Persistence
    persistence: Literal["memory", "firestore"] = Field(
        default="memory", validation_alias="flightplan_persistence"
    )
    firestore_project: str | None = None

    # Upstream services
    avwx_base_url: str = AVWX_BASE_URL
    icao_api_key: str | None = None
    icao_base_url: str = ICAO_BASE_URL
    chart_tile_url: str = DEFAULT_TILE_URL
    http_timeout_s: float = Field(default=15.0, gt=0)

    # Cache staleness
    weather_refresh_minutes: int = Field(default=15, gt=0)
    notam_refresh_minutes: int = Field(default=60, gt=0)
    magnetic_variation_deg: float | None = Field(default=None, ge=-180, le=180)

    # Comma-separated in the environment
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Settings from the process environment, or from *environ* when given."""
        if environ is None:
            return cls()
        values = {name.lower(): value for name, value in environ.items() if value}
        return cls.model_validate(values)
