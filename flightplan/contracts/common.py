"""Base classes and shared types for flight planning contracts.

Unit conventions (all contracts and API responses):
- **Distances**: nautical miles (NM): suffix ``_nm``
- **Speeds**: knots (kt): suffix ``_kt``
- **Altitudes**: feet MSL: suffix ``_ft``
- **Durations**: minutes: suffix ``_min``
- **Headings/courses**: degrees true unless stated: suffix ``_deg``
- **Datetimes**: always UTC, ISO 8601 in serialized form
- **Coordinates**: WGS84 decimal degrees

Weights, lever arms and fuel quantities are expressed in the units declared
by the aircraft profile (``WeightBalanceData.units``); the engines never mix
unit systems within one calculation.
"""

from datetime import datetime, timezone
from typing import Any, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class PlanModel(BaseModel):
    """Base model with snapshot-friendly serialization.

    - Enums serialize as string values.
    - ``to_snapshot()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_snapshot()`` hydrates from a snapshot dict.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_snapshot(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> Self:
        """Create model instance from a snapshot dict."""
        return cls.model_validate(data)


class LatLng(BaseModel):
    """WGS84 geographic coordinate."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True)


class Wind(PlanModel):
    """Wind aloft: direction the wind blows FROM (degrees true) and speed."""

    direction_deg: float = Field(..., ge=0, le=360)
    speed_kt: float = Field(..., ge=0)
    gust_kt: float | None = Field(default=None, ge=0)


M = TypeVar("M", bound=BaseModel)


def apply_patch(entity: M, patch: BaseModel) -> M:
    """Merge the explicitly-set fields of *patch* over *entity*.

    Pure: returns a new validated instance, *entity* is left untouched.
    Fields the caller did not set on the patch never override the entity,
    even when their default is ``None``.
    """
    updates = {name: getattr(patch, name) for name in patch.model_fields_set}
    return type(entity).model_validate({**entity.model_dump(), **updates})
