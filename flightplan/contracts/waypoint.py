"""Waypoint: a named geographic location used within a route."""

import uuid

from pydantic import Field, field_validator

from flightplan.contracts.common import LatLng, PlanModel
from flightplan.contracts.enums import WaypointType


def new_id() -> str:
    """Random 32-char hex identifier for stored entities."""
    return uuid.uuid4().hex


class Waypoint(PlanModel):
    """A waypoint of a route.

    ``identifier`` is the pilot-facing code (ICAO airport, navaid ident,
    fix name) and must be unique within one route. ``id`` is an internal
    handle that survives identifier edits.
    """

    id: str = Field(default_factory=new_id)
    identifier: str = Field(..., min_length=1, max_length=32)
    type: WaypointType = WaypointType.CUSTOM
    name: str | None = None
    coordinates: LatLng
    altitude_ft: float | None = None
    frequency: str | None = None
    runway: str | None = None
    notes: str | None = None

    @field_validator("identifier", mode="before")
    @classmethod
    def normalize_identifier(cls, v: str) -> str:
        return v.strip().upper()
