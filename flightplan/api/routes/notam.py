"""NOTAM endpoints: cached NOTAMs per airport."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from flightplan.api.deps import get_notam_store
from flightplan.persistence.stores.notam_store import NotamStore

router = APIRouter(prefix="/notams", tags=["notams"])


class RefreshRequest(BaseModel):
    airports: list[str] = Field(..., min_length=1)


@router.post("/refresh")
async def refresh_notams(
    request: RefreshRequest,
    store: NotamStore = Depends(get_notam_store),
) -> list[dict]:
    return [n.to_snapshot() for n in await store.refresh(request.airports)]


@router.get("/{airport}")
async def get_notams(
    airport: str,
    active_at: datetime | None = None,
    store: NotamStore = Depends(get_notam_store),
) -> dict:
    notams = await store.get_for_airport(airport, active_at=active_at)
    return {
        "airport": airport.upper(),
        "stale": await store.is_stale(airport),
        "notams": [n.to_snapshot() for n in notams],
    }
