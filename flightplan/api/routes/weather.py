"""Weather endpoints: cached METAR reports per airport."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from flightplan.api.deps import get_weather_store
from flightplan.persistence.stores.weather_store import WeatherStore

router = APIRouter(prefix="/weather", tags=["weather"])


class RefreshRequest(BaseModel):
    airports: list[str] = Field(..., min_length=1)


@router.post("/refresh")
async def refresh_weather(
    request: RefreshRequest,
    store: WeatherStore = Depends(get_weather_store),
) -> list[dict]:
    return [r.to_snapshot() for r in await store.refresh(request.airports)]


@router.get("/stale")
async def stale_airports(
    airports: list[str] = Query(...),
    store: WeatherStore = Depends(get_weather_store),
) -> dict:
    return {"stale": await store.stale_airports(airports)}


@router.get("/{airport}")
async def get_weather(airport: str, store: WeatherStore = Depends(get_weather_store)) -> dict:
    report = await store.get_for_airport(airport)
    if report is None:
        raise HTTPException(status_code=404, detail=f"No weather cached for {airport.upper()}")
    data = report.to_snapshot()
    data["stale"] = await store.is_stale(airport)
    return data
