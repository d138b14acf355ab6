"""Aircraft endpoints: CRUD, default aircraft, weight & balance and performance."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from flightplan.api.deps import get_aircraft_store, get_planning, unwrap
from flightplan.contracts.aircraft import AircraftPatch, AircraftProfile
from flightplan.persistence.stores.aircraft_store import AircraftStore
from flightplan.services.planning_service import PlanningService

router = APIRouter(prefix="/aircraft", tags=["aircraft"])


class LoadingRequest(BaseModel):
    station_weights: dict[str, float] = Field(default_factory=dict)
    fuel_qty: float = Field(default=0.0)


async def _get_or_404(store: AircraftStore, aircraft_id: str) -> AircraftProfile:
    profile = await store.get(aircraft_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Aircraft not found")
    return profile


@router.get("")
async def list_aircraft(store: AircraftStore = Depends(get_aircraft_store)) -> list[dict]:
    return [a.to_snapshot() for a in await store.load_all()]


@router.post("", status_code=201)
async def create_aircraft(
    profile: AircraftProfile,
    store: AircraftStore = Depends(get_aircraft_store),
) -> dict:
    return (await store.save(profile)).to_snapshot()


@router.get("/default")
async def get_default_aircraft(store: AircraftStore = Depends(get_aircraft_store)) -> dict:
    profile = await store.get_default()
    if profile is None:
        raise HTTPException(status_code=404, detail="No aircraft configured")
    return profile.to_snapshot()


@router.get("/{aircraft_id}")
async def get_aircraft(aircraft_id: str, store: AircraftStore = Depends(get_aircraft_store)) -> dict:
    return (await _get_or_404(store, aircraft_id)).to_snapshot()


@router.patch("/{aircraft_id}")
async def patch_aircraft(
    aircraft_id: str,
    patch: AircraftPatch,
    store: AircraftStore = Depends(get_aircraft_store),
) -> dict:
    await _get_or_404(store, aircraft_id)
    return (await store.patch(aircraft_id, patch)).to_snapshot()


@router.delete("/{aircraft_id}", status_code=204)
async def delete_aircraft(aircraft_id: str, store: AircraftStore = Depends(get_aircraft_store)) -> None:
    await store.delete(aircraft_id)


@router.post("/{aircraft_id}/duplicate", status_code=201)
async def duplicate_aircraft(
    aircraft_id: str, store: AircraftStore = Depends(get_aircraft_store)
) -> dict:
    profile = await _get_or_404(store, aircraft_id)
    return (await store.duplicate(profile)).to_snapshot()


@router.post("/{aircraft_id}/default")
async def set_default_aircraft(
    aircraft_id: str, store: AircraftStore = Depends(get_aircraft_store)
) -> dict:
    await _get_or_404(store, aircraft_id)
    return (await store.set_default(aircraft_id)).to_snapshot()


@router.post("/{aircraft_id}/loading")
async def compute_loading(
    aircraft_id: str,
    request: LoadingRequest,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.loading(request.station_weights, request.fuel_qty, aircraft_id)
    return unwrap(result).to_snapshot()


@router.get("/{aircraft_id}/performance/takeoff")
async def takeoff(
    aircraft_id: str,
    weight: float = Query(..., gt=0),
    altitude_ft: float = Query(...),
    temperature_c: float = Query(...),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.takeoff(weight, altitude_ft, temperature_c, aircraft_id)
    return unwrap(result).to_snapshot()


@router.get("/{aircraft_id}/performance/landing")
async def landing(
    aircraft_id: str,
    weight: float = Query(..., gt=0),
    altitude_ft: float = Query(...),
    temperature_c: float = Query(...),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.landing(weight, altitude_ft, temperature_c, aircraft_id)
    return unwrap(result).to_snapshot()


@router.get("/{aircraft_id}/performance/climb")
async def climb(
    aircraft_id: str,
    weight: float = Query(..., gt=0),
    altitude_ft: float = Query(...),
    temperature_c: float = Query(...),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.climb(weight, altitude_ft, temperature_c, aircraft_id)
    return {"rate_fpm": unwrap(result)}


@router.get("/{aircraft_id}/performance/cruise")
async def cruise(
    aircraft_id: str,
    altitude_ft: float = Query(...),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    return unwrap(await planning.cruise(altitude_ft, aircraft_id)).to_snapshot()
