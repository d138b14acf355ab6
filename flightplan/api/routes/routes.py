"""Route endpoints: CRUD, activation, import/export and route computations."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from flightplan.api.deps import get_planning, get_route_store, unwrap
from flightplan.contracts.common import Wind
from flightplan.contracts.enums import RouteFormat
from flightplan.contracts.route import Route, RoutePatch
from flightplan.contracts.waypoint import Waypoint
from flightplan.persistence.stores.route_store import RouteStore
from flightplan.services.planning_service import PlanningService

router = APIRouter(prefix="/routes", tags=["routes"])

_MEDIA_TYPES = {
    RouteFormat.FPL: "application/xml",
    RouteFormat.GPX: "application/gpx+xml",
    RouteFormat.GFP: "text/plain",
}


class ComputeRouteRequest(BaseModel):
    waypoints: list[Waypoint]
    name: str | None = None
    cruise_speed_kt: float | None = Field(default=None, gt=0)
    fuel_burn_rate: float | None = Field(default=None, gt=0)
    wind: Wind | None = None


class ImportRouteRequest(BaseModel):
    raw: str = Field(..., min_length=1)
    format: RouteFormat
    name: str | None = None


class InsertWaypointRequest(BaseModel):
    index: int = Field(..., ge=0)
    waypoint: Waypoint


class MoveWaypointRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


async def _get_or_404(store: RouteStore, route_id: str) -> Route:
    route = await store.get(route_id)
    if route is None:
        raise HTTPException(status_code=404, detail="Route not found")
    return route


@router.get("")
async def list_routes(store: RouteStore = Depends(get_route_store)) -> list[dict]:
    return [r.to_snapshot() for r in await store.load_all()]


@router.post("", status_code=201)
async def create_route(route: Route, store: RouteStore = Depends(get_route_store)) -> dict:
    saved = await store.save(route)
    return saved.to_snapshot()


@router.get("/active")
async def get_active_route(store: RouteStore = Depends(get_route_store)) -> dict:
    route = await store.get_active()
    if route is None:
        raise HTTPException(status_code=404, detail="No active route")
    return route.to_snapshot()


@router.post("/compute")
async def compute_route(
    request: ComputeRouteRequest,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    """Compute legs and totals for a waypoint list without storing anything."""
    result = await planning.compute_route(
        request.waypoints,
        request.cruise_speed_kt,
        request.fuel_burn_rate,
        name=request.name,
        wind=request.wind,
    )
    return unwrap(result).to_snapshot()


@router.post("/import", status_code=201)
async def import_route(
    request: ImportRouteRequest,
    store: RouteStore = Depends(get_route_store),
) -> dict:
    saved = await store.import_route(request.raw, request.format, name=request.name)
    return saved.to_snapshot()


@router.get("/{route_id}")
async def get_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> dict:
    return (await _get_or_404(store, route_id)).to_snapshot()


@router.patch("/{route_id}")
async def patch_route(
    route_id: str,
    patch: RoutePatch,
    store: RouteStore = Depends(get_route_store),
) -> dict:
    await _get_or_404(store, route_id)
    saved = await store.patch(route_id, patch)
    return saved.to_snapshot()


@router.delete("/{route_id}", status_code=204)
async def delete_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> None:
    await store.delete(route_id)


@router.post("/{route_id}/duplicate", status_code=201)
async def duplicate_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> dict:
    route = await _get_or_404(store, route_id)
    return (await store.duplicate(route)).to_snapshot()


@router.post("/{route_id}/activate")
async def activate_route(route_id: str, store: RouteStore = Depends(get_route_store)) -> dict:
    await _get_or_404(store, route_id)
    return (await store.set_active(route_id)).to_snapshot()


@router.get("/{route_id}/export")
async def export_route(
    route_id: str,
    format: RouteFormat = Query(RouteFormat.GPX),
    store: RouteStore = Depends(get_route_store),
) -> PlainTextResponse:
    await _get_or_404(store, route_id)
    content = await store.export_route(route_id, format)
    return PlainTextResponse(content, media_type=_MEDIA_TYPES[RouteFormat(format)])


@router.get("/{route_id}/navlog")
async def navigation_log(
    route_id: str,
    fuel_on_board: float = Query(..., ge=0),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    return unwrap(await planning.navigation_log(route_id, fuel_on_board)).to_snapshot()


@router.get("/{route_id}/fuel-plan")
async def fuel_plan(
    route_id: str,
    aircraft_id: str | None = None,
    reserve_min: float = Query(30, ge=0),
    fuel_on_board: float | None = Query(None, ge=0),
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.fuel_plan(
        route_id, aircraft_id, reserve_min=reserve_min, fuel_on_board=fuel_on_board
    )
    return unwrap(result).to_snapshot()


@router.post("/{route_id}/waypoints")
async def insert_waypoint(
    route_id: str,
    request: InsertWaypointRequest,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.insert_waypoint(route_id, request.index, request.waypoint)
    return unwrap(result).to_snapshot()


@router.put("/{route_id}/waypoints/{waypoint_id}")
async def replace_waypoint(
    route_id: str,
    waypoint_id: str,
    waypoint: Waypoint,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.replace_waypoint(route_id, waypoint_id, waypoint)
    return unwrap(result).to_snapshot()


@router.delete("/{route_id}/waypoints/{waypoint_id}")
async def remove_waypoint(
    route_id: str,
    waypoint_id: str,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    return unwrap(await planning.remove_waypoint(route_id, waypoint_id)).to_snapshot()


@router.post("/{route_id}/waypoints/move")
async def move_waypoint(
    route_id: str,
    request: MoveWaypointRequest,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    result = await planning.move_waypoint(route_id, request.from_index, request.to_index)
    return unwrap(result).to_snapshot()


@router.post("/{route_id}/reverse")
async def reverse_route(
    route_id: str,
    planning: PlanningService = Depends(get_planning),
) -> dict:
    return unwrap(await planning.reverse_route(route_id)).to_snapshot()
