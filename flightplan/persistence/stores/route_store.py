"""Route store: persisted routes with recomputed legs and one active route."""

from __future__ import annotations

import logging

from flightplan.adapters import route_codecs
from flightplan.contracts.enums import RouteFormat
from flightplan.contracts.route import Route
from flightplan.errors import PlanValidationError
from flightplan.persistence.snapshot_store import SnapshotStore
from flightplan.persistence.stores.base import EntityStore
from flightplan.services.route_engine import RouteEngine

logger = logging.getLogger(__name__)

ROUTES_KEY = "flight-plan-routes"


class RouteStore(EntityStore[Route]):
    def __init__(self, snapshots: SnapshotStore, engine: RouteEngine | None = None):
        super().__init__(Route, snapshots, ROUTES_KEY, "route")
        self._engine = engine or RouteEngine()

    def _prepare(self, route: Route) -> Route:
        identifiers = route.identifiers()
        duplicates = sorted({i for i in identifiers if identifiers.count(i) > 1})
        if duplicates:
            raise PlanValidationError(
                f"Waypoint identifiers must be unique within a route: {', '.join(duplicates)}",
                field="waypoints",
            )
        return self._engine.recompute(route)

    async def save(self, route: Route) -> Route:
        saved = await super().save(route)
        if saved.is_active and self._make_exclusive("is_active", saved.id):
            await self._persist()
        return saved

    async def set_active(self, route_id: str) -> Route:
        self._require_initialized()
        if route_id not in self._entities:
            raise PlanValidationError(f"route {route_id} not found", field="id")
        if self._make_exclusive("is_active", route_id):
            await self._persist()
        return self._entities[route_id].model_copy(deep=True)

    async def get_active(self) -> Route | None:
        self._require_initialized()
        for route in self._entities.values():
            if route.is_active:
                return route.model_copy(deep=True)
        return None

    async def import_route(
        self, raw: str, fmt: RouteFormat | str, name: str | None = None
    ) -> Route:
        route = route_codecs.import_route(raw, fmt, name=name)
        saved = await self.save(route)
        logger.info("Imported route %s (%d waypoints)", saved.name, len(saved.waypoints))
        return saved

    async def export_route(self, route_id: str, fmt: RouteFormat | str) -> str:
        route = await self.get(route_id)
        if route is None:
            raise PlanValidationError(f"route {route_id} not found", field="id")
        return route_codecs.export_route(route, fmt)
