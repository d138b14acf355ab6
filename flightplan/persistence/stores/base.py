"""Generic async in-memory store mirrored to one snapshot key."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from flightplan.contracts.common import PlanModel, apply_patch, utc_now
from flightplan.contracts.service import ServiceStatus
from flightplan.contracts.waypoint import new_id
from flightplan.errors import NotInitializedError, PlanValidationError
from flightplan.persistence.errors import PersistenceDegraded, SnapshotCorruptError
from flightplan.persistence.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=PlanModel)

# Flags that must not be inherited by a duplicated entity
_EXCLUSIVE_FLAGS = ("is_default", "is_active")
_MAX_WARNINGS = 20


class EntityStore(Generic[T]):
    """CRUD over an in-memory collection of entities keyed by ``id``.

    The whole collection is serialized to a JSON list under ``snapshot_key``
    after every mutation, using the contract's ``to_snapshot()`` and
    ``from_snapshot()``. The in-memory collection is authoritative: a failed
    snapshot read or write is logged and reported through ``get_status()``
    as a ``PersistenceDegraded`` warning, never raised.

    Every entity handed out is a deep copy.
    """

    def __init__(
        self,
        model_class: type[T],
        snapshots: SnapshotStore,
        snapshot_key: str,
        name: str,
    ):
        self._model_class = model_class
        self._snapshots = snapshots
        self.snapshot_key = snapshot_key
        self.name = name

        self._entities: dict[str, T] = {}
        self._initialized = False
        self._error_count = 0
        self._warnings: list[str] = []
        self._last_update = None
        # Set while the last snapshot read failed and nothing has been written since
        self._read_failed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        if self._initialized:
            return
        self._entities = {}
        self._read_failed = False
        for entity in await self._load_snapshot():
            self._entities[entity.id] = entity
        await self._on_loaded()
        self._initialized = True
        self._last_update = utc_now()
        logger.info("%s store initialized with %d entities", self.name, len(self._entities))

    async def cleanup(self) -> None:
        if not self._initialized:
            return
        if self._read_failed:
            logger.warning("%s store: snapshot was never read, skipping final write", self.name)
        else:
            await self._persist()
        self._initialized = False
        self._entities = {}
        logger.info("%s store cleaned up", self.name)

    def get_status(self) -> ServiceStatus:
        return ServiceStatus(
            healthy=self._initialized,
            last_update=self._last_update,
            error_count=self._error_count,
            degraded=bool(self._warnings),
            warnings=list(self._warnings),
            error=None if self._initialized else f"{self.name} store not initialized",
        )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def _on_loaded(self) -> None:
        """Hook run after the snapshot is loaded, before the store opens."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def load_all(self) -> list[T]:
        self._require_initialized()
        return [entity.model_copy(deep=True) for entity in self._entities.values()]

    async def get(self, entity_id: str) -> T | None:
        self._require_initialized()
        entity = self._entities.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def save(self, entity: T) -> T:
        """Upsert *entity* by id, assigning an id and timestamps as needed."""
        self._require_initialized()
        prepared = self._prepare(entity.model_copy(deep=True))
        [stored] = await self._store([prepared])
        return stored

    async def _store(self, entities: list[T], *, persist: bool = True) -> list[T]:
        """Stamp and upsert already-prepared entities, then persist once."""
        now = utc_now()
        stored = []
        for entity in entities:
            updates: dict[str, object] = {"updated_at": now}
            if not entity.id:
                updates["id"] = new_id()
            if entity.created_at is None:
                updates["created_at"] = now
            entity = entity.model_copy(update=updates)
            self._entities[entity.id] = entity
            stored.append(entity.model_copy(deep=True))
        self._last_update = now
        if persist:
            await self._persist()
        return stored

    async def delete(self, entity_id: str) -> None:
        """Remove an entity. Deleting an unknown id is a no-op."""
        self._require_initialized()
        if self._entities.pop(entity_id, None) is None:
            return
        self._last_update = utc_now()
        await self._persist()

    async def duplicate(self, entity: T) -> T:
        updates: dict[str, object] = {"id": None, "created_at": None, "updated_at": None}
        if "name" in self._model_class.model_fields:
            updates["name"] = f"{entity.name} (Copy)"
        for flag in _EXCLUSIVE_FLAGS:
            if flag in self._model_class.model_fields:
                updates[flag] = False
        return await self.save(entity.model_copy(deep=True, update=updates))

    async def patch(self, entity_id: str, patch: BaseModel) -> T:
        self._require_initialized()
        current = self._entities.get(entity_id)
        if current is None:
            raise PlanValidationError(f"{self.name} {entity_id} not found", field="id")
        try:
            merged = apply_patch(current, patch)
        except ValidationError as exc:
            raise PlanValidationError(str(exc), field="patch") from exc
        return await self.save(merged)

    def _prepare(self, entity: T) -> T:
        """Validate/normalize an entity before it is stored. Override per store."""
        return entity

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make_exclusive(self, flag: str, keep_id: str | None) -> bool:
        """Clear *flag* on every entity except *keep_id*. True if anything changed."""
        changed = False
        for entity_id, entity in self._entities.items():
            wanted = entity_id == keep_id
            if getattr(entity, flag) != wanted:
                self._entities[entity_id] = entity.model_copy(update={flag: wanted})
                changed = True
        return changed

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError(self.name)

    async def _load_snapshot(self) -> list[T]:
        try:
            payload = await self._snapshots.read(self.snapshot_key)
        except Exception as exc:
            self._degrade("read", exc)
            self._read_failed = True
            return []
        if payload is None:
            return []
        try:
            return self._decode(payload)
        except SnapshotCorruptError as exc:
            self._degrade("decode", exc)
            return []

    def _decode(self, payload: str) -> list[T]:
        try:
            raw = json.loads(payload)
        except ValueError as exc:
            raise SnapshotCorruptError(self.snapshot_key, f"invalid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise SnapshotCorruptError(self.snapshot_key, f"expected a list, got {type(raw).__name__}")
        entities = []
        for item in raw:
            try:
                entity = self._model_class.from_snapshot(item)
            except ValidationError as exc:
                raise SnapshotCorruptError(self.snapshot_key, str(exc)) from exc
            if not entity.id:
                raise SnapshotCorruptError(self.snapshot_key, "entity without id")
            entities.append(entity)
        return entities

    async def _persist(self) -> None:
        payload = json.dumps([entity.to_snapshot() for entity in self._entities.values()])
        try:
            await self._snapshots.write(self.snapshot_key, payload)
        except Exception as exc:
            self._degrade("write", exc)
        else:
            self._read_failed = False

    def _degrade(self, operation: str, exc: BaseException) -> None:
        warning = PersistenceDegraded(self.snapshot_key, operation, exc)
        self._error_count += 1
        self._warnings = [*self._warnings, str(warning)][-_MAX_WARNINGS:]
        logger.warning("%s store: %s", self.name, warning)


C = TypeVar("C", bound=PlanModel)


class AirportCacheStore(EntityStore[C]):
    """Store of externally sourced reports keyed by airport identifier.

    Reports come from a provider with ``fetch_current(airports)``. A failed
    fetch is logged and counted; the cached reports are left untouched and
    simply age until the next successful refresh.
    """

    def __init__(
        self,
        model_class: type[C],
        snapshots: SnapshotStore,
        snapshot_key: str,
        name: str,
        provider,
        refresh_threshold: timedelta,
    ):
        super().__init__(model_class, snapshots, snapshot_key, name)
        self._provider = provider
        self.refresh_threshold = refresh_threshold

    async def refresh(self, airports: list[str]) -> list[C]:
        """Fetch current reports for *airports* and upsert them."""
        self._require_initialized()
        wanted = list(dict.fromkeys(a.strip().upper() for a in airports if a.strip()))
        if not wanted:
            return []
        if self._provider is None:
            logger.warning("%s store has no provider configured; refresh skipped", self.name)
            return []
        try:
            fetched = await self._provider.fetch_current(wanted)
        except Exception as exc:
            self._error_count += 1
            self._warnings = [*self._warnings, f"fetch failed: {exc}"][-_MAX_WARNINGS:]
            logger.warning("%s fetch failed for %s: %s", self.name, ",".join(wanted), exc)
            return []

        now = utc_now()
        fresh = [report.model_copy(update={"last_update": now}) for report in fetched]
        return await self._store(self._merge(wanted, fresh))

    def _merge(self, airports: list[str], fetched: list[C]) -> list[C]:
        """Reconcile fetched reports with the cache; return the entities to store."""
        raise NotImplementedError

    def _cached(self, airport: str) -> list[C]:
        key = airport.strip().upper()
        return [e for e in self._entities.values() if e.airport == key]

    async def is_stale(self, airport: str, now: datetime | None = None) -> bool:
        """True when nothing is cached for *airport* or the oldest entry has aged out."""
        self._require_initialized()
        cached = self._cached(airport)
        if not cached:
            return True
        now = now or utc_now()
        return any(entry.is_stale(now, self.refresh_threshold) for entry in cached)

    async def stale_airports(self, airports: list[str], now: datetime | None = None) -> list[str]:
        now = now or utc_now()
        return [a.strip().upper() for a in airports if await self.is_stale(a, now)]
