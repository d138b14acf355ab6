"""Tests for the generic entity store behaviour, exercised through RouteStore."""

from __future__ import annotations

import json

import pytest

from flightplan.contracts.route import Route, RoutePatch
from flightplan.errors import NotInitializedError, PlanValidationError
from flightplan.persistence.snapshot_store import FirestoreSnapshotStore, MemorySnapshotStore
from flightplan.persistence.stores.route_store import ROUTES_KEY, RouteStore
from tests.persistence.fake_firestore import FakeFirestoreClient


class FailingSnapshotStore:
    def __init__(self, fail_read: bool = False, fail_write: bool = True):
        self.fail_read = fail_read
        self.fail_write = fail_write

    async def read(self, key: str) -> str | None:
        if self.fail_read:
            raise ConnectionError("snapshot backend unreachable")
        return None

    async def write(self, key: str, payload: str) -> None:
        if self.fail_write:
            raise ConnectionError("snapshot backend unreachable")


def _route(name: str, *waypoints) -> Route:
    return Route(name=name, waypoints=list(waypoints), cruise_speed_kt=110, fuel_burn_rate=8.5)


@pytest.fixture
def snapshots():
    return MemorySnapshotStore()


@pytest.fixture
async def store(snapshots):
    s = RouteStore(snapshots)
    await s.initialize()
    return s


class TestLifecycle:
    async def test_not_initialized(self, snapshots):
        store = RouteStore(snapshots)
        with pytest.raises(NotInitializedError):
            await store.load_all()
        status = store.get_status()
        assert not status.healthy
        assert status.error == "route store not initialized"

    async def test_initialize_empty(self, store):
        assert store.is_initialized
        assert await store.load_all() == []
        assert store.get_status().healthy

    async def test_cleanup_persists_and_closes(self, snapshots, store, kord, kmdw):
        await store.save(_route("Hop", kord, kmdw))
        await store.cleanup()
        assert not store.is_initialized
        assert len(json.loads(snapshots.data[ROUTES_KEY])) == 1

    async def test_reload_from_snapshot(self, snapshots, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        reopened = RouteStore(snapshots)
        await reopened.initialize()
        loaded = await reopened.get(saved.id)
        assert loaded is not None
        assert loaded.identifiers() == ["KORD", "KMDW"]
        assert loaded.total_time_min == pytest.approx(saved.total_time_min)
        assert loaded.created_at == saved.created_at

    async def test_route_without_times_reloads_as_unset(self, snapshots, store, kord, kmdw):
        saved = await store.save(Route(name="No speed", waypoints=[kord, kmdw]))
        reopened = RouteStore(snapshots)
        await reopened.initialize()
        assert (await reopened.get(saved.id)).total_time_min is None

    async def test_firestore_backed(self, kord, kmdw):
        client = FakeFirestoreClient()
        store = RouteStore(FirestoreSnapshotStore(client))
        await store.initialize()
        saved = await store.save(_route("Hop", kord, kmdw))
        payload = client.store[f"snapshots/{ROUTES_KEY}"]["payload"]
        assert json.loads(payload)[0]["id"] == saved.id


class TestSave:
    async def test_first_save_assigns_id_and_timestamps(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        assert saved.id
        assert saved.created_at is not None
        assert saved.created_at == saved.updated_at

    async def test_update_keeps_created_at(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        updated = await store.save(saved.model_copy(update={"description": "Lakefront"}))
        assert updated.id == saved.id
        assert updated.created_at == saved.created_at
        assert updated.updated_at >= saved.updated_at
        assert len(await store.load_all()) == 1

    async def test_save_recomputes_legs(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        assert len(saved.legs) == 1
        assert saved.total_distance_nm == pytest.approx(13.37, abs=0.1)

    async def test_returns_copies(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        saved.name = "Mutated"
        assert (await store.get(saved.id)).name == "Hop"

    async def test_duplicate_identifiers_rejected(self, store, kord, kmdw):
        again = kord.model_copy(update={"id": "other"})
        with pytest.raises(PlanValidationError) as exc_info:
            await store.save(_route("Loop", kord, kmdw, again))
        assert exc_info.value.field == "waypoints"
        assert await store.load_all() == []

    async def test_delete_is_idempotent(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        await store.delete(saved.id)
        await store.delete(saved.id)
        assert await store.get(saved.id) is None


class TestDuplicateAndPatch:
    async def test_duplicate(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw).model_copy(update={"is_active": True}))
        copy = await store.duplicate(saved)
        assert copy.id != saved.id
        assert copy.name == "Hop (Copy)"
        assert copy.is_active is False
        assert copy.identifiers() == saved.identifiers()
        assert (await store.get_active()).id == saved.id

    async def test_patch_only_set_fields(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        patched = await store.patch(saved.id, RoutePatch(cruise_speed_kt=120))
        assert patched.name == "Hop"
        assert patched.cruise_speed_kt == 120
        assert patched.total_time_min < saved.total_time_min

    async def test_patch_explicit_none_clears(self, store, kord, kmdw):
        saved = await store.save(_route("Hop", kord, kmdw))
        patched = await store.patch(saved.id, RoutePatch(fuel_burn_rate=None))
        assert patched.fuel_burn_rate is None
        assert patched.total_fuel is None

    async def test_patch_unknown_id(self, store):
        with pytest.raises(PlanValidationError) as exc_info:
            await store.patch("missing", RoutePatch(name="x"))
        assert exc_info.value.field == "id"


class TestDegradedPersistence:
    async def test_write_failure_keeps_memory(self, kord, kmdw):
        store = RouteStore(FailingSnapshotStore())
        await store.initialize()
        saved = await store.save(_route("Hop", kord, kmdw))
        assert await store.get(saved.id) is not None
        status = store.get_status()
        assert status.healthy
        assert status.degraded
        assert status.error_count == 1
        assert "write" in status.warnings[0]

    async def test_read_failure_loads_empty(self):
        store = RouteStore(FailingSnapshotStore(fail_read=True, fail_write=False))
        await store.initialize()
        assert await store.load_all() == []
        assert store.get_status().degraded

    @pytest.mark.parametrize("payload", ["not json", '{"id": "x"}', '[{"name": 5}]', '[{"name": "no id"}]'])
    async def test_corrupt_snapshot_loads_empty(self, payload):
        store = RouteStore(MemorySnapshotStore({ROUTES_KEY: payload}))
        await store.initialize()
        assert await store.load_all() == []
        status = store.get_status()
        assert status.degraded
        assert "decode" in status.warnings[0]
