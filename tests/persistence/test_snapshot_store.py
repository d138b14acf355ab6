"""Tests for the snapshot store adapters."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from flightplan.persistence.snapshot_store import FirestoreSnapshotStore, MemorySnapshotStore
from tests.persistence.fake_firestore import FakeFirestoreClient


@pytest.fixture
def fake_client():
    return FakeFirestoreClient()


class TestMemorySnapshotStore:
    async def test_missing_key_reads_none(self):
        store = MemorySnapshotStore()
        assert await store.read("flight-plan-routes") is None

    async def test_write_then_read(self):
        store = MemorySnapshotStore()
        await store.write("k", "[]")
        assert await store.read("k") == "[]"
        assert store.data == {"k": "[]"}

    async def test_initial_data_is_copied(self):
        initial = {"k": "[1]"}
        store = MemorySnapshotStore(initial)
        await store.write("k", "[2]")
        assert initial == {"k": "[1]"}


class TestFirestoreSnapshotStore:
    async def test_roundtrip(self, fake_client):
        store = FirestoreSnapshotStore(fake_client)
        await store.write("flight-plan-aircraft", '[{"id": "a"}]')
        assert await store.read("flight-plan-aircraft") == '[{"id": "a"}]'

    async def test_document_layout(self, fake_client):
        store = FirestoreSnapshotStore(fake_client, collection="planner")
        await store.write("flight-plan-routes", "[]")
        assert fake_client.store == {"planner/flight-plan-routes": {"payload": "[]"}}

    async def test_missing_document_reads_none(self, fake_client):
        store = FirestoreSnapshotStore(fake_client)
        assert await store.read("nothing-here") is None

    async def test_non_string_payload_rejected(self, fake_client):
        fake_client.store["snapshots/bad"] = {"payload": 42}
        store = FirestoreSnapshotStore(fake_client)
        with pytest.raises(TypeError):
            await store.read("bad")

    async def test_client_created_lazily(self, fake_client):
        with patch(
            "flightplan.persistence.snapshot_store.create_firestore_client",
            return_value=fake_client,
        ) as factory:
            store = FirestoreSnapshotStore(project="demo-project")
            factory.assert_not_called()
            await store.write("k", "[]")
            await store.read("k")
        factory.assert_called_once_with("demo-project")
