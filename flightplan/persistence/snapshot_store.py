"""Key-value snapshot persistence used by the domain stores.

Each store serializes its whole collection to one JSON payload under a fixed
key. The port is deliberately opaque: adapters only move strings.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from flightplan.persistence.firestore_client import create_firestore_client

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    async def read(self, key: str) -> str | None: ...

    async def write(self, key: str, payload: str) -> None: ...


class MemorySnapshotStore:
    """Process-local snapshots. Nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> str | None:
        return self.data.get(key)

    async def write(self, key: str, payload: str) -> None:
        self.data[key] = payload


class FirestoreSnapshotStore:
    """Snapshots as ``{collection}/{key}`` documents with a ``payload`` field.

    The client is created on first use unless one is injected (tests pass a
    ``FakeFirestoreClient``).
    """

    def __init__(
        self,
        client: Any = None,
        *,
        project: str | None = None,
        collection: str = "snapshots",
    ):
        self._client = client
        self._project = project
        self._collection = collection

    def _document(self, key: str):
        if self._client is None:
            self._client = create_firestore_client(self._project)
        return self._client.collection(self._collection).document(key)

    async def read(self, key: str) -> str | None:
        doc = await self._document(key).get()
        if not doc.exists:
            return None
        payload = doc.to_dict().get("payload")
        if payload is not None and not isinstance(payload, str):
            raise TypeError(f"Snapshot {key!r} payload is {type(payload).__name__}, not str")
        return payload

    async def write(self, key: str, payload: str) -> None:
        await self._document(key).set({"payload": payload})
        logger.debug("Wrote snapshot %s (%d bytes)", key, len(payload))
