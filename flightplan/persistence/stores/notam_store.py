"""NOTAM store: NOTAMs in force per airport."""

from __future__ import annotations

from datetime import datetime, timedelta

from flightplan.contracts.notam import Notam
from flightplan.persistence.snapshot_store import SnapshotStore
from flightplan.persistence.stores.base import AirportCacheStore
from flightplan.services.notam_client import NotamProvider

NOTAMS_KEY = "flight-plan-notams"


class NotamStore(AirportCacheStore[Notam]):
    def __init__(
        self,
        snapshots: SnapshotStore,
        provider: NotamProvider | None = None,
        refresh_threshold: timedelta = timedelta(minutes=60),
    ):
        super().__init__(Notam, snapshots, NOTAMS_KEY, "notam", provider, refresh_threshold)

    def _merge(self, airports: list[str], fetched: list[Notam]) -> list[Notam]:
        # A successful fetch is the full set in force for the requested airports:
        # NOTAMs no longer returned have been cancelled or have expired.
        by_number = {(n.airport, n.number): n for a in airports for n in self._cached(a)}
        for notam in by_number.values():
            del self._entities[notam.id]

        merged = []
        for notam in fetched:
            previous = by_number.get((notam.airport, notam.number))
            if previous is not None:
                notam = notam.model_copy(
                    update={"id": previous.id, "created_at": previous.created_at}
                )
            merged.append(notam)
        return merged

    async def get_for_airport(
        self, airport: str, active_at: datetime | None = None
    ) -> list[Notam]:
        """NOTAMs cached for *airport*, optionally only those in force at *active_at*."""
        self._require_initialized()
        cached = self._cached(airport)
        if active_at is not None:
            cached = [n for n in cached if n.is_active_at(active_at)]
        return [n.model_copy(deep=True) for n in cached]
