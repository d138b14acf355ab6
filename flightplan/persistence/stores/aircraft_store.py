"""Aircraft store: persisted profiles with one default aircraft."""

from __future__ import annotations

import logging

from flightplan.contracts.aircraft import AircraftProfile
from flightplan.errors import PlanValidationError
from flightplan.persistence.snapshot_store import SnapshotStore
from flightplan.persistence.stores.base import EntityStore
from flightplan.services.default_aircraft import default_aircraft

logger = logging.getLogger(__name__)

AIRCRAFT_KEY = "flight-plan-aircraft"


class AircraftStore(EntityStore[AircraftProfile]):
    def __init__(self, snapshots: SnapshotStore):
        super().__init__(AircraftProfile, snapshots, AIRCRAFT_KEY, "aircraft")

    async def _on_loaded(self) -> None:
        if self._entities:
            return
        # After a failed read the stored profiles are unknown, so keep the seed in memory
        [seeded] = await self._store([default_aircraft()], persist=not self._read_failed)
        logger.info("Seeded default aircraft %s", seeded.name)

    async def save(self, profile: AircraftProfile) -> AircraftProfile:
        saved = await super().save(profile)
        if saved.is_default and self._make_exclusive("is_default", saved.id):
            await self._persist()
        return saved

    async def get_default(self) -> AircraftProfile | None:
        """The flagged default, else the first profile, else None."""
        self._require_initialized()
        for profile in self._entities.values():
            if profile.is_default:
                return profile.model_copy(deep=True)
        for profile in self._entities.values():
            return profile.model_copy(deep=True)
        return None

    async def set_default(self, aircraft_id: str) -> AircraftProfile:
        self._require_initialized()
        if aircraft_id not in self._entities:
            raise PlanValidationError(f"aircraft {aircraft_id} not found", field="id")
        if self._make_exclusive("is_default", aircraft_id):
            await self._persist()
        return self._entities[aircraft_id].model_copy(deep=True)
