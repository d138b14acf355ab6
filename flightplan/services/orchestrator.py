"""Coordinated startup, shutdown and health of the domain services."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from flightplan.contracts.enums import OrchestratorState, ServiceState
from flightplan.contracts.service import ServiceStatus
from flightplan.errors import ServiceInitFailure

logger = logging.getLogger(__name__)


class ManagedService(Protocol):
    async def initialize(self) -> None: ...

    async def cleanup(self) -> None: ...

    def get_status(self) -> ServiceStatus: ...


class ServiceOrchestrator:
    """Registers services and drives their lifecycle together.

    ``initialize()`` starts every service concurrently and fails fast: the
    first failure raises ``ServiceInitFailure`` naming the service, while
    siblings still in flight keep running (they are not cancelled) and
    services that already succeeded stay initialized. Calling it again
    only retries the services that are not ready.

    ``cleanup()`` first waits for initializations still in flight, then
    runs every service's cleanup to completion and never raises.
    """

    def __init__(self):
        self._services: dict[str, ManagedService] = {}
        self._states: dict[str, ServiceState] = {}
        self._state = OrchestratorState.NOT_STARTED
        self._inflight: dict[str, asyncio.Task] = {}
        self._init_task: asyncio.Future | None = None

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, name: str, service: ManagedService) -> None:
        if name in self._services:
            raise ValueError(f"Service {name!r} is already registered")
        self._services[name] = service
        self._states[name] = ServiceState.REGISTERED
        logger.debug("Registered service %s", name)

    def get(self, name: str) -> ManagedService:
        try:
            return self._services[name]
        except KeyError:
            raise KeyError(f"No service registered as {name!r}") from None

    def service_names(self) -> list[str]:
        return list(self._services)

    def service_state(self, name: str) -> ServiceState:
        return self._states.get(name, ServiceState.UNREGISTERED)

    @property
    def state(self) -> OrchestratorState:
        return self._state

    def is_initialized(self) -> bool:
        return self._state == OrchestratorState.INITIALIZED

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        if self._state == OrchestratorState.INITIALIZED:
            return
        # Concurrent callers share one initialization run
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize_all())
        task = self._init_task
        try:
            await task
        finally:
            if self._init_task is task:
                self._init_task = None

    async def _initialize_all(self) -> None:
        self._state = OrchestratorState.INITIALIZING
        logger.info("Initializing %d services", len(self._services))

        tasks: dict[asyncio.Task, str] = {}
        for name, service in self._services.items():
            if self._states[name] == ServiceState.READY:
                continue
            task = self._inflight.get(name)
            if task is None:
                task = asyncio.create_task(self._initialize_one(name, service))
                self._inflight[name] = task
                task.add_done_callback(self._settled(name))
            tasks[task] = name

        pending = set(tasks)
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            failed = [t for t in done if not t.cancelled() and t.exception() is not None]
            if failed:
                name = tasks[failed[0]]
                self._state = OrchestratorState.NOT_STARTED
                logger.error(
                    "Service %s failed to initialize: %s", name, failed[0].exception()
                )
                raise ServiceInitFailure(name) from failed[0].exception()

        self._state = OrchestratorState.INITIALIZED
        logger.info("All services initialized: %s", ", ".join(self._services))

    async def _initialize_one(self, name: str, service: ManagedService) -> None:
        self._states[name] = ServiceState.INITIALIZING
        try:
            await service.initialize()
        except Exception:
            self._states[name] = ServiceState.FAILED
            raise
        self._states[name] = ServiceState.READY

    def _settled(self, name: str):
        def callback(task: asyncio.Task) -> None:
            if self._inflight.get(name) is task:
                del self._inflight[name]
            # Retrieve the exception so stragglers never log "never retrieved"
            if not task.cancelled() and task.exception() is not None:
                logger.debug("Service %s initialization settled with %r", name, task.exception())

        return callback

    async def cleanup(self) -> None:
        self._state = OrchestratorState.CLEANING_UP
        # Initializations left in flight by a failed run finish first
        stragglers = list(self._inflight.values())
        if stragglers:
            await asyncio.wait(stragglers)
        names = list(self._services)
        logger.info("Cleaning up %d services", len(names))
        results = await asyncio.gather(
            *(self._services[name].cleanup() for name in names),
            return_exceptions=True,
        )
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.warning("Service %s failed to clean up: %s", name, result)
            self._states[name] = ServiceState.REGISTERED
        self._state = OrchestratorState.NOT_STARTED
        logger.info("Services cleaned up")

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def get_health_status(self) -> dict[str, ServiceStatus]:
        health: dict[str, ServiceStatus] = {}
        for name, service in self._services.items():
            try:
                health[name] = service.get_status()
            except Exception as exc:
                logger.warning("Status check failed for %s: %s", name, exc)
                health[name] = ServiceStatus(healthy=False, error_count=1, error=str(exc))
        return health

    def is_healthy(self) -> bool:
        return all(status.healthy for status in self.get_health_status().values())
