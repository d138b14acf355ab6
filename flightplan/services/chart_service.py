"""Chart tile collaborator: a lifecycle-managed HTTP client for a tile server."""

from __future__ import annotations

import logging
import time

import httpx

from flightplan.contracts.common import utc_now
from flightplan.contracts.service import ServiceStatus
from flightplan.errors import NotInitializedError, PlanValidationError

logger = logging.getLogger(__name__)

DEFAULT_TILE_URL = "https://tiles.arcgis.com/tiles/ssFJjBXIUyZDrSYZ/arcgis/rest/services/{layer}/MapServer/tile/{z}/{y}/{x}"
MAX_ZOOM = 22


class ChartService:
    """Fetches raster chart tiles (sectional, TAC, IFR low/high).

    ``tile_url`` is a template with ``{layer}``, ``{z}``, ``{x}`` and ``{y}``
    placeholders.
    """

    name = "chart"

    def __init__(
        self,
        tile_url: str = DEFAULT_TILE_URL,
        *,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._tile_url = tile_url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._error_count = 0
        self._last_error: str | None = None
        self._last_update = None
        self._response_time_ms: float | None = None

    async def initialize(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        self._last_update = utc_now()
        logger.info("Chart service initialized (%s)", self._tile_url)

    async def cleanup(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.info("Chart service cleaned up")

    def get_status(self) -> ServiceStatus:
        return ServiceStatus(
            healthy=self._client is not None,
            last_update=self._last_update,
            error_count=self._error_count,
            response_time_ms=self._response_time_ms,
            error=self._last_error if self._client is not None else "chart service not initialized",
        )

    async def fetch_tile(self, layer: str, z: int, x: int, y: int) -> bytes:
        if self._client is None:
            raise NotInitializedError(self.name)
        if not 0 <= z <= MAX_ZOOM:
            raise PlanValidationError(f"Zoom {z} outside 0..{MAX_ZOOM}", field="z")
        size = 2 ** z
        for field, value in (("x", x), ("y", y)):
            if not 0 <= value < size:
                raise PlanValidationError(f"Tile {field}={value} outside 0..{size - 1}", field=field)

        url = self._tile_url.format(layer=layer, z=z, x=x, y=y)
        started = time.perf_counter()
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            self._error_count += 1
            self._last_error = str(exc)
            logger.warning("Tile fetch failed for %s: %s", url, exc)
            raise
        self._response_time_ms = (time.perf_counter() - started) * 1000
        self._last_update = utc_now()
        self._last_error = None
        return resp.content
