"""FastAPI application: the planning engine over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load .env file from project root (must be before settings are read)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from flightplan.api.routes import aircraft, notam, routes, weather  # noqa: E402
from flightplan.config import Settings  # noqa: E402
from flightplan.errors import FlightPlanError, NotInitializedError  # noqa: E402
from flightplan.services.container import build_container  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service graph and drive the orchestrator through its lifecycle."""
    container = build_container(Settings.from_env())
    app.state.container = container
    try:
        await container.orchestrator.initialize()
    except FlightPlanError as exc:
        # Keep serving: /api/health reports which service is down
        logger.error("Service startup failed: %s", exc)
    yield
    await container.orchestrator.cleanup()
    await container.aclose()


app = FastAPI(
    title="Flight Planning API",
    description="Routes, weight & balance, performance and briefing data for GA flights",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.from_env().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router, prefix="/api")
app.include_router(aircraft.router, prefix="/api")
app.include_router(weather.router, prefix="/api")
app.include_router(notam.router, prefix="/api")


@app.exception_handler(FlightPlanError)
async def flight_plan_error_handler(request: Request, exc: FlightPlanError) -> JSONResponse:
    status = 503 if isinstance(exc, NotInitializedError) else 422
    return JSONResponse(
        status_code=status,
        content={"detail": {"code": exc.code, "message": str(exc), "details": exc.details()}},
    )


@app.get("/api/health")
async def health(request: Request):
    container = getattr(request.app.state, "container", None)
    if container is None:
        return {"status": "not_started", "orchestrator": "not_started", "services": {}}

    orchestrator = container.orchestrator
    services = orchestrator.get_health_status()
    if not orchestrator.is_initialized():
        status = "unavailable"
    elif all(s.healthy and not s.degraded for s in services.values()):
        status = "ok"
    else:
        status = "degraded"
    return {
        "status": status,
        "orchestrator": orchestrator.state,
        "services": {name: s.to_snapshot() for name, s in services.items()},
    }
