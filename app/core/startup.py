import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import settings
from app.core.database import AsyncSessionLocal, engine
from app.repositories.store import FleetStore

log = logging.getLogger(__name__)

ENDPOINTS = [
    ("Health check", "/health"),
    ("Database test", f"{settings.API_PREFIX}/test-db"),
    ("Vehicles API", f"{settings.API_PREFIX}/vehicles"),
    ("Fuel Events API", f"{settings.API_PREFIX}/fuel-events"),
    ("Dashboard API", f"{settings.API_PREFIX}/dashboard/kpis"),
    ("Daily Metrics", f"{settings.API_PREFIX}/daily-metrics"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ──────────────────────────────────────────────────────────
    app.state.store = FleetStore(AsyncSessionLocal)
    log.info("%s starting on port %d", settings.PROJECT_NAME, settings.PORT)
    for label, path in ENDPOINTS:
        log.info("  %-16s %s", label, path)

    yield  # Application runs here

    # ── Shutdown ─────────────────────────────────────────────────────────
    await engine.dispose()
    log.info("%s shut down.", settings.PROJECT_NAME)
