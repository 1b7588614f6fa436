"""
Database connectivity check used while setting up a new environment.

Unlike the other routes, a failure here returns the underlying error text in
"details" so operators can see what went wrong.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.deps import get_store
from app.core.errors import StoreError
from app.repositories.filters import Resource
from app.repositories.store import FleetStore
from app.schemas.schemas import DatabaseTestResponse, ErrorResponse, FuelEventOut, VehicleOut

log = logging.getLogger(__name__)

router = APIRouter(tags=["Diagnostics"])

SAMPLE_SIZE = 5


@router.get("/test-db", response_model=DatabaseTestResponse, responses={500: {"model": ErrorResponse}})
async def test_database(store: FleetStore = Depends(get_store)):
    try:
        vehicles, events, vehicle_count, event_count = await asyncio.gather(
            store.list(Resource.vehicles, limit=SAMPLE_SIZE),
            store.list(Resource.fuel_events, limit=SAMPLE_SIZE),
            store.count(Resource.vehicles),
            store.count(Resource.fuel_events),
        )
    except StoreError as exc:
        log.error(f"[Diagnostics] Database test failed: {exc.root_cause!r}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Database connection failed",
                details=str(exc.root_cause or exc),
                tip="Make sure the migrations have been applied: alembic upgrade head",
            ).model_dump(exclude_none=True),
        )

    return DatabaseTestResponse(
        tables={"vehicles": vehicle_count, "fuel_events": event_count},
        sample={
            "vehicles": [VehicleOut.model_validate(v).model_dump(mode="json") for v in vehicles],
            "fuelEvents": [FuelEventOut.model_validate(e).model_dump(mode="json") for e in events],
        },
    )
