"""
Fuel event endpoints: filtered list (newest first, with vehicle projection),
get by id, record a new event.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.deps import get_store
from app.repositories.filters import Resource, compile_filters
from app.repositories.store import FleetStore
from app.schemas.schemas import ErrorResponse, FuelEventCreate, FuelEventCreated, FuelEventOut, FuelEventWithVehicle
from app.services.validation import validate_fuel_event

router = APIRouter(prefix="/fuel-events", tags=["Fuel Events"])


@router.get("", response_model=list[FuelEventWithVehicle], responses={500: {"model": ErrorResponse}})
async def list_fuel_events(
    vehicle_id: Optional[str] = Query(default=None),
    event_type: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, description="Inclusive lower bound on event_timestamp"),
    end_date: Optional[str] = Query(default=None, description="Inclusive upper bound on event_timestamp"),
    store: FleetStore = Depends(get_store),
):
    predicates = compile_filters(
        Resource.fuel_events,
        {
            "vehicle_id": vehicle_id,
            "event_type": event_type,
            "start_date": start_date,
            "end_date": end_date,
        },
    )
    return await store.list(Resource.fuel_events, predicates, join=True)


@router.get(
    "/{event_id}",
    response_model=FuelEventWithVehicle,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_fuel_event(event_id: str, store: FleetStore = Depends(get_store)):
    return await store.get_by_id(Resource.fuel_events, event_id, join=True)


@router.post(
    "",
    response_model=FuelEventCreated,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_fuel_event(payload: FuelEventCreate, store: FleetStore = Depends(get_store)):
    record = validate_fuel_event(payload)
    event = await store.insert(Resource.fuel_events, record)
    return FuelEventCreated(event=FuelEventOut.model_validate(event))
