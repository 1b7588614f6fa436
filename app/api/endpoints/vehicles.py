"""
Vehicle endpoints: filtered list, get by id, create.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.deps import get_store
from app.repositories.filters import Resource, compile_filters
from app.repositories.store import FleetStore
from app.schemas.schemas import ErrorResponse, VehicleCreate, VehicleCreated, VehicleOut
from app.services.validation import validate_vehicle

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=list[VehicleOut], responses={500: {"model": ErrorResponse}})
async def list_vehicles(
    status: Optional[str] = Query(default=None),
    efficiency_rating: Optional[str] = Query(default=None),
    driver_name: Optional[str] = Query(default=None, description="Case-insensitive substring"),
    store: FleetStore = Depends(get_store),
):
    predicates = compile_filters(
        Resource.vehicles,
        {"status": status, "efficiency_rating": efficiency_rating, "driver_name": driver_name},
    )
    return await store.list(Resource.vehicles, predicates)


@router.get(
    "/{vehicle_id}",
    response_model=VehicleOut,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_vehicle(vehicle_id: str, store: FleetStore = Depends(get_store)):
    return await store.get_by_id(Resource.vehicles, vehicle_id)


@router.post(
    "",
    response_model=VehicleCreated,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_vehicle(payload: VehicleCreate, store: FleetStore = Depends(get_store)):
    record = validate_vehicle(payload)
    vehicle = await store.insert(Resource.vehicles, record)
    return VehicleCreated(vehicle=VehicleOut.model_validate(vehicle))
