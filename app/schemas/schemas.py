"""
Pydantic schemas for all request and response models.
"""
import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Errors / system
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    tip: Optional[str] = None
    required: Optional[list[str]] = None
    missing: Optional[list[str]] = None


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Fuel Platform Backend is running!"
    timestamp: datetime
    store: str = "Connected"


class DatabaseTestResponse(BaseModel):
    success: bool = True
    message: str = "Database connection successful!"
    tables: dict[str, int]
    sample: dict[str, list[dict[str, Any]]]


# ---------------------------------------------------------------------------
# Vehicle
# ---------------------------------------------------------------------------
# Create payloads take raw JSON values with every field optional: presence is
# checked by app.services.validation (a missing or blank field yields a 400
# listing the full required set) and type conversion happens in the store.

class VehicleCreate(BaseModel):
    asset_id: Optional[Any] = None
    vehicle_plate: Optional[Any] = None
    driver_name: Optional[Any] = None
    status: Optional[Any] = None
    current_fuel_level: Optional[Any] = None
    tank_capacity: Optional[Any] = None
    fuel_efficiency: Optional[Any] = None
    efficiency_rating: Optional[Any] = None
    system_reliability: Optional[Any] = None


class VehicleOut(BaseModel):
    id: uuid.UUID
    asset_id: str
    vehicle_plate: str
    driver_name: str
    status: Optional[str]
    current_fuel_level: Optional[float]
    tank_capacity: Optional[float]
    fuel_efficiency: Optional[float]
    efficiency_rating: Optional[str]
    system_reliability: Optional[str]
    total_fuel_used: Optional[float]
    total_distance: Optional[float]
    total_engine_hours: Optional[float]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class VehicleSummary(BaseModel):
    """Read-only vehicle projection attached to fuel events."""
    asset_id: str
    vehicle_plate: str
    driver_name: str

    model_config = {"from_attributes": True}


class VehicleCreated(BaseModel):
    success: bool = True
    message: str = "Vehicle created successfully"
    vehicle: VehicleOut


# ---------------------------------------------------------------------------
# Fuel event
# ---------------------------------------------------------------------------

class FuelEventCreate(BaseModel):
    vehicle_id: Optional[Any] = None
    event_type: Optional[Any] = None
    volume_liters: Optional[Any] = None
    cost_kes: Optional[Any] = None
    cost_ugx: Optional[Any] = None
    location: Optional[Any] = None
    notes: Optional[Any] = None
    event_timestamp: Optional[Any] = None


class FuelEventOut(BaseModel):
    id: uuid.UUID
    vehicle_id: uuid.UUID
    event_type: str
    volume_liters: float
    cost_kes: Optional[float]
    cost_ugx: Optional[float]
    location: Optional[str]
    notes: Optional[str]
    event_timestamp: datetime
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


class FuelEventWithVehicle(FuelEventOut):
    # Serialised as "vehicles", the key dashboard clients already read.
    vehicle: Optional[VehicleSummary] = Field(
        default=None,
        validation_alias=AliasChoices("vehicle", "vehicles"),
        serialization_alias="vehicles",
    )


class FuelEventCreated(BaseModel):
    success: bool = True
    message: str = "Fuel event recorded successfully"
    event: FuelEventOut


# ---------------------------------------------------------------------------
# Daily metrics
# ---------------------------------------------------------------------------

class DailyMetricOut(BaseModel):
    id: uuid.UUID
    vehicle_id: uuid.UUID
    metric_date: date
    fuel_used: Optional[float]
    distance: Optional[float]
    engine_hours: Optional[float]
    idle_hours: Optional[float]
    fuel_efficiency: Optional[float]
    refill_count: Optional[int]
    theft_count: Optional[int]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class DashboardKPI(BaseModel):
    """Serialised with camelCase keys (totalVehicles, fleetUtilization, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_vehicles: int
    active_vehicles: int
    total_refills: int
    total_thefts: int
    total_fuel_used: float
    total_distance: float
    total_engine_hours: float
    fleet_utilization: int
    last_updated: datetime
