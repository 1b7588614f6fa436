"""
Structural checks for entity creation.

Only presence is checked. Whether a fuel event's vehicle exists is left to
the database foreign key.
"""
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.errors import ValidationError
from app.models.models import VehicleStatus
from app.schemas.schemas import FuelEventCreate, VehicleCreate

VEHICLE_REQUIRED = ["asset_id", "vehicle_plate", "driver_name", "status"]
FUEL_EVENT_REQUIRED = ["vehicle_id", "event_type", "volume_liters"]

VEHICLE_DEFAULTS: dict[str, Any] = {
    "status": VehicleStatus.active.value,
    "current_fuel_level": 0,
    "tank_capacity": 300,
    "fuel_efficiency": 8.5,
    "efficiency_rating": "Good",
    "system_reliability": "Good",
}


def _blank(value: Any) -> bool:
    return value is None or value == ""


def _missing(data: dict, fields: list[str]) -> list[str]:
    return [f for f in fields if _blank(data.get(f))]


def validate_vehicle(payload: VehicleCreate) -> dict:
    """Return the row to insert, with defaults applied, or raise ValidationError."""
    data = payload.model_dump()
    # status is listed as required but falls back to Active when omitted
    missing = _missing(data, ["asset_id", "vehicle_plate", "driver_name"])
    if missing:
        raise ValidationError(required=VEHICLE_REQUIRED, missing=missing)

    record = {
        "asset_id": data["asset_id"],
        "vehicle_plate": data["vehicle_plate"],
        "driver_name": data["driver_name"],
    }
    for field, default in VEHICLE_DEFAULTS.items():
        record[field] = default if _blank(data.get(field)) else data[field]
    return record


def validate_fuel_event(payload: FuelEventCreate, now: Optional[datetime] = None) -> dict:
    """
    Return the row to insert or raise ValidationError.

    A zero volume is treated as missing. `event_timestamp` defaults to `now`
    (the current UTC time unless given), so call this right before insert.
    """
    data = payload.model_dump()
    missing = [
        f for f in FUEL_EVENT_REQUIRED
        if _blank(data.get(f)) or (f == "volume_liters" and not data[f])
    ]
    if missing:
        raise ValidationError(required=FUEL_EVENT_REQUIRED, missing=missing)

    return {
        "vehicle_id": data["vehicle_id"],
        "event_type": data["event_type"],
        "volume_liters": data["volume_liters"],
        "cost_kes": data.get("cost_kes"),
        "cost_ugx": data.get("cost_ugx"),
        "location": data.get("location"),
        "notes": data.get("notes"),
        "event_timestamp": data.get("event_timestamp") or now or datetime.now(timezone.utc),
    }
