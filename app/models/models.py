"""
SQLAlchemy ORM models for the fuel tracking platform.

Vehicles own fuel events and daily metrics. Daily metrics are written by an
external aggregation process and only read here.
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, Integer, String, Text, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.core.database import Base


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
# Stored as plain strings: the API accepts any value and only the KPI
# queries depend on these members.

class VehicleStatus(str, enum.Enum):
    active = "Active"
    inactive = "Inactive"
    maintenance = "Maintenance"


class FuelEventType(str, enum.Enum):
    refill = "refill"
    theft = "theft"
    consumption = "consumption"


# ---------------------------------------------------------------------------
# Vehicle
# ---------------------------------------------------------------------------

class Vehicle(Base):
    __tablename__ = "vehicles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id: Mapped[str] = mapped_column(String(100), nullable=False)
    vehicle_plate: Mapped[str] = mapped_column(String(30), nullable=False)
    driver_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(30), default=VehicleStatus.active.value)

    # Fuel state
    current_fuel_level: Mapped[float] = mapped_column(Float, default=0.0)   # litres
    tank_capacity: Mapped[float] = mapped_column(Float, default=300.0)      # litres
    fuel_efficiency: Mapped[float] = mapped_column(Float, default=8.5)      # km per litre
    efficiency_rating: Mapped[str] = mapped_column(String(30), default="Good")
    system_reliability: Mapped[str] = mapped_column(String(30), default="Good")

    # Cumulative counters, maintained by telemetry ingestion
    total_fuel_used: Mapped[float] = mapped_column(Float, nullable=True, default=0.0)
    total_distance: Mapped[float] = mapped_column(Float, nullable=True, default=0.0)
    total_engine_hours: Mapped[float] = mapped_column(Float, nullable=True, default=0.0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_vehicles_status", "status"),
        Index("ix_vehicles_asset_id", "asset_id"),
    )


# ---------------------------------------------------------------------------
# Fuel event
# ---------------------------------------------------------------------------

class FuelEvent(Base):
    __tablename__ = "fuel_events"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    event_type: Mapped[str] = mapped_column(String(30), nullable=False)
    volume_liters: Mapped[float] = mapped_column(Float, nullable=False)

    cost_kes: Mapped[float] = mapped_column(Float, nullable=True)
    cost_ugx: Mapped[float] = mapped_column(Float, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=True)

    event_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_fuel_events_vehicle_id", "vehicle_id"),
        Index("ix_fuel_events_event_timestamp", "event_timestamp"),
    )

    vehicle: Mapped["Vehicle"] = relationship(lazy="raise")


# ---------------------------------------------------------------------------
# Daily metric
# ---------------------------------------------------------------------------

class DailyMetric(Base):
    __tablename__ = "daily_metrics"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vehicle_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    metric_date: Mapped[date] = mapped_column(Date, nullable=False)

    fuel_used: Mapped[float] = mapped_column(Float, nullable=True)         # litres
    distance: Mapped[float] = mapped_column(Float, nullable=True)          # km
    engine_hours: Mapped[float] = mapped_column(Float, nullable=True)
    idle_hours: Mapped[float] = mapped_column(Float, nullable=True)
    fuel_efficiency: Mapped[float] = mapped_column(Float, nullable=True)   # km per litre
    refill_count: Mapped[int] = mapped_column(Integer, default=0)
    theft_count: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_daily_metrics_vehicle_date", "vehicle_id", "metric_date"),)
