"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-17

Initial schema for the fuel platform.
Tables: vehicles, fuel_events, daily_metrics
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # ------------------------------------------------------------------
    # vehicles
    # ------------------------------------------------------------------
    op.create_table(
        "vehicles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("asset_id", sa.String(100), nullable=False),
        sa.Column("vehicle_plate", sa.String(30), nullable=False),
        sa.Column("driver_name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(30), server_default="Active"),
        sa.Column("current_fuel_level", sa.Float(), server_default="0"),
        sa.Column("tank_capacity", sa.Float(), server_default="300"),
        sa.Column("fuel_efficiency", sa.Float(), server_default="8.5"),
        sa.Column("efficiency_rating", sa.String(30), server_default="Good"),
        sa.Column("system_reliability", sa.String(30), server_default="Good"),
        sa.Column("total_fuel_used", sa.Float(), server_default="0", nullable=True),
        sa.Column("total_distance", sa.Float(), server_default="0", nullable=True),
        sa.Column("total_engine_hours", sa.Float(), server_default="0", nullable=True),
        *_timestamps(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_vehicles_status", "vehicles", ["status"])
    op.create_index("ix_vehicles_asset_id", "vehicles", ["asset_id"])

    # ------------------------------------------------------------------
    # fuel_events
    # ------------------------------------------------------------------
    op.create_table(
        "fuel_events",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "vehicle_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("vehicles.id"),
            nullable=False,
        ),
        sa.Column("event_type", sa.String(30), nullable=False),
        sa.Column("volume_liters", sa.Float(), nullable=False),
        sa.Column("cost_kes", sa.Float(), nullable=True),
        sa.Column("cost_ugx", sa.Float(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("event_timestamp", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_fuel_events_vehicle_id", "fuel_events", ["vehicle_id"])
    op.create_index("ix_fuel_events_event_timestamp", "fuel_events", ["event_timestamp"])

    # ------------------------------------------------------------------
    # daily_metrics (written by the nightly aggregation job)
    # ------------------------------------------------------------------
    op.create_table(
        "daily_metrics",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "vehicle_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("vehicles.id"),
            nullable=False,
        ),
        sa.Column("metric_date", sa.Date(), nullable=False),
        sa.Column("fuel_used", sa.Float(), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("engine_hours", sa.Float(), nullable=True),
        sa.Column("idle_hours", sa.Float(), nullable=True),
        sa.Column("fuel_efficiency", sa.Float(), nullable=True),
        sa.Column("refill_count", sa.Integer(), server_default="0"),
        sa.Column("theft_count", sa.Integer(), server_default="0"),
        *_timestamps(),
    )
    op.create_index(
        "ix_daily_metrics_vehicle_date", "daily_metrics", ["vehicle_id", "metric_date"]
    )


def downgrade() -> None:
    op.drop_index("ix_daily_metrics_vehicle_date", table_name="daily_metrics")
    op.drop_table("daily_metrics")
    op.drop_index("ix_fuel_events_event_timestamp", table_name="fuel_events")
    op.drop_index("ix_fuel_events_vehicle_id", table_name="fuel_events")
    op.drop_table("fuel_events")
    op.drop_index("ix_vehicles_asset_id", table_name="vehicles")
    op.drop_index("ix_vehicles_status", table_name="vehicles")
    op.drop_table("vehicles")
