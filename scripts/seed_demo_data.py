#!/usr/bin/env python
"""
scripts/seed_demo_data.py
──────────────────────────
Seeds a demo fleet for local development.

Usage:
    python scripts/seed_demo_data.py [--vehicles 10] [--days 14] [--seed 42]

What it does:
  1. Creates N vehicles through FleetStore (same defaults as POST /api/vehicles).
  2. Records a daily refill per vehicle over the last --days, plus the odd theft.
  3. Writes one daily_metrics row per vehicle per day, the way the nightly
     aggregation job would.
  4. Prints the resulting dashboard KPIs.

Run `alembic upgrade head` first.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Allow running from repo root
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select, update

from app.core.database import AsyncSessionLocal, engine
from app.models.models import DailyMetric, FuelEventType, Vehicle, VehicleStatus
from app.repositories.filters import Resource
from app.repositories.store import FleetStore
from app.schemas.schemas import FuelEventCreate, VehicleCreate
from app.services.kpi import KPIService
from app.services.validation import validate_fuel_event, validate_vehicle

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger(__name__)

DRIVERS = ["Amina Otieno", "Brian Mugisha", "Caroline Wanjiru", "David Okello", "Esther Nakato",
           "Francis Kamau", "Grace Achieng", "Henry Ssemwogerere", "Irene Njeri", "James Kato"]


async def seed(vehicle_count: int, days: int, rng: random.Random) -> None:
    store = FleetStore(AsyncSessionLocal)
    now = datetime.now(timezone.utc)

    for i in range(vehicle_count):
        payload = VehicleCreate(
            asset_id=f"TRK-{i + 1:03d}",
            vehicle_plate=f"KD{rng.choice('ABCDEFGH')} {rng.randint(100, 999)}{rng.choice('XYZ')}",
            driver_name=DRIVERS[i % len(DRIVERS)],
            status=VehicleStatus.inactive.value if rng.random() < 0.25 else VehicleStatus.active.value,
            efficiency_rating=rng.choice(["Excellent", "Good", "Fair", "Poor"]),
        )
        record = validate_vehicle(payload)
        record["total_fuel_used"] = 0.0
        record["total_distance"] = 0.0
        record["total_engine_hours"] = 0.0
        vehicle = await store.insert(Resource.vehicles, record)

        for day in range(days):
            when = now - timedelta(days=day, hours=rng.randint(0, 12))
            refill = FuelEventCreate(
                vehicle_id=vehicle.id,
                event_type=FuelEventType.refill.value,
                volume_liters=round(rng.uniform(80, 250), 1),
                cost_kes=round(rng.uniform(15000, 45000), 2),
                location=rng.choice(["Nairobi", "Mombasa", "Kampala", "Eldoret"]),
                event_timestamp=when,
            )
            await store.insert(Resource.fuel_events, validate_fuel_event(refill))
            if rng.random() < 0.05:
                theft = FuelEventCreate(
                    vehicle_id=vehicle.id,
                    event_type=FuelEventType.theft.value,
                    volume_liters=round(rng.uniform(10, 60), 1),
                    notes="Sudden level drop while parked",
                    event_timestamp=when + timedelta(hours=6),
                )
                await store.insert(Resource.fuel_events, validate_fuel_event(theft))

            distance = round(rng.uniform(150, 600), 1)
            fuel_used = round(distance / rng.uniform(6.5, 10.0), 1)
            await store.insert(Resource.daily_metrics, {
                "vehicle_id": vehicle.id,
                "metric_date": (now - timedelta(days=day)).date(),
                "fuel_used": fuel_used,
                "distance": distance,
                "engine_hours": round(distance / 55, 1),
                "idle_hours": round(rng.uniform(0.2, 2.5), 1),
                "fuel_efficiency": round(distance / fuel_used, 2),
                "refill_count": 1,
                "theft_count": 0,
            })
        log.info(f"Seeded {vehicle.asset_id} ({vehicle.driver_name})")

    # Roll daily metrics up into the cumulative vehicle counters
    async with AsyncSessionLocal() as session:
        rows = await session.execute(
            select(
                DailyMetric.vehicle_id,
                func.sum(DailyMetric.fuel_used),
                func.sum(DailyMetric.distance),
                func.sum(DailyMetric.engine_hours),
            ).group_by(DailyMetric.vehicle_id)
        )
        for vehicle_id, fuel, distance, hours in rows.all():
            await session.execute(
                update(Vehicle)
                .where(Vehicle.id == vehicle_id)
                .values(total_fuel_used=fuel, total_distance=distance, total_engine_hours=hours)
            )
        await session.commit()

    kpis = await KPIService(store).compute()
    print("\n✅ Demo fleet seeded")
    for key, value in kpis.items():
        print(f"   {key:<20} {value}")


async def main(vehicle_count: int, days: int, seed_value: int) -> None:
    try:
        await seed(vehicle_count, days, random.Random(seed_value))
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a demo fleet")
    parser.add_argument("--vehicles", type=int, default=10,
                        help="Number of vehicles to create (default: 10)")
    parser.add_argument("--days", type=int, default=14,
                        help="Days of fuel events and daily metrics per vehicle (default: 14)")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed (default: 42)")
    args = parser.parse_args()
    asyncio.run(main(args.vehicles, args.days, args.seed))
