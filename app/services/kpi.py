"""
app/services/kpi.py
────────────────────
Dashboard KPI aggregation.

Five independent reads are issued concurrently against the store:

  total vehicles      count(vehicles)
  active vehicles     count(vehicles, status == Active)
  refills             count(fuel_events, event_type == refill)
  thefts              count(fuel_events, event_type == theft)
  fleet totals        fold of total_fuel_used / total_distance / total_engine_hours

If any of them fails the whole summary fails; a partial dashboard is never
returned. Nothing is cached.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from app.core.errors import StoreError
from app.models.models import FuelEventType, VehicleStatus
from app.repositories.filters import Eq, Resource
from app.repositories.store import FleetStore

log = logging.getLogger(__name__)


@dataclass
class FleetTotals:
    fuel: float = 0.0
    distance: float = 0.0
    engine_hours: float = 0.0


def fold_totals(vehicles: Iterable) -> FleetTotals:
    """Sum the cumulative counters over vehicles, treating None as 0."""
    totals = FleetTotals()
    for v in vehicles:
        totals.fuel += v.total_fuel_used or 0
        totals.distance += v.total_distance or 0
        totals.engine_hours += v.total_engine_hours or 0
    return totals


def fleet_utilization(active: int, total: int) -> int:
    """Active share of the fleet as a whole percentage. An empty fleet is 0%."""
    return round(active / max(total, 1) * 100)


class KPIService:

    def __init__(self, store: FleetStore):
        self.store = store

    async def compute(self) -> dict:
        try:
            total, active, refills, thefts, vehicles = await asyncio.gather(
                self.store.count(Resource.vehicles),
                self.store.count(Resource.vehicles, [Eq("status", VehicleStatus.active.value)]),
                self.store.count(Resource.fuel_events, [Eq("event_type", FuelEventType.refill.value)]),
                self.store.count(Resource.fuel_events, [Eq("event_type", FuelEventType.theft.value)]),
                self.store.list(Resource.vehicles),
            )
        except StoreError as exc:
            raise StoreError("Failed to fetch dashboard data") from exc

        totals = fold_totals(vehicles)
        return {
            "total_vehicles": total,
            "active_vehicles": active,
            "total_refills": refills,
            "total_thefts": thefts,
            "total_fuel_used": totals.fuel,
            "total_distance": totals.distance,
            "total_engine_hours": totals.engine_hours,
            "fleet_utilization": fleet_utilization(active, total),
            "last_updated": datetime.now(timezone.utc),
        }
