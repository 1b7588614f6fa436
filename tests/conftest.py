import os
import importlib
import itertools
from datetime import date, datetime

# ── Environment Overrides ───────────────────────────────────────────
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "DEBUG"
# ────────────────────────────────────────────────────────────────────

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.core.database import Base
from app.core.deps import get_store
from app.repositories.filters import Resource
from app.repositories.store import FleetStore

# Register vehicles / fuel_events / daily_metrics with Base.metadata.
# importlib keeps the `app` FastAPI instance above from being shadowed.
importlib.import_module("app.models.models")


@pytest.fixture
async def engine(tmp_path):
    # A file database per test: the KPI endpoint opens several connections
    # at once, which an in-memory StaticPool connection cannot serve.
    _engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fleet.db'}")
    yield _engine
    await _engine.dispose()


@pytest.fixture
def TestingSessionLocal(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(autouse=True)
async def init_db(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
def store(TestingSessionLocal):
    return FleetStore(TestingSessionLocal)


@pytest.fixture(autouse=True)
def override_get_store(store):
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ─────────────────────────────────────────────────────────────────────────
# Factories: write straight through the store, bypassing the API
# ─────────────────────────────────────────────────────────────────────────

@pytest.fixture
def make_vehicle(store):
    seq = itertools.count(1)

    async def _make(**overrides):
        n = next(seq)
        record = {
            "asset_id": f"TRK-{n:03d}",
            "vehicle_plate": f"KDA {n:03d}X",
            "driver_name": f"Driver {n}",
            "status": "Active",
            "current_fuel_level": 120.0,
            "tank_capacity": 300.0,
            "fuel_efficiency": 8.5,
            "efficiency_rating": "Good",
            "system_reliability": "Good",
            "total_fuel_used": 0.0,
            "total_distance": 0.0,
            "total_engine_hours": 0.0,
        }
        record.update(overrides)
        return await store.insert(Resource.vehicles, record)

    return _make


@pytest.fixture
def make_fuel_event(store):
    async def _make(vehicle_id, **overrides):
        record = {
            "vehicle_id": vehicle_id,
            "event_type": "refill",
            "volume_liters": 100.0,
            "event_timestamp": datetime(2024, 3, 1, 12, 0, 0),
        }
        record.update(overrides)
        return await store.insert(Resource.fuel_events, record)

    return _make


@pytest.fixture
def make_daily_metric(store):
    async def _make(vehicle_id, metric_date: date, **overrides):
        record = {
            "vehicle_id": vehicle_id,
            "metric_date": metric_date,
            "fuel_used": 40.0,
            "distance": 340.0,
            "engine_hours": 6.5,
            "idle_hours": 0.8,
            "fuel_efficiency": 8.5,
            "refill_count": 1,
            "theft_count": 0,
        }
        record.update(overrides)
        return await store.insert(Resource.daily_metrics, record)

    return _make
