"""FleetStore against a real (SQLite) database."""
import uuid
from datetime import date, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.errors import NotFoundError, StoreError
from app.repositories.filters import Eq, Gte, ILike, Lte, OrderBy, Resource
from app.repositories.store import FleetStore


@pytest.mark.asyncio
async def test_insert_populates_generated_fields(store):
    vehicle = await store.insert(Resource.vehicles, {
        "asset_id": "TRK-100", "vehicle_plate": "KDA 100X", "driver_name": "Amina Otieno",
    })
    assert isinstance(vehicle.id, uuid.UUID)
    assert vehicle.created_at is not None
    assert vehicle.status == "Active"
    assert vehicle.tank_capacity == 300.0


@pytest.mark.asyncio
async def test_list_and_count_with_predicates(store, make_vehicle):
    await make_vehicle(driver_name="Amina Otieno", status="Active", efficiency_rating="Good")
    await make_vehicle(driver_name="Brian Mugisha", status="Inactive", efficiency_rating="Good")
    await make_vehicle(driver_name="AMINA Wanjiru", status="Active", efficiency_rating="Poor")

    rows = await store.list(Resource.vehicles, [ILike("driver_name", "amina")])
    assert {r.driver_name for r in rows} == {"Amina Otieno", "AMINA Wanjiru"}

    rows = await store.list(Resource.vehicles, [Eq("status", "Active"), Eq("efficiency_rating", "Good")])
    assert [r.driver_name for r in rows] == ["Amina Otieno"]

    assert await store.count(Resource.vehicles) == 3
    assert await store.count(Resource.vehicles, [Eq("status", "Active")]) == 2
    assert await store.count(Resource.vehicles, [Eq("status", "Retired")]) == 0


@pytest.mark.asyncio
async def test_list_limit_and_explicit_order(store, make_vehicle):
    for name in ["Carol", "Alice", "Bob"]:
        await make_vehicle(driver_name=name)
    rows = await store.list(Resource.vehicles, order=[OrderBy("driver_name")], limit=2)
    assert [r.driver_name for r in rows] == ["Alice", "Bob"]


@pytest.mark.asyncio
async def test_vehicle_list_order_is_stable(store, make_vehicle):
    for _ in range(5):
        await make_vehicle()
    first = [v.id for v in await store.list(Resource.vehicles)]
    second = [v.id for v in await store.list(Resource.vehicles)]
    assert first == second


@pytest.mark.asyncio
async def test_fuel_events_newest_first_and_inclusive_range(store, make_vehicle, make_fuel_event):
    v = await make_vehicle()
    for day in (1, 5, 10, 15):
        await make_fuel_event(v.id, event_timestamp=datetime(2024, 3, day, 8, 0))

    rows = await store.list(
        Resource.fuel_events,
        [Gte("event_timestamp", "2024-03-05T08:00:00"), Lte("event_timestamp", "2024-03-10T08:00:00")],
    )
    assert [r.event_timestamp.day for r in rows] == [10, 5]

    rows = await store.list(Resource.fuel_events)
    assert [r.event_timestamp.day for r in rows] == [15, 10, 5, 1]


@pytest.mark.asyncio
async def test_join_attaches_vehicle(store, make_vehicle, make_fuel_event):
    v = await make_vehicle(asset_id="TRK-777", vehicle_plate="KDD 777D", driver_name="David Okello")
    await make_fuel_event(v.id)

    [event] = await store.list(Resource.fuel_events, join=True)
    assert event.vehicle.asset_id == "TRK-777"
    assert event.vehicle.driver_name == "David Okello"


@pytest.mark.asyncio
async def test_join_keeps_orphaned_events(store, make_fuel_event):
    # SQLite does not enforce the foreign key unless asked to
    orphan = await make_fuel_event(uuid.uuid4())

    [event] = await store.list(Resource.fuel_events, join=True)
    assert event.id == orphan.id
    assert event.vehicle is None

    fetched = await store.get_by_id(Resource.fuel_events, str(orphan.id), join=True)
    assert fetched.vehicle is None


@pytest.mark.asyncio
async def test_get_by_id(store, make_vehicle):
    v = await make_vehicle(asset_id="TRK-042")
    fetched = await store.get_by_id(Resource.vehicles, str(v.id))
    assert fetched.asset_id == "TRK-042"


@pytest.mark.asyncio
async def test_get_by_id_not_found(store):
    with pytest.raises(NotFoundError) as exc_info:
        await store.get_by_id(Resource.vehicles, uuid.uuid4())
    assert exc_info.value.message == "Vehicle not found"


@pytest.mark.asyncio
async def test_get_by_malformed_id_is_store_error(store):
    with pytest.raises(StoreError) as exc_info:
        await store.get_by_id(Resource.vehicles, "not-a-uuid")
    assert exc_info.value.message == "Failed to fetch vehicle"
    assert isinstance(exc_info.value.root_cause, ValueError)


@pytest.mark.asyncio
async def test_malformed_filter_value_is_store_error(store):
    with pytest.raises(StoreError) as exc_info:
        await store.list(Resource.fuel_events, [Gte("event_timestamp", "last tuesday")])
    assert exc_info.value.message == "Failed to fetch fuel events"


@pytest.mark.asyncio
async def test_daily_metric_date_range(store, make_vehicle, make_daily_metric):
    v = await make_vehicle()
    for day in range(1, 8):
        await make_daily_metric(v.id, date(2024, 3, day))

    rows = await store.list(
        Resource.daily_metrics,
        [Eq("vehicle_id", str(v.id)), Gte("metric_date", "2024-03-02"), Lte("metric_date", "2024-03-04")],
    )
    assert [r.metric_date for r in rows] == [date(2024, 3, 4), date(2024, 3, 3), date(2024, 3, 2)]


@pytest.mark.asyncio
async def test_insert_failure_is_wrapped(store):
    # volume_liters is NOT NULL
    with pytest.raises(StoreError) as exc_info:
        await store.insert(Resource.fuel_events, {
            "vehicle_id": uuid.uuid4(), "event_type": "refill", "event_timestamp": datetime(2024, 1, 1),
        })
    assert exc_info.value.message == "Failed to record fuel event"
    assert await store.count(Resource.fuel_events) == 0


@pytest.mark.asyncio
async def test_missing_tables_surface_as_store_error(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    try:
        empty = FleetStore(async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False))
        with pytest.raises(StoreError) as exc_info:
            await empty.count(Resource.vehicles)
        assert exc_info.value.message == "Failed to count vehicles"
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_insert_converts_raw_values(store, make_vehicle):
    v = await make_vehicle()
    event = await store.insert(Resource.fuel_events, {
        "vehicle_id": str(v.id),
        "event_type": "refill",
        "volume_liters": "42.5",
        "cost_kes": 7000,
        "event_timestamp": "2024-04-02T06:45:00",
    })
    assert event.vehicle_id == v.id
    assert event.volume_liters == 42.5
    assert event.cost_kes == 7000.0
    assert event.event_timestamp.replace(tzinfo=None) == datetime(2024, 4, 2, 6, 45)


@pytest.mark.asyncio
async def test_insert_malformed_value_is_wrapped(store):
    with pytest.raises(StoreError) as exc_info:
        await store.insert(Resource.fuel_events, {
            "vehicle_id": "abc", "event_type": "refill", "volume_liters": 20,
            "event_timestamp": datetime(2024, 1, 1),
        })
    assert exc_info.value.message == "Failed to record fuel event"
    assert isinstance(exc_info.value.root_cause, ValueError)
    assert await store.count(Resource.fuel_events) == 0


@pytest.mark.asyncio
async def test_vehicle_insert_failure_message(store):
    # asset_id is NOT NULL
    with pytest.raises(StoreError) as exc_info:
        await store.insert(Resource.vehicles, {"vehicle_plate": "KDA 001X", "driver_name": "Amina"})
    assert exc_info.value.message == "Failed to create vehicle"
