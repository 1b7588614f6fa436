"""
app/repositories/store.py
──────────────────────────
FleetStore — the single data access gateway for vehicles, fuel events and
daily metrics.

Contract:
  list(resource, predicates, order, join, limit)  → ordered list of ORM rows
  get_by_id(resource, id, join)                   → ORM row or NotFoundError
  insert(resource, record)                        → the committed, refreshed row
  count(resource, predicates)                     → int

Every operation opens its own session, so callers may run several of them
concurrently. Any failure inside the store is logged with its root cause
and re-raised as StoreError("Failed to <operation> <resource>"). No retries.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import Column, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import joinedload

from app.core.errors import NotFoundError, StoreError
from app.models.models import DailyMetric, FuelEvent, Vehicle
from app.repositories.filters import DEFAULT_ORDER, Eq, Gte, ILike, Lte, OrderBy, Predicate, Resource

log = logging.getLogger(__name__)

MODELS: dict[Resource, type] = {
    Resource.vehicles: Vehicle,
    Resource.fuel_events: FuelEvent,
    Resource.daily_metrics: DailyMetric,
}

# (singular, plural) as used in error messages
LABELS: dict[Resource, tuple[str, str]] = {
    Resource.vehicles: ("vehicle", "vehicles"),
    Resource.fuel_events: ("fuel event", "fuel events"),
    Resource.daily_metrics: ("daily metric", "daily metrics"),
}

# verb used in the "Failed to <verb> <resource>" message for inserts
INSERT_VERBS: dict[Resource, str] = {
    Resource.vehicles: "create",
    Resource.fuel_events: "record",
    Resource.daily_metrics: "create",
}

# Relationships attached when join=True. joinedload emits a LEFT OUTER JOIN,
# so rows whose parent is missing still come back with the attribute set to None.
JOINS: dict[Resource, tuple] = {
    Resource.fuel_events: (FuelEvent.vehicle,),
}


def _coerce(column: Column, value: Any) -> Any:
    """Convert a raw request value to the column's Python type."""
    if value is None:
        return None
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if isinstance(value, python_type):
        return value
    if python_type is uuid.UUID:
        return uuid.UUID(str(value))
    if python_type is datetime:
        return datetime.fromisoformat(str(value))
    if python_type is date:
        return datetime.fromisoformat(str(value)).date()
    if python_type in (int, float):
        return python_type(value)
    if python_type is str:
        return str(value)
    return value


def _clause(model: type, predicate: Predicate):
    column = model.__table__.c[predicate.field]
    attr = getattr(model, predicate.field)
    if isinstance(predicate, Eq):
        return attr == _coerce(column, predicate.value)
    if isinstance(predicate, ILike):
        return attr.ilike(f"%{predicate.value}%")
    if isinstance(predicate, Gte):
        return attr >= _coerce(column, predicate.value)
    if isinstance(predicate, Lte):
        return attr <= _coerce(column, predicate.value)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _order(model: type, order: Iterable[OrderBy]) -> list:
    attrs = []
    for o in order:
        attr = getattr(model, o.field)
        attrs.append(attr.desc() if o.descending else attr.asc())
    return attrs


class FleetStore:

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._sessions = session_factory

    @staticmethod
    def _fail(verb: str, label: str, exc: Exception) -> StoreError:
        message = f"Failed to {verb} {label}"
        log.error(f"[Store] {message}: {exc}", exc_info=exc)
        return StoreError(message)

    async def list(
        self,
        resource: Resource,
        predicates: Sequence[Predicate] = (),
        order: Optional[Sequence[OrderBy]] = None,
        *,
        join: bool = False,
        limit: Optional[int] = None,
    ) -> list:
        model = MODELS[resource]
        try:
            stmt = (
                select(model)
                .where(*[_clause(model, p) for p in predicates])
                .order_by(*_order(model, DEFAULT_ORDER[resource] if order is None else order))
            )
            if join:
                stmt = stmt.options(*[joinedload(rel) for rel in JOINS.get(resource, ())])
            if limit is not None:
                stmt = stmt.limit(limit)
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except Exception as exc:
            raise self._fail("fetch", LABELS[resource][1], exc) from exc

    async def get_by_id(self, resource: Resource, record_id: Any, *, join: bool = False):
        model = MODELS[resource]
        singular = LABELS[resource][0]
        try:
            stmt = select(model).where(model.id == _coerce(model.__table__.c.id, record_id))
            if join:
                stmt = stmt.options(*[joinedload(rel) for rel in JOINS.get(resource, ())])
            async with self._sessions() as session:
                result = await session.execute(stmt)
                row = result.scalar_one_or_none()
        except Exception as exc:
            raise self._fail("fetch", singular, exc) from exc
        if row is None:
            raise NotFoundError(f"{singular.capitalize()} not found")
        return row

    async def insert(self, resource: Resource, record: dict):
        model = MODELS[resource]
        try:
            row = {k: _coerce(model.__table__.c[k], v) for k, v in record.items()}
            async with self._sessions() as session:
                obj = model(**row)
                session.add(obj)
                try:
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
                await session.refresh(obj)
                return obj
        except Exception as exc:
            raise self._fail(INSERT_VERBS[resource], LABELS[resource][0], exc) from exc

    async def count(self, resource: Resource, predicates: Sequence[Predicate] = ()) -> int:
        model = MODELS[resource]
        try:
            stmt = (
                select(func.count())
                .select_from(model)
                .where(*[_clause(model, p) for p in predicates])
            )
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return result.scalar() or 0
        except Exception as exc:
            raise self._fail("count", LABELS[resource][1], exc) from exc
