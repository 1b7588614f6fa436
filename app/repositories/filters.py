"""
app/repositories/filters.py
────────────────────────────
Turns optional request parameters into a flat list of predicates.

Each resource declares a fixed whitelist of parameters. A parameter that is
absent or empty contributes nothing; the rest are AND-ed together by the
store in declaration order. Values are passed through untouched, coercion
to column types happens in the store.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional


class Resource(str, enum.Enum):
    vehicles = "vehicles"
    fuel_events = "fuel_events"
    daily_metrics = "daily_metrics"


# ─────────────────────────────────────────────────────────────────────────
# Predicates
# ─────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class ILike:
    """Case-insensitive substring match."""
    field: str
    value: str


@dataclass(frozen=True)
class Gte:
    field: str
    value: Any


@dataclass(frozen=True)
class Lte:
    field: str
    value: Any


Predicate = Eq | ILike | Gte | Lte


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


# ─────────────────────────────────────────────────────────────────────────
# Whitelists
# ─────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FilterParam:
    name: str
    build: Callable[[Any], Predicate]


def _eq(field: str) -> Callable[[Any], Predicate]:
    return lambda value: Eq(field, value)


def _contains(field: str) -> Callable[[Any], Predicate]:
    return lambda value: ILike(field, value)


def _from(field: str) -> Callable[[Any], Predicate]:
    return lambda value: Gte(field, value)


def _until(field: str) -> Callable[[Any], Predicate]:
    return lambda value: Lte(field, value)


FILTERS: dict[Resource, tuple[FilterParam, ...]] = {
    Resource.vehicles: (
        FilterParam("status", _eq("status")),
        FilterParam("efficiency_rating", _eq("efficiency_rating")),
        FilterParam("driver_name", _contains("driver_name")),
    ),
    Resource.fuel_events: (
        FilterParam("vehicle_id", _eq("vehicle_id")),
        FilterParam("event_type", _eq("event_type")),
        FilterParam("start_date", _from("event_timestamp")),
        FilterParam("end_date", _until("event_timestamp")),
    ),
    Resource.daily_metrics: (
        FilterParam("vehicle_id", _eq("vehicle_id")),
        FilterParam("start_date", _from("metric_date")),
        FilterParam("end_date", _until("metric_date")),
    ),
}

# Ties on the date field fall back to id so pages stay stable.
DEFAULT_ORDER: dict[Resource, tuple[OrderBy, ...]] = {
    Resource.vehicles: (OrderBy("created_at"), OrderBy("id")),
    Resource.fuel_events: (OrderBy("event_timestamp", descending=True), OrderBy("id", descending=True)),
    Resource.daily_metrics: (OrderBy("metric_date", descending=True), OrderBy("id", descending=True)),
}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value == ""


def compile_filters(resource: Resource, params: Mapping[str, Optional[Any]]) -> list[Predicate]:
    """
    Build the predicate list for `resource` from request parameters.
    Parameters outside the whitelist are ignored.
    """
    return [
        param.build(params[param.name])
        for param in FILTERS[resource]
        if not _is_empty(params.get(param.name))
    ]
