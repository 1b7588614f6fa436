from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.deps import get_store
from app.repositories.filters import Resource, compile_filters
from app.repositories.store import FleetStore
from app.schemas.schemas import DailyMetricOut, ErrorResponse

router = APIRouter(prefix="/daily-metrics", tags=["Daily Metrics"])


@router.get("", response_model=list[DailyMetricOut], responses={500: {"model": ErrorResponse}})
async def list_daily_metrics(
    vehicle_id: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, description="Inclusive, YYYY-MM-DD"),
    end_date: Optional[str] = Query(default=None, description="Inclusive, YYYY-MM-DD"),
    store: FleetStore = Depends(get_store),
):
    """Daily metrics, most recent date first."""
    predicates = compile_filters(
        Resource.daily_metrics,
        {"vehicle_id": vehicle_id, "start_date": start_date, "end_date": end_date},
    )
    return await store.list(Resource.daily_metrics, predicates)
