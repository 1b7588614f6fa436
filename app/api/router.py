"""
API router — aggregates all endpoint sub-routers.
"""
from fastapi import APIRouter

from app.api.endpoints import daily_metrics, dashboard, diagnostics, fuel_events, vehicles

api_router = APIRouter()

api_router.include_router(diagnostics.router)
api_router.include_router(vehicles.router)
api_router.include_router(fuel_events.router)
api_router.include_router(dashboard.router)
api_router.include_router(daily_metrics.router)
