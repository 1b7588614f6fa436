"""
FastAPI dependency functions.
"""
from fastapi import Depends, Request

from app.repositories.store import FleetStore
from app.services.kpi import KPIService


def get_store(request: Request) -> FleetStore:
    """The FleetStore built at startup (see app.core.startup.lifespan)."""
    return request.app.state.store


def get_kpi_service(store: FleetStore = Depends(get_store)) -> KPIService:
    return KPIService(store)
