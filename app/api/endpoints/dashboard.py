"""
Dashboard endpoint: fleet-wide KPI summary, recomputed on every request.
"""
import logging

from fastapi import APIRouter, Depends, Request

from app.core.deps import get_kpi_service
from app.schemas.schemas import DashboardKPI, ErrorResponse
from app.services.kpi import KPIService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/kpis", response_model=DashboardKPI, responses={500: {"model": ErrorResponse}})
async def get_dashboard_kpis(request: Request, service: KPIService = Depends(get_kpi_service)):
    log.info(f"[Dashboard] KPIs requested from: {request.headers.get('origin')}")
    kpis = await service.compute()
    return DashboardKPI(**kpis)
