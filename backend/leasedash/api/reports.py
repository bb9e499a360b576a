"""
Report API Routes
READ-ONLY endpoints. All operations are GET-only.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
from datetime import datetime

from leasedash.api.auth import get_current_user
from leasedash.db.repository import PropertyRepository
from leasedash.models import (
    CallerSession,
    OccupancyReportData,
    OccupancyStats,
    OpportunityLossData,
    PropertyPerformanceData,
    PropertyType,
    ReportResult,
)
from leasedash.services import report_service
from leasedash.services.guards import UNAUTHORIZED
from leasedash.services.timeframe import Timeframe, WindowError, resolve_window

router = APIRouter()


def get_repository() -> PropertyRepository:
    return PropertyRepository()


def _unwrap(result: ReportResult) -> ReportResult:
    """Map a failed result onto an HTTP error."""
    if result.success:
        return result
    status_code = 401 if result.error == UNAUTHORIZED else 500
    raise HTTPException(status_code=status_code, detail=result.error)


def _window(start_date, end_date, timeframe):
    try:
        return resolve_window(start_date, end_date, timeframe)
    except WindowError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/reports/occupancy", response_model=ReportResult[List[OccupancyReportData]])
async def occupancy_report(
    start_date: Optional[datetime] = Query(None, description="Window start (ISO timestamp)"),
    end_date: Optional[datetime] = Query(None, description="Window end (ISO timestamp)"),
    timeframe: Optional[Timeframe] = Query(None, description="Preset window: cm, pm, ytd, l30, l7"),
    property_id: Optional[str] = Query(None),
    property_type: Optional[PropertyType] = Query(None),
    user: Optional[CallerSession] = Depends(get_current_user),
    repository: PropertyRepository = Depends(get_repository),
):
    """
    GET: Current-status occupancy, area and revenue per property.

    With a window, idle units also get an estimated vacant-day count.
    """
    start, end = _window(start_date, end_date, timeframe)
    result = await report_service.get_occupancy_report(
        user, start, end, property_id, property_type, repository=repository
    )
    return _unwrap(result)


@router.get("/reports/opportunity-loss", response_model=ReportResult[List[OpportunityLossData]])
async def opportunity_loss_report(
    start_date: Optional[datetime] = Query(None, description="Window start (ISO timestamp)"),
    end_date: Optional[datetime] = Query(None, description="Window end (ISO timestamp)"),
    timeframe: Optional[Timeframe] = Query(None, description="Preset window: cm, pm, ytd, l30, l7"),
    property_id: Optional[str] = Query(None),
    user: Optional[CallerSession] = Depends(get_current_user),
    repository: PropertyRepository = Depends(get_repository),
):
    """
    GET: Reconstructed vacancy days and revenue loss over a window.

    A window is required: start_date and end_date, or a timeframe preset.
    """
    start, end = _window(start_date, end_date, timeframe)
    if start is None or end is None:
        raise HTTPException(status_code=400, detail="start_date and end_date (or timeframe) are required")
    result = await report_service.get_opportunity_loss_report(
        user, start, end, property_id, repository=repository
    )
    return _unwrap(result)


@router.get("/reports/property-performance", response_model=ReportResult[List[PropertyPerformanceData]])
async def property_performance_report(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    timeframe: Optional[Timeframe] = Query(None),
    user: Optional[CallerSession] = Depends(get_current_user),
    repository: PropertyRepository = Depends(get_repository),
):
    """GET: Ranked per-property performance, ordered by property name."""
    start, end = _window(start_date, end_date, timeframe)
    result = await report_service.get_property_performance_report(
        user, start, end, repository=repository
    )
    return _unwrap(result)


@router.get("/reports/occupancy-stats", response_model=ReportResult[OccupancyStats])
async def occupancy_stats(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    timeframe: Optional[Timeframe] = Query(None),
    user: Optional[CallerSession] = Depends(get_current_user),
    repository: PropertyRepository = Depends(get_repository),
):
    """GET: Portfolio-wide occupancy and revenue rollup."""
    start, end = _window(start_date, end_date, timeframe)
    result = await report_service.get_occupancy_stats(user, start, end, repository=repository)
    return _unwrap(result)
