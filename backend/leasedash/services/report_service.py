"""
Report entry points - occupancy analytics.
READ-ONLY: loads a snapshot from the property store, computes, returns.

Every entry point takes the caller's session first and returns a
ReportResult: `success=True` with data, or `success=False` with an error.
"""
import asyncio
import logging
from datetime import datetime
from typing import List, Optional

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
from leasedash.services.guards import authorization_guard, failure_boundary
from leasedash.services.ranking import build_occupancy_stats, build_performance_report
from leasedash.services.snapshot_occupancy import build_occupancy_report
from leasedash.services.vacancy_timeline import VacancyLossMethod, build_opportunity_loss_report

logger = logging.getLogger(__name__)


async def _load_properties(
    repository: Optional[PropertyRepository],
    property_id: Optional[str] = None,
    property_type: Optional[PropertyType] = None,
):
    repository = repository or PropertyRepository()
    return await asyncio.to_thread(repository.list_properties, property_id, property_type)


@authorization_guard
@failure_boundary("occupancy report")
async def get_occupancy_report(
    session: CallerSession,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    property_id: Optional[str] = None,
    property_type: Optional[PropertyType] = None,
    repository: Optional[PropertyRepository] = None,
) -> ReportResult[List[OccupancyReportData]]:
    """
    Current-status occupancy per property.

    With both dates, idle units also carry a single-lookup vacant-day estimate.
    """
    properties = await _load_properties(repository, property_id, property_type)
    return ReportResult.ok(build_occupancy_report(properties, start_date, end_date))


@authorization_guard
@failure_boundary("opportunity loss report")
async def get_opportunity_loss_report(
    session: CallerSession,
    start_date: datetime,
    end_date: datetime,
    property_id: Optional[str] = None,
    repository: Optional[PropertyRepository] = None,
    method: Optional[VacancyLossMethod] = None,
) -> ReportResult[List[OpportunityLossData]]:
    """Reconstructed vacancy and revenue loss per property over a mandatory window."""
    properties = await _load_properties(repository, property_id)
    return ReportResult.ok(build_opportunity_loss_report(properties, start_date, end_date, method))


@authorization_guard
@failure_boundary("property performance report")
async def get_property_performance_report(
    session: CallerSession,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    repository: Optional[PropertyRepository] = None,
) -> ReportResult[List[PropertyPerformanceData]]:
    """Ranked performance for every property, ordered by name."""
    properties = await _load_properties(repository)
    return ReportResult.ok(build_performance_report(properties, start_date, end_date))


@authorization_guard
@failure_boundary("occupancy statistics")
async def get_occupancy_stats(
    session: CallerSession,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    repository: Optional[PropertyRepository] = None,
) -> ReportResult[OccupancyStats]:
    """Portfolio-wide rollup, including best/worst occupancy property names."""
    repository = repository or PropertyRepository()
    properties = await _load_properties(repository)
    total_properties = await asyncio.to_thread(repository.count_properties)
    return ReportResult.ok(build_occupancy_stats(properties, start_date, end_date, total_properties))
