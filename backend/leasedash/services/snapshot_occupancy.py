"""
Snapshot Occupancy Calculator.

Occupancy, area and revenue figures from each unit's *current* status.
When a window is supplied, idle units also get a vacant-day estimate from a
single lookup: the unit's most recent expired/terminated lease. This is an
approximation; it ignores every earlier gap in the unit's history
(see vacancy_timeline for full reconstruction).
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from leasedash.models import (
    ActiveLeaseInfo,
    AreaBreakdown,
    Lease,
    LeaseStatus,
    OccupancyCounts,
    OccupancyReportData,
    Property,
    PropertySummary,
    RevenueBreakdown,
    TenantInfo,
    TERMINAL_LEASE_STATUSES,
    Unit,
    UnitOccupancy,
    UnitStatus,
)
from leasedash.services.metrics import daily_rent, round_rate, safe_rate
from leasedash.services.timeframe import ceil_days, period_days

logger = logging.getLogger(__name__)


def find_active_lease(unit: Unit) -> Optional[Lease]:
    """First lease on the unit currently flagged ACTIVE."""
    return next((lease for lease in unit.leases if lease.status == LeaseStatus.ACTIVE), None)


def find_last_terminal_lease(unit: Unit) -> Optional[Lease]:
    """Most recently ended EXPIRED/TERMINATED lease, if any."""
    terminal = [lease for lease in unit.leases if lease.status in TERMINAL_LEASE_STATUSES]
    if not terminal:
        return None
    return max(terminal, key=lambda lease: lease.end_date)


def estimate_vacant_days(unit: Unit, start: datetime, end: datetime) -> int:
    """
    Single-lookup vacancy estimate for a unit over [start, end].

    - last terminal lease ends inside the window: vacant from
      max(lease end, start) to end
    - no terminal lease at all: vacant the whole window
    - otherwise: 0
    """
    last_lease = find_last_terminal_lease(unit)
    if last_lease is None:
        return period_days(start, end)
    if start <= last_lease.end_date <= end:
        vacant_from = max(last_lease.end_date, start)
        return ceil_days(vacant_from, end)
    return 0


def _unit_breakdown(unit: Unit, start: Optional[datetime], end: Optional[datetime]) -> UnitOccupancy:
    vacant_days = 0
    lost_revenue = 0.0
    if unit.status != UnitStatus.OCCUPIED and start is not None and end is not None:
        vacant_days = estimate_vacant_days(unit, start, end)
        lost_revenue = daily_rent(unit.total_rent) * vacant_days

    active = find_active_lease(unit)
    lease_info = None
    if active is not None:
        tenant = None
        if active.tenant is not None:
            tenant = TenantInfo(bp_code=active.tenant.bp_code, business_name=active.tenant.business_name)
        lease_info = ActiveLeaseInfo(
            id=active.id,
            tenant=tenant,
            start_date=active.start_date,
            end_date=active.end_date,
            total_rent_amount=active.total_rent_amount,
        )

    return UnitOccupancy(
        id=unit.id,
        unit_number=unit.unit_number,
        total_area=unit.total_area,
        total_rent=unit.total_rent,
        status=unit.status,
        lease=lease_info,
        vacant_days=vacant_days,
        lost_revenue=lost_revenue,
    )


def _count_and_area(units: List[Unit], status: UnitStatus) -> Tuple[int, float]:
    matching = [u for u in units if u.status == status]
    return len(matching), sum(u.total_area for u in matching)


def summarize_property(
    prop: Property,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> OccupancyReportData:
    """Build the occupancy record for one property."""
    units = prop.units
    total_units = len(units)
    occupied_units, occupied_area = _count_and_area(units, UnitStatus.OCCUPIED)
    vacant_units, vacant_area = _count_and_area(units, UnitStatus.VACANT)
    maintenance_units, maintenance_area = _count_and_area(units, UnitStatus.MAINTENANCE)
    reserved_units, reserved_area = _count_and_area(units, UnitStatus.RESERVED)
    total_area = sum(u.total_area for u in units)

    potential_revenue = sum(u.total_rent for u in units)
    actual_revenue = sum(u.total_rent for u in units if u.status == UnitStatus.OCCUPIED)
    lost_revenue = potential_revenue - actual_revenue

    return OccupancyReportData(
        property=PropertySummary(
            id=prop.id,
            property_code=prop.property_code,
            property_name=prop.property_name,
            address=prop.address,
            property_type=prop.property_type,
            leasable_area=prop.leasable_area,
            total_units=prop.total_units or 0,
        ),
        occupancy=OccupancyCounts(
            total_units=total_units,
            occupied_units=occupied_units,
            vacant_units=vacant_units,
            maintenance_units=maintenance_units,
            reserved_units=reserved_units,
            occupancy_rate=round_rate(safe_rate(occupied_units, total_units)),
            vacancy_rate=round_rate(safe_rate(vacant_units, total_units)),
        ),
        area=AreaBreakdown(
            total_area=total_area,
            occupied_area=occupied_area,
            vacant_area=vacant_area,
            maintenance_area=maintenance_area,
            reserved_area=reserved_area,
            area_occupancy_rate=round_rate(safe_rate(occupied_area, total_area)),
        ),
        revenue=RevenueBreakdown(
            potential_revenue=potential_revenue,
            actual_revenue=actual_revenue,
            lost_revenue=lost_revenue,
            opportunity_loss=lost_revenue,
            opportunity_loss_percentage=round_rate(safe_rate(lost_revenue, potential_revenue)),
        ),
        units=[_unit_breakdown(unit, start, end) for unit in units],
    )


def build_occupancy_report(
    properties: List[Property],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[OccupancyReportData]:
    """Occupancy records for every property, in input order."""
    report = [summarize_property(prop, start, end) for prop in properties]
    logger.info(f"[OCCUPANCY] Built snapshot for {len(report)} properties")
    return report
