"""
Vacancy Timeline Reconstructor.

Walks each unit's lease history across a historical window and counts the
days no lease covered. Leases may overlap, leave gaps, or run past either
edge of the window; malformed leases (end before start) cover nothing.

Lease end dates are the last leased day, so a lease covers
[start_date, end_date + 1 day).

Maintenance days are coarse: a unit whose *current* status is MAINTENANCE
is counted as under maintenance for the whole window. There is no
maintenance-interval history to reconstruct from.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from leasedash.config import get_settings
from leasedash.models import (
    Lease,
    LossSummary,
    OpportunityLossData,
    Property,
    PropertyRef,
    ReportPeriod,
    Unit,
    UnitStatus,
    UnitVacancy,
)
from leasedash.services.metrics import daily_rent
from leasedash.services.timeframe import ceil_days, period_days

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class VacancyLossMethod(str, Enum):
    """
    How property-level vacancy/maintenance loss is aggregated.

    AGGREGATE multiplies the property's total daily rent by the summed
    per-unit day counts. It over-counts when several units are idle at the
    same time, but it is what existing report consumers expect.
    PER_UNIT sums each unit's own daily rent times its own day count.
    """
    AGGREGATE = "aggregate"
    PER_UNIT = "per_unit"


@dataclass(frozen=True)
class UnitTimeline:
    """Reconstructed figures for one unit over one window."""
    vacant_days: int
    maintenance_days: int
    last_lease_end_date: Optional[datetime]
    next_lease_start_date: Optional[datetime]


def _covered_until(lease: Lease) -> datetime:
    """Exclusive end of the lease's coverage."""
    if lease.end_date < lease.start_date:
        return lease.start_date
    return lease.end_date + ONE_DAY


def intersecting_leases(unit: Unit, start: datetime, end: datetime) -> List[Lease]:
    """Leases with start <= window end and end >= window start, by start date."""
    matching = [
        lease for lease in unit.leases
        if lease.start_date <= end and max(lease.end_date, lease.start_date) >= start
    ]
    return sorted(matching, key=lambda lease: lease.start_date)


def count_uncovered_days(leases: List[Lease], start: datetime, end: datetime) -> int:
    """
    Days in [start, end) not covered by any lease.

    `leases` must be sorted by start date; overlaps are absorbed by only
    ever moving the cursor forward.
    """
    if end <= start:
        return 0
    if not leases:
        return period_days(start, end)

    vacant_days = 0
    cursor = start
    for lease in leases:
        lease_start = max(lease.start_date, start)
        lease_end = min(_covered_until(lease), end)
        if cursor < lease_start:
            vacant_days += ceil_days(cursor, lease_start)
        cursor = max(cursor, lease_end)

    if cursor < end:
        vacant_days += ceil_days(cursor, end)
    return vacant_days


def reconstruct_unit(unit: Unit, start: datetime, end: datetime) -> UnitTimeline:
    total_days = period_days(start, end)
    vacant_days = count_uncovered_days(intersecting_leases(unit, start, end), start, end)
    maintenance_days = total_days if unit.status == UnitStatus.MAINTENANCE else 0

    ended_before = [lease.end_date for lease in unit.leases if lease.end_date < end]
    starting_after = [lease.start_date for lease in unit.leases if lease.start_date > end]

    return UnitTimeline(
        vacant_days=vacant_days,
        maintenance_days=maintenance_days,
        last_lease_end_date=max(ended_before) if ended_before else None,
        next_lease_start_date=min(starting_after) if starting_after else None,
    )


def analyze_property(
    prop: Property,
    start: datetime,
    end: datetime,
    method: VacancyLossMethod = VacancyLossMethod.AGGREGATE,
) -> OpportunityLossData:
    """Opportunity-loss record for one property over [start, end]."""
    total_days = period_days(start, end)

    units_data: List[UnitVacancy] = []
    total_vacant_days = 0
    total_maintenance_days = 0
    per_unit_vacancy_loss = 0.0
    per_unit_maintenance_loss = 0.0

    for unit in prop.units:
        timeline = reconstruct_unit(unit, start, end)
        unit_daily = daily_rent(unit.total_rent)

        total_vacant_days += timeline.vacant_days
        total_maintenance_days += timeline.maintenance_days
        per_unit_vacancy_loss += unit_daily * timeline.vacant_days
        per_unit_maintenance_loss += unit_daily * timeline.maintenance_days

        units_data.append(UnitVacancy(
            id=unit.id,
            unit_number=unit.unit_number,
            total_rent=unit.total_rent,
            status=unit.status,
            vacant_days=timeline.vacant_days,
            maintenance_days=timeline.maintenance_days,
            unit_opportunity_loss=unit_daily * (timeline.vacant_days + timeline.maintenance_days),
            last_lease_end_date=timeline.last_lease_end_date,
            next_lease_start_date=timeline.next_lease_start_date,
        ))

    daily_potential_revenue = daily_rent(sum(u.total_rent for u in prop.units))

    if method == VacancyLossMethod.PER_UNIT:
        vacancy_loss = per_unit_vacancy_loss
        maintenance_loss = per_unit_maintenance_loss
    else:
        vacancy_loss = daily_potential_revenue * total_vacant_days
        maintenance_loss = daily_potential_revenue * total_maintenance_days

    return OpportunityLossData(
        property=PropertyRef(
            id=prop.id,
            property_code=prop.property_code,
            property_name=prop.property_name,
            property_type=prop.property_type,
        ),
        period=ReportPeriod(start_date=start, end_date=end, total_days=total_days),
        loss=LossSummary(
            vacant_days=total_vacant_days,
            maintenance_days=total_maintenance_days,
            total_lost_days=total_vacant_days + total_maintenance_days,
            daily_potential_revenue=daily_potential_revenue,
            vacancy_loss=vacancy_loss,
            maintenance_loss=maintenance_loss,
            total_opportunity_loss=vacancy_loss + maintenance_loss,
        ),
        units=units_data,
    )


def build_opportunity_loss_report(
    properties: List[Property],
    start: datetime,
    end: datetime,
    method: Optional[VacancyLossMethod] = None,
) -> List[OpportunityLossData]:
    """Opportunity-loss records for every property, in input order."""
    if method is None:
        method = VacancyLossMethod(get_settings().vacancy_loss_method)
    if end < start:
        logger.warning(f"[OPPORTUNITY-LOSS] Window ends before it starts ({start} > {end}); treating as 0 days")
    report = [analyze_property(prop, start, end, method) for prop in properties]
    logger.info(f"[OPPORTUNITY-LOSS] Reconstructed {len(report)} properties ({method.value})")
    return report
