"""
Portfolio Ranking Aggregator.

Per-property performance metrics computed directly from unit status
(independently of the snapshot calculator), three relative rankings,
and the portfolio-wide rollup.

Ranking passes run in sequence over one ordering, each a stable sort, so
ties keep whatever order they had going into that pass. The returned list
is always re-sorted by property name; ranks travel with the records.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from leasedash.models import (
    OccupancyStats,
    PerformanceMetrics,
    PerformanceProperty,
    Property,
    PropertyPerformanceData,
    PropertyRanking,
    TERMINAL_LEASE_STATUSES,
    UnitStatus,
)
from leasedash.services.metrics import round_rate, safe_rate, safe_ratio
from leasedash.services.timeframe import is_in_period, period_days

logger = logging.getLogger(__name__)

# (rank field, sort key, descending)
RANKING_PASSES: List[Tuple[str, Callable[[PropertyPerformanceData], float], bool]] = [
    ("occupancy_rank", lambda r: r.performance.occupancy_rate, True),
    ("revenue_rank", lambda r: r.performance.total_revenue, True),
    ("efficiency_rank", lambda r: r.performance.opportunity_loss_percentage, False),
]


def count_turnover(prop: Property, start: datetime, end: datetime) -> int:
    """Distinct expired/terminated leases on the property ending inside [start, end]."""
    lease_ids = {
        lease.id
        for unit in prop.units
        for lease in unit.leases
        if lease.status in TERMINAL_LEASE_STATUSES and is_in_period(lease.end_date, start, end)
    }
    return len(lease_ids)


def measure_property(
    prop: Property,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> PropertyPerformanceData:
    """Unranked performance record for one property."""
    units = prop.units
    total_units = len(units)
    occupied = [u for u in units if u.status == UnitStatus.OCCUPIED]

    total_area = sum(u.total_area for u in units)
    occupied_area = sum(u.total_area for u in occupied)
    potential_revenue = sum(u.total_rent for u in units)
    total_revenue = sum(u.total_rent for u in occupied)
    opportunity_loss = potential_revenue - total_revenue

    average_vacancy_days = 0.0
    turnover_rate = 0.0
    if start is not None and end is not None:
        # Coarse: spreads the whole window over today's vacant units
        vacant_units = sum(1 for u in units if u.status == UnitStatus.VACANT)
        average_vacancy_days = safe_ratio(period_days(start, end), vacant_units)
        turnover_rate = safe_rate(count_turnover(prop, start, end), total_units)

    return PropertyPerformanceData(
        property=PerformanceProperty(
            id=prop.id,
            property_code=prop.property_code,
            property_name=prop.property_name,
            property_type=prop.property_type,
            total_units=total_units,
            leasable_area=prop.leasable_area,
        ),
        performance=PerformanceMetrics(
            occupancy_rate=round_rate(safe_rate(len(occupied), total_units)),
            area_occupancy_rate=round_rate(safe_rate(occupied_area, total_area)),
            average_rent_per_sqm=round_rate(safe_ratio(potential_revenue, total_area)),
            total_revenue=total_revenue,
            potential_revenue=potential_revenue,
            opportunity_loss=opportunity_loss,
            opportunity_loss_percentage=round_rate(safe_rate(opportunity_loss, potential_revenue)),
            average_vacancy_days=round_rate(average_vacancy_days),
            turnover_rate=round_rate(turnover_rate),
        ),
    )


def assign_rankings(records: List[PropertyPerformanceData]) -> List[PropertyPerformanceData]:
    """
    Fill occupancy, revenue and efficiency ranks (dense, 1-based).

    Returns new records sorted by property name.
    """
    ranks = [{} for _ in records]
    order = list(range(len(records)))
    for field, key, descending in RANKING_PASSES:
        order = sorted(order, key=lambda i: key(records[i]), reverse=descending)
        for rank, index in enumerate(order, start=1):
            ranks[index][field] = rank

    ranked = [
        record.model_copy(update={"ranking": PropertyRanking(**ranks[index])})
        for index, record in enumerate(records)
    ]
    return sorted(ranked, key=lambda r: r.property.property_name)


def build_performance_report(
    properties: List[Property],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[PropertyPerformanceData]:
    report = assign_rankings([measure_property(prop, start, end) for prop in properties])
    logger.info(f"[PERFORMANCE] Ranked {len(report)} properties")
    return report


def build_occupancy_stats(
    properties: List[Property],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    total_properties: Optional[int] = None,
) -> OccupancyStats:
    """
    Single summary across the whole portfolio.

    `total_properties` is the store's own count when the caller has it;
    defaults to the number of properties passed in.
    """
    if total_properties is None:
        total_properties = len(properties)
    units = [unit for prop in properties for unit in prop.units]
    occupied = [u for u in units if u.status == UnitStatus.OCCUPIED]

    def _count(status: UnitStatus) -> int:
        return sum(1 for u in units if u.status == status)

    total_leasable_area = sum(prop.leasable_area for prop in properties)
    occupied_area = sum(u.total_area for u in occupied)
    total_area = sum(u.total_area for u in units)
    total_potential_revenue = sum(u.total_rent for u in units)
    total_actual_revenue = sum(u.total_rent for u in occupied)
    total_opportunity_loss = total_potential_revenue - total_actual_revenue

    best = worst = "N/A"
    performance = build_performance_report(properties, start, end)
    if performance:
        by_occupancy = sorted(performance, key=lambda r: r.performance.occupancy_rate, reverse=True)
        best = by_occupancy[0].property.property_name
        worst = by_occupancy[-1].property.property_name

    logger.info(f"[STATS] {total_properties} properties, {len(units)} units, best={best} worst={worst}")
    return OccupancyStats(
        total_properties=total_properties,
        total_units=len(units),
        occupied_units=len(occupied),
        vacant_units=_count(UnitStatus.VACANT),
        maintenance_units=_count(UnitStatus.MAINTENANCE),
        reserved_units=_count(UnitStatus.RESERVED),
        overall_occupancy_rate=round_rate(safe_rate(len(occupied), len(units))),
        total_leasable_area=total_leasable_area,
        occupied_area=occupied_area,
        area_occupancy_rate=round_rate(safe_rate(occupied_area, total_leasable_area)),
        total_potential_revenue=total_potential_revenue,
        total_actual_revenue=total_actual_revenue,
        total_opportunity_loss=total_opportunity_loss,
        opportunity_loss_percentage=round_rate(safe_rate(total_opportunity_loss, total_potential_revenue)),
        average_rent_per_sqm=round_rate(safe_ratio(total_potential_revenue, total_area)),
        best_performing_property=best,
        worst_performing_property=worst,
    )
