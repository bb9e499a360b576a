"""
Report records produced by the analytics engine.

All records are built once per report call and never mutated afterwards;
the ranking pass produces updated copies rather than editing in place.
"""
from pydantic import BaseModel, ConfigDict
from typing import Generic, List, Optional, TypeVar
from datetime import datetime

from .domain import PropertyType, UnitStatus

T = TypeVar("T")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class CallerSession(_Record):
    """Authenticated caller, resolved from a verified token."""
    user_id: str
    display_name: str = ""


class ReportResult(BaseModel, Generic[T]):
    """Tagged result returned by every entry point."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ReportResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ReportResult[T]":
        return cls(success=False, error=error)


# =========================================================================
# Snapshot occupancy report
# =========================================================================

class PropertySummary(_Record):
    id: str
    property_code: str
    property_name: str
    address: str
    property_type: PropertyType
    leasable_area: float
    total_units: int  # declared count


class OccupancyCounts(_Record):
    total_units: int
    occupied_units: int
    vacant_units: int
    maintenance_units: int
    reserved_units: int
    occupancy_rate: float
    vacancy_rate: float


class AreaBreakdown(_Record):
    total_area: float
    occupied_area: float
    vacant_area: float
    maintenance_area: float
    reserved_area: float
    area_occupancy_rate: float


class RevenueBreakdown(_Record):
    potential_revenue: float
    actual_revenue: float
    lost_revenue: float
    opportunity_loss: float
    opportunity_loss_percentage: float


class TenantInfo(_Record):
    bp_code: str
    business_name: str


class ActiveLeaseInfo(_Record):
    id: str
    tenant: Optional[TenantInfo] = None
    start_date: datetime
    end_date: datetime
    total_rent_amount: float


class UnitOccupancy(_Record):
    id: str
    unit_number: str
    total_area: float
    total_rent: float
    status: UnitStatus
    lease: Optional[ActiveLeaseInfo] = None
    vacant_days: int = 0
    lost_revenue: float = 0


class OccupancyReportData(_Record):
    property: PropertySummary
    occupancy: OccupancyCounts
    area: AreaBreakdown
    revenue: RevenueBreakdown
    units: List[UnitOccupancy]


# =========================================================================
# Opportunity loss report
# =========================================================================

class PropertyRef(_Record):
    id: str
    property_code: str
    property_name: str
    property_type: PropertyType


class ReportPeriod(_Record):
    start_date: datetime
    end_date: datetime
    total_days: int


class LossSummary(_Record):
    vacant_days: int
    maintenance_days: int
    total_lost_days: int
    daily_potential_revenue: float
    vacancy_loss: float
    maintenance_loss: float
    total_opportunity_loss: float


class UnitVacancy(_Record):
    id: str
    unit_number: str
    total_rent: float
    status: UnitStatus
    vacant_days: int
    maintenance_days: int
    unit_opportunity_loss: float
    last_lease_end_date: Optional[datetime] = None
    next_lease_start_date: Optional[datetime] = None


class OpportunityLossData(_Record):
    property: PropertyRef
    period: ReportPeriod
    loss: LossSummary
    units: List[UnitVacancy]


# =========================================================================
# Property performance report
# =========================================================================

class PerformanceProperty(_Record):
    id: str
    property_code: str
    property_name: str
    property_type: PropertyType
    total_units: int  # actual unit count
    leasable_area: float


class PerformanceMetrics(_Record):
    occupancy_rate: float
    area_occupancy_rate: float
    average_rent_per_sqm: float
    total_revenue: float
    potential_revenue: float
    opportunity_loss: float
    opportunity_loss_percentage: float
    average_vacancy_days: float = 0
    turnover_rate: float = 0


class PropertyRanking(_Record):
    occupancy_rank: int = 0
    revenue_rank: int = 0
    efficiency_rank: int = 0


class PropertyPerformanceData(_Record):
    property: PerformanceProperty
    performance: PerformanceMetrics
    ranking: PropertyRanking = PropertyRanking()


# =========================================================================
# Portfolio rollup
# =========================================================================

class OccupancyStats(_Record):
    total_properties: int = 0
    total_units: int = 0
    occupied_units: int = 0
    vacant_units: int = 0
    maintenance_units: int = 0
    reserved_units: int = 0
    overall_occupancy_rate: float = 0
    total_leasable_area: float = 0
    occupied_area: float = 0
    area_occupancy_rate: float = 0
    total_potential_revenue: float = 0
    total_actual_revenue: float = 0
    total_opportunity_loss: float = 0
    opportunity_loss_percentage: float = 0
    average_rent_per_sqm: float = 0
    best_performing_property: str = "N/A"
    worst_performing_property: str = "N/A"
