# Models package - snapshot records and report records
from .domain import (
    PropertyType,
    UnitStatus,
    LeaseStatus,
    TERMINAL_LEASE_STATUSES,
    Tenant,
    Lease,
    Unit,
    Property,
)
from .reports import (
    CallerSession,
    ReportResult,
    PropertySummary,
    OccupancyCounts,
    AreaBreakdown,
    RevenueBreakdown,
    TenantInfo,
    ActiveLeaseInfo,
    UnitOccupancy,
    OccupancyReportData,
    PropertyRef,
    ReportPeriod,
    LossSummary,
    UnitVacancy,
    OpportunityLossData,
    PerformanceProperty,
    PerformanceMetrics,
    PropertyRanking,
    PropertyPerformanceData,
    OccupancyStats,
)
