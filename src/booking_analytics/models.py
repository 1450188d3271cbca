"""Pydantic models for the booking analytics service."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model reading and writing camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AppointmentStatus(str, Enum):
    """Appointment lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


# ---------------------------------------------------------------------------
# Stored records (read-only inputs)
# ---------------------------------------------------------------------------


class Assignment(CamelModel):
    """Which employee performed which service within an appointment."""

    service_id: int
    employee_id: int | None = None


class Appointment(CamelModel):
    """Appointment record as persisted by the booking flow."""

    id: int
    establishment_id: int
    date: datetime.date
    time: str = "00:00"
    status: AppointmentStatus
    services: list[int] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    total_price: float = 0.0
    total_duration: int = 0


class ServicePreference(CamelModel):
    """Establishment-level override of catalog price, duration and commission."""

    price: float | None = None
    duration: int | None = None
    commission: float | None = Field(default=None, ge=0, le=100)


class Establishment(CamelModel):
    """Business tenant offering services."""

    id: int
    name: str = ""
    services: list[int] = Field(default_factory=list)
    service_preferences: dict[int, ServicePreference] = Field(default_factory=dict)


class Service(CamelModel):
    """Catalog-level service with default price and duration."""

    id: int
    name: str
    price: float | None = None
    duration: int | None = None
    category_id: int | None = None


class Employee(CamelModel):
    """Staff member of an establishment."""

    id: int
    establishment_id: int
    name: str
    services: list[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Analytics payload
# ---------------------------------------------------------------------------


class AnalyticsSummary(CamelModel):
    """Whole-establishment totals for the filtered period."""

    total_appointments: int = 0
    total_revenue: float = 0.0
    total_commission: float = 0.0
    total_establishment: float = 0.0
    ticket_medio: float = 0.0
    top_service: str | None = None
    top_employee: str | None = None


class EmployeeRankingItem(CamelModel):
    """Per-employee activity and earnings."""

    id: int
    name: str
    appointments: int
    services: int
    revenue: float
    commission: float


class ServiceRankingItem(CamelModel):
    """Per-service activity and earnings."""

    id: int
    name: str
    count: int
    revenue: float
    commission: float


class MonthlyPoint(CamelModel):
    """Monthly time series point keyed by YYYY-MM."""

    month: str
    appointments: int
    revenue: float
    commission: float


class WeekdayPoint(CamelModel):
    """Weekday bucket (Sunday to Saturday)."""

    day: str
    appointments: int
    revenue: float


class UnassignedStats(CamelModel):
    """Services performed without an attributed employee."""

    appointments: int = 0
    services: int = 0
    revenue: float = 0.0
    commission: float = 0.0
    establishment: float = 0.0


class NamedRef(CamelModel):
    """Id/name pair used by client-side filter pickers."""

    id: int
    name: str


class AnalyticsResult(CamelModel):
    """Full analytics payload for one establishment."""

    summary: AnalyticsSummary
    employee_ranking: list[EmployeeRankingItem]
    service_ranking: list[ServiceRankingItem]
    monthly_data: list[MonthlyPoint]
    weekday_data: list[WeekdayPoint]
    unassigned: UnassignedStats
    employees: list[NamedRef]
    services: list[NamedRef]


# ---------------------------------------------------------------------------
# Employee financial reports
# ---------------------------------------------------------------------------


class EmployeeReportRow(CamelModel):
    """Financial row for one employee (or the unassigned bucket)."""

    employee_id: int | None
    employee_name: str
    appointment_count: int
    total_revenue: float
    employee_revenue: float
    establishment_revenue: float


class EmployeeReportSummary(CamelModel):
    """Totals for the employee financial report."""

    total_appointments: int
    total_revenue: float
    total_employee_revenue: float
    total_establishment_revenue: float
    period: str


class EmployeeReport(CamelModel):
    """Per-employee financial report."""

    report: list[EmployeeReportRow]
    summary: EmployeeReportSummary


class ServicePerformed(CamelModel):
    """Service breakdown line within an employee detail report."""

    service_id: int
    service_name: str
    count: int
    revenue: float
    commission: float


class EmployeeDetail(CamelModel):
    """Services performed by one employee in the selected months."""

    employee_id: int
    employee_name: str
    services: list[ServicePerformed]
    total_count: int
    total_revenue: float
    total_commission: float


class EmployeeDetailReport(CamelModel):
    """Per-employee service breakdown for KPI dashboards."""

    report: list[EmployeeDetail]
    selected_months: list[int]
    year: int
