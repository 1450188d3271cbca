"""Employee financial report endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from loguru import logger

from booking_analytics.filters import AnalyticsFilters
from booking_analytics.models import EmployeeDetailReport, EmployeeReport
from booking_analytics.services.employee_report import EmployeeReportService

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_report_service() -> EmployeeReportService:
    """Dependency for employee report service - injected at app level."""
    raise NotImplementedError("Must be overridden by dependency_overrides")


def _single_month(raw: str | None, months: frozenset[int] | None) -> int | None:
    if months is not None and len(months) == 1:
        (month,) = months
        return month
    if months is not None:
        logger.warning("Ignoring malformed filter", param="month", value=raw)
    return None


@router.get("/{establishment_id}/report", response_model=EmployeeReport)
async def get_employee_report(
    establishment_id: Annotated[int, Path(description="Establishment id")],
    service: Annotated[EmployeeReportService, Depends(get_employee_report_service)],
    month: Annotated[str | None, Query(description="Month 1-12 (needs year)")] = None,
    year: Annotated[str | None, Query(description="Year (needs month)")] = None,
) -> EmployeeReport:
    """Per-employee revenue and commission for completed appointments.

    A malformed month or year is dropped, which reports all periods.
    """
    filters = AnalyticsFilters.from_query({"months": month, "year": year})
    return await service.employee_report(
        establishment_id, month=_single_month(month, filters.months), year=filters.year
    )


@router.get("/{establishment_id}/detail-report", response_model=EmployeeDetailReport)
async def get_employee_detail_report(
    establishment_id: Annotated[int, Path(description="Establishment id")],
    service: Annotated[EmployeeReportService, Depends(get_employee_report_service)],
    months: Annotated[str | None, Query(description="Comma separated months, default current")] = None,
    year: Annotated[str | None, Query(description="Year, default current")] = None,
) -> EmployeeDetailReport:
    """Services performed per employee over the selected months."""
    filters = AnalyticsFilters.from_query({"months": months, "year": year})
    return await service.employee_detail_report(
        establishment_id, months=filters.months, year=filters.year
    )
