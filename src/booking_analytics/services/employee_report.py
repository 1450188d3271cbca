"""Employee financial reports.

Reduced-filter variants of the analytics engine: completed appointments only,
filtered by month(s) of a year, built on the same frames and price resolver.
"""

from datetime import date

import polars as pl
from cachetools import TLRUCache
from loguru import logger

from booking_analytics.cache import async_cached
from booking_analytics.filters import AnalyticsFilters
from booking_analytics.metrics import (
    build_frames,
    employee_activity,
    employee_appointments,
    employee_service_breakdown,
    stored_revenue,
    unassigned_activity,
)
from booking_analytics.models import (
    EmployeeDetail,
    EmployeeDetailReport,
    EmployeeReport,
    EmployeeReportRow,
    EmployeeReportSummary,
    ServicePerformed,
)
from booking_analytics.pricing import PriceResolver
from booking_analytics.repositories.base import BookingStore, Snapshot, load_snapshot

UNASSIGNED_NAME = "Sem funcionário atribuído"
ALL_PERIODS = "Todos os períodos"


def _month_filters(month: int | None, year: int | None) -> AnalyticsFilters:
    if month is not None and year is not None:
        return AnalyticsFilters(months=frozenset({month}), year=year)
    return AnalyticsFilters()


def build_employee_report(snapshot: Snapshot, month: int | None, year: int | None) -> EmployeeReport:
    """Per-employee revenue split, plus an unassigned row when it has activity."""
    resolver = PriceResolver(snapshot.establishment, snapshot.services)
    frames = build_frames(snapshot.appointments, _month_filters(month, year), resolver)

    stored, activity, counts, unassigned = pl.collect_all(
        [
            stored_revenue(frames.completed),
            employee_activity(frames.priced),
            employee_appointments(frames.work_items),
            unassigned_activity(frames.priced),
        ]
    )
    by_employee = {row["employee_id"]: row for row in activity.iter_rows(named=True)}
    appointment_counts = dict(counts.iter_rows())

    report = []
    for employee in snapshot.employees:
        stats = by_employee.get(employee.id, {})
        report.append(
            EmployeeReportRow(
                employee_id=employee.id,
                employee_name=employee.name,
                appointment_count=appointment_counts.get(employee.id, 0),
                total_revenue=stats.get("revenue", 0.0),
                employee_revenue=stats.get("commission", 0.0),
                establishment_revenue=stats.get("establishment", 0.0),
            )
        )

    bucket = unassigned.row(0, named=True)
    if bucket["revenue"] > 0 or bucket["appointments"] > 0:
        report.append(
            EmployeeReportRow(
                employee_id=None,
                employee_name=UNASSIGNED_NAME,
                appointment_count=bucket["appointments"],
                total_revenue=bucket["revenue"],
                employee_revenue=bucket["commission"],
                establishment_revenue=bucket["establishment"],
            )
        )

    totals = stored.row(0, named=True)
    return EmployeeReport(
        report=report,
        summary=EmployeeReportSummary(
            total_appointments=totals["appointments"],
            total_revenue=totals["revenue"],
            total_employee_revenue=sum(row.employee_revenue for row in report),
            total_establishment_revenue=sum(row.establishment_revenue for row in report),
            period=f"{month}/{year}" if month is not None and year is not None else ALL_PERIODS,
        ),
    )


def _by_count(performed: list[ServicePerformed]) -> list[ServicePerformed]:
    by_id = sorted(performed, key=lambda line: line.service_id)
    return sorted(by_id, key=lambda line: line.count, reverse=True)


def build_employee_detail_report(
    snapshot: Snapshot, months: frozenset[int], year: int
) -> EmployeeDetailReport:
    """Services performed by each employee over the selected months."""
    resolver = PriceResolver(snapshot.establishment, snapshot.services)
    frames = build_frames(snapshot.appointments, AnalyticsFilters(months=months, year=year), resolver)

    lines: dict[int, list[ServicePerformed]] = {}
    for row in employee_service_breakdown(frames.priced).collect().iter_rows(named=True):
        lines.setdefault(row["employee_id"], []).append(
            ServicePerformed(
                service_id=row["service_id"],
                service_name=row["name"],
                count=row["count"],
                revenue=row["revenue"],
                commission=row["commission"],
            )
        )

    report = []
    for employee in snapshot.employees:
        performed = lines.get(employee.id)
        if not performed:
            continue
        report.append(
            EmployeeDetail(
                employee_id=employee.id,
                employee_name=employee.name,
                services=_by_count(performed),
                total_count=sum(line.count for line in performed),
                total_revenue=sum(line.revenue for line in performed),
                total_commission=sum(line.commission for line in performed),
            )
        )

    return EmployeeDetailReport(report=report, selected_months=sorted(months), year=year)


class EmployeeReportService:
    """Service for per-employee financial reports."""

    def __init__(self, store: BookingStore, cache: TLRUCache | None = None) -> None:
        self._store = store
        self.cache = cache

    @async_cached(
        period_end=lambda bound: _month_filters(
            bound.arguments["month"], bound.arguments["year"]
        ).period_end()
    )
    async def employee_report(
        self,
        establishment_id: int,
        month: int | None = None,
        year: int | None = None,
    ) -> EmployeeReport:
        """Financial report per employee, optionally for one month of a year."""
        snapshot = await load_snapshot(self._store, establishment_id)
        report = build_employee_report(snapshot, month, year)
        logger.info(
            "Employee report computed",
            establishment_id=establishment_id,
            period=report.summary.period,
            rows=len(report.report),
        )
        return report

    async def employee_detail_report(
        self,
        establishment_id: int,
        months: frozenset[int] | None = None,
        year: int | None = None,
    ) -> EmployeeDetailReport:
        """Service breakdown per employee; defaults to the current month."""
        today = date.today()
        return await self._detail_report(
            establishment_id, months or frozenset({today.month}), year or today.year
        )

    @async_cached(
        period_end=lambda bound: AnalyticsFilters(
            months=bound.arguments["months"], year=bound.arguments["year"]
        ).period_end()
    )
    async def _detail_report(
        self, establishment_id: int, months: frozenset[int], year: int
    ) -> EmployeeDetailReport:
        snapshot = await load_snapshot(self._store, establishment_id)
        report = build_employee_detail_report(snapshot, months, year)
        logger.info(
            "Employee detail report computed",
            establishment_id=establishment_id,
            months=sorted(months),
            year=year,
            employees=len(report.report),
        )
        return report
