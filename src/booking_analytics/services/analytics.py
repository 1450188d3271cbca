"""Analytics service for revenue, commission and ranking rollups."""

import polars as pl
from cachetools import TLRUCache
from loguru import logger

from booking_analytics.cache import async_cached
from booking_analytics.filters import AnalyticsFilters
from booking_analytics.metrics import (
    build_frames,
    employee_activity,
    employee_appointments,
    financial_totals,
    monthly_activity,
    monthly_commission,
    service_activity,
    stored_revenue,
    unassigned_activity,
    weekday_activity,
)
from booking_analytics.models import (
    AnalyticsResult,
    AnalyticsSummary,
    NamedRef,
    UnassignedStats,
)
from booking_analytics.pricing import PriceResolver
from booking_analytics.repositories.base import BookingStore, Snapshot, load_snapshot
from booking_analytics.services.ranking import (
    monthly_series,
    rank_employees,
    rank_services,
    weekday_series,
)


def aggregate(snapshot: Snapshot, filters: AnalyticsFilters) -> AnalyticsResult:
    """Compute the analytics payload for a fetched snapshot.

    Pure and synchronous: the same snapshot and filters always produce the
    same result.
    """
    resolver = PriceResolver(snapshot.establishment, snapshot.services)
    frames = build_frames(snapshot.appointments, filters, resolver)

    (
        appointments,
        totals,
        services,
        months,
        month_commission,
        weekdays,
        employees,
        employee_counts,
        unassigned,
    ) = pl.collect_all(
        [
            stored_revenue(frames.completed),
            financial_totals(frames.priced),
            service_activity(frames.priced),
            monthly_activity(frames.completed),
            monthly_commission(frames.priced),
            weekday_activity(frames.completed),
            employee_activity(frames.priced),
            employee_appointments(frames.work_items),
            unassigned_activity(frames.priced),
        ]
    )

    employee_ranking = rank_employees(
        snapshot.employees,
        {row["employee_id"]: row for row in employees.iter_rows(named=True)},
        dict(employee_counts.iter_rows()),
    )
    service_ranking = rank_services(services.iter_rows(named=True))

    count = appointments.item(0, "appointments")
    money = totals.row(0, named=True)
    summary = AnalyticsSummary(
        total_appointments=count,
        total_revenue=money["revenue"],
        total_commission=money["commission"],
        total_establishment=money["establishment"],
        ticket_medio=money["revenue"] / count if count > 0 else 0.0,
        top_service=service_ranking[0].name if service_ranking else None,
        top_employee=employee_ranking[0].name if employee_ranking else None,
    )

    offered = set(snapshot.establishment.services) if snapshot.establishment else set()
    return AnalyticsResult(
        summary=summary,
        employee_ranking=employee_ranking,
        service_ranking=service_ranking,
        monthly_data=monthly_series(
            months.iter_rows(named=True), dict(month_commission.iter_rows())
        ),
        weekday_data=weekday_series(weekdays.iter_rows(named=True)),
        unassigned=UnassignedStats(**unassigned.row(0, named=True)),
        employees=[NamedRef(id=e.id, name=e.name) for e in snapshot.employees],
        services=[NamedRef(id=s.id, name=s.name) for s in snapshot.services if s.id in offered],
    )


class AnalyticsService:
    """Service computing establishment analytics from an injected booking store."""

    def __init__(self, store: BookingStore, cache: TLRUCache | None = None) -> None:
        self._store = store
        self.cache = cache

    @async_cached(period_end=lambda bound: bound.arguments["filters"].period_end())
    async def compute_analytics(
        self,
        establishment_id: int,
        filters: AnalyticsFilters,
    ) -> AnalyticsResult:
        """Fetch a snapshot for the establishment and aggregate it."""
        snapshot = await load_snapshot(self._store, establishment_id)
        if snapshot.establishment is None:
            logger.warning("Establishment not found", establishment_id=establishment_id)

        result = aggregate(snapshot, filters)
        logger.info(
            "Analytics computed",
            establishment_id=establishment_id,
            appointments=len(snapshot.appointments),
            completed=result.summary.total_appointments,
        )
        return result
