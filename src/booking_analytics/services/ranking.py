"""Ranking and payload shaping for analytics results."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from booking_analytics.models import (
    Employee,
    EmployeeRankingItem,
    MonthlyPoint,
    ServiceRankingItem,
    WeekdayPoint,
)

# Sunday first, matching weekday index 0
WEEKDAY_LABELS = ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado")

Row = Mapping[str, Any]


def rank_employees(
    roster: Sequence[Employee],
    activity: Mapping[int, Row],
    appointments: Mapping[int, int],
) -> list[EmployeeRankingItem]:
    """Roster employees who performed services, by commission descending.

    Every roster employee starts at zero; employees without services are
    dropped. Ties go to the lower employee id.
    """
    items = []
    for employee in roster:
        stats = activity.get(employee.id, {})
        items.append(
            EmployeeRankingItem(
                id=employee.id,
                name=employee.name,
                appointments=appointments.get(employee.id, 0),
                services=stats.get("services", 0),
                revenue=stats.get("revenue", 0.0),
                commission=stats.get("commission", 0.0),
            )
        )
    active = [item for item in items if item.services > 0]
    by_id = sorted(active, key=lambda item: item.id)
    return sorted(by_id, key=lambda item: item.commission, reverse=True)


def rank_services(activity: Iterable[Row]) -> list[ServiceRankingItem]:
    """Services by times performed, descending; ties go to the lower service id."""
    items = [
        ServiceRankingItem(
            id=row["service_id"],
            name=row["name"],
            count=row["count"],
            revenue=row["revenue"],
            commission=row["commission"],
        )
        for row in sorted(activity, key=lambda row: row["service_id"])
    ]
    return sorted(items, key=lambda item: item.count, reverse=True)


def monthly_series(activity: Iterable[Row], commission: Mapping[str, float]) -> list[MonthlyPoint]:
    """Monthly points in chronological order (YYYY-MM sorts lexicographically)."""
    points = [
        MonthlyPoint(
            month=row["month_key"],
            appointments=row["appointments"],
            revenue=row["revenue"],
            commission=commission.get(row["month_key"], 0.0),
        )
        for row in activity
    ]
    return sorted(points, key=lambda point: point.month)


def weekday_series(activity: Iterable[Row]) -> list[WeekdayPoint]:
    """Seven buckets, Sunday to Saturday, zero-filled."""
    by_day = {row["weekday"]: row for row in activity}
    return [
        WeekdayPoint(
            day=label,
            appointments=by_day.get(index, {}).get("appointments", 0),
            revenue=by_day.get(index, {}).get("revenue", 0.0),
        )
        for index, label in enumerate(WEEKDAY_LABELS)
    ]
