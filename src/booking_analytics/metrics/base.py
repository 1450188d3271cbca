"""Frame schemas and builders shared by every metric.

Two frames are derived from a snapshot's appointments:

* the appointment frame, one row per appointment, with calendar columns
  (``year``, ``month``, ``weekday`` with 0 = Sunday, ``month_key``);
* the work-item frame, one row per performed service: every assignment plus
  every service listed on the appointment that no assignment covers. Rows
  with a null ``employee_id`` form the unassigned bucket.

``row`` is the appointment's position in the snapshot and ``seq`` the work
item's position in the stream; both keep results in input order.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from booking_analytics.filters import AnalyticsFilters
from booking_analytics.models import Appointment, AppointmentStatus
from booking_analytics.pricing import PriceResolver

APPOINTMENT_SCHEMA = {
    "row": pl.Int64,
    "appointment_id": pl.Int64,
    "date": pl.Date,
    "status": pl.Utf8,
    "total_price": pl.Float64,
}

WORK_ITEM_SCHEMA = {
    "seq": pl.Int64,
    "row": pl.Int64,
    "service_id": pl.Int64,
    "employee_id": pl.Int64,
}

is_completed = pl.col("status") == AppointmentStatus.COMPLETED.value


def appointments_frame(appointments: Sequence[Appointment]) -> pl.LazyFrame:
    """One row per appointment with derived calendar columns."""
    df = pl.DataFrame(
        {
            "row": list(range(len(appointments))),
            "appointment_id": [a.id for a in appointments],
            "date": [a.date for a in appointments],
            "status": [a.status.value for a in appointments],
            "total_price": [float(a.total_price) for a in appointments],
        },
        schema=APPOINTMENT_SCHEMA,
    )
    return df.lazy().with_columns(
        pl.col("date").dt.year().cast(pl.Int64).alias("year"),
        pl.col("date").dt.month().cast(pl.Int64).alias("month"),
        # Polars weekdays run Monday=1 .. Sunday=7
        (pl.col("date").dt.weekday() % 7).cast(pl.Int64).alias("weekday"),
        pl.col("date").dt.strftime("%Y-%m").alias("month_key"),
    )


def work_items_frame(appointments: Sequence[Appointment]) -> pl.LazyFrame:
    """One row per performed service, assigned or not."""
    rows: list[int] = []
    service_ids: list[int] = []
    employee_ids: list[int | None] = []

    for row, appointment in enumerate(appointments):
        covered = set()
        for assignment in appointment.assignments:
            rows.append(row)
            service_ids.append(assignment.service_id)
            employee_ids.append(assignment.employee_id)
            covered.add(assignment.service_id)
        for service_id in appointment.services:
            if service_id not in covered:
                rows.append(row)
                service_ids.append(service_id)
                employee_ids.append(None)

    df = pl.DataFrame(
        {
            "seq": list(range(len(rows))),
            "row": rows,
            "service_id": service_ids,
            "employee_id": employee_ids,
        },
        schema=WORK_ITEM_SCHEMA,
    )
    return df.lazy()


def referenced_service_ids(appointments: Sequence[Appointment]) -> set[int]:
    """Every service id an appointment lists or assigns."""
    ids: set[int] = set()
    for appointment in appointments:
        ids.update(appointment.services)
        ids.update(a.service_id for a in appointment.assignments)
    return ids


@dataclass(frozen=True)
class WorkFrames:
    """Lazy frames feeding the aggregations of one report."""

    # Completed appointments passing the appointment-level filters
    completed: pl.LazyFrame
    # Every work item of those appointments, before assignment filters
    work_items: pl.LazyFrame
    # Work items passing the assignment filters, with resolved prices
    priced: pl.LazyFrame


def build_frames(
    appointments: Sequence[Appointment],
    filters: AnalyticsFilters,
    resolver: PriceResolver,
) -> WorkFrames:
    """Apply filters, the completed-status gate and price resolution."""
    completed = (
        appointments_frame(appointments)
        .filter(filters.appointment_predicate())
        .filter(is_completed)
    )

    work_items = (
        work_items_frame(appointments)
        .join(completed.select("row", "month_key"), on="row", how="inner")
        .sort("seq")
        .with_columns(
            pl.col("employee_id").is_not_null().any().over("row").alias("attributed")
        )
    )

    prices = resolver.price_frame(referenced_service_ids(appointments)).lazy()
    priced = (
        work_items.filter(filters.assignment_predicate())
        .join(prices, on="service_id", how="left")
        .sort("seq")
        .with_columns(
            (pl.col("price") * pl.col("commission_percent") / 100).alias("commission")
        )
        .with_columns((pl.col("price") - pl.col("commission")).alias("establishment"))
    )

    return WorkFrames(completed=completed, work_items=work_items, priced=priced)
