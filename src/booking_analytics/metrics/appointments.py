"""Appointment-level metrics.

Counted once per completed appointment, independent of how many work items
the appointment has or which of them pass the assignment filters. Revenue
here is the appointment's stored ``total_price``.
"""

import polars as pl


def monthly_activity(completed: pl.LazyFrame) -> pl.LazyFrame:
    return completed.group_by("month_key").agg(
        pl.len().alias("appointments"),
        pl.col("total_price").sum().alias("revenue"),
    )


def weekday_activity(completed: pl.LazyFrame) -> pl.LazyFrame:
    return completed.group_by("weekday").agg(
        pl.len().alias("appointments"),
        pl.col("total_price").sum().alias("revenue"),
    )


def stored_revenue(completed: pl.LazyFrame) -> pl.LazyFrame:
    """Sum of the prices frozen on the appointments at booking time."""
    return completed.select(
        pl.len().alias("appointments"),
        pl.col("total_price").sum().alias("revenue"),
    )
