"""Employee metrics and the unassigned bucket."""

import polars as pl

_has_employee = pl.col("employee_id").is_not_null()


def employee_activity(priced: pl.LazyFrame) -> pl.LazyFrame:
    """Services performed and money earned per employee."""
    return (
        priced.filter(_has_employee)
        .group_by("employee_id", maintain_order=True)
        .agg(
            pl.len().alias("services"),
            pl.col("price").sum().alias("revenue"),
            pl.col("commission").sum().alias("commission"),
            pl.col("establishment").sum().alias("establishment"),
        )
    )


def employee_appointments(work_items: pl.LazyFrame) -> pl.LazyFrame:
    """Distinct appointments each employee took part in.

    Counted from the unfiltered work items so that an appointment counts once
    per employee whatever the number of services they performed in it.
    """
    return (
        work_items.filter(_has_employee)
        .group_by("employee_id")
        .agg(pl.col("row").n_unique().alias("appointments"))
    )


def employee_service_breakdown(priced: pl.LazyFrame) -> pl.LazyFrame:
    return (
        priced.filter(_has_employee)
        .group_by("employee_id", "service_id", maintain_order=True)
        .agg(
            pl.col("service_name").first().alias("name"),
            pl.len().alias("count"),
            pl.col("price").sum().alias("revenue"),
            pl.col("commission").sum().alias("commission"),
        )
    )


def unassigned_activity(priced: pl.LazyFrame) -> pl.LazyFrame:
    """Totals for work items nobody was attributed.

    ``appointments`` counts appointments without any attributed employee.
    """
    return priced.filter(~_has_employee).select(
        pl.col("row").filter(~pl.col("attributed")).n_unique().alias("appointments"),
        pl.len().alias("services"),
        pl.col("price").sum().alias("revenue"),
        pl.col("commission").sum().alias("commission"),
        pl.col("establishment").sum().alias("establishment"),
    )
