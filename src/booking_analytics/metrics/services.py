"""Work-item metrics: financial totals and per-service activity."""

import polars as pl


def financial_totals(priced: pl.LazyFrame) -> pl.LazyFrame:
    """Revenue and its commission/establishment split over all work items."""
    return priced.select(
        pl.col("price").sum().alias("revenue"),
        pl.col("commission").sum().alias("commission"),
        pl.col("establishment").sum().alias("establishment"),
    )


def service_activity(priced: pl.LazyFrame) -> pl.LazyFrame:
    """Per-service counts in order of first appearance."""
    return priced.group_by("service_id", maintain_order=True).agg(
        pl.col("service_name").first().alias("name"),
        pl.len().alias("count"),
        pl.col("price").sum().alias("revenue"),
        pl.col("commission").sum().alias("commission"),
    )


def monthly_commission(priced: pl.LazyFrame) -> pl.LazyFrame:
    return priced.group_by("month_key").agg(pl.col("commission").sum().alias("commission"))
