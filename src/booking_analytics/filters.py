"""Filter resolution for appointment analytics.

Filters are optional and independent. Appointment-level filters (dates,
months/year, statuses, weekdays) decide which appointments are considered at
all; employee and service filters decide which individual assignments are
kept. Both decisions are exposed as Polars expressions over the frames built
in ``booking_analytics.metrics.base``.
"""

from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

import polars as pl
from dateutil.relativedelta import relativedelta
from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from booking_analytics.models import AppointmentStatus

_MONTHS = frozenset(range(1, 13))
_WEEKDAYS = frozenset(range(0, 7))  # 0 = Sunday
_YEARS = range(1, 9999)  # the month after December must still be a valid date


def parse_int_set(raw: str) -> frozenset[int]:
    """Parse a comma separated list of integers ("1, 3,5")."""
    return frozenset(int(part) for part in raw.split(",") if part.strip())


def _parse_statuses(raw: str) -> frozenset[AppointmentStatus]:
    return frozenset(AppointmentStatus(part.strip()) for part in raw.split(",") if part.strip())


# Query parameter -> (field name, parser)
_QUERY_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "startDate": ("start_date", date.fromisoformat),
    "endDate": ("end_date", date.fromisoformat),
    "months": ("months", parse_int_set),
    "year": ("year", int),
    "statuses": ("statuses", _parse_statuses),
    "weekdays": ("weekdays", parse_int_set),
    "employees": ("employees", parse_int_set),
    "services": ("services", parse_int_set),
}


class AnalyticsFilters(BaseModel):
    """Immutable, validated filter set for an analytics request.

    An absent (or empty) field imposes no constraint. ``months`` only applies
    together with ``year``; when both are given they replace the plain
    year filter instead of adding to it.
    """

    start_date: date | None = None
    end_date: date | None = None
    months: frozenset[int] | None = None
    year: int | None = None
    statuses: frozenset[AppointmentStatus] | None = None
    weekdays: frozenset[int] | None = None
    employees: frozenset[int] | None = None
    services: frozenset[int] | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("months", "statuses", "weekdays", "employees", "services")
    @classmethod
    def _empty_means_unfiltered(cls, value):
        return value or None

    @field_validator("months")
    @classmethod
    def _check_months(cls, value: frozenset[int] | None) -> frozenset[int] | None:
        if value is not None and not value <= _MONTHS:
            raise ValueError(f"months must be within 1-12, got {sorted(value)}")
        return value

    @field_validator("weekdays")
    @classmethod
    def _check_weekdays(cls, value: frozenset[int] | None) -> frozenset[int] | None:
        if value is not None and not value <= _WEEKDAYS:
            raise ValueError(f"weekdays must be within 0-6, got {sorted(value)}")
        return value

    @field_validator("year")
    @classmethod
    def _check_year(cls, value: int | None) -> int | None:
        if value is not None and value not in _YEARS:
            raise ValueError(f"year must be within 1-9998, got {value}")
        return value

    @classmethod
    def from_query(cls, params: Mapping[str, str | None]) -> "AnalyticsFilters":
        """Build filters from raw query strings, dropping any malformed field."""
        accepted: dict[str, Any] = {}
        for param, (field_name, parse) in _QUERY_FIELDS.items():
            raw = params.get(param)
            if raw is None or not raw.strip():
                continue
            try:
                value = parse(raw.strip())
                cls(**{field_name: value})
            except ValueError:
                logger.warning("Ignoring malformed filter", param=param, value=raw)
                continue
            accepted[field_name] = value
        return cls(**accepted)

    def period_end(self) -> date | None:
        """Last calendar day the filters can match, if they bound the period."""
        ends = []
        if self.end_date is not None:
            ends.append(self.end_date)
        if self.year is not None and self.year in _YEARS:
            last_month = max(self.months) if self.months else 12
            ends.append(date(self.year, last_month, 1) + relativedelta(months=1, days=-1))
        return min(ends, default=None)

    def appointment_predicate(self) -> pl.Expr:
        """Expression deciding whether an appointment row is considered."""
        conditions = []
        if self.start_date is not None:
            conditions.append(pl.col("date") >= self.start_date)
        if self.end_date is not None:
            conditions.append(pl.col("date") <= self.end_date)

        if self.months and self.year is not None:
            conditions.append(
                (pl.col("year") == self.year) & pl.col("month").is_in(sorted(self.months))
            )
        elif self.year is not None:
            conditions.append(pl.col("year") == self.year)

        if self.statuses:
            conditions.append(pl.col("status").is_in(sorted(s.value for s in self.statuses)))
        if self.weekdays:
            conditions.append(pl.col("weekday").is_in(sorted(self.weekdays)))

        return pl.all_horizontal(conditions) if conditions else pl.lit(True)

    def assignment_predicate(self) -> pl.Expr:
        """Expression deciding whether a work item (assignment) is kept."""
        conditions = []
        if self.employees:
            conditions.append(
                pl.col("employee_id").is_in(sorted(self.employees)).fill_null(False)
            )
        if self.services:
            conditions.append(pl.col("service_id").is_in(sorted(self.services)))

        return pl.all_horizontal(conditions) if conditions else pl.lit(True)
