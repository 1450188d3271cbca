"""Polars aggregations over appointments and work items."""

from .appointments import monthly_activity, stored_revenue, weekday_activity
from .base import WorkFrames, build_frames
from .employees import (
    employee_activity,
    employee_appointments,
    employee_service_breakdown,
    unassigned_activity,
)
from .services import financial_totals, monthly_commission, service_activity

__all__ = [
    "WorkFrames",
    "build_frames",
    "employee_activity",
    "employee_appointments",
    "employee_service_breakdown",
    "financial_totals",
    "monthly_activity",
    "monthly_commission",
    "service_activity",
    "stored_revenue",
    "unassigned_activity",
    "weekday_activity",
]
