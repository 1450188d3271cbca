"""API routers."""

from booking_analytics.routers.analytics import router as analytics_router
from booking_analytics.routers.employees import router as employees_router
from booking_analytics.routers.health import router as health_router

__all__ = ["analytics_router", "employees_router", "health_router"]
