"""FastAPI application for the booking analytics service."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from booking_analytics.cache import create_cache
from booking_analytics.config import settings
from booking_analytics.errors import BookingStoreError
from booking_analytics.log_config import setup_logging
from booking_analytics.middleware import LoggingMiddleware
from booking_analytics.repositories.base import BookingStore
from booking_analytics.repositories.json_store import JsonBookingStore
from booking_analytics.repositories.mongo import MongoBookingStore, get_mongo_client
from booking_analytics.routers import analytics_router, employees_router, health_router
from booking_analytics.routers.analytics import get_analytics_service
from booking_analytics.routers.employees import get_employee_report_service
from booking_analytics.routers.health import get_booking_store
from booking_analytics.services.analytics import AnalyticsService
from booking_analytics.services.employee_report import EmployeeReportService


def _wire_services(app: FastAPI, store: BookingStore) -> None:
    """Bind router dependencies to services over the given store."""
    analytics_service = AnalyticsService(store, cache=create_cache())
    report_service = EmployeeReportService(store, cache=create_cache())
    app.dependency_overrides[get_analytics_service] = lambda: analytics_service
    app.dependency_overrides[get_employee_report_service] = lambda: report_service
    app.dependency_overrides[get_booking_store] = lambda: store


async def booking_store_error_handler(request: Request, exc: BookingStoreError) -> JSONResponse:
    """Store read failures are the only errors surfaced to report clients."""
    logger.opt(exception=exc).error("Booking store failure", path=request.url.path)
    return JSONResponse(status_code=503, content={"success": False, "error": str(exc)})


def create_app(store: BookingStore | None = None) -> FastAPI:
    """Build the application.

    With an explicit ``store`` the services are wired immediately; otherwise
    the configured backend is opened on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        if store is not None:
            yield
            return

        if settings.storage_backend == "mongodb":
            client = get_mongo_client()
            _wire_services(app, MongoBookingStore(client))
            try:
                yield
            finally:
                client.close()
        else:
            _wire_services(app, JsonBookingStore(settings.data_dir))
            yield

    app = FastAPI(
        title="Booking Analytics Service",
        description="Revenue, commission and ranking analytics with Polars LazyFrames",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(BookingStoreError, booking_store_error_handler)

    app.include_router(health_router)
    app.include_router(analytics_router)
    app.include_router(employees_router)

    if store is not None:
        _wire_services(app, store)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
