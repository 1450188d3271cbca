"""Liveness and booking store health endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from booking_analytics.errors import BookingStoreError
from booking_analytics.repositories.base import BookingStore

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    store: str | None = None


def get_booking_store() -> BookingStore:
    """Dependency for the booking store - injected at app level."""
    raise NotImplementedError("Must be overridden by dependency_overrides")


@router.get("", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    """Liveness; does not touch the booking store."""
    return HealthResponse(status="healthy")


@router.get("/store", response_model=HealthResponse)
async def store_health(
    store: Annotated[BookingStore, Depends(get_booking_store)],
) -> JSONResponse:
    """Readiness: 200 when the service catalog can be read, 503 otherwise."""
    try:
        await store.find_services()
    except BookingStoreError as exc:
        logger.warning("Booking store health check failed", error=str(exc))
        body = HealthResponse(status="degraded", store="disconnected")
        return JSONResponse(status_code=503, content=body.model_dump())
    return JSONResponse(content=HealthResponse(status="healthy", store="connected").model_dump())
