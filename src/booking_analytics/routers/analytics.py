"""Analytics business endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from booking_analytics.filters import AnalyticsFilters
from booking_analytics.models import AnalyticsResult
from booking_analytics.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])

# Filters arrive as raw strings and are parsed permissively: a malformed
# value drops that filter instead of failing the request.
ListParam = Annotated[str | None, Query(description="Comma separated list")]


def get_analytics_service() -> AnalyticsService:
    """Dependency for analytics service - injected at app level."""
    raise NotImplementedError("Must be overridden by dependency_overrides")


@router.get("/{establishment_id}", response_model=AnalyticsResult)
async def get_analytics(
    establishment_id: Annotated[int, Path(description="Establishment id")],
    service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    start_date: Annotated[str | None, Query(alias="startDate", description="YYYY-MM-DD, inclusive")] = None,
    end_date: Annotated[str | None, Query(alias="endDate", description="YYYY-MM-DD, inclusive")] = None,
    months: ListParam = None,
    year: Annotated[str | None, Query(description="Year; combined with months when both given")] = None,
    employees: ListParam = None,
    services: ListParam = None,
    statuses: ListParam = None,
    weekdays: Annotated[str | None, Query(description="Comma separated, 0 = Sunday")] = None,
) -> AnalyticsResult:
    """Revenue, commission, rankings and time series for an establishment."""
    filters = AnalyticsFilters.from_query(
        {
            "startDate": start_date,
            "endDate": end_date,
            "months": months,
            "year": year,
            "employees": employees,
            "services": services,
            "statuses": statuses,
            "weekdays": weekdays,
        }
    )
    return await service.compute_analytics(establishment_id, filters)
