"""Health endpoint with collection status."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from stopsearch.dependencies import get_dashboard
from stopsearch.schemas.dashboard import ErrorKind, MonthStatus
from stopsearch.schemas.stop_search import CamelModel
from stopsearch.services.dashboard import Dashboard

router = APIRouter(tags=["health"])


class HealthResponse(CamelModel):
    """Health check response."""

    status: str
    timestamp: datetime
    record_count: int
    last_refresh: datetime | None = None
    refreshing: bool = False
    error: str | None = None
    error_kind: ErrorKind | None = None
    months: list[MonthStatus] = []


@router.get("/health", response_model=HealthResponse)
async def health_check(
    dashboard: Annotated[Dashboard, Depends(get_dashboard)],
) -> HealthResponse:
    """
    Health check endpoint with collection status.

    Reports the record count, last successful refresh and how each month
    fared, so months that failed can be told apart from empty ones.
    """
    status = "healthy" if dashboard.error is None else "degraded"

    return HealthResponse(
        status=status,
        timestamp=datetime.now(UTC),
        record_count=len(dashboard.records),
        last_refresh=dashboard.last_updated,
        refreshing=dashboard.is_loading,
        error=dashboard.error,
        error_kind=dashboard.error_kind,
        months=dashboard.months,
    )
