"""API routes proxying data.police.uk availability and monthly records."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from stopsearch.config import get_settings
from stopsearch.dependencies import get_police_client
from stopsearch.schemas.dashboard import AvailableDates
from stopsearch.schemas.stop_search import StopSearchRecord
from stopsearch.services.discovery import discover_available_months
from stopsearch.services.normalizer import is_well_formed, normalize_record
from stopsearch.services.police_client import MONTH_PATTERN, PoliceAPIClient

settings = get_settings()
router = APIRouter(tags=["stop-searches"])


@router.get("/available-dates", response_model=AvailableDates)
async def available_dates(
    response: Response,
    client: Annotated[PoliceAPIClient, Depends(get_police_client)],
) -> AvailableDates:
    """
    List months with published stop and search data for the configured force.

    Latest month first. Responds 404 when the force has no data at all.
    """
    result = await discover_available_months(client)
    response.headers["Cache-Control"] = settings.cache_control
    return result


@router.get("/stop-searches", response_model=list[StopSearchRecord])
async def stop_searches_for_month(
    response: Response,
    client: Annotated[PoliceAPIClient, Depends(get_police_client)],
    date: str = Query(..., pattern=MONTH_PATTERN.pattern, description="Month in YYYY-MM format"),
) -> list[StopSearchRecord]:
    """Normalized stop and search records for one month."""
    raw_records = await client.fetch_stop_searches(date, force=settings.force)
    response.headers["Cache-Control"] = settings.cache_control
    return [normalize_record(raw) for raw in raw_records if is_well_formed(raw)]
