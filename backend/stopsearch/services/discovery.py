"""Discover which months have published stop and search data."""

import logging
from collections.abc import Mapping

from stopsearch.config import get_settings
from stopsearch.schemas.dashboard import AvailableDates
from stopsearch.services.police_client import (
    NoDataAvailable,
    PoliceAPIClient,
    validate_month,
)

logger = logging.getLogger(__name__)
settings = get_settings()


async def discover_available_months(
    client: PoliceAPIClient,
    jurisdiction: str = settings.force,
    category: str = settings.dates_category,
    timeout: float | None = None,
) -> AvailableDates:
    """
    Find the months with data for a force, latest first.

    Args:
        client: Upstream API client
        jurisdiction: Force tag to look for, e.g. "metropolitan"
        category: Key of the tag list in each entry, e.g. "stop-and-search"
        timeout: Deadline for the single upstream request

    Raises:
        NoDataAvailable: No month lists the force under the category
        UpstreamRateLimited, UpstreamTimeout, UpstreamError: the request failed
    """
    entries = await client.fetch_available_dates(timeout=timeout)

    months: list[str] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        month = entry.get("date")
        tags = entry.get(category) or []
        if isinstance(month, str) and validate_month(month) and jurisdiction in tags:
            months.append(month)

    # YYYY-MM sorts lexicographically in date order
    months.sort(reverse=True)

    if not months:
        raise NoDataAvailable(f"No {jurisdiction} {category} data available")

    logger.info(f"Found {len(months)} months for {jurisdiction}: {months[-1]} to {months[0]}")
    return AvailableDates.from_dates(months)


def recent_months(dates: AvailableDates | list[str], window: int = settings.months_window) -> list[str]:
    """Most recent ``window`` months from a descending month list."""
    if isinstance(dates, AvailableDates):
        dates = dates.dates
    return list(dates[:window])
