"""Sequential, throttled collection of monthly stop and search records."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from stopsearch.config import get_settings
from stopsearch.schemas.dashboard import CollectionResult, ErrorKind, MonthStatus
from stopsearch.schemas.stop_search import StopSearchRecord
from stopsearch.services.discovery import discover_available_months, recent_months
from stopsearch.services.normalizer import is_well_formed, normalize_record
from stopsearch.services.police_client import (
    NoDataAvailable,
    PoliceAPIClient,
    PoliceAPIError,
    UpstreamRateLimited,
    UpstreamTimeout,
)

logger = logging.getLogger(__name__)
settings = get_settings()

NO_DATES_ERROR = "No available dates found"


def error_kind_for(exc: PoliceAPIError) -> ErrorKind:
    """Classify an upstream failure so callers can tailor the retry message."""
    if isinstance(exc, NoDataAvailable):
        return "no_data"
    if isinstance(exc, UpstreamRateLimited):
        return "rate_limited"
    if isinstance(exc, UpstreamTimeout):
        return "timeout"
    return "upstream"


class ThrottledCollector:
    """
    Fetch monthly batches one at a time with a fixed delay between requests.

    Features:
    - Strictly sequential requests to stay under the upstream rate limit
    - Fixed inter-request delay that does not change on error
    - A failed month is logged and skipped, never aborting the run
    """

    def __init__(
        self,
        client: PoliceAPIClient | None = None,
        force: str = settings.force,
        delay_seconds: float = settings.request_delay_seconds,
        timeout: float = settings.request_timeout_seconds,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client or PoliceAPIClient()
        self.force = force
        self.delay_seconds = delay_seconds
        self.timeout = timeout
        self._sleep = sleep

    async def _collect_month(self, month: str) -> tuple[list[StopSearchRecord], MonthStatus]:
        """Fetch and normalize one month. Upstream failures become a failed status."""
        try:
            raw_records = await self.client.fetch_stop_searches(
                month, force=self.force, timeout=self.timeout
            )
        except (PoliceAPIError, ValueError) as e:
            logger.warning(f"Failed to fetch data for {month}: {e}")
            return [], MonthStatus(month=month, status="failed", detail=str(e))

        records = [normalize_record(raw) for raw in raw_records if is_well_formed(raw)]
        dropped = len(raw_records) - len(records)
        if dropped:
            logger.info(f"Dropped {dropped} malformed records for {month}")

        status = "ok" if records else "empty"
        return records, MonthStatus(month=month, status=status, record_count=len(records))

    async def collect(self, months: Sequence[str]) -> CollectionResult:
        """
        Collect records for each month in order.

        Args:
            months: YYYY-MM months to fetch, typically latest first

        Returns:
            CollectionResult with every record gathered. ``error`` is only set
            when ``months`` is empty or an unexpected exception escapes.
        """
        if not months:
            logger.warning("No months to collect")
            return CollectionResult(error=NO_DATES_ERROR, error_kind="no_data")

        logger.info(f"Collecting {len(months)} months for {self.force}")

        try:
            all_records: list[StopSearchRecord] = []
            statuses: list[MonthStatus] = []

            for i, month in enumerate(months):
                records, status = await self._collect_month(month)
                all_records.extend(records)
                statuses.append(status)

                if i < len(months) - 1:
                    await self._sleep(self.delay_seconds)

        except Exception as e:
            logger.error(f"Collection failed: {e}", exc_info=True)
            return CollectionResult(
                error=str(e) or "An unknown error occurred", error_kind="unexpected"
            )

        failed = sum(1 for s in statuses if s.status == "failed")
        logger.info(
            f"Collected {len(all_records)} records from {len(months)} months ({failed} failed)"
        )
        return CollectionResult(records=all_records, months=statuses)

    async def collect_recent(self, window: int = settings.months_window) -> CollectionResult:
        """
        Discover available months and collect the most recent ``window`` of them.

        Discovery failures are returned as ``error`` rather than raised.
        """
        try:
            available = await discover_available_months(
                self.client, jurisdiction=self.force, timeout=self.timeout
            )
        except PoliceAPIError as e:
            logger.error(f"Error fetching available dates: {e}")
            return CollectionResult(error=str(e), error_kind=error_kind_for(e))

        return await self.collect(recent_months(available, window))
