"""Session state for the stop and search dashboard."""

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from stopsearch.config import get_settings
from stopsearch.schemas.dashboard import (
    CollectionResult,
    DashboardView,
    ErrorKind,
    FilterOptions,
    MonthStatus,
    PaginationState,
)
from stopsearch.schemas.stop_search import StopSearchRecord
from stopsearch.services.aggregation import dashboard_stats, monthly_trend_chart, outcome_chart
from stopsearch.services.collector import ThrottledCollector
from stopsearch.services.filtering import filter_records, search_type_values
from stopsearch.services.pagination import paginate

logger = logging.getLogger(__name__)
settings = get_settings()


class RefreshInProgress(Exception):
    """A refresh was requested while another one is still collecting."""

    pass


class Dashboard:
    """
    Holds the canonical record collection plus filter and pagination state.

    State transitions:
    - replacing the collection or the filters resets the current page to 1
      and recomputes the total item count
    - changing the page size resets the current page to 1
    - at most one refresh runs at a time; overlapping requests are rejected
    """

    def __init__(
        self,
        collector: ThrottledCollector | None = None,
        items_per_page: int = settings.items_per_page,
    ):
        self.collector = collector or ThrottledCollector()
        self.filters = FilterOptions()
        self.pagination = PaginationState(items_per_page=items_per_page)
        self.last_updated: datetime | None = None
        self.error: str | None = None
        self.error_kind: ErrorKind | None = None
        self.months: list[MonthStatus] = []

        self._records: list[StopSearchRecord] = []
        self._filtered: list[StopSearchRecord] = []
        self._refresh_lock = asyncio.Lock()

    @property
    def records(self) -> list[StopSearchRecord]:
        return self._records

    @property
    def filtered_records(self) -> list[StopSearchRecord]:
        return self._filtered

    @property
    def is_loading(self) -> bool:
        return self._refresh_lock.locked()

    def _reset_view(self) -> None:
        self._filtered = filter_records(self._records, self.filters)
        self.pagination = PaginationState(
            current_page=1,
            items_per_page=self.pagination.items_per_page,
            total_items=len(self._filtered),
        )

    def replace_records(self, records: Iterable[StopSearchRecord]) -> None:
        """Swap in a new collection wholesale."""
        self._records = list(records)
        self._reset_view()

    def set_filters(self, filters: FilterOptions) -> None:
        self.filters = filters
        self._reset_view()

    def set_page(self, page: int) -> None:
        """Move to ``page``. Pages past the end are allowed and render empty."""
        self.pagination = self.pagination.model_copy(update={"current_page": max(1, page)})

    def set_items_per_page(self, items_per_page: int) -> None:
        if items_per_page <= 0:
            raise ValueError("items_per_page must be positive")
        self.pagination = self.pagination.model_copy(
            update={"items_per_page": items_per_page, "current_page": 1}
        )

    def page_records(self) -> list[StopSearchRecord]:
        return paginate(
            self._filtered, self.pagination.current_page, self.pagination.items_per_page
        )

    async def refresh(self) -> CollectionResult:
        """
        Rebuild the collection from the upstream API.

        On error the previous collection is kept and ``error`` and
        ``error_kind`` are set.

        Raises:
            RefreshInProgress: another refresh has not finished yet
        """
        if self._refresh_lock.locked():
            raise RefreshInProgress("A refresh is already in progress")

        async with self._refresh_lock:
            logger.info("Refreshing stop and search data")
            result = await self.collector.collect_recent()

            if result.error:
                logger.error(f"Refresh failed: {result.error}")
                self.error = result.error
                self.error_kind = result.error_kind
                return result

            self.error = None
            self.error_kind = None
            self.months = result.months
            self.last_updated = datetime.now(UTC)
            self.replace_records(result.records)
            logger.info(f"Refresh complete: {len(self._records)} records")

        return result

    def view(self) -> DashboardView:
        """Snapshot of the current page, charts and stats."""
        return DashboardView(
            filters=self.filters,
            pagination=self.pagination,
            records=self.page_records(),
            outcome_chart=outcome_chart(self._filtered),
            trend_chart=monthly_trend_chart(self._filtered),
            stats=dashboard_stats(self._filtered, self.filters),
            search_types=search_type_values(self._records),
            last_updated=self.last_updated,
            error=self.error,
            error_kind=self.error_kind,
            is_loading=self.is_loading,
        )
