"""Pydantic schemas for dashboard state, charts and collection results."""

from datetime import date, datetime
from math import ceil
from typing import Literal

from pydantic import Field, computed_field

from stopsearch.schemas.stop_search import CamelModel, StopSearchRecord


ErrorKind = Literal["no_data", "rate_limited", "timeout", "upstream", "unexpected"]


class AvailableDates(CamelModel):
    """Months with published data for a force, latest first."""

    dates: list[str] = Field(..., min_length=1)
    total: int
    latest: str
    earliest: str

    @classmethod
    def from_dates(cls, dates: list[str]) -> "AvailableDates":
        return cls(dates=dates, total=len(dates), latest=dates[0], earliest=dates[-1])


class DateRange(CamelModel):
    start: date | None = None
    end: date | None = None


class FilterOptions(CamelModel):
    """Filter criteria. Empty values leave that axis unconstrained."""

    date_range: DateRange = DateRange()
    location: list[str] = Field(default_factory=list)
    search_type: list[str] = Field(default_factory=list)


class PaginationState(CamelModel):
    current_page: int = Field(1, ge=1)
    items_per_page: int = Field(20, gt=0)
    total_items: int = Field(0, ge=0)

    @computed_field
    @property
    def total_pages(self) -> int:
        return max(1, ceil(self.total_items / self.items_per_page))


class ChartDataset(CamelModel):
    label: str
    data: list[int]
    background_color: list[str]
    border_color: list[str]
    border_width: int


class ChartData(CamelModel):
    """Labelled series ready for a bar, pie or line chart."""

    labels: list[str]
    datasets: list[ChartDataset]


class MonthStatus(CamelModel):
    """Outcome of fetching a single month during collection."""

    month: str
    status: Literal["ok", "empty", "failed"]
    record_count: int = 0
    detail: str | None = None


class CollectionResult(CamelModel):
    """Records gathered by a collection run.

    ``error`` is only set when the run could not start (no months) or an
    unexpected failure escaped, and ``error_kind`` says which. Months that
    failed individually are visible in ``months`` but never set ``error``.
    """

    records: list[StopSearchRecord] = Field(default_factory=list)
    error: str | None = None
    error_kind: ErrorKind | None = None
    months: list[MonthStatus] = Field(default_factory=list)


class DashboardStats(CamelModel):
    """Headline figures for the filtered collection."""

    total_searches: int
    arrest_count: int
    arrest_rate: float
    earliest: str | None = None
    latest: str | None = None
    active_filters: int = 0


class DashboardView(CamelModel):
    """Everything the presentation layer needs to render one screen."""

    filters: FilterOptions
    pagination: PaginationState
    records: list[StopSearchRecord]
    outcome_chart: ChartData
    trend_chart: ChartData
    stats: DashboardStats
    search_types: list[str]
    last_updated: datetime | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    is_loading: bool = False
