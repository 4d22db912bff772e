"""Pydantic schemas for API request/response validation."""

from stopsearch.schemas.dashboard import (
    AvailableDates,
    ChartData,
    ChartDataset,
    CollectionResult,
    DashboardStats,
    DashboardView,
    DateRange,
    ErrorKind,
    FilterOptions,
    MonthStatus,
    PaginationState,
)
from stopsearch.schemas.stop_search import (
    NOT_SPECIFIED,
    Location,
    OutcomeObject,
    StopSearchRecord,
    Street,
)

__all__ = [
    "NOT_SPECIFIED",
    "AvailableDates",
    "ChartData",
    "ChartDataset",
    "CollectionResult",
    "DashboardStats",
    "DashboardView",
    "DateRange",
    "ErrorKind",
    "FilterOptions",
    "Location",
    "MonthStatus",
    "OutcomeObject",
    "PaginationState",
    "StopSearchRecord",
    "Street",
]
