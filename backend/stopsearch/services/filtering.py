"""In-memory filtering of canonical stop and search records."""

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime, time

from stopsearch.schemas.dashboard import FilterOptions
from stopsearch.schemas.stop_search import StopSearchRecord


def parse_record_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 record timestamp into a naive UTC wall-clock datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _matches_date_range(record: StopSearchRecord, filters: FilterOptions) -> bool:
    start = filters.date_range.start
    end = filters.date_range.end
    # A lone start or end bound is ignored; both are required to constrain.
    if not (start and end):
        return True

    recorded_at = parse_record_datetime(record.datetime)
    if recorded_at is None:
        return False
    return datetime.combine(start, time.min) <= recorded_at <= datetime.combine(end, time.max)


def _matches_location(record: StopSearchRecord, filters: FilterOptions) -> bool:
    if not filters.location:
        return True

    query = filters.location[0].lower().strip()
    # Records without a location only match a blank query.
    street_name = record.location.street.name.lower() if record.location else ""
    return query in street_name


def _matches_search_type(record: StopSearchRecord, filters: FilterOptions) -> bool:
    if not filters.search_type:
        return True
    return record.type in filters.search_type


def filter_records(
    records: Iterable[StopSearchRecord], filters: FilterOptions
) -> list[StopSearchRecord]:
    """
    Apply the date range, location and search type filters.

    All active clauses must match. Relative order of records is preserved.
    """
    return [
        record
        for record in records
        if _matches_date_range(record, filters)
        and _matches_location(record, filters)
        and _matches_search_type(record, filters)
    ]


def search_type_values(records: Sequence[StopSearchRecord]) -> list[str]:
    """Sorted distinct search types, used as filter options."""
    return sorted({record.type for record in records if record.type})


def active_filter_count(filters: FilterOptions) -> int:
    """Count of set filter values: each date bound, location and search type."""
    values = [
        filters.date_range.start,
        filters.date_range.end,
        *filters.location,
        *filters.search_type,
    ]
    return sum(1 for value in values if value)
