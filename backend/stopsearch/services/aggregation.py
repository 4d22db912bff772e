"""Chart and summary aggregations over filtered records."""

from collections import Counter
from collections.abc import Sequence
from datetime import date

from stopsearch.schemas.dashboard import ChartData, ChartDataset, DashboardStats, FilterOptions
from stopsearch.schemas.stop_search import StopSearchRecord
from stopsearch.services.filtering import active_filter_count, parse_record_datetime

# Colors are assigned by position; groups past the tenth get none.
PALETTE = [
    "#3B82F6", "#EF4444", "#10B981", "#F59E0B", "#8B5CF6",
    "#06B6D4", "#84CC16", "#F97316", "#EC4899", "#6366F1",
]
TREND_FILL = "rgba(59, 130, 246, 0.2)"
TREND_LINE = "#3B82F6"


def outcome_chart(records: Sequence[StopSearchRecord]) -> ChartData:
    """Count records per outcome, in the order outcomes are first seen."""
    counts = Counter(record.outcome for record in records)
    labels = list(counts)
    colors = PALETTE[: len(labels)]

    return ChartData(
        labels=labels,
        datasets=[
            ChartDataset(
                label="Number of Searches",
                data=[counts[label] for label in labels],
                background_color=colors,
                border_color=list(colors),
                border_width=1,
            )
        ],
    )


def _month_span(first: date, last: date) -> list[date]:
    """Every first-of-month from ``first`` to ``last`` inclusive."""
    months = []
    year, month = first.year, first.month
    while (year, month) <= (last.year, last.month):
        months.append(date(year, month, 1))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return months


def monthly_trend_chart(records: Sequence[StopSearchRecord]) -> ChartData:
    """
    Count records per calendar month as a gap-free series.

    Months between the earliest and latest record with no searches are
    included with a count of zero. Records with unparseable timestamps are
    left out.
    """
    counts: Counter[date] = Counter()
    for record in records:
        recorded_at = parse_record_datetime(record.datetime)
        if recorded_at is not None:
            counts[date(recorded_at.year, recorded_at.month, 1)] += 1

    months = _month_span(min(counts), max(counts)) if counts else []

    return ChartData(
        labels=[month.strftime("%b %Y") for month in months],
        datasets=[
            ChartDataset(
                label="Searches per Month",
                data=[counts[month] for month in months],
                background_color=[TREND_FILL],
                border_color=[TREND_LINE],
                border_width=2,
            )
        ],
    )


def dashboard_stats(
    records: Sequence[StopSearchRecord], filters: FilterOptions | None = None
) -> DashboardStats:
    """Headline totals and arrest rate for the filtered records."""
    total = len(records)
    arrests = sum(1 for record in records if "Arrest" in record.outcome)
    arrest_rate = round(arrests / total * 100, 1) if total else 0.0

    timestamps = [
        parsed for record in records if (parsed := parse_record_datetime(record.datetime))
    ]

    return DashboardStats(
        total_searches=total,
        arrest_count=arrests,
        arrest_rate=arrest_rate,
        earliest=min(timestamps).isoformat() if timestamps else None,
        latest=max(timestamps).isoformat() if timestamps else None,
        active_filters=active_filter_count(filters) if filters else 0,
    )
