"""
Predicate Builder
Maps each view's filter state to a QuerySpec for the record store
"""
import logging
import re
from datetime import datetime
from typing import List, Optional

from app.domain.models.filters import (
    AnalysisFilters,
    AnalyticsFilters,
    ConversationFilters,
    DashboardFilters,
    MeetingFilters,
)
from app.domain.models.query import AnyOf, Eq, Gte, ILike, Lte, NotNull, Predicate, QuerySpec
from app.domain.services.date_window import (
    DateWindow,
    date_window,
    day_bounds,
    local_now,
    parse_date_input,
)

logger = logging.getLogger(__name__)

CALLS_TABLE = "call_history"
ANALYSES_TABLE = "semantic_analysis"

DASHBOARD_COLUMNS = (
    "id, created_at, recipient_number, call_duration, disconnection_reason, name, "
    "semantic_analysis ( alert_status, sentiment )"
)
MEETING_COLUMNS = "id, name, recipient_number, tour_date"

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_int_filter(value: Optional[str]) -> Optional[int]:
    """
    Parse a numeric-id filter input.

    Returns None for empty or non-numeric input so the predicate is omitted.
    """
    if value is None:
        return None
    text = value.strip()
    if not _INT_PATTERN.match(text):
        if text:
            logger.debug(f"Ignoring non-numeric id filter: {value!r}")
        return None
    return int(text)


def window_predicates(column: str, window: Optional[DateWindow]) -> List[Predicate]:
    """gte/lte pair over a timestamp column; nothing for an unbounded window."""
    if window is None:
        return []
    return [
        Gte(column, window.start.isoformat()),
        Lte(column, window.end.isoformat()),
    ]


def date_column_predicates(column: str, window: Optional[DateWindow]) -> List[Predicate]:
    """gte/lte pair over a calendar-date column, expressed as inclusive dates."""
    if window is None:
        return []
    first, last = window.as_dates()
    return [Gte(column, first.isoformat()), Lte(column, last.isoformat())]


def build_conversations_query(
    filters: ConversationFilters,
    table: str = CALLS_TABLE,
    tzinfo=None
) -> QuerySpec:
    """Conversation history: newest first, optional recipient search and day."""
    predicates: List[Predicate] = []

    if filters.recipient:
        predicates.append(ILike("recipient_number", filters.recipient))

    day = parse_date_input(filters.date)
    if day is not None:
        predicates.extend(window_predicates("created_at", day_bounds(day, tzinfo)))

    return QuerySpec(
        table=table,
        predicates=tuple(predicates),
        order_by="created_at",
        descending=True,
    )


def build_meetings_query(
    filters: MeetingFilters,
    table: str = CALLS_TABLE
) -> QuerySpec:
    """Scheduled meetings: only calls with a tour date, soonest first."""
    predicates: List[Predicate] = [NotNull("tour_date")]

    if filters.search:
        predicates.append(AnyOf((
            ILike("name", filters.search),
            ILike("recipient_number", filters.search),
        )))

    start = parse_date_input(filters.start_date)
    if start is not None:
        predicates.append(Gte("tour_date", start.isoformat()))

    end = parse_date_input(filters.end_date)
    if end is not None:
        predicates.append(Lte("tour_date", end.isoformat()))

    return QuerySpec(
        table=table,
        columns=MEETING_COLUMNS,
        predicates=tuple(predicates),
        order_by="tour_date",
        descending=False,
    )


def build_analyses_query(
    filters: AnalysisFilters,
    table: str = ANALYSES_TABLE,
    tzinfo=None
) -> QuerySpec:
    """Semantic analysis table: newest first with id/category/date filters."""
    predicates: List[Predicate] = []

    call_id = parse_int_filter(filters.call_id)
    if call_id is not None:
        predicates.append(Eq("call_id", call_id))

    if filters.sentiment:
        predicates.append(Eq("sentiment", filters.sentiment))

    if filters.alert_status:
        predicates.append(Eq("alert_status", filters.alert_status))

    start = parse_date_input(filters.start_date)
    if start is not None:
        predicates.append(Gte("created_at", day_bounds(start, tzinfo).start.isoformat()))

    end = parse_date_input(filters.end_date)
    if end is not None:
        predicates.append(Lte("created_at", day_bounds(end, tzinfo).end.isoformat()))

    return QuerySpec(
        table=table,
        predicates=tuple(predicates),
        order_by="created_at",
        descending=True,
    )


def build_dashboard_query(
    filters: DashboardFilters,
    now: Optional[datetime] = None,
    table: str = CALLS_TABLE
) -> QuerySpec:
    """Calls in the selected window, with their analysis joined."""
    window = date_window(filters.date_range, now or local_now())
    return QuerySpec(
        table=table,
        columns=DASHBOARD_COLUMNS,
        predicates=tuple(window_predicates("created_at", window)),
        order_by="created_at",
        descending=True,
    )


def build_meetings_count_query(
    filters: DashboardFilters,
    now: Optional[datetime] = None,
    table: str = CALLS_TABLE
) -> QuerySpec:
    """Meetings whose tour date falls inside the dashboard window."""
    window = date_window(filters.date_range, now or local_now())
    return QuerySpec(
        table=table,
        columns="id",
        predicates=tuple(date_column_predicates("tour_date", window)),
    )


def build_analytics_query(
    filters: AnalyticsFilters,
    now: Optional[datetime] = None,
    table: str = ANALYSES_TABLE
) -> QuerySpec:
    """All analyses in the selected window (or all time)."""
    window = date_window(filters.date_range, now or local_now())
    return QuerySpec(
        table=table,
        predicates=tuple(window_predicates("created_at", window)),
        order_by="created_at",
        descending=True,
    )
