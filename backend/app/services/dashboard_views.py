"""
Dashboard View Loaders
One load per view: build the query, fetch, classify and aggregate into a ViewModel.

Shared by the stateful view controllers and the stateless HTTP endpoints.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.core.config import ConfigManager
from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.call_record import AnalysisRecord, CallRecord
from app.domain.models.filters import (
    AnalysisFilters,
    AnalyticsFilters,
    ConversationFilters,
    DashboardFilters,
    MeetingFilters,
)
from app.domain.models.view_model import (
    AnalysisRow,
    AnalysisStats,
    CallStats,
    ConversationRow,
    MeetingRow,
    RecentCall,
    ViewModel,
)
from app.domain.services import predicate_builder
from app.domain.services.date_window import local_now, resolve_zone
from app.domain.services.formatting import (
    format_duration,
    format_percentage,
    humanize_label,
    time_ago,
)
from app.domain.services.frequency_aggregator import TOP_K, normalize_indicators
from app.domain.services.scalar_aggregator import compute_analysis_stats, compute_call_stats
from app.domain.services.status_classifier import (
    classify_alert,
    classify_outcome,
    classify_sentiment,
)

logger = logging.getLogger(__name__)

# User-facing messages per view
VIEW_ERRORS = {
    "dashboard": "Failed to load dashboard data. Please try again later.",
    "conversations": "Failed to load conversations. Please check your connection and Supabase configuration.",
    "meetings": "Failed to load scheduled meetings.",
    "analyses": "Failed to load analysis data.",
    "analytics": "Failed to load analytics data.",
}

DashboardView = ViewModel[RecentCall, CallStats]
ConversationsView = ViewModel[ConversationRow, Any]
MeetingsView = ViewModel[MeetingRow, Any]
AnalysesView = ViewModel[AnalysisRow, Any]
AnalyticsView = ViewModel[AnalysisRecord, AnalysisStats]


@dataclass(frozen=True)
class ViewOptions:
    """Per-deployment knobs for the dashboard views."""
    calls_table: str = predicate_builder.CALLS_TABLE
    analyses_table: str = predicate_builder.ANALYSES_TABLE
    top_k: int = TOP_K
    recent_calls_limit: int = 5
    debounce_ms: int = 500
    timezone: str = ""

    @property
    def zone(self):
        """Zone for local-day bounds; None means the system local zone."""
        return resolve_zone(self.timezone)

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None) -> "ViewOptions":
        config = config or ConfigManager()
        return cls(
            calls_table=config.get("dashboard.tables.calls", cls.calls_table),
            analyses_table=config.get("dashboard.tables.analyses", cls.analyses_table),
            top_k=int(config.get("dashboard.top_k", cls.top_k)),
            recent_calls_limit=int(config.get("dashboard.recent_calls_limit", cls.recent_calls_limit)),
            debounce_ms=int(config.get("dashboard.debounce_ms", cls.debounce_ms)),
            timezone=config.get("dashboard.timezone") or cls.timezone,
        )


def _parse(model, rows: List[Dict[str, Any]]) -> list:
    """Validate raw rows; a malformed row is reported like a store failure."""
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.error(f"Unexpected {model.__name__} row shape: {e}")
        raise QueryFailure(f"Unexpected {model.__name__} row shape") from e


# ============================================================================
# ROW MAPPERS
# ============================================================================

def to_recent_call(call: CallRecord, now: Optional[datetime] = None) -> RecentCall:
    return RecentCall(
        id=call.id,
        name=call.name or "Unknown Caller",
        recipient_number=call.recipient_number or "Unknown Number",
        duration=format_duration(call.call_duration),
        status=classify_outcome(call.disconnection_reason),
        time_ago=time_ago(call.created_at, now),
        sentiment=call.analysis.sentiment if call.analysis else None,
    )


def to_conversation_row(call: CallRecord) -> ConversationRow:
    return ConversationRow(
        call=call,
        outcome=classify_outcome(call.disconnection_reason),
        duration=format_duration(call.call_duration, missing="N/A"),
        has_recording=bool(call.recording_url),
        has_transcript=bool(call.transcript),
    )


def to_analysis_row(analysis: AnalysisRecord) -> AnalysisRow:
    def labels(collection):
        return [humanize_label(label) for label in normalize_indicators(collection)]

    return AnalysisRow(
        analysis=analysis,
        sentiment=classify_sentiment(analysis.sentiment),
        alert_status=classify_alert(analysis.alert_status),
        sentiment_score=format_percentage(analysis.sentiment_score),
        agent_confidence=format_percentage(analysis.agent_confidence),
        positive_indicators=labels(analysis.positive_indicators),
        negative_indicators=labels(analysis.negative_indicators),
        buying_signals=labels(analysis.buying_signals),
    )


# ============================================================================
# LOADERS
# ============================================================================

async def load_dashboard(
    store: RecordStore,
    filters: DashboardFilters,
    options: ViewOptions = ViewOptions(),
    now: Optional[datetime] = None
) -> DashboardView:
    """
    Dashboard overview: call statistics for the window, the most recent calls
    and the number of meetings scheduled within the window.
    """
    now = now or local_now(options.zone)
    calls_query = predicate_builder.build_dashboard_query(filters, now, table=options.calls_table)
    meetings_query = predicate_builder.build_meetings_count_query(filters, now, table=options.calls_table)

    rows, meetings_in_period = await asyncio.gather(
        store.fetch(calls_query),
        store.count(meetings_query),
    )
    calls = _parse(CallRecord, rows)

    return DashboardView(
        records=[to_recent_call(call, now) for call in calls[:options.recent_calls_limit]],
        stats=compute_call_stats(calls),
        meetings_in_period=meetings_in_period,
        generated_at=now,
    )


async def load_conversations(
    store: RecordStore,
    filters: ConversationFilters,
    options: ViewOptions = ViewOptions()
) -> ConversationsView:
    rows = await store.fetch(
        predicate_builder.build_conversations_query(
            filters, table=options.calls_table, tzinfo=options.zone
        )
    )
    calls = _parse(CallRecord, rows)
    return ConversationsView(
        records=[to_conversation_row(call) for call in calls],
        generated_at=local_now(options.zone),
    )


async def load_meetings(
    store: RecordStore,
    filters: MeetingFilters,
    options: ViewOptions = ViewOptions()
) -> MeetingsView:
    rows = await store.fetch(
        predicate_builder.build_meetings_query(filters, table=options.calls_table)
    )
    return MeetingsView(records=_parse(MeetingRow, rows), generated_at=local_now(options.zone))


async def load_analyses(
    store: RecordStore,
    filters: AnalysisFilters,
    options: ViewOptions = ViewOptions()
) -> AnalysesView:
    rows = await store.fetch(
        predicate_builder.build_analyses_query(
            filters, table=options.analyses_table, tzinfo=options.zone
        )
    )
    analyses = _parse(AnalysisRecord, rows)
    return AnalysesView(
        records=[to_analysis_row(analysis) for analysis in analyses],
        generated_at=local_now(options.zone),
    )


async def load_analytics(
    store: RecordStore,
    filters: AnalyticsFilters,
    options: ViewOptions = ViewOptions(),
    now: Optional[datetime] = None
) -> AnalyticsView:
    """Analytics rollup; stats are None when no analysis falls in the window."""
    now = now or local_now(options.zone)
    rows = await store.fetch(
        predicate_builder.build_analytics_query(filters, now, table=options.analyses_table)
    )
    analyses = _parse(AnalysisRecord, rows)
    stats = compute_analysis_stats(analyses, options.top_k) if analyses else None
    return AnalyticsView(records=analyses, stats=stats, generated_at=now)
