"""Domain models"""

# Stored records
from .call_record import (
    Sentiment,
    AlertLevel,
    CallOutcome,
    AnalysisRecord,
    CallRecord,
)

from .indicators import (
    IndicatorKind,
    IndicatorCollection,
)

# Filter state
from .filters import (
    DateRange,
    FilterState,
    DashboardFilters,
    ConversationFilters,
    MeetingFilters,
    AnalysisFilters,
    AnalyticsFilters,
)

# Queries
from .query import (
    Eq,
    Gte,
    Lte,
    ILike,
    AnyOf,
    NotNull,
    QuerySpec,
)

# View models
from .view_model import (
    NOT_AVAILABLE,
    FrequencyEntry,
    CallStats,
    AnalysisStats,
    RecentCall,
    ConversationRow,
    MeetingRow,
    AnalysisRow,
    ViewModel,
)

__all__ = [
    # Stored records
    "Sentiment",
    "AlertLevel",
    "CallOutcome",
    "AnalysisRecord",
    "CallRecord",
    "IndicatorKind",
    "IndicatorCollection",
    # Filter state
    "DateRange",
    "FilterState",
    "DashboardFilters",
    "ConversationFilters",
    "MeetingFilters",
    "AnalysisFilters",
    "AnalyticsFilters",
    # Queries
    "Eq",
    "Gte",
    "Lte",
    "ILike",
    "AnyOf",
    "NotNull",
    "QuerySpec",
    # View models
    "NOT_AVAILABLE",
    "FrequencyEntry",
    "CallStats",
    "AnalysisStats",
    "RecentCall",
    "ConversationRow",
    "MeetingRow",
    "AnalysisRow",
    "ViewModel",
]
