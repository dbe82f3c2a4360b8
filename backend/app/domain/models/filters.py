"""
Filter State Models
User-entered criteria per dashboard view; empty string means "no constraint"
"""
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class DateRange(str, Enum):
    """Symbolic date range selector"""
    TODAY = "today"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    ALL = "all"


# Per-view supported range tokens
DashboardRange = Literal["today", "7d", "30d"]
AnalyticsRange = Literal["7d", "30d", "90d", "all"]


class FilterState(BaseModel):
    """Base class for view filter states (immutable, edited via update())"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    def update(self, field: str, value) -> "FilterState":
        """Return a copy with one field replaced."""
        if field not in type(self).model_fields:
            raise KeyError(f"Unknown filter field: {field}")
        return self.model_validate({**self.model_dump(), field: value})


class DashboardFilters(FilterState):
    date_range: DashboardRange = "today"


class ConversationFilters(FilterState):
    recipient: str = ""
    date: str = ""


class MeetingFilters(FilterState):
    search: str = ""
    start_date: str = ""
    end_date: str = ""


class AnalysisFilters(FilterState):
    call_id: str = ""
    sentiment: str = ""
    alert_status: str = ""
    start_date: str = ""
    end_date: str = ""


class AnalyticsFilters(FilterState):
    date_range: AnalyticsRange = "all"
