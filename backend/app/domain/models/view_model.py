"""
View Model Schemas
Read-only snapshots handed to the rendering layer
"""
from datetime import date, datetime
from typing import Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.models.call_record import (
    AlertLevel,
    AnalysisRecord,
    CallOutcome,
    CallRecord,
    Sentiment,
)

# Explicit "no data" marker for averages over an empty set
NOT_AVAILABLE = "not available"
NotAvailable = Literal["not available"]


class FrequencyEntry(BaseModel):
    """One row of a top-K frequency table"""
    model_config = ConfigDict(frozen=True)

    label: str
    count: int = Field(..., ge=1)


class CallStats(BaseModel):
    """Rollup over a set of calls (dashboard cards)"""
    model_config = ConfigDict(frozen=True)

    total: int = Field(0, ge=0)
    average_duration: float = 0.0
    successful_count: int = Field(0, ge=0)
    success_rate: float = Field(0.0, description="Percentage, full precision")


class AnalysisStats(BaseModel):
    """Rollup over a set of semantic analyses (analytics page)"""
    model_config = ConfigDict(frozen=True)

    total: int = Field(0, ge=0)
    sentiment_counts: Dict[str, int] = Field(default_factory=dict)
    total_sentiments: int = 0
    average_confidence: Union[float, NotAvailable] = NOT_AVAILABLE
    top_positive_indicators: List[FrequencyEntry] = Field(default_factory=list)
    top_negative_indicators: List[FrequencyEntry] = Field(default_factory=list)
    top_buying_signals: List[FrequencyEntry] = Field(default_factory=list)


# ============================================================================
# ROW MODELS
# ============================================================================

class RecentCall(BaseModel):
    """Dashboard recent-call row"""
    id: int
    name: str
    recipient_number: str
    duration: str
    status: CallOutcome
    time_ago: str
    sentiment: Optional[str] = None


class ConversationRow(BaseModel):
    """Conversation history row"""
    call: CallRecord
    outcome: CallOutcome
    duration: str
    has_recording: bool
    has_transcript: bool


class MeetingRow(BaseModel):
    """Scheduled meeting row"""
    id: int
    name: Optional[str] = None
    recipient_number: Optional[str] = None
    tour_date: date


class AnalysisRow(BaseModel):
    """Semantic analysis table row with its detail panel data"""
    analysis: AnalysisRecord
    sentiment: Sentiment
    alert_status: AlertLevel
    sentiment_score: str
    agent_confidence: str
    positive_indicators: List[str] = Field(default_factory=list)
    negative_indicators: List[str] = Field(default_factory=list)
    buying_signals: List[str] = Field(default_factory=list)


RowT = TypeVar("RowT")
StatsT = TypeVar("StatsT")


class ViewModel(BaseModel, Generic[RowT, StatsT]):
    """
    Snapshot of one dashboard view.

    A loading or failed view never exposes records.
    """
    model_config = ConfigDict(frozen=True)

    records: List[RowT] = Field(default_factory=list)
    stats: Optional[StatsT] = None
    loading: bool = False
    error: Optional[str] = None
    generated_at: Optional[datetime] = None

    # View extras
    meetings_in_period: Optional[int] = None
    expanded_id: Optional[int] = None

    @model_validator(mode="after")
    def _records_exclusive(self):
        if (self.loading or self.error is not None) and self.records:
            raise ValueError("loading/error view models cannot carry records")
        return self

    @property
    def is_empty(self) -> bool:
        """True for the "no records match" state (not loading, no error)."""
        return not self.loading and self.error is None and not self.records
