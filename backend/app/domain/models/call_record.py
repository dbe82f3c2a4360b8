"""
Call Record Domain Models
Read-only views of the call_history and semantic_analysis tables
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.domain.models.indicators import IndicatorCollection


class Sentiment(str, Enum):
    """Sentiment taxonomy"""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    UNKNOWN = "unknown"


class AlertLevel(str, Enum):
    """Alert status taxonomy"""
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    UNKNOWN = "unknown"


class CallOutcome(str, Enum):
    """Outcome derived from the disconnection reason"""
    COMPLETED = "completed"
    MISSED = "missed"


class AnalysisRecord(BaseModel):
    """
    Semantic analysis of a single call.

    Written by the analysis pipeline; identifier columns are optional
    because joined selects only pull a subset of columns.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    call_id: Optional[int] = None
    created_at: Optional[datetime] = None
    sentiment: Optional[str] = None
    sentiment_score: Optional[float] = Field(None, ge=0.0, le=1.0)
    agent_confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    alert_status: Optional[str] = None
    summary: Optional[str] = None
    positive_indicators: IndicatorCollection = Field(default_factory=IndicatorCollection)
    negative_indicators: IndicatorCollection = Field(default_factory=IndicatorCollection)
    buying_signals: IndicatorCollection = Field(default_factory=IndicatorCollection)

    @field_validator(
        "positive_indicators", "negative_indicators", "buying_signals",
        mode="before"
    )
    @classmethod
    def _tag_indicators(cls, value: Any) -> IndicatorCollection:
        return IndicatorCollection.from_json(value)


class CallRecord(BaseModel):
    """Call made by the voice agent (call_history row)"""
    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime
    recipient_number: Optional[str] = None
    name: Optional[str] = None
    call_duration: Optional[int] = Field(None, ge=0, description="Seconds; None means unknown")
    disconnection_reason: Optional[str] = None
    recording_url: Optional[str] = None
    transcript: Optional[str] = None
    tour_date: Optional[date] = None
    analysis: Optional[AnalysisRecord] = None

    @model_validator(mode="before")
    @classmethod
    def _collapse_join(cls, data: Any) -> Any:
        """
        Reduce the embedded semantic_analysis join to zero-or-one analysis.

        PostgREST returns an embedded resource as an object or as a list
        depending on the detected relationship.
        """
        if not isinstance(data, dict) or "semantic_analysis" not in data:
            return data
        data = dict(data)
        joined = data.pop("semantic_analysis")
        if isinstance(joined, list):
            joined = joined[0] if joined else None
        data.setdefault("analysis", joined)
        return data
