"""
Status Classifier
Maps stored labels and disconnection reasons onto the dashboard taxonomy
"""
from typing import Optional

from app.domain.models.call_record import AlertLevel, AnalysisRecord, CallOutcome, Sentiment

# Substrings of a disconnection reason that mark a call as missed
MISSED_MARKERS = ("missed", "no-answer", "failed")

FAILING_ALERTS = frozenset({AlertLevel.WARNING, AlertLevel.ERROR})


def _normalize(label: Optional[str]) -> str:
    return (label or "").strip().lower()


def classify_sentiment(label: Optional[str]) -> Sentiment:
    """Lower-cased stored label; null or unrecognized labels are UNKNOWN."""
    try:
        return Sentiment(_normalize(label))
    except ValueError:
        return Sentiment.UNKNOWN


def classify_alert(label: Optional[str]) -> AlertLevel:
    """Lower-cased stored label; null or unrecognized labels are UNKNOWN."""
    try:
        return AlertLevel(_normalize(label))
    except ValueError:
        return AlertLevel.UNKNOWN


def classify_outcome(disconnection_reason: Optional[str]) -> CallOutcome:
    """
    Derive the call outcome from the free-text disconnection reason.

    No reason at all counts as completed.
    """
    reason = (disconnection_reason or "").lower()
    if any(marker in reason for marker in MISSED_MARKERS):
        return CallOutcome.MISSED
    return CallOutcome.COMPLETED


def is_successful(analysis: Optional[AnalysisRecord]) -> bool:
    """
    A call is successful when it has been analyzed and its alert status is
    neither warning nor error. Unanalyzed calls are never successful.
    """
    if analysis is None:
        return False
    return classify_alert(analysis.alert_status) not in FAILING_ALERTS
