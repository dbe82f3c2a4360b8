"""
Scalar Aggregator
Counts, rates and averages over a filtered record set
"""
from typing import Iterable, Optional, Sequence, Union

from app.domain.models.call_record import AnalysisRecord, CallRecord
from app.domain.models.view_model import NOT_AVAILABLE, AnalysisStats, CallStats
from app.domain.services.frequency_aggregator import TOP_K, count_labels, top_indicators
from app.domain.services.status_classifier import classify_sentiment, is_successful


def average_duration(records: Sequence[CallRecord]) -> float:
    """Mean call duration in seconds; unknown durations count as 0."""
    if not records:
        return 0.0
    total_seconds = sum(record.call_duration or 0 for record in records)
    return total_seconds / len(records)


def success_rate(successful: int, total: int) -> float:
    """Successful calls as a percentage of all calls (0 when there are none)."""
    if total <= 0:
        return 0.0
    return successful / total * 100


def average_confidence(scores: Iterable[Optional[float]]) -> Union[float, str]:
    """Mean of the non-null scores, or NOT_AVAILABLE when there are none."""
    present = [score for score in scores if score is not None]
    if not present:
        return NOT_AVAILABLE
    return sum(present) / len(present)


def compute_call_stats(records: Sequence[CallRecord]) -> CallStats:
    """Dashboard card statistics, computed together from one record set."""
    total = len(records)
    successful = sum(1 for record in records if is_successful(record.analysis))
    return CallStats(
        total=total,
        average_duration=average_duration(records),
        successful_count=successful,
        success_rate=success_rate(successful, total),
    )


def compute_analysis_stats(
    analyses: Sequence[AnalysisRecord],
    top_k: int = TOP_K
) -> AnalysisStats:
    """Analytics page statistics, computed together from one analysis set."""
    return AnalysisStats(
        total=len(analyses),
        sentiment_counts=count_labels(
            classify_sentiment(a.sentiment).value for a in analyses
        ),
        total_sentiments=sum(1 for a in analyses if a.sentiment),
        average_confidence=average_confidence(a.agent_confidence for a in analyses),
        top_positive_indicators=top_indicators((a.positive_indicators for a in analyses), top_k),
        top_negative_indicators=top_indicators((a.negative_indicators for a in analyses), top_k),
        top_buying_signals=top_indicators((a.buying_signals for a in analyses), top_k),
    )
