"""
Unit tests for the scalar aggregator
"""
import pytest

from app.domain.models.call_record import AnalysisRecord, CallRecord
from app.domain.models.view_model import NOT_AVAILABLE
from app.domain.services.scalar_aggregator import (
    average_confidence,
    average_duration,
    compute_analysis_stats,
    compute_call_stats,
    success_rate,
)
from conftest import make_analysis, make_call


def calls(*rows):
    return [CallRecord.model_validate(row) for row in rows]


class TestAverageDuration:
    def test_empty(self):
        assert average_duration([]) == 0.0

    def test_unknown_duration_counts_as_zero(self):
        records = calls(
            make_call(1, call_duration=30),
            make_call(2, call_duration=None),
            make_call(3, call_duration=90),
        )

        assert average_duration(records) == 40.0


class TestSuccessRate:
    def test_empty_total(self):
        assert success_rate(0, 0) == 0.0

    def test_percentage_full_precision(self):
        assert success_rate(1, 3) == pytest.approx(33.3333, rel=1e-4)
        assert success_rate(4, 10) == 40.0


class TestAverageConfidence:
    def test_no_scores_is_not_available(self):
        """An empty set is reported explicitly rather than as zero"""
        assert average_confidence([]) == NOT_AVAILABLE
        assert average_confidence([None, None]) == NOT_AVAILABLE

    def test_ignores_missing_scores(self):
        assert average_confidence([0.5, None, 1.0]) == 0.75


class TestCallStats:
    def test_empty(self):
        stats = compute_call_stats([])

        assert stats.total == 0
        assert stats.average_duration == 0.0
        assert stats.successful_count == 0
        assert stats.success_rate == 0.0

    def test_ten_calls_six_analyzed(self):
        """Unanalyzed calls count in the total but are never successful"""
        rows = []
        alerts = ["ok", "ok", "ok", "ok", "warning", "warning"]
        for i in range(1, 11):
            analysis = None
            if i <= len(alerts):
                analysis = [{"alert_status": alerts[i - 1], "sentiment": "positive"}]
            rows.append(make_call(i, semantic_analysis=analysis))

        stats = compute_call_stats(calls(*rows))

        assert stats.total == 10
        assert stats.successful_count == 4
        assert stats.success_rate == 40.0
        assert stats.average_duration == 60.0

    def test_error_alert_is_not_successful(self):
        stats = compute_call_stats(calls(
            make_call(1, semantic_analysis={"alert_status": "ERROR"}),
            make_call(2, semantic_analysis={"alert_status": "ok"}),
        ))

        assert stats.successful_count == 1
        assert stats.success_rate == 50.0


class TestAnalysisStats:
    def test_rollup(self):
        analyses = [
            AnalysisRecord.model_validate(make_analysis(
                1, sentiment="Positive", agent_confidence=0.6,
                positive_indicators=["friendly", "interested"],
                buying_signals={"asked_price": True},
            )),
            AnalysisRecord.model_validate(make_analysis(
                2, sentiment="negative", agent_confidence=None,
                positive_indicators="interested",
                negative_indicators=["price"],
            )),
            AnalysisRecord.model_validate(make_analysis(
                3, sentiment=None, agent_confidence=0.8,
            )),
        ]

        stats = compute_analysis_stats(analyses)

        assert stats.total == 3
        assert stats.sentiment_counts == {"positive": 1, "negative": 1, "unknown": 1}
        assert stats.total_sentiments == 2
        assert stats.average_confidence == pytest.approx(0.7)
        assert [(e.label, e.count) for e in stats.top_positive_indicators] == [
            ("interested", 2), ("friendly", 1),
        ]
        assert [e.label for e in stats.top_negative_indicators] == ["price"]
        assert [e.label for e in stats.top_buying_signals] == ["asked_price"]

    def test_no_confidence_scores(self):
        stats = compute_analysis_stats([
            AnalysisRecord.model_validate(make_analysis(1, agent_confidence=None)),
        ])

        assert stats.average_confidence == NOT_AVAILABLE
