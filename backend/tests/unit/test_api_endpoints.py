"""
Tests for the dashboard API endpoints
Record store and view options are replaced through dependency overrides
"""
import os

import pytest

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

from fastapi.testclient import TestClient

from app.api.v1.dependencies import get_record_store, get_view_options
from app.domain.models.query import Eq, NotNull
from app.main import app
from app.services.dashboard_views import VIEW_ERRORS, ViewOptions
from conftest import FakeRecordStore, make_analysis, make_call


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_view_options] = lambda: ViewOptions()
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestDashboardEndpoint:
    """Tests for /api/v1/dashboard/summary"""

    def test_summary(self, client, store):
        store.rows = {"call_history": [
            make_call(1, semantic_analysis=[{"alert_status": "ok", "sentiment": "positive"}]),
            make_call(2, semantic_analysis=[{"alert_status": "warning", "sentiment": "negative"}]),
            make_call(3, call_duration=None, disconnection_reason="dial_no-answer"),
            make_call(4),
        ]}
        store.counts = {"call_history": 2}

        response = client.get("/api/v1/dashboard/summary", params={"range": "7d"})

        assert response.status_code == 200
        data = response.json()
        assert data["stats"]["total"] == 4
        assert data["stats"]["successful_count"] == 1
        assert data["stats"]["success_rate"] == 25.0
        assert data["stats"]["average_duration"] == 45.0
        assert data["meetings_in_period"] == 2
        assert data["loading"] is False
        assert data["error"] is None
        assert [r["status"] for r in data["records"]] == ["completed", "completed", "missed", "completed"]
        assert data["records"][0]["sentiment"] == "positive"

    def test_defaults_to_today(self, client, store):
        response = client.get("/api/v1/dashboard/summary")

        assert response.status_code == 200
        assert len(store.queries[0].predicates) == 2

    def test_unsupported_range_rejected(self, client):
        response = client.get("/api/v1/dashboard/summary", params={"range": "90d"})
        assert response.status_code == 422

    def test_store_failure(self, client, store):
        store.fail_with = "connection refused"

        response = client.get("/api/v1/dashboard/summary")

        assert response.status_code == 502
        assert response.json()["detail"] == VIEW_ERRORS["dashboard"]


class TestConversationsEndpoint:
    """Tests for /api/v1/conversations/"""

    def test_list(self, client, store):
        store.rows = {"call_history": [make_call(7, transcript="Hi there")]}

        response = client.get("/api/v1/conversations/", params={"recipient": "555"})

        assert response.status_code == 200
        row = response.json()["records"][0]
        assert row["call"]["id"] == 7
        assert row["outcome"] == "completed"
        assert row["has_transcript"] is True
        assert row["duration"] == "1m 0s"

    def test_store_failure(self, client, store):
        store.fail_with = "boom"

        response = client.get("/api/v1/conversations/")

        assert response.status_code == 502
        assert "Supabase configuration" in response.json()["detail"]


class TestMeetingsEndpoint:
    """Tests for /api/v1/meetings/"""

    def test_list(self, client, store):
        store.rows = {"call_history": [
            {"id": 3, "name": "Lee", "recipient_number": "+15550003", "tour_date": "2024-06-01"},
        ]}

        response = client.get("/api/v1/meetings/", params={"search": "lee"})

        assert response.status_code == 200
        assert response.json()["records"][0]["tour_date"] == "2024-06-01"
        assert store.queries[0].predicates[0] == NotNull("tour_date")


class TestAnalysesEndpoint:
    """Tests for /api/v1/analyses/"""

    def test_list_with_filters(self, client, store):
        store.rows = {"semantic_analysis": [
            make_analysis(11, positive_indicators=["friendly_tone"]),
        ]}

        response = client.get("/api/v1/analyses/", params={"call_id": "11", "sentiment": "positive"})

        assert response.status_code == 200
        row = response.json()["records"][0]
        assert row["sentiment"] == "positive"
        assert row["agent_confidence"] == "90.0%"
        assert row["positive_indicators"] == ["Friendly Tone"]
        assert row["analysis"]["positive_indicators"] == ["friendly_tone"]
        assert store.queries[0].predicates[:2] == (Eq("call_id", 11), Eq("sentiment", "positive"))

    def test_non_numeric_call_id_is_ignored(self, client, store):
        response = client.get("/api/v1/analyses/", params={"call_id": "abc"})

        assert response.status_code == 200
        assert store.queries[0].predicates == ()


class TestAnalyticsEndpoint:
    """Tests for /api/v1/analytics/summary"""

    def test_empty(self, client):
        response = client.get("/api/v1/analytics/summary", params={"range": "30d"})

        assert response.status_code == 200
        data = response.json()
        assert data["records"] == []
        assert data["stats"] is None

    def test_summary(self, client, store):
        store.rows = {"semantic_analysis": [
            make_analysis(1, agent_confidence=0.5, buying_signals={"asked_price": True}),
            make_analysis(2, agent_confidence=None, buying_signals=["asked_price", "asked_tour"]),
        ]}

        response = client.get("/api/v1/analytics/summary")

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total"] == 2
        assert stats["average_confidence"] == 0.5
        assert stats["top_buying_signals"] == [
            {"label": "asked_price", "count": 2},
            {"label": "asked_tour", "count": 1},
        ]

    def test_store_failure(self, client, store):
        store.fail_with = "boom"

        response = client.get("/api/v1/analytics/summary", params={"range": "all"})

        assert response.status_code == 502
        assert response.json()["detail"] == VIEW_ERRORS["analytics"]
