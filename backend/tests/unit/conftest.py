"""
Shared fixtures for unit tests
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from app.domain.interfaces.record_store import QueryFailure, RecordStore
from app.domain.models.query import QuerySpec


class FakeRecordStore(RecordStore):
    """
    In-memory RecordStore.

    Returns canned rows per table and remembers every query it was given.
    A query can be held open with hold() to simulate a slow reply.
    """

    def __init__(
        self,
        rows: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        counts: Optional[Dict[str, int]] = None
    ):
        self.rows = rows or {}
        self.counts = counts or {}
        self.queries: List[QuerySpec] = []
        self.fail_with: Optional[str] = None
        self._gates: List[asyncio.Event] = []

    def hold(self) -> asyncio.Event:
        """Block the next fetch until the returned event is set."""
        gate = asyncio.Event()
        self._gates.append(gate)
        return gate

    async def fetch(self, query: QuerySpec) -> List[Dict[str, Any]]:
        self.queries.append(query)
        fail_with = self.fail_with
        rows = list(self.rows.get(query.table, []))
        if self._gates:
            await self._gates.pop(0).wait()
        if fail_with:
            raise QueryFailure(fail_with)
        return rows

    async def count(self, query: QuerySpec) -> int:
        self.queries.append(query)
        if self.fail_with:
            raise QueryFailure(self.fail_with)
        return self.counts.get(query.table, 0)


LOCAL_TZ = timezone(timedelta(hours=-5))


def make_call(call_id: int, **overrides) -> Dict[str, Any]:
    """call_history row as returned by the store."""
    row = {
        "id": call_id,
        "created_at": datetime(2024, 5, 10, 12, 0, tzinfo=LOCAL_TZ).isoformat(),
        "recipient_number": f"+1555000{call_id:04d}",
        "name": f"Caller {call_id}",
        "call_duration": 60,
        "disconnection_reason": "user_hangup",
        "recording_url": None,
        "transcript": None,
        "tour_date": None,
    }
    row.update(overrides)
    return row


def make_analysis(analysis_id: int, **overrides) -> Dict[str, Any]:
    """semantic_analysis row as returned by the store."""
    row = {
        "id": analysis_id,
        "call_id": analysis_id,
        "created_at": datetime(2024, 5, 10, 12, 5, tzinfo=LOCAL_TZ).isoformat(),
        "sentiment": "positive",
        "sentiment_score": 0.8,
        "agent_confidence": 0.9,
        "alert_status": "ok",
        "summary": "Caller booked a tour.",
        "positive_indicators": None,
        "negative_indicators": None,
        "buying_signals": None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def fake_store():
    return FakeRecordStore()
