"""
Unit tests for display formatting helpers
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.domain.services.formatting import (
    format_duration,
    format_percentage,
    format_rate,
    humanize_label,
    time_ago,
)

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("seconds,expected", [
    (0, "0m 0s"),
    (59, "0m 59s"),
    (90, "1m 30s"),
    (754.4, "12m 34s"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_duration_missing():
    assert format_duration(None) == "0m 0s"
    assert format_duration(None, missing="N/A") == "N/A"


def test_format_rate():
    assert format_rate(40) == "40.0%"
    assert format_rate(100 / 3) == "33.3%"


def test_format_percentage():
    assert format_percentage(0.875) == "87.5%"
    assert format_percentage(None) == "N/A"


def test_humanize_label():
    assert humanize_label("asked_about_price") == "Asked About Price"
    assert humanize_label("budget") == "Budget"


@pytest.mark.parametrize("delta,expected", [
    (timedelta(seconds=30), "30 seconds ago"),
    (timedelta(minutes=5), "5 minutes ago"),
    (timedelta(hours=3, minutes=20), "3 hours ago"),
    (timedelta(days=2, hours=1), "2 days ago"),
])
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, NOW) == expected
