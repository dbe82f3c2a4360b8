"""
Display Formatting
Small presentation helpers shared by the view loaders
"""
import re
from datetime import datetime
from typing import Optional

from app.domain.services.date_window import local_now

_WORD_START = re.compile(r"\b\w")


def format_duration(seconds: Optional[float], missing: str = "0m 0s") -> str:
    """90 -> '1m 30s'; None -> ``missing``."""
    if seconds is None:
        return missing
    minutes = int(seconds // 60)
    remaining = round(seconds % 60)
    return f"{minutes}m {remaining}s"


def format_rate(percentage: float) -> str:
    """Percentage with one decimal place: 40 -> '40.0%'."""
    return f"{percentage:.1f}%"


def format_percentage(fraction: Optional[float]) -> str:
    """Fraction in [0, 1] as a percentage: 0.875 -> '87.5%'."""
    if fraction is None:
        return "N/A"
    return format_rate(fraction * 100)


def humanize_label(label: str) -> str:
    """'buying_signal' -> 'Buying Signal'."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), label.replace("_", " "))


def time_ago(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Relative age in the largest whole unit (seconds up to days)."""
    now = now or local_now()
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()
    seconds = int((now - timestamp).total_seconds())

    if seconds < 60:
        return f"{seconds} seconds ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} minutes ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hours ago"
    return f"{hours // 24} days ago"
