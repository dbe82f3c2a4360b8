"""
Date Window Calculator
Maps symbolic range tokens and date inputs to concrete local-time bounds
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple, Union

import pytz

from app.domain.models.filters import DateRange

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)

ROLLING_DAYS = {
    DateRange.LAST_7_DAYS: 7,
    DateRange.LAST_30_DAYS: 30,
    DateRange.LAST_90_DAYS: 90,
}


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] pair in local wall-clock time."""
    start: datetime
    end: datetime

    def as_dates(self) -> Tuple[date, date]:
        """Inclusive calendar-date bounds, for filtering date (not timestamp) columns."""
        return self.start.date(), self.end.date()


def resolve_zone(name: Optional[str]):
    """
    Look up a named timezone (e.g. "America/New_York").

    Returns None, meaning the system local zone, when the name is empty
    or unknown.
    """
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone {name!r}, using system local time")
        return None


def _has_zone_rules(tzinfo) -> bool:
    # Fixed offsets (what datetime.now().astimezone() yields) know nothing about DST
    return tzinfo is not None and not isinstance(tzinfo, timezone)


def local_now(zone=None) -> datetime:
    """Current instant as a timezone-aware datetime in ``zone`` or system local time."""
    if zone is not None:
        return datetime.now(zone)
    return datetime.now().astimezone()


def localize(wall_clock: datetime, tzinfo=None) -> datetime:
    """
    Attach a naive wall-clock time to a zone, using the UTC offset in force
    on that date.

    pytz zones are localized, other rule-based zones are attached directly,
    and anything else (None or a fixed offset) resolves against the system
    local zone.
    """
    if hasattr(tzinfo, "localize"):
        return tzinfo.localize(wall_clock)
    if _has_zone_rules(tzinfo):
        return wall_clock.replace(tzinfo=tzinfo)
    return wall_clock.astimezone()


def start_of_day(day: date, tzinfo=None) -> datetime:
    return localize(datetime.combine(day, time.min), tzinfo)


def end_of_day(day: date, tzinfo=None) -> datetime:
    return localize(datetime.combine(day, END_OF_DAY), tzinfo)


def day_bounds(day: date, tzinfo=None) -> DateWindow:
    """Whole calendar day: 00:00:00.000 to 23:59:59.999 local time."""
    return DateWindow(start=start_of_day(day, tzinfo), end=end_of_day(day, tzinfo))


def date_window(
    date_range: Union[DateRange, str],
    now: Optional[datetime] = None
) -> Optional[DateWindow]:
    """
    Compute the window for a range token.

    Args:
        date_range: today, 7d, 30d, 90d or all
        now: Evaluation instant (defaults to the local current time). Its zone
            is reused for the bounds only when it carries DST rules.

    Returns:
        DateWindow, or None for "all" (no bound at all)

    Rules:
        today -> local midnight .. 23:59:59.999 of the current date
        Nd    -> local midnight of (today - (N-1) days) .. now
    """
    date_range = DateRange(date_range)
    if date_range == DateRange.ALL:
        return None

    now = now or local_now()
    zone = now.tzinfo if _has_zone_rules(now.tzinfo) else None
    today = now.date() if zone is not None else now.astimezone().date()

    if date_range == DateRange.TODAY:
        return day_bounds(today, zone)

    days = ROLLING_DAYS[date_range]
    first_day = today - timedelta(days=days - 1)
    return DateWindow(start=start_of_day(first_day, zone), end=now)


def parse_date_input(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD date input.

    Returns None for empty or malformed input; callers omit the predicate.
    """
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Ignoring malformed date filter: {value!r}")
        return None
