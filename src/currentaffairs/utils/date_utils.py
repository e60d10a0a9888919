"""Date and time utilities."""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from dateutil import parser as date_parser


def parse_date(date_string: Optional[str]) -> Optional[datetime]:
    """Parse a feed date string into an aware datetime.

    Handles RFC 822 (RSS ``pubDate``), ISO 8601 and the other formats
    ``dateutil`` understands. Naive results are assumed to be UTC.

    Args:
        date_string: Date string to parse

    Returns:
        Parsed datetime or None if parsing fails
    """
    if not date_string:
        return None

    try:
        dt = date_parser.parse(date_string)
    except (ValueError, TypeError, OverflowError):
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt


def now_utc() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Current calendar date in UTC."""
    return now_utc().date()


def start_of_day(day: date) -> datetime:
    """Midnight UTC of ``day``; stable timestamp for date-addressed pages."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def archive_dates(
    end: date,
    days: int = 5,
    business_days_only: bool = True,
) -> List[date]:
    """Dates of an archive window, newest first.

    Walks ``days`` calendar days back from ``end`` (inclusive). For
    business-day sources, Saturdays and Sundays inside that walk are
    skipped rather than replaced, so the window can hold fewer dates.

    Args:
        end: Newest date of the window
        days: Number of calendar days to walk back
        business_days_only: Skip weekend dates

    Returns:
        List of dates, newest first
    """
    window = []
    for offset in range(days):
        day = end - timedelta(days=offset)
        if business_days_only and is_weekend(day):
            continue
        window.append(day)
    return window


def dates_between(start: date, end: date) -> List[date]:
    """Every date from ``end`` back to ``start`` inclusive, newest first."""
    span = (end - start).days
    return [end - timedelta(days=offset) for offset in range(span + 1)]

