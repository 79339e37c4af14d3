"""Date and timestamp parsing utilities."""

import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates and a few relative forms:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "3 days ago"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    match = re.fullmatch(r"(\d+)\s+days?\s+ago", date_str)
    if match:
        return today - timedelta(days=int(match.group(1)))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def timestamp_for_date(day: date, now: Optional[datetime] = None) -> datetime:
    """Return the entry timestamp for a user supplied date.

    Today keeps the current time so the entry sorts above older ones created
    the same day; any other day is pinned to midnight UTC.
    """
    now = now or datetime.now(UTC)
    if day == now.date():
        return now
    return datetime.combine(day, time.min, tzinfo=UTC)


def parse_timestamp(value: Any) -> datetime:
    """Parse a persisted timestamp into a timezone-aware UTC datetime.

    Accepts ISO 8601 strings (date-only strings from older data included)
    and datetime objects. Naive values are assumed to be UTC.

    Raises:
        ValueError: If the value is not a recognizable timestamp
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse timestamp '{value}': {e}")
    else:
        raise ValueError(f"Could not parse timestamp {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp for persistence (ISO 8601, UTC)."""
    return value.astimezone(UTC).isoformat()
