"""Tests for date and timestamp parsing."""

import pytest
from datetime import UTC, date, datetime, timedelta, timezone

from pendit.utils.date_parser import (
    format_timestamp,
    parse_date,
    parse_timestamp,
    timestamp_for_date,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("  Today ") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_days_ago():
    """Test parsing 'N days ago'."""
    assert parse_date("3 days ago") == date.today() - timedelta(days=3)
    assert parse_date("1 day ago") == date.today() - timedelta(days=1)


def test_parse_standard_formats():
    """Test parsing standard date formats."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("2024/01/15") == date(2024, 1, 15)


def test_parse_invalid():
    """Test that unparsable input raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_timestamp_for_today_keeps_time():
    now = datetime(2024, 5, 5, 14, 30, tzinfo=UTC)
    assert timestamp_for_date(date(2024, 5, 5), now=now) == now


def test_timestamp_for_other_day_is_midnight_utc():
    now = datetime(2024, 5, 5, 14, 30, tzinfo=UTC)
    assert timestamp_for_date(date(2024, 5, 1), now=now) == datetime(2024, 5, 1, tzinfo=UTC)


def test_parse_timestamp_iso():
    """Test ISO timestamps, including the Z suffix and offsets."""
    assert parse_timestamp("2024-01-15T09:30:00Z") == datetime(2024, 1, 15, 9, 30, tzinfo=UTC)
    assert parse_timestamp("2024-01-15T11:30:00+02:00") == datetime(2024, 1, 15, 9, 30, tzinfo=UTC)


def test_parse_timestamp_date_only_and_naive():
    """Test date-only strings from older data and naive values become UTC."""
    assert parse_timestamp("2022-01-02") == datetime(2022, 1, 2, tzinfo=UTC)
    assert parse_timestamp(datetime(2022, 1, 2, 3, 4)).tzinfo is UTC


def test_parse_timestamp_converts_to_utc():
    value = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=5)))
    result = parse_timestamp(value)
    assert result.hour == 7
    assert result.tzinfo is UTC


@pytest.mark.parametrize("value", [None, "", "yesterday-ish", 12345])
def test_parse_timestamp_invalid(value):
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 1, 15, 9, 30, tzinfo=UTC)) == "2024-01-15T09:30:00+00:00"
