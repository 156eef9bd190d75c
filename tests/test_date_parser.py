"""Tests for date parser with relative dates."""

from datetime import date, timedelta

import pytest

from fintrack.utils.date_parser import parse_date

TODAY = date(2024, 3, 13)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_long_form():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date(" Today ", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday", today=TODAY) == date(2024, 3, 12)
    assert parse_date("tomorrow", today=TODAY) == date(2024, 3, 14)


@pytest.mark.parametrize("text, days", [("1 day ago", 1), ("10 days ago", 10)])
def test_parse_days_ago(text, days):
    assert parse_date(text, today=TODAY) == TODAY - timedelta(days=days)


def test_parse_invalid():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")
