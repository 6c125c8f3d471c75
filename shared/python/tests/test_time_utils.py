"""Tests for lenient date parsing."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from futureedge_shared.time_utils import duration_days, parse_date, parse_datetime


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-06-01", date(2024, 6, 1)),
        ("June 1, 2024", date(2024, 6, 1)),
        ("2024-06-01T23:30:00+00:00", date(2024, 6, 1)),
        (date(2024, 6, 1), date(2024, 6, 1)),
        (datetime(2024, 6, 1, 8, 0), date(2024, 6, 1)),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", [None, "", "banana", "2024-13-45"])
def test_parse_date_invalid(value):
    assert parse_date(value) is None


def test_naive_datetime_is_utc():
    parsed = parse_datetime("2024-06-01 09:30")
    assert parsed == datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


def test_offset_is_kept():
    parsed = parse_datetime("2024-06-01T09:30:00+02:00")
    assert parsed.utcoffset() == timedelta(hours=2)


def test_date_becomes_midnight_utc():
    assert parse_datetime(date(2024, 6, 1)) == datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("2025-07-01", "2025-07-08", 7),
        ("2025-07-08", "2025-07-01", 7),
        ("2025-07-01", None, None),
        ("banana", "2025-07-01", None),
    ],
)
def test_duration_days(start, end, expected):
    assert duration_days(start, end) == expected
