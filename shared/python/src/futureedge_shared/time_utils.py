"""
time_utils.py — Lenient date parsing shared by imports, exports and jobs.

Values arrive from CSV cells, Supabase rows (ISO strings) and admin forms, so
parsing is deliberately forgiving: anything dateutil understands is
accepted. Naive datetimes are taken to be UTC.

Usage:
    from futureedge_shared.time_utils import parse_date, parse_datetime

    parse_date("2024-06-01")               # date(2024, 6, 1)
    parse_date("June 1, 2024")             # date(2024, 6, 1)
    parse_datetime("2024-06-01 09:30")     # datetime(2024, 6, 1, 9, 30, tzinfo=UTC)
    parse_date("someday")                  # None
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser as date_parser


def parse_datetime(value: Any) -> datetime | None:
    """
    Parse a datetime-like value into an aware datetime.

    Args:
        value: datetime, date, or string in any dateutil-parseable format.

    Returns:
        Timezone-aware datetime (UTC when the input has no offset), or None
        if the value is empty or unparseable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.parse(str(value).strip())
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: Any) -> date | None:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def duration_days(start: Any, end: Any) -> int | None:
    """Whole days between two date-like values, or None if either is missing."""
    start_d, end_d = parse_date(start), parse_date(end)
    if start_d is None or end_d is None:
        return None
    return abs((end_d - start_d).days)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
