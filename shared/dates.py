"""Date parsing and day-granularity normalization helpers."""

from __future__ import annotations

import re
from datetime import date, datetime


_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse a strict `YYYY-MM-DD` calendar date.

    Timestamps, week dates and other ISO-8601 variants are rejected so that
    a filter bound is always an absolute calendar day.
    """

    if not _ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date {value!r}. Expected YYYY-MM-DD")
    return date.fromisoformat(value)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string, accepting a trailing `Z`."""

    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))


def to_calendar_day(value: date | datetime) -> date:
    """Return the calendar day of a stored value.

    Time-of-day and UTC offset are dropped as stored: `2024-07-28T23:30:00-05:00`
    is the 28th, not converted to another timezone first.
    """

    if isinstance(value, datetime):
        return value.date()
    return value
