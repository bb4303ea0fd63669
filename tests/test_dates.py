"""Tests for date parsing helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from shared.dates import parse_iso_date, parse_timestamp, to_calendar_day


def test_parse_iso_date_accepts_only_calendar_dates() -> None:
    assert parse_iso_date("2024-07-28") == date(2024, 7, 28)

    for value in ("2024-07-28T00:00:00", "20240728", "2024-W30-7", "2024-7-28"):
        with pytest.raises(ValueError):
            parse_iso_date(value)


def test_parse_timestamp_accepts_zulu_offsets_and_plain_dates() -> None:
    assert parse_timestamp("2024-07-28T10:00:00Z") == datetime(2024, 7, 28, 10, tzinfo=timezone.utc)
    assert parse_timestamp("2024-07-28") == datetime(2024, 7, 28)


def test_to_calendar_day_ignores_time_and_offset() -> None:
    late = datetime(2024, 7, 28, 23, 59, tzinfo=timezone(timedelta(hours=-7)))

    assert to_calendar_day(late) == date(2024, 7, 28)
    assert to_calendar_day(date(2024, 7, 28)) == date(2024, 7, 28)
