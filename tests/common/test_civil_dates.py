from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.student_attendance.student_attendance.common.datetime_utils import (
    CivilDateCodec,
    days_in_month,
    month_of,
    parse_civil_day,
    parse_civil_month,
)
from src.student_attendance.student_attendance.core.exceptions import InvalidDateFormatError


def _codec_at(now: datetime) -> CivilDateCodec:
    return CivilDateCodec("Asia/Ho_Chi_Minh", clock=lambda: now)


def test_encode_attaches_utc_midnight_of_same_calendar_day():
    codec = _codec_at(datetime(2025, 1, 1, tzinfo=timezone.utc))

    assert codec.encode_civil_day("2025-01-01") == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_encode_does_not_depend_on_local_time_of_day():
    # 00:30 and 06:59 local (UTC+7) are still the previous day in UTC
    early = _codec_at(datetime(2024, 12, 31, 17, 30, tzinfo=timezone.utc))
    before_seven = _codec_at(datetime(2024, 12, 31, 23, 59, tzinfo=timezone.utc))
    evening = _codec_at(datetime(2025, 1, 1, 15, 0, tzinfo=timezone.utc))

    expected = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert early.encode_civil_day("2025-01-01") == expected
    assert before_seven.encode_civil_day("2025-01-01") == expected
    assert evening.encode_civil_day("2025-01-01") == expected


def test_round_trip_every_day_of_a_leap_year():
    codec = _codec_at(datetime(2024, 6, 1, tzinfo=timezone.utc))
    day = date(2024, 1, 1)
    while day.year == 2024:
        s = day.isoformat()
        assert codec.decode_storage_instant(codec.encode_civil_day(s)) == s
        day += timedelta(days=1)


def test_decode_uses_utc_calendar_date_of_instant():
    codec = _codec_at(datetime(2025, 1, 1, tzinfo=timezone.utc))
    plus_seven = timezone(timedelta(hours=7))

    # 2025-03-02 05:00 at UTC+7 is 2025-03-01 22:00 UTC
    assert codec.decode_storage_instant(datetime(2025, 3, 2, 5, 0, tzinfo=plus_seven)) == "2025-03-01"
    assert codec.decode_storage_instant(date(2025, 3, 2)) == "2025-03-02"


def test_current_civil_day_rolls_over_at_local_midnight():
    codec = _codec_at(datetime(2024, 12, 31, 17, 30, tzinfo=timezone.utc))

    now = codec.current_civil_datetime()
    assert (now.year, now.month, now.day, now.hour, now.minute) == (2025, 1, 1, 0, 30)
    assert codec.current_civil_day() == "2025-01-01"
    assert codec.current_civil_month() == "2025-01"


def test_current_civil_day_before_local_midnight():
    codec = _codec_at(datetime(2024, 12, 31, 16, 59, tzinfo=timezone.utc))

    assert codec.current_civil_day() == "2024-12-31"
    assert codec.current_civil_month() == "2024-12"


def test_naive_clock_reading_is_treated_as_utc():
    codec = CivilDateCodec(clock=lambda: datetime(2025, 3, 14, 18, 0))

    assert codec.current_civil_day() == "2025-03-15"


@pytest.mark.parametrize(
    "value",
    [
        "",
        "2025-1-01",
        "2025/01/01",
        "01-01-2025",
        "2025-02-30",
        "2025-13-01",
        "2025-01-01T00:00:00",
        "2025-01-01\n",
        " 2025-01-01",
        "٢٠٢٥-٠١-٠١",
        None,
        20250101,
    ],
)
def test_malformed_civil_day_is_rejected(value):
    codec = _codec_at(datetime(2025, 1, 1, tzinfo=timezone.utc))

    with pytest.raises(InvalidDateFormatError):
        codec.encode_civil_day(value)


@pytest.mark.parametrize("value", ["2025-00", "2025-13", "2025-1", "2025", "2025-03-01", "2025-03\n", "٢٠٢٥-٠٣"])
def test_malformed_civil_month_is_rejected(value):
    with pytest.raises(InvalidDateFormatError):
        parse_civil_month(value)


def test_month_storage_range_is_inclusive_first_and_last_day():
    codec = _codec_at(datetime(2025, 1, 1, tzinfo=timezone.utc))

    start, end = codec.month_storage_range("2024-02")
    assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert end == datetime(2024, 2, 29, tzinfo=timezone.utc)


def test_small_helpers():
    assert parse_civil_day("2025-03-14") == date(2025, 3, 14)
    assert month_of("2025-03-14") == "2025-03"
    assert days_in_month("2025-02") == 28


def test_unknown_timezone_fails_fast():
    with pytest.raises(ValueError):
        CivilDateCodec("Mars/Olympus_Mons")


def test_current_instant_is_normalized_to_utc():
    plus7 = timezone(timedelta(hours=7))
    codec = _codec_at(datetime(2025, 3, 15, 8, 30, tzinfo=plus7))

    now = codec.current_instant()

    assert now == datetime(2025, 3, 15, 1, 30, tzinfo=timezone.utc)
    assert now.utcoffset() == timedelta(0)
