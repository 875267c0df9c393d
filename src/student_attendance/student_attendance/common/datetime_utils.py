"""Civil-day codec.

A civil day is a calendar date in the school's local timezone
(Asia/Ho_Chi_Minh by default). It is stored as a storage instant: the
timezone-aware datetime at 00:00 UTC of that *same* calendar date.

Encoding attaches UTC midnight to the characters of the input string. It
never goes through a local-offset conversion first: midnight in UTC+7 is
17:00 of the previous day in UTC, so converting would roll the stored date
back by one.
"""

from __future__ import annotations

import re
from calendar import monthrange
from datetime import date, datetime, timezone
from typing import Callable, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import InvalidDateFormatError

Clock = Callable[[], datetime]

_CIVIL_DAY_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_CIVIL_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")


def utc_now() -> datetime:
    """Current instant (aware, UTC).

    Note: Default clock. Tests inject their own instead of patching this.
    """
    return datetime.now(timezone.utc)


def parse_civil_day(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string into a date."""
    if not isinstance(value, str):
        raise InvalidDateFormatError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")

    m = _CIVIL_DAY_RE.fullmatch(value)
    if not m:
        raise InvalidDateFormatError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")

    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as e:
        raise InvalidDateFormatError(f"Invalid date: {value!r}") from e


def parse_civil_month(value: str) -> Tuple[int, int]:
    """Parse a zero-padded YYYY-MM string into (year, month)."""
    if not isinstance(value, str):
        raise InvalidDateFormatError(f"Invalid month: {value!r} (expected YYYY-MM)")

    m = _CIVIL_MONTH_RE.fullmatch(value)
    if not m:
        raise InvalidDateFormatError(f"Invalid month: {value!r} (expected YYYY-MM)")

    year, month = int(m.group(1)), int(m.group(2))
    if year < 1 or not 1 <= month <= 12:
        raise InvalidDateFormatError(f"Invalid month: {value!r}")
    return year, month


def format_civil_day(d: date) -> str:
    return d.isoformat()


def format_civil_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_of(civil_day: str) -> str:
    """'2025-03-14' -> '2025-03'."""
    d = parse_civil_day(civil_day)
    return format_civil_month(d.year, d.month)


def days_in_month(civil_month: str) -> int:
    year, month = parse_civil_month(civil_month)
    return monthrange(year, month)[1]


class CivilDateCodec:
    """Maps civil days to storage instants and reads "now" in local terms.

    The timezone is configuration (`TIMEZONE`) and the clock is injected, so
    nothing here reads the wall clock ad hoc.
    """

    def __init__(self, tz_name: str = DEFAULT_TIMEZONE, *, clock: Optional[Clock] = None):
        try:
            self._tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {tz_name!r}") from e
        self._tz_name = tz_name
        self._clock = clock or utc_now

    @property
    def tz_name(self) -> str:
        return self._tz_name

    def encode_civil_day(self, civil_day: str) -> datetime:
        d = parse_civil_day(civil_day)
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)

    def decode_storage_instant(self, instant: date | datetime) -> str:
        if isinstance(instant, datetime):
            if instant.tzinfo is not None:
                instant = instant.astimezone(timezone.utc)
            return format_civil_day(instant.date())
        # DATE columns come back as plain dates: already the UTC calendar day.
        return format_civil_day(instant)

    def month_storage_range(self, civil_month: str) -> Tuple[datetime, datetime]:
        """Inclusive (first day, last day) storage instants of a month."""
        year, month = parse_civil_month(civil_month)
        last = monthrange(year, month)[1]
        return (
            datetime(year, month, 1, tzinfo=timezone.utc),
            datetime(year, month, last, tzinfo=timezone.utc),
        )

    def current_instant(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    def current_civil_datetime(self) -> datetime:
        return self.current_instant().astimezone(self._tz)

    def current_civil_day(self) -> str:
        return format_civil_day(self.current_civil_datetime().date())

    def current_civil_month(self) -> str:
        now = self.current_civil_datetime()
        return format_civil_month(now.year, now.month)
