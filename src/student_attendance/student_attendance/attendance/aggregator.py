"""Attendance aggregates.

Pure functions over decoded records (civil-day strings) and an explicit
"today". Nothing here touches the store or the clock.

A session is a day marked present; absent records count for nothing. Fees
are summed from each record's own snapshot, never from the live setting.
The store guarantees at most one record per (student, day); these functions
do not re-check it.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..common.datetime_utils import format_civil_day, month_of, parse_civil_day, parse_civil_month
from ..core.enums import DayStatus
from .model import CivilAttendanceRecord


@dataclass(frozen=True)
class CalendarCell:
    day: int
    civil_day: str
    status: DayStatus
    is_today: bool


@dataclass(frozen=True)
class MonthCalendar:
    month: str
    year: int
    month_number: int
    # Sunday-first rows of 7; None pads before day 1 and after the last day.
    weeks: List[List[Optional[CalendarCell]]]


@dataclass(frozen=True)
class StudentSummary:
    """Row of the student list page."""

    student_id: str
    name: str
    sessions_this_month: int
    is_present_today: bool
    can_mark_present: bool


def _in_month(student_id: str, civil_month: str, records: Iterable[CivilAttendanceRecord]) -> List[CivilAttendanceRecord]:
    parse_civil_month(civil_month)
    return [r for r in records if r.student_id == student_id and r.month == civil_month]


def _find(student_id: str, civil_day: str, records: Iterable[CivilAttendanceRecord]) -> Optional[CivilAttendanceRecord]:
    for r in records:
        if r.student_id == student_id and r.day == civil_day:
            return r
    return None


def present_records_in_month(
    student_id: str, civil_month: str, records: Iterable[CivilAttendanceRecord]
) -> List[CivilAttendanceRecord]:
    """Present records of the month, oldest first (fee breakdown)."""
    present = [r for r in _in_month(student_id, civil_month, records) if not r.is_absent]
    return sorted(present, key=lambda r: r.day)


def sessions_in_month(student_id: str, civil_month: str, records: Iterable[CivilAttendanceRecord]) -> int:
    return len(present_records_in_month(student_id, civil_month, records))


def total_fee_in_month(student_id: str, civil_month: str, records: Iterable[CivilAttendanceRecord]) -> int:
    return sum(r.daily_fee for r in present_records_in_month(student_id, civil_month, records))


def status_for_day(student_id: str, civil_day: str, records: Iterable[CivilAttendanceRecord]) -> DayStatus:
    parse_civil_day(civil_day)
    record = _find(student_id, civil_day, records)
    if record is None:
        return DayStatus.NONE
    return DayStatus.ABSENT if record.is_absent else DayStatus.PRESENT


def can_mark_present_today(student_id: str, records: Iterable[CivilAttendanceRecord], today: str) -> bool:
    """False only when today is already marked present."""
    parse_civil_day(today)
    record = _find(student_id, today, records)
    return record is None or record.is_absent


def is_present_today(student_id: str, records: Iterable[CivilAttendanceRecord], today: str) -> bool:
    parse_civil_day(today)
    record = _find(student_id, today, records)
    return record is not None and not record.is_absent


def distinct_months_with_records(records: Iterable[CivilAttendanceRecord]) -> List[str]:
    """YYYY-MM values that have any record, newest first."""
    return sorted({r.month for r in records}, reverse=True)


def default_month(months: Sequence[str], current_month: str) -> str:
    """Month selector default: current month if it has data, else the newest one."""
    if current_month in months or not months:
        return current_month
    return months[0]


def month_calendar(
    student_id: str,
    civil_month: str,
    records: Iterable[CivilAttendanceRecord],
    today: str,
) -> MonthCalendar:
    year, month = parse_civil_month(civil_month)
    last_day = monthrange(year, month)[1]
    by_day = {r.day: r for r in _in_month(student_id, civil_month, records)}

    # date.weekday(): Monday=0 ... Sunday=6
    leading = (date(year, month, 1).weekday() + 1) % 7
    cells: List[Optional[CalendarCell]] = [None] * leading

    for day in range(1, last_day + 1):
        civil_day = format_civil_day(date(year, month, day))
        record = by_day.get(civil_day)
        if record is None:
            status = DayStatus.NONE
        else:
            status = DayStatus.ABSENT if record.is_absent else DayStatus.PRESENT
        cells.append(CalendarCell(day=day, civil_day=civil_day, status=status, is_today=civil_day == today))

    if len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))

    weeks = [cells[i : i + 7] for i in range(0, len(cells), 7)]
    return MonthCalendar(month=civil_month, year=year, month_number=month, weeks=weeks)


def student_summary(
    student_id: str,
    name: str,
    records: Iterable[CivilAttendanceRecord],
    today: str,
) -> StudentSummary:
    records = list(records)
    return StudentSummary(
        student_id=student_id,
        name=name,
        sessions_this_month=sessions_in_month(student_id, month_of(today), records),
        is_present_today=is_present_today(student_id, records, today),
        can_mark_present=can_mark_present_today(student_id, records, today),
    )
