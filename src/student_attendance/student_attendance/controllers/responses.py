"""JSON envelope, serializers and error translation shared by the API controllers.

Every response is {"success": bool, "data"?: ..., "error"?: str, "message"?: str}.
Dates leave the API as civil-day strings; timestamps as ISO-8601 UTC.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import wraps
from typing import Any, Iterable, Optional

from flask import jsonify

from ..attendance.aggregator import CalendarCell, MonthCalendar, StudentSummary
from ..attendance.model import CivilAttendanceRecord
from ..attendance.service import StudentDetail
from ..core.exceptions import (
    DomainError,
    InvalidDateFormatError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from ..students.model import Student

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (InvalidInputError, 400),
    (InvalidDateFormatError, 400),
    (NotFoundError, 404),
    (StoreUnavailableError, 503),
)


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None):
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(error: str, *, status: int, kind: Optional[str] = None):
    body: dict = {"success": False, "error": error}
    if kind:
        body["kind"] = kind
    return jsonify(body), status


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 500


def json_errors(failure_message: str):
    """Translate domain errors to JSON; anything else is logged and becomes a 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                status = status_for(e)
                if status >= 500:
                    logger.error("%s: %s", failure_message, e)
                    return fail(failure_message, status=status, kind=e.kind)
                return fail(str(e), status=status, kind=e.kind)
            except Exception:
                logger.exception(failure_message)
                return fail(failure_message, status=500)

        return wrapper

    return decorator


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def record_to_dict(r: CivilAttendanceRecord) -> dict:
    data = {
        "id": r.attendance_id,
        "studentId": r.student_id,
        "date": r.day,
        "isAbsent": r.is_absent,
        "dailyFee": r.daily_fee,
        "createdAt": _iso(r.created_at),
        "updatedAt": _iso(r.updated_at),
    }
    if r.student_name is not None:
        data["student"] = {"id": r.student_id, "name": r.student_name}
    return data


def student_to_dict(s: Student, records: Optional[Iterable[CivilAttendanceRecord]] = None) -> dict:
    data = {
        "id": s.student_id,
        "name": s.name,
        "deletedAt": _iso(s.deleted_at),
        "createdAt": _iso(s.created_at),
        "updatedAt": _iso(s.updated_at),
    }
    if records is not None:
        data["attendanceRecords"] = [record_to_dict(r) for r in records]
    return data


def summary_to_dict(s: StudentSummary) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "totalSessionsThisMonth": s.sessions_this_month,
        "isPresentToday": s.is_present_today,
        "canMarkPresent": s.can_mark_present,
    }


def calendar_to_dict(c: MonthCalendar) -> dict:
    return {
        "month": c.month,
        "year": c.year,
        "monthNumber": c.month_number,
        "weeks": [[_cell_to_dict(cell) for cell in week] for week in c.weeks],
    }


def _cell_to_dict(cell: Optional[CalendarCell]) -> Optional[dict]:
    if cell is None:
        return None
    return {
        "day": cell.day,
        "date": cell.civil_day,
        "status": cell.status.value,
        "isToday": cell.is_today,
    }


def detail_to_dict(d: StudentDetail) -> dict:
    return {
        "student": student_to_dict(d.student),
        "today": d.today,
        "availableMonths": d.months,
        "selectedMonth": d.selected_month,
        "sessions": d.sessions,
        "totalFee": d.total_fee,
        "presentRecords": [record_to_dict(r) for r in d.present_records],
        "calendar": calendar_to_dict(d.calendar),
    }
