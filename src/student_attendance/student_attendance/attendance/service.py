from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..common.datetime_utils import CivilDateCodec, parse_civil_month
from ..core.exceptions import InvalidInputError, StudentNotFoundError
from ..settings.service import SettingsService
from ..students.model import Student
from ..students.repository import StudentRepository
from . import aggregator
from .aggregator import MonthCalendar, StudentSummary
from .model import AttendanceRecord, CivilAttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentDetail:
    """View-model of the student page for one selected month."""

    student: Student
    today: str
    months: List[str]
    selected_month: str
    sessions: int
    total_fee: int
    present_records: List[CivilAttendanceRecord]
    calendar: MonthCalendar
    records: List[CivilAttendanceRecord]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        settings: SettingsService,
        codec: CivilDateCodec,
    ):
        self._attendance = attendance
        self._students = students
        self._settings = settings
        self._codec = codec

    def _get_active_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student or student.is_deleted:
            raise StudentNotFoundError(student_id)
        return student

    def _decode(self, r: AttendanceRecord, *, student_name: Optional[str] = None) -> CivilAttendanceRecord:
        return CivilAttendanceRecord(
            attendance_id=r.attendance_id,
            student_id=r.student_id,
            day=self._codec.decode_storage_instant(r.attendance_date),
            is_absent=r.is_absent,
            daily_fee=r.daily_fee,
            created_at=r.created_at,
            updated_at=r.updated_at,
            student_name=student_name,
        )

    def mark_attendance(self, student_id: str, civil_day: str, is_absent: bool) -> CivilAttendanceRecord:
        """Create or update the (student, day) record.

        The fee snapshot is refreshed to the current setting on every write,
        updates included.
        """

        if not student_id or not civil_day:
            raise InvalidInputError("StudentId and date are required")
        instant = self._codec.encode_civil_day(civil_day)

        student = self._get_active_student(student_id)
        daily_fee = self._settings.get_daily_fee()

        record = self._attendance.upsert(
            student_id=student.student_id,
            attendance_date=instant,
            is_absent=bool(is_absent),
            daily_fee=daily_fee,
            now=self._codec.current_instant(),
        )
        logger.info(
            "Attendance marked: student=%s day=%s absent=%s fee=%s",
            student.student_id,
            civil_day,
            bool(is_absent),
            daily_fee,
        )
        return self._decode(record, student_name=student.name)

    def mark_present_today(self, student_id: str) -> CivilAttendanceRecord:
        return self.mark_attendance(student_id, self._codec.current_civil_day(), False)

    def mark_absent_today(self, student_id: str) -> CivilAttendanceRecord:
        return self.mark_attendance(student_id, self._codec.current_civil_day(), True)

    def list_records(
        self,
        *,
        student_id: Optional[str] = None,
        civil_day: Optional[str] = None,
        civil_month: Optional[str] = None,
    ) -> List[CivilAttendanceRecord]:
        """Decoded records, newest first. A day filter takes precedence over a month filter."""

        if civil_day:
            rows = self._attendance.find(student_id=student_id, on=self._codec.encode_civil_day(civil_day))
        elif civil_month:
            rows = self._attendance.find(student_id=student_id, between=self._codec.month_storage_range(civil_month))
        else:
            rows = self._attendance.find(student_id=student_id)

        names: Dict[str, str] = {s.student_id: s.name for s in self._students.find_students(exclude_deleted=False)}
        return [self._decode(r, student_name=names.get(r.student_id)) for r in rows]

    def student_overview(self) -> List[StudentSummary]:
        """List page rows for every active student."""

        today = self._codec.current_civil_day()
        month_range = self._codec.month_storage_range(self._codec.current_civil_month())
        records = [self._decode(r) for r in self._attendance.find(between=month_range)]

        students = sorted(self._students.find_students(exclude_deleted=True), key=lambda s: s.name)
        return [aggregator.student_summary(s.student_id, s.name, records, today) for s in students]

    def student_detail(self, student_id: str, *, month: Optional[str] = None) -> StudentDetail:
        student = self._get_active_student(student_id)
        if month:
            parse_civil_month(month)

        records = [self._decode(r, student_name=student.name) for r in self._attendance.find(student_id=student_id)]
        today = self._codec.current_civil_day()
        months = aggregator.distinct_months_with_records(records)
        selected = month or aggregator.default_month(months, self._codec.current_civil_month())

        return StudentDetail(
            student=student,
            today=today,
            months=months,
            selected_month=selected,
            sessions=aggregator.sessions_in_month(student_id, selected, records),
            total_fee=aggregator.total_fee_in_month(student_id, selected, records),
            present_records=aggregator.present_records_in_month(student_id, selected, records),
            calendar=aggregator.month_calendar(student_id, selected, records, today),
            records=records,
        )
