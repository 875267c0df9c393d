from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi điểm danh, dạng lưu trữ.

    `attendance_date`: 00:00 UTC của ngày điểm danh.
    `daily_fee`: học phí chốt tại lần ghi gần nhất.
    """

    attendance_id: int
    student_id: str
    attendance_date: datetime
    is_absent: bool
    daily_fee: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CivilAttendanceRecord:
    """Read-model: bản ghi với ngày đã giải mã thành chuỗi YYYY-MM-DD."""

    attendance_id: int
    student_id: str
    day: str
    is_absent: bool
    daily_fee: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    student_name: Optional[str] = None

    @property
    def month(self) -> str:
        return self.day[:7]
