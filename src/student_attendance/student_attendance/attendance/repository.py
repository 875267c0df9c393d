from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Giao diện repository cho AttendanceRecord.

    Tính duy nhất của (student_id, attendance_date) do tầng lưu trữ đảm bảo.
    """

    def find(
        self,
        *,
        student_id: Optional[str] = None,
        on: Optional[datetime] = None,
        between: Optional[Tuple[datetime, datetime]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records matching every given filter, newest date first.

        `between` bounds are inclusive storage instants.
        """

        raise NotImplementedError

    def upsert(
        self,
        *,
        student_id: str,
        attendance_date: datetime,
        is_absent: bool,
        daily_fee: int,
        now: datetime,
    ) -> AttendanceRecord:
        """Atomic insert-or-update keyed by (student_id, attendance_date).

        On update both `is_absent` and `daily_fee` are overwritten.
        """

        raise NotImplementedError
