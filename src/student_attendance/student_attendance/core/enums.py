from __future__ import annotations

from enum import Enum


class DayStatus(str, Enum):
    """Trạng thái điểm danh của một ngày trên lịch."""

    NONE = "none"
    PRESENT = "present"
    ABSENT = "absent"
