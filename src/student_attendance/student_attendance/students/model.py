from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class Active:
    """Trạng thái: đang học (hiện trong danh sách, được điểm danh)."""


@dataclass(frozen=True)
class Deleted:
    """Trạng thái: đã xoá mềm (ẩn khỏi danh sách, vẫn tra được theo id)."""

    at: datetime


StudentState = Union[Active, Deleted]

ACTIVE = Active()


@dataclass(frozen=True)
class Student:
    """Thực thể miền (domain): Học sinh.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    student_id: str
    name: str
    state: StudentState
    created_at: datetime
    updated_at: datetime

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.state, Deleted)

    @property
    def deleted_at(self) -> Optional[datetime]:
        if isinstance(self.state, Deleted):
            return self.state.at
        return None
