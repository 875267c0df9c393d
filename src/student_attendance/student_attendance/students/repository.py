from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Giao diện repository cho Student.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    Không xoá cứng học sinh: `soft_delete` chỉ ghi `deleted_at`.
    """

    def find_students(self, *, exclude_deleted: bool = True) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        """Returns soft-deleted students too."""

        raise NotImplementedError

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        raise NotImplementedError

    def update_name(self, *, student_id: str, name: str, updated_at: datetime) -> Optional[Student]:
        raise NotImplementedError

    def soft_delete(self, *, student_id: str, deleted_at: datetime) -> Optional[Student]:
        raise NotImplementedError
