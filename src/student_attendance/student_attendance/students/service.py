from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import CivilDateCodec
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_STUDENT_NAME_LENGTH
from ..core.exceptions import StudentNotFoundError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def _new_student_id() -> str:
    return str(uuid.uuid4())


def _clean_name(name) -> str:
    name = require_non_empty(name, "Name")
    return require_min_length(name, "Name", MIN_STUDENT_NAME_LENGTH)


class StudentService:
    """Use case: manage the student roster."""

    def __init__(
        self,
        students: StudentRepository,
        codec: CivilDateCodec,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._students = students
        self._codec = codec
        self._id_factory = id_factory or _new_student_id

    def list_active(self) -> Sequence[Student]:
        students = self._students.find_students(exclude_deleted=True)
        return sorted(students, key=lambda s: s.name)

    def find_student(self, student_id: str) -> Optional[Student]:
        """Lookup by id, soft-deleted students included."""
        return self._students.get_by_id(student_id)

    def get_student(self, student_id: str) -> Student:
        """Active student or StudentNotFoundError."""
        student = self._students.get_by_id(student_id) if student_id else None
        if not student or student.is_deleted:
            raise StudentNotFoundError(student_id)
        return student

    def create_student(self, name) -> Student:
        name = _clean_name(name)
        student = self._students.create(
            student_id=self._id_factory(),
            name=name,
            created_at=self._codec.current_instant(),
        )
        logger.info("Student created: %s (%s)", student.name, student.student_id)
        return student

    def rename_student(self, student_id: str, name) -> Student:
        name = _clean_name(name)
        self.get_student(student_id)

        student = self._students.update_name(
            student_id=student_id,
            name=name,
            updated_at=self._codec.current_instant(),
        )
        if not student:
            raise StudentNotFoundError(student_id)
        logger.info("Student renamed: %s -> %s", student_id, student.name)
        return student

    def delete_student(self, student_id: str) -> Student:
        self.get_student(student_id)

        student = self._students.soft_delete(
            student_id=student_id,
            deleted_at=self._codec.current_instant(),
        )
        if not student:
            raise StudentNotFoundError(student_id)
        logger.info("Student soft-deleted: %s", student_id)
        return student
