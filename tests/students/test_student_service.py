from __future__ import annotations

import pytest

from src.student_attendance.student_attendance.core.exceptions import InvalidInputError, StudentNotFoundError
from src.student_attendance.student_attendance.students.service import StudentService


@pytest.fixture
def service(container):
    return container.student_service


def test_create_trims_name_and_assigns_id(service, fixed_now):
    student = service.create_student("  Nguyen Van An  ")

    assert student.name == "Nguyen Van An"
    assert student.student_id
    assert student.is_deleted is False
    assert student.created_at == fixed_now


def test_create_uses_id_factory(students_repo, container):
    service = StudentService(students_repo, container.codec, id_factory=lambda: "fixed-id")

    assert service.create_student("An").student_id == "fixed-id"


@pytest.mark.parametrize("name", ["", "   ", "A", " B ", None, 42])
def test_create_rejects_short_or_missing_name(service, students_repo, name):
    with pytest.raises(InvalidInputError):
        service.create_student(name)
    assert students_repo.find_students(exclude_deleted=False) == []


def test_list_active_sorted_by_name(service, students_repo):
    students_repo.add("S2", "Binh")
    students_repo.add("S1", "An")

    assert [s.name for s in service.list_active()] == ["An", "Binh"]


def test_soft_delete_hides_student_but_keeps_row(service, students_repo, fixed_now):
    students_repo.add("S1", "An")

    deleted = service.delete_student("S1")

    assert deleted.is_deleted is True
    assert deleted.deleted_at == fixed_now
    assert service.list_active() == []
    assert service.find_student("S1").deleted_at == fixed_now
    with pytest.raises(StudentNotFoundError):
        service.get_student("S1")


def test_delete_twice_is_not_found(service, students_repo):
    students_repo.add("S1", "An")
    service.delete_student("S1")

    with pytest.raises(StudentNotFoundError):
        service.delete_student("S1")


def test_rename(service, students_repo, clock, fixed_now):
    from datetime import timedelta

    students_repo.add("S1", "An")
    clock.now = fixed_now + timedelta(hours=1)

    renamed = service.rename_student("S1", " Anh ")

    assert renamed.name == "Anh"
    assert renamed.updated_at == fixed_now + timedelta(hours=1)


def test_rename_validates_before_lookup(service):
    with pytest.raises(InvalidInputError):
        service.rename_student("missing", "x")
    with pytest.raises(StudentNotFoundError):
        service.rename_student("missing", "Valid name")


def test_get_student_with_empty_id(service):
    with pytest.raises(StudentNotFoundError):
        service.get_student("")
