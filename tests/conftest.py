from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.student_attendance.student_attendance.attendance.model import AttendanceRecord
from src.student_attendance.student_attendance.container import wire
from src.student_attendance.student_attendance.settings.model import AppSetting
from src.student_attendance.student_attendance.students.model import ACTIVE, Deleted, Student


class InMemoryStudents:
    def __init__(self):
        self._by_id: dict[str, Student] = {}

    def add(self, student_id: str, name: str, *, deleted_at: Optional[datetime] = None) -> Student:
        ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        student = Student(
            student_id=student_id,
            name=name,
            state=Deleted(at=deleted_at) if deleted_at else ACTIVE,
            created_at=ts,
            updated_at=ts,
        )
        self._by_id[student_id] = student
        return student

    def find_students(self, *, exclude_deleted: bool = True):
        items = list(self._by_id.values())
        if exclude_deleted:
            items = [s for s in items if not s.is_deleted]
        return sorted(items, key=lambda s: s.name)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._by_id.get(student_id)

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        student = Student(student_id=student_id, name=name, state=ACTIVE, created_at=created_at, updated_at=created_at)
        self._by_id[student_id] = student
        return student

    def update_name(self, *, student_id: str, name: str, updated_at: datetime) -> Optional[Student]:
        student = self._by_id.get(student_id)
        if not student:
            return None
        self._by_id[student_id] = replace(student, name=name, updated_at=updated_at)
        return self._by_id[student_id]

    def soft_delete(self, *, student_id: str, deleted_at: datetime) -> Optional[Student]:
        student = self._by_id.get(student_id)
        if not student:
            return None
        self._by_id[student_id] = replace(student, state=Deleted(at=deleted_at), updated_at=deleted_at)
        return self._by_id[student_id]


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, datetime], AttendanceRecord] = {}
        self._id = 0
        self.calls = 0

    def find(self, *, student_id=None, on=None, between=None):
        self.calls += 1
        items = list(self._by_key.values())
        if student_id is not None:
            items = [r for r in items if r.student_id == student_id]
        if between is not None:
            items = [r for r in items if between[0] <= r.attendance_date <= between[1]]
        if on is not None:
            items = [r for r in items if r.attendance_date == on]
        items.sort(key=lambda r: (r.attendance_date, r.attendance_id), reverse=True)
        return items

    def upsert(self, *, student_id: str, attendance_date: datetime, is_absent: bool, daily_fee: int, now: datetime):
        self.calls += 1
        key = (student_id, attendance_date)
        existing = self._by_key.get(key)
        if existing:
            rec = replace(existing, is_absent=is_absent, daily_fee=daily_fee, updated_at=now)
        else:
            self._id += 1
            rec = AttendanceRecord(
                attendance_id=self._id,
                student_id=student_id,
                attendance_date=attendance_date,
                is_absent=is_absent,
                daily_fee=daily_fee,
                created_at=now,
                updated_at=now,
            )
        self._by_key[key] = rec
        return rec

    def all(self):
        return list(self._by_key.values())


class InMemorySettings:
    def __init__(self):
        self._by_key: dict[str, AppSetting] = {}

    def get(self, key: str) -> Optional[AppSetting]:
        return self._by_key.get(key)

    def list_all(self):
        return list(self._by_key.values())

    def upsert(self, *, key: str, value: str, description=None) -> AppSetting:
        existing = self._by_key.get(key)
        if description is None and existing:
            description = existing.description
        self._by_key[key] = AppSetting(key=key, value=value, description=description)
        return self._by_key[key]


@pytest.fixture
def fixed_now() -> datetime:
    # 08:30 on 2025-03-15 in Asia/Ho_Chi_Minh
    return datetime(2025, 3, 15, 1, 30, tzinfo=timezone.utc)


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings()


@pytest.fixture
def clock(fixed_now):
    """Mutable clock: set `clock.now` to move time inside a test."""

    class _Clock:
        def __init__(self, now: datetime):
            self.now = now

        def __call__(self) -> datetime:
            return self.now

    return _Clock(fixed_now)


@pytest.fixture
def container(students_repo, attendance_repo, settings_repo, clock):
    return wire(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        timezone="Asia/Ho_Chi_Minh",
        default_daily_fee=70000,
        clock=clock,
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.student_attendance.student_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
