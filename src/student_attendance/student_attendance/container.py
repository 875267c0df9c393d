from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import CivilDateCodec, Clock
from .core.constants import DEFAULT_DAILY_FEE, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .settings.mysql_setting_repository import MySQLSettingRepository
from .settings.repository import SettingRepository
from .settings.service import SettingsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    codec: CivilDateCodec

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    settings_repo: SettingRepository

    student_service: StudentService
    attendance_service: AttendanceService
    settings_service: SettingsService


def wire(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    settings_repo: SettingRepository,
    timezone: str = DEFAULT_TIMEZONE,
    default_daily_fee: int = DEFAULT_DAILY_FEE,
    clock: Optional[Clock] = None,
) -> Container:
    """Assemble services over any repository implementation."""

    codec = CivilDateCodec(timezone, clock=clock)
    settings_service = SettingsService(settings_repo, default_daily_fee=default_daily_fee)
    student_service = StudentService(students_repo, codec)
    attendance_service = AttendanceService(attendance_repo, students_repo, settings_service, codec)

    return Container(
        codec=codec,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        student_service=student_service,
        attendance_service=attendance_service,
        settings_service=settings_service,
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    default_daily_fee: int = DEFAULT_DAILY_FEE,
    clock: Optional[Clock] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings_repo=MySQLSettingRepository(conn),
        timezone=timezone,
        default_daily_fee=default_daily_fee,
        clock=clock,
    )
