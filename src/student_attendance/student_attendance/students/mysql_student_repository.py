from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_utc, db_cursor, fetchall, fetchone, to_db_datetime
from .model import ACTIVE, Deleted, Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, deleted_at, created_at, updated_at"


def _to_student(row: Dict[str, Any]) -> Student:
    deleted_at = as_utc(row.get("deleted_at"))
    return Student(
        student_id=str(row["student_id"]),
        name=row["name"],
        state=Deleted(at=deleted_at) if deleted_at else ACTIVE,
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_students(self, *, exclude_deleted: bool = True) -> Sequence[Student]:
        where = "WHERE deleted_at IS NULL" if exclude_deleted else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students {where} ORDER BY name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        ts = to_db_datetime(created_at)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(student_id, name, deleted_at, created_at, updated_at)
                VALUES(%s,%s,NULL,%s,%s)
                """,
                (student_id, name, ts, ts),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            return _to_student(fetchone(cur))

    def update_name(self, *, student_id: str, name: str, updated_at: datetime) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET name=%s, updated_at=%s WHERE student_id=%s",
                (name, to_db_datetime(updated_at), student_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def soft_delete(self, *, student_id: str, deleted_at: datetime) -> Optional[Student]:
        ts = to_db_datetime(deleted_at)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET deleted_at=%s, updated_at=%s WHERE student_id=%s",
                (ts, ts, student_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None
