from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_utc,
    db_cursor,
    fetchall,
    fetchone,
    from_storage_date,
    to_db_datetime,
    to_storage_date,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, student_id, attendance_date, is_absent, daily_fee, created_at, updated_at"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=str(r["student_id"]),
        attendance_date=from_storage_date(r["attendance_date"]),
        is_absent=bool(r["is_absent"]),
        daily_fee=int(r["daily_fee"]),
        created_at=as_utc(r.get("created_at")),
        updated_at=as_utc(r.get("updated_at")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(
        self,
        *,
        student_id: Optional[str] = None,
        on: Optional[datetime] = None,
        between: Optional[Tuple[datetime, datetime]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(student_id)
        if between is not None:
            clauses.append("attendance_date BETWEEN %s AND %s")
            params.extend([to_storage_date(between[0]), to_storage_date(between[1])])
        if on is not None:
            clauses.append("attendance_date=%s")
            params.append(to_storage_date(on))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY attendance_date DESC, attendance_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        student_id: str,
        attendance_date: datetime,
        is_absent: bool,
        daily_fee: int,
        now: datetime,
    ) -> AttendanceRecord:
        day = to_storage_date(attendance_date)
        ts = to_db_datetime(now)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, attendance_date, is_absent, daily_fee, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    is_absent=VALUES(is_absent),
                    daily_fee=VALUES(daily_fee),
                    updated_at=VALUES(updated_at)
                """,
                (student_id, day, 1 if is_absent else 0, int(daily_fee), ts, ts),
            )

            # If it was an update, lastrowid can be 0; fetch by natural key.
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s AND attendance_date=%s",
                (student_id, day),
            )
            return _to_record(fetchone(cur))
