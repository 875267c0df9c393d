from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import mysql.connector
import pytest

from src.student_attendance.student_attendance.core.exceptions import InvalidInputError, StoreUnavailableError
from src.student_attendance.student_attendance.database.bootstrap import _schema_statements, split_sql_statements
from src.student_attendance.student_attendance.database.connection import DatabaseConnection, DBConfig
from src.student_attendance.student_attendance.database.mysql_base import (
    as_utc,
    db_cursor,
    from_storage_date,
    to_db_datetime,
    to_storage_date,
)


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error

    def connect(self):
        if self.error:
            raise self.error
        return self.conn


def test_db_cursor_commits_on_success():
    conn = FakeConn()

    with db_cursor(FakeFactory(conn)) as (c, cur):
        assert c is conn

    assert conn.committed and conn.closed and cur.closed
    assert not conn.rolled_back


def test_db_cursor_driver_error_becomes_store_unavailable():
    conn = FakeConn()

    with pytest.raises(StoreUnavailableError):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.Error("lost connection")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_db_cursor_domain_errors_pass_through():
    conn = FakeConn()

    with pytest.raises(InvalidInputError):
        with db_cursor(FakeFactory(conn)):
            raise InvalidInputError("bad")

    assert conn.rolled_back and conn.closed


def test_db_cursor_connect_failure():
    with pytest.raises(StoreUnavailableError):
        with db_cursor(FakeFactory(error=mysql.connector.Error("refused"))):
            pass


def test_storage_date_conversions():
    instant = datetime(2025, 3, 1, tzinfo=timezone.utc)

    assert to_storage_date(instant) == date(2025, 3, 1)
    assert from_storage_date(date(2025, 3, 1)) == instant
    assert from_storage_date("2025-03-01") == instant
    assert from_storage_date(datetime(2025, 3, 1, 0, 0)) == instant
    with pytest.raises(TypeError):
        from_storage_date(20250301)


def test_to_storage_date_normalizes_offsets():
    plus7 = timezone(timedelta(hours=7))

    assert to_storage_date(datetime(2025, 3, 2, 6, 0, tzinfo=plus7)) == date(2025, 3, 1)


def test_datetime_column_helpers():
    aware = datetime(2025, 3, 15, 1, 30, tzinfo=timezone.utc)
    naive = datetime(2025, 3, 15, 1, 30)

    assert to_db_datetime(aware) == naive
    assert as_utc(naive) == aware
    assert as_utc(None) is None


def test_sql_splitter_respects_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");  \nINSERT INTO t VALUES ('it''s; -- fine')"

    assert split_sql_statements(sql) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "INSERT INTO t VALUES ('it''s; -- fine')",
    ]


def test_sql_splitter_drops_comments_and_empty_statements():
    sql = "-- header\n;;\nSELECT 1 - 2; -- trailing\n"

    assert split_sql_statements(sql) == ["SELECT 1 - 2"]


def test_schema_statements_skip_database_switches():
    sql = "-- header\nCREATE DATABASE IF NOT EXISTS x;\nuse x;\nCREATE TABLE t (id INT);\n"

    assert _schema_statements(sql) == ["CREATE TABLE t (id INT)"]


def test_repo_schema_and_seed_split_cleanly():
    from pathlib import Path

    root = Path(__file__).resolve().parents[2] / "database"
    schema = _schema_statements((root / "schema.sql").read_text(encoding="utf-8"))
    seed = _schema_statements((root / "seed.sql").read_text(encoding="utf-8"))

    assert [s.split("(")[0].split()[-1] for s in schema] == ["students", "attendance_records", "app_settings"]
    assert all(s.upper().startswith("INSERT") for s in seed)


def test_connection_instance_follows_config():
    a = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "a"}))
    same = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "a"}))
    b = DatabaseConnection.get_instance(DBConfig.from_dict({"database": "b"}))

    assert a is same
    assert b is not a
    assert b.config.database == "b"
    assert b.config.port == 3306
