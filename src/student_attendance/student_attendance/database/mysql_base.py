from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits on success, rolls back on error. Driver errors surface as
    StoreUnavailableError; domain errors raised inside the block pass through.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Cannot connect to database: %s", e)
        raise StoreUnavailableError("Database is unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Database error, transaction rolled back: %s", e)
        raise StoreUnavailableError("Database query failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_storage_date(instant: datetime) -> date:
    """Storage instant (UTC midnight) -> value for a DATE column."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return instant.date()


def from_storage_date(value: Any) -> datetime:
    """DATE column value -> storage instant (UTC midnight).

    mysql-connector can return DATE as:
    - datetime.date
    - datetime.datetime (DATETIME columns / some drivers)
    - string (e.g. '2025-03-01')
    """

    if isinstance(value, datetime):
        d = value.astimezone(timezone.utc).date() if value.tzinfo else value.date()
    elif isinstance(value, date):
        d = value
    elif isinstance(value, str):
        d = date.fromisoformat(value.strip()[:10])
    else:
        raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
    return datetime.combine(d, time(0, 0), tzinfo=timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """DATETIME columns are written in UTC and come back naive."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_datetime(value: datetime) -> datetime:
    """Aware UTC datetime -> naive UTC for a DATETIME column."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
