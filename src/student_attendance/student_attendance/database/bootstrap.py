from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

import mysql.connector

from ..core.constants import DAILY_FEE_DESCRIPTION, DAILY_FEE_KEY, DEFAULT_DAILY_FEE
from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


# Quoted literals first so ';' and '--' inside them stay literal text.
_SQL_TOKEN_RE = re.compile(
    r"""
    '(?:[^'\\]|\\.|'')*'      # single-quoted literal ('' and \' escapes)
    |"(?:[^"\\]|\\.)*"        # double-quoted literal
    |--[^\n]*                 # line comment
    |;                        # statement terminator
    |[^'";-]+                 # plain text
    |.                        # lone '-' or an unterminated quote
    """,
    re.VERBOSE | re.DOTALL,
)

# schema.sql may pin its own database; the configured one wins.
_DATABASE_SWITCH_RE = re.compile(r"(?is)\A(CREATE\s+DATABASE|USE)\b")


def split_sql_statements(sql: str) -> List[str]:
    """Split a .sql script into statements, dropping comments and empty ones."""

    statements: List[str] = []
    current: List[str] = []
    for token in _SQL_TOKEN_RE.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            statements.append("".join(current).strip())
            current = []
        else:
            current.append(token)
    statements.append("".join(current).strip())
    return [s for s in statements if s]


def _schema_statements(sql: str) -> List[str]:
    return [s for s in split_sql_statements(sql) if not _DATABASE_SWITCH_RE.match(s)]


def _exec_sql_file(db_config: dict, path: str | Path) -> int:
    statements = _schema_statements(Path(path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
        return len(statements)
    except mysql.connector.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _exec_sql_file(db_config, schema_path)
    logger.info("Applied schema %s (%d statements)", schema_path, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _exec_sql_file(db_config, seed_path)
    logger.info("Applied seed %s (%d statements)", seed_path, count)


def ensure_default_settings(db_config: dict, *, daily_fee: int = DEFAULT_DAILY_FEE) -> None:
    """Insert the daily fee setting if missing; never overwrite an existing value."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO app_settings(setting_key, value, description)
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE setting_key=setting_key
            """,
            (DAILY_FEE_KEY, str(int(daily_fee)), DAILY_FEE_DESCRIPTION),
        )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
