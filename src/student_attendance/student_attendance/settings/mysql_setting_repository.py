from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AppSetting
from .repository import SettingRepository


class MySQLSettingRepository(SettingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[AppSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, value, description FROM app_settings WHERE setting_key=%s",
                (key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AppSetting(key=r["setting_key"], value=r["value"], description=r.get("description"))

    def list_all(self) -> Sequence[AppSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_key, value, description FROM app_settings ORDER BY setting_key ASC")
            return [
                AppSetting(key=r["setting_key"], value=r["value"], description=r.get("description"))
                for r in fetchall(cur)
            ]

    def upsert(self, *, key: str, value: str, description: Optional[str] = None) -> AppSetting:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings(setting_key, value, description)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    value=VALUES(value),
                    description=COALESCE(VALUES(description), description)
                """,
                (key, value, description),
            )
            cur.execute(
                "SELECT setting_key, value, description FROM app_settings WHERE setting_key=%s",
                (key,),
            )
            r = fetchone(cur)
            return AppSetting(key=r["setting_key"], value=r["value"], description=r.get("description"))
