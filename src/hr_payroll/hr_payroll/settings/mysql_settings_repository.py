from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Setting
from .repository import SettingsRepository


def _to_setting(row: Dict[str, Any]) -> Setting:
    return Setting(key=row["setting_key"], value=row.get("setting_value"), updated_at=row.get("updated_at"))


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value, updated_at FROM settings WHERE setting_key=%s",
                (key,),
            )
            row = fetchone(cur)
            return _to_setting(row) if row else None

    def list_all(self) -> Sequence[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_key, setting_value, updated_at FROM settings ORDER BY setting_key")
            return [_to_setting(r) for r in fetchall(cur)]

    def upsert(self, *, key: str, value: str) -> tuple[Setting, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM settings WHERE setting_key=%s FOR UPDATE", (key,))
            existing = fetchone(cur)
            if existing:
                cur.execute("UPDATE settings SET setting_value=%s WHERE id=%s", (value, int(existing["id"])))
            else:
                cur.execute("INSERT INTO settings(setting_key, setting_value) VALUES(%s,%s)", (key, value))
            cur.execute(
                "SELECT setting_key, setting_value, updated_at FROM settings WHERE setting_key=%s",
                (key,),
            )
            return _to_setting(fetchone(cur)), existing is None
