from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping

from ..core.constants import (
    DEFAULT_MAX_ALLOWED_LEAVES,
    DEFAULT_TDS_PERCENTAGE,
    DEFAULT_WORKING_DAYS_PER_MONTH,
    MAX_ALLOWED_LEAVES_KEY,
    TDS_PERCENTAGE_KEY,
    WORKING_DAYS_KEY,
)
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    TDS_PERCENTAGE_KEY: str(DEFAULT_TDS_PERCENTAGE),
    MAX_ALLOWED_LEAVES_KEY: str(DEFAULT_MAX_ALLOWED_LEAVES),
    WORKING_DAYS_KEY: str(DEFAULT_WORKING_DAYS_PER_MONTH),
}


def _connection(db_config: Mapping) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\":
            buf.append(ch)
            escape = True
            continue
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_sql_file(db_config: Mapping, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: Mapping) -> None:
    factory = _connection(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)
    logger.info("Applied seed %s", seed_path)


def ensure_default_settings(db_config: Mapping) -> None:
    """Insert payroll rule settings that are missing; existing values are kept."""
    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor()
        for key, value in DEFAULT_SETTINGS.items():
            cur.execute(
                """
                INSERT INTO settings (setting_key, setting_value)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE setting_key = setting_key
                """,
                (key, value),
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: Mapping) -> list[str]:
    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
