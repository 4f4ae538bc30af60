from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from ..common.money import to_decimal
from ..core.constants import SALARY_LEDGER_HEAD
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import LedgerEntry
from .repository import LedgerRepository

_COLUMNS = """
    id, head, subhead, month, year, amount, tds_percentage, gst_percentage,
    frequency, remarks, updated_at
"""


def _to_entry(r: Dict[str, Any]) -> LedgerEntry:
    return LedgerEntry(
        entry_id=int(r["id"]),
        head=r["head"],
        subhead=r.get("subhead"),
        month=int(r["month"]),
        year=int(r["year"]),
        amount=to_decimal(r.get("amount")),
        tds_percentage=to_decimal(r.get("tds_percentage")),
        gst_percentage=to_decimal(r.get("gst_percentage")),
        frequency=r.get("frequency") or "Monthly",
        remarks=r.get("remarks"),
        updated_at=r.get("updated_at"),
    )


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def sum_paid_gross(self, month: int, year: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(basic_salary + allowances), 0) AS total
                FROM payroll
                WHERE month=%s AND year=%s AND status='paid' AND (basic_salary + allowances) > 0
                """,
                (int(month), int(year)),
            )
            row = fetchone(cur)
            return to_decimal(row["total"] if row else 0)

    def upsert_amount(self, *, head: str, month: int, year: int, amount: Decimal) -> LedgerEntry:
        tds = 10 if head == SALARY_LEDGER_HEAD else 0
        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(id) makes lastrowid point at the existing row on update.
            cur.execute(
                """
                INSERT INTO accounting_entries
                    (head, subhead, tds_percentage, gst_percentage, frequency, remarks, amount, month, year)
                VALUES (%s, NULL, %s, 0, 'Monthly', %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE amount=VALUES(amount), id=LAST_INSERT_ID(id)
                """,
                (head, tds, "Auto-synced from payroll", amount, int(month), int(year)),
            )
            entry_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM accounting_entries WHERE id=%s", (entry_id,))
            return _to_entry(fetchone(cur))
