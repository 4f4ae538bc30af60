from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    id, employee_id, month, year, basic_salary, allowances, deductions,
    leave_deduction, tds, other_deductions, net_salary, status, processed_at, created_at
"""


def _to_record(r: Dict[str, Any]) -> PayrollRecord:
    other = r.get("other_deductions")
    return PayrollRecord(
        payroll_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=to_decimal(r.get("basic_salary")),
        allowances=to_decimal(r.get("allowances")),
        deductions=to_decimal(r.get("deductions")),
        leave_deduction=to_decimal(r.get("leave_deduction")),
        tds=to_decimal(r.get("tds")),
        net_salary=to_decimal(r.get("net_salary")),
        status=PayrollStatus(r.get("status") or PayrollStatus.PENDING.value),
        other_deductions=None if other is None else to_decimal(other),
        processed_at=r.get("processed_at"),
        created_at=r.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch(self, cur, payroll_id: int) -> Optional[PayrollRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE id=%s", (int(payroll_id),))
        r = fetchone(cur)
        return _to_record(r) if r else None

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._fetch(cur, payroll_id)

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll WHERE employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_period(self, month: int, year: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll WHERE month=%s AND year=%s ORDER BY employee_id",
                (int(month), int(year)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll
                WHERE {" AND ".join(clauses)}
                ORDER BY year DESC, month DESC, employee_id
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        figures: PayrollFigures,
        status: PayrollStatus,
        processed_at: Optional[datetime] = None,
    ) -> PayrollRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll(
                    employee_id, month, year, basic_salary, allowances, deductions,
                    leave_deduction, tds, other_deductions, net_salary, status, processed_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(month),
                    int(year),
                    figures.basic_salary,
                    figures.allowances,
                    figures.deductions,
                    figures.leave_deduction,
                    figures.tds,
                    figures.other_deductions,
                    figures.net_salary,
                    status.value,
                    processed_at,
                ),
            )
            return self._fetch(cur, int(cur.lastrowid))

    def update(
        self,
        *,
        payroll_id: int,
        figures: PayrollFigures,
        status: PayrollStatus,
        processed_at: Optional[datetime],
    ) -> PayrollRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll
                SET basic_salary=%s, allowances=%s, deductions=%s, leave_deduction=%s,
                    tds=%s, other_deductions=%s, net_salary=%s, status=%s, processed_at=%s
                WHERE id=%s
                """,
                (
                    figures.basic_salary,
                    figures.allowances,
                    figures.deductions,
                    figures.leave_deduction,
                    figures.tds,
                    figures.other_deductions,
                    figures.net_salary,
                    status.value,
                    processed_at,
                    int(payroll_id),
                ),
            )
            return self._fetch(cur, payroll_id)
