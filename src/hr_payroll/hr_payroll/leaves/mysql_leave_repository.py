from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_COLUMNS = """
    id, employee_id, leave_type, start_date, end_date, reason, status,
    applied_by, approved_by, approved_at, rejection_reason, created_at
"""


def _to_leave(r: Dict[str, Any]) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        applied_by=r.get("applied_by"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejection_reason=r.get("rejection_reason"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _fetch(self, cur, leave_id: int) -> Optional[LeaveApplication]:
        cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE id=%s", (int(leave_id),))
        r = fetchone(cur)
        return _to_leave(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str],
        status: LeaveStatus,
        applied_by: Optional[int],
    ) -> LeaveApplication:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(employee_id, leave_type, start_date, end_date, reason, status, applied_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type, start_date, end_date, reason, status.value, applied_by),
            )
            return self._fetch(cur, int(cur.lastrowid))

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._fetch(cur, leave_id)

    def list_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE employee_id=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (int(employee_id), end_date, start_date),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        upcoming_from: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[LeaveApplication]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if upcoming_from is not None:
            clauses.append("start_date >= %s")
            params.append(upcoming_from)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE {where}
                ORDER BY start_date ASC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: Optional[int],
        rejection_reason: Optional[str] = None,
    ) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, approved_at=NOW(), rejection_reason=%s
                WHERE id=%s
                """,
                (status.value, decided_by, rejection_reason, int(leave_id)),
            )
            return self._fetch(cur, leave_id)
