from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, employee_id, date, status, check_in_time, check_out_time, notes, location"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
        notes=r.get("notes"),
        location=r.get("location"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[time] = None,
        check_out_time: Optional[time] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, status, check_in_time, check_out_time, notes, location)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    notes=VALUES(notes),
                    location=COALESCE(VALUES(location), location)
                """,
                (int(employee_id), work_date, status.value, check_in_time, check_out_time, notes, location),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND date=%s",
                (int(employee_id), work_date),
            )
            return _to_record(fetchone(cur))

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if start_date is not None and end_date is not None:
            clauses.append("date BETWEEN %s AND %s")
            params.extend([start_date, end_date])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_on_leave(self, employee_id: int, *, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS leave_days
                FROM attendance
                WHERE employee_id=%s AND status=%s AND date >= %s AND date <= %s
                """,
                (int(employee_id), AttendanceStatus.ON_LEAVE.value, start_date, end_date),
            )
            row = fetchone(cur)
            return int((row or {}).get("leave_days") or 0)

    def count_on_leave_in_month(self, employee_id: int, *, month: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS leave_days
                FROM attendance
                WHERE employee_id=%s AND status=%s AND MONTH(date)=%s AND YEAR(date)=%s
                """,
                (int(employee_id), AttendanceStatus.ON_LEAVE.value, int(month), int(year)),
            )
            row = fetchone(cur)
            return int((row or {}).get("leave_days") or 0)
