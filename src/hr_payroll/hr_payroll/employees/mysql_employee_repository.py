from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    id, employee_code, first_name, last_name, email,
    department, position, hire_date, salary, status
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        salary=to_decimal(row.get("salary")),
        status=EmployeeStatus(row.get("status") or EmployeeStatus.ACTIVE.value),
        employee_code=row.get("employee_code"),
        email=row.get("email"),
        department=row.get("department"),
        position=row.get("position"),
        hire_date=row.get("hire_date"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY first_name, last_name")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE status=%s ORDER BY id",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]
