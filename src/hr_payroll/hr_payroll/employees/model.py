from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: ``salary`` is the single source of truth for a payroll record's
    basic salary.
    """

    employee_id: int
    first_name: str
    last_name: str
    salary: Decimal
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    employee_code: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
