from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.money import round2
from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollFigures:
    """Monetary fields of a payroll record, always derived together."""

    basic_salary: Decimal
    allowances: Decimal
    other_deductions: Decimal
    leave_deduction: Decimal
    tds: Decimal
    deductions: Decimal
    net_salary: Decimal

    @classmethod
    def derive(
        cls,
        *,
        basic_salary: Decimal,
        allowances: Decimal,
        other_deductions: Decimal,
        leave_deduction: Decimal,
        tds: Decimal,
    ) -> "PayrollFigures":
        basic = round2(basic_salary)
        allow = round2(allowances)
        other = round2(other_deductions)
        leave = round2(leave_deduction)
        tax = round2(tds)
        deductions = leave + tax + other
        return cls(
            basic_salary=basic,
            allowances=allow,
            other_deductions=other,
            leave_deduction=leave,
            tds=tax,
            deductions=deductions,
            net_salary=basic + allow - deductions,
        )


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: one payroll record per (employee, month, year)."""

    payroll_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    leave_deduction: Decimal
    tds: Decimal
    net_salary: Decimal
    status: PayrollStatus
    other_deductions: Optional[Decimal] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def resolved_other_deductions(self) -> Decimal:
        """Stored column, or total minus leave and tax for rows written before it existed."""
        if self.other_deductions is not None:
            return round2(self.other_deductions)
        return round2(self.deductions - self.leave_deduction - self.tds)

    def as_dict(self) -> dict:
        return {
            "id": self.payroll_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "basic_salary": self.basic_salary,
            "allowances": self.allowances,
            "deductions": self.deductions,
            "leave_deduction": self.leave_deduction,
            "tds": self.tds,
            "other_deductions": self.resolved_other_deductions,
            "net_salary": self.net_salary,
            "status": self.status.value,
            "processed_at": self.processed_at,
            "created_at": self.created_at,
        }
