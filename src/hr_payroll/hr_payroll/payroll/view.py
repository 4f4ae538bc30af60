from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..common.money import ZERO, differs
from ..common.validators import require_month, require_year
from ..core.constants import DRIFT_TOLERANCE
from ..core.enums import PayrollStatus
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository
from .service import PayrollService

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    rows: list[dict]
    corrected: list[int] = field(default_factory=list)


class PayrollView:
    """Month-wide payroll listing across all employees.

    Listing only reads. Stored records whose basic/leave/TDS figures no
    longer match live values are flagged with ``has_drift``;
    ``reconcile_month`` rewrites them.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        payroll_service: PayrollService,
    ):
        self._payroll = payroll
        self._employees = employees
        self._payroll_service = payroll_service

    @staticmethod
    def _row(employee: Employee, month: int, year: int, record: Optional[PayrollRecord], figures: PayrollFigures, has_drift: bool) -> dict:
        status = record.status if record else PayrollStatus.PENDING
        return {
            "employee_id": employee.employee_id,
            "employee_code": employee.employee_code,
            "first_name": employee.first_name,
            "last_name": employee.last_name,
            "email": employee.email,
            "department": employee.department,
            "position": employee.position,
            "salary": employee.salary,
            "payroll_id": record.payroll_id if record else None,
            "month": month,
            "year": year,
            "basic_salary": figures.basic_salary,
            "allowances": figures.allowances,
            "leave_deduction": figures.leave_deduction,
            "tds": figures.tds,
            "other_deductions": figures.other_deductions,
            "deductions": figures.deductions,
            "net_salary": figures.net_salary,
            "status": status.value,
            "payment_status": "paid" if status == PayrollStatus.PAID else "unpaid",
            "processed_at": record.processed_at if record else None,
            "has_drift": has_drift,
        }

    @staticmethod
    def _stored_figures(record: PayrollRecord) -> PayrollFigures:
        return PayrollFigures(
            basic_salary=record.basic_salary,
            allowances=record.allowances,
            other_deductions=record.resolved_other_deductions,
            leave_deduction=record.leave_deduction,
            tds=record.tds,
            deductions=record.deductions,
            net_salary=record.net_salary,
        )

    def _projection(self, employee: Employee, month: int, year: int) -> PayrollFigures:
        return self._payroll_service.compute_figures(
            employee.employee_id,
            month,
            year,
            basic_salary=employee.salary,
            allowances=ZERO,
            other_deductions=ZERO,
        )

    def _drifted(self, employee: Employee, record: PayrollRecord) -> bool:
        live = self._payroll_service.compute_figures(
            employee.employee_id,
            record.month,
            record.year,
            basic_salary=employee.salary,
            allowances=record.allowances,
            other_deductions=record.resolved_other_deductions,
        )
        return (
            differs(live.basic_salary, record.basic_salary, DRIFT_TOLERANCE)
            or differs(live.leave_deduction, record.leave_deduction, DRIFT_TOLERANCE)
            or differs(live.tds, record.tds, DRIFT_TOLERANCE)
        )

    def list_month(self, month, year, *, reconcile: bool = False) -> list[dict]:
        if reconcile:
            return self.reconcile_month(month, year).rows

        month = require_month(month)
        year = require_year(year)
        records = {r.employee_id: r for r in self._payroll.list_for_period(month, year)}

        rows = []
        for employee in self._employees.list_all():
            record = records.get(employee.employee_id)
            if record is None:
                rows.append(self._row(employee, month, year, None, self._projection(employee, month, year), False))
            else:
                rows.append(
                    self._row(employee, month, year, record, self._stored_figures(record), self._drifted(employee, record))
                )
        return rows

    def reconcile_month(self, month, year) -> ReconcileResult:
        month = require_month(month)
        year = require_year(year)
        stored = {r.employee_id for r in self._payroll.list_for_period(month, year)}

        result = ReconcileResult(rows=[])
        for employee in self._employees.list_all():
            if employee.employee_id not in stored:
                result.rows.append(
                    self._row(employee, month, year, None, self._projection(employee, month, year), False)
                )
                continue
            record, changed = self._payroll_service.reconcile_period(employee, month, year)
            if record is None:
                result.rows.append(
                    self._row(employee, month, year, None, self._projection(employee, month, year), False)
                )
                continue
            if changed:
                result.corrected.append(record.payroll_id)
            result.rows.append(self._row(employee, month, year, record, self._stored_figures(record), False))

        if result.corrected:
            logger.info("Reconciled %d payroll records for %s/%s", len(result.corrected), month, year)
        return result
