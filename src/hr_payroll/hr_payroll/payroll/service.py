from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLock
from ..common.money import ZERO, differs, round2
from ..common.validators import (
    optional_amount,
    optional_payroll_status,
    require_month,
    require_positive_int,
    require_year,
)
from ..core.constants import DEFAULT_ALLOWANCE_RATE, DEFAULT_OTHER_DEDUCTION_RATE, DRIFT_TOLERANCE, MAX_AMOUNT
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..ledger.service import LedgerSyncService
from .calculator.base import DeductionCalculator
from .model import PayrollFigures, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_PROCESSED_STATES = (PayrollStatus.PROCESSED, PayrollStatus.PAID)


@dataclass(frozen=True)
class UpsertResult:
    record: PayrollRecord
    created: bool


class PayrollService:
    """Owns payroll records: one per (employee, month, year).

    Every write re-derives the basic salary from the employee's current
    salary, recomputes leave deduction and TDS, and rebuilds the totals.
    Writes to one period are serialized through ``locks``.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        calculator: DeductionCalculator,
        *,
        locks: Optional[KeyedLock] = None,
        ledger_sync: Optional[LedgerSyncService] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator
        self._locks = locks if locks is not None else KeyedLock()
        self._ledger_sync = ledger_sync

    @staticmethod
    def _period_key(employee_id: int, month: int, year: int) -> tuple:
        return ("payroll", int(employee_id), int(month), int(year))

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def compute_figures(
        self,
        employee_id: int,
        month: int,
        year: int,
        *,
        basic_salary: Decimal,
        allowances: Decimal,
        other_deductions: Decimal,
    ) -> PayrollFigures:
        leave = self._calculator.leave_deduction(employee_id, month, year, basic_salary)
        tds = self._calculator.tds(basic_salary, allowances)
        return PayrollFigures.derive(
            basic_salary=basic_salary,
            allowances=allowances,
            other_deductions=other_deductions,
            leave_deduction=leave,
            tds=tds,
        )

    @staticmethod
    def _warn_salary_override(employee: Employee, supplied: Optional[Decimal]) -> None:
        if supplied is not None and differs(supplied, employee.salary, DRIFT_TOLERANCE):
            logger.warning(
                "Ignoring basic_salary %s for employee %s; using current salary %s",
                supplied,
                employee.employee_id,
                employee.salary,
            )

    @staticmethod
    def _require_storable(figures: PayrollFigures) -> PayrollFigures:
        totals = (figures.allowances, figures.deductions, figures.net_salary)
        if any(abs(value) > MAX_AMOUNT for value in totals):
            raise ValidationError(f"Payroll amounts must not exceed {MAX_AMOUNT}")
        return figures

    @staticmethod
    def _processed_at(old: PayrollRecord, new_status: PayrollStatus) -> Optional[datetime]:
        if new_status in _PROCESSED_STATES and new_status != old.status:
            return now_local()
        return old.processed_at

    def _write_existing(
        self,
        existing: PayrollRecord,
        employee: Employee,
        *,
        allowances: Optional[Decimal],
        other_deductions: Optional[Decimal],
        status: Optional[PayrollStatus],
    ) -> PayrollRecord:
        figures = self._require_storable(
            self.compute_figures(
                existing.employee_id,
                existing.month,
                existing.year,
                basic_salary=employee.salary,
                allowances=existing.allowances if allowances is None else allowances,
                other_deductions=existing.resolved_other_deductions if other_deductions is None else other_deductions,
            )
        )
        new_status = status or existing.status
        updated = self._payroll.update(
            payroll_id=existing.payroll_id,
            figures=figures,
            status=new_status,
            processed_at=self._processed_at(existing, new_status),
        )
        logger.info(
            "Payroll %s updated for employee %s (%s/%s): leave=%s tds=%s net=%s",
            updated.payroll_id,
            updated.employee_id,
            updated.month,
            updated.year,
            updated.leave_deduction,
            updated.tds,
            updated.net_salary,
        )
        return updated

    def _after_status_change(self, before: PayrollStatus, after: PayrollRecord) -> None:
        if after.status != PayrollStatus.PAID or before == PayrollStatus.PAID or self._ledger_sync is None:
            return
        try:
            self._ledger_sync.sync_salary(after.month, after.year)
        except Exception:
            logger.exception("Ledger sync failed after payroll %s was paid", after.payroll_id)

    def create_or_upsert(
        self,
        *,
        employee_id,
        month,
        year,
        basic_salary=None,
        allowances=None,
        deductions=None,
        status=None,
    ) -> UpsertResult:
        if not employee_id or not month or not year:
            raise ValidationError("Employee ID, month, and year are required")
        employee_id = require_positive_int(employee_id, "employee_id")
        month = require_month(month)
        year = require_year(year)
        supplied_salary = optional_amount(basic_salary, "basic_salary")
        allow = optional_amount(allowances, "allowances")
        other = optional_amount(deductions, "deductions")
        new_status = optional_payroll_status(status)

        employee = self._require_employee(employee_id)
        self._warn_salary_override(employee, supplied_salary)

        with self._locks.hold(self._period_key(employee_id, month, year)):
            existing = self._payroll.get_for_period(employee_id, month, year)
            if existing:
                record = self._write_existing(
                    existing, employee, allowances=allow, other_deductions=other, status=new_status
                )
                created = False
            else:
                figures = self._require_storable(
                    self.compute_figures(
                        employee_id,
                        month,
                        year,
                        basic_salary=employee.salary,
                        allowances=allow or ZERO,
                        other_deductions=other or ZERO,
                    )
                )
                final_status = new_status or PayrollStatus.PENDING
                record = self._payroll.create(
                    employee_id=employee_id,
                    month=month,
                    year=year,
                    figures=figures,
                    status=final_status,
                    processed_at=now_local() if final_status in _PROCESSED_STATES else None,
                )
                logger.info(
                    "Payroll %s created for employee %s (%s/%s): net=%s",
                    record.payroll_id,
                    employee_id,
                    month,
                    year,
                    record.net_salary,
                )
                created = True

        self._after_status_change(existing.status if existing else PayrollStatus.PENDING, record)
        return UpsertResult(record=record, created=created)

    def update(self, payroll_id, *, basic_salary=None, allowances=None, deductions=None, status=None) -> PayrollRecord:
        payroll_id = require_positive_int(payroll_id, "payroll id")
        supplied_salary = optional_amount(basic_salary, "basic_salary")
        allow = optional_amount(allowances, "allowances")
        other = optional_amount(deductions, "deductions")
        new_status = optional_payroll_status(status)

        current = self._payroll.get_by_id(payroll_id)
        if not current:
            raise NotFoundError("Payroll record not found")
        employee = self._require_employee(current.employee_id)
        self._warn_salary_override(employee, supplied_salary)

        with self._locks.hold(self._period_key(current.employee_id, current.month, current.year)):
            existing = self._payroll.get_by_id(payroll_id)
            if not existing:
                raise NotFoundError("Payroll record not found")
            updated = self._write_existing(existing, employee, allowances=allow, other_deductions=other, status=new_status)

        self._after_status_change(existing.status, updated)
        return updated

    def process_month(self, *, month, year) -> list[PayrollRecord]:
        """Create processed records for active employees that have none for the month."""
        if not month or not year:
            raise ValidationError("Month and year are required")
        month = require_month(month)
        year = require_year(year)

        created: list[PayrollRecord] = []
        for employee in self._employees.list_active():
            with self._locks.hold(self._period_key(employee.employee_id, month, year)):
                if self._payroll.get_for_period(employee.employee_id, month, year):
                    continue
                salary = round2(employee.salary)
                figures = self.compute_figures(
                    employee.employee_id,
                    month,
                    year,
                    basic_salary=salary,
                    allowances=salary * DEFAULT_ALLOWANCE_RATE,
                    other_deductions=salary * DEFAULT_OTHER_DEDUCTION_RATE,
                )
                created.append(
                    self._payroll.create(
                        employee_id=employee.employee_id,
                        month=month,
                        year=year,
                        figures=figures,
                        status=PayrollStatus.PROCESSED,
                        processed_at=now_local(),
                    )
                )
        logger.info("Payroll processed for %d employees (%s/%s)", len(created), month, year)
        return created

    def refresh_existing(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        """Recompute leave deduction and TDS of an existing record.

        Returns None when there is nothing to update: no record for the
        period, or a stored basic salary that is not positive. Never creates.
        """
        with self._locks.hold(self._period_key(employee_id, month, year)):
            existing = self._payroll.get_for_period(employee_id, month, year)
            if not existing:
                logger.info("No payroll record for employee %s (%s/%s), skipping", employee_id, month, year)
                return None
            if existing.basic_salary <= 0:
                logger.warning("Employee %s has no salary for %s/%s, skipping", employee_id, month, year)
                return None

            employee = self._employees.get_by_id(employee_id)
            basic = employee.salary if employee else existing.basic_salary
            figures = self.compute_figures(
                employee_id,
                month,
                year,
                basic_salary=basic,
                allowances=existing.allowances,
                other_deductions=existing.resolved_other_deductions,
            )
            updated = self._payroll.update(
                payroll_id=existing.payroll_id,
                figures=figures,
                status=existing.status,
                processed_at=existing.processed_at,
            )
        logger.info(
            "Recalculated payroll for employee %s (%s/%s): leave=%s net=%s",
            employee_id,
            month,
            year,
            updated.leave_deduction,
            updated.net_salary,
        )
        return updated

    def reconcile_period(self, employee: Employee, month: int, year: int) -> tuple[Optional[PayrollRecord], bool]:
        """Correct stored basic/leave/TDS figures that drifted from live values.

        Returns (record, corrected). A record already in sync is not written.
        """
        with self._locks.hold(self._period_key(employee.employee_id, month, year)):
            existing = self._payroll.get_for_period(employee.employee_id, month, year)
            if not existing:
                return None, False

            live = self.compute_figures(
                employee.employee_id,
                month,
                year,
                basic_salary=employee.salary,
                allowances=existing.allowances,
                other_deductions=existing.resolved_other_deductions,
            )
            drifted = (
                differs(live.basic_salary, existing.basic_salary, DRIFT_TOLERANCE)
                or differs(live.leave_deduction, existing.leave_deduction, DRIFT_TOLERANCE)
                or differs(live.tds, existing.tds, DRIFT_TOLERANCE)
            )
            if not drifted:
                return existing, False

            corrected = self._payroll.update(
                payroll_id=existing.payroll_id,
                figures=live,
                status=existing.status,
                processed_at=existing.processed_at,
            )
        logger.info(
            "Corrected drift on payroll %s: basic %s->%s leave %s->%s tds %s->%s",
            existing.payroll_id,
            existing.basic_salary,
            corrected.basic_salary,
            existing.leave_deduction,
            corrected.leave_deduction,
            existing.tds,
            corrected.tds,
        )
        return corrected, True

    def get_record(self, payroll_id) -> PayrollRecord:
        record = self._payroll.get_by_id(require_positive_int(payroll_id, "payroll id"))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def list_records(self, *, month=None, year=None, employee_id=None) -> Sequence[PayrollRecord]:
        return self._payroll.list_records(
            month=require_month(month) if month else None,
            year=require_year(year) if year else None,
            employee_id=require_positive_int(employee_id, "employee_id") if employee_id else None,
        )
