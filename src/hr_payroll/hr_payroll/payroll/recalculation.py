from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..common.background import TaskQueue
from ..common.datetime_utils import coerce_date, iter_months
from ..common.validators import require_positive_int
from ..core.exceptions import ValidationError
from .service import PayrollService

logger = logging.getLogger(__name__)


@dataclass
class RecalcSummary:
    updated: list[tuple[int, int]] = field(default_factory=list)
    skipped: list[tuple[int, int]] = field(default_factory=list)
    failed: list[tuple[int, int]] = field(default_factory=list)


class PayrollRecalculator:
    """Re-applies leave deductions to payroll records touched by a leave change."""

    def __init__(self, payroll_service: PayrollService):
        self._payroll_service = payroll_service

    def recalc_for_leave_change(self, employee_id, start_date, end_date) -> RecalcSummary:
        summary = RecalcSummary()
        try:
            emp_id = require_positive_int(employee_id, "employee_id")
        except ValidationError:
            logger.error("Invalid employee id for recalculation: %r", employee_id)
            return summary
        try:
            start, end = coerce_date(start_date), coerce_date(end_date)
        except (TypeError, ValueError):
            logger.error("Invalid dates for recalculation: %r to %r", start_date, end_date)
            return summary
        if start > end:
            logger.error("Recalculation range starts after it ends: %s to %s", start, end)
            return summary

        for month, year in iter_months(start, end):
            try:
                record = self._payroll_service.refresh_existing(emp_id, month, year)
            except Exception:
                logger.exception("Payroll recalculation failed for employee %s (%s/%s)", emp_id, month, year)
                summary.failed.append((month, year))
                continue
            if record is None:
                summary.skipped.append((month, year))
            else:
                summary.updated.append((month, year))

        logger.info(
            "Recalculated payroll for employee %s from %s to %s: %d updated, %d skipped, %d failed",
            emp_id,
            start,
            end,
            len(summary.updated),
            len(summary.skipped),
            len(summary.failed),
        )
        return summary


class RecalculationQueue:
    """Non-blocking front of the recalculator; callers never see task errors."""

    def __init__(self, recalculator: PayrollRecalculator, tasks: TaskQueue):
        self._recalculator = recalculator
        self._tasks = tasks

    def enqueue(self, employee_id, start_date, end_date) -> None:
        self._tasks.enqueue(
            f"payroll-recalc:{employee_id}",
            self._recalculator.recalc_for_leave_change,
            employee_id,
            start_date,
            end_date,
        )

    def shutdown(self, *, wait: bool = True) -> None:
        self._tasks.shutdown(wait=wait)
