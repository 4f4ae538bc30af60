from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_non_empty, require_positive_int
from ..core.enums import PRIVILEGED_ROLES, LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.recalculation import PayrollRecalculator, RecalculationQueue
from .model import LeaveApplication
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave applications and their approval flow.

    Approval decisions feed the payroll recalculation: auto-approved entries
    are queued, explicit approve/reject runs before the call returns.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        recalculator: PayrollRecalculator,
        recalc_queue: RecalculationQueue,
    ):
        self._leaves = leaves
        self._employees = employees
        self._recalculator = recalculator
        self._recalc_queue = recalc_queue

    @staticmethod
    def _require_approver(role: Optional[Role]) -> None:
        if role not in PRIVILEGED_ROLES:
            raise AuthorizationError("Only admin or HR can decide leave applications")

    def apply_leave(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: Optional[int],
        employee_id,
        leave_type: str,
        start_date,
        end_date,
        reason: Optional[str] = None,
    ) -> LeaveApplication:
        if not employee_id or not leave_type or not start_date or not end_date:
            raise ValidationError(
                "Required fields are missing: employee_id, leave_type, start_date, and end_date are required"
            )
        employee_id = require_positive_int(employee_id, "employee_id")
        leave_type = require_non_empty(leave_type, "leave_type")
        try:
            start, end = coerce_date(start_date), coerce_date(end_date)
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD format.")
        if start > end:
            raise ValidationError("Start date must be before or equal to end date.")

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(f"Employee with ID {employee_id} not found")

        status = LeaveStatus.APPROVED if current_role in PRIVILEGED_ROLES else LeaveStatus.PENDING
        leave = self._leaves.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason=(reason or "").strip() or None,
            status=status,
            applied_by=current_user_id,
        )
        logger.info("Leave %s created for employee %s with status %s", leave.leave_id, employee_id, status.value)

        if status == LeaveStatus.APPROVED:
            self._recalc_queue.enqueue(employee_id, start, end)
        return leave

    def approve_leave(self, *, current_role: Optional[Role], current_user_id: Optional[int], leave_id) -> LeaveApplication:
        self._require_approver(current_role)
        leave_id = require_positive_int(leave_id, "leave id")
        if not self._leaves.get_by_id(leave_id):
            raise NotFoundError("Leave not found")

        updated = self._leaves.decide(leave_id=leave_id, status=LeaveStatus.APPROVED, decided_by=current_user_id)
        if updated is None:
            raise NotFoundError("Leave not found")

        self._recalculator.recalc_for_leave_change(updated.employee_id, updated.start_date, updated.end_date)
        return updated

    def reject_leave(
        self,
        *,
        current_role: Optional[Role],
        current_user_id: Optional[int],
        leave_id,
        rejection_reason: Optional[str] = None,
    ) -> LeaveApplication:
        self._require_approver(current_role)
        leave_id = require_positive_int(leave_id, "leave id")
        previous = self._leaves.get_by_id(leave_id)
        if not previous:
            raise NotFoundError("Leave not found")

        updated = self._leaves.decide(
            leave_id=leave_id,
            status=LeaveStatus.REJECTED,
            decided_by=current_user_id,
            rejection_reason=(rejection_reason or "").strip() or None,
        )
        if updated is None:
            raise NotFoundError("Leave not found")

        # Pending leave can already be counted in a stored deduction.
        self._recalculator.recalc_for_leave_change(updated.employee_id, updated.start_date, updated.end_date)
        return updated

    def get_leave(self, leave_id) -> LeaveApplication:
        leave = self._leaves.get_by_id(require_positive_int(leave_id, "leave id"))
        if not leave:
            raise NotFoundError("Leave not found")
        return leave

    def list_leaves(
        self,
        *,
        status: Optional[str] = None,
        employee_id=None,
        upcoming: bool = False,
        today: Optional[date] = None,
    ) -> Sequence[LeaveApplication]:
        leave_status = None
        if status:
            try:
                leave_status = LeaveStatus(status)
            except ValueError:
                raise ValidationError("Invalid leave status")
        return self._leaves.list_applications(
            status=leave_status,
            employee_id=require_positive_int(employee_id, "employee_id") if employee_id else None,
            upcoming_from=(today or date.today()) if upcoming else None,
        )
