from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveApplication]:
        """Applications of any status with start <= end_date and end >= start_date.

        Callers decide which statuses count.
        """

        raise NotImplementedError

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        upcoming_from: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[LeaveApplication]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: Optional[int],
        rejection_reason: Optional[str] = None,
    ) -> Optional[LeaveApplication]:
        """Set approval state; returns the updated row or None if it vanished."""

        raise NotImplementedError
