from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    leave_id: int
    employee_id: int
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
    applied_by: Optional[int] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    def overlap_days(self, start: date, end: date) -> int:
        """Days of this leave falling inside [start, end], never negative."""
        lo = max(self.start_date, start)
        hi = min(self.end_date, end)
        return max(0, (hi - lo).days + 1)

    def as_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "status": self.status.value,
            "reason": self.reason,
            "applied_by": self.applied_by,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at,
            "rejection_reason": self.rejection_reason,
            "created_at": self.created_at,
        }
