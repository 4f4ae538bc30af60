from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per employee per date."""

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date,
            "status": self.status.value,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
            "notes": self.notes,
            "location": self.location,
        }
