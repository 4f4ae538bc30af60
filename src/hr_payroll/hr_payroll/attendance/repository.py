from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[time] = None,
        check_out_time: Optional[time] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_on_leave(self, employee_id: int, *, start_date: date, end_date: date) -> int:
        """on_leave rows with start_date <= date <= end_date."""

        raise NotImplementedError

    def count_on_leave_in_month(self, employee_id: int, *, month: int, year: int) -> int:
        """Simpler month/year match, used when the range query fails."""

        raise NotImplementedError
