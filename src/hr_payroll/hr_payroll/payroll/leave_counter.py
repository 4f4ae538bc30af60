from __future__ import annotations

import logging

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.enums import LeaveStatus
from ..leaves.repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveDayCounter:
    """Counts leave days of one employee in one calendar month.

    Two sources are reconciled: attendance rows marked on_leave (what actually
    happened) and pending or approved leave applications (which may describe
    leave not yet reflected in attendance). Rejected applications do not count.
    The larger count wins.

    Counting never raises; a failing lookup must not block a payroll
    calculation.
    """

    def __init__(self, attendance: AttendanceRepository, leaves: LeaveRepository):
        self._attendance = attendance
        self._leaves = leaves

    def count(self, employee_id: int, month: int, year: int) -> int:
        try:
            return self._count_both_sources(employee_id, month, year)
        except Exception:
            logger.exception("Counting leave days failed for employee %s (%s/%s)", employee_id, month, year)

        try:
            days = int(self._attendance.count_on_leave_in_month(employee_id, month=month, year=year))
            logger.info("Employee %s: %s on_leave attendance days (fallback) in %s/%s", employee_id, days, month, year)
            return max(days, 0)
        except Exception:
            logger.exception("Fallback leave count also failed for employee %s (%s/%s)", employee_id, month, year)
            return 0

    def _count_both_sources(self, employee_id: int, month: int, year: int) -> int:
        month_start, month_end = month_bounds(month, year)

        from_attendance = int(
            self._attendance.count_on_leave(employee_id, start_date=month_start, end_date=month_end)
        )
        from_applications = sum(
            leave.overlap_days(month_start, month_end)
            for leave in self._leaves.list_overlapping(employee_id, start_date=month_start, end_date=month_end)
            if leave.status != LeaveStatus.REJECTED
        )
        days = max(from_attendance, from_applications, 0)

        logger.debug(
            "Employee %s: %s leave days in %s/%s (attendance=%s, applications=%s)",
            employee_id,
            days,
            month,
            year,
            from_attendance,
            from_applications,
        )
        return days
