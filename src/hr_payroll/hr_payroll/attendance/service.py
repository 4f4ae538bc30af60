from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_positive_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.recalculation import RecalculationQueue
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        recalc_queue: Optional[RecalculationQueue] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._recalc_queue = recalc_queue

    @staticmethod
    def _parse_time(value: Optional[str]) -> Optional[time]:
        v = (value or "").strip()
        if not v:
            return None
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
        raise ValidationError("Invalid time (HH:MM)")

    def mark_attendance(
        self,
        *,
        employee_id,
        work_date,
        status,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        if not employee_id or not work_date or not status:
            raise ValidationError("Employee ID, date, and status are required")
        employee_id = require_positive_int(employee_id, "employee_id")
        try:
            new_status = AttendanceStatus(str(status))
        except ValueError:
            raise ValidationError("Invalid status. Must be present, absent, late, or on_leave")
        try:
            day: date = coerce_date(work_date)
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD format.")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.hire_date and day < employee.hire_date:
            raise ValidationError(
                f"Cannot mark attendance before employee's joining date ({employee.hire_date.isoformat()})"
            )

        previous = self._attendance.get_for_employee_and_date(employee_id, day)
        record = self._attendance.upsert(
            employee_id=employee_id,
            work_date=day,
            status=new_status,
            check_in_time=self._parse_time(check_in_time),
            check_out_time=self._parse_time(check_out_time),
            notes=(notes or "").strip() or None,
            location=(location or "").strip() or "office",
        )

        previous_status = previous.status if previous else None
        if AttendanceStatus.ON_LEAVE in (new_status, previous_status) and self._recalc_queue is not None:
            self._recalc_queue.enqueue(employee_id, day, day)
        return record

    def list_for_employee(self, employee_id, *, start_date=None, end_date=None) -> Sequence[AttendanceRecord]:
        employee_id = require_positive_int(employee_id, "employee_id")
        start = end = None
        if start_date and end_date:
            try:
                start, end = coerce_date(start_date), coerce_date(end_date)
            except ValueError:
                raise ValidationError("Invalid date format. Use YYYY-MM-DD format.")
        return self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)
