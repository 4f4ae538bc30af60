from datetime import date, time
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus
from src.hr_payroll.hr_payroll.core.exceptions import NotFoundError, ValidationError

from tests.fakes import build_engine, make_employee


class SpyQueue:
    def __init__(self):
        self.calls = []

    def enqueue(self, employee_id, start_date, end_date):
        self.calls.append((employee_id, start_date, end_date))


def _mark(engine, day, status, **kwargs):
    return engine.attendance_service.mark_attendance(employee_id=1, work_date=day, status=status, **kwargs)


def test_marking_on_leave_recalculates_the_month():
    engine = build_engine(make_employee(1, "20000"))
    record = engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025).record

    for day in ("2025-01-06", "2025-01-07", "2025-01-08"):
        _mark(engine, day, "on_leave")

    refreshed = engine.payroll.get_by_id(record.payroll_id)
    assert refreshed.leave_deduction == Decimal("666.67")
    assert refreshed.net_salary == Decimal("17333.33")

    _mark(engine, "2025-01-08", "present")
    assert engine.payroll.get_by_id(record.payroll_id).net_salary == Decimal("18000.00")


def test_only_on_leave_transitions_trigger_recalculation():
    engine = build_engine(make_employee(1, "20000"))
    spy = SpyQueue()
    engine.attendance_service._recalc_queue = spy

    _mark(engine, "2025-01-06", "present")
    _mark(engine, "2025-01-06", "late")
    _mark(engine, "2025-01-06", "on_leave")
    _mark(engine, "2025-01-06", "absent")

    day = date(2025, 1, 6)
    assert spy.calls == [(1, day, day), (1, day, day)]


def test_marking_upserts_one_row_per_day():
    engine = build_engine(make_employee(1, "20000"))

    _mark(engine, "2025-01-06", "present", check_in_time="08:30", location=" ")
    record = _mark(engine, "2025-01-06", "late", check_in_time="09:15:00", notes="traffic")

    assert len(engine.attendance.rows) == 1
    assert record.status == AttendanceStatus.LATE
    assert record.check_in_time == time(9, 15)
    assert record.notes == "traffic"
    assert record.location == "office"


def test_cannot_mark_before_hire_date():
    engine = build_engine(make_employee(1, "20000", hire_date=date(2025, 2, 1)))

    with pytest.raises(ValidationError):
        _mark(engine, "2025-01-31", "present")


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(employee_id=1, work_date="2025-01-06", status="holiday"),
        dict(employee_id=1, work_date="06-01-2025", status="present"),
        dict(employee_id=None, work_date="2025-01-06", status="present"),
        dict(employee_id=1, work_date="2025-01-06", status="present", check_in_time="8am"),
    ],
)
def test_invalid_attendance_is_rejected(kwargs):
    engine = build_engine(make_employee(1, "20000"))

    with pytest.raises(ValidationError):
        engine.attendance_service.mark_attendance(**kwargs)


def test_unknown_employee():
    engine = build_engine(make_employee(1, "20000"))

    with pytest.raises(NotFoundError):
        engine.attendance_service.mark_attendance(employee_id=5, work_date="2025-01-06", status="present")
