from datetime import date

from src.hr_payroll.hr_payroll.core.enums import LeaveStatus
from src.hr_payroll.hr_payroll.payroll.leave_counter import LeaveDayCounter

from tests.fakes import FakeAttendance, FakeLeaves


def _counter():
    attendance = FakeAttendance()
    leaves = FakeLeaves()
    return LeaveDayCounter(attendance, leaves), attendance, leaves


def test_takes_the_larger_of_attendance_and_applications():
    counter, attendance, leaves = _counter()
    attendance.mark_on_leave(1, date(2025, 1, 6), date(2025, 1, 7), date(2025, 1, 8))
    leaves.create(employee_id=1, leave_type="casual", start_date=date(2025, 1, 6), end_date=date(2025, 1, 7))

    assert counter.count(1, 1, 2025) == 3

    leaves.create(employee_id=1, leave_type="sick", start_date=date(2025, 1, 20), end_date=date(2025, 1, 22))
    assert counter.count(1, 1, 2025) == 5


def test_pending_and_approved_applications_are_both_counted():
    counter, attendance, leaves = _counter()
    attendance.mark_on_leave(1, *(date(2025, 3, d) for d in range(1, 5)))
    leaves.create(
        employee_id=1, leave_type="casual", start_date=date(2025, 3, 3), end_date=date(2025, 3, 4),
        status=LeaveStatus.PENDING,
    )
    leaves.create(
        employee_id=1, leave_type="casual", start_date=date(2025, 3, 10), end_date=date(2025, 3, 12),
        status=LeaveStatus.APPROVED,
    )

    assert counter.count(1, 3, 2025) == 5


def test_rejected_applications_are_ignored():
    counter, _, leaves = _counter()
    leaves.create(
        employee_id=1, leave_type="casual", start_date=date(2025, 3, 3), end_date=date(2025, 3, 9),
        status=LeaveStatus.REJECTED,
    )

    assert counter.count(1, 3, 2025) == 0


def test_applications_are_clipped_to_the_month():
    counter, _, leaves = _counter()
    leaves.create(employee_id=1, leave_type="casual", start_date=date(2025, 1, 30), end_date=date(2025, 2, 2))

    assert counter.count(1, 1, 2025) == 2
    assert counter.count(1, 2, 2025) == 2
    assert counter.count(1, 3, 2025) == 0


def test_other_employees_are_not_counted():
    counter, attendance, leaves = _counter()
    attendance.mark_on_leave(2, date(2025, 1, 6))
    leaves.create(employee_id=2, leave_type="casual", start_date=date(2025, 1, 6), end_date=date(2025, 1, 9))

    assert counter.count(1, 1, 2025) == 0


def test_falls_back_to_month_attendance_count_when_range_query_fails():
    counter, attendance, leaves = _counter()
    attendance.mark_on_leave(1, date(2025, 1, 6), date(2025, 1, 7))
    leaves.create(employee_id=1, leave_type="casual", start_date=date(2025, 1, 1), end_date=date(2025, 1, 10))
    attendance.fail_range = True

    assert counter.count(1, 1, 2025) == 2


def test_returns_zero_when_every_lookup_fails():
    counter, attendance, _ = _counter()
    attendance.fail_range = True
    attendance.fail_month = True

    assert counter.count(1, 1, 2025) == 0
