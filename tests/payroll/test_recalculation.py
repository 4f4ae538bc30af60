from datetime import date
from decimal import Decimal

from src.hr_payroll.hr_payroll.core.enums import LeaveStatus, PayrollStatus
from src.hr_payroll.hr_payroll.payroll.model import PayrollRecord

from tests.fakes import FakePayrollRepo, build_engine, make_employee


def test_leave_across_two_months_updates_only_existing_records():
    engine = build_engine(make_employee(1, "20000"))
    feb = engine.payroll_service.create_or_upsert(employee_id=1, month=2, year=2025).record
    engine.leaves.create(
        employee_id=1,
        leave_type="casual",
        start_date=date(2025, 1, 28),
        end_date=date(2025, 2, 3),
        status=LeaveStatus.APPROVED,
    )

    summary = engine.recalculator.recalc_for_leave_change(1, "2025-01-28", date(2025, 2, 3))

    assert summary.updated == [(2, 2025)]
    assert summary.skipped == [(1, 2025)]
    assert summary.failed == []
    assert engine.payroll.get_for_period(1, 1, 2025) is None
    refreshed = engine.payroll.get_by_id(feb.payroll_id)
    assert refreshed.leave_deduction == Decimal("666.67")
    assert refreshed.net_salary == Decimal("17333.33")


def test_records_without_salary_are_skipped():
    engine = build_engine(make_employee(1, "20000"))
    engine.payroll.seed(
        PayrollRecord(
            payroll_id=1,
            employee_id=1,
            month=3,
            year=2025,
            basic_salary=Decimal("0.00"),
            allowances=Decimal("0.00"),
            deductions=Decimal("0.00"),
            leave_deduction=Decimal("0.00"),
            tds=Decimal("0.00"),
            net_salary=Decimal("0.00"),
            status=PayrollStatus.PENDING,
        )
    )

    summary = engine.recalculator.recalc_for_leave_change(1, date(2025, 3, 1), date(2025, 3, 10))

    assert summary.skipped == [(3, 2025)]
    assert engine.payroll.writes == 0


def test_recalculation_keeps_status_allowances_and_other_deductions():
    engine = build_engine(make_employee(1, "20000"))
    record = engine.payroll_service.create_or_upsert(
        employee_id=1, month=1, year=2025, allowances="1000", deductions="300", status="processed"
    ).record
    engine.attendance.mark_on_leave(1, *(date(2025, 1, d) for d in range(6, 11)))

    engine.recalculator.recalc_for_leave_change(1, date(2025, 1, 6), date(2025, 1, 10))

    refreshed = engine.payroll.get_by_id(record.payroll_id)
    assert refreshed.status == PayrollStatus.PROCESSED
    assert refreshed.processed_at == record.processed_at
    assert refreshed.allowances == Decimal("1000.00")
    assert refreshed.other_deductions == Decimal("300.00")
    assert refreshed.leave_deduction == Decimal("2000.00")
    assert refreshed.net_salary == Decimal("21000.00") - Decimal("2000.00") - Decimal("2100.00") - Decimal("300.00")


def test_basic_salary_is_refreshed_from_the_employee():
    engine = build_engine(make_employee(1, "20000"))
    record = engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025).record
    engine.employees.set_salary(1, "30000")

    engine.recalculator.recalc_for_leave_change(1, date(2025, 1, 1), date(2025, 1, 1))

    assert engine.payroll.get_by_id(record.payroll_id).basic_salary == Decimal("30000.00")


def test_one_failing_month_does_not_stop_the_others():
    class FlakyPayrollRepo(FakePayrollRepo):
        def update(self, *, payroll_id, figures, status, processed_at):
            if self.rows[payroll_id].month == 1:
                raise RuntimeError("deadlock")
            return super().update(payroll_id=payroll_id, figures=figures, status=status, processed_at=processed_at)

    engine = build_engine(make_employee(1, "20000"))
    flaky = FlakyPayrollRepo()
    engine.payroll_service._payroll = flaky
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025)
    engine.payroll_service.create_or_upsert(employee_id=1, month=2, year=2025)

    summary = engine.recalculator.recalc_for_leave_change(1, date(2025, 1, 15), date(2025, 2, 15))

    assert summary.failed == [(1, 2025)]
    assert summary.updated == [(2, 2025)]


def test_invalid_input_is_logged_and_ignored():
    engine = build_engine(make_employee(1, "20000"))
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025)
    writes = engine.payroll.writes

    for args in [
        ("abc", date(2025, 1, 1), date(2025, 1, 2)),
        (0, date(2025, 1, 1), date(2025, 1, 2)),
        (1.9, date(2025, 1, 1), date(2025, 1, 2)),
        (True, date(2025, 1, 1), date(2025, 1, 2)),
        (1, "not-a-date", date(2025, 1, 2)),
        (1, None, date(2025, 1, 2)),
        (1, date(2025, 1, 5), date(2025, 1, 2)),
    ]:
        summary = engine.recalculator.recalc_for_leave_change(*args)
        assert (summary.updated, summary.skipped, summary.failed) == ([], [], [])

    assert engine.payroll.writes == writes


def test_queue_runs_recalculation_and_swallows_errors():
    engine = build_engine(make_employee(1, "20000"))
    record = engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025).record
    engine.attendance.mark_on_leave(1, date(2025, 1, 6), date(2025, 1, 7), date(2025, 1, 8))

    engine.recalc_queue.enqueue(1, date(2025, 1, 8), date(2025, 1, 8))

    assert engine.payroll.get_by_id(record.payroll_id).leave_deduction == Decimal("666.67")

    def boom(*args):
        raise RuntimeError("boom")

    engine.recalculator.recalc_for_leave_change = boom
    engine.recalc_queue.enqueue(1, date(2025, 1, 8), date(2025, 1, 8))
