from datetime import date
from decimal import Decimal

from tests.fakes import build_engine, make_employee


def _row(rows, employee_id):
    return next(r for r in rows if r["employee_id"] == employee_id)


def test_employees_without_records_get_a_projection_without_writes():
    engine = build_engine(make_employee(1, "20000"), make_employee(2, "10000"))
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025, allowances="1000")
    engine.attendance.mark_on_leave(2, *(date(2025, 1, d) for d in range(1, 6)))
    writes = engine.payroll.writes

    rows = engine.payroll_view.list_month(1, 2025)

    assert engine.payroll.writes == writes
    assert len(rows) == 2
    projected = _row(rows, 2)
    assert projected["payroll_id"] is None
    assert projected["allowances"] == Decimal("0.00")
    assert projected["basic_salary"] == Decimal("10000.00")
    assert projected["leave_deduction"] == Decimal("1000.00")
    assert projected["tds"] == Decimal("1000.00")
    assert projected["net_salary"] == Decimal("8000.00")
    assert projected["status"] == "pending"
    assert projected["payment_status"] == "unpaid"

    stored = _row(rows, 1)
    assert stored["payroll_id"] is not None
    assert stored["allowances"] == Decimal("1000.00")
    assert stored["has_drift"] is False


def test_listing_flags_drift_but_does_not_repair_it():
    engine = build_engine(make_employee(1, "20000"), settings={"tds_percentage": "10"})
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025)
    engine.settings_service.update_setting(key="tds_percentage", value="12")
    writes = engine.payroll.writes

    row = engine.payroll_view.list_month(1, 2025)[0]

    assert row["has_drift"] is True
    assert row["tds"] == Decimal("2000.00")
    assert engine.payroll.writes == writes


def test_reconcile_corrects_tds_after_rate_change():
    engine = build_engine(make_employee(1, "20000"), settings={"tds_percentage": "10"})
    record = engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025).record
    engine.settings_service.update_setting(key="tds_percentage", value="12")

    result = engine.payroll_view.reconcile_month(1, 2025)

    assert result.corrected == [record.payroll_id]
    stored = engine.payroll.get_by_id(record.payroll_id)
    assert stored.tds == Decimal("2400.00")
    assert stored.net_salary == Decimal("17600.00")
    assert result.rows[0]["net_salary"] == Decimal("17600.00")


def test_reconcile_is_idempotent():
    engine = build_engine(make_employee(1, "20000"), make_employee(2, "15000"))
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025, allowances="500", deductions="200")
    engine.employees.set_salary(1, "22000")
    engine.attendance.mark_on_leave(1, *(date(2025, 1, d) for d in range(1, 5)))

    first = engine.payroll_view.reconcile_month(1, 2025)
    writes = engine.payroll.writes
    second = engine.payroll_view.reconcile_month(1, 2025)

    assert len(first.corrected) == 1
    assert second.corrected == []
    assert engine.payroll.writes == writes
    assert second.rows == first.rows

    corrected = _row(first.rows, 1)
    assert corrected["basic_salary"] == Decimal("22000.00")
    assert corrected["other_deductions"] == Decimal("200.00")
    assert corrected["allowances"] == Decimal("500.00")


def test_list_with_reconcile_returns_repaired_rows():
    engine = build_engine(make_employee(1, "20000"))
    engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025)
    engine.employees.set_salary(1, "24000")

    rows = engine.payroll_view.list_month(1, 2025, reconcile=True)

    assert rows[0]["basic_salary"] == Decimal("24000.00")
    assert rows[0]["has_drift"] is False
    assert engine.payroll_view.list_month(1, 2025)[0]["has_drift"] is False
