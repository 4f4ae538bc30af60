from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError

from tests.fakes import build_engine, make_employee


def test_sync_uses_gross_of_paid_records_only():
    engine = build_engine(make_employee(1, "20000"), make_employee(2, "10000"))
    paid = engine.payroll_service.create_or_upsert(employee_id=1, month=1, year=2025, allowances="2000").record
    engine.payroll_service.create_or_upsert(employee_id=2, month=1, year=2025, status="processed")
    engine.ledger.fail = True
    engine.payroll_service.update(paid.payroll_id, status="paid")
    engine.ledger.fail = False

    entry = engine.ledger_sync.sync_salary("1", "2025")

    assert entry.head == "Salary & Wages"
    assert entry.amount == Decimal("22000.00")


def test_sync_updates_the_same_entry():
    engine = build_engine(make_employee(1, "20000"))

    first = engine.ledger_sync.sync_salary(3, 2025)
    second = engine.ledger_sync.sync_salary(3, 2025)

    assert first.amount == Decimal("0.00")
    assert second.entry_id == first.entry_id
    assert len(engine.ledger.entries) == 1


@pytest.mark.parametrize("month,year", [(None, 2025), (1, None), (0, 2025), (13, 2025), (1, 1999), ("x", 2025)])
def test_sync_validates_period(month, year):
    engine = build_engine(make_employee(1, "20000"))

    with pytest.raises(ValidationError):
        engine.ledger_sync.sync_salary(month, year)
