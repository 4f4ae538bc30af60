from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from .model import LedgerEntry


class LedgerRepository(Protocol):
    def sum_paid_gross(self, month: int, year: int) -> Decimal:
        """Sum of basic_salary + allowances over paid payroll records of the month."""

        raise NotImplementedError

    def upsert_amount(self, *, head: str, month: int, year: int, amount: Decimal) -> LedgerEntry:
        raise NotImplementedError
