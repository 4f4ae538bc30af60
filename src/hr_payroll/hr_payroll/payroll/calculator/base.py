from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class DeductionCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll deductions)."""

    @abstractmethod
    def leave_deduction(self, employee_id: int, month: int, year: int, basic_salary: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def tds(self, basic_salary: Decimal, allowances: Decimal) -> Decimal:
        raise NotImplementedError
