from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollFigures, PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, month: int, year: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        """Newest period first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        figures: PayrollFigures,
        status: PayrollStatus,
        processed_at: Optional[datetime] = None,
    ) -> PayrollRecord:
        raise NotImplementedError

    def update(
        self,
        *,
        payroll_id: int,
        figures: PayrollFigures,
        status: PayrollStatus,
        processed_at: Optional[datetime],
    ) -> PayrollRecord:
        raise NotImplementedError
