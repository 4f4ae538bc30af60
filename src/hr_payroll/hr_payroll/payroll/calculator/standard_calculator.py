from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from ...common.money import ZERO, round2, to_decimal
from ...core.constants import (
    DEFAULT_MAX_ALLOWED_LEAVES,
    DEFAULT_TDS_PERCENTAGE,
    DEFAULT_WORKING_DAYS_PER_MONTH,
    MAX_ALLOWED_LEAVES_KEY,
    TDS_PERCENTAGE_KEY,
    WORKING_DAYS_KEY,
)
from ...settings.provider import ConfigProvider
from ..leave_counter import LeaveDayCounter
from .base import DeductionCalculator

logger = logging.getLogger(__name__)


class StandardDeductionCalculator(DeductionCalculator):
    """Standard rules.

    Leave: days above the monthly allowance cost ``salary / working_days``
    each. TDS: a flat percentage of gross (basic + allowances).
    """

    def __init__(self, leave_counter: LeaveDayCounter, config: ConfigProvider):
        self._leave_counter = leave_counter
        self._config = config

    def _number(self, key: str, default: Any) -> Decimal:
        value = self._config.get(key, default)
        try:
            number = to_decimal(value)
        except (InvalidOperation, ValueError, TypeError):
            number = None
        if number is None or not number.is_finite():
            logger.warning("Setting %s=%r is not a finite number, using %s", key, value, default)
            return Decimal(default)
        return number

    def leave_deduction(self, employee_id: int, month: int, year: int, basic_salary: Decimal) -> Decimal:
        salary = to_decimal(basic_salary)
        if salary <= 0:
            return ZERO

        leave_days = self._leave_counter.count(employee_id, month, year)
        max_allowed = self._number(MAX_ALLOWED_LEAVES_KEY, DEFAULT_MAX_ALLOWED_LEAVES)
        if leave_days <= max_allowed:
            return ZERO

        excess = Decimal(leave_days) - max_allowed
        working_days = self._number(WORKING_DAYS_KEY, DEFAULT_WORKING_DAYS_PER_MONTH)
        if working_days <= 0:
            logger.warning("working_days_per_month=%s is not positive, using %s", working_days, DEFAULT_WORKING_DAYS_PER_MONTH)
            working_days = Decimal(DEFAULT_WORKING_DAYS_PER_MONTH)

        deduction = round2(salary / working_days * excess)
        logger.debug(
            "Employee %s %s/%s: %s leave days, %s over allowance, deduction %s",
            employee_id,
            month,
            year,
            leave_days,
            excess,
            deduction,
        )
        return deduction

    def tds(self, basic_salary: Decimal, allowances: Decimal) -> Decimal:
        gross = to_decimal(basic_salary) + to_decimal(allowances)
        if gross <= 0:
            return ZERO
        rate = self._number(TDS_PERCENTAGE_KEY, DEFAULT_TDS_PERCENTAGE) / Decimal(100)
        return round2(gross * rate)
