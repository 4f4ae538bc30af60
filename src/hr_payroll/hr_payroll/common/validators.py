from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_AMOUNT, MAX_YEAR, MIN_YEAR
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool) or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, (float, Decimal)):
        exact = Decimal(str(value))
        if not exact.is_finite() or exact != exact.to_integral_value():
            raise ValidationError(f"Invalid {field_name}. Must be a whole number.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}. Must be a number.")
    if number <= 0:
        raise ValidationError(f"Invalid {field_name}. Must be positive.")
    return number


def require_month(value: Any) -> int:
    month = require_positive_int(value, "month")
    if month > 12:
        raise ValidationError("Invalid month")
    return month


def require_year(value: Any) -> int:
    year = require_positive_int(value, "year")
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValidationError("Invalid year")
    return year


def optional_amount(value: Any, field_name: str) -> Optional[Decimal]:
    """Parse an optional non-negative money amount; None/"" means not supplied."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field_name} must not exceed {MAX_AMOUNT}")
    return amount


def optional_payroll_status(value: Any) -> Optional[PayrollStatus]:
    if value is None or value == "":
        return None
    try:
        return PayrollStatus(str(value))
    except ValueError:
        valid = ", ".join(s.value for s in PayrollStatus)
        raise ValidationError(f"Invalid status. Must be one of: {valid}")
