from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

PRECISION = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """Convert DB/JSON numbers to Decimal; None becomes zero."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Any) -> Decimal:
    return to_decimal(value).quantize(PRECISION, rounding=ROUND_HALF_UP)


def differs(a: Any, b: Any, tolerance: Decimal) -> bool:
    """True when two amounts are further apart than ``tolerance`` after rounding."""
    return abs(round2(a) - round2(b)) > tolerance
