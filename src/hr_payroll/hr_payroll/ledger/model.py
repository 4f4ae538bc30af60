from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LedgerEntry:
    """One accounting head for one month (e.g. "Salary & Wages")."""

    entry_id: int
    head: str
    month: int
    year: int
    amount: Decimal
    subhead: Optional[str] = None
    tds_percentage: Decimal = Decimal("0")
    gst_percentage: Decimal = Decimal("0")
    frequency: str = "Monthly"
    remarks: Optional[str] = None
    updated_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "head": self.head,
            "subhead": self.subhead,
            "month": self.month,
            "year": self.year,
            "amount": self.amount,
            "tds_percentage": self.tds_percentage,
            "gst_percentage": self.gst_percentage,
            "frequency": self.frequency,
            "remarks": self.remarks,
            "updated_at": self.updated_at,
        }
