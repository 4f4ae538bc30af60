from __future__ import annotations

import logging

from ..common.money import round2
from ..common.validators import require_month, require_year
from ..core.constants import SALARY_LEDGER_HEAD
from ..core.exceptions import ValidationError
from .model import LedgerEntry
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerSyncService:
    """Mirrors the month's paid gross salaries into the "Salary & Wages" head."""

    def __init__(self, ledger: LedgerRepository):
        self._ledger = ledger

    def sync_salary(self, month, year) -> LedgerEntry:
        if not month or not year:
            raise ValidationError("Month and year are required")
        month = require_month(month)
        year = require_year(year)

        total = round2(self._ledger.sum_paid_gross(month, year))
        entry = self._ledger.upsert_amount(head=SALARY_LEDGER_HEAD, month=month, year=year, amount=total)
        logger.info("Synced %s for %s/%s: %s in paid salaries", SALARY_LEDGER_HEAD, month, year, total)
        return entry
