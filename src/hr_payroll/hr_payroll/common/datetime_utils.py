from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Iterator, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or an ISO string; raise ValueError otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield (month, year) from the month of start to the month of end, inclusive."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield month, year
        month += 1
        if month > 12:
            month = 1
            year += 1
