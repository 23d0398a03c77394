"""Calendar month windows: range expansion and parsing."""

import re
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from ledgerstat.domain.entities import MonthKey, Timephase
from ledgerstat.domain.errors import ValidationError, invalid_month

_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


def expand_month_range(start: MonthKey, end: MonthKey) -> list[MonthKey]:
    """Expand a month window into the months it spans.

    Args:
        start: (year, month) of the first month
        end: (year, month) of the last month, inclusive

    Returns:
        Ordered list of (year, month) pairs; empty if end is before start.
        The window is not reordered here.
    """
    year, month = start
    end_year, end_month = end
    months: list[MonthKey] = []
    while (year, month) <= (end_year, end_month):
        months.append((year, month))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return months


def order_timephase(start: MonthKey, end: MonthKey) -> Timephase:
    """Return the window with its endpoints in chronological order."""
    if end < start:
        return (end, start)
    return (start, end)


def timephase_from_now(months: int, today: Optional[date] = None) -> Timephase:
    """Window covering the last N months, counting the current month as 1.

    Args:
        months: Number of months; values below 1 are treated as 1
        today: Reference date (defaults to today)

    Returns:
        ((start_year, start_month), (end_year, end_month))
    """
    today = today or date.today()
    months = max(months, 1)
    first = today.replace(day=1) - relativedelta(months=months - 1)
    return ((first.year, first.month), (today.year, today.month))


def parse_month(value: str) -> MonthKey:
    """Parse a 'YYYY-MM' string into a (year, month) pair.

    Raises:
        ValidationError: If the string is malformed or the month is out of range
    """
    match = _MONTH_RE.match(value or "")
    if match is None:
        raise ValidationError(invalid_month(value))
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(invalid_month(value))
    return (year, month)


def format_month(key: MonthKey) -> str:
    """Format a (year, month) pair as 'YYYY-MM'."""
    return f"{key[0]:04d}-{key[1]:02d}"
