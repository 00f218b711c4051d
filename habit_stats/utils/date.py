"""
Calendar date helpers.

Months passed to these helpers are zero-based (0 = January), matching the
way completion records are stored. Every comparison happens at day
granularity: datetimes are truncated to their calendar date first.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

MONTH_ABBREVIATIONS = [name[:3] for name in MONTH_NAMES]


def normalize_date(value: DateLike) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_date(year: int, zero_based_month: int, day: int) -> date:
    """Build a calendar day from a stored (year, 0-11 month, day) triple."""
    return date(year, zero_based_month + 1, day)


def days_in_month(year: int, zero_based_month: int) -> int:
    """Number of days in the month, leap years included."""
    return calendar.monthrange(year, zero_based_month + 1)[1]


def day_gap(earlier: DateLike, later: DateLike) -> int:
    """Whole days from ``earlier`` to ``later``; negative if ``later`` comes first."""
    return (normalize_date(later) - normalize_date(earlier)).days


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return normalize_date(a) == normalize_date(b)


def as_local_naive(value: DateLike) -> datetime:
    """
    Convert to a naive local datetime.

    Plain dates become midnight; aware datetimes are converted to the local
    zone before their tzinfo is dropped.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def whole_days_between(start: DateLike, end: DateLike) -> int:
    """Floored number of 24-hour periods from ``start`` to ``end``."""
    return (as_local_naive(end) - as_local_naive(start)) // timedelta(days=1)


def format_date(d: Optional[date]) -> Optional[str]:
    """Format a date as ISO string (YYYY-MM-DD), or None."""
    if not d:
        return None

    return d.strftime('%Y-%m-%d')


def format_long_date(d: Optional[date]) -> str:
    """Format a date as e.g. "January 5, 2025"; empty string for None."""
    if not d:
        return ''

    return f"{MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"
