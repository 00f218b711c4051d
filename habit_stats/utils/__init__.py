"""
Utility functions for habit-stats.
"""

from .io import safe_read_json, safe_write_json
from .date import (
    MONTH_NAMES, MONTH_ABBREVIATIONS, normalize_date, to_date, days_in_month,
    day_gap, is_same_day, as_local_naive, whole_days_between,
    format_date, format_long_date
)

__all__ = [
    # I/O utilities
    'safe_read_json',
    'safe_write_json',
    # Date utilities
    'MONTH_NAMES',
    'MONTH_ABBREVIATIONS',
    'normalize_date',
    'to_date',
    'days_in_month',
    'day_gap',
    'is_same_day',
    'as_local_naive',
    'whole_days_between',
    'format_date',
    'format_long_date'
]
