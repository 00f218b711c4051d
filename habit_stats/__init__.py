"""
habit-stats - streak, consistency and monthly analytics for daily habits.
"""

from .core import (
    AnalyticsConfig,
    CompletionRecord,
    CrossHabitSummary,
    Habit,
    HabitStats,
    MonthlyBreakdownEntry,
    ReportingPeriod,
)
from .analytics import AnalyticsEngine
from .storage import HabitStore, InMemoryHabitStore

__version__ = "1.0.0"

__all__ = [
    'AnalyticsConfig',
    'AnalyticsEngine',
    'CompletionRecord',
    'CrossHabitSummary',
    'Habit',
    'HabitStats',
    'HabitStore',
    'InMemoryHabitStore',
    'MonthlyBreakdownEntry',
    'ReportingPeriod',
]
