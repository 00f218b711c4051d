"""
Core module for habit-stats - contains domain models, configuration, and exceptions.
"""

from .models import (
    Habit,
    CompletionRecord,
    StreakResult,
    HabitStats,
    MonthlyBreakdownEntry,
    CrossHabitSummary,
    ReportingPeriod,
    AnalyticsConfig
)

from .exceptions import (
    HabitStatsError,
    ConfigurationError,
    StorageError,
    HabitFetchError
)

__all__ = [
    # Models
    'Habit',
    'CompletionRecord',
    'StreakResult',
    'HabitStats',
    'MonthlyBreakdownEntry',
    'CrossHabitSummary',
    'ReportingPeriod',
    'AnalyticsConfig',
    # Exceptions
    'HabitStatsError',
    'ConfigurationError',
    'StorageError',
    'HabitFetchError'
]
