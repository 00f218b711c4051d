"""
Exception classes for habit-stats.
"""


class HabitStatsError(Exception):
    """Base exception for all habit-stats errors."""
    pass


class ConfigurationError(HabitStatsError):
    """Raised when configuration is invalid or missing."""
    pass


class StorageError(HabitStatsError):
    """Base exception for storage collaborator errors."""
    pass


class HabitFetchError(StorageError):
    """Raised when completions for a single habit cannot be fetched."""

    def __init__(self, habit_id, cause: Exception):
        self.habit_id = habit_id
        self.cause = cause
        super().__init__(f"Failed to fetch completions for habit {habit_id}: {cause}")
