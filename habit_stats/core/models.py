"""
Domain models for habit-stats.

This module contains the core data structures shared by the storage
boundary and the analytics engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional
import os

from .exceptions import ConfigurationError
from ..utils.date import MONTH_NAMES, days_in_month, format_date, to_date
from ..utils.io import safe_read_json, safe_write_json


FETCH_ERROR_POLICIES = ("omit", "raise")


_INT_FIELDS = ("streak_target", "strong_threshold", "fair_threshold", "fetch_workers")
_FLOAT_FIELDS = ("ratio_weight", "streak_weight", "gap_weight", "min_recency_score")


def _normalize_path(path: str) -> str:
    """Expand user and convert to absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def _is_number(value: Any, integral: bool = False) -> bool:
    if isinstance(value, bool):
        return False
    if integral:
        return isinstance(value, int)
    return isinstance(value, (int, float))


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """A nested config section; missing or null sections are empty."""
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Config section '{key}' must be an object, got {type(section).__name__}"
        )
    return section


@dataclass
class Habit:
    """A user-defined daily habit, owned by the storage collaborator."""

    name: str
    created_at: datetime
    id: Optional[int] = None

    def __post_init__(self) -> None:
        self.name = self.name.strip()


@dataclass
class CompletionRecord:
    """One (habit, day) completion flag. ``month`` is zero-based (0-11)."""

    habit_id: int
    year: int
    month: int
    day: int
    completed: bool = True
    id: Optional[int] = None

    @property
    def as_date(self) -> date:
        return to_date(self.year, self.month, self.day)

    def in_month(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month


@dataclass
class StreakResult:
    """Current and best streak for one habit."""

    current_streak: int = 0
    best_streak: int = 0
    best_streak_start_date: Optional[date] = None


@dataclass
class HabitStats:
    """Derived per-habit statistics for a reporting period. Never persisted."""

    habit_id: int
    habit_name: str
    current_streak: int
    best_streak: int
    best_streak_start_date: Optional[date]
    total_completions: int
    monthly_completions: int
    monthly_consistency: int
    yearly_consistency: int
    days_since_creation: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "habit_id": self.habit_id,
            "habit_name": self.habit_name,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "best_streak_start_date": format_date(self.best_streak_start_date),
            "total_completions": self.total_completions,
            "monthly_completions": self.monthly_completions,
            "monthly_consistency": self.monthly_consistency,
            "yearly_consistency": self.yearly_consistency,
            "days_since_creation": self.days_since_creation,
        }


@dataclass
class MonthlyBreakdownEntry:
    """Completion counts per habit name for one month of a year."""

    month_label: str
    counts_by_habit: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts_by_habit.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month_label,
            "breakdown": dict(self.counts_by_habit),
        }


@dataclass
class CrossHabitSummary:
    """Summary cards aggregated across every habit's stats."""

    best_streak_habit: Optional[HabitStats] = None
    most_completed_this_month: Optional[HabitStats] = None
    most_completed_this_year: Optional[HabitStats] = None
    total_completions_this_year: int = 0

    def to_dict(self) -> Dict[str, Any]:
        def _card(stats: Optional[HabitStats], value_attr: str) -> Optional[Dict[str, Any]]:
            if stats is None:
                return None
            return {
                "habit_id": stats.habit_id,
                "habit_name": stats.habit_name,
                "value": getattr(stats, value_attr),
            }

        best = _card(self.best_streak_habit, "best_streak")
        if best is not None:
            best["start_date"] = format_date(self.best_streak_habit.best_streak_start_date)

        return {
            "best_streak_habit": best,
            "most_completed_this_month": _card(self.most_completed_this_month, "monthly_completions"),
            "most_completed_this_year": _card(self.most_completed_this_year, "total_completions"),
            "total_completions_this_year": self.total_completions_this_year,
        }


@dataclass(frozen=True)
class ReportingPeriod:
    """A (year, zero-based month) pair scoping monthly statistics."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"Month must be zero-based (0-11), got {self.month}")

    @classmethod
    def containing(cls, day: date) -> ReportingPeriod:
        return cls(year=day.year, month=day.month - 1)

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month]

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def last_day(self) -> date:
        return to_date(self.year, self.month, self.days_in_month)

    def previous(self) -> ReportingPeriod:
        if self.month == 0:
            return ReportingPeriod(self.year - 1, 11)
        return ReportingPeriod(self.year, self.month - 1)

    def next(self) -> ReportingPeriod:
        if self.month == 11:
            return ReportingPeriod(self.year + 1, 0)
        return ReportingPeriod(self.year, self.month + 1)

    def is_current(self, today: date) -> bool:
        return self.year == today.year and self.month == today.month - 1

    def days_elapsed(self, today: date) -> int:
        """
        Days counted for consistency scoring.

        The current month counts up to and including today; any other
        month, past or future, is treated as fully elapsed.
        """
        if self.is_current(today):
            return today.day
        return self.days_in_month

    def reference_day(self, today: date) -> date:
        """The "today" used for recency scoring within this period."""
        if self.is_current(today):
            return today
        return self.last_day


@dataclass
class AnalyticsConfig:
    """Tunable parameters for scoring and storage fan-out."""

    streak_target: int = 4
    ratio_weight: float = 0.5
    streak_weight: float = 0.25
    gap_weight: float = 0.25
    min_recency_score: float = 0.2
    # Consistency bands
    strong_threshold: int = 70
    fair_threshold: int = 40
    # Storage fan-out
    fetch_workers: int = 1
    on_fetch_error: str = "omit"  # "omit" or "raise"

    def validate(self) -> None:
        """Raise ConfigurationError if the settings are inconsistent."""
        for name in _INT_FIELDS:
            if not _is_number(getattr(self, name), integral=True):
                raise ConfigurationError(f"{name} must be an integer, got {getattr(self, name)!r}")
        for name in _FLOAT_FIELDS:
            if not _is_number(getattr(self, name)):
                raise ConfigurationError(f"{name} must be a number, got {getattr(self, name)!r}")
        if not isinstance(self.on_fetch_error, str):
            raise ConfigurationError(f"on_fetch_error must be a string, got {self.on_fetch_error!r}")

        weights = (self.ratio_weight, self.streak_weight, self.gap_weight)
        if any(w < 0 for w in weights):
            raise ConfigurationError("Scoring weights must be non-negative")
        if abs(sum(weights) - 1.0) > 1e-9:
            raise ConfigurationError(
                f"Scoring weights must sum to 1.0, got {sum(weights):.4f}"
            )
        if self.streak_target < 1:
            raise ConfigurationError("streak_target must be at least 1")
        if not 0 <= self.min_recency_score <= 1:
            raise ConfigurationError("min_recency_score must be between 0 and 1")
        if not 0 <= self.fair_threshold <= self.strong_threshold <= 100:
            raise ConfigurationError(
                "Band thresholds must satisfy 0 <= fair_threshold <= strong_threshold <= 100"
            )
        if self.fetch_workers < 1:
            raise ConfigurationError("fetch_workers must be at least 1")
        if self.on_fetch_error not in FETCH_ERROR_POLICIES:
            raise ConfigurationError(
                f"on_fetch_error must be one of {FETCH_ERROR_POLICIES}, got {self.on_fetch_error!r}"
            )

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    @classmethod
    def load_from_file(cls, config_path: str) -> AnalyticsConfig:
        data = safe_read_json(_normalize_path(config_path), default={})
        if not data:
            return cls()

        defaults = cls()
        scoring = _section(data, "scoring")
        bands = _section(data, "bands")
        storage = _section(data, "storage")

        config = cls(
            streak_target=scoring.get(
                "streak_target", data.get("streak_target", defaults.streak_target)
            ),
            ratio_weight=scoring.get(
                "ratio_weight", data.get("ratio_weight", defaults.ratio_weight)
            ),
            streak_weight=scoring.get(
                "streak_weight", data.get("streak_weight", defaults.streak_weight)
            ),
            gap_weight=scoring.get(
                "gap_weight", data.get("gap_weight", defaults.gap_weight)
            ),
            min_recency_score=scoring.get(
                "min_recency_score", data.get("min_recency_score", defaults.min_recency_score)
            ),
            strong_threshold=bands.get(
                "strong", data.get("strong_threshold", defaults.strong_threshold)
            ),
            fair_threshold=bands.get(
                "fair", data.get("fair_threshold", defaults.fair_threshold)
            ),
            fetch_workers=storage.get(
                "fetch_workers", data.get("fetch_workers", defaults.fetch_workers)
            ),
            on_fetch_error=storage.get(
                "on_fetch_error", data.get("on_fetch_error", defaults.on_fetch_error)
            ),
        )
        config.validate()
        return config

    def save_to_file(self, config_path: str) -> None:
        config_path = _normalize_path(config_path)

        data = {
            "scoring": {
                "streak_target": self.streak_target,
                "ratio_weight": self.ratio_weight,
                "streak_weight": self.streak_weight,
                "gap_weight": self.gap_weight,
                "min_recency_score": self.min_recency_score,
            },
            "bands": {
                "strong": self.strong_threshold,
                "fair": self.fair_threshold,
            },
            "storage": {
                "fetch_workers": self.fetch_workers,
                "on_fetch_error": self.on_fetch_error,
            },
        }

        if not safe_write_json(config_path, data):
            raise ConfigurationError(f"Could not write configuration to {config_path}")
