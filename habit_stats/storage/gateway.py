"""
Storage boundary consumed by the analytics engine.

Persistence is owned by an external collaborator; the engine only needs
two reads. ``InMemoryHabitStore`` is a complete in-process adapter used by
tests and by embedders that keep their data in memory.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..core.models import CompletionRecord, Habit
from ..utils.date import days_in_month


class HabitStore(ABC):
    """Read interface the analytics engine depends on."""

    @abstractmethod
    def list_habits(self) -> List[Habit]:
        """All habits in creation order."""

    @abstractmethod
    def list_completions(self, habit_id: int) -> List[CompletionRecord]:
        """Every completion record of one habit, in no particular order."""


DayKey = Tuple[int, int, int, int]


class InMemoryHabitStore(HabitStore):
    """
    Dictionary-backed store.

    Enforces one record per (habit, year, month, day): toggling flips the
    existing record instead of adding another.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._habits: Dict[int, Habit] = {}
        self._records: Dict[DayKey, CompletionRecord] = {}
        self._habit_ids = itertools.count(1)
        self._record_ids = itertools.count(1)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_habits(self) -> List[Habit]:
        with self._lock:
            habits = list(self._habits.values())
        return sorted(habits, key=lambda h: h.created_at)

    def list_completions(self, habit_id: int) -> List[CompletionRecord]:
        with self._lock:
            return [replace(r) for r in self._records.values() if r.habit_id == habit_id]

    def is_completed(self, habit_id: int, year: int, month: int, day: int) -> bool:
        with self._lock:
            record = self._records.get((habit_id, year, month, day))
            return bool(record and record.completed)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add_habit(self, name: str, created_at: Optional[datetime] = None) -> Habit:
        """Create a habit; the name is trimmed and must not be empty."""
        name = name.strip()
        if not name:
            raise ValueError("Habit name cannot be empty")

        with self._lock:
            habit = Habit(
                name=name,
                created_at=created_at or datetime.now(),
                id=next(self._habit_ids),
            )
            self._habits[habit.id] = habit
        self.logger.debug("Added habit %s (%s)", habit.id, habit.name)
        return habit

    def rename_habit(self, habit_id: int, name: str) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Habit name cannot be empty")
        with self._lock:
            self._habits[habit_id].name = name

    def delete_habit(self, habit_id: int) -> None:
        """Delete a habit together with all of its completion records."""
        with self._lock:
            self._habits.pop(habit_id, None)
            for key in [k for k in self._records if k[0] == habit_id]:
                del self._records[key]
        self.logger.debug("Deleted habit %s", habit_id)

    def toggle_completion(self, habit_id: int, year: int, month: int, day: int) -> CompletionRecord:
        """
        Flip the completion flag for one day, creating it completed on first use.

        ``month`` is zero-based.
        """
        if not 0 <= month <= 11 or not 1 <= day <= days_in_month(year, month):
            raise ValueError(f"Invalid day {year}-{month + 1:02d}-{day:02d}")

        key = (habit_id, year, month, day)
        with self._lock:
            record = self._records.get(key)
            if record is None:
                record = CompletionRecord(
                    habit_id=habit_id,
                    year=year,
                    month=month,
                    day=day,
                    completed=True,
                    id=next(self._record_ids),
                )
                self._records[key] = record
            else:
                record.completed = not record.completed
            return replace(record)
