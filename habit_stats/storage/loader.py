"""
Fan-out of per-habit completion reads against a HabitStore.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import HabitFetchError
from ..core.models import CompletionRecord, Habit
from .gateway import HabitStore


@dataclass
class LoadResult:
    """Completion records keyed by habit id, plus the fetches that failed."""

    records: Dict[int, List[CompletionRecord]] = field(default_factory=dict)
    failures: Dict[int, HabitFetchError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class CompletionLoader:
    """
    Loads completion records for many habits.

    Reads are independent, so they run sequentially (``max_workers=1``) or
    on a thread pool; results are keyed by habit id and never depend on
    arrival order. Habits without an id are skipped. A failed read is
    wrapped in HabitFetchError and reported in ``LoadResult.failures``;
    it never aborts the other reads.
    """

    def __init__(self, store: HabitStore, max_workers: int = 1, logger: Optional[logging.Logger] = None):
        self.store = store
        self.max_workers = max(1, max_workers)
        self.logger = logger or logging.getLogger(__name__)

    def load(self, habits: Iterable[Habit]) -> LoadResult:
        habit_ids = []
        for habit in habits:
            if habit.id is None:
                self.logger.debug("Skipping habit %r without an identifier", habit.name)
                continue
            if habit.id not in habit_ids:
                habit_ids.append(habit.id)

        self.logger.debug(
            "Fetching completions for %d habit(s) with %d worker(s)",
            len(habit_ids), self.max_workers
        )

        if self.max_workers == 1 or len(habit_ids) <= 1:
            outcomes = [self._fetch(habit_id) for habit_id in habit_ids]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(self._fetch, habit_ids))

        result = LoadResult()
        for habit_id, records, error in outcomes:
            if error is not None:
                self.logger.warning("%s", error)
                result.failures[habit_id] = error
            else:
                result.records[habit_id] = records
        return result

    def _fetch(self, habit_id: int) -> Tuple[int, List[CompletionRecord], Optional[HabitFetchError]]:
        try:
            return habit_id, list(self.store.list_completions(habit_id)), None
        except Exception as exc:
            return habit_id, [], HabitFetchError(habit_id, exc)
