"""
Per-month completion counts across a year.
"""

from typing import Dict, Iterable, List

from ..core.models import CompletionRecord, Habit, MonthlyBreakdownEntry
from ..utils.date import MONTH_ABBREVIATIONS


class MonthlyBreakdownAggregator:
    """
    Builds the twelve-month activity overview for one year.

    Every month of the year is present, future months included, and every
    habit appears in every month (with 0 when it has no completions).
    """

    def aggregate(
        self,
        year: int,
        habits: Iterable[Habit],
        records_by_habit: Dict[int, Iterable[CompletionRecord]]
    ) -> List[MonthlyBreakdownEntry]:
        """
        Count completed records per month and habit name.

        Args:
            year: Calendar year to aggregate
            habits: Habits in display order; those without an id are skipped
            records_by_habit: Completion records keyed by habit id. Habits
                              missing from the mapping are left out.

        Returns:
            Twelve entries, January first. Habits sharing a name share a
            key, the later habit's count wins.
        """
        entries = [MonthlyBreakdownEntry(month_label=label) for label in MONTH_ABBREVIATIONS]

        for habit in habits:
            if habit.id is None or habit.id not in records_by_habit:
                continue

            counts = [0] * 12
            for record in records_by_habit[habit.id]:
                if record.completed and record.year == year:
                    counts[record.month] += 1

            for entry, count in zip(entries, counts):
                entry.counts_by_habit[habit.name] = count

        return entries
