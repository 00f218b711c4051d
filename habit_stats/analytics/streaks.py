"""
Streak detection over a habit's completed days.

A streak is a maximal run of calendar-consecutive completed days. Streaks
are recomputed on demand from the completion set; nothing is cached.
"""

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.models import StreakResult
from ..utils.date import DateLike, day_gap, normalize_date


def longest_run(sorted_dates: Sequence[DateLike]) -> int:
    """
    Length of the longest consecutive-day run in ascending dates.

    Returns 0 for an empty sequence. Only the length matters here, so ties
    between equal runs are irrelevant.
    """
    if not sorted_dates:
        return 0

    best = 1
    run = 1
    for prev, curr in zip(sorted_dates, sorted_dates[1:]):
        if day_gap(prev, curr) == 1:
            run += 1
        else:
            best = max(best, run)
            run = 1
    return max(best, run)


class StreakAnalyzer:
    """
    Computes current and best streaks for one habit.

    Input dates must be sorted ascending. "Today" is always passed in
    explicitly so results are deterministic.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def analyze(self, sorted_dates: Sequence[DateLike], today: DateLike) -> StreakResult:
        """
        Calculate current and best streak.

        Args:
            sorted_dates: Completed days for one habit, ascending
            today: Reference day anchoring the current streak

        Returns:
            StreakResult with current streak, best streak and the start
            date of the best streak (None when there are no completions)
        """
        if not sorted_dates:
            return StreakResult()

        days = [normalize_date(d) for d in sorted_dates]
        best_streak, best_start = self._best_streak(days)
        current_streak = self._current_streak(days, normalize_date(today))

        self.logger.debug(
            "Streaks over %d days: current=%d best=%d (from %s)",
            len(days), current_streak, best_streak, best_start
        )
        return StreakResult(
            current_streak=current_streak,
            best_streak=best_streak,
            best_streak_start_date=best_start,
        )

    @staticmethod
    def _best_streak(days: Sequence[date]):
        best_streak = 0
        best_start: Optional[date] = None
        run = 1
        run_start = days[0]

        for prev, curr in zip(days, days[1:]):
            gap = day_gap(prev, curr)
            if gap == 1:
                run += 1
            elif gap > 1:
                # >= so the most recent of equally long runs wins
                if run >= best_streak:
                    best_streak = run
                    best_start = run_start
                run = 1
                run_start = curr

        if run >= best_streak:
            best_streak = run
            best_start = run_start

        return best_streak, best_start

    @staticmethod
    def _current_streak(days: Sequence[date], today: date) -> int:
        last = days[-1]
        if last != today and last != today - timedelta(days=1):
            return 0

        streak = 1
        for i in range(len(days) - 1, 0, -1):
            if day_gap(days[i - 1], days[i]) == 1:
                streak += 1
            else:
                break
        return streak
