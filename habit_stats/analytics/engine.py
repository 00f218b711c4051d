"""
Analytics facade.

Orchestrates streak detection, consistency scoring and the monthly
breakdown across every habit for a reporting period. The engine holds no
derived state: callers invoke it again after any mutation, and a newer
invocation simply supersedes an older result.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.exceptions import ConfigurationError
from ..core.models import (
    AnalyticsConfig,
    CompletionRecord,
    CrossHabitSummary,
    Habit,
    HabitStats,
    MonthlyBreakdownEntry,
    ReportingPeriod,
)
from ..storage.gateway import HabitStore
from ..storage.loader import CompletionLoader, LoadResult
from ..utils.date import DateLike, as_local_naive, normalize_date, whole_days_between
from .breakdown import MonthlyBreakdownAggregator
from .consistency import ConsistencyScorer, tracked_days_in_year, yearly_consistency
from .streaks import StreakAnalyzer


class AnalyticsEngine:
    """Computes per-habit stats, yearly breakdowns and summary cards."""

    def __init__(
        self,
        store: Optional[HabitStore] = None,
        config: Optional[AnalyticsConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.store = store
        self.config = config or AnalyticsConfig()
        self.config.validate()
        self.logger = logger or logging.getLogger(__name__)
        self.streaks = StreakAnalyzer(logger=self.logger)
        self.scorer = ConsistencyScorer(self.config, logger=self.logger)
        self.aggregator = MonthlyBreakdownAggregator()

    # ------------------------------------------------------------------
    # Storage-backed entry points
    # ------------------------------------------------------------------
    def load_completions(self, habits: Iterable[Habit]) -> LoadResult:
        """
        Fetch completion records for every habit with an identifier.

        With ``on_fetch_error="raise"`` the first failure (in habit order)
        is raised; otherwise failed habits are only reported in the result.
        """
        if self.store is None:
            raise ConfigurationError("AnalyticsEngine needs a HabitStore to load completions")

        habits = list(habits)
        loader = CompletionLoader(self.store, max_workers=self.config.fetch_workers, logger=self.logger)
        result = loader.load(habits)

        if result.failures and self.config.on_fetch_error == "raise":
            for habit in habits:
                if habit.id in result.failures:
                    raise result.failures[habit.id]
        return result

    def compute_stats(self, habits: Iterable[Habit], year: int, month: int, today: DateLike) -> List[HabitStats]:
        """
        Stats for each habit in the reporting period (year, zero-based month).

        Habits without an identifier are skipped, as are habits whose
        completions could not be fetched. A repeated identifier yields a
        single entry.
        """
        habits = list(habits)
        loaded = self.load_completions(habits)
        return self.compute_stats_from_records(habits, loaded.records, year, month, today)

    def compute_monthly_breakdown(self, habits: Iterable[Habit], year: int) -> List[MonthlyBreakdownEntry]:
        """Twelve per-month completion counts by habit name, January first."""
        habits = list(habits)
        loaded = self.load_completions(habits)
        return self.aggregator.aggregate(year, habits, loaded.records)

    # ------------------------------------------------------------------
    # Pure entry points
    # ------------------------------------------------------------------
    def compute_stats_from_records(
        self,
        habits: Iterable[Habit],
        records_by_habit: Dict[int, Sequence[CompletionRecord]],
        year: int,
        month: int,
        today: DateLike
    ) -> List[HabitStats]:
        period = ReportingPeriod(year, month)
        stats = []
        seen = set()
        for habit in habits:
            if habit.id is None or habit.id not in records_by_habit or habit.id in seen:
                continue
            seen.add(habit.id)
            stats.append(self.build_habit_stats(habit, records_by_habit[habit.id], period, today))
        return stats

    def build_habit_stats(
        self,
        habit: Habit,
        records: Iterable[CompletionRecord],
        period: ReportingPeriod,
        today: DateLike
    ) -> HabitStats:
        """Derive one habit's stats from its full completion history."""
        reference_day = normalize_date(today)
        completed = [r for r in records if r.completed]

        all_dates = sorted({r.as_date for r in completed})
        monthly = [r for r in completed if r.in_month(period.year, period.month)]
        monthly_dates = sorted({r.as_date for r in monthly})
        yearly_count = sum(1 for r in completed if r.year == period.year)

        streak = self.streaks.analyze(all_dates, reference_day)
        monthly_score = self.scorer.score(
            len(monthly),
            period.days_elapsed(reference_day),
            monthly_dates,
            period.reference_day(reference_day),
        )
        created_day = as_local_naive(habit.created_at).date()
        tracked = tracked_days_in_year(period.year, created_day, reference_day)

        stats = HabitStats(
            habit_id=habit.id,
            habit_name=habit.name,
            current_streak=streak.current_streak,
            best_streak=streak.best_streak,
            best_streak_start_date=streak.best_streak_start_date,
            total_completions=yearly_count,
            monthly_completions=len(monthly),
            monthly_consistency=monthly_score,
            yearly_consistency=yearly_consistency(yearly_count, tracked),
            days_since_creation=max(1, whole_days_between(habit.created_at, today)),
        )
        self.logger.debug(
            "Stats for %s in %s %d: streak=%d/%d month=%d score=%d",
            habit.name, period.month_name, period.year, stats.current_streak,
            stats.best_streak, stats.monthly_completions, stats.monthly_consistency
        )
        return stats

    @staticmethod
    def compute_cross_habit_summary(stats: Sequence[HabitStats]) -> CrossHabitSummary:
        """
        Summary cards across habits.

        Each "best" card keeps the first habit reaching the maximum, so
        ties go to the earlier habit. Every card is None for empty input.
        """
        if not stats:
            return CrossHabitSummary()

        def _first_max(attr: str) -> HabitStats:
            best = stats[0]
            for candidate in stats[1:]:
                if getattr(candidate, attr) > getattr(best, attr):
                    best = candidate
            return best

        return CrossHabitSummary(
            best_streak_habit=_first_max("best_streak"),
            most_completed_this_month=_first_max("monthly_completions"),
            most_completed_this_year=_first_max("total_completions"),
            total_completions_this_year=sum(s.total_completions for s in stats),
        )
