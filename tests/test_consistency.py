"""
Tests for consistency scoring (habit_stats/analytics/consistency.py).

Covers the weighted monthly score, its special cases, yearly consistency,
score bands and ranking.
"""

from datetime import date

import pytest

from habit_stats.analytics.consistency import (
    ConsistencyScorer,
    consistency_band,
    rank_by_consistency,
    round_half_up,
    tracked_days_in_year,
    yearly_consistency,
)
from habit_stats.core.models import AnalyticsConfig, HabitStats


def _stats(name: str, score: int) -> HabitStats:
    return HabitStats(
        habit_id=hash(name) % 1000,
        habit_name=name,
        current_streak=0,
        best_streak=0,
        best_streak_start_date=None,
        total_completions=0,
        monthly_completions=0,
        monthly_consistency=score,
        yearly_consistency=0,
        days_since_creation=1,
    )


class TestConsistencyScorer:
    """Test suite for ConsistencyScorer.score."""

    def setup_method(self):
        self.scorer = ConsistencyScorer()

    def test_zero_completions(self):
        """No completions always scores 0."""
        assert self.scorer.score(0, 10, [], date(2025, 3, 10)) == 0

    def test_first_day_completed(self):
        """One day elapsed and completed scores 100."""
        assert self.scorer.score(1, 1, [date(2025, 3, 1)], date(2025, 3, 1)) == 100

    def test_full_month_of_daily_completions(self, run_of_days):
        """Every day of a 31-day month completed scores 100."""
        days = run_of_days(date(2025, 3, 1), 31)

        assert self.scorer.score(31, 31, days, date(2025, 3, 31)) == 100

    def test_half_the_days_in_one_run(self, run_of_days):
        """Five straight days out of ten: 25 + 25 + 25."""
        days = run_of_days(date(2025, 3, 1), 5)

        assert self.scorer.score(5, 10, days, date(2025, 3, 10)) == 75

    def test_every_other_day(self):
        """Alternate days halve the gap term: 25 + 6.25 + 12.5 -> 44."""
        days = [date(2025, 3, d) for d in (1, 3, 5, 7, 9)]

        assert self.scorer.score(5, 10, days, date(2025, 3, 10)) == 44

    def test_single_recent_completion(self):
        """A lone completion two days ago scores recency 1/3."""
        score = self.scorer.score(1, 10, [date(2025, 3, 8)], date(2025, 3, 10))

        # 5 + 6.25 + 8.33
        assert score == 20

    def test_single_completion_today(self):
        """A lone completion today gets the full gap term."""
        score = self.scorer.score(1, 10, [date(2025, 3, 10)], date(2025, 3, 10))

        assert score == 36

    def test_single_stale_completion_uses_floor(self):
        """Recency never drops below the 0.2 floor."""
        score = self.scorer.score(1, 31, [date(2025, 3, 1)], date(2025, 3, 31))

        # 1.61 + 6.25 + 5
        assert score == 13

    def test_single_completion_after_reference_day(self):
        """A completion dated after the reference day counts as fresh."""
        score = self.scorer.score(1, 10, [date(2025, 3, 12)], date(2025, 3, 10))

        assert score == 36

    def test_rounds_half_up(self):
        """37.5 rounds to 38."""
        score = self.scorer.score(1, 8, [date(2025, 3, 8)], date(2025, 3, 8))

        assert score == 38

    def test_monotonic_in_completion_count(self, run_of_days):
        """More consecutive completions never lower the score."""
        scores = [
            self.scorer.score(k, 10, run_of_days(date(2025, 3, 1), k), date(2025, 3, 10))
            for k in range(1, 11)
        ]

        assert scores == sorted(scores)
        assert scores[-1] == 100

    def test_score_stays_in_range(self, run_of_days):
        """Scores are clamped to 0-100 even with inconsistent input."""
        days = run_of_days(date(2025, 3, 1), 10)

        assert self.scorer.score(10, 5, days, date(2025, 3, 5)) == 100

    def test_custom_streak_target(self, run_of_days):
        """A shorter streak target saturates the streak term sooner."""
        scorer = ConsistencyScorer(AnalyticsConfig(streak_target=2))
        days = run_of_days(date(2025, 3, 1), 2)

        # 10 + 25 + 25
        assert scorer.score(2, 10, days, date(2025, 3, 10)) == 60


class TestGapScore:
    """Test suite for ConsistencyScorer.gap_score."""

    def setup_method(self):
        self.scorer = ConsistencyScorer()

    def test_consecutive_days(self, run_of_days):
        assert self.scorer.gap_score(run_of_days(date(2025, 3, 1), 3), 10, date(2025, 3, 10)) == 1.0

    def test_average_gap_of_four(self):
        days = [date(2025, 3, 1), date(2025, 3, 5), date(2025, 3, 9)]

        assert self.scorer.gap_score(days, 10, date(2025, 3, 10)) == pytest.approx(0.25)

    def test_no_dates(self):
        assert self.scorer.gap_score([], 10, date(2025, 3, 10)) == 1.0


class TestYearlyConsistency:
    """Test suite for yearly consistency helpers."""

    def test_percentage(self):
        assert yearly_consistency(10, 20) == 50
        assert yearly_consistency(1, 3) == 33

    def test_capped_at_100(self):
        assert yearly_consistency(30, 20) == 100

    def test_nothing_tracked(self):
        assert yearly_consistency(0, 0) == 0

    def test_tracked_days_from_start_of_year(self):
        """A habit older than the year is tracked from Jan 1."""
        assert tracked_days_in_year(2025, date(2024, 6, 1), date(2025, 3, 15)) == 74

    def test_tracked_days_from_creation(self):
        assert tracked_days_in_year(2025, date(2025, 3, 10), date(2025, 3, 15)) == 6

    def test_tracked_days_past_year(self):
        """A finished year is tracked through Dec 31."""
        assert tracked_days_in_year(2024, date(2024, 6, 1), date(2025, 3, 15)) == 214

    def test_tracked_days_future_year(self):
        assert tracked_days_in_year(2026, date(2024, 6, 1), date(2025, 3, 15)) == 0


class TestBandsAndRanking:
    """Test suite for consistency bands and ranking."""

    def test_band_thresholds(self):
        assert consistency_band(100) == "strong"
        assert consistency_band(70) == "strong"
        assert consistency_band(69) == "fair"
        assert consistency_band(40) == "fair"
        assert consistency_band(39) == "weak"
        assert consistency_band(0) == "weak"

    def test_band_uses_config(self):
        config = AnalyticsConfig(strong_threshold=90, fair_threshold=50)

        assert consistency_band(80, config) == "fair"
        assert ConsistencyScorer(config).band(45) == "weak"

    def test_rank_lowest_first(self):
        stats = [_stats("Read", 80), _stats("Run", 20), _stats("Write", 55), _stats("Stretch", 20)]

        ranked = rank_by_consistency(stats)

        assert [s.habit_name for s in ranked] == ["Run", "Stretch", "Write", "Read"]

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(2.49) == 2
