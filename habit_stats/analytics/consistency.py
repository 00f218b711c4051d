"""
Consistency scoring for a reporting period.

The monthly score blends three terms, each in [0, 1]:

- completion ratio: completions / days elapsed
- streak quality: best run within the period relative to a target run
  (4 days by default), saturating at 1
- gap regularity: 1 / average gap between completions, or a recency
  score when there is a single completion

With the default weights the score is
``round(100 * (0.5 * ratio + 0.25 * streak + 0.25 * gap))`` clamped to
0-100. Scores round half-up.
"""

import logging
import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..core.models import AnalyticsConfig, HabitStats
from ..utils.date import DateLike, day_gap
from .streaks import longest_run


STRONG = "strong"
FAIR = "fair"
WEAK = "weak"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


class ConsistencyScorer:
    """Scores how consistently a habit was completed within a period."""

    def __init__(self, config: Optional[AnalyticsConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or AnalyticsConfig()
        self.logger = logger or logging.getLogger(__name__)

    def score(
        self,
        completions: int,
        days_elapsed: int,
        sorted_dates: Sequence[DateLike],
        today: DateLike
    ) -> int:
        """
        Calculate the 0-100 consistency score.

        Args:
            completions: Completed days within the period
            days_elapsed: Days of the period counted so far (>= 1)
            sorted_dates: Completed days within the period, ascending
            today: Reference day for recency of a lone completion

        Returns:
            Integer score between 0 and 100
        """
        if completions <= 0:
            return 0

        # A brand-new habit done on its only day is fully consistent
        if days_elapsed == 1 and completions == 1:
            return 100

        cfg = self.config
        ratio = completions / max(1, days_elapsed)
        streak_quality = min(1.0, max(1, longest_run(sorted_dates)) / cfg.streak_target)
        gap_score = self.gap_score(sorted_dates, days_elapsed, today)

        raw = 100 * (
            cfg.ratio_weight * ratio
            + cfg.streak_weight * streak_quality
            + cfg.gap_weight * gap_score
        )
        result = clamp_score(raw)

        self.logger.debug(
            "Consistency: ratio=%.3f streak=%.3f gap=%.3f -> %d",
            ratio, streak_quality, gap_score, result
        )
        return result

    def gap_score(self, sorted_dates: Sequence[DateLike], days_elapsed: int, today: DateLike) -> float:
        """
        Regularity term in [0, 1].

        Two or more completions score the reciprocal of their average gap.
        A lone completion scores by recency when more than one day has
        elapsed: 1 if it is today, otherwise 1 / (days since + 1) with a
        floor of ``min_recency_score``.
        """
        if len(sorted_dates) >= 2:
            total_gap = sum(
                day_gap(prev, curr) for prev, curr in zip(sorted_dates, sorted_dates[1:])
            )
            average_gap = total_gap / (len(sorted_dates) - 1)
            if average_gap <= 0:
                return 1.0
            return min(1.0, 1 / average_gap)

        if len(sorted_dates) == 1 and days_elapsed > 1:
            days_since = day_gap(sorted_dates[0], today)
            # Completions dated after the reference day count as fresh
            if days_since <= 0:
                return 1.0
            return max(self.config.min_recency_score, 1 / (days_since + 1))

        return 1.0

    def band(self, score: int) -> str:
        return consistency_band(score, self.config)


def yearly_consistency(completions: int, tracked_days: int) -> int:
    """
    Completions as a percentage of tracked days, capped at 100.

    Returns 0 when nothing was tracked.
    """
    if tracked_days <= 0:
        return 0
    return min(100, round_half_up(completions / tracked_days * 100))


def tracked_days_in_year(year: int, created_on: date, today: date) -> int:
    """
    Days a habit was tracked during ``year``, both ends inclusive.

    The window runs from the later of Jan 1 and the creation day to the
    earlier of Dec 31 and today. Empty windows give 0.
    """
    start = max(date(year, 1, 1), created_on)
    end = min(date(year, 12, 31), today)
    if end < start:
        return 0
    return day_gap(start, end) + 1


def consistency_band(score: int, config: Optional[AnalyticsConfig] = None) -> str:
    """Classify a score as strong, fair or weak."""
    cfg = config or AnalyticsConfig()
    if score >= cfg.strong_threshold:
        return STRONG
    if score >= cfg.fair_threshold:
        return FAIR
    return WEAK


def rank_by_consistency(stats: Iterable[HabitStats]) -> List[HabitStats]:
    """Order stats by monthly consistency, lowest (needs most work) first."""
    return sorted(stats, key=lambda s: s.monthly_consistency)
