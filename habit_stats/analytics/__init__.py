"""Analytics modules for streaks, consistency scores and monthly breakdowns."""

from .streaks import StreakAnalyzer, longest_run
from .consistency import ConsistencyScorer, consistency_band, rank_by_consistency, yearly_consistency
from .breakdown import MonthlyBreakdownAggregator
from .engine import AnalyticsEngine

__all__ = [
    'StreakAnalyzer',
    'longest_run',
    'ConsistencyScorer',
    'consistency_band',
    'rank_by_consistency',
    'yearly_consistency',
    'MonthlyBreakdownAggregator',
    'AnalyticsEngine'
]
