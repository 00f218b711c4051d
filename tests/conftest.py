#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- A fixed reference day so analytics results are deterministic
- An in-memory habit store and engine wired to it
- Common test fixtures and helpers
"""

import os
import sys
import tempfile
import shutil
from datetime import date, datetime, timedelta
from typing import Callable, Generator, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from habit_stats.analytics.engine import AnalyticsEngine
from habit_stats.storage.gateway import InMemoryHabitStore


REFERENCE_DAY = date(2025, 3, 15)


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = tempfile.mkdtemp(prefix="habit_stats_test_")
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def today() -> date:
    """Fixed reference day (Saturday, March 15 2025)."""
    return REFERENCE_DAY


@pytest.fixture
def run_of_days() -> Callable[[date, int], List[date]]:
    """Build ``count`` consecutive days starting at ``start``."""
    def _build(start: date, count: int) -> List[date]:
        return [start + timedelta(days=i) for i in range(count)]
    return _build


@pytest.fixture
def store() -> InMemoryHabitStore:
    return InMemoryHabitStore()


@pytest.fixture
def engine(store: InMemoryHabitStore) -> AnalyticsEngine:
    return AnalyticsEngine(store)


def complete_days(store: InMemoryHabitStore, habit_id: int, days: List[date]) -> None:
    """Toggle each day on for a habit (months stored zero-based)."""
    for d in days:
        store.toggle_completion(habit_id, d.year, d.month - 1, d.day)


def midnight(d: date) -> datetime:
    return datetime(d.year, d.month, d.day)
