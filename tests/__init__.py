"""Test suite for habit-stats."""
