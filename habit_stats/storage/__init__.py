"""Storage boundary: the store interface and completion loading."""

from .gateway import HabitStore, InMemoryHabitStore
from .loader import CompletionLoader, LoadResult

__all__ = ['HabitStore', 'InMemoryHabitStore', 'CompletionLoader', 'LoadResult']
