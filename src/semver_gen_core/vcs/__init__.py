from .base import HistoryStore
from .git_adapter import GitHistoryStore
from .memory import InMemoryHistoryStore

__all__ = [
    "HistoryStore",
    "GitHistoryStore",
    "InMemoryHistoryStore",
]
