"""
History Module - Bounded log of past generations.
"""

from webmaker.history.store import DEFAULT_HISTORY_LIMIT, HistoryItem, HistoryStore

__all__ = ["DEFAULT_HISTORY_LIMIT", "HistoryItem", "HistoryStore"]
