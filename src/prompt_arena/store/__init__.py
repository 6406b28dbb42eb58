"""Word statistics storage.

Provides an in-memory, thread-safe statistics store:
- WordStatsStore: Per-community dictionaries, slate events and rates
- normalize_word: Canonical form used for case-insensitive word identity
"""

from .dictionary import WordStatsStore, normalize_word

__all__ = [
    "WordStatsStore",
    "normalize_word",
]
