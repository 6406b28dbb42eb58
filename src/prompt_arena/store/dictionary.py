"""In-memory word statistics store.

Holds each community's dictionary as an ordered mapping of normalized word
to its counters and derived statistics. Replacing a dictionary swaps the
whole table under a lock, so readers always see either the old or the new
word set and never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..exceptions import DictionaryError
from ..models import WordCounts, WordPage, WordStat
from ..numbers import smoothed_pick_rate, smoothed_post_rate

logger = logging.getLogger(__name__)


def normalize_word(word: str) -> str:
    """Trim a word and capitalize each space-separated part.

    Example:
        ```python
        normalize_word("  hot DOG ")  # "Hot Dog"
        ```
    """
    return " ".join(part[:1].upper() + part[1:].lower() for part in word.strip().split(" "))


class _Entry:
    __slots__ = ("stat", "counts")

    def __init__(self, stat: WordStat, counts: WordCounts):
        self.stat = stat
        self.counts = counts


class WordStatsStore:
    """Per-community word statistics with score-preserving replaces.

    Example:
        ```python
        store = WordStatsStore()
        store.replace_dictionary("drawing", ["cat", "dog", "tree"])
        store.record_served("drawing", ["Cat", "Dog", "Tree"])
        store.record_picked("drawing", "Dog")
        store.refresh_rates("drawing")
        slate = select_slate(store.snapshot("drawing"), config, 3)
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables: dict[str, dict[str, _Entry]] = {}
        self._banned: dict[str, set[str]] = {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self, community: str) -> list[WordStat]:
        """Return every word's statistics, fully materialized."""
        with self._lock:
            table = self._tables.get(community, {})
            return [entry.stat.model_copy() for entry in table.values()]

    def get_word_stats(
        self,
        community: str,
        offset: int = 0,
        limit: int = 1000,
    ) -> WordPage:
        """Read one page of a community's word statistics.

        Args:
            community: Community id.
            offset: Index of the first word to return.
            limit: Maximum number of words on the page.

        Returns:
            WordPage with the page's words and pagination info.
        """
        if offset < 0 or limit < 1:
            raise ValueError(f"Invalid page: offset={offset}, limit={limit}")
        words = self.snapshot(community)
        return WordPage(
            words=words[offset : offset + limit],
            total=len(words),
            has_more=offset + limit < len(words),
        )

    def get_counts(self, community: str, word: str) -> WordCounts:
        """Return the raw counters for a word.

        Raises:
            DictionaryError: If the word is not in the dictionary.
        """
        with self._lock:
            entry = self._lookup(community, word)
            return entry.counts.model_copy()

    def has_word(self, community: str, word: str) -> bool:
        with self._lock:
            return normalize_word(word) in self._tables.get(community, {})

    def banned_words(self, community: str) -> list[str]:
        with self._lock:
            return sorted(self._banned.get(community, set()))

    # ------------------------------------------------------------------
    # Dictionary edits
    # ------------------------------------------------------------------

    def replace_dictionary(self, community: str, words: Iterable[str]) -> None:
        """Replace a community's dictionary, preserving surviving scores.

        Words in both the old and new sets keep their statistics, words only
        in the new set start at zero, and words only in the old set are
        dropped. Banned words are filtered out.

        Args:
            community: Community id.
            words: The complete new word list.
        """
        with self._lock:
            banned = self._banned.get(community, set())
            old = self._tables.get(community, {})
            new: dict[str, _Entry] = {}
            for raw in words:
                word = normalize_word(raw)
                if not word or word in banned or word in new:
                    continue
                new[word] = old.get(word) or _new_entry(word)

            kept = sum(1 for word in new if word in old)
            self._tables[community] = new

        logger.info(
            f"Replaced dictionary for '{community}': "
            f"kept={kept} added={len(new) - kept} removed={len(old) - kept}"
        )

    def add_words(self, community: str, words: Iterable[str]) -> int:
        """Add words at zero statistics, skipping banned and existing ones.

        Returns:
            Number of words actually added.
        """
        added = 0
        with self._lock:
            banned = self._banned.get(community, set())
            table = dict(self._tables.get(community, {}))
            for raw in words:
                word = normalize_word(raw)
                if not word or word in banned or word in table:
                    continue
                table[word] = _new_entry(word)
                added += 1
            self._tables[community] = table
        return added

    def remove_word(self, community: str, word: str) -> bool:
        """Remove a word and its statistics. Returns whether it existed."""
        word = normalize_word(word)
        with self._lock:
            table = self._tables.get(community, {})
            if word not in table:
                return False
            table = dict(table)
            del table[word]
            self._tables[community] = table
        return True

    def ban_words(self, community: str, words: Iterable[str]) -> None:
        """Ban words, removing them from the dictionary."""
        normalized = {normalize_word(w) for w in words}
        with self._lock:
            self._banned.setdefault(community, set()).update(normalized)
            table = self._tables.get(community, {})
            self._tables[community] = {w: e for w, e in table.items() if w not in normalized}

    def unban_word(self, community: str, word: str) -> None:
        with self._lock:
            self._banned.get(community, set()).discard(normalize_word(word))

    # ------------------------------------------------------------------
    # Slate events
    # ------------------------------------------------------------------

    def record_served(self, community: str, words: Iterable[str]) -> None:
        """Count one impression for every word on a served slate."""
        self._increment(community, list(words), "served")

    def record_picked(self, community: str, word: str) -> None:
        """Count a player choosing a word from a slate."""
        self._increment(community, [word], "picked")

    def record_posted(self, community: str, word: str) -> None:
        """Count a finished drawing of a word being published."""
        self._increment(community, [word], "posted")

    def refresh_rates(self, community: str) -> None:
        """Recompute each word's rates from its counters.

        Rates use smoothing priors so a word with few impressions does not
        jump to an extreme rate. Words never served keep their current
        statistics, so rates seeded with load_stats survive a refresh.
        """
        with self._lock:
            table = self._tables.get(community, {})
            refreshed: dict[str, _Entry] = {}
            for word, entry in table.items():
                counts = entry.counts
                if counts.served == 0:
                    stat = entry.stat
                else:
                    stat = WordStat(
                        word=word,
                        pick_rate=smoothed_pick_rate(counts.served, counts.picked),
                        post_rate=smoothed_post_rate(counts.picked, counts.posted),
                        sample_size=counts.served,
                    )
                refreshed[word] = _Entry(stat, counts)
            self._tables[community] = refreshed

        logger.info(f"Refreshed rates for {len(refreshed)} words in '{community}'")

    def load_stats(self, community: str, stats: Iterable[WordStat]) -> None:
        """Seed statistics directly, for imports and fixtures.

        Existing words get the given statistics; counters are left alone.
        Seeded rates stay in place until the word is first served and
        refresh_rates recomputes them from its counters.
        Unknown words are added.
        """
        with self._lock:
            table = dict(self._tables.get(community, {}))
            for stat in stats:
                word = normalize_word(stat.word)
                counts = table[word].counts if word in table else WordCounts()
                table[word] = _Entry(stat.model_copy(update={"word": word}), counts)
            self._tables[community] = table

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(self, community: str, word: str) -> _Entry:
        normalized = normalize_word(word)
        entry = self._tables.get(community, {}).get(normalized)
        if entry is None:
            logger.warning(f"Unknown word '{normalized}' in '{community}'")
            raise DictionaryError(f"Word '{normalized}' is not in the dictionary", community)
        return entry

    def _increment(self, community: str, words: list[str], counter: str) -> None:
        with self._lock:
            # Validate every word before touching any counter
            entries = [self._lookup(community, word) for word in words]
            for entry in entries:
                counts = entry.counts
                entry.counts = counts.model_copy(
                    update={counter: getattr(counts, counter) + 1}
                )


def _new_entry(word: str) -> _Entry:
    return _Entry(WordStat(word=word), WordCounts())
