"""Prompt Arena - Word-selection bandit and tournament ratings for drawing games.

Picks drawing prompts from a community dictionary with an epsilon-greedy
slate bandit, and rates players head-to-head with Elo.

Example:
    ```python
    import random

    from prompt_arena import ConfigProvider, WordStatsStore, calculate_rating_change, select_slate

    store = WordStatsStore()
    store.replace_dictionary("drawing", ["cat", "dog", "tree"])
    provider = ConfigProvider()

    slate = select_slate(store.snapshot("drawing"), provider.get_bandit_config(), 3)

    result = calculate_rating_change(1000, 1400, provider.get_k_factor())
    print(result.winner_change, result.loser_change)
    ```
"""

from .bandit import RandomSource, score_words, select_slate
from .config import (
    ArenaConfig,
    BanditConfig,
    ConfigProvider,
    RatingConfig,
    parse_bandit_form,
)
from .exceptions import ConfigurationInvalid, DictionaryError, PromptArenaError
from .models import (
    EloResult,
    MatchRecord,
    ScoredWord,
    Slate,
    WordCounts,
    WordPage,
    WordStat,
)
from .rating import ELO, RatingTracker, calculate_rating_change
from .reporter import TextReporter, print_results
from .store import WordStatsStore, normalize_word

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"  # fallback for editable installs without build

__all__ = [
    # Bandit
    "select_slate",
    "score_words",
    "RandomSource",
    # Rating
    "ELO",
    "RatingTracker",
    "calculate_rating_change",
    # Configuration
    "ArenaConfig",
    "BanditConfig",
    "RatingConfig",
    "ConfigProvider",
    "parse_bandit_form",
    # Store
    "WordStatsStore",
    "normalize_word",
    # Models
    "WordStat",
    "WordCounts",
    "WordPage",
    "ScoredWord",
    "Slate",
    "EloResult",
    "MatchRecord",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "PromptArenaError",
    "ConfigurationInvalid",
    "DictionaryError",
]
