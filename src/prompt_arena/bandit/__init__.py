"""Slate bandit for Prompt Arena.

Turns a community's word statistics into a short slate of drawing prompts,
balancing proven words against under-sampled ones.

Components:
    - score_words: Standardize, clamp and weight word metrics into a ranking
    - select_slate: Epsilon-greedy selection of distinct words from the ranking

Example:
    ```python
    import random

    from prompt_arena.bandit import select_slate

    slate = select_slate(stats, config, slate_size=3, rng=random.Random(7))
    ```
"""

from .scoring import score_words
from .slate import RandomSource, select_slate

__all__ = [
    "RandomSource",
    "score_words",
    "select_slate",
]
