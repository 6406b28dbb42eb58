"""Rating module for Prompt Arena.

This module provides the pairwise Elo updater used after tournament matches.

Components:
    - ELO: Elo rating model (expected score, rating deltas)
    - calculate_rating_change: Shortcut for ELO.calculate_rating_change
    - RatingTracker: In-memory ratings that apply deltas across matches

Example:
    ```python
    from prompt_arena.rating import calculate_rating_change

    result = calculate_rating_change(1000, 1400, k_factor=32)
    winner_rating += result.winner_change
    loser_rating += result.loser_change
    ```
"""

from .elo import ELO, RatingTracker, calculate_rating_change

__all__ = [
    "ELO",
    "RatingTracker",
    "calculate_rating_change",
]
