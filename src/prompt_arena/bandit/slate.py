"""Epsilon-greedy slate selection.

Every slot independently either exploits (takes the best-ranked word not yet
on the slate) or explores (draws uniformly from the unselected remainder),
so low-scoring and under-sampled words still surface periodically.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Protocol

from ..config import BanditConfig
from ..exceptions import ConfigurationInvalid
from ..models import Slate, WordStat
from .scoring import score_words

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """The subset of ``random.Random`` the bandit draws from."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


def select_slate(
    stats: Sequence[WordStat],
    config: BanditConfig,
    slate_size: int,
    rng: RandomSource | None = None,
) -> Slate:
    """Select a slate of distinct words from a statistics snapshot.

    Args:
        stats: Fully materialized candidate snapshot.
        config: One consistent BanditConfig snapshot for the whole call.
        slate_size: Maximum number of words to return (must be > 0).
        rng: Randomness source. A fresh ``random.Random()`` is used when
            omitted; pass a seeded one for reproducible slates.

    Returns:
        Up to ``slate_size`` distinct words. Empty when ``stats`` is empty;
        callers fall back to a default prompt set in that case.

    Raises:
        ConfigurationInvalid: If config is malformed or slate_size is not a
            positive integer.

    Example:
        ```python
        slate = select_slate(store.snapshot("drawing"), provider.get_bandit_config(), 3)
        ```
    """
    if isinstance(slate_size, bool) or not isinstance(slate_size, int) or slate_size <= 0:
        raise ConfigurationInvalid(
            f"slate size must be a positive integer, got {slate_size!r}", field="slate_size"
        )

    ranked = score_words(stats, config)
    if not ranked:
        return []
    if rng is None:
        rng = random.Random()

    # Remaining candidates stay in rank order, so the head is always the
    # best unselected word.
    remaining = [item.word for item in ranked]
    slate: Slate = []
    epsilon = config.exploration_rate

    while remaining and len(slate) < slate_size:
        if epsilon > 0 and rng.random() < epsilon:
            index = rng.randrange(len(remaining))
            logger.debug(f"Slot {len(slate)}: explore -> {remaining[index]}")
        else:
            index = 0
            logger.debug(f"Slot {len(slate)}: exploit -> {remaining[index]}")
        slate.append(remaining.pop(index))

    return slate
