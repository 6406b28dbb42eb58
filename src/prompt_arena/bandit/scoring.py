"""Word scoring for the slate bandit.

Each candidate's pick and post rates are standardized against the whole
candidate population, clamped, and combined into one linear score. The
population statistics are computed once per call over every candidate passed
in, never incrementally.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..config import BanditConfig, ensure_valid_bandit_config
from ..models import ScoredWord, WordStat
from ..numbers import clamp, z_scores


def score_words(stats: Sequence[WordStat], config: BanditConfig) -> list[ScoredWord]:
    """Score and rank candidate words.

    Args:
        stats: The full candidate snapshot.
        config: Bandit parameters (clamp bound and metric weights).

    Returns:
        ScoredWords sorted by score descending. Ties keep input order.

    Raises:
        ConfigurationInvalid: If config holds unvalidated values.

    Example:
        ```python
        ranked = score_words(stats, BanditConfig())
        best = ranked[0].word
        ```
    """
    config = ensure_valid_bandit_config(config)
    if not stats:
        return []

    bound = config.z_score_clamp
    z_pick = z_scores([s.pick_rate for s in stats])
    z_post = z_scores([s.post_rate for s in stats])

    scored = []
    for stat, zp, zq in zip(stats, z_pick, z_post):
        zp = clamp(zp, -bound, bound)
        zq = clamp(zq, -bound, bound)
        scored.append(
            ScoredWord(
                word=stat.word,
                z_pick_rate=zp,
                z_post_rate=zq,
                score=config.weight_pick_rate * zp + config.weight_post_rate * zq,
            )
        )

    # sorted() is stable, so equal scores keep their original order
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    for rank, item in enumerate(ranked):
        item.rank = rank
    return ranked
