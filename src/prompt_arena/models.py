"""Core data models for Prompt Arena.

This module defines the data structures shared by the bandit, the rating
updater and their collaborators:
- WordStat: per-word conversion statistics fed to the slate bandit
- WordCounts: raw served/picked/posted counters behind a WordStat
- ScoredWord: a word with its standardized metrics and combined score
- EloResult: signed rating deltas produced by a head-to-head result
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# A slate is an ordered list of distinct words offered to a player.
Slate = list[str]


class WordStat(BaseModel):
    """Conversion statistics for one dictionary word.

    Rates are conceptually near [0, 1] but are not clamped here; clamping
    happens on the standardized values during scoring.

    Attributes:
        word: The dictionary word.
        pick_rate: Rate at which the word was chosen when offered.
        post_rate: Rate at which a drawing of the word was published.
        sample_size: Number of times the word has been offered.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    word: str
    pick_rate: float = Field(default=0.0, ge=0.0)
    post_rate: float = Field(default=0.0, ge=0.0)
    sample_size: int = Field(default=0, ge=0)


class WordCounts(BaseModel):
    """Raw event counters for one word."""

    served: int = Field(default=0, ge=0)
    picked: int = Field(default=0, ge=0)
    posted: int = Field(default=0, ge=0)


class WordPage(BaseModel):
    """One page of a paginated dictionary read.

    Attributes:
        words: Word statistics on this page, in dictionary order.
        total: Number of words in the whole dictionary.
        has_more: Whether a later page exists.
    """

    words: list[WordStat] = Field(default_factory=list)
    total: int = 0
    has_more: bool = False


class ScoredWord(BaseModel):
    """A candidate word after standardization and weighting.

    Attributes:
        word: The dictionary word.
        z_pick_rate: Clamped z-score of the pick rate.
        z_post_rate: Clamped z-score of the post rate.
        score: Weighted combination of the clamped z-scores.
        rank: Zero-based position in the descending score order.
    """

    word: str
    z_pick_rate: float = 0.0
    z_post_rate: float = 0.0
    score: float = 0.0
    rank: int = 0


class EloResult(BaseModel):
    """Signed rating deltas for the two sides of a match.

    The deltas are rounded independently and need not sum to zero.
    """

    winner_change: int
    loser_change: int


class MatchRecord(BaseModel):
    """A recorded head-to-head result and the deltas it applied."""

    winner: str
    loser: str
    winner_change: int
    loser_change: int
