"""Elo rating system for drawing tournaments.

This module implements the logistic Elo model used to adjust two players'
ratings after a head-to-head tournament result. The updater itself is pure:
it returns deltas and leaves applying them to the caller (for example a
RatingTracker).
"""

from __future__ import annotations

import threading

from ..config import DEFAULT_INITIAL_RATING, DEFAULT_K_FACTOR, ensure_valid_k_factor
from ..exceptions import ConfigurationInvalid
from ..models import EloResult, MatchRecord
from ..numbers import is_finite_number, round_half_up


class ELO:
    """Elo rating system for tournament rankings.

    The Elo system calculates rating changes from expected vs actual
    performance. After each match, the winner gains and the loser drops.

    Example:
        ```python
        # An underdog (1000) beats a favorite (1400)
        result = ELO.calculate_rating_change(1000, 1400, k_factor=32)
        # result.winner_change == 29, result.loser_change == -29

        # With a RatingTracker for several players
        tracker = ELO.create_tracker(["alice", "bob"])
        tracker.record_match("alice", "bob")  # alice wins
        print(tracker.get_rating("alice"))  # > 1200
        ```
    """

    DEFAULT_RATING = DEFAULT_INITIAL_RATING
    DEFAULT_K = DEFAULT_K_FACTOR

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Calculate expected score for player A against player B.

        Args:
            rating_a: Elo rating of player A.
            rating_b: Elo rating of player B.

        Returns:
            Probability of A winning, strictly between 0 and 1 for
            moderate rating gaps.

        Example:
            ```python
            ELO.expected_score(1200, 1200)  # 0.5
            ELO.expected_score(1400, 1200)  # ~0.76
            ```
        """
        return 1 / (1 + 10 ** ((rating_b - rating_a) / 400))

    @staticmethod
    def calculate_rating_change(
        winner_rating: float,
        loser_rating: float,
        k_factor: float = DEFAULT_K_FACTOR,
    ) -> EloResult:
        """Calculate the rating deltas for a finished match.

        Each side's delta is rounded on its own (halves round up), so the two
        deltas can differ by one in magnitude. Callers apply them with
        ``rating += change``.

        Args:
            winner_rating: Current rating of the winner.
            loser_rating: Current rating of the loser.
            k_factor: Maximum single-match swing (default 32).

        Returns:
            EloResult with a non-negative winner change and a non-positive
            loser change.

        Raises:
            ConfigurationInvalid: If k_factor is not a finite positive number
                or a rating is not finite.
        """
        k = ensure_valid_k_factor(k_factor)
        if not is_finite_number(winner_rating):
            raise ConfigurationInvalid(f"{winner_rating!r} is not finite", field="winner_rating")
        if not is_finite_number(loser_rating):
            raise ConfigurationInvalid(f"{loser_rating!r} is not finite", field="loser_rating")

        expected_winner = ELO.expected_score(winner_rating, loser_rating)
        expected_loser = 1 - expected_winner

        # Winner scores 1.0, loser scores 0.0
        return EloResult(
            winner_change=round_half_up(k * (1.0 - expected_winner)),
            loser_change=round_half_up(k * (0.0 - expected_loser)),
        )

    @classmethod
    def create_tracker(
        cls,
        players: list[str] | None = None,
        initial_rating: float = DEFAULT_INITIAL_RATING,
        k_factor: float = DEFAULT_K_FACTOR,
    ) -> RatingTracker:
        """Create a rating tracker for a set of players.

        Args:
            players: Player ids to seed (more can join later).
            initial_rating: Starting rating (default 1200).
            k_factor: K-factor for rating updates (default 32).

        Returns:
            RatingTracker instance.
        """
        return RatingTracker(players, initial_rating, k_factor)


def calculate_rating_change(
    winner_rating: float,
    loser_rating: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> EloResult:
    """Module-level shortcut for ELO.calculate_rating_change."""
    return ELO.calculate_rating_change(winner_rating, loser_rating, k_factor)


class RatingTracker:
    """Tracks tournament ratings for players across a series of matches.

    Players not seen before join at the initial rating on their first match.
    Recording is serialized so concurrent tournament results cannot
    interleave their read-modify-write of the two ratings.

    Example:
        ```python
        tracker = RatingTracker(["alice", "bob", "carol"])
        tracker.record_match("alice", "bob")
        tracker.record_match("carol", "alice", k_factor=provider.get_k_factor())
        print(tracker.get_rankings())
        ```
    """

    def __init__(
        self,
        players: list[str] | None = None,
        initial_rating: float = DEFAULT_INITIAL_RATING,
        k_factor: float = DEFAULT_K_FACTOR,
    ):
        """Initialize the rating tracker.

        Args:
            players: Player ids to seed.
            initial_rating: Starting rating (default 1200).
            k_factor: Default K-factor for rating updates (default 32).
        """
        self.initial_rating = initial_rating
        self.k_factor = ensure_valid_k_factor(k_factor)
        self.ratings: dict[str, float] = {}
        self.wins: dict[str, int] = {}
        self.losses: dict[str, int] = {}
        self.match_history: list[MatchRecord] = []
        self._lock = threading.Lock()
        for player in players or []:
            self.add_player(player)

    def add_player(self, player: str, initial_rating: float | None = None) -> None:
        """Add a player to track.

        Args:
            player: Player id.
            initial_rating: Starting rating (defaults to the tracker's).
        """
        if player in self.ratings:
            return  # Already tracked

        self.ratings[player] = (
            initial_rating if initial_rating is not None else self.initial_rating
        )
        self.wins[player] = 0
        self.losses[player] = 0

    def record_match(
        self,
        winner: str,
        loser: str,
        k_factor: float | None = None,
    ) -> EloResult:
        """Record a match result and apply the rating deltas.

        Args:
            winner: Id of the winning player.
            loser: Id of the losing player.
            k_factor: K-factor for this match (defaults to the tracker's).

        Returns:
            The EloResult that was applied.

        Raises:
            ValueError: If a player is recorded as beating themselves.
            ConfigurationInvalid: If k_factor is not a finite positive number.
        """
        if winner == loser:
            raise ValueError(f"Player '{winner}' cannot play against themselves")

        k = ensure_valid_k_factor(self.k_factor if k_factor is None else k_factor)
        with self._lock:
            # Compute before registering anyone so a rejected match changes nothing
            result = ELO.calculate_rating_change(
                self.ratings.get(winner, self.initial_rating),
                self.ratings.get(loser, self.initial_rating),
                k,
            )
            self.add_player(winner)
            self.add_player(loser)

            self.ratings[winner] += result.winner_change
            self.ratings[loser] += result.loser_change

            self.wins[winner] += 1
            self.losses[loser] += 1

            self.match_history.append(
                MatchRecord(
                    winner=winner,
                    loser=loser,
                    winner_change=result.winner_change,
                    loser_change=result.loser_change,
                )
            )

        return result

    def get_rating(self, player: str) -> float:
        """Get current rating for a player.

        Raises:
            KeyError: If the player is not being tracked.
        """
        if player not in self.ratings:
            raise KeyError(f"Player '{player}' is not being tracked")
        return self.ratings[player]

    def get_rankings(self) -> list[tuple[str, float]]:
        """Get all players ranked by rating, highest first."""
        return sorted(self.ratings.items(), key=lambda x: x[1], reverse=True)

    def get_stats(self, player: str) -> dict[str, float]:
        """Get rating and win/loss counts for a player.

        Raises:
            KeyError: If the player is not being tracked.
        """
        if player not in self.ratings:
            raise KeyError(f"Player '{player}' is not being tracked")

        return {
            "rating": self.ratings[player],
            "wins": self.wins[player],
            "losses": self.losses[player],
        }
