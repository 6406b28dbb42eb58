"""Text reporter for Prompt Arena.

Provides human-readable formatting for word statistics, bandit rankings and
tournament leaderboards.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import ScoredWord, WordStat
from ..rating import RatingTracker


class TextReporter:
    """Formats arena state as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_scores(score_words(stats, config)))
        ```
    """

    BAR_WIDTH = 30

    @staticmethod
    def _bar(fraction: float, width: int = 30) -> str:
        """Render a simple bar chart segment."""
        fraction = max(0.0, min(1.0, fraction))
        filled = round(fraction * width)
        return "\u2588" * filled + "\u2591" * (width - filled)

    def format_word_stats(self, stats: Sequence[WordStat], title: str = "Words") -> str:
        """Format raw word statistics with pick-rate bars.

        Args:
            stats: Word statistics, e.g. a store snapshot.
            title: Heading for the table.

        Returns:
            Formatted string.
        """
        lines = [
            f"{title} ({len(stats)})",
            f"{'=' * 50}",
        ]
        if not stats:
            lines.append("  (no words)")
            return "\n".join(lines)

        for stat in stats:
            lines.append(
                f"  {stat.word:20s} {self._bar(stat.pick_rate, 20)} "
                f"pick={stat.pick_rate:.1%}  post={stat.post_rate:.1%}  n={stat.sample_size}"
            )
        return "\n".join(lines)

    def format_scores(self, ranked: Sequence[ScoredWord], slate: Sequence[str] = ()) -> str:
        """Format a bandit ranking, marking words that made the slate.

        Args:
            ranked: Output of score_words.
            slate: Words selected for the current slate.

        Returns:
            Formatted string.
        """
        lines = [
            "Word Scores",
            f"{'=' * 50}",
        ]
        if not ranked:
            lines.append("  (no candidates)")
            return "\n".join(lines)

        selected = set(slate)
        for item in ranked:
            marker = " <-- slate" if item.word in selected else ""
            lines.append(
                f"  #{item.rank + 1:<3d} {item.word:20s} score={item.score:+.3f}  "
                f"z_pick={item.z_pick_rate:+.2f}  z_post={item.z_post_rate:+.2f}{marker}"
            )
        return "\n".join(lines)

    def format_leaderboard(self, tracker: RatingTracker) -> str:
        """Format a tournament leaderboard.

        Args:
            tracker: Ratings to rank.

        Returns:
            Formatted string.
        """
        lines = [
            "Leaderboard",
            f"{'=' * 50}",
        ]
        for position, (player, rating) in enumerate(tracker.get_rankings(), start=1):
            stats = tracker.get_stats(player)
            lines.append(
                f"  {position:>3d}. {player:20s} {rating:7.0f}  "
                f"W{stats['wins']}-L{stats['losses']}"
            )

        if tracker.match_history:
            lines.append("")
            lines.append(f"Matches played: {len(tracker.match_history)}")

        return "\n".join(lines)


def print_results(ranked: Sequence[ScoredWord], slate: Sequence[str] = ()) -> None:
    """Print a bandit ranking to stdout."""
    print(TextReporter().format_scores(ranked, slate))
