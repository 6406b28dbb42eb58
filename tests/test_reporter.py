"""Tests for the reporter module."""

from prompt_arena import (
    BanditConfig,
    RatingTracker,
    TextReporter,
    WordStat,
    print_results,
    score_words,
)


def _ranked():
    stats = [
        WordStat(word="cat", pick_rate=0.5, post_rate=0.3, sample_size=12),
        WordStat(word="dog", pick_rate=0.9, post_rate=0.7, sample_size=30),
        WordStat(word="tree", pick_rate=0.1, post_rate=0.1, sample_size=3),
    ]
    return stats, score_words(stats, BanditConfig(exploration_rate=0.0))


class TestTextReporterScores:
    """Tests for TextReporter.format_scores()."""

    def test_lists_ranked_words(self) -> None:
        """Every word appears with its rank."""
        _, ranked = _ranked()
        output = TextReporter().format_scores(ranked)

        assert "Word Scores" in output
        assert output.index("dog") < output.index("cat") < output.index("tree")
        assert "#1" in output

    def test_marks_slate(self) -> None:
        """Words on the slate are marked."""
        _, ranked = _ranked()
        output = TextReporter().format_scores(ranked, slate=["dog"])
        dog_line = next(line for line in output.splitlines() if "dog" in line)
        tree_line = next(line for line in output.splitlines() if "tree" in line)
        assert "<-- slate" in dog_line
        assert "<-- slate" not in tree_line

    def test_empty(self) -> None:
        output = TextReporter().format_scores([])
        assert "(no candidates)" in output


class TestTextReporterWordStats:
    """Tests for TextReporter.format_word_stats()."""

    def test_basic(self) -> None:
        stats, _ = _ranked()
        output = TextReporter().format_word_stats(stats, title="Drawing")

        assert "Drawing (3)" in output
        assert "pick=90.0%" in output
        assert "n=30" in output

    def test_empty(self) -> None:
        assert "(no words)" in TextReporter().format_word_stats([])


class TestTextReporterLeaderboard:
    """Tests for TextReporter.format_leaderboard()."""

    def test_leaderboard_order(self) -> None:
        tracker = RatingTracker(["alice", "bob", "carol"])
        tracker.record_match("carol", "alice")
        tracker.record_match("carol", "bob")

        output = TextReporter().format_leaderboard(tracker)

        assert "Leaderboard" in output
        assert output.index("carol") < output.index("alice")
        assert "W2-L0" in output
        assert "Matches played: 2" in output

    def test_empty_tracker(self) -> None:
        output = TextReporter().format_leaderboard(RatingTracker())
        assert "Matches played" not in output


class TestPrintResults:
    """Tests for print_results()."""

    def test_prints(self, capsys) -> None:
        _, ranked = _ranked()
        print_results(ranked, slate=["dog"])
        captured = capsys.readouterr()
        assert "dog" in captured.out
        assert "<-- slate" in captured.out
