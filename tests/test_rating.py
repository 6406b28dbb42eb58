"""Tests for the rating module."""

import math

import pytest

from prompt_arena import (
    ELO,
    ConfigurationInvalid,
    EloResult,
    RatingTracker,
    calculate_rating_change,
)


# ============================================================================
# ELO Tests
# ============================================================================


class TestExpectedScore:
    """Tests for ELO.expected_score()."""

    def test_equal_ratings(self):
        """Equal ratings should give 0.5 expected score."""
        assert ELO.expected_score(1200, 1200) == pytest.approx(0.5)

    def test_higher_rated_favored(self):
        """Higher rated player should have higher expected score."""
        expected = ELO.expected_score(1400, 1200)
        assert 0.5 < expected < 1.0

    def test_symmetry(self):
        """Expected scores of both sides should sum to 1."""
        a = ELO.expected_score(1400, 1000)
        b = ELO.expected_score(1000, 1400)
        assert a + b == pytest.approx(1.0)

    def test_400_point_gap(self):
        """A 400 point gap means 10:1 odds."""
        assert ELO.expected_score(1400, 1000) == pytest.approx(10 / 11)


class TestCalculateRatingChange:
    """Tests for calculate_rating_change()."""

    def test_returns_elo_result(self):
        """Should return an EloResult."""
        result = calculate_rating_change(1200, 1200, 32)
        assert isinstance(result, EloResult)

    def test_equal_ratings(self):
        """Equal ratings split K evenly."""
        result = calculate_rating_change(1200, 1200, 32)
        assert result.winner_change == 16
        assert result.loser_change == -16

    def test_near_zero_sum(self):
        """Changes at equal ratings should cancel to within one point."""
        result = calculate_rating_change(1200, 1200)
        assert abs(result.winner_change + result.loser_change) <= 1

    def test_independent_rounding(self):
        """Each side rounds on its own, halves up, so the sum can drift."""
        result = calculate_rating_change(1200, 1200, 33)
        assert result.winner_change == 17
        assert result.loser_change == -16
        assert result.winner_change + result.loser_change == 1

    def test_underdog_win_rewarded_more(self):
        """An upset should gain more than a favorite's win."""
        underdog = calculate_rating_change(1000, 1400, 32)
        favorite = calculate_rating_change(1400, 1000, 32)
        assert underdog.winner_change == 29
        assert favorite.winner_change == 3
        assert underdog.winner_change > favorite.winner_change
        assert underdog.winner_change >= abs(underdog.loser_change)
        assert favorite.loser_change < 0

    def test_monotonic_in_rating_gap(self):
        """Winner change should strictly shrink as the winner's lead grows."""
        changes = [
            calculate_rating_change(1200 + gap, 1200, 32).winner_change
            for gap in range(-600, 601, 200)
        ]
        assert changes == [31, 29, 24, 16, 8, 3, 1]
        assert all(a > b for a, b in zip(changes, changes[1:]))

    @pytest.mark.parametrize("winner", [1000, 1200, 1400, 1600])
    @pytest.mark.parametrize("loser", [1000, 1200, 1400, 1600])
    def test_signs(self, winner, loser):
        """Winners gain and losers drop for realistic rating gaps."""
        result = calculate_rating_change(winner, loser, 32)
        assert result.winner_change > 0
        assert result.loser_change < 0

    def test_k_factor_scales_change(self):
        """Higher K should give larger swings."""
        low = calculate_rating_change(1200, 1200, 16)
        high = calculate_rating_change(1200, 1200, 64)
        assert high.winner_change > low.winner_change

    def test_default_k_factor(self):
        """The default K-factor is 32."""
        assert calculate_rating_change(1200, 1200) == calculate_rating_change(1200, 1200, 32)

    def test_negative_ratings_accepted(self):
        """Ratings below zero are not special-cased."""
        result = calculate_rating_change(-300, -100, 32)
        assert result.winner_change > 16

    def test_float_ratings(self):
        """Fractional ratings are valid input."""
        result = calculate_rating_change(1200.5, 1199.5, 32)
        assert result.winner_change == 16

    @pytest.mark.parametrize("k", [0, -5, math.nan, math.inf, "32", None])
    def test_invalid_k_factor(self, k):
        """K must be a finite positive number."""
        with pytest.raises(ConfigurationInvalid) as exc_info:
            calculate_rating_change(1200, 1200, k)
        assert exc_info.value.field == "k_factor"

    def test_non_finite_rating(self):
        """Infinite ratings are rejected."""
        with pytest.raises(ConfigurationInvalid):
            calculate_rating_change(math.inf, 1200, 32)
        with pytest.raises(ConfigurationInvalid):
            calculate_rating_change(1200, math.nan, 32)

    def test_classmethod_and_function_agree(self):
        """The module shortcut delegates to ELO."""
        assert calculate_rating_change(1100, 1300, 24) == ELO.calculate_rating_change(1100, 1300, 24)

    def test_create_tracker(self):
        """Should create a RatingTracker with the default rating."""
        tracker = ELO.create_tracker(["a", "b"])
        assert tracker.get_rating("a") == 1200
        assert tracker.get_rating("b") == 1200


# ============================================================================
# RatingTracker Tests
# ============================================================================


class TestRatingTracker:
    """Tests for the RatingTracker class."""

    def test_record_match_applies_deltas(self):
        """Recording a match should apply the returned deltas."""
        tracker = RatingTracker(["a", "b"])
        result = tracker.record_match("a", "b")
        assert tracker.get_rating("a") == 1200 + result.winner_change
        assert tracker.get_rating("b") == 1200 + result.loser_change

    def test_unknown_players_join(self):
        """Players seen for the first time start at the initial rating."""
        tracker = RatingTracker(initial_rating=1000)
        tracker.record_match("new_a", "new_b")
        assert tracker.get_rating("new_a") == 1016
        assert tracker.get_rating("new_b") == 984

    def test_per_match_k_factor(self):
        """A K-factor passed to record_match overrides the default."""
        tracker = RatingTracker(["a", "b"], k_factor=32)
        result = tracker.record_match("a", "b", k_factor=10)
        assert result.winner_change == 5

    def test_invalid_k_factor(self):
        """A bad default K-factor is rejected at construction."""
        with pytest.raises(ConfigurationInvalid):
            RatingTracker(k_factor=0)

    def test_rejected_match_leaves_no_trace(self):
        """An invalid per-match K-factor should not register anyone."""
        tracker = RatingTracker()
        with pytest.raises(ConfigurationInvalid):
            tracker.record_match("x", "y", k_factor=0)
        assert tracker.ratings == {}
        assert tracker.wins == {}
        assert tracker.match_history == []

    def test_non_finite_initial_rating_leaves_no_trace(self):
        """A bad starting rating should fail before players are added."""
        tracker = RatingTracker(initial_rating=math.inf)
        with pytest.raises(ConfigurationInvalid):
            tracker.record_match("x", "y")
        assert tracker.ratings == {}

    def test_self_match_rejected(self):
        """A player cannot beat themselves."""
        tracker = RatingTracker(["a"])
        with pytest.raises(ValueError):
            tracker.record_match("a", "a")

    def test_history_and_stats(self):
        """Wins, losses and history should be tracked."""
        tracker = RatingTracker(["a", "b", "c"])
        tracker.record_match("a", "b")
        tracker.record_match("a", "c")
        tracker.record_match("b", "c")

        assert tracker.get_stats("a")["wins"] == 2
        assert tracker.get_stats("c")["losses"] == 2
        assert len(tracker.match_history) == 3
        assert tracker.match_history[0].winner == "a"
        assert tracker.match_history[0].loser == "b"

    def test_rankings(self):
        """Rankings should be sorted by rating descending."""
        tracker = RatingTracker(["a", "b", "c"])
        tracker.record_match("c", "a")
        tracker.record_match("c", "b")
        rankings = tracker.get_rankings()
        assert rankings[0][0] == "c"
        assert [r for _, r in rankings] == sorted((r for _, r in rankings), reverse=True)

    def test_get_rating_unknown(self):
        """Unknown players raise KeyError."""
        tracker = RatingTracker()
        with pytest.raises(KeyError):
            tracker.get_rating("ghost")
        with pytest.raises(KeyError):
            tracker.get_stats("ghost")

    def test_add_player_idempotent(self):
        """Adding an existing player keeps their rating."""
        tracker = RatingTracker(["a", "b"])
        tracker.record_match("a", "b")
        rating = tracker.get_rating("a")
        tracker.add_player("a", initial_rating=500)
        assert tracker.get_rating("a") == rating

    def test_add_player_custom_rating(self):
        """A new player can join with a custom rating."""
        tracker = RatingTracker()
        tracker.add_player("pro", initial_rating=1800)
        assert tracker.get_rating("pro") == 1800
