"""Tests for qualitative level tables."""

from py_polisim.data.levels import (
    ECONOMIC_OUTLOOK_LEVELS,
    MOOD_LEVELS,
    RATING_LEVELS,
    adjust_stat_level,
    derive_rating_from_value,
    level_index,
    rating_from_per_capita,
)


class TestLevelStepping:

    def test_adjust_clamps_at_ends(self):
        assert adjust_stat_level("Booming", ECONOMIC_OUTLOOK_LEVELS, 1) == "Booming"
        assert adjust_stat_level("Very Unhappy", MOOD_LEVELS, -3) == "Very Unhappy"

    def test_adjust_moves_by_change(self):
        assert adjust_stat_level("Concerned", MOOD_LEVELS, 1) == "Content"
        assert adjust_stat_level("Concerned", MOOD_LEVELS, -2) == "Very Unhappy"

    def test_unknown_level_starts_from_middle(self):
        assert level_index("Unknown", MOOD_LEVELS) == len(MOOD_LEVELS) // 2
        assert adjust_stat_level("Unknown", RATING_LEVELS, 0) == "Average"


class TestRatings:

    def test_low_poverty_is_excellent(self):
        labels = list(reversed(RATING_LEVELS))
        assert derive_rating_from_value(8, [10, 15, 22, 30], labels) == "Excellent"
        assert derive_rating_from_value(15, [10, 15, 22, 30], labels) == "Good"
        assert derive_rating_from_value(25, [10, 15, 22, 30], labels) == "Poor"
        assert derive_rating_from_value(40, [10, 15, 22, 30], labels) == "Very Poor"

    def test_per_capita_rating(self):
        assert rating_from_per_capita(600, [500, 300, 150, 50]) == "Excellent"
        assert rating_from_per_capita(200, [500, 300, 150, 50]) == "Average"
        assert rating_from_per_capita(10, [500, 300, 150, 50]) == "Very Poor"
