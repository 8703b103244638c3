"""Tests for the index-time boost policy."""

import pytest

from symbol_index.search.relevance import (
    calculate_boost,
    calculate_penalty,
    nested_depth,
)


class TestNestedDepth:
    @pytest.mark.parametrize(
        "fqn, depth",
        [
            ("com.example.Foo", 0),
            ("com.example.Foo$", 0),
            ("com.example.Foo$Bar", 1),
            ("com.example.Foo$Bar$", 1),
            ("com.example.Foo$Bar$Baz", 2),
            ("$", 0),
            ("$$", 1),
        ],
    )
    def test_trailing_dollar_not_counted(self, fqn, depth):
        assert nested_depth(fqn) == depth


class TestCalculatePenalty:
    """Test cases for calculate_penalty."""

    def test_plain_name_unpenalized(self):
        assert calculate_penalty("com.example.Foo") == 1.0

    def test_object_marker_unpenalized(self):
        assert calculate_penalty("com.example.Foo$") == 1.0

    def test_linear_penalty(self):
        assert calculate_penalty("a.Foo$Bar") == pytest.approx(0.75)
        assert calculate_penalty("a.Foo$Bar$Baz") == pytest.approx(0.5)
        assert calculate_penalty("a.A$B$C$D") == pytest.approx(0.25)

    def test_deep_nesting_stays_positive(self):
        assert calculate_penalty("a.A$B$C$D$E") == pytest.approx(0.125)
        assert calculate_penalty("a" + "$b" * 10) > 0

    def test_strictly_decreasing_with_depth(self):
        penalties = [calculate_penalty("Foo" + "$X" * n) for n in range(12)]

        assert penalties[0] == 1.0
        assert all(a > b > 0 for a, b in zip(penalties, penalties[1:]))

    def test_custom_step(self):
        assert calculate_penalty("a.Foo$Bar", step=0.1) == pytest.approx(0.9)

    @pytest.mark.parametrize("step", [0.1, 0.3, 1 / 3, 0.5, 0.75])
    def test_positive_for_any_step(self, step):
        penalties = [calculate_penalty("Foo" + "$X" * n, step) for n in range(8)]

        assert all(a > b > 0 for a, b in zip(penalties, penalties[1:]))


class TestCalculateBoost:
    def test_unprioritized_boost_is_penalty(self):
        assert calculate_boost("a.Foo$Bar") == pytest.approx(0.75)

    def test_priority_bonus_added(self):
        assert calculate_boost("a.Foo$Bar", prioritize=True) == pytest.approx(1.0)
        assert calculate_boost("a.Foo", prioritize=True) == pytest.approx(1.25)

    def test_repeated_calls_do_not_compound(self):
        first = calculate_boost("a.Foo", prioritize=True)
        second = calculate_boost("a.Foo", prioritize=True)

        assert first == second

    def test_custom_bonus(self):
        assert calculate_boost("a.Foo", prioritize=True, bonus=0.5) == 1.5
