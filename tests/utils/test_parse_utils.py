"""Tests for lenient query parameter coercion."""

import pytest

from internboard.utils.parse import to_number_or_none, to_string_or_none


class TestToNumberOrNone:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (42, 42),
            (3.5, 3.5),
            ("2000", 2000),
            (" 12.5 ", 12.5),
            ("-3", -3),
            ("1e3", 1000),
        ],
    )
    def test_valid_numbers(self, value, expected):
        assert to_number_or_none(value) == expected

    def test_integral_strings_become_int(self):
        assert isinstance(to_number_or_none("2000"), int)

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "1_000", "1_0.5", "Infinity", "-Infinity", "NaN", "nan", float("inf"), float("nan"), True, [], {}],
    )
    def test_invalid_values(self, value):
        assert to_number_or_none(value) is None


    @pytest.mark.parametrize("value", ["1_000", "2_000.5", "_1", "1_"])
    def test_digit_separators_are_rejected(self, value):
        assert to_number_or_none(value) is None


class TestToStringOrNone:
    def test_strips_whitespace(self):
        assert to_string_or_none("  dev  ") == "dev"

    def test_converts_non_strings(self):
        assert to_string_or_none(10) == "10"

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_empty_values(self, value):
        assert to_string_or_none(value) is None
