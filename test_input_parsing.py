"""
Test script to verify numeric input parsing
"""

import pytest

from input_parsing import parse_number


@pytest.mark.parametrize("raw, expected", [
    (2.5, 2.5),
    (7, 7.0),
    ("3.25", 3.25),
    (" 40 ", 40.0),
    ("50,000,000", 50_000_000.0),
    ("$1,250.50", 1250.50),
    ("40%", 40.0),
    ("-1.5", -1.5),
])
def test_parses_valid_input(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "1.2.3", float('nan'), float('inf'), "nan", True])
def test_invalid_input_falls_back_to_zero(raw):
    assert parse_number(raw) == 0.0


def test_custom_default():
    assert parse_number("oops", default=5.0) == 5.0


def test_huge_integer_falls_back_to_default():
    assert parse_number(10 ** 400) == 0.0
    assert parse_number(10 ** 400, default=1.0) == 1.0
