"""Tests for numeric helpers."""
import math

import pytest

from rift_counter.utils.numbers import clamp, round_half_up, safe_number


@pytest.mark.parametrize("raw,expected", [
    (7, 7.0),
    ("3.5", 3.5),
    (None, 0.0),
    ("fast", 0.0),
    (float("nan"), 0.0),
    (float("inf"), 0.0),
    (-float("inf"), 0.0),
    (True, 1.0),
    ([1, 2], 0.0),
])
def test_safe_number(raw, expected):
    assert safe_number(raw) == expected


def test_clamp_bounds():
    assert clamp(150, -100, 100) == 100
    assert clamp(-150, -100, 100) == -100
    assert clamp(42, 0, 100) == 42


def test_clamp_nan_collapses_inside_range():
    assert clamp(math.nan, -100, 100) == 0.0
    assert clamp(math.nan, 30, 95) == 30


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -2
