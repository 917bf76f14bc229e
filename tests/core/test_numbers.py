"""core.numbers をテスト。"""

from __future__ import annotations

import pytest

from audioparams.core.numbers import clamp, format_fixed, leading_float, round_half_up


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("12.5", 12.5),
        ("  -3.25dB", -3.25),
        ("+7", 7.0),
        ("12,5", 12.5),
        (".5", 0.5),
        ("1e3Hz", 1000.0),
        ("42 units", 42.0),
        ("1.5.3", 1.5),
    ],
)
def test_leading_float_reads_number_prefix(text: str, expected: float) -> None:
    assert leading_float(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "   ", "abc", "dB", "-", ".", "inf", "nan"])
def test_leading_float_without_number_is_zero(text: str) -> None:
    assert leading_float(text) == 0.0


def test_leading_float_overflow_is_zero() -> None:
    assert leading_float("1e999") == 0.0


def test_format_fixed_never_renders_negative_zero() -> None:
    assert format_fixed(-0.04, 1) == "0.0"
    assert format_fixed(-0.0, 2) == "0.00"
    assert format_fixed(-0.06, 1) == "-0.1"
    assert format_fixed(3.14159, 3) == "3.142"


def test_round_half_up_rounds_halves_away_from_bankers() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(-0.4) == 0


def test_clamp() -> None:
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(0.25, 0.0, 1.0) == 0.25
