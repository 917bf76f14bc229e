"""core.codecs.pan をテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from audioparams.core.codecs.pan import PanCodec, parse_pan_percent


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("L30", -30.0),
        ("30L", -30.0),
        ("l 30", -30.0),
        ("L 30 ", -30.0),
        ("30 R", 30.0),
        ("r30", 30.0),
        ("30%L", -30.0),
        ("L30%", -30.0),
        ("30%R", 30.0),
        ("R", 100.0),
        ("l", -100.0),
        ("c", 0.0),
        ("C", 0.0),
        ("center", 0.0),
        ("< C >", 0.0),
        ("<c>", 0.0),
        ("-30", -30.0),
        ("+30", 30.0),
        ("30", 30.0),
        ("12.5%", 12.5),
        ("150%", 100.0),
        ("-150", -100.0),
        ("L150", -100.0),
        ("abc", 0.0),
        ("", 0.0),
        ("1.2.3", 0.0),
        ("L30R", 0.0),
        ("L-30", 0.0),
        ("30%%", 0.0),
    ],
)
def test_parse_pan_percent(text: str, expected: float) -> None:
    assert parse_pan_percent(text) == pytest.approx(expected)


def test_parse_is_total_over_garbage() -> None:
    samples = ["\x00", "LLL", "%", "--5", "R R", "1e5", "  ", "L.", "中央", "3..0R"]
    codec = PanCodec()
    for text in samples:
        value = codec.parse(text)
        assert -100.0 <= value <= 100.0


def test_render_bipolar_spaced() -> None:
    codec = PanCodec()
    assert codec.render(0.0) == "< C >"
    assert codec.render(-30.0) == "L 30"
    assert codec.render(30.0) == "30 R"
    assert codec.render(-100.0) == "L 100"
    assert codec.render(250.0) == "100 R"


def test_render_rounds_magnitude_half_up() -> None:
    codec = PanCodec()
    assert codec.render(12.5) == "13 R"
    assert codec.render(-0.4) == "< C >"


def test_render_percent_convention() -> None:
    codec = PanCodec(convention="percent")
    assert codec.render(-30.0) == "30%L"
    assert codec.render(45.0) == "45%R"
    assert codec.parse("30%L") == pytest.approx(-30.0)


def test_custom_center_label_parses_back_to_center() -> None:
    codec = PanCodec(center_label="Mid")
    assert codec.render(0.0) == "Mid"
    assert codec.parse("MID") == 0.0


def test_unipolar_domain_centers_on_half() -> None:
    codec = PanCodec(domain="unipolar")
    assert codec.render(0.5) == "< C >"
    assert codec.render(0.35) == "L 30"
    assert codec.render(1.0) == "100 R"
    assert codec.parse("L30") == pytest.approx(0.35)
    assert codec.parse("R") == pytest.approx(1.0)
    assert codec.parse("abc") == pytest.approx(0.5)


def test_roundtrip_within_one_percent() -> None:
    for convention in ("spaced", "percent"):
        codec = PanCodec(convention=convention)
        for v in np.linspace(-100.0, 100.0, 801):
            assert abs(codec.parse(codec.render(float(v))) - float(v)) <= 1.0


def test_unipolar_roundtrip_within_one_percent() -> None:
    codec = PanCodec(domain="unipolar")
    for v in np.linspace(0.0, 1.0, 201):
        assert abs(codec.parse(codec.render(float(v))) - float(v)) <= 0.01


def test_rejects_unknown_domain_and_convention() -> None:
    with pytest.raises(ValueError):
        PanCodec(domain="stereo")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        PanCodec(convention="xx")  # type: ignore[arg-type]


@pytest.mark.parametrize("domain", ["bipolar", "unipolar"])
def test_render_nan_is_center(domain: str) -> None:
    codec = PanCodec(domain=domain)
    assert codec.render(math.nan) == codec.center_label


def test_render_infinity_is_clamped() -> None:
    codec = PanCodec()
    assert codec.render(math.inf) == "100 R"
    assert codec.render(-math.inf) == "L 100"
