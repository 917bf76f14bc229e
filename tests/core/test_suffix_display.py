"""core.suffix をテスト。"""

from __future__ import annotations

import pytest

from audioparams.core.suffix import SuffixDisplay, suffix_for


@pytest.mark.parametrize(
    ("value", "mode", "expected"),
    [
        (0.0, SuffixDisplay.ALWAYS, " dB"),
        (-60.0, SuffixDisplay.ALWAYS, " dB"),
        (-6.0, SuffixDisplay.NEVER, ""),
        (-60.0, SuffixDisplay.OFF_ON_MINIMUM, ""),
        (-59.0, SuffixDisplay.OFF_ON_MINIMUM, " dB"),
        (12.0, SuffixDisplay.OFF_ON_MAXIMUM, ""),
        (11.0, SuffixDisplay.OFF_ON_MAXIMUM, " dB"),
        (0.0, SuffixDisplay.ZERO, ""),
        (0.5, SuffixDisplay.ZERO, " dB"),
    ],
)
def test_suffix_for(value: float, mode: SuffixDisplay, expected: str) -> None:
    assert suffix_for(value, minimum=-60.0, maximum=12.0, label="dB", mode=mode) == expected


def test_empty_label_never_adds_suffix() -> None:
    assert suffix_for(1.0, minimum=0.0, maximum=2.0, label="") == ""
