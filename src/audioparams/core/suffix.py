# どこで: `src/audioparams/core/suffix.py`。
# 何を: スライダー表示に単位サフィックスを付けるかどうかの規則を提供する。
# なぜ: 「最小値では OFF なので単位を消す」等の表示規則をウィジェットから切り離してテスト可能にするため。

from __future__ import annotations

import enum
import math


class SuffixDisplay(enum.Enum):
    """単位サフィックスの表示モード。"""

    ALWAYS = "always"
    NEVER = "never"
    OFF_ON_MINIMUM = "off_on_minimum"
    OFF_ON_MAXIMUM = "off_on_maximum"
    ZERO = "zero"


def suffix_for(
    value: float,
    *,
    minimum: float,
    maximum: float,
    label: str,
    mode: SuffixDisplay = SuffixDisplay.ALWAYS,
) -> str:
    """value に付ける表示サフィックス（`" " + label` または `""`）を返す。

    - OFF_ON_MINIMUM: value が minimum のとき消す。
    - OFF_ON_MAXIMUM: value が maximum のとき消す。
    - ZERO: value が 0 のとき消す。
    - NEVER: 常に消す。
    """

    if mode is SuffixDisplay.NEVER or not label:
        return ""
    if mode is SuffixDisplay.OFF_ON_MINIMUM and float(value) == float(minimum):
        return ""
    if mode is SuffixDisplay.OFF_ON_MAXIMUM and float(value) == float(maximum):
        return ""
    if mode is SuffixDisplay.ZERO and math.isclose(float(value), 0.0, abs_tol=1e-9):
        return ""
    return " " + str(label)


__all__ = ["SuffixDisplay", "suffix_for"]
