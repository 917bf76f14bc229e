# どこで: `src/audioparams/core/codecs/pan.py`。
# 何を: パン位置（L/C/R）の codec を提供する。
# なぜ: 入力途中の文字列でも必ず有効なパン値へ落とし、テキストボックスを壊さないため。

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Literal

from ..numbers import clamp, round_half_up

PanDomain = Literal["bipolar", "unipolar"]
PanConvention = Literal["spaced", "percent"]

_CENTER_TOKENS = frozenset({"c", "center", "centre", "<c>"})

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_DIRECTED = re.compile(
    rf"(?P<pre>[lr])?(?P<num>{_NUMBER})%?(?P<post>[lr])?"
)
_BARE = re.compile(rf"(?P<sign>[+-])?(?P<num>{_NUMBER})%?")


def _compact(text: str) -> str:
    """小文字化し、空白を全て取り除いた文字列を返す。"""

    return "".join(str(text).lower().split())


def parse_pan_percent(text: str, *, center_label: str = "") -> float:
    """パン文字列を -100..100 の百分率へ変換して返す。

    受け付ける書式（大文字小文字・空白は無視）:
    - 中央: `"c"`, `"center"`, `"< C >"`, center_label
    - 端: `"L"` → -100, `"R"` → 100
    - 方向付き: `"L30"`, `"30L"`, `"L 30"`, `"30 R"`, `"30%L"`
    - 数値: `"-30"`, `"+30"`, `"30"`, `"150%"`

    それ以外（不正文字、複数の小数点、方向の重複など）は 0（中央）を返す。
    大きさは符号を付ける前に 0..100 へ clamp する。
    """

    compact = _compact(text)
    if not compact:
        return 0.0
    if compact in _CENTER_TOKENS or (center_label and compact == _compact(center_label)):
        return 0.0
    if compact == "l":
        return -100.0
    if compact == "r":
        return 100.0

    m = _DIRECTED.fullmatch(compact)
    if m is not None:
        pre, post = m.group("pre"), m.group("post")
        if pre is not None and post is not None:
            return 0.0
        direction = pre or post
        if direction is not None:
            magnitude = clamp(float(m.group("num")), 0.0, 100.0)
            return -magnitude if direction == "l" else magnitude

    m = _BARE.fullmatch(compact)
    if m is not None:
        magnitude = clamp(float(m.group("num")), 0.0, 100.0)
        return -magnitude if m.group("sign") == "-" else magnitude

    return 0.0


@dataclass(frozen=True, slots=True)
class PanCodec:
    """パン位置の codec。

    Parameters
    ----------
    domain
        `"bipolar"`: 値域 -100..100（0 が中央）。
        `"unipolar"`: 値域 0..1（0.5 が中央）。
    convention
        `"spaced"`: `"L 30"` / `"30 R"`。
        `"percent"`: `"30%L"` / `"30%R"`。
    center_label
        中央位置の表示文字列。
    """

    domain: PanDomain = "bipolar"
    convention: PanConvention = "spaced"
    center_label: str = "< C >"

    def __post_init__(self) -> None:
        if self.domain not in ("bipolar", "unipolar"):
            raise ValueError(f"unknown pan domain: {self.domain!r}")
        if self.convention not in ("spaced", "percent"):
            raise ValueError(f"unknown pan convention: {self.convention!r}")

    def _to_percent(self, value: float) -> float:
        if math.isnan(float(value)):
            return 0.0
        if self.domain == "unipolar":
            return (clamp(float(value), 0.0, 1.0) - 0.5) * 200.0
        return clamp(float(value), -100.0, 100.0)

    def _from_percent(self, percent: float) -> float:
        if self.domain == "unipolar":
            return 0.5 * (1.0 + percent / 100.0)
        return float(percent)

    def render(self, value: float) -> str:
        percent = self._to_percent(value)
        magnitude = round_half_up(abs(percent))
        if magnitude == 0:
            return self.center_label
        if self.convention == "percent":
            return f"{magnitude}%L" if percent < 0 else f"{magnitude}%R"
        return f"L {magnitude}" if percent < 0 else f"{magnitude} R"

    def parse(self, text: str) -> float:
        return self._from_percent(parse_pan_percent(text, center_label=self.center_label))


__all__ = ["PanCodec", "PanConvention", "PanDomain", "parse_pan_percent"]
