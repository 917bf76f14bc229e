# どこで: `src/audioparams/core/numbers.py`。
# 何を: テキスト先頭の数値抽出と固定小数点フォーマットを提供する。
# なぜ: 各 codec が同じ数値規則（ロケール許容・負のゼロ抑止）を共有するため。

from __future__ import annotations

import math
import re

_LEADING_NUMBER = re.compile(
    r"[+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][+-]?\d+)?"
)


def leading_float(text: str) -> float:
    """text 先頭の数値を float として返す。数値が無ければ 0.0。

    Notes
    -----
    - 前後の空白は無視する。
    - 小数点は `.` と `,` の両方を受け付ける（ロケール差の吸収）。
    - 数値の後ろに続く文字列（単位など）は無視する。
    """

    m = _LEADING_NUMBER.match(str(text).strip())
    if m is None:
        return 0.0
    try:
        value = float(m.group(0).replace(",", "."))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def format_fixed(value: float, decimals: int) -> str:
    """value を小数 decimals 桁で文字列化して返す（`-0.0` は `0.0` に寄せる）。"""

    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


def round_half_up(value: float) -> int:
    """0.5 を切り上げる丸めで int を返す（banker's rounding を避ける）。"""

    return int(math.floor(float(value) + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    """value を [lo, hi] に clamp した値を返す。"""

    if value <= lo:
        return float(lo)
    if value >= hi:
        return float(hi)
    return float(value)


__all__ = ["clamp", "format_fixed", "leading_float", "round_half_up"]
