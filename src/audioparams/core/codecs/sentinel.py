# どこで: `src/audioparams/core/codecs/sentinel.py`。
# 何を: 任意の codec に「OFF 値」の表示/解析を被せるデコレータを提供する。
# なぜ: OFF 表示を種別ごとに重複実装せず、どの codec とも組み合わせられるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .base import ValueTextCodec

FLOAT32_EPS = float(np.finfo(np.float32).eps)


@dataclass(frozen=True, slots=True)
class OffSentinelCodec:
    """off_value を off_label として表示/解析し、それ以外は inner に委譲する。

    Notes
    -----
    パラメータ値は float32 で往復する想定なので、比較の相対許容誤差は float32 の
    machine epsilon を既定にする。
    """

    inner: ValueTextCodec
    off_value: float
    off_label: str = "OFF"
    rel_tol: float = FLOAT32_EPS
    abs_tol: float = 1e-9

    def __post_init__(self) -> None:
        if not self.off_label.strip():
            raise ValueError("off_label は空にできない")
        if self.rel_tol < 0.0 or self.abs_tol < 0.0:
            raise ValueError(
                f"tolerance は 0 以上である必要がある: rel={self.rel_tol!r}, abs={self.abs_tol!r}"
            )

    def is_off(self, value: float) -> bool:
        """value が OFF 値とみなせるなら True を返す。"""

        return math.isclose(
            float(value),
            float(self.off_value),
            rel_tol=float(self.rel_tol),
            abs_tol=float(self.abs_tol),
        )

    def render(self, value: float) -> str:
        if self.is_off(value):
            return self.off_label
        return self.inner.render(value)

    def parse(self, text: str) -> float:
        if str(text).strip().lower() == self.off_label.strip().lower():
            return float(self.off_value)
        return self.inner.parse(text)


__all__ = ["FLOAT32_EPS", "OffSentinelCodec"]
