# どこで: `src/audioparams/core/codecs/plain.py`。
# 何を: 素の数値とデシベル値の codec を提供する。
# なぜ: 単位付き/無しの数値表示を 1 つの規則（固定小数 + 任意サフィックス）に寄せるため。

from __future__ import annotations

from dataclasses import dataclass

from ..numbers import format_fixed, leading_float


def _strip_suffix(text: str, suffix: str) -> str:
    """末尾の suffix を大文字小文字を無視して取り除いた文字列を返す。"""

    trimmed = str(text).strip()
    token = suffix.strip().lower()
    if token and trimmed.lower().endswith(token):
        return trimmed[: len(trimmed) - len(token)].strip()
    return trimmed


@dataclass(frozen=True, slots=True)
class PlainCodec:
    """固定小数で表示する数値 codec。

    Parameters
    ----------
    decimals
        表示する小数桁数。
    suffix
        表示時に末尾へ付ける単位ラベル（例: `"%"`）。空文字なら付けない。
    """

    decimals: int = 1
    suffix: str = ""

    def __post_init__(self) -> None:
        if int(self.decimals) < 0:
            raise ValueError(f"decimals は 0 以上である必要がある: got={self.decimals!r}")

    def render(self, value: float) -> str:
        return format_fixed(value, self.decimals) + self.suffix

    def parse(self, text: str) -> float:
        return leading_float(_strip_suffix(text, self.suffix))


@dataclass(frozen=True, slots=True)
class DecibelCodec:
    """デシベル値の codec（`"-3.0dB"` ⇔ -3.0）。"""

    decimals: int = 1
    suffix: str = "dB"

    def __post_init__(self) -> None:
        if int(self.decimals) < 0:
            raise ValueError(f"decimals は 0 以上である必要がある: got={self.decimals!r}")
        if not self.suffix.strip():
            raise ValueError("suffix は空にできない")

    def render(self, value: float) -> str:
        return format_fixed(value, self.decimals) + self.suffix

    def parse(self, text: str) -> float:
        # サフィックスが無ければ素の数値として読む。
        return leading_float(_strip_suffix(text, self.suffix))


__all__ = ["DecibelCodec", "PlainCodec"]
