# どこで: `src/audioparams/core/codecs/frequency.py`。
# 何を: 周波数（Hz/kHz）の codec を提供する。
# なぜ: 単位省略時の解釈（Hz 既定 / kHz 既定）を enum 1 つで切り替え、解析処理を共有するため。

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..numbers import format_fixed, leading_float

KILO = 1000.0


class FrequencyUnit(enum.Enum):
    """単位省略時に数値をどの単位として解釈するか。"""

    HZ = "hz"
    KHZ = "khz"


# 長いサフィックスから順に照合する（"khz" を "hz" より先に見る）。
_SUFFIX_SCALES: tuple[tuple[str, float], ...] = (
    ("khz", KILO),
    ("hz", 1.0),
    ("k", KILO),
)


def parse_frequency(text: str, *, default_unit: FrequencyUnit = FrequencyUnit.HZ) -> float:
    """周波数文字列を Hz 単位の float へ変換して返す。

    サフィックス（`khz`/`k`/`hz`、大文字小文字と空白は無視）を先に判定し、
    どれにも一致しない場合だけ default_unit で解釈する。
    """

    compact = "".join(str(text).lower().split())
    for suffix, scale in _SUFFIX_SCALES:
        if compact.endswith(suffix):
            return leading_float(compact[: -len(suffix)]) * scale
    scale = KILO if default_unit is FrequencyUnit.KHZ else 1.0
    return leading_float(compact) * scale


@dataclass(frozen=True, slots=True)
class FrequencyCodec:
    """周波数の codec。

    1000 Hz 以上は kHz（khz_decimals 桁）、未満は Hz（hz_decimals 桁）で表示する。
    """

    default_unit: FrequencyUnit = FrequencyUnit.HZ
    khz_decimals: int = 2
    hz_decimals: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.default_unit, FrequencyUnit):
            raise ValueError(f"unknown frequency unit: {self.default_unit!r}")
        if int(self.khz_decimals) < 0 or int(self.hz_decimals) < 0:
            raise ValueError(
                "decimals は 0 以上である必要がある: "
                f"khz={self.khz_decimals!r}, hz={self.hz_decimals!r}"
            )

    def render(self, value: float) -> str:
        v = float(value)
        if v >= KILO:
            return format_fixed(v / KILO, self.khz_decimals) + "kHz"
        return format_fixed(v, self.hz_decimals) + "Hz"

    def parse(self, text: str) -> float:
        return parse_frequency(text, default_unit=self.default_unit)


__all__ = ["FrequencyCodec", "FrequencyUnit", "parse_frequency"]
