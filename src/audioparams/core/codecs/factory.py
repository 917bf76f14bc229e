# どこで: `src/audioparams/core/codecs/factory.py`。
# 何を: パラメータの意味種別（CodecSpec）から codec を組み立てる。
# なぜ: 種別ごとの分岐と設定既定値の補完を 1 箇所に閉じ込めるため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..runtime_config import runtime_config
from .base import ValueTextCodec
from .frequency import FrequencyCodec, FrequencyUnit
from .pan import PanCodec
from .plain import DecibelCodec, PlainCodec
from .sentinel import OffSentinelCodec

CodecKind = Literal["plain", "decibel", "pan", "frequency"]

_KINDS: frozenset[str] = frozenset({"plain", "decibel", "pan", "frequency"})


@dataclass(frozen=True, slots=True)
class CodecSpec:
    """パラメータの表示種別（SemanticKind）。

    None のフィールドは runtime_config() の既定値で補完する。
    off_value を指定すると OffSentinelCodec で包む。
    """

    kind: str  # "plain" | "decibel" | "pan" | "frequency"
    unit: FrequencyUnit | str | None = None
    decimals: int | None = None
    suffix: str | None = None
    khz_decimals: int | None = None
    hz_decimals: int | None = None
    domain: str | None = None
    convention: str | None = None
    off_value: float | None = None
    off_label: str | None = None


def _as_frequency_unit(unit: FrequencyUnit | str | None) -> FrequencyUnit:
    if unit is None:
        return FrequencyUnit.HZ
    if isinstance(unit, FrequencyUnit):
        return unit
    try:
        return FrequencyUnit(str(unit).strip().lower())
    except ValueError as exc:
        raise ValueError(f"unknown frequency unit: {unit!r}") from exc


def build_codec(spec: CodecSpec) -> ValueTextCodec:
    """CodecSpec から codec を生成して返す。

    Raises
    ------
    ValueError
        未知の kind、または不正なオプション値の場合。
    """

    kind = str(spec.kind).strip().lower()
    if kind not in _KINDS:
        raise ValueError(f"unknown codec kind: {spec.kind!r}")

    cfg = runtime_config()
    codec: ValueTextCodec

    if kind == "plain":
        codec = PlainCodec(
            decimals=cfg.decimals if spec.decimals is None else int(spec.decimals),
            suffix="" if spec.suffix is None else str(spec.suffix),
        )
    elif kind == "decibel":
        codec = DecibelCodec(
            decimals=cfg.decimals if spec.decimals is None else int(spec.decimals),
            suffix=cfg.decibel_suffix if spec.suffix is None else str(spec.suffix),
        )
    elif kind == "pan":
        codec = PanCodec(
            domain="bipolar" if spec.domain is None else spec.domain,  # type: ignore[arg-type]
            convention=(
                cfg.pan_convention if spec.convention is None else spec.convention
            ),  # type: ignore[arg-type]
            center_label=cfg.pan_center_label,
        )
    else:
        codec = FrequencyCodec(
            default_unit=_as_frequency_unit(spec.unit),
            khz_decimals=cfg.khz_decimals if spec.khz_decimals is None else int(spec.khz_decimals),
            hz_decimals=cfg.hz_decimals if spec.hz_decimals is None else int(spec.hz_decimals),
        )

    if spec.off_value is None:
        return codec
    return OffSentinelCodec(
        inner=codec,
        off_value=float(spec.off_value),
        off_label=cfg.off_label if spec.off_label is None else str(spec.off_label),
    )


def codec_for_kind(kind: str, **options: object) -> ValueTextCodec:
    """`build_codec(CodecSpec(kind=kind, **options))` の短縮形。"""

    return build_codec(CodecSpec(kind=kind, **options))  # type: ignore[arg-type]


__all__ = ["CodecKind", "CodecSpec", "build_codec", "codec_for_kind"]
