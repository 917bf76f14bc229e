# どこで: `src/audioparams/core/codecs/__init__.py`。
# 何を: 値⇔文字列 codec の公開エイリアスをまとめる。
# なぜ: 呼び出し側が種別ごとのモジュール配置を意識せずに使えるようにするため。

from .base import ValueTextCodec
from .factory import CodecKind, CodecSpec, build_codec, codec_for_kind
from .frequency import FrequencyCodec, FrequencyUnit, parse_frequency
from .pan import PanCodec, parse_pan_percent
from .plain import DecibelCodec, PlainCodec
from .sentinel import OffSentinelCodec

__all__ = [
    "ValueTextCodec",
    "CodecKind",
    "CodecSpec",
    "build_codec",
    "codec_for_kind",
    "FrequencyCodec",
    "FrequencyUnit",
    "parse_frequency",
    "PanCodec",
    "parse_pan_percent",
    "DecibelCodec",
    "PlainCodec",
    "OffSentinelCodec",
]
