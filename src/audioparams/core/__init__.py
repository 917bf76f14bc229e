# どこで: `src/audioparams/core/__init__.py`。
# 何を: ヘッドレスなパラメータ層（codec / RangeCurve / パラメータ / listener）の公開エイリアスをまとめる。
# なぜ: UI ツールキットに依存しない部分を 1 箇所から import できるようにするため。

from .codecs import (
    CodecSpec,
    DecibelCodec,
    FrequencyCodec,
    FrequencyUnit,
    OffSentinelCodec,
    PanCodec,
    PlainCodec,
    ValueTextCodec,
    build_codec,
    codec_for_kind,
)
from .listeners import ParameterListenerManager, UpdateFlag
from .parameter import ParameterHost, RangedParameter
from .range_curve import QuantizeTiers, RangeCurve
from .runtime_config import RuntimeConfig, runtime_config, set_config_path
from .suffix import SuffixDisplay, suffix_for
from .tree import ParameterGroup, ParameterTree, add_to_layout

__all__ = [
    "CodecSpec",
    "DecibelCodec",
    "FrequencyCodec",
    "FrequencyUnit",
    "OffSentinelCodec",
    "PanCodec",
    "PlainCodec",
    "ValueTextCodec",
    "build_codec",
    "codec_for_kind",
    "ParameterListenerManager",
    "UpdateFlag",
    "ParameterHost",
    "RangedParameter",
    "QuantizeTiers",
    "RangeCurve",
    "RuntimeConfig",
    "runtime_config",
    "set_config_path",
    "SuffixDisplay",
    "suffix_for",
    "ParameterGroup",
    "ParameterTree",
    "add_to_layout",
]
