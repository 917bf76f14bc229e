# どこで: `src/audioparams/__init__.py`。
# 何を: ルート `audioparams` パッケージを定義する。
# なぜ: import 起点を `audioparams` に統一するため。

from __future__ import annotations

from audioparams.core import (
    CodecSpec,
    FrequencyUnit,
    ParameterTree,
    RangeCurve,
    RangedParameter,
    build_codec,
)
from audioparams.interactive import SelectorGroupSync, SelectorMode, UpdatePoller

__all__ = [
    "CodecSpec",
    "FrequencyUnit",
    "ParameterTree",
    "RangeCurve",
    "RangedParameter",
    "SelectorGroupSync",
    "SelectorMode",
    "UpdatePoller",
    "build_codec",
]
