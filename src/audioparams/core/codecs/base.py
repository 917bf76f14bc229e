# どこで: `src/audioparams/core/codecs/base.py`。
# 何を: 値⇔表示文字列の codec が満たすプロトコルを定義する。
# なぜ: 種別ごとの codec と OFF デコレータを同じ口で扱えるようにするため。

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueTextCodec(Protocol):
    """float 値と表示文字列を相互変換する codec。

    Notes
    -----
    - `render`/`parse` は全域関数で、どの入力でも例外を投げない。
    - `parse(render(v))` は表示分解能の範囲で `v` に一致する（完全一致ではない）。
    """

    def render(self, value: float) -> str: ...

    def parse(self, text: str) -> float: ...


__all__ = ["ValueTextCodec"]
