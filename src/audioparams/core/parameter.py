# どこで: `src/audioparams/core/parameter.py`。
# 何を: 正準値を保持するパラメータ（RangedParameter）と、その最小インターフェース（ParameterHost）を定義する。
# なぜ: codec / RangeCurve / SelectorGroupSync が共有する「値の持ち主」を 1 つの型に固定するため。

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .codecs.base import ValueTextCodec
from .codecs.plain import PlainCodec
from .numbers import clamp
from .range_curve import RangeCurve

_logger = logging.getLogger(__name__)

ValueListener = Callable[[float], None]


@runtime_checkable
class ParameterHost(Protocol):
    """SelectorGroupSync などが参照するパラメータ側の口。

    Notes
    -----
    - 値変更通知（listener 呼び出し）は UI スレッドで届く前提とする。
    - `propose_value` が外へ値を書き込む唯一の経路。
    """

    @property
    def default_value(self) -> float: ...

    def current_value(self) -> float: ...

    def propose_value(self, value: float, *, as_complete_gesture: bool) -> None: ...

    def add_listener(self, listener: ValueListener) -> None: ...

    def remove_listener(self, listener: ValueListener) -> None: ...


class RangedParameter:
    """物理レンジ付きの float パラメータ。

    Parameters
    ----------
    parameter_id
        パラメータ ID（ParameterTree 内で一意）。
    name
        表示名。
    default
        既定値（レンジへ clamp される）。
    curve
        正規化位置との写像。None の場合は minimum..maximum の線形写像を使う。
    minimum, maximum
        curve が None の場合の物理レンジ。
    codec
        値⇔文字列の codec。None の場合は PlainCodec。
    label
        単位ラベル（サフィックス表示用）。
    """

    def __init__(
        self,
        parameter_id: str,
        name: str,
        *,
        default: float,
        curve: RangeCurve | None = None,
        minimum: float = 0.0,
        maximum: float = 1.0,
        codec: ValueTextCodec | None = None,
        label: str = "",
    ) -> None:
        if not str(parameter_id):
            raise ValueError("parameter_id は空にできない")
        if curve is not None:
            minimum, maximum = float(curve.start), float(curve.end)
        if not float(minimum) < float(maximum):
            raise ValueError(f"minimum < maximum である必要がある: got {minimum}, {maximum}")

        self.parameter_id = str(parameter_id)
        self.name = str(name)
        self.label = str(label)
        self.curve = curve
        self.codec: ValueTextCodec = codec if codec is not None else PlainCodec()
        self._minimum = float(minimum)
        self._maximum = float(maximum)
        self._default = clamp(float(default), self._minimum, self._maximum)
        self._value = self._default
        self._listeners: list[ValueListener] = []
        self._gesture_depth = 0
        self.completed_gestures = 0

    def __repr__(self) -> str:
        return f"RangedParameter({self.parameter_id!r}, value={self._value!r})"

    @property
    def minimum(self) -> float:
        return self._minimum

    @property
    def maximum(self) -> float:
        return self._maximum

    @property
    def default_value(self) -> float:
        return self._default

    @property
    def gesture_active(self) -> bool:
        """begin_gesture() 〜 end_gesture() の間なら True。"""

        return self._gesture_depth > 0

    def current_value(self) -> float:
        """現在の物理値を返す。"""

        return self._value

    # --- 正規化位置 ---
    def normalized_value(self) -> float:
        """現在値の正規化位置 [0, 1] を返す。"""

        return self.to_normalized(self._value)

    def to_normalized(self, value: float) -> float:
        if self.curve is not None:
            return self.curve.to_normalized(value)
        v = clamp(float(value), self._minimum, self._maximum)
        return (v - self._minimum) / (self._maximum - self._minimum)

    def to_physical(self, normalized: float) -> float:
        if self.curve is not None:
            return self.curve.to_physical(normalized)
        n = clamp(float(normalized), 0.0, 1.0)
        return self._minimum + (self._maximum - self._minimum) * n

    # --- テキスト ---
    def text_for_value(self, value: float | None = None) -> str:
        """value（省略時は現在値）の表示文字列を返す。"""

        return self.codec.render(self._value if value is None else float(value))

    def value_for_text(self, text: str) -> float:
        """文字列を解析し、レンジへ clamp した物理値を返す。"""

        return clamp(self.codec.parse(text), self._minimum, self._maximum)

    # --- 値の更新 ---
    def begin_gesture(self) -> None:
        self._gesture_depth += 1

    def end_gesture(self) -> None:
        if self._gesture_depth == 0:
            raise RuntimeError(f"begin_gesture() されていない: {self.parameter_id}")
        self._gesture_depth -= 1
        if self._gesture_depth == 0:
            self.completed_gestures += 1

    def set_value_as_part_of_gesture(self, value: float) -> None:
        """ジェスチャ中の部分的な値更新（ドラッグ等）。"""

        self._set_value(value)

    def propose_value(self, value: float, *, as_complete_gesture: bool = True) -> None:
        """値を提案する。as_complete_gesture=True なら 1 回の完結したジェスチャとして扱う。"""

        if not as_complete_gesture:
            self._set_value(value)
            return
        self.begin_gesture()
        try:
            self._set_value(value)
        finally:
            self.end_gesture()

    def _set_value(self, value: float) -> None:
        new_value = clamp(float(value), self._minimum, self._maximum)
        if new_value == self._value:
            return
        self._value = new_value
        _logger.debug("parameter changed: id=%s value=%r", self.parameter_id, new_value)
        for listener in list(self._listeners):
            listener(new_value)

    # --- listener ---
    def add_listener(self, listener: ValueListener) -> None:
        """値変更 listener を登録する（同一 listener の重複登録は無視）。"""

        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ValueListener) -> None:
        """値変更 listener を解除する（未登録なら何もしない）。"""

        if listener in self._listeners:
            self._listeners.remove(listener)

    def listener_count(self) -> int:
        return len(self._listeners)


__all__ = ["ParameterHost", "RangedParameter", "ValueListener"]
