# どこで: `src/audioparams/interactive/selector_group.py`。
# 何を: 1 つのスカラー値と N 個の排他トグルウィジェット（ラジオボタン群）の状態を同期する。
# なぜ: ホスト由来の更新とユーザー操作を区別し、オートメーションとクリックが発振しないようにするため。

from __future__ import annotations

import contextlib
import enum
import logging
import math
from collections.abc import Callable, Iterable, Iterator
from typing import Protocol, runtime_checkable

from audioparams.core.numbers import leading_float, round_half_up
from audioparams.core.parameter import ParameterHost

_logger = logging.getLogger(__name__)

ClickListener = Callable[["ToggleWidget"], None]

# identifier 比較の許容誤差（float32 で往復した値も一致させる）。
_ID_REL_TOL = 1e-6
_ID_ABS_TOL = 1e-9


class SelectorMode(enum.Enum):
    """値とウィジェットの対応付け方。"""

    INDEX = "index"  # 値 = ウィジェットの並び順
    IDENTIFIER = "identifier"  # 値 = ウィジェット名から読んだ数値


class SelectorWiringError(ValueError):
    """SelectorGroupSync の構築（ウィジェット配線）に失敗した場合に送出される例外。"""


@runtime_checkable
class ToggleWidget(Protocol):
    """SelectorGroupSync が要求するトグルウィジェットの口。

    Notes
    -----
    - `set_toggle_state(..., notify=True)` で状態が変わった場合、ウィジェットは
      クリック listener を呼ぶ（ユーザー操作と同じ経路）。
    - クリック listener は `listener(widget)` の形で呼ばれる。
    """

    name: str

    def get_toggle_state(self) -> bool: ...

    def set_toggle_state(self, active: bool, *, notify: bool) -> None: ...

    def add_listener(self, listener: ClickListener) -> None: ...

    def remove_listener(self, listener: ClickListener) -> None: ...

    def set_radio_group_id(self, group_id: int) -> None: ...


_REQUIRED_WIDGET_METHODS = (
    "get_toggle_state",
    "set_toggle_state",
    "add_listener",
    "remove_listener",
)


def _validate_widget(widget: object, *, index: int, needs_group_id: bool) -> None:
    if widget is None:
        raise SelectorWiringError(f"widget handle が None: index={index}")
    required = _REQUIRED_WIDGET_METHODS + (("set_radio_group_id",) if needs_group_id else ())
    missing = [name for name in required if not callable(getattr(widget, name, None))]
    if missing:
        raise SelectorWiringError(
            f"widget がトグルウィジェットの口を満たさない: index={index}, missing={missing}"
        )


def widget_identifier(widget: ToggleWidget) -> float:
    """ウィジェット名から読んだ数値 identifier を返す（数値が無ければ 0.0）。"""

    return leading_float(str(getattr(widget, "name", "")))


class SelectorGroupSync:
    """パラメータ値と排他トグルウィジェット群の同期器。

    Parameters
    ----------
    parameter
        正準値を持つパラメータ（ParameterHost）。
    widgets
        トグルウィジェット列。同一ハンドルの重複は 1 つにまとめる。
    mode
        INDEX: 値を index として扱う。
        IDENTIFIER: 値をウィジェット名の数値と照合する。
    group_id
        0 より大きければ全ウィジェットへラジオグループ ID として設定する。

    Raises
    ------
    SelectorWiringError
        ウィジェットが None / 口を満たさない、または配線途中で失敗した場合。
        途中まで登録した listener は全て解除してから送出する。

    Notes
    -----
    - 構築の最後に 1 回、現在値からウィジェットへ同期する。
    - 破棄時は `close()`（または with 文）で全ウィジェットから登録解除する。
    """

    def __init__(
        self,
        parameter: ParameterHost,
        widgets: Iterable[ToggleWidget],
        *,
        mode: SelectorMode = SelectorMode.INDEX,
        group_id: int | None = None,
    ) -> None:
        if not isinstance(mode, SelectorMode):
            raise SelectorWiringError(f"unknown selector mode: {mode!r}")
        if parameter is None:
            raise SelectorWiringError("parameter が None")

        self._parameter = parameter
        self._mode = mode
        self._group_id = None if group_id is None else int(group_id)
        self._widgets: list[ToggleWidget] = []
        self._ignore_callbacks = False
        self._parameter_registered = False
        self._closed = False
        self._value: float | None = None
        # 登録/解除で同一オブジェクトを渡すために bound method を固定する。
        self._click_listener: ClickListener = self._on_widget_clicked
        self._value_listener: Callable[[float], None] = self._on_parameter_changed

        candidates = list(widgets)
        if not candidates:
            raise SelectorWiringError("widgets が空")
        needs_group_id = self._group_id is not None and self._group_id > 0
        for i, widget in enumerate(candidates):
            _validate_widget(widget, index=i, needs_group_id=needs_group_id)

        try:
            for widget in candidates:
                if any(widget is w for w in self._widgets):
                    continue
                if needs_group_id:
                    widget.set_radio_group_id(int(self._group_id))  # type: ignore[arg-type]
                self._widgets.append(widget)
                widget.add_listener(self._click_listener)
            parameter.add_listener(self._value_listener)
            self._parameter_registered = True
            _logger.debug(
                "selector group wired: mode=%s widgets=%d group_id=%s",
                self._mode.value,
                len(self._widgets),
                self._group_id,
            )
            # 配線完了後に 1 回だけ現在値をウィジェットへ反映する。
            self.refresh()
        except Exception as exc:
            try:
                self.close()
            except Exception:
                _logger.exception("Failed to unwire selector group after wiring error")
            raise SelectorWiringError(f"selector group の配線に失敗: {exc}") from exc

    # --- accessors ---
    def __len__(self) -> int:
        return len(self._widgets)

    @property
    def widgets(self) -> tuple[ToggleWidget, ...]:
        return tuple(self._widgets)

    def widget(self, index: int) -> ToggleWidget:
        return self._widgets[int(index)]

    @property
    def parameter(self) -> ParameterHost:
        return self._parameter

    @property
    def mode(self) -> SelectorMode:
        return self._mode

    @property
    def group_id(self) -> int | None:
        return self._group_id

    @property
    def value(self) -> float | None:
        """最後にウィジェットへ反映した値を返す。"""

        return self._value

    @property
    def active_index(self) -> int | None:
        """アクティブなウィジェットの index を返す。無ければ None。"""

        for i, widget in enumerate(self._widgets):
            if widget.get_toggle_state():
                return i
        return None

    @property
    def closed(self) -> bool:
        return self._closed

    # --- host -> widgets ---
    @contextlib.contextmanager
    def _suppress_callbacks(self) -> Iterator[None]:
        """プログラムからの状態変更中はクリック処理を無効化する。"""

        previous = self._ignore_callbacks
        self._ignore_callbacks = True
        try:
            yield
        finally:
            self._ignore_callbacks = previous

    def refresh(self) -> None:
        """パラメータの現在値を読み直してウィジェットへ反映する。"""

        self.apply_value(self._parameter.current_value())

    def apply_value(self, value: float) -> None:
        """value をウィジェットの選択状態へ反映する（パラメータへは提案しない）。"""

        if self._closed:
            return
        self._value = float(value)
        with self._suppress_callbacks():
            if self._mode is SelectorMode.INDEX:
                self._apply_index(self._value)
            else:
                self._apply_identifier(self._value)

    def _activate_only(self, target: int | None) -> None:
        for i, widget in enumerate(self._widgets):
            if i != target and widget.get_toggle_state():
                widget.set_toggle_state(False, notify=False)
        if target is not None:
            self._widgets[target].set_toggle_state(True, notify=True)

    def _apply_index(self, value: float) -> None:
        last = len(self._widgets) - 1
        if not math.isfinite(value):
            # NaN は先頭、±inf は該当する端へ寄せる。
            index = last if value > 0 else 0
            _logger.warning("selector index is not finite: value=%r index=%d", value, index)
            self._activate_only(index)
            return
        index = round_half_up(value)
        if index < 0 or index > last:
            clamped = max(0, min(last, index))
            _logger.warning(
                "selector index out of range: value=%r clamped=%d widgets=%d",
                value,
                clamped,
                len(self._widgets),
            )
            index = clamped
        self._activate_only(index)

    def _apply_identifier(self, value: float) -> None:
        for i, widget in enumerate(self._widgets):
            if self._matches(widget_identifier(widget), value):
                self._activate_only(i)
                return
        # 一致するウィジェットが無い場合は全て非選択にする（正常状態）。
        _logger.debug("selector identifier miss: value=%r", value)
        self._activate_only(None)

    @staticmethod
    def _matches(a: float, b: float) -> bool:
        return math.isclose(float(a), float(b), rel_tol=_ID_REL_TOL, abs_tol=_ID_ABS_TOL)

    # --- widgets -> host ---
    def _index_of(self, widget: ToggleWidget) -> int | None:
        for i, w in enumerate(self._widgets):
            if w is widget:
                return i
        return None

    def _on_parameter_changed(self, value: float) -> None:
        self.apply_value(value)

    def _on_widget_clicked(self, widget: ToggleWidget) -> None:
        if self._ignore_callbacks or self._closed:
            return
        index = self._index_of(widget)
        if index is None or not widget.get_toggle_state():
            return

        if self._mode is SelectorMode.INDEX:
            new_value = float(index)
        else:
            new_value = widget_identifier(widget)
            # 選択済みの項目を再クリックした場合は既定値へ戻す（選択が固着しないように）。
            if self._matches(new_value, self._parameter.current_value()):
                new_value = float(self._parameter.default_value)

        _logger.debug("selector proposes: index=%d value=%r", index, new_value)
        self._parameter.propose_value(new_value, as_complete_gesture=True)
        # ホストが値を clamp して通知を返さない場合も、正準値へ表示を揃える。
        self.refresh()

    # --- lifecycle ---
    def close(self) -> None:
        """全ウィジェットとパラメータから listener を解除する（複数回呼んでもよい）。

        途中の解除で例外が出ても残りの解除は続け、最初の例外を最後に送出する。
        """

        if self._closed:
            return
        self._closed = True

        errors: list[Exception] = []
        for widget in self._widgets:
            try:
                widget.remove_listener(self._click_listener)
            except Exception as exc:
                errors.append(exc)
        if self._parameter_registered:
            try:
                self._parameter.remove_listener(self._value_listener)
            except Exception as exc:
                errors.append(exc)
            self._parameter_registered = False
        _logger.debug("selector group unwired: widgets=%d", len(self._widgets))
        if errors:
            raise errors[0]

    def __enter__(self) -> SelectorGroupSync:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


__all__ = [
    "ClickListener",
    "SelectorGroupSync",
    "SelectorMode",
    "SelectorWiringError",
    "ToggleWidget",
    "widget_identifier",
]
