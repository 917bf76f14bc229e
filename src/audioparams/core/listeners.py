# どこで: `src/audioparams/core/listeners.py`。
# 何を: 「再計算が必要」フラグと、複数パラメータ ID をまとめて監視する listener 管理を提供する。
# なぜ: オーディオスレッドからの値変更をペイロード無しのフラグだけで UI スレッドへ伝え、値そのものの競合を避けるため。

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .tree import ParameterTree

_logger = logging.getLogger(__name__)


class UpdateFlag:
    """任意スレッドから立て、UI スレッドで消費するフラグ。

    Notes
    -----
    - 値は運ばない。UI 側は `consume()` が True を返したら正準値を自分で読み直す。
    - `threading.Event` を使うので set/clear はスレッド安全。
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def consume(self) -> bool:
        """フラグが立っていれば下ろして True を返す。"""

        if not self._event.is_set():
            return False
        self._event.clear()
        return True


class ParameterListenerManager:
    """parameter_ids の値変更で UpdateFlag を立てる listener を一括登録する。

    Parameters
    ----------
    tree
        監視対象のパラメータを持つ ParameterTree。
    parameter_ids
        監視する ID 列。None の要素は読み飛ばす。
    flag
        変更時に立てるフラグ。
    """

    def __init__(
        self,
        tree: ParameterTree,
        parameter_ids: Iterable[str | None],
        flag: UpdateFlag,
    ) -> None:
        self._tree = tree
        self._flag = flag
        self._registered: list[str] = []

        try:
            for parameter_id in parameter_ids:
                if parameter_id is None or parameter_id in self._registered:
                    continue
                tree.add_parameter_listener(parameter_id, self._on_parameter_changed)
                self._registered.append(parameter_id)
        except BaseException:
            self.close()
            raise
        _logger.debug("listening to parameters: %s", self._registered)

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        return tuple(self._registered)

    def _on_parameter_changed(self, parameter_id: str, value: float) -> None:
        _ = parameter_id, value
        self._flag.set()

    def close(self) -> None:
        """登録した listener を全て解除する（複数回呼んでもよい）。"""

        for parameter_id in self._registered:
            self._tree.remove_parameter_listener(parameter_id, self._on_parameter_changed)
        self._registered.clear()

    def __enter__(self) -> ParameterListenerManager:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


__all__ = ["ParameterListenerManager", "UpdateFlag"]
