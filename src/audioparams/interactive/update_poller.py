# どこで: `src/audioparams/interactive/update_poller.py`。
# 何を: UpdateFlag を UI スレッドでポーリングし、登録済みの再同期コールバックを呼ぶ。
# なぜ: オーディオスレッドはフラグを立てるだけにし、値の読み直しとウィジェット更新を UI スレッドへ閉じ込めるため。

from __future__ import annotations

import logging
from collections.abc import Callable

from audioparams.core.listeners import UpdateFlag

_logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], None]


class UpdatePoller:
    """UpdateFlag の UI スレッド側。

    Notes
    -----
    - `poll()` はタイマー等から UI スレッドで定期的に呼ぶ想定。
    - 1 つのコールバックが例外を出しても、残りのコールバックは実行する。
    """

    def __init__(self, flag: UpdateFlag) -> None:
        self._flag = flag
        self._callbacks: list[RefreshCallback] = []

    @property
    def flag(self) -> UpdateFlag:
        return self._flag

    def add_callback(self, callback: RefreshCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def remove_callback(self, callback: RefreshCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def poll(self) -> bool:
        """フラグが立っていれば下ろしてコールバックを呼び、True を返す。"""

        if not self._flag.consume():
            return False
        for callback in list(self._callbacks):
            try:
                callback()
            except Exception:
                _logger.exception("Failed to run refresh callback: %r", callback)
        return True


__all__ = ["RefreshCallback", "UpdatePoller"]
