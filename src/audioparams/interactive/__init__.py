# どこで: `src/audioparams/interactive/__init__.py`。
# 何を: ウィジェット側（ツールキット非依存）の同期ユーティリティを提供する。
# なぜ: UI 状態を持つ部分を interactive 側に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

from .selector_group import (
    SelectorGroupSync,
    SelectorMode,
    SelectorWiringError,
    ToggleWidget,
    widget_identifier,
)
from .update_poller import UpdatePoller

__all__ = [
    "SelectorGroupSync",
    "SelectorMode",
    "SelectorWiringError",
    "ToggleWidget",
    "UpdatePoller",
    "widget_identifier",
]
