# どこで: `src/audioparams/core/tree.py`。
# 何を: パラメータをグループ階層へ登録し、ID で参照/監視できる ParameterTree を提供する。
# なぜ: 文字列比較の探索を毎回せずに済むよう、登録時に参照を返して呼び出し側で保持させるため。

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar, Union

from .parameter import RangedParameter

_logger = logging.getLogger(__name__)

ParameterIdListener = Callable[[str, float], None]

T = TypeVar("T", bound=Union[RangedParameter, "ParameterGroup"])


class ParameterGroup:
    """パラメータとサブグループを順序付きで保持するグループ。"""

    def __init__(self, group_id: str, name: str, separator: str = "|") -> None:
        self.group_id = str(group_id)
        self.name = str(name)
        self.separator = str(separator)
        self._children: list[RangedParameter | ParameterGroup] = []

    def __repr__(self) -> str:
        return f"ParameterGroup({self.group_id!r}, children={len(self._children)})"

    @property
    def children(self) -> tuple[RangedParameter | ParameterGroup, ...]:
        return tuple(self._children)

    def add_child(self, child: RangedParameter | ParameterGroup) -> None:
        self._children.append(child)

    def iter_parameters(self) -> Iterator[RangedParameter]:
        """配下の全パラメータを登録順（深さ優先）で返す。"""

        for child in self._children:
            if isinstance(child, ParameterGroup):
                yield from child.iter_parameters()
            else:
                yield child


class ParameterTree:
    """ParameterGroup の根。パラメータ ID の一意性と ID 単位の監視を管理する。"""

    def __init__(self) -> None:
        self.root = ParameterGroup("", "")
        self._by_id: dict[str, RangedParameter] = {}
        self._id_listeners: dict[str, list[ParameterIdListener]] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, parameter_id: object) -> bool:
        return parameter_id in self._by_id

    def parameter_ids(self) -> list[str]:
        return [p.parameter_id for p in self.root.iter_parameters()]

    def get(self, parameter_id: str) -> RangedParameter | None:
        """ID に対応するパラメータを返す。未登録なら None。"""

        return self._by_id.get(str(parameter_id))

    def add(self, child: T, *, group: ParameterGroup | None = None) -> T:
        """child をグループ（省略時は root）へ追加し、その参照を返す。

        Raises
        ------
        ValueError
            パラメータ ID が既に登録済みの場合、または group が tree に繋がっていない場合。
        """

        if group is not None and not self._is_attached(group):
            raise ValueError(f"group が tree に追加されていない: {group.group_id!r}")

        params = (
            list(child.iter_parameters()) if isinstance(child, ParameterGroup) else [child]
        )
        for param in params:
            if param.parameter_id in self._by_id:
                raise ValueError(f"parameter id が重複している: {param.parameter_id!r}")

        target = self.root if group is None else group
        target.add_child(child)
        for param in params:
            self._register(param)
        return child

    def _is_attached(self, group: ParameterGroup) -> bool:
        stack = [self.root]
        while stack:
            current = stack.pop()
            if current is group:
                return True
            stack.extend(c for c in current.children if isinstance(c, ParameterGroup))
        return False

    def _register(self, param: RangedParameter) -> None:
        self._by_id[param.parameter_id] = param
        parameter_id = param.parameter_id

        def _forward(value: float) -> None:
            for listener in list(self._id_listeners.get(parameter_id, ())):
                listener(parameter_id, value)

        param.add_listener(_forward)

    def add_parameter_listener(self, parameter_id: str, listener: ParameterIdListener) -> None:
        """parameter_id の値変更 listener を登録する。"""

        if str(parameter_id) not in self._by_id:
            raise KeyError(f"未登録の parameter id: {parameter_id!r}")
        listeners = self._id_listeners.setdefault(str(parameter_id), [])
        if listener not in listeners:
            listeners.append(listener)
            _logger.debug("parameter listener added: id=%s", parameter_id)

    def remove_parameter_listener(self, parameter_id: str, listener: ParameterIdListener) -> None:
        """parameter_id の値変更 listener を解除する（未登録なら何もしない）。"""

        listeners = self._id_listeners.get(str(parameter_id))
        if listeners and listener in listeners:
            listeners.remove(listener)
            _logger.debug("parameter listener removed: id=%s", parameter_id)

    def listener_count(self, parameter_id: str) -> int:
        return len(self._id_listeners.get(str(parameter_id), ()))


def add_to_layout(layout: ParameterTree | ParameterGroup, child: T) -> T:
    """layout（tree または group）へ child を追加し、その参照を返す。

    Notes
    -----
    ParameterGroup へ直接追加した子は、後でそのグループを tree に add した時点で
    ID 登録される。
    """

    if isinstance(layout, ParameterTree):
        return layout.add(child)
    layout.add_child(child)
    return child


__all__ = [
    "ParameterGroup",
    "ParameterIdListener",
    "ParameterTree",
    "add_to_layout",
]
