"""core.tree をテスト。"""

from __future__ import annotations

import pytest

from audioparams.core.parameter import RangedParameter
from audioparams.core.tree import ParameterGroup, ParameterTree, add_to_layout


def _param(pid: str) -> RangedParameter:
    return RangedParameter(pid, pid.title(), default=0.0)


def test_add_returns_reference_and_registers_id() -> None:
    tree = ParameterTree()
    p = add_to_layout(tree, _param("gain"))
    assert tree.get("gain") is p
    assert "gain" in tree
    assert len(tree) == 1
    assert tree.get("missing") is None


def test_group_children_registered_in_order() -> None:
    tree = ParameterTree()
    group = ParameterGroup("eq", "EQ")
    add_to_layout(group, _param("low"))
    sub = add_to_layout(group, ParameterGroup("mid", "Mid"))
    add_to_layout(sub, _param("mid_freq"))
    add_to_layout(group, _param("high"))

    assert add_to_layout(tree, group) is group
    add_to_layout(tree, _param("out"))

    assert tree.parameter_ids() == ["low", "mid_freq", "high", "out"]
    assert tree.root.children[0] is group


def test_duplicate_id_is_rejected_without_partial_registration() -> None:
    tree = ParameterTree()
    tree.add(_param("gain"))
    group = ParameterGroup("g", "G")
    group.add_child(_param("pan"))
    group.add_child(_param("gain"))

    with pytest.raises(ValueError):
        tree.add(group)
    assert "pan" not in tree
    assert len(tree.root.children) == 1


def test_parameter_listener_receives_id_and_value() -> None:
    tree = ParameterTree()
    p = tree.add(_param("mix"))
    seen: list[tuple[str, float]] = []

    def on_change(parameter_id: str, value: float) -> None:
        seen.append((parameter_id, value))

    tree.add_parameter_listener("mix", on_change)
    tree.add_parameter_listener("mix", on_change)
    assert tree.listener_count("mix") == 1

    p.propose_value(0.5)
    assert seen == [("mix", 0.5)]

    tree.remove_parameter_listener("mix", on_change)
    p.propose_value(0.25)
    assert seen == [("mix", 0.5)]
    assert tree.listener_count("mix") == 0


def test_listener_for_unknown_id_raises() -> None:
    tree = ParameterTree()
    with pytest.raises(KeyError):
        tree.add_parameter_listener("nope", lambda pid, v: None)


def test_add_into_detached_group_is_rejected() -> None:
    tree = ParameterTree()
    detached = ParameterGroup("fx", "FX")

    with pytest.raises(ValueError):
        tree.add(_param("drive"), group=detached)
    assert "drive" not in tree
    assert detached.children == ()


def test_add_into_attached_group_registers_id() -> None:
    tree = ParameterTree()
    outer = tree.add(ParameterGroup("fx", "FX"))
    inner = tree.add(ParameterGroup("dist", "Dist"), group=outer)

    p = tree.add(_param("drive"), group=inner)

    assert tree.get("drive") is p
    assert tree.parameter_ids() == ["drive"]
