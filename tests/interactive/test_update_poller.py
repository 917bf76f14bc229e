"""interactive.update_poller をテスト。"""

from __future__ import annotations

import logging

import pytest

from audioparams.core.listeners import ParameterListenerManager, UpdateFlag
from audioparams.core.parameter import RangedParameter
from audioparams.core.tree import ParameterTree
from audioparams.interactive.update_poller import UpdatePoller


def test_poll_without_flag_does_nothing() -> None:
    calls: list[str] = []
    poller = UpdatePoller(UpdateFlag())
    poller.add_callback(lambda: calls.append("x"))

    assert poller.poll() is False
    assert calls == []


def test_poll_consumes_flag_and_runs_callbacks_once() -> None:
    calls: list[str] = []

    def refresh() -> None:
        calls.append("refresh")

    flag = UpdateFlag()
    poller = UpdatePoller(flag)
    poller.add_callback(refresh)
    poller.add_callback(refresh)

    flag.set()
    assert poller.poll() is True
    assert poller.poll() is False
    assert calls == ["refresh"]

    poller.remove_callback(refresh)
    poller.remove_callback(refresh)
    flag.set()
    poller.poll()
    assert calls == ["refresh"]


def test_failing_callback_is_logged_and_others_still_run(
    caplog: pytest.LogCaptureFixture,
) -> None:
    calls: list[str] = []

    def broken() -> None:
        raise RuntimeError("boom")

    flag = UpdateFlag()
    poller = UpdatePoller(flag)
    poller.add_callback(broken)
    poller.add_callback(lambda: calls.append("ok"))

    flag.set()
    with caplog.at_level(logging.ERROR, logger="audioparams.interactive.update_poller"):
        assert poller.poll() is True

    assert calls == ["ok"]
    assert "Failed to run refresh callback" in caplog.text


def test_parameter_change_reaches_poller_through_flag() -> None:
    tree = ParameterTree()
    gain = tree.add(RangedParameter("gain", "Gain", default=0.5))
    flag = UpdateFlag()
    seen: list[float] = []
    poller = UpdatePoller(flag)
    poller.add_callback(lambda: seen.append(gain.current_value()))

    with ParameterListenerManager(tree, ["gain"], flag):
        gain.propose_value(0.25)
        gain.propose_value(0.75)
        assert poller.poll() is True

    assert seen == [0.75]
    assert poller.flag is flag
