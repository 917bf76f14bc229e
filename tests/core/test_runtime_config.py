"""core.runtime_config をテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from audioparams.core.runtime_config import runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)


def test_packaged_defaults() -> None:
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.decimals == 1
    assert cfg.decibel_suffix == "dB"
    assert cfg.off_label == "OFF"
    assert cfg.pan_center_label == "< C >"
    assert cfg.pan_convention == "spaced"
    assert (cfg.khz_decimals, cfg.hz_decimals) == (2, 1)
    assert cfg.curve_breakpoint == pytest.approx(0.7)
    assert cfg.curve_exponent == pytest.approx(2.5)
    assert cfg.quantize.coarse_below == pytest.approx(-24.0)


def test_result_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first

    cfg_path = tmp_path / "a.yaml"
    cfg_path.write_text("version: 1\ncodecs:\n  decimals: 3\n", encoding="utf-8")
    set_config_path(cfg_path)
    second = runtime_config()
    assert second is not first
    assert second.decimals == 3
    assert second.config_path == cfg_path


def test_discovered_config_in_cwd_is_merged(tmp_path: Path) -> None:
    local = tmp_path / ".audioparams"
    local.mkdir()
    (local / "config.yaml").write_text(
        "codecs:\n  frequency:\n    hz_decimals: 0\n", encoding="utf-8"
    )
    cfg = runtime_config()
    assert cfg.hz_decimals == 0
    assert cfg.khz_decimals == 2


def test_explicit_path_wins_over_discovered(tmp_path: Path) -> None:
    local = tmp_path / ".audioparams"
    local.mkdir()
    (local / "config.yaml").write_text("codecs:\n  off_label: local\n", encoding="utf-8")
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("codecs:\n  off_label: explicit\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config().off_label == "explicit"


def test_missing_explicit_path_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "- a\n- b\n",
        "codecs: 3\n",
        "codecs:\n  decimals: many\n",
        "range_curve:\n  exponent: steep\n",
        "codecs:\n  pan:\n    convention: sideways\n",
    ],
)
def test_malformed_config_raises(tmp_path: Path, text: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    set_config_path(path)
    with pytest.raises((RuntimeError, ValueError)):
        runtime_config()
