# どこで: `src/audioparams/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: codec の桁数や RangeCurve の形状をプラグインごとに差し替えられるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class QuantizeConfig:
    """RangeCurve.quantize の既定 tier 設定。"""

    coarse_below: float
    fine_from: float
    coarse_step: float
    medium_step: float
    fine_step: float


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """audioparams の実行時設定。"""

    config_path: Path | None
    decimals: int
    decibel_suffix: str
    off_label: str
    pan_center_label: str
    pan_convention: str
    khz_decimals: int
    hz_decimals: int
    curve_breakpoint: float
    curve_exponent: float
    curve_interval: float
    quantize: QuantizeConfig


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None

_PAN_CONVENTIONS = ("spaced", "percent")


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    p = Path(str(path)).expanduser()
    _EXPLICIT_CONFIG_PATH = p
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".audioparams" / "config.yaml",
        home / ".config" / "audioparams" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int(value: Any, *, key: str) -> int:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        out = int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc
    if out < 0:
        raise ValueError(f"{key} は 0 以上である必要があります: got={out}")
    return out


def _as_float(value: Any, *, key: str) -> float:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_str(value: Any, *, key: str) -> str:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return str(value)


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping 同士を再帰的にマージした dict を返す（後勝ち）。"""

    out = dict(base)
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            out[key] = _deep_update(current, value)
        else:
            out[key] = value
    return out


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    try:
        import yaml  # type: ignore[import-untyped]
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(f"PyYAML を import できません: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("audioparams")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="audioparams/resource/default_config.yaml")


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None:
        explicit_path = Path(_expand_path_text(str(explicit_path)))
        if not explicit_path.is_file():
            raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _deep_update(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _deep_update(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    codecs = _as_mapping(payload.get("codecs"), key="codecs")
    pan = _as_mapping(codecs.get("pan"), key="codecs.pan")
    frequency = _as_mapping(codecs.get("frequency"), key="codecs.frequency")

    pan_convention = _as_str(pan.get("convention"), key="codecs.pan.convention")
    if pan_convention not in _PAN_CONVENTIONS:
        raise ValueError(
            f"codecs.pan.convention は {_PAN_CONVENTIONS} のいずれかである必要があります: "
            f"got={pan_convention!r}"
        )

    curve = _as_mapping(payload.get("range_curve"), key="range_curve")
    quantize = _as_mapping(curve.get("quantize"), key="range_curve.quantize")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        decimals=_as_int(codecs.get("decimals"), key="codecs.decimals"),
        decibel_suffix=_as_str(codecs.get("decibel_suffix"), key="codecs.decibel_suffix"),
        off_label=_as_str(codecs.get("off_label"), key="codecs.off_label"),
        pan_center_label=_as_str(pan.get("center_label"), key="codecs.pan.center_label"),
        pan_convention=pan_convention,
        khz_decimals=_as_int(frequency.get("khz_decimals"), key="codecs.frequency.khz_decimals"),
        hz_decimals=_as_int(frequency.get("hz_decimals"), key="codecs.frequency.hz_decimals"),
        curve_breakpoint=_as_float(curve.get("breakpoint"), key="range_curve.breakpoint"),
        curve_exponent=_as_float(curve.get("exponent"), key="range_curve.exponent"),
        curve_interval=_as_float(curve.get("interval"), key="range_curve.interval"),
        quantize=QuantizeConfig(
            coarse_below=_as_float(
                quantize.get("coarse_below"), key="range_curve.quantize.coarse_below"
            ),
            fine_from=_as_float(quantize.get("fine_from"), key="range_curve.quantize.fine_from"),
            coarse_step=_as_float(
                quantize.get("coarse_step"), key="range_curve.quantize.coarse_step"
            ),
            medium_step=_as_float(
                quantize.get("medium_step"), key="range_curve.quantize.medium_step"
            ),
            fine_step=_as_float(quantize.get("fine_step"), key="range_curve.quantize.fine_step"),
        ),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["QuantizeConfig", "RuntimeConfig", "runtime_config", "set_config_path"]
