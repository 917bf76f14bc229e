# どこで: `src/audioparams/core/range_curve.py`。
# 何を: スライダー位置 [0,1] と物理値レンジの 2 区間（対数/線形）写像と段階的スナップを提供する。
# なぜ: ゼロ点（例: ユニティゲイン）付近を細かく、両端を粗く操作できるカーブを純粋関数として保つため。

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .numbers import clamp
from .runtime_config import runtime_config

_SNAP_DIGITS = 9


def _snap(value: float, step: float) -> float:
    """value を step の倍数へ丸めて返す（0.5 は切り上げ）。"""

    k = math.floor(float(value) / float(step) + 0.5)
    return round(k * float(step), _SNAP_DIGITS)


def _is_multiple(coarse: float, fine: float) -> bool:
    ratio = float(coarse) / float(fine)
    return ratio >= 1.0 and math.isclose(ratio, round(ratio), rel_tol=0.0, abs_tol=1e-9)


@dataclass(frozen=True, slots=True)
class QuantizeTiers:
    """物理値に応じた 3 段階（粗→中→細）のスナップ設定。

    - value < coarse_below: coarse_step
    - coarse_below <= value < fine_from: medium_step
    - fine_from <= value: fine_step

    各 step は 1 つ細かい step の整数倍である必要がある（冪等性のため）。
    """

    coarse_below: float = -24.0
    fine_from: float = -6.0
    coarse_step: float = 1.0
    medium_step: float = 0.5
    fine_step: float = 0.1

    def __post_init__(self) -> None:
        if not self.coarse_below <= self.fine_from:
            raise ValueError(
                "coarse_below <= fine_from である必要がある: "
                f"got coarse_below={self.coarse_below}, fine_from={self.fine_from}"
            )
        for name in ("coarse_step", "medium_step", "fine_step"):
            step = float(getattr(self, name))
            if not step > 0.0:
                raise ValueError(f"{name} は正の値である必要がある: got={step}")
        if not _is_multiple(self.coarse_step, self.medium_step):
            raise ValueError(
                "coarse_step は medium_step の整数倍である必要がある: "
                f"got {self.coarse_step} / {self.medium_step}"
            )
        if not _is_multiple(self.medium_step, self.fine_step):
            raise ValueError(
                "medium_step は fine_step の整数倍である必要がある: "
                f"got {self.medium_step} / {self.fine_step}"
            )

    def step_for(self, value: float) -> float:
        """value が属する tier の step を返す。"""

        if value < self.coarse_below:
            return float(self.coarse_step)
        if value < self.fine_from:
            return float(self.medium_step)
        return float(self.fine_step)

    def snap(self, value: float) -> float:
        """value を tier に従って丸めた値を返す（レンジ clamp は行わない）。"""

        snapped = _snap(value, self.step_for(value))
        # 丸めで tier 境界を跨いだら、移動先の tier で丸め直す。
        # 粗い step の倍数は細かい step の倍数でもあるので、tier 数回で固定点に達する。
        for _ in range(3):
            again = _snap(snapped, self.step_for(snapped))
            if again == snapped:
                break
            snapped = again
        return snapped


@dataclass(frozen=True, slots=True)
class RangeCurve:
    """正規化位置 [0, 1] と物理値 [start, end] の単調な双方向写像。

    - [0, breakpoint) は start..zero_point への対数的区間（`n ** (1/exponent)`）。
    - [breakpoint, 1] は zero_point..end への線形区間。

    Parameters
    ----------
    start, end
        物理値レンジ（start < end）。
    zero_point
        細かく操作したい基準値（start <= zero_point <= end）。
    breakpoint
        対数区間と線形区間の境界となる正規化位置（0 < breakpoint < 1）。
    exponent
        対数区間の形状（> 0）。大きいほど zero_point 付近が細かくなる。
    interval
        `snap_to_legal_value()` の刻み幅。0 なら刻まない。
    tiers
        `quantize()` のスナップ設定。
    """

    start: float
    end: float
    zero_point: float
    breakpoint: float = 0.7
    exponent: float = 2.5
    interval: float = 0.001
    tiers: QuantizeTiers = field(default_factory=QuantizeTiers)

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"start < end である必要がある: got start={self.start}, end={self.end}")
        if not self.start <= self.zero_point <= self.end:
            raise ValueError(
                "start <= zero_point <= end である必要がある: "
                f"got start={self.start}, zero_point={self.zero_point}, end={self.end}"
            )
        if not 0.0 < self.breakpoint < 1.0:
            raise ValueError(f"breakpoint は (0, 1) の範囲である必要がある: got={self.breakpoint}")
        if not self.exponent > 0.0:
            raise ValueError(f"exponent は正の値である必要がある: got={self.exponent}")
        if self.interval < 0.0:
            raise ValueError(f"interval は 0 以上である必要がある: got={self.interval}")

    @classmethod
    def from_config(cls, start: float, end: float, zero_point: float) -> RangeCurve:
        """形状と tier を runtime_config() から補完した RangeCurve を返す。"""

        cfg = runtime_config()
        q = cfg.quantize
        return cls(
            start=float(start),
            end=float(end),
            zero_point=float(zero_point),
            breakpoint=cfg.curve_breakpoint,
            exponent=cfg.curve_exponent,
            interval=cfg.curve_interval,
            tiers=QuantizeTiers(
                coarse_below=q.coarse_below,
                fine_from=q.fine_from,
                coarse_step=q.coarse_step,
                medium_step=q.medium_step,
                fine_step=q.fine_step,
            ),
        )

    # --- scalar ---
    def to_physical(self, normalized: float) -> float:
        """正規化位置を物理値へ変換して返す。"""

        n = clamp(float(normalized), 0.0, 1.0)
        bp = float(self.breakpoint)
        if n < bp:
            proportion = (n / bp) ** (1.0 / float(self.exponent))
            return float(self.start + (self.zero_point - self.start) * proportion)
        proportion = (n - bp) / (1.0 - bp)
        return float(self.zero_point + (self.end - self.zero_point) * proportion)

    def to_normalized(self, physical: float) -> float:
        """物理値を正規化位置へ変換して返す。"""

        v = clamp(float(physical), float(self.start), float(self.end))
        bp = float(self.breakpoint)
        if v < self.zero_point:
            proportion = (v - self.start) / (self.zero_point - self.start)
            return float(bp * proportion ** float(self.exponent))
        if self.end == self.zero_point:
            return bp
        proportion = (v - self.zero_point) / (self.end - self.zero_point)
        return float(bp + (1.0 - bp) * proportion)

    def quantize(self, physical: float) -> float:
        """物理値を tier に従ってスナップし、[start, end] へ clamp して返す。"""

        # 先に clamp しておかないと、レンジ外入力と境界値で丸め先が食い違う。
        v = clamp(float(physical), float(self.start), float(self.end))
        return clamp(self.tiers.snap(v), float(self.start), float(self.end))

    def snap_to_legal_value(self, physical: float) -> float:
        """物理値を `start + k * interval` へ丸めて返す。"""

        v = clamp(float(physical), float(self.start), float(self.end))
        if self.interval <= 0.0:
            return v
        k = math.floor((v - self.start) / self.interval + 0.5)
        snapped = round(self.start + k * self.interval, _SNAP_DIGITS)
        return clamp(snapped, float(self.start), float(self.end))

    # --- vectorized ---
    def to_physical_array(self, normalized: np.ndarray) -> np.ndarray:
        """`to_physical()` の numpy 版（要素ごとに同じ結果）。"""

        n = np.clip(np.asarray(normalized, dtype=np.float64), 0.0, 1.0)
        bp = float(self.breakpoint)
        log_part = self.start + (self.zero_point - self.start) * np.power(
            n / bp, 1.0 / float(self.exponent)
        )
        lin_part = self.zero_point + (self.end - self.zero_point) * ((n - bp) / (1.0 - bp))
        return np.where(n < bp, log_part, lin_part)

    def to_normalized_array(self, physical: np.ndarray) -> np.ndarray:
        """`to_normalized()` の numpy 版（要素ごとに同じ結果）。"""

        v = np.clip(np.asarray(physical, dtype=np.float64), float(self.start), float(self.end))
        bp = float(self.breakpoint)
        below = v < self.zero_point

        if self.zero_point > self.start:
            proportion = (v - self.start) / (self.zero_point - self.start)
            log_part = bp * np.power(np.clip(proportion, 0.0, 1.0), float(self.exponent))
        else:
            log_part = np.full_like(v, bp)

        if self.end > self.zero_point:
            lin_part = bp + (1.0 - bp) * ((v - self.zero_point) / (self.end - self.zero_point))
        else:
            lin_part = np.full_like(v, bp)

        return np.where(below, log_part, lin_part)

    def sample(self, count: int) -> tuple[np.ndarray, np.ndarray]:
        """[0, 1] を count 点で等分した (normalized, physical) を返す（カーブ描画用）。"""

        if int(count) < 2:
            raise ValueError(f"count は 2 以上である必要がある: got={count}")
        normalized = np.linspace(0.0, 1.0, int(count))
        return normalized, self.to_physical_array(normalized)


__all__ = ["QuantizeTiers", "RangeCurve"]
