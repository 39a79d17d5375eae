"""
どこで: `engine.core.slice_animator`
何を: スカラー値（断面の W 位置など）を [minimum, maximum] の間で往復させる Tickable。
なぜ: タイマー駆動を「有効フラグ + 単調時計 + 大きな dt のクランプ」による毎フレーム更新へ置き換えるため。

挙動:
- `enabled=False` の間は何もしない。
- `dt` が `settings.MAX_TICK_DELTA`（既定 0.1 秒）を超えたらクランプ。
- 端に達したら反射して向きを反転する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from common.settings import get as _get_settings

logger = logging.getLogger(__name__)


@dataclass
class SliceAnimator:
    """往復アニメーション（`Tickable` 実装）。

    属性:
        value: 現在値。
        minimum, maximum: 範囲（minimum <= maximum）。
        speed: 1 秒あたりの変化量（>= 0）。
        direction: +1 または -1。
        enabled: False の間は `tick` が no-op。
    """

    value: float = 0.0
    minimum: float = -1.0
    maximum: float = 1.0
    speed: float = 0.5
    direction: int = 1
    enabled: bool = False

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"minimum must be <= maximum: {self.minimum} > {self.maximum}")
        if self.speed < 0:
            raise ValueError(f"speed must be >= 0: got {self.speed}")
        self.direction = 1 if self.direction >= 0 else -1
        self.value = min(max(float(self.value), self.minimum), self.maximum)

    def set_range(self, minimum: float, maximum: float) -> None:
        """範囲を更新し、現在値を範囲内へ収める。"""
        if minimum > maximum:
            raise ValueError(f"minimum must be <= maximum: {minimum} > {maximum}")
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.value = min(max(self.value, self.minimum), self.maximum)

    def tick(self, dt: float) -> None:
        if not self.enabled or dt <= 0:
            return
        max_dt = float(_get_settings().MAX_TICK_DELTA)
        if dt > max_dt:
            logger.debug("tick delta %.3fs clamped to %.3fs", dt, max_dt)
            dt = max_dt

        span = self.maximum - self.minimum
        if span <= 0:
            self.value = self.minimum
            return

        v = self.value + self.direction * self.speed * dt
        # 複数回の反射にも対応（速度が大きい場合）
        while v > self.maximum or v < self.minimum:
            if v > self.maximum:
                v = 2 * self.maximum - v
                self.direction = -1
            else:
                v = 2 * self.minimum - v
                self.direction = 1
        self.value = v


__all__ = ["SliceAnimator"]
