"""
どこで: `shapes.mandelbulb`
何を: N 次元ハイパーバルブ集合 `z ← z^p + c` を格子上で標本化し、点群 Geometry を返す。
なぜ: GPU のレイマーチとは別に、CPU 側で扱える点群表現（断面・統計・プレビュー）を提供するため。

概要:
- 先頭 3 座標を `[-extent, extent]^3` の `resolution^3` 格子で走査し、残りの座標は `slice` で固定。
- べき乗は超球座標で行う（半径を p 乗、全角度を p 倍）。
- 逃避時間が `escape_threshold * max_iterations` 以上の点だけを残す。辺は持たない。
- 逃避時間カーネルは Numba `njit`。`settings.USE_NUMBA=False` で Python 実装（`py_func`）を使う。
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np
from numba import njit

from common.settings import get as _get_settings
from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import normalize_vertices, require_dimension, require_resolution
from .registry import shape

_EPS = 1e-12


@njit(fastmath=True, cache=True)
def _escape_times(
    points: np.ndarray, max_iterations: int, power: float, escape_radius: float
) -> np.ndarray:
    """各点 c の逃避反復回数（有界なら `max_iterations`）。

    べき乗は超球座標で行う（`py_func` 単体でも動くよう 1 関数に収める）。
    """
    m, n = points.shape
    out = np.empty(m, dtype=np.int64)
    z = np.empty(n, dtype=np.float64)
    zp = np.empty(n, dtype=np.float64)
    r2_limit = escape_radius * escape_radius
    for k in range(m):
        for i in range(n):
            z[i] = 0.0
        count = max_iterations
        for it in range(max_iterations):
            # z^p
            r2 = 0.0
            for i in range(n):
                r2 += z[i] * z[i]
            r = math.sqrt(r2)
            if r < _EPS:
                for i in range(n):
                    zp[i] = 0.0
            else:
                rp = r**power
                sin_prod = 1.0
                tail2 = r2
                for i in range(n - 2):
                    tail = math.sqrt(max(tail2, _EPS))
                    c = min(1.0, max(-1.0, z[i] / tail))
                    theta = math.acos(c) * power
                    zp[i] = rp * sin_prod * math.cos(theta)
                    sin_prod *= math.sin(theta)
                    tail2 -= z[i] * z[i]
                last = math.atan2(z[n - 1], z[n - 2]) * power
                zp[n - 2] = rp * sin_prod * math.cos(last)
                zp[n - 1] = rp * sin_prod * math.sin(last)
            # + c
            r2 = 0.0
            for i in range(n):
                z[i] = zp[i] + points[k, i]
                r2 += z[i] * z[i]
            if r2 > r2_limit:
                count = it
                break
        out[k] = count
    return out


def _sample_grid(
    dimension: int, resolution: int, extent: float, slice_values: Sequence[float]
) -> np.ndarray:
    axis = np.linspace(-extent, extent, resolution)
    gx, gy, gz = np.meshgrid(axis, axis, axis, indexing="ij")
    points = np.zeros((resolution**3, dimension), dtype=np.float64)
    points[:, 0] = gx.ravel()
    points[:, 1] = gy.ravel()
    points[:, 2] = gz.ravel()
    for k, value in enumerate(list(slice_values)[: dimension - 3]):
        points[:, 3 + k] = float(value)
    return points


def compute_escape_times(
    points: np.ndarray, max_iterations: int, power: float, escape_radius: float
) -> np.ndarray:
    """逃避時間を計算する（Numba 有効/無効を設定で切り替え）。"""
    pts = np.ascontiguousarray(points, dtype=np.float64)
    kernel = _escape_times if _get_settings().USE_NUMBA else _escape_times.py_func
    return kernel(pts, int(max_iterations), float(power), float(escape_radius))


@shape
def mandelbulb(
    dimension: int = 3,
    *,
    resolution: int = 32,
    max_iterations: int = 12,
    power: float = 8.0,
    escape_radius: float = 2.0,
    extent: float = 1.25,
    escape_threshold: float = 1.0,
    slice: Sequence[float] = (),
    **params: Any,
) -> Geometry:
    """ハイパーバルブ集合の点群を生成します。

    引数:
        dimension: 空間次元（>= 3）。
        resolution: 1 軸あたりの標本数（>= 3）。
        max_iterations: 反復上限（>= 1）。
        power: べき指数。
        escape_radius: 逃避半径（> 0）。
        extent: 走査範囲の半幅（> 0）。
        escape_threshold: 残す点の逃避時間比（0..1）。1.0 で有界点のみ。
        slice: 第 4 軸以降の固定値（不足分は 0）。
    """
    d = require_dimension(dimension, 3, "mandelbulb")
    res = require_resolution(resolution, "resolution")
    iters = int(max_iterations)
    if iters < 1:
        raise DomainError(f"mandelbulb: max_iterations must be >= 1: got {iters}")
    if escape_radius <= 0 or extent <= 0:
        raise DomainError("mandelbulb: escape_radius and extent must be positive")
    if not (0.0 <= escape_threshold <= 1.0):
        raise DomainError(f"mandelbulb: escape_threshold must be in [0, 1]: got {escape_threshold}")

    points = _sample_grid(d, res, float(extent), slice)
    times = compute_escape_times(points, iters, power, escape_radius)
    keep = times >= escape_threshold * iters

    return Geometry(
        d,
        "mandelbulb",
        normalize_vertices(points[keep]),
        None,
        metadata={
            "name": f"Mandelbulb ({d}D)",
            "escape_times": times[keep].copy(),
            "power": float(power),
            "max_iterations": iters,
            "properties": {"resolution": res, "sample_count": int(points.shape[0])},
        },
    )


mandelbulb.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
    "resolution": {"type": "integer", "min": 3, "max": 96},
    "max_iterations": {"type": "integer", "min": 1, "max": 64},
    "power": {"type": "number", "min": 2.0, "max": 16.0},
    "escape_radius": {"type": "number", "min": 1.0, "max": 8.0},
    "extent": {"type": "number", "min": 0.5, "max": 2.5},
    "escape_threshold": {"type": "number", "min": 0.0, "max": 1.0},
}
