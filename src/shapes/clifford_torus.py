"""
どこで: `shapes.clifford_torus`
何を: 平坦トーラス（Clifford torus）の格子を N 次元で生成する。
なぜ: S³ 上の平坦トーラスとその k 円版を、面検出可能な格子位相として提供するため。

モード:
- "classic": 先頭 4 座標に `(cos u, sin u, cos v, sin v) / √2`（d >= 4）。
- "generalized": k 個の円の直積 `T^k`（2k <= d）。頂点 `steps_per_circle^k`。
- d == 3 のときは S³ に埋め込めないため、通常の 3D トーラス（"3d-torus"）で代替する。

格子の頂点添字は `i * res_v + j`（generalized は先頭の円が最上位桁）。
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import grid_edges, normalize_vertices, require_dimension, require_resolution
from .registry import shape

logger = logging.getLogger(__name__)

MODES = ("classic", "generalized")
# generalized の総頂点数上限（フレーム予算内に収めるため）
MAX_GENERALIZED_POINTS = 20_000


def _torus_3d(res_u: int, res_v: int, major_radius: float, minor_radius: float) -> np.ndarray:
    u = 2 * np.pi * np.arange(res_u) / res_u
    v = 2 * np.pi * np.arange(res_v) / res_v
    uu, vv = np.meshgrid(u, v, indexing="ij")
    r = major_radius + minor_radius * np.cos(vv)
    out = np.empty((res_u * res_v, 3), dtype=np.float64)
    out[:, 0] = (r * np.cos(uu)).ravel()
    out[:, 1] = (r * np.sin(uu)).ravel()
    out[:, 2] = (minor_radius * np.sin(vv)).ravel()
    return out


def _classic(dimension: int, res_u: int, res_v: int) -> np.ndarray:
    u = 2 * np.pi * np.arange(res_u) / res_u
    v = 2 * np.pi * np.arange(res_v) / res_v
    uu, vv = np.meshgrid(u, v, indexing="ij")
    out = np.zeros((res_u * res_v, dimension), dtype=np.float64)
    s = 1.0 / np.sqrt(2.0)
    out[:, 0] = s * np.cos(uu).ravel()
    out[:, 1] = s * np.sin(uu).ravel()
    out[:, 2] = s * np.cos(vv).ravel()
    out[:, 3] = s * np.sin(vv).ravel()
    return out


def _generalized(dimension: int, k: int, steps: int) -> np.ndarray:
    # 各 |z_m| = 1/√k（全体が単位球面上）
    radius = 1.0 / np.sqrt(k)
    idx = np.indices((steps,) * k).reshape(k, -1).T
    theta = 2 * np.pi * idx / steps
    out = np.zeros((idx.shape[0], dimension), dtype=np.float64)
    out[:, 0 : 2 * k : 2] = radius * np.cos(theta)
    out[:, 1 : 2 * k : 2] = radius * np.sin(theta)
    return out


def _generalized_edges(k: int, steps: int) -> np.ndarray:
    """k 次元ラップアラウンド格子の辺（各軸方向に +1）。"""
    shape_k = (steps,) * k
    linear = np.arange(steps**k, dtype=np.int64).reshape(shape_k)
    chunks = []
    for axis in range(k):
        neighbor = np.roll(linear, -1, axis=axis)
        chunks.append(np.stack([linear.ravel(), neighbor.ravel()], axis=1))
    return np.sort(np.concatenate(chunks), axis=1)


def _clamp_steps(k: int, steps: int) -> int:
    clamped = steps
    while clamped > 3 and clamped**k > MAX_GENERALIZED_POINTS:
        clamped -= 1
    if clamped != steps:
        logger.warning(
            "clifford-torus: steps_per_circle %d exceeds the point budget for k=%d; using %d",
            steps,
            k,
            clamped,
        )
    return clamped


@shape("clifford-torus")
def clifford_torus(
    dimension: int = 4,
    *,
    mode: str = "classic",
    resolution_u: int = 32,
    resolution_v: int = 32,
    k: int = 2,
    steps_per_circle: int = 16,
    major_radius: float = 1.0,
    minor_radius: float = 0.5,
    **params: Any,
) -> Geometry:
    """Clifford トーラスを生成します。

    引数:
        dimension: 空間次元（>= 3）。
        mode: "classic" | "generalized"（d == 3 では無視し 3D トーラスを生成）。
        resolution_u, resolution_v: classic / 3D の格子解像度（>= 3）。
        k: generalized の円の数（1 以上、2k <= dimension）。
        steps_per_circle: generalized の円あたり分割数（>= 3）。
        major_radius, minor_radius: 3D トーラスの半径。
    """
    d = require_dimension(dimension, 3, "clifford-torus")

    if d == 3:
        ru = require_resolution(resolution_u, "resolution_u")
        rv = require_resolution(resolution_v, "resolution_v")
        if not (major_radius > minor_radius > 0):
            raise DomainError("clifford-torus: requires major_radius > minor_radius > 0")
        vertices = _torus_3d(ru, rv, float(major_radius), float(minor_radius))
        edges = grid_edges(ru, rv)
        props: dict[str, Any] = {"mode": "3d-torus", "resolution_u": ru, "resolution_v": rv}
    elif mode == "classic":
        ru = require_resolution(resolution_u, "resolution_u")
        rv = require_resolution(resolution_v, "resolution_v")
        vertices = _classic(d, ru, rv)
        edges = grid_edges(ru, rv)
        props = {"mode": "classic", "resolution_u": ru, "resolution_v": rv}
    elif mode == "generalized":
        kk = int(k)
        if kk < 1:
            raise DomainError(f"clifford-torus: generalized mode requires k >= 1: got {kk}")
        if 2 * kk > d:
            raise DomainError(
                f"clifford-torus: generalized mode with k={kk} requires dimension >= {2 * kk}"
            )
        steps = _clamp_steps(kk, require_resolution(steps_per_circle, "steps_per_circle"))
        vertices = _generalized(d, kk, steps)
        edges = _generalized_edges(kk, steps)
        props = {"mode": "generalized", "k": kk, "steps_per_circle": steps}
    else:
        raise DomainError(f"clifford-torus: unknown mode {mode!r} (expected one of {MODES})")

    return Geometry(
        d,
        "clifford-torus",
        normalize_vertices(vertices),
        edges,
        metadata={"name": f"Clifford Torus ({d}D)", "properties": props},
    )


clifford_torus.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
    "mode": {"choices": list(MODES)},
    "resolution_u": {"type": "integer", "min": 3, "max": 128},
    "resolution_v": {"type": "integer", "min": 3, "max": 128},
    "k": {"type": "integer", "min": 1, "max": 5},
    "steps_per_circle": {"type": "integer", "min": 3, "max": 64},
    "major_radius": {"type": "number", "min": 0.1, "max": 2.0},
    "minor_radius": {"type": "number", "min": 0.05, "max": 1.0},
}
