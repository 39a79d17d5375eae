from __future__ import annotations

import itertools
from typing import Any

import numpy as np

from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import normalize_vertices, require_dimension, short_edges
from .registry import shape

ROOT_TYPES = ("A", "D", "E8")


def _a_roots(dimension: int) -> np.ndarray:
    """A_{d-1}: `e_i - e_j`（i ≠ j）の d(d-1) 本。"""
    roots = []
    for i, j in itertools.permutations(range(dimension), 2):
        v = np.zeros(dimension, dtype=np.float64)
        v[i] = 1.0
        v[j] = -1.0
        roots.append(v)
    return np.array(roots, dtype=np.float64)


def _d_roots(dimension: int) -> np.ndarray:
    """D_d: `±e_i ± e_j`（i < j）の 2d(d-1) 本。"""
    roots = []
    for i, j in itertools.combinations(range(dimension), 2):
        for si, sj in ((1.0, 1.0), (1.0, -1.0), (-1.0, 1.0), (-1.0, -1.0)):
            v = np.zeros(dimension, dtype=np.float64)
            v[i] = si
            v[j] = sj
            roots.append(v)
    return np.array(roots, dtype=np.float64)


def _e8_roots() -> np.ndarray:
    """E8: D8 の 112 本 + 負号が偶数個の `(±1/2)^8` 128 本 = 240 本。"""
    half = []
    for signs in itertools.product((0.5, -0.5), repeat=8):
        if sum(1 for s in signs if s < 0) % 2 == 0:
            half.append(signs)
    return np.concatenate([_d_roots(8), np.array(half, dtype=np.float64)])


@shape("root-system")
def root_system(dimension: int = 4, *, root_type: str = "A", **params: Any) -> Geometry:
    """ルート系（A / D / E8）の根ベクトルを頂点とする多面体を生成します。

    引数:
        dimension: 空間次元（>= 3）。D は 4 以上、E8 はちょうど 8 を要求する。
        root_type: "A" | "D" | "E8"。

    辺は最短非零距離（相対許容差つき）の頂点対。
    """
    d = require_dimension(dimension, 3, "root-system")
    kind = str(root_type).upper()
    if kind == "A":
        roots = _a_roots(d)
    elif kind == "D":
        require_dimension(d, 4, "root-system D")
        roots = _d_roots(d)
    elif kind == "E8":
        if d != 8:
            raise DomainError(f"root-system E8 requires dimension == 8: got {d}")
        roots = _e8_roots()
    else:
        raise DomainError(f"unknown root_type: {root_type!r} (expected one of {ROOT_TYPES})")

    # 全ルートは同じ長さ √2。正規化で最大絶対座標を 1 に揃える
    vertices = normalize_vertices(roots / np.sqrt(2.0))
    return Geometry(
        d,
        "root-system",
        vertices,
        short_edges(vertices),
        metadata={
            "name": f"{kind} root system ({d}D)",
            "properties": {"root_type": kind, "root_count": int(vertices.shape[0])},
        },
    )


root_system.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
    "root_type": {"choices": list(ROOT_TYPES)},
}
