from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import Geometry

from .base import complete_graph_edges, normalize_vertices, require_dimension
from .registry import shape


def _standard_simplex(dimension: int) -> np.ndarray:
    """原点 + 各軸の単位ベクトル（標準単体）の `(d + 1, d)` 頂点。"""
    vertices = np.zeros((dimension + 1, dimension), dtype=np.float64)
    vertices[1:] = np.eye(dimension, dtype=np.float64)
    return vertices


@shape
def simplex(dimension: int = 4, **params: Any) -> Geometry:
    """n-単体（四面体の一般化）を生成します。

    頂点 d+1 個、辺は完全グラフ `d(d+1)/2` 本。重心は原点、最大絶対座標は 1。
    """
    d = require_dimension(dimension, 3, "simplex")
    vertices = normalize_vertices(_standard_simplex(d))
    return Geometry(
        d,
        "simplex",
        vertices,
        complete_graph_edges(d + 1),
        metadata={
            "name": f"{d}-Simplex",
            "properties": {"vertex_formula": "n+1", "edge_formula": "(n+1)·n/2"},
        },
    )


simplex.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
}
