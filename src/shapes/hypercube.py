from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import Geometry

from .base import normalize_vertices, require_dimension
from .registry import shape


def _hypercube_vertices(dimension: int) -> np.ndarray:
    """頂点 `k` のビット `a` が軸 `a` の符号（0 → -1, 1 → +1）を表す `{±1}^d`。"""
    idx = np.arange(1 << dimension, dtype=np.int64)
    bits = (idx[:, None] >> np.arange(dimension, dtype=np.int64)) & 1
    return bits.astype(np.float64) * 2.0 - 1.0


def _hypercube_edges(dimension: int) -> np.ndarray:
    """ちょうど 1 ビットだけ異なる頂点対（`d * 2^(d-1)` 本）。"""
    idx = np.arange(1 << dimension, dtype=np.int64)
    chunks = []
    for axis in range(dimension):
        bit = 1 << axis
        lo = idx[(idx & bit) == 0]
        chunks.append(np.stack([lo, lo | bit], axis=1))
    edges = np.concatenate(chunks)
    order = np.lexsort((edges[:, 1], edges[:, 0]))
    return edges[order]


@shape
def hypercube(dimension: int = 4, **params: Any) -> Geometry:
    """n-立方体（立方体の一般化）を生成します。"""
    d = require_dimension(dimension, 3, "hypercube")
    vertices = normalize_vertices(_hypercube_vertices(d))
    return Geometry(
        d,
        "hypercube",
        vertices,
        _hypercube_edges(d),
        metadata={
            "name": f"{d}-Cube",
            "properties": {"vertex_formula": "2^n", "edge_formula": "n·2^(n-1)"},
        },
    )


hypercube.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
}
