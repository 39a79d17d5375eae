from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import grid_edges, normalize_vertices, require_dimension, require_resolution
from .registry import shape


def _etas(torus_count: int, eta: float | None) -> np.ndarray:
    """各トーラスの η。1 個なら指定値（既定 π/4）、複数なら (0, π/2) に等間隔。"""
    if torus_count == 1:
        value = np.pi / 4 if eta is None else float(eta)
        if not (0.0 < value < np.pi / 2):
            raise DomainError(f"nested-torus: eta must be in (0, pi/2): got {value}")
        return np.array([value])
    return (np.arange(torus_count) + 1) * (np.pi / 2) / (torus_count + 1)


@shape("nested-torus")
def nested_torus(
    dimension: int = 4,
    *,
    resolution_xi1: int = 24,
    resolution_xi2: int = 24,
    torus_count: int = 3,
    eta: float | None = None,
    **params: Any,
) -> Geometry:
    """S³ の Hopf ファイブレーションに沿った入れ子トーラスを生成します。

    各トーラスは `(cos ξ1 sin η, sin ξ1 sin η, cos ξ2 cos η, sin ξ2 cos η)` の
    `resolution_xi1 × resolution_xi2` 格子。5 次元以上では残りの座標は 0。
    トーラス t の頂点添字は `t * res1 * res2 + i * res2 + j`。
    """
    d = require_dimension(dimension, 4, "nested-torus")
    r1 = require_resolution(resolution_xi1, "resolution_xi1")
    r2 = require_resolution(resolution_xi2, "resolution_xi2")
    count = int(torus_count)
    if count < 1:
        raise DomainError(f"nested-torus: torus_count must be >= 1: got {count}")

    xi1 = 2 * np.pi * np.arange(r1) / r1
    xi2 = 2 * np.pi * np.arange(r2) / r2
    g1, g2 = np.meshgrid(xi1, xi2, indexing="ij")
    g1 = g1.ravel()
    g2 = g2.ravel()

    per_torus = r1 * r2
    vertices = np.zeros((count * per_torus, d), dtype=np.float64)
    edge_chunks = []
    for t, e in enumerate(_etas(count, eta)):
        block = vertices[t * per_torus : (t + 1) * per_torus]
        block[:, 0] = np.cos(g1) * np.sin(e)
        block[:, 1] = np.sin(g1) * np.sin(e)
        block[:, 2] = np.cos(g2) * np.cos(e)
        block[:, 3] = np.sin(g2) * np.cos(e)
        edge_chunks.append(grid_edges(r1, r2, offset=t * per_torus))

    return Geometry(
        d,
        "nested-torus",
        normalize_vertices(vertices),
        np.concatenate(edge_chunks),
        metadata={
            "name": f"Nested Hopf Tori ({d}D)",
            "properties": {
                "resolution_xi1": r1,
                "resolution_xi2": r2,
                "torus_count": count,
            },
        },
    )


nested_torus.__param_meta__ = {
    "dimension": {"type": "integer", "min": 4, "max": 11, "step": 1},
    "resolution_xi1": {"type": "integer", "min": 3, "max": 96},
    "resolution_xi2": {"type": "integer", "min": 3, "max": 96},
    "torus_count": {"type": "integer", "min": 1, "max": 8},
    "eta": {"type": "number", "min": 0.05, "max": 1.52},
}
