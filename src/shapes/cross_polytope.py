from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import Geometry

from .base import normalize_vertices, require_dimension
from .registry import shape


@shape("cross-polytope")
def cross_polytope(dimension: int = 4, **params: Any) -> Geometry:
    """n-正軸体（八面体の一般化）を生成します。

    頂点は `+e_k`（添字 2k）と `-e_k`（添字 2k+1）。対蹠点以外の全対を辺とする。
    """
    d = require_dimension(dimension, 3, "cross-polytope")
    vertices = np.zeros((2 * d, d), dtype=np.float64)
    axes = np.arange(d)
    vertices[2 * axes, axes] = 1.0
    vertices[2 * axes + 1, axes] = -1.0

    n = 2 * d
    iu, ju = np.triu_indices(n, k=1)
    antipodal = (iu // 2 == ju // 2)
    edges = np.stack([iu[~antipodal], ju[~antipodal]], axis=1)

    return Geometry(
        d,
        "cross-polytope",
        normalize_vertices(vertices),
        edges,
        metadata={
            "name": f"{d}-Orthoplex",
            "properties": {"vertex_formula": "2n", "edge_formula": "2n(n-1)"},
        },
    )


cross_polytope.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
}
