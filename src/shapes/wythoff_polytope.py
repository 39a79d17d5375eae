"""
どこで: `shapes.wythoff_polytope`
何を: 対称群（A / B / D）とプリセット（regular, rectified, ...）から一様多胞体風の頂点集合を作り、
      最短距離の頂点対を辺とする。
なぜ: 正多胞体だけでなく切頂/拡大などの派生形を、同じ正規化規約のまま扱うため。

- A: 単体族。プリセットによらず正単体。
- B: 立方体族。プリセットごとに座標パターンを変える。
- D: 半立方体族（4 次元以上）。
- `snub=True` は頂点を 1 つおきに間引いて辺を張り直す。
- 頂点数は次元ごとの上限で打ち切り、警告を出す。
"""

from __future__ import annotations

import itertools
import logging
import math
from typing import Any

import numpy as np

from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import complete_graph_edges, normalize_vertices, require_dimension, short_edges
from .hypercube import _hypercube_vertices
from .registry import shape
from .simplex import _standard_simplex

logger = logging.getLogger(__name__)

SYMMETRY_GROUPS = ("A", "B", "D")
PRESETS = ("regular", "rectified", "truncated", "cantellated", "runcinated", "omnitruncated")

_GROUP_NAMES = {"A": "Simplex", "B": "Hypercube", "D": "Demihypercube"}

# 次元ごとの頂点数上限
_VERTEX_LIMITS = {
    3: 500,
    4: 2000,
    5: 5000,
    6: 10000,
    7: 15000,
    8: 20000,
    9: 25000,
    10: 30000,
    11: 40000,
}
_DEFAULT_VERTEX_LIMIT = 10000

_SILVER = 1.0 + math.sqrt(2.0)


def vertex_limit(dimension: int) -> int:
    return _VERTEX_LIMITS.get(dimension, _DEFAULT_VERTEX_LIMIT)


def preset_name(preset: str, symmetry_group: str, dimension: int) -> str:
    """表示名（例: "Truncated 5D Simplex"）。"""
    return f"{preset.capitalize()} {dimension}D {_GROUP_NAMES[symmetry_group]}"


def _signs(dimension: int) -> np.ndarray:
    return _hypercube_vertices(dimension)


def _rectified(d: int) -> np.ndarray:
    """1 軸が 0、残り `d-1` 軸が ±1（立方体の辺の中点）。"""
    signs = _signs(d - 1)
    blocks = [np.insert(signs, axis, 0.0, axis=1) for axis in range(d)]
    return np.concatenate(blocks)


def _one_axis_scaled(d: int, factor: float) -> np.ndarray:
    """`{±1}^d` の 1 軸だけを `factor` 倍したもの（軸ごとに 2^d 個）。"""
    signs = _signs(d)
    blocks = []
    for axis in range(d):
        v = signs.copy()
        v[:, axis] *= factor
        blocks.append(v)
    return np.concatenate(blocks)


def _runcinated(d: int) -> np.ndarray:
    """立方体の頂点と、`1 + √2` 倍した正軸体の頂点の和集合。"""
    cross = np.zeros((2 * d, d), dtype=np.float64)
    axes = np.arange(d)
    cross[2 * axes, axes] = _SILVER
    cross[2 * axes + 1, axes] = -_SILVER
    return np.concatenate([_signs(d), cross])


def _omnitruncated(d: int, limit: int) -> np.ndarray:
    """`(1, 2, ..., d)` の全置換 × 全符号。上限に達した時点で打ち切る。"""
    signs = _signs(d)
    blocks = []
    count = 0
    for perm in itertools.permutations(range(1, d + 1)):
        blocks.append(signs * np.asarray(perm, dtype=np.float64))
        count += signs.shape[0]
        if count >= limit:
            break
    return np.concatenate(blocks)[:limit]


def _demihypercube(d: int) -> np.ndarray:
    """正の座標が偶数個の `{±1}^d`（2^(d-1) 個）。"""
    v = _signs(d)
    return v[(v > 0).sum(axis=1) % 2 == 0]


def _b_vertices(d: int, preset: str, limit: int) -> np.ndarray:
    if preset == "regular":
        return _signs(d)
    if preset == "rectified":
        return _rectified(d)
    if preset == "truncated":
        return _one_axis_scaled(d, math.sqrt(2.0) - 1.0)
    if preset == "cantellated":
        return _one_axis_scaled(d, _SILVER)
    if preset == "runcinated":
        return _runcinated(d)
    return _omnitruncated(d, limit)


def _full_count(d: int, group: str, preset: str) -> int:
    if group == "A":
        return d + 1
    if group == "D":
        return 1 << (d - 1)
    return {
        "regular": 1 << d,
        "rectified": d << (d - 1),
        "truncated": d << d,
        "cantellated": d << d,
        "runcinated": (1 << d) + 2 * d,
        "omnitruncated": math.factorial(d) << d,
    }[preset]


@shape("wythoff-polytope")
def wythoff_polytope(
    dimension: int = 4,
    *,
    symmetry_group: str = "B",
    preset: str = "regular",
    snub: bool = False,
    **params: Any,
) -> Geometry:
    """Wythoff 構成に倣った多胞体を生成します。

    引数:
        dimension: 空間次元（>= 3。D 群は >= 4）。
        symmetry_group: "A" | "B" | "D"。
        preset: "regular" | "rectified" | "truncated" | "cantellated" | "runcinated" |
            "omnitruncated"。
        snub: True なら頂点を 1 つおきに間引く（頂点が 5 個以上のときのみ）。

    辺は最短非零距離の頂点対（A 群は完全グラフ）。面は生成時に作らない。
    """
    d = require_dimension(dimension, 3, "wythoff-polytope")
    group = str(symmetry_group).upper()
    if group not in SYMMETRY_GROUPS:
        raise DomainError(
            f"unknown symmetry_group: {symmetry_group!r} (expected one of {SYMMETRY_GROUPS})"
        )
    kind = str(preset).lower()
    if kind not in PRESETS:
        raise DomainError(f"unknown preset: {preset!r} (expected one of {PRESETS})")

    limit = vertex_limit(d)
    if group == "A":
        raw = _standard_simplex(d)
    elif group == "D":
        require_dimension(d, 4, "wythoff-polytope D")
        raw = _demihypercube(d)
    else:
        raw = _b_vertices(d, kind, limit)

    full = _full_count(d, group, kind)
    truncated = full > limit
    if truncated:
        logger.warning(
            "wythoff-polytope: vertex count limited from %d to %d for performance", full, limit
        )
        raw = raw[:limit]

    if snub and raw.shape[0] > 4:
        raw = raw[::2]

    vertices = normalize_vertices(raw)
    if group == "A" and not snub:
        edges = complete_graph_edges(vertices.shape[0])
    else:
        edges = short_edges(vertices)

    return Geometry(
        d,
        "wythoff-polytope",
        vertices,
        edges,
        metadata={
            "name": preset_name(kind, group, d),
            "properties": {
                "symmetry_group": group,
                "preset": kind,
                "snub": bool(snub),
                "vertex_limit": limit,
                "truncated": truncated,
            },
        },
    )


wythoff_polytope.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
    "symmetry_group": {"choices": list(SYMMETRY_GROUPS)},
    "preset": {"choices": list(PRESETS)},
    "snub": {"type": "bool"},
}
