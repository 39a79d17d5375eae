"""
どこで: `engine.core.cross_section`
何を: 4 次元以上のジオメトリを超平面 `x[3] = slice_w` で切った断面（点と線分）を求める。
なぜ: 高次元形状を 3D 断面として観察できるようにするため（スライス値はアニメーション入力にもなる）。

規約:
- 各辺を線形補間で交差判定（`t` は [0, 1] にクランプ）。辺全体が超平面上にある場合は除外。
- 面が与えられれば、交点をちょうど 2 つ持つ面ごとに 1 本の断面辺を張る。
- 面が無ければ、頂点を共有する交差辺どうしを結ぶ。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .geometry import Geometry

_W_AXIS = 3
_EPS = 1e-8


@dataclass(frozen=True)
class CrossSectionResult:
    points: np.ndarray  # (M, d)
    edges: np.ndarray  # (K, 2)
    has_intersection: bool

    @classmethod
    def empty(cls, dimension: int) -> "CrossSectionResult":
        return cls(
            np.empty((0, dimension), dtype=np.float64),
            np.empty((0, 2), dtype=np.int64),
            False,
        )


def compute_cross_section(
    geometry: Geometry,
    slice_w: float,
    faces: Sequence[Sequence[int]] | None = None,
) -> CrossSectionResult:
    """`x[3] = slice_w` での断面を計算する。3 次元以下は常に空。"""
    d = geometry.dimension
    if d <= _W_AXIS or geometry.n_edges == 0:
        return CrossSectionResult.empty(d)

    verts = geometry.vertices
    edges = geometry.edges
    w1 = verts[edges[:, 0], _W_AXIS]
    w2 = verts[edges[:, 1], _W_AXIS]
    crosses = ((w1 <= slice_w) & (w2 >= slice_w)) | ((w1 >= slice_w) & (w2 <= slice_w))
    on_plane = (np.abs(w1 - slice_w) < _EPS) & (np.abs(w2 - slice_w) < _EPS)
    hit = crosses & ~on_plane
    if not np.any(hit):
        return CrossSectionResult.empty(d)

    hit_edges = edges[hit]
    a = verts[hit_edges[:, 0]]
    b = verts[hit_edges[:, 1]]
    dw = w2[hit] - w1[hit]
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(np.abs(dw) < _EPS, 0.0, (slice_w - w1[hit]) / dw)
    t = np.clip(t, 0.0, 1.0)
    points = a + t[:, None] * (b - a)

    point_of: dict[tuple[int, int], int] = {
        (int(i), int(j)): k for k, (i, j) in enumerate(hit_edges.tolist())
    }

    section: list[tuple[int, int]] = []
    if faces:
        for face in faces:
            hits = []
            for k in range(len(face)):
                u, v = int(face[k]), int(face[(k + 1) % len(face)])
                key = (u, v) if u < v else (v, u)
                if key in point_of:
                    hits.append(point_of[key])
            if len(hits) == 2:
                section.append((hits[0], hits[1]))
    else:
        keys = list(point_of)
        for x in range(len(keys)):
            a1, b1 = keys[x]
            for y in range(x + 1, len(keys)):
                a2, b2 = keys[y]
                if a1 == a2 or a1 == b2 or b1 == a2 or b1 == b2:
                    section.append((point_of[keys[x]], point_of[keys[y]]))

    section_edges = (
        np.array(section, dtype=np.int64) if section else np.empty((0, 2), dtype=np.int64)
    )
    return CrossSectionResult(points, section_edges, True)


def project_cross_section_to_3d(result: CrossSectionResult) -> np.ndarray:
    """断面の点を先頭 3 座標へ射影する（不足座標は 0）。"""
    out = np.zeros((result.points.shape[0], 3), dtype=np.float64)
    k = min(3, result.points.shape[1]) if result.points.ndim == 2 else 0
    out[:, :k] = result.points[:, :k]
    return out


def get_w_range(geometry: Geometry) -> tuple[float, float]:
    """第 4 軸（W）の最小/最大。3 次元以下や空なら `(0.0, 0.0)`。"""
    if geometry.dimension <= _W_AXIS or geometry.is_empty:
        return (0.0, 0.0)
    w = geometry.vertices[:, _W_AXIS]
    return (float(w.min()), float(w.max()))


__all__ = [
    "CrossSectionResult",
    "compute_cross_section",
    "project_cross_section_to_3d",
    "get_w_range",
]
