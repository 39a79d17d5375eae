"""
シェイプ共通ヘルパ

概要:
- すべての生成器が共有する「次元チェック → 構築 → 重心合わせ → 単位範囲への正規化」の部品。
- 辺集合の定型（完全グラフ、ラップアラウンド格子、最短距離辺）を提供する。

設計意図:
- 各生成器は `(dimension, **config) -> Geometry` の純関数として書き、ここにある部品だけで
  正規化規約（bounding box が [-1, 1] に収まる）を満たす。
- 変換（scale/rotate/shear/translate）は生成器では行わず、`engine.core.transform_utils` に委ねる。
"""

from __future__ import annotations

import itertools
from typing import Iterator

import numpy as np

from engine.core.errors import DomainError


def require_dimension(dimension: int, minimum: int, family: str) -> int:
    """`dimension >= minimum` を検証して int で返す。"""
    if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
        raise DomainError(f"{family}: dimension must be an integer: got {dimension!r}")
    if dimension < minimum:
        raise DomainError(
            f"{family}: dimension too small (requires >= {minimum}, got {dimension})"
        )
    return int(dimension)


def require_resolution(value: int, name: str, minimum: int = 3) -> int:
    """格子解像度の検証（ラップアラウンドで面が潰れないよう既定 3 以上）。"""
    try:
        v = int(value)
    except (TypeError, ValueError) as exc:
        raise DomainError(f"{name} must be an integer: got {value!r}") from exc
    if v < minimum:
        raise DomainError(f"{name} must be >= {minimum}: got {v}")
    return v


def recenter(vertices: np.ndarray) -> np.ndarray:
    """算術平均の重心を原点へ移した新しい配列を返す。"""
    if vertices.shape[0] == 0:
        return vertices.copy()
    return vertices - vertices.mean(axis=0)


def normalize_vertices(vertices: np.ndarray) -> np.ndarray:
    """重心を原点へ移し、最大絶対座標が 1 になるよう一様に割る。

    最大絶対座標が 0（全頂点が重心に一致）の場合は重心合わせのみ行う。
    """
    centered = recenter(np.asarray(vertices, dtype=np.float64))
    if centered.size == 0:
        return centered
    max_abs = float(np.max(np.abs(centered)))
    if max_abs > 0:
        return centered / max_abs
    return centered


def complete_graph_edges(n: int) -> np.ndarray:
    """全頂点対 `(i, j)`, `i < j` を 1 度ずつ（`C(n, 2)` 本）。"""
    pairs = list(itertools.combinations(range(n), 2))
    if not pairs:
        return np.empty((0, 2), dtype=np.int64)
    return np.array(pairs, dtype=np.int64)


def grid_edges(res_u: int, res_v: int, offset: int = 0) -> np.ndarray:
    """`res_u × res_v` のラップアラウンド格子の辺（添字は `offset + i * res_v + j`）。"""
    i, j = np.meshgrid(np.arange(res_u), np.arange(res_v), indexing="ij")
    here = offset + i * res_v + j
    right = offset + i * res_v + (j + 1) % res_v
    down = offset + ((i + 1) % res_u) * res_v + j
    edges = np.concatenate(
        [
            np.stack([here.ravel(), right.ravel()], axis=1),
            np.stack([here.ravel(), down.ravel()], axis=1),
        ]
    )
    return np.sort(edges, axis=1)


_PAIR_BLOCK_ELEMENTS = 1 << 22


def _row_blocks(vertices: np.ndarray) -> Iterator[tuple[int, np.ndarray]]:
    """行ブロックごとに (先頭行, 上三角側の距離行列) を返す。j <= i は inf。"""
    n, d = vertices.shape
    rows = max(1, _PAIR_BLOCK_ELEMENTS // max(1, n * d))
    cols = np.arange(n)
    for start in range(0, n, rows):
        block = vertices[start : start + rows]
        diff = block[:, None, :] - vertices[None, :, :]
        dist = np.sqrt(np.einsum("ijk,ijk->ij", diff, diff))
        dist[cols[None, :] <= np.arange(start, start + block.shape[0])[:, None]] = np.inf
        yield start, dist


def short_edges(vertices: np.ndarray, rel_tol: float = 1e-6) -> np.ndarray:
    """最小非零距離（相対許容差つき）の頂点対だけを辺とする。

    距離は行ブロック単位で計算し、`n × n × d` の一時配列を作らない。
    """
    n = vertices.shape[0]
    if n < 2:
        return np.empty((0, 2), dtype=np.int64)
    shortest = np.inf
    for _, dist in _row_blocks(vertices):
        nonzero = dist[dist > 1e-12]
        if nonzero.size:
            shortest = min(shortest, float(nonzero.min()))
    if not np.isfinite(shortest):
        return np.empty((0, 2), dtype=np.int64)
    limit = shortest * (1.0 + rel_tol)
    pairs = []
    for start, dist in _row_blocks(vertices):
        ii, jj = np.nonzero((dist > 1e-12) & (dist <= limit))
        pairs.append(np.stack([ii + start, jj], axis=1))
    return np.concatenate(pairs).astype(np.int64)


__all__ = [
    "require_dimension",
    "require_resolution",
    "recenter",
    "normalize_vertices",
    "complete_graph_edges",
    "grid_edges",
    "short_edges",
]
