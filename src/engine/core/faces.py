"""
どこで: `engine.core.faces`
何を: 辺グラフ（と種別メタデータ）から 2D 面（頂点添字サイクル）を導出する。
なぜ: 面の塗り/断面の接続に必要な面集合を、フレーム予算内に収まる有界探索で得るため。

戦略（`engine.render.capabilities` の `face_detection`）:
- "triangles": 辺グラフの 3-サイクル（simplex / cross-polytope / root-system）。
- "quads": 弦を持たず同一平面にある 4-サイクル（hypercube）。
- "grid": メタデータの解像度から解析的に作る四角形格子（clifford-torus / nested-torus）。
- "mixed": 3-サイクルと、弦を持たない同一平面 4-サイクルの両方（wythoff-polytope）。最大サイクル長 3 なら三角形のみ。

出力規約:
- 各サイクルは最小添字が先頭、2 番目 < 末尾 の向きに正規化。
- (先頭添字, 長さ, タプル) でソート済み。
- 件数は `settings.FACE_MAX_COUNT`（0 で無制限）で打ち切り、警告を出す。
- 内部失敗（添字不正・メタデータ不備・数値エラー）は警告ログを出して `[]`。
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable, Iterator, Mapping

import numpy as np

from common.settings import get as _get_settings
from common.types import Face
from engine.render.capabilities import get_object_type_entry

logger = logging.getLogger(__name__)

_GRID_TYPES = ("clifford-torus", "nested-torus")


# ── 正規化 ───────────────────────────────────────────────
def canonical_cycle(cycle: Iterable[int]) -> Face:
    """最小添字を先頭へ回し、2 番目 < 末尾 になるよう向きを揃える。"""
    c = [int(i) for i in cycle]
    k = c.index(min(c))
    c = c[k:] + c[:k]
    if len(c) > 2 and c[1] > c[-1]:
        c = [c[0]] + c[:0:-1]
    return tuple(c)


def _finalize(cycles: Iterable[Face], limit: int) -> list[Face]:
    unique = dict.fromkeys(canonical_cycle(c) for c in cycles)
    faces = sorted(unique, key=lambda f: (f[0], len(f), f))
    if limit > 0 and len(faces) > limit:
        logger.warning("face detection truncated at %d faces (found %d)", limit, len(faces))
        faces = faces[:limit]
    return faces


def _adjacency(n_vertices: int, edges: np.ndarray) -> list[set[int]]:
    adj: list[set[int]] = [set() for _ in range(n_vertices)]
    for a, b in edges:
        a = int(a)
        b = int(b)
        if not (0 <= a < n_vertices and 0 <= b < n_vertices):
            raise IndexError(f"edge ({a}, {b}) references a missing vertex")
        if a == b:
            continue
        adj[a].add(b)
        adj[b].add(a)
    return adj


# ── 探索 ─────────────────────────────────────────────────
def _triangles(adj: list[set[int]]) -> Iterator[Face]:
    for i, neighbors in enumerate(adj):
        for j in sorted(n for n in neighbors if n > i):
            for k in sorted(n for n in adj[j] & neighbors if n > j):
                yield (i, j, k)


def _chordless_quads(adj: list[set[int]]) -> Iterator[Face]:
    """最小添字 a、その隣接 b < d、対角 c（a/c と b/d は非隣接）の 4-サイクル。"""
    for a, neighbors in enumerate(adj):
        higher = sorted(n for n in neighbors if n > a)
        for x, b in enumerate(higher):
            for d in higher[x + 1 :]:
                if d in adj[b]:
                    continue
                for c in sorted(adj[b] & adj[d]):
                    if c > a and c not in neighbors:
                        yield (a, b, c, d)


def _coplanar_mask(vertices: np.ndarray, quads: np.ndarray, eps: float) -> np.ndarray:
    """差分ベクトルの階数 <= 2（SVD の相対許容差）を満たす四角形のマスク。"""
    if quads.shape[0] == 0:
        return np.zeros(0, dtype=bool)
    base = vertices[quads[:, 0]]
    diffs = np.stack(
        [vertices[quads[:, 1]] - base, vertices[quads[:, 2]] - base, vertices[quads[:, 3]] - base],
        axis=1,
    )
    s = np.linalg.svd(diffs, compute_uv=False)
    if s.shape[1] < 3:
        return np.ones(quads.shape[0], dtype=bool)
    return s[:, 2] <= eps * np.maximum(s[:, 0], np.finfo(np.float64).tiny)


def _grid_quads(res_u: int, res_v: int, offset: int = 0) -> Iterator[Face]:
    for i in range(res_u):
        for j in range(res_v):
            here = offset + i * res_v + j
            right = offset + i * res_v + (j + 1) % res_v
            diag = offset + ((i + 1) % res_u) * res_v + (j + 1) % res_v
            down = offset + ((i + 1) % res_u) * res_v + j
            yield (here, right, diag, down)


def _grid_faces(object_type: str, props: Mapping[str, Any], n_vertices: int) -> list[Face]:
    if object_type == "nested-torus":
        r1 = int(props["resolution_xi1"])
        r2 = int(props["resolution_xi2"])
        count = int(props.get("torus_count", 1))
        blocks = [(r1, r2, t * r1 * r2) for t in range(count)]
    else:
        mode = props.get("mode", "classic")
        if mode == "generalized":
            # 面を持つのは 2-トーラスのみ
            if int(props["k"]) != 2:
                return []
            steps = int(props["steps_per_circle"])
            blocks = [(steps, steps, 0)]
        else:
            blocks = [(int(props["resolution_u"]), int(props["resolution_v"]), 0)]

    expected = sum(ru * rv for ru, rv, _ in blocks)
    if any(ru < 3 or rv < 3 for ru, rv, _ in blocks):
        raise ValueError(f"grid resolution must be >= 3: {blocks}")
    if expected != n_vertices:
        raise ValueError(f"grid metadata expects {expected} vertices, got {n_vertices}")

    faces: list[Face] = []
    for ru, rv, offset in blocks:
        faces.extend(_grid_quads(ru, rv, offset))
    return faces


# ── 入口 ─────────────────────────────────────────────────
def _coerce_edges(edges: Any, object_type: str) -> np.ndarray | None:
    """辺を `(E, 2)` int64 に揃える。形や値が不正なら警告して None。"""
    try:
        arr = np.asarray(edges if edges is not None else [], dtype=np.int64)
        if arr.size == 0:
            return arr.reshape(0, 2)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"edges must have shape (E, 2), got {arr.shape}")
    except (TypeError, ValueError, OverflowError) as exc:
        logger.warning("face detection failed for %s: malformed edges (%s)", object_type, exc)
        return None
    return arr


def detect_faces(
    vertices: Any,
    edges: Any,
    object_type: str,
    metadata: Mapping[str, Any] | None = None,
) -> list[Face]:
    """辺グラフから面を検出する（失敗時は `[]`）。

    引数:
        vertices: `(N, d)` 頂点。
        edges: `(E, 2)` 辺。
        object_type: 種別タグ。面検出の対象外なら即 `[]`。
        metadata: 種別メタデータ（トーラス系は `properties` が必須）。
    """
    try:
        entry = get_object_type_entry(object_type)
    except TypeError as exc:
        logger.warning("face detection failed for %r: %s", object_type, exc)
        return []
    if entry is None or entry.face_detection == "none":
        return []

    edge_arr = _coerce_edges(edges, object_type)
    if edge_arr is None:
        return []
    if object_type == "root-system" and edge_arr.shape[0] == 0:
        return []

    props = metadata.get("properties") if isinstance(metadata, Mapping) else None
    if object_type in _GRID_TYPES and not isinstance(props, Mapping):
        return []

    cfg = _get_settings()
    max_len = int(cfg.FACE_MAX_CYCLE_LENGTH)
    limit = int(cfg.FACE_MAX_COUNT)
    strategy = entry.face_detection
    if strategy == "mixed" and max_len < 4:
        strategy = "triangles"
    cycle_len = 3 if strategy == "triangles" else 4
    if cycle_len > max_len:
        logger.warning(
            "face detection for %s needs cycles of length %d (max %d); skipped",
            object_type,
            cycle_len,
            max_len,
        )
        return []

    try:
        verts = np.asarray(vertices, dtype=np.float64)
        n = verts.shape[0]
        if strategy == "grid":
            return _finalize(_grid_faces(object_type, props, n), limit)  # type: ignore[arg-type]

        adj = _adjacency(n, edge_arr)
        if strategy == "triangles":
            return _finalize(_triangles(adj), limit)

        candidates = np.array(list(_chordless_quads(adj)), dtype=np.int64).reshape(-1, 4)
        mask = _coplanar_mask(verts, candidates, float(cfg.COPLANAR_EPS))
        quads = (tuple(q) for q in candidates[mask].tolist())
        if strategy == "mixed":
            return _finalize(itertools.chain(_triangles(adj), quads), limit)
        return _finalize(quads, limit)
    except Exception as exc:
        logger.warning("face detection failed for %s: %s", object_type, exc)
        return []


__all__ = ["detect_faces", "canonical_cycle"]
