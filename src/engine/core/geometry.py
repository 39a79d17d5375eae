"""
統合 Geometry 型（プロジェクト中核モジュール）

本モジュールは、生成器（shapes）・変換パイプライン・面検出・描画モード判定の間で受け渡す
唯一の幾何表現 `Geometry` を提供する。

データモデル（不変条件）:
- `dimension: int >= 1`: 空間次元。
- `type: str`: オブジェクト種別タグ（"simplex", "clifford-torus" など）。
- `vertices: float64 ndarray (N, dimension)`: 全頂点（行が 1 頂点）。
- `edges: int64 ndarray (E, 2)`: 無向辺。各行は `i < j`、同一辺は 1 度だけ。
- `faces: tuple[tuple[int, ...], ...] | None`: 長さ 3 以上の頂点添字サイクル。
- `metadata: dict | None`: 種別固有の派生値（エスケープ時間、解像度など）。
- すべての辺/面の添字は既存頂点を参照する。

API 方針:
- 生成時に dtype/形状/添字範囲を検証し、正規化済み状態だけを許容する（違反は `DomainError`）。
- 内部配列は読み取り専用。変更は常に新インスタンス（`with_vertices` など）で表現する。

直感図（4 次元の 1 辺）:

    # vertices (N=2, d=4)
    #   idx   x   y   z   w
    #   0   [ 0,  0,  0, -1]
    #   1   [ 0,  0,  0,  1]
    # edges (E=1): [[0, 1]]

補足:
- 空ジオメトリは `vertices.shape == (0, d)`, `edges.shape == (0, 2)`。
- 点群（フラクタル標本など）は辺を持たない。
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

import numpy as np

from .errors import DomainError

EdgeLike = np.ndarray | Sequence[Sequence[int]]
FaceLike = Iterable[Sequence[int]]


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _normalize_vertices(vertices: Any, dimension: int) -> np.ndarray:
    arr = np.array(vertices, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, dimension), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != dimension:
        raise DomainError(
            f"vertices は形状 (N, {dimension}) の配列である必要があります: got {arr.shape}"
        )
    return np.ascontiguousarray(arr)


def _normalize_edges(edges: Any, n_vertices: int) -> np.ndarray:
    arr = np.array(edges, dtype=np.int64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise DomainError(f"edges は形状 (E, 2) の配列である必要があります: got {arr.shape}")
    if np.any(arr < 0) or np.any(arr >= n_vertices):
        raise DomainError("edges が存在しない頂点を参照しています")
    if np.any(arr[:, 0] == arr[:, 1]):
        raise DomainError("edges に自己ループが含まれています")
    # 無向辺は (min, max) に揃え、重複を除く（初出順を保持）
    arr = np.sort(arr, axis=1)
    _, first = np.unique(arr, axis=0, return_index=True)
    if first.shape[0] != arr.shape[0]:
        arr = arr[np.sort(first)]
    return np.ascontiguousarray(arr)


def _normalize_faces(faces: FaceLike | None, n_vertices: int) -> tuple[tuple[int, ...], ...] | None:
    if faces is None:
        return None
    out: list[tuple[int, ...]] = []
    for face in faces:
        cycle = tuple(int(i) for i in face)
        if len(cycle) < 3:
            raise DomainError(f"face は 3 頂点以上である必要があります: {cycle}")
        if any(i < 0 or i >= n_vertices for i in cycle):
            raise DomainError(f"face {cycle} が存在しない頂点を参照しています")
        out.append(cycle)
    return tuple(out)


class Geometry:
    """統一幾何データ構造（N 次元の頂点/辺/面）。

    設計意図:
    - 表現を 1 種に統一し、生成器・変換・面検出・描画判定の境界を単純化する。
    - 生成器の呼び出しごとに新しく作られ、以後変更されない（メモ化・共有が安全）。
    """

    __slots__ = ("dimension", "type", "vertices", "edges", "faces", "metadata")

    dimension: int
    type: str
    vertices: np.ndarray
    edges: np.ndarray
    faces: tuple[tuple[int, ...], ...] | None
    metadata: dict[str, Any] | None

    def __init__(
        self,
        dimension: int,
        type: str,
        vertices: Any,
        edges: EdgeLike | None = None,
        faces: FaceLike | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
            raise DomainError(f"dimension は整数である必要があります: got {dimension!r}")
        if dimension < 1:
            raise DomainError(f"dimension は 1 以上である必要があります: got {dimension}")
        self.dimension = int(dimension)
        self.type = str(type)
        verts = _normalize_vertices(vertices, self.dimension)
        self.vertices = _readonly(verts)
        self.edges = _readonly(_normalize_edges([] if edges is None else edges, verts.shape[0]))
        self.faces = _normalize_faces(faces, verts.shape[0])
        self.metadata = dict(metadata) if metadata is not None else None

    # ── ファクトリ ───────────────────
    @classmethod
    def empty(
        cls, dimension: int, type: str, metadata: Mapping[str, Any] | None = None
    ) -> "Geometry":
        """頂点を持たないジオメトリ（GPU 専用種別など）。"""
        return cls(dimension, type, np.empty((0, dimension)), None, None, metadata)

    # ── 基本操作（すべて純粋） ────────
    def as_arrays(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        """`(vertices, edges)` を返す。

        `copy=False` は読み取り専用ビュー、`copy=True` は書き込み可能なディープコピー。
        """
        if copy:
            return self.vertices.copy(), self.edges.copy()
        return self.vertices.view(), self.edges.view()

    def with_vertices(self, vertices: Any) -> "Geometry":
        """位相（辺/面/メタデータ）を保ったまま頂点だけ差し替えた新インスタンス。"""
        return Geometry(self.dimension, self.type, vertices, self.edges, self.faces, self.metadata)

    def with_faces(self, faces: FaceLike | None) -> "Geometry":
        """面を差し替えた新インスタンス。"""
        return Geometry(self.dimension, self.type, self.vertices, self.edges, faces, self.metadata)

    @property
    def is_empty(self) -> bool:
        """頂点が無いかの簡易判定。"""
        return self.vertices.shape[0] == 0

    @property
    def properties(self) -> dict[str, Any] | None:
        """`metadata["properties"]` の糖衣（無ければ None）。"""
        if not self.metadata:
            return None
        props = self.metadata.get("properties")
        return props if isinstance(props, dict) else None

    # ---- DX 向上の小道具 -------------------------------------------------
    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_edges(self) -> int:
        return int(self.edges.shape[0])

    def edge_list(self) -> list[tuple[int, int]]:
        """辺を Python タプルのリストで返す（グラフ処理用）。"""
        return [(int(a), int(b)) for a, b in self.edges]

    def __len__(self) -> int:
        """頂点数を返す。"""
        return self.n_vertices

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        """例: ``Geometry(type=simplex, d=4, V=5, E=10)``"""
        return (
            f"Geometry(type={self.type}, d={self.dimension}, "
            f"V={self.n_vertices}, E={self.n_edges})"
        )


__all__ = ["Geometry"]
