"""
どこで: `engine.core.matrix`
何を: N 次元ベクトル/行列の生成（単位・スケール・シアー）と積。
なぜ: 回転/変換パイプラインが任意次元で同じ演算基盤を共有できるようにするため。

規約:
- すべて float64（倍精度）。行列は行優先 `(d, d)`。
- 入力は破壊しない。戻り値は常に新しい配列。
- 次元不一致や不正な次元は `DomainError`。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from common.types import Matrix, Vector, VectorLike

from .errors import DomainError


def _check_dimension(dim: int) -> int:
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim <= 0:
        raise DomainError(f"dimension must be a positive integer: got {dim!r}")
    return int(dim)


def _as_matrix(m: Matrix | Sequence[Sequence[float]]) -> np.ndarray:
    arr = np.asarray(m, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise DomainError(f"matrix must be square (d, d): got shape {arr.shape}")
    return arr


def _as_vector(v: VectorLike) -> np.ndarray:
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        raise DomainError(f"vector must be 1-D: got shape {arr.shape}")
    return arr


def create_vector(dim: int, fill_value: float = 0.0) -> Vector:
    """長さ `dim` のベクトルを `fill_value` で埋めて返す。"""
    return np.full(_check_dimension(dim), float(fill_value), dtype=np.float64)


def create_identity_matrix(dim: int) -> Matrix:
    """`dim × dim` の単位行列。"""
    return np.eye(_check_dimension(dim), dtype=np.float64)


def create_scale_matrix(dim: int, scales: VectorLike) -> Matrix:
    """対角スケール行列 `S[i, i] = scales[i]`。

    Raises
    ------
    DomainError
        `len(scales) != dim` の場合。
    """
    d = _check_dimension(dim)
    s = _as_vector(scales)
    if s.shape[0] != d:
        raise DomainError(f"scales length ({s.shape[0]}) must match dimension ({d})")
    return np.diag(s)


def create_uniform_scale_matrix(dim: int, scale: float) -> Matrix:
    """全軸同一倍率のスケール行列。"""
    d = _check_dimension(dim)
    return np.eye(d, dtype=np.float64) * float(scale)


def create_shear_matrix(dim: int, axis1: int, axis2: int, amount: float) -> Matrix:
    """単位行列に非対角成分を 1 つだけ持つシアー行列。

    `M[axis1, axis2] = amount`。すなわち `v'[axis1] = v[axis1] + amount * v[axis2]`
    （行 = 変形される軸、列 = 参照軸）。

    Raises
    ------
    DomainError
        軸が範囲外、または `axis1 == axis2` の場合。
    """
    d = _check_dimension(dim)
    for axis in (axis1, axis2):
        if not 0 <= int(axis) < d:
            raise DomainError(f"shear axis {axis} out of range [0, {d - 1}]")
    if int(axis1) == int(axis2):
        raise DomainError("shear axes must be different")
    m = np.eye(d, dtype=np.float64)
    m[int(axis1), int(axis2)] = float(amount)
    return m


def multiply_matrix_vector(m: Matrix, v: VectorLike) -> Vector:
    """`result[i] = Σ_j M[i, j] * v[j]`。"""
    mat = _as_matrix(m)
    vec = _as_vector(v)
    if mat.shape[1] != vec.shape[0]:
        raise DomainError(
            f"matrix/vector dimension mismatch: {mat.shape[1]} != {vec.shape[0]}"
        )
    return mat @ vec


def multiply_matrices(a: Matrix, b: Matrix) -> Matrix:
    """`C = A × B`（同次元の正方行列のみ）。"""
    ma = _as_matrix(a)
    mb = _as_matrix(b)
    if ma.shape != mb.shape:
        raise DomainError(f"matrix dimension mismatch: {ma.shape} != {mb.shape}")
    return ma @ mb


def apply_matrix(m: Matrix, vertices: np.ndarray) -> np.ndarray:
    """頂点配列 `(N, d)` の各行へ `M` を適用し、新しい `(N, d)` を返す。"""
    mat = _as_matrix(m)
    verts = np.asarray(vertices, dtype=np.float64)
    if verts.ndim != 2:
        raise DomainError(f"vertices must be (N, d): got shape {verts.shape}")
    if verts.shape[0] == 0:
        return np.empty((0, mat.shape[0]), dtype=np.float64)
    if verts.shape[1] != mat.shape[1]:
        raise DomainError(
            f"matrix/vertex dimension mismatch: {mat.shape[1]} != {verts.shape[1]}"
        )
    return verts @ mat.T


__all__ = [
    "create_vector",
    "create_identity_matrix",
    "create_scale_matrix",
    "create_uniform_scale_matrix",
    "create_shear_matrix",
    "multiply_matrix_vector",
    "multiply_matrices",
    "apply_matrix",
]
