"""
どこで: `engine.core` の変換ユーティリティ。
何を: N 次元の複合変換（スケール → 回転 → シアー → 移動）を頂点配列/`Geometry` に適用する。
なぜ: 変換順序と各行列の組み立て規約を 1 か所に固定し、呼び出し側を純関数の合成に保つため。

処理順（固定）:
1. 対角スケール行列（軸ごとの値が無い軸は一様スケール）。
2. スケールを全頂点へ適用。
3. 回転（行列、または 平面名→角度 の写像を合成）。
4. シアー行列（挿入順に右から掛ける）。
5. 平行移動（次元に合わせて切り詰め/0 埋め）。
6. 最終頂点 = シアー × 回転後 + 移動。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np

from common.types import Matrix
from .errors import DomainError
from .geometry import Geometry
from .matrix import (
    apply_matrix,
    create_identity_matrix,
    create_scale_matrix,
    create_shear_matrix,
)
from .rotation import compose_rotations, parse_plane_name

logger = logging.getLogger(__name__)

RotationInput = Matrix | Mapping[str, float] | None


@dataclass(frozen=True)
class TransformState:
    """変換入力のスナップショット（外部状態から受け取る値）。

    - `per_axis_scale`: 軸添字 → 倍率。無い軸は `uniform_scale`。
    - `shears`: 平面名 → 量。挿入順がそのまま合成順になる。
    - `translation`: 長さは任意（`normalize_translation` で次元に合わせる）。
    """

    uniform_scale: float = 1.0
    per_axis_scale: Mapping[int, float] = field(default_factory=dict)
    shears: Mapping[str, float] = field(default_factory=dict)
    translation: Sequence[float] = ()


def build_scale_matrix(dimension: int, state: TransformState) -> Matrix:
    """エントリ i = `per_axis_scale[i]`（あれば）または `uniform_scale` の対角行列。"""
    scales = [
        float(state.per_axis_scale.get(i, state.uniform_scale)) for i in range(dimension)
    ]
    return create_scale_matrix(dimension, scales)


def build_shear_matrix(dimension: int, shears: Mapping[str, float]) -> Matrix:
    """シアー群を挿入順に `acc = acc @ S` で合成する。

    構造不正な平面名は `DomainError`。現在の次元に存在しない軸を含む平面は黙ってスキップ。
    """
    acc = create_identity_matrix(dimension)
    for plane_name, amount in shears.items():
        i, j = parse_plane_name(plane_name)
        if j >= dimension:
            logger.debug("shear %s skipped: not available in %dD", plane_name, dimension)
            continue
        acc = acc @ create_shear_matrix(dimension, i, j, float(amount))
    return acc


def normalize_translation(dimension: int, translation: Sequence[float]) -> np.ndarray:
    """長さ `dimension` に揃えた移動ベクトル（不足は 0、超過は捨てる）。"""
    out = np.zeros(dimension, dtype=np.float64)
    values = np.asarray(list(translation), dtype=np.float64).ravel()
    n = min(dimension, values.shape[0])
    out[:n] = values[:n]
    return out


def _resolve_rotation(dimension: int, rotation: RotationInput) -> Matrix | None:
    if rotation is None:
        return None
    if isinstance(rotation, Mapping):
        usable: dict[str, float] = {}
        for plane_name, angle in rotation.items():
            _, j = parse_plane_name(plane_name)
            if j >= dimension:
                logger.warning(
                    "rotation plane %s is not available in %dD; skipped", plane_name, dimension
                )
                continue
            usable[plane_name] = float(angle)
        if not usable:
            return None
        return compose_rotations(dimension, usable)
    mat = np.asarray(rotation, dtype=np.float64)
    if mat.shape != (dimension, dimension):
        raise DomainError(
            f"rotation matrix must be ({dimension}, {dimension}): got {mat.shape}"
        )
    return mat


def apply_transform(
    vertices: np.ndarray,
    dimension: int,
    state: TransformState,
    rotation: RotationInput = None,
) -> np.ndarray:
    """頂点 `(N, dimension)` に複合変換を適用し、新しい読み取り専用配列を返す。

    引数:
        vertices: 入力頂点（変更しない）。
        dimension: 空間次元。
        state: スケール/シアー/移動の入力。
        rotation: 合成済み回転行列、または 平面名→角度 の写像。None で回転なし。
    """
    verts = np.asarray(vertices, dtype=np.float64)
    if verts.size == 0:
        out = np.empty((0, dimension), dtype=np.float64)
        out.setflags(write=False)
        return out
    if verts.ndim != 2 or verts.shape[1] != dimension:
        raise DomainError(f"vertices must be (N, {dimension}): got shape {verts.shape}")

    # 1-2. スケール
    result = apply_matrix(build_scale_matrix(dimension, state), verts)

    # 3. 回転
    rot = _resolve_rotation(dimension, rotation)
    if rot is not None:
        result = apply_matrix(rot, result)

    # 4. シアー
    if state.shears:
        result = apply_matrix(build_shear_matrix(dimension, state.shears), result)

    # 5-6. 移動
    result = result + normalize_translation(dimension, state.translation)

    result = np.ascontiguousarray(result, dtype=np.float64)
    result.setflags(write=False)
    return result


def transform_geometry(
    g: Geometry, state: TransformState, rotation: RotationInput = None
) -> Geometry:
    """`apply_transform` を `Geometry` に適用し、同じ位相の新インスタンスを返す。"""
    return g.with_vertices(apply_transform(g.vertices, g.dimension, state, rotation))


__all__ = [
    "TransformState",
    "build_scale_matrix",
    "build_shear_matrix",
    "normalize_translation",
    "apply_transform",
    "transform_geometry",
]
