"""
どこで: `engine.core.rotation`
何を: N 次元の座標平面回転（C(d,2) 平面の列挙・命名・グループ化・行列合成）。
なぜ: 任意次元の回転を「平面ごとの角度」という単位で扱い、変換パイプラインと UI の
      グルーピングが同じ命名規約を共有できるようにするため。

命名:
- 軸名は 0..5 → X, Y, Z, W, V, U。6 以上は `A6`, `A7`, ...。
- 平面名は 2 軸名を添字昇順で連結（(0, 3) → "XW", (6, 7) → "A6A7"）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

import numpy as np

from common.types import Matrix

from .errors import DomainError
from .matrix import create_identity_matrix

AXIS_NAMES = ("X", "Y", "Z", "W", "V", "U")

_AXIS_COLORS = {"W": "purple", "V": "orange", "U": "green"}
_PLANE_PART = re.compile(r"[A-Z][0-9]*")


@dataclass(frozen=True)
class RotationPlane:
    """回転平面 `(i, j)`（`i < j`）と表示名。"""

    indices: tuple[int, int]
    name: str


@dataclass(frozen=True)
class PlaneGroup:
    """UI 表示用の平面グループ（色は表示補助であり幾何的性質ではない）。"""

    title: str
    planes: tuple[str, ...]
    default_expanded: bool
    color: str


def _require_rotatable(dimension: int) -> None:
    if dimension < 2:
        raise DomainError("rotation requires at least 2 dimensions")


def get_rotation_plane_count(dimension: int) -> int:
    """独立な回転平面の数 `d(d-1)/2`。"""
    _require_rotatable(dimension)
    return dimension * (dimension - 1) // 2


def get_axis_name(index: int) -> str:
    """軸インデックスの表示名。"""
    if index < 0:
        raise DomainError("axis index must be non-negative")
    if index < len(AXIS_NAMES):
        return AXIS_NAMES[index]
    return f"A{index}"


def create_plane_name(index1: int, index2: int) -> str:
    """2 軸から平面名を作る（添字は昇順に並べ替える）。"""
    i, j = min(index1, index2), max(index1, index2)
    return get_axis_name(i) + get_axis_name(j)


def get_rotation_planes(dimension: int) -> list[RotationPlane]:
    """`0 <= i < j < dimension` の全平面を辞書式昇順で返す。"""
    _require_rotatable(dimension)
    return [
        RotationPlane(indices=(i, j), name=get_axis_name(i) + get_axis_name(j))
        for i in range(dimension)
        for j in range(i + 1, dimension)
    ]


def _parse_axis_name(name: str) -> int:
    if name in AXIS_NAMES:
        return AXIS_NAMES.index(name)
    if name.startswith("A") and name[1:].isdigit():
        num = int(name[1:])
        if num >= len(AXIS_NAMES):
            return num
    return -1


def parse_plane_name(plane_name: str) -> tuple[int, int]:
    """平面名を `(i, j)`（`i < j`）へ解決する。

    次元に依らず構造的に不正な名前（未知の軸名、同一軸、部品数の不一致）は
    `DomainError`。次元に対する範囲判定は呼び出し側の責務。
    """
    if not isinstance(plane_name, str):
        raise DomainError(f"plane name must be str: got {plane_name!r}")
    parts = _PLANE_PART.findall(plane_name)
    if len(parts) != 2 or "".join(parts) != plane_name:
        raise DomainError(f"invalid plane name {plane_name!r}")
    i = _parse_axis_name(parts[0])
    j = _parse_axis_name(parts[1])
    if i < 0 or j < 0:
        raise DomainError(f"invalid plane name {plane_name!r}")
    if i == j:
        raise DomainError(f"plane axes must be different: {plane_name!r}")
    return (i, j) if i < j else (j, i)


def is_plane_valid_for_dimension(plane_name: str, dimension: int) -> bool:
    """平面名が `dimension` 次元で有効か（構造不正は `DomainError`）。"""
    _, j = parse_plane_name(plane_name)
    return j < dimension


def get_plane_color(plane_name: str) -> str:
    """平面の表示色タグ（最大添字の軸で決まる）。"""
    _, j = parse_plane_name(plane_name)
    return _axis_color(j)


def _axis_color(axis_index: int) -> str:
    if axis_index < 3:
        return "blue"
    return _AXIS_COLORS.get(get_axis_name(axis_index), "pink")


def group_planes_by_dimension(dimension: int) -> list[PlaneGroup]:
    """回転平面を次元レベルごとにグループ化する。

    - "3D Rotations": 両添字 < 3 の平面（既定で展開、blue）。
    - d = 4..dimension: 最大添字が d-1 の平面（既定で折りたたみ）。
    """
    planes = get_rotation_planes(dimension)
    groups: list[PlaneGroup] = []

    planes_3d = tuple(p.name for p in planes if p.indices[1] < 3)
    if planes_3d:
        groups.append(
            PlaneGroup(title="3D Rotations", planes=planes_3d, default_expanded=True, color="blue")
        )

    for d in range(4, dimension + 1):
        axis_index = d - 1
        members = tuple(p.name for p in planes if p.indices[1] == axis_index)
        if not members:
            continue
        groups.append(
            PlaneGroup(
                title=f"{d}th Dimension ({get_axis_name(axis_index)})",
                planes=members,
                default_expanded=False,
                color=_axis_color(axis_index),
            )
        )
    return groups


def create_rotation_matrix(dimension: int, index1: int, index2: int, angle_rad: float) -> Matrix:
    """平面 `(index1, index2)` 内で `angle_rad` 回転する直交行列（det = 1）。"""
    _require_rotatable(dimension)
    if not (0 <= index1 < dimension and 0 <= index2 < dimension):
        raise DomainError(f"plane indices must be in range [0, {dimension - 1}]")
    if index1 >= index2:
        raise DomainError("first plane index must be less than second plane index")
    m = create_identity_matrix(dimension)
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    m[index1, index1] = c
    m[index2, index2] = c
    m[index1, index2] = -s
    m[index2, index1] = s
    return m


def compose_rotations(dimension: int, angles: Mapping[str, float]) -> Matrix:
    """平面名→角度 の写像を挿入順に右から掛けて 1 つの回転行列にまとめる。

    Raises
    ------
    DomainError
        平面名が構造不正、または `dimension` に存在しない平面の場合。
    """
    _require_rotatable(dimension)
    result = create_identity_matrix(dimension)
    for plane_name, angle in angles.items():
        i, j = parse_plane_name(plane_name)
        if j >= dimension:
            raise DomainError(f"invalid plane name {plane_name!r} for {dimension}D space")
        if angle == 0:
            continue
        result = result @ create_rotation_matrix(dimension, i, j, float(angle))
    return result


__all__ = [
    "AXIS_NAMES",
    "RotationPlane",
    "PlaneGroup",
    "get_rotation_plane_count",
    "get_axis_name",
    "create_plane_name",
    "get_rotation_planes",
    "parse_plane_name",
    "is_plane_valid_for_dimension",
    "get_plane_color",
    "group_planes_by_dimension",
    "create_rotation_matrix",
    "compose_rotations",
]
