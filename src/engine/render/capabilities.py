"""
どこで: `engine.render.capabilities`
何を: オブジェクト種別ごとの能力（次元範囲・描画方法・面検出戦略）を静的表として提供する。
なぜ: 描画モード判定/面検出/シーンの次元クランプが同じ表を参照し、実行時の動的検索を不要にするため。

表は import 時に確定し、以後変更されない（`MappingProxyType`）。
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

RenderMethod = Literal["polytope", "raymarch"]
FaceDetection = Literal["triangles", "quads", "grid", "mixed", "none"]
RenderMode = str  # "polytope" | "raymarch-<kind>" | "none"


@dataclass(frozen=True)
class ObjectTypeEntry:
    type: str
    name: str
    category: str
    min_dimension: int
    max_dimension: int
    render_method: RenderMethod
    face_detection: FaceDetection
    raymarch_kind: str | None = None


_ENTRIES = (
    ObjectTypeEntry("hypercube", "Hypercube", "polytope", 3, 11, "polytope", "quads"),
    ObjectTypeEntry("simplex", "Simplex", "polytope", 3, 11, "polytope", "triangles"),
    ObjectTypeEntry("cross-polytope", "Cross-Polytope", "polytope", 3, 11, "polytope", "triangles"),
    ObjectTypeEntry("root-system", "Root System", "extended", 3, 11, "polytope", "triangles"),
    ObjectTypeEntry(
        "wythoff-polytope", "Wythoff Polytope", "polytope", 3, 11, "polytope", "mixed"
    ),
    ObjectTypeEntry("clifford-torus", "Clifford Torus", "extended", 3, 11, "polytope", "grid"),
    ObjectTypeEntry("nested-torus", "Nested Torus", "extended", 4, 11, "polytope", "grid"),
    ObjectTypeEntry(
        "mandelbulb", "Mandelbulb", "fractal", 3, 11, "raymarch", "none", "mandelbulb"
    ),
    ObjectTypeEntry(
        "quaternion-julia",
        "Quaternion Julia",
        "fractal",
        3,
        11,
        "raymarch",
        "none",
        "quaternion-julia",
    ),
)

OBJECT_TYPE_REGISTRY: Mapping[str, ObjectTypeEntry] = MappingProxyType(
    {e.type: e for e in _ENTRIES}
)


def get_object_type_entry(object_type: str) -> ObjectTypeEntry | None:
    """種別の能力エントリ（未知は None）。"""
    return OBJECT_TYPE_REGISTRY.get(object_type)


def is_valid_object_type(object_type: str) -> bool:
    return object_type in OBJECT_TYPE_REGISTRY


def get_available_types_for_dimension(dimension: int) -> list[ObjectTypeEntry]:
    """`dimension` を範囲に含む種別（表の定義順）。"""
    return [
        e for e in _ENTRIES if e.min_dimension <= dimension <= e.max_dimension
    ]


def get_dimension_range(object_type: str) -> tuple[int, int] | None:
    entry = get_object_type_entry(object_type)
    if entry is None:
        return None
    return entry.min_dimension, entry.max_dimension


def base_render_mode(object_type: str, dimension: int, faces_visible: bool) -> RenderMode:
    """能力表だけで決まる基本描画モード。

    - 未知の種別 → "none"
    - レイマーチ種別 → 面非表示または 3 次元未満なら "none"、それ以外は "raymarch-<kind>"
    - それ以外 → "polytope"
    """
    entry = get_object_type_entry(object_type)
    if entry is None:
        return "none"
    if entry.render_method == "raymarch":
        if not faces_visible or dimension < 3:
            return "none"
        return f"raymarch-{entry.raymarch_kind}"
    return "polytope"


__all__ = [
    "ObjectTypeEntry",
    "OBJECT_TYPE_REGISTRY",
    "RenderMode",
    "get_object_type_entry",
    "is_valid_object_type",
    "get_available_types_for_dimension",
    "get_dimension_range",
    "base_render_mode",
]
