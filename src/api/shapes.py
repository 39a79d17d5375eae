"""
どこで: `api.shapes`（形状生成の高レベル API）。
何を: 種別名と次元から生成器を解決する統一ディスパッチャ `generate_geometry` と、属性ファサード `G`。
なぜ: 生成（shapes）と変換/面検出/描画判定（engine）を分離しつつ、単一の入口を提供するため。

Notes
-----
- `generate_geometry("simplex", 4)` は能力表（`engine.render.capabilities`）の次元範囲を検証してから
  レジストリ（`shapes.registry`）の生成器を呼ぶ。範囲外は `DomainError`。
- `G.simplex(4)` / `G.clifford_torus(4, mode="generalized")` は同じ経路の糖衣。
  属性名のアンダースコアは種別タグのハイフンに対応する（レジストリがキーを正規化する）。
- 生成結果は常に `engine.core.geometry.Geometry`。

Examples
--------
    from api import G, generate_geometry

    g = G.hypercube(4)
    t = generate_geometry("clifford-torus", 4, {"resolution_u": 16, "resolution_v": 16})
"""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping

# レジストリ登録の副作用を発火させるため、shapes パッケージを 1 度だけ import すれば十分
import shapes  # noqa: F401  (登録目的の副作用)
from engine.core.errors import DomainError
from engine.core.geometry import Geometry
from engine.render.capabilities import get_object_type_entry
from shapes.registry import generate
from shapes.registry import is_shape_registered
from shapes.registry import list_shapes as list_registered_shapes


def generate_geometry(
    object_type: str, dimension: int, params: Mapping[str, Any] | None = None
) -> Geometry:
    """種別タグと次元から Geometry を生成する。

    Raises
    ------
    DomainError
        未知の種別、能力表の次元範囲外、または生成器が設定不正を検出した場合。
    """
    entry = get_object_type_entry(object_type)
    if entry is None or not is_shape_registered(object_type):
        raise DomainError(f"unknown object type: {object_type!r}")
    if not (entry.min_dimension <= dimension <= entry.max_dimension):
        raise DomainError(
            f"{object_type}: dimension {dimension} out of range "
            f"[{entry.min_dimension}, {entry.max_dimension}]"
        )
    return generate(object_type, dimension, **dict(params or {}))


def _formula_value(formula: str | None, n: int) -> int | None:
    # 既知の式だけを評価する（任意式の eval はしない）
    table: dict[str, Callable[[int], int]] = {
        "n+1": lambda d: d + 1,
        "(n+1)·n/2": lambda d: (d + 1) * d // 2,
        "2^n": lambda d: 2**d,
        "n·2^(n-1)": lambda d: d * 2 ** (d - 1),
        "2n": lambda d: 2 * d,
        "2n(n-1)": lambda d: 2 * d * (d - 1),
    }
    fn = table.get(formula or "")
    return fn(n) if fn is not None else None


def get_polytope_properties(geometry: Geometry) -> dict[str, Any]:
    """頂点数/辺数/面数と、既知族なら頂点・辺数の公式を返す。"""
    props = dict(geometry.properties or {})
    out: dict[str, Any] = {
        "type": geometry.type,
        "name": (geometry.metadata or {}).get("name", geometry.type),
        "dimension": geometry.dimension,
        "vertex_count": geometry.n_vertices,
        "edge_count": geometry.n_edges,
        "face_count": len(geometry.faces) if geometry.faces is not None else None,
    }
    for key in ("vertex_formula", "edge_formula"):
        if key in props:
            out[key] = props[key]
            out[key.replace("formula", "expected")] = _formula_value(props[key], geometry.dimension)
    if geometry.type == "simplex":
        out["expected_face_count"] = math.comb(geometry.dimension + 1, 3)
    elif geometry.type == "hypercube":
        d = geometry.dimension
        out["expected_face_count"] = math.comb(d, 2) * 2 ** (d - 2)
    elif geometry.type == "cross-polytope":
        out["expected_face_count"] = 8 * math.comb(geometry.dimension, 3)
    return out


class ShapesAPI:
    """`G` の実体。`G.<name>(dimension, **params)` をレジストリから遅延解決する。

    使い方:
        from api import G
        g1 = G.simplex(5)
        g2 = G.root_system(8, root_type="E8")
    """

    def _build_shape_method(self, name: str) -> Callable[..., Geometry]:
        object_type = name.replace("_", "-")

        def _shape_method(dimension: int, **params: Any) -> Geometry:
            if not is_shape_registered(name):
                # 登録解除と整合を取るため、キャッシュ済みの属性を破棄して AttributeError を送出
                self.__dict__.pop(name, None)
                raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'")
            return generate_geometry(object_type, dimension, params)

        _shape_method.__name__ = name
        _shape_method.__qualname__ = f"{self.__class__.__name__}.{name}"
        return _shape_method

    def __getattr__(self, name: str) -> Callable[..., Geometry]:
        """レジストリに基づき `G.<name>` を遅延生成する（未登録は AttributeError）。"""
        if name.startswith("__") or not is_shape_registered(name):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")
        method = self._build_shape_method(name)
        self.__dict__[name] = method
        return method

    @classmethod
    def list_shapes(cls) -> list[str]:
        """利用可能な形状名の一覧を返す。"""
        return list_registered_shapes()


G = ShapesAPI()

__all__ = ["G", "ShapesAPI", "generate_geometry", "get_polytope_properties"]
