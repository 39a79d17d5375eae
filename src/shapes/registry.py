"""
どこで: `shapes` のレジストリ層（関数専用）。
何を: `@shape` デコレータで生成器関数を登録し、取得/一覧/検査/呼び出しを提供。
なぜ: オブジェクト種別（"simplex", "clifford-torus" など）から生成器を一貫 API で解決するため。

概要:
- 登録対象は `(dimension, **config) -> Geometry` の純関数のみ。
- キーは正規化される（"clifford-torus" / "Clifford_Torus" → "clifford_torus"）。
- デコレータは名前省略可（`@shape` / `@shape()`）と明示名指定をサポート。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping

from common.base_registry import BaseRegistry
from engine.core.geometry import Geometry

ShapeFn = Callable[..., Geometry]

_shape_registry = BaseRegistry()


def shape(arg: Any | None = None, /, name: str | None = None):
    """生成器関数をレジストリに登録するデコレータ。

    使用例:
    - `@shape` / `@shape()`                          → 関数名から自動推論。
    - `@shape("cross-polytope")` / `@shape(name=...)` → 明示名で登録。

    例外:
    - TypeError: 関数以外を登録しようとした場合。
    """

    def _register_checked(obj: Any, resolved_name: str | None = None):
        if not inspect.isfunction(obj):
            raise TypeError(f"@shape は関数のみ登録可能です: got {obj!r}")
        return _shape_registry.register(resolved_name)(obj)

    # 直付け (@shape)
    if inspect.isfunction(arg) and name is None:
        return _register_checked(arg, None)

    # 位置引数で名前を渡した (@shape("name"))
    if isinstance(arg, str) and name is None:

        def _decorator_named(obj: Any):
            return _register_checked(obj, arg)

        return _decorator_named

    def _decorator_generic(obj: Any):
        return _register_checked(obj, name)

    return _decorator_generic


def get_shape(name: str) -> ShapeFn:
    """登録された生成器を取得（未登録は KeyError）。"""
    return _shape_registry.get(name)


def generate(name: str, dimension: int, **params: Any) -> Geometry:
    """名前で生成器を解決して呼び出す。

    例外:
        KeyError: 未登録の場合
        TypeError: 生成器が `Geometry` 以外を返した場合
        DomainError: 生成器が設定不正を検出した場合（そのまま伝播）
    """
    fn = get_shape(name)
    out = fn(dimension, **params)
    if not isinstance(out, Geometry):
        raise TypeError(f"shape '{name}' は Geometry を返す必要があります: got {type(out)!r}")
    return out


def list_shapes() -> list[str]:
    """登録されている生成器名の一覧（ソート済み）。"""
    return sorted(_shape_registry.list_all())


def is_shape_registered(name: str) -> bool:
    """生成器が登録されているかチェック。"""
    return _shape_registry.is_registered(name)


def clear_registry() -> None:
    """レジストリをクリア（テスト用）。"""
    _shape_registry.clear()


def unregister(name: str) -> None:
    """名前を指定して登録を解除（存在しない場合は無視）。"""
    _shape_registry.unregister(name)


def get_registry() -> Mapping[str, Any]:
    """読み取り専用ビューとしてレジストリ辞書を返す。"""
    return _shape_registry.registry


__all__ = [
    "shape",
    "get_shape",
    "generate",
    "list_shapes",
    "is_shape_registered",
    "clear_registry",
    "unregister",
    "get_registry",
]
