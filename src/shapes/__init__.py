"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトイン生成器を import 副作用で登録し、`api.shapes` から種別名で解決できるようにする。
なぜ: 生成ステージの拡張点を一箇所に集約し、シーン/キャッシュ層から再利用するため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import clifford_torus as _register_clifford_torus  # noqa: F401
from . import cross_polytope as _register_cross_polytope  # noqa: F401
from . import hypercube as _register_hypercube  # noqa: F401
from . import mandelbulb as _register_mandelbulb  # noqa: F401
from . import nested_torus as _register_nested_torus  # noqa: F401
from . import quaternion_julia as _register_quaternion_julia  # noqa: F401
from . import root_system as _register_root_system  # noqa: F401
from . import simplex as _register_simplex  # noqa: F401
from . import wythoff_polytope as _register_wythoff_polytope  # noqa: F401
from .registry import (  # re-export
    generate,
    get_shape,
    is_shape_registered,
    list_shapes,
    shape,
)

__all__ = [
    "shape",
    "generate",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
]
