from __future__ import annotations

from typing import Any, Sequence

from engine.core.errors import DomainError
from engine.core.geometry import Geometry

from .base import require_dimension
from .registry import shape


@shape("quaternion-julia")
def quaternion_julia(
    dimension: int = 4,
    *,
    julia_constant: Sequence[float] = (0.3, 0.5, 0.4, 0.2),
    power: float = 2.0,
    max_iterations: int = 64,
    escape_radius: float = 4.0,
    **params: Any,
) -> Geometry:
    """四元数 Julia 集合（レイマーチ専用）。

    描画は GPU 側で行うため頂点は持たず、設定をメタデータとして運ぶだけ。
    """
    d = require_dimension(dimension, 3, "quaternion-julia")
    constant = tuple(float(c) for c in julia_constant)
    if len(constant) != 4:
        raise DomainError(
            f"quaternion-julia: julia_constant needs 4 components: got {len(constant)}"
        )
    if int(max_iterations) < 1:
        raise DomainError("quaternion-julia: max_iterations must be >= 1")
    return Geometry.empty(
        d,
        "quaternion-julia",
        metadata={
            "name": f"Quaternion Julia ({d}D)",
            "julia_constant": constant,
            "power": float(power),
            "max_iterations": int(max_iterations),
            "escape_radius": float(escape_radius),
        },
    )


quaternion_julia.__param_meta__ = {
    "dimension": {"type": "integer", "min": 3, "max": 11, "step": 1},
    "power": {"type": "number", "min": 2.0, "max": 8.0},
    "max_iterations": {"type": "integer", "min": 1, "max": 256},
    "escape_radius": {"type": "number", "min": 2.0, "max": 16.0},
}
