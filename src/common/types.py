"""
どこで: `common` の型定義。
何を: Vector/Matrix/Edge などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

# float64 (d,) / (d, d)
Vector = np.ndarray
Matrix = np.ndarray

NumberLike = float | int
VectorLike = np.ndarray | Sequence[NumberLike]
Edge = tuple[int, int]
Face = tuple[int, ...]


__all__ = ["Vector", "Matrix", "NumberLike", "VectorLike", "Edge", "Face"]
