"""
どこで: `api` 入口（高レベル公開 API）。
何を: 形状 `G`・統一ディスパッチャ・シーン/キャッシュ・装飾子 `shape`・`Geometry` などを再輸出。
なぜ: 利用者が単一名前空間から 生成 → 変換 → 面検出 → 描画判定 まで完結できるようにするため。

Usage:
    from api import G, Scene, SceneState

    g = G.simplex(5)
    scene = Scene(SceneState(object_type="hypercube", dimension=4))
    scene.state.set_rotation("XW", 0.5)
    verts = scene.transformed().vertices
    mode = scene.render_mode()
"""

# コアクラス（高度な使用）
from engine.core.errors import DomainError
from engine.core.geometry import Geometry
from engine.core.transform_utils import TransformState
from shapes.registry import shape as shape  # ユーザー拡張用デコレータ

from .scene import DerivedCache, Scene, SceneState, SliceBinding

# 主要API
from .shapes import G, ShapesAPI, generate_geometry, get_polytope_properties

__all__ = [
    # メインAPI
    "G",
    "generate_geometry",
    "get_polytope_properties",
    "shape",
    # シーン
    "Scene",
    "SceneState",
    "DerivedCache",
    "SliceBinding",
    # クラス（高度な使用）
    "ShapesAPI",
    "Geometry",
    "TransformState",
    "DomainError",
]

# バージョン情報
__version__ = "2026.10"
