"""
どこで: `api.scene`（アプリケーション状態と派生値のメモ化）。
何を: 明示的な状態 `SceneState` と、生成→変換→面検出→描画判定→断面を入力指紋でメモ化する `Scene`。
なぜ: 反応的な派生状態を「意味的入力のタプルを鍵とする純関数 + LRU」に置き換え、
     入力が変わったときだけ再計算するため。

Notes
-----
- 境界（setter）で次元を能力表の範囲へクランプする。未知の種別は `DomainError`。
- キャッシュ鍵は `common.param_utils.make_hashable_param` で作る。シアー/回転は挿入順が意味を持つため
  順序を保ったまま指紋化する。
- 面は未変換のジオメトリから求める（アフィン変換は位相と同一平面性を保つ）。
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Hashable, TypeVar

from common.param_utils import make_hashable_param, ordered_items_to_tuple, params_to_tuple
from common.settings import get as _get_settings
from common.types import Face
from engine.core.cross_section import CrossSectionResult, compute_cross_section
from engine.core.errors import DomainError
from engine.core.faces import detect_faces
from engine.core.geometry import Geometry
from engine.core.rotation import parse_plane_name
from engine.core.slice_animator import SliceAnimator
from engine.core.transform_utils import TransformState, transform_geometry
from engine.render.capabilities import RenderMode, get_dimension_range
from engine.render.mode import determine_render_mode

from .shapes import generate_geometry

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ── 状態 ─────────────────────────────────────────────────
@dataclass
class SceneState:
    """シーンの入力（UI ストアの代わりに明示的に持ち回る構造体）。"""

    object_type: str = "hypercube"
    dimension: int = 4
    params: dict[str, Any] = field(default_factory=dict)
    transform: TransformState = field(default_factory=TransformState)
    rotation_angles: dict[str, float] = field(default_factory=dict)
    faces_visible: bool = True
    slice_w: float = 0.0

    def __post_init__(self) -> None:
        self.set_object_type(self.object_type)

    def set_object_type(self, object_type: str) -> None:
        """種別を設定し、次元を新しい範囲へクランプする。"""
        if get_dimension_range(object_type) is None:
            raise DomainError(f"unknown object type: {object_type!r}")
        self.object_type = object_type
        self.set_dimension(self.dimension)

    def set_dimension(self, dimension: int) -> None:
        """次元を `[min, max]` にクランプして設定し、存在しなくなった回転平面を捨てる。"""
        lo, hi = get_dimension_range(self.object_type)  # type: ignore[misc]
        clamped = min(max(int(dimension), lo), hi)
        if clamped != dimension:
            logger.debug("dimension %s clamped to %d for %s", dimension, clamped, self.object_type)
        self.dimension = clamped
        self.rotation_angles = {
            name: angle
            for name, angle in self.rotation_angles.items()
            if parse_plane_name(name)[1] < clamped
        }

    def set_rotation(self, plane_name: str, angle: float) -> None:
        """平面の回転角（ラジアン）を設定する。現在の次元に無い平面は `DomainError`。"""
        _, j = parse_plane_name(plane_name)
        if j >= self.dimension:
            raise DomainError(f"plane {plane_name!r} is not available in {self.dimension}D")
        self.rotation_angles[plane_name] = float(angle)

    def set_shear(self, plane_name: str, amount: float) -> None:
        """シアー量を設定する（挿入順は保持、既存キーは位置を保ったまま更新）。"""
        parse_plane_name(plane_name)
        shears = dict(self.transform.shears)
        shears[plane_name] = float(amount)
        self.transform = replace(self.transform, shears=shears)

    def set_translation(self, translation: list[float] | tuple[float, ...]) -> None:
        self.transform = replace(self.transform, translation=tuple(float(v) for v in translation))


# ── キャッシュ ───────────────────────────────────────────
class DerivedCache:
    """派生値の LRU（`maxsize=0` で無効化）。

    鍵は `(name, fingerprint)`。同じ鍵での 2 回目以降は再計算しない。
    """

    def __init__(self, maxsize: int | None = None) -> None:
        self.maxsize = int(_get_settings().DERIVED_CACHE_MAXSIZE if maxsize is None else maxsize)
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, name: str, fingerprint: Hashable, compute: Callable[[], T]) -> T:
        key = (name, fingerprint)
        if key in self._data:
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]
        self.misses += 1
        value = compute()
        if self.maxsize > 0:
            self._data[key] = value
            if len(self._data) > self.maxsize:
                self._data.popitem(last=False)
        return value

    def clear(self) -> None:
        self._data.clear()
        self.hits = 0
        self.misses = 0

    def info(self) -> dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "maxsize": self.maxsize,
            "size": len(self._data),
        }

    def __len__(self) -> int:
        return len(self._data)


# ── シーン ───────────────────────────────────────────────
class Scene:
    """状態から派生値を計算するファサード（各値は入力が変わったときだけ再計算）。"""

    def __init__(self, state: SceneState | None = None, cache: DerivedCache | None = None):
        self.state = state if state is not None else SceneState()
        self.cache = cache if cache is not None else DerivedCache()

    # 指紋
    def _geometry_key(self) -> Hashable:
        s = self.state
        return (s.object_type, s.dimension, params_to_tuple(s.params))

    def _transform_key(self) -> Hashable:
        t = self.state.transform
        return (
            self._geometry_key(),
            float(t.uniform_scale),
            params_to_tuple({str(k): v for k, v in t.per_axis_scale.items()}),
            ordered_items_to_tuple(t.shears),
            make_hashable_param(tuple(t.translation)),
            ordered_items_to_tuple(self.state.rotation_angles),
        )

    # 派生値
    def geometry(self) -> Geometry:
        s = self.state
        return self.cache.get_or_compute(
            "geometry",
            self._geometry_key(),
            lambda: generate_geometry(s.object_type, s.dimension, s.params),
        )

    def faces(self) -> list[Face]:
        def _compute() -> list[Face]:
            g = self.geometry()
            return detect_faces(g.vertices, g.edges, g.type, g.metadata)

        return self.cache.get_or_compute("faces", self._geometry_key(), _compute)

    def transformed(self) -> Geometry:
        """変換済みジオメトリ（面つき）。"""
        s = self.state

        def _compute() -> Geometry:
            g = self.geometry().with_faces(self.faces())
            return transform_geometry(g, s.transform, s.rotation_angles or None)

        return self.cache.get_or_compute("transformed", self._transform_key(), _compute)

    def render_mode(self) -> RenderMode:
        s = self.state
        return self.cache.get_or_compute(
            "render_mode",
            (self._geometry_key(), bool(s.faces_visible)),
            lambda: determine_render_mode(
                self.geometry(), s.object_type, s.dimension, s.faces_visible
            ),
        )

    def cross_section(self) -> CrossSectionResult:
        s = self.state

        def _compute() -> CrossSectionResult:
            g = self.transformed()
            return compute_cross_section(g, s.slice_w, g.faces)

        return self.cache.get_or_compute(
            "cross_section", (self._transform_key(), float(s.slice_w)), _compute
        )


class SliceBinding:
    """`SliceAnimator` の値を毎フレーム `SceneState.slice_w` へ書き込む Tickable。"""

    def __init__(self, scene: Scene, animator: SliceAnimator):
        self.scene = scene
        self.animator = animator

    def tick(self, dt: float) -> None:
        self.animator.tick(dt)
        self.scene.state.slice_w = self.animator.value


__all__ = ["SceneState", "DerivedCache", "Scene", "SliceBinding"]
