from __future__ import annotations

import numpy as np
import pytest

from api import DerivedCache, DomainError, Scene, SceneState, SliceBinding, TransformState
from engine.core.frame_clock import FrameClock
from engine.core.slice_animator import SliceAnimator


def test_state_clamps_dimension_to_type_range() -> None:
    state = SceneState(object_type="simplex", dimension=3)
    state.set_object_type("nested-torus")
    assert state.dimension == 4
    state.set_dimension(40)
    assert state.dimension == 11
    with pytest.raises(DomainError):
        state.set_object_type("teapot")
    assert state.object_type == "nested-torus"


def test_rotation_planes_follow_dimension() -> None:
    state = SceneState(dimension=4)
    state.set_rotation("XW", 0.5)
    state.set_rotation("XY", 0.1)
    state.set_dimension(3)
    assert state.rotation_angles == {"XY": 0.1}
    with pytest.raises(DomainError):
        state.set_rotation("ZW", 1.0)


def test_set_shear_keeps_insertion_order() -> None:
    state = SceneState()
    state.set_shear("XY", 1.0)
    state.set_shear("YZ", 2.0)
    state.set_shear("XY", 3.0)
    assert list(state.transform.shears.items()) == [("XY", 3.0), ("YZ", 2.0)]
    state.set_translation([1, 2])
    assert state.transform.translation == (1.0, 2.0)


def test_derived_values_are_memoized() -> None:
    scene = Scene(SceneState(object_type="hypercube", dimension=4), DerivedCache(maxsize=16))
    g1 = scene.geometry()
    g2 = scene.geometry()
    assert g1 is g2
    assert scene.cache.hits == 1
    assert len(scene.faces()) == 24
    t1 = scene.transformed()
    assert t1.faces is not None and len(t1.faces) == 24
    # 回転だけ変えるとジオメトリは再利用され、変換結果だけが再計算される
    misses = scene.cache.misses
    scene.state.set_rotation("XW", 0.3)
    t2 = scene.transformed()
    assert t2 is not t1
    assert scene.geometry() is g1
    assert scene.cache.misses == misses + 1


def test_shear_order_changes_cache_key() -> None:
    scene = Scene(SceneState(object_type="simplex", dimension=3), DerivedCache(maxsize=16))
    scene.state.set_shear("XY", 1.0)
    scene.state.set_shear("YZ", 1.0)
    a = scene.transformed()
    scene.state.transform = TransformState(shears={"YZ": 1.0, "XY": 1.0})
    b = scene.transformed()
    assert not np.allclose(a.vertices, b.vertices)


def test_cache_disabled_and_lru_eviction() -> None:
    off = DerivedCache(maxsize=0)
    calls = []
    for _ in range(2):
        off.get_or_compute("x", 1, lambda: calls.append(1))
    assert len(calls) == 2 and len(off) == 0

    lru = DerivedCache(maxsize=1)
    lru.get_or_compute("x", 1, lambda: "a")
    lru.get_or_compute("x", 2, lambda: "b")
    assert len(lru) == 1
    assert lru.get_or_compute("x", 1, lambda: "c") == "c"
    assert lru.info() == {"hits": 0, "misses": 3, "maxsize": 1, "size": 1}
    lru.clear()
    assert lru.info()["misses"] == 0


def test_cache_size_from_settings(env_settings) -> None:
    env_settings(NDP_DERIVED_CACHE_MAXSIZE="3")
    assert DerivedCache().maxsize == 3


def test_render_mode_and_cross_section() -> None:
    scene = Scene(SceneState(object_type="hypercube", dimension=4))
    assert scene.render_mode() == "polytope"
    section = scene.cross_section()
    assert section.has_intersection
    assert section.edges.shape == (12, 2)

    scene.state.set_object_type("quaternion-julia")
    scene.state.faces_visible = False
    assert scene.render_mode() == "none"
    scene.state.faces_visible = True
    assert scene.render_mode() == "raymarch-quaternion-julia"


def test_slice_binding_drives_state() -> None:
    scene = Scene(SceneState(object_type="hypercube", dimension=4))
    animator = SliceAnimator(value=0.0, speed=1.0, enabled=True)
    clock = FrameClock([SliceBinding(scene, animator)], now=lambda: 0.0)
    clock.tick(0.05)
    clock.tick(0.05)
    assert scene.state.slice_w == pytest.approx(0.1)
