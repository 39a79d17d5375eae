from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import Geometry
from shapes import generate, get_shape, is_shape_registered, list_shapes, shape
from shapes.registry import get_registry, unregister


def test_builtin_shapes_are_registered() -> None:
    assert set(list_shapes()) >= {
        "hypercube",
        "simplex",
        "cross_polytope",
        "root_system",
        "wythoff_polytope",
        "clifford_torus",
        "nested_torus",
        "mandelbulb",
        "quaternion_julia",
    }
    assert list_shapes() == sorted(list_shapes())


@pytest.mark.parametrize("alias", ["cross-polytope", "cross_polytope", "Cross-Polytope"])
def test_keys_are_normalized(alias: str) -> None:
    assert is_shape_registered(alias)
    assert get_shape(alias) is get_shape("cross-polytope")


def test_unknown_shape_raises_key_error() -> None:
    with pytest.raises(KeyError):
        generate("teapot", 3)


def test_shape_decorator_variants() -> None:
    @shape
    def tiny_segment(dimension: int, **params: object) -> Geometry:
        return Geometry(dimension, "tiny-segment", np.eye(2, dimension), [(0, 1)])

    @shape("named-point")
    def _point(dimension: int, **params: object) -> Geometry:
        return Geometry(dimension, "named-point", np.zeros((1, dimension)))

    try:
        assert generate("tiny-segment", 3).n_edges == 1
        assert generate("named_point", 5).vertices.shape == (1, 5)
    finally:
        unregister("tiny_segment")
        unregister("named-point")
    assert not is_shape_registered("tiny_segment")


def test_generator_must_return_geometry() -> None:
    @shape(name="not_a_geometry")
    def not_a_geometry(dimension: int, **params: object):
        return [1, 2, 3]

    try:
        with pytest.raises(TypeError):
            generate("not_a_geometry", 3)
    finally:
        unregister("not_a_geometry")


def test_shape_rejects_non_function_and_duplicates() -> None:
    class NotFunc:  # noqa: N801 (テスト用の簡易クラス)
        pass

    with pytest.raises(TypeError, match="got"):
        shape(name="bad")(NotFunc)

    with pytest.raises(ValueError):

        @shape("simplex")
        def simplex(dimension: int, **params: object) -> Geometry:
            return Geometry.empty(dimension, "simplex")


def test_get_registry_returns_copy() -> None:
    snap = get_registry()
    snap["bogus"] = object()  # type: ignore[index]
    assert not is_shape_registered("bogus")
