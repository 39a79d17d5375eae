from __future__ import annotations

import itertools

import pytest

from engine.core.geometry import Geometry
from engine.render.capabilities import (
    OBJECT_TYPE_REGISTRY,
    base_render_mode,
    get_available_types_for_dimension,
    get_object_type_entry,
    is_valid_object_type,
)
from engine.render.mode import determine_render_mode
from shapes import generate


def test_registry_is_static_and_complete() -> None:
    assert set(OBJECT_TYPE_REGISTRY) == {
        "hypercube",
        "simplex",
        "cross-polytope",
        "root-system",
        "wythoff-polytope",
        "clifford-torus",
        "nested-torus",
        "mandelbulb",
        "quaternion-julia",
    }
    with pytest.raises(TypeError):
        OBJECT_TYPE_REGISTRY["x"] = None  # type: ignore[index]
    assert get_object_type_entry("nested-torus").min_dimension == 4
    assert is_valid_object_type("simplex")
    assert not is_valid_object_type("teapot")


def test_available_types_for_dimension() -> None:
    types3 = {e.type for e in get_available_types_for_dimension(3)}
    assert "nested-torus" not in types3
    assert "simplex" in types3
    types4 = {e.type for e in get_available_types_for_dimension(4)}
    assert "nested-torus" in types4
    assert get_available_types_for_dimension(12) == []


def test_base_render_mode_rules() -> None:
    assert base_render_mode("teapot", 4, True) == "none"
    assert base_render_mode("hypercube", 4, False) == "polytope"
    assert base_render_mode("mandelbulb", 4, True) == "raymarch-mandelbulb"
    assert base_render_mode("mandelbulb", 4, False) == "none"
    assert base_render_mode("mandelbulb", 2, True) == "none"
    assert base_render_mode("quaternion-julia", 3, True) == "raymarch-quaternion-julia"


@pytest.mark.parametrize(
    "object_type, dimension, faces_visible",
    list(itertools.product(["hypercube", "simplex", "clifford-torus"], [3, 4, 7], [True, False])),
)
def test_polytope_without_vertices_is_none(object_type, dimension, faces_visible) -> None:
    empty = Geometry.empty(dimension, object_type)
    assert determine_render_mode(empty, object_type, dimension, faces_visible) == "none"
    assert determine_render_mode(None, object_type, dimension, faces_visible) == "none"


def test_polytope_with_vertices_and_raymarch_passthrough() -> None:
    g = generate("simplex", 4)
    assert determine_render_mode(g, "simplex", 4, True) == "polytope"
    julia = generate("quaternion-julia", 4)
    assert julia.is_empty
    assert determine_render_mode(julia, "quaternion-julia", 4, True) == "raymarch-quaternion-julia"


def test_custom_lookup_only_polytope_is_overridden() -> None:
    empty = Geometry.empty(4, "x")
    assert determine_render_mode(empty, "x", 4, True, lookup=lambda t, d, f: "raymarch-x") == (
        "raymarch-x"
    )
    assert determine_render_mode(empty, "x", 4, True, lookup=lambda t, d, f: "polytope") == "none"
