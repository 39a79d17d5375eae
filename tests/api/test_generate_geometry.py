from __future__ import annotations

import pytest

from api import G, DomainError, Geometry, generate_geometry, get_polytope_properties
from engine.core.faces import detect_faces


def test_dispatch_by_type_and_dimension() -> None:
    g = generate_geometry("clifford-torus", 4, {"resolution_u": 6, "resolution_v": 6})
    assert isinstance(g, Geometry)
    assert g.type == "clifford-torus"
    assert g.n_vertices == 36


def test_unknown_type_and_dimension_range() -> None:
    with pytest.raises(DomainError, match="unknown object type"):
        generate_geometry("teapot", 4)
    with pytest.raises(DomainError, match="out of range"):
        generate_geometry("hypercube", 12)
    with pytest.raises(DomainError, match="out of range"):
        generate_geometry("nested-torus", 3)


def test_shapes_facade_maps_underscores() -> None:
    g = G.cross_polytope(5)
    assert g.type == "cross-polytope"
    assert G.root_system(4, root_type="D").n_vertices == 24
    assert G.wythoff_polytope(3, preset="rectified").n_vertices == 12
    with pytest.raises(AttributeError):
        G.unknown_shape(4)
    assert "simplex" in G.list_shapes()


@pytest.mark.parametrize(
    "object_type, dimension",
    [("simplex", 5), ("hypercube", 4), ("cross-polytope", 4)],
)
def test_polytope_properties_match_formulas(object_type: str, dimension: int) -> None:
    g = generate_geometry(object_type, dimension)
    g = g.with_faces(detect_faces(g.vertices, g.edges, g.type))
    props = get_polytope_properties(g)
    assert props["vertex_count"] == props["vertex_expected"]
    assert props["edge_count"] == props["edge_expected"]
    assert props["face_count"] == props["expected_face_count"]


def test_properties_without_formulas() -> None:
    g = generate_geometry("nested-torus", 4, {"resolution_xi1": 4, "resolution_xi2": 4})
    props = get_polytope_properties(g)
    assert props["vertex_count"] == 48
    assert props["face_count"] is None
    assert "vertex_formula" not in props
