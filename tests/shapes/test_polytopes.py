from __future__ import annotations

import numpy as np
import pytest

from engine.core.errors import DomainError
from shapes import generate


def _assert_normalized(vertices: np.ndarray) -> None:
    np.testing.assert_allclose(vertices.mean(axis=0), 0.0, atol=1e-12)
    assert np.max(np.abs(vertices)) == pytest.approx(1.0)


@pytest.mark.parametrize("d", range(3, 9))
def test_simplex_counts_and_normalization(d: int) -> None:
    g = generate("simplex", d)
    assert g.vertices.shape == (d + 1, d)
    assert g.n_edges == d * (d + 1) // 2
    _assert_normalized(g.vertices)
    assert set(g.edge_list()) == {(i, j) for i in range(d + 1) for j in range(i + 1, d + 1)}


@pytest.mark.parametrize("d", [3, 4, 5, 6])
def test_hypercube_counts(d: int) -> None:
    g = generate("hypercube", d)
    assert g.n_vertices == 2**d
    assert g.n_edges == d * 2 ** (d - 1)
    _assert_normalized(g.vertices)
    np.testing.assert_allclose(np.abs(g.vertices), 1.0)
    # 各辺の両端はちょうど 1 座標だけ異なる
    diff = g.vertices[g.edges[:, 0]] != g.vertices[g.edges[:, 1]]
    assert np.all(diff.sum(axis=1) == 1)
    assert g.properties["vertex_formula"] == "2^n"


@pytest.mark.parametrize("d", [3, 4, 7])
def test_cross_polytope_counts(d: int) -> None:
    g = generate("cross-polytope", d)
    assert g.n_vertices == 2 * d
    assert g.n_edges == 2 * d * (d - 1)
    _assert_normalized(g.vertices)
    # 対蹠点どうしは結ばれない
    for a, b in g.edge_list():
        assert a // 2 != b // 2


@pytest.mark.parametrize(
    "d, root_type, n_vertices, n_edges",
    [
        (4, "A", 12, 24),
        (5, "A", 20, 60),
        (4, "D", 24, 96),
        (8, "E8", 240, 6720),
    ],
)
def test_root_system_counts(d: int, root_type: str, n_vertices: int, n_edges: int) -> None:
    g = generate("root-system", d, root_type=root_type)
    assert g.n_vertices == n_vertices
    assert g.n_edges == n_edges
    assert g.properties["root_count"] == n_vertices
    _assert_normalized(g.vertices)


def test_root_system_rejects_bad_configurations() -> None:
    with pytest.raises(DomainError):
        generate("root-system", 3, root_type="D")
    with pytest.raises(DomainError):
        generate("root-system", 7, root_type="E8")
    with pytest.raises(DomainError):
        generate("root-system", 4, root_type="G2")


@pytest.mark.parametrize("name", ["simplex", "hypercube", "cross-polytope", "root-system"])
def test_dimension_too_small(name: str) -> None:
    with pytest.raises(DomainError, match="dimension too small"):
        generate(name, 2)


def test_non_integer_dimension_rejected() -> None:
    with pytest.raises(DomainError):
        generate("simplex", 4.0)  # type: ignore[arg-type]
    with pytest.raises(DomainError):
        generate("simplex", True)  # type: ignore[arg-type]


def test_metadata_names() -> None:
    assert generate("hypercube", 4).metadata["name"] == "4-Cube"
    assert generate("simplex", 5).metadata["name"] == "5-Simplex"
    assert generate("cross-polytope", 3).metadata["name"] == "3-Orthoplex"
