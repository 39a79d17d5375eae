from __future__ import annotations

import logging

import numpy as np
import pytest

from engine.core.errors import DomainError
from shapes import generate


def test_clifford_classic_grid() -> None:
    g = generate("clifford-torus", 4, resolution_u=8, resolution_v=6)
    assert g.vertices.shape == (48, 4)
    assert g.n_edges == 96
    assert g.properties == {"mode": "classic", "resolution_u": 8, "resolution_v": 6}
    # 元は単位球面上。一様スケール後も全点のノルムは等しい
    norms = np.linalg.norm(g.vertices, axis=1)
    np.testing.assert_allclose(norms, norms[0])


def test_clifford_classic_pads_higher_dimensions() -> None:
    g = generate("clifford-torus", 6, resolution_u=4, resolution_v=4)
    np.testing.assert_allclose(g.vertices[:, 4:], 0.0)


def test_clifford_three_dimensional_fallback() -> None:
    g = generate("clifford-torus", 3, resolution_u=5, resolution_v=4, mode="generalized")
    assert g.properties["mode"] == "3d-torus"
    assert g.vertices.shape == (20, 3)
    with pytest.raises(DomainError):
        generate("clifford-torus", 3, major_radius=0.5, minor_radius=0.5)


def test_clifford_generalized() -> None:
    g = generate("clifford-torus", 5, mode="generalized", k=2, steps_per_circle=5)
    assert g.vertices.shape == (25, 5)
    assert g.n_edges == 50
    np.testing.assert_allclose(g.vertices[:, 4], 0.0)
    assert g.properties == {"mode": "generalized", "k": 2, "steps_per_circle": 5}


def test_clifford_generalized_limits(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(DomainError):
        generate("clifford-torus", 5, mode="generalized", k=3)
    with pytest.raises(DomainError):
        generate("clifford-torus", 4, mode="generalized", k=0)
    with pytest.raises(DomainError):
        generate("clifford-torus", 4, mode="spiral")
    with caplog.at_level(logging.WARNING, logger="shapes.clifford_torus"):
        g = generate("clifford-torus", 6, mode="generalized", k=3, steps_per_circle=40)
    steps = g.properties["steps_per_circle"]
    assert steps < 40 and steps**3 <= 20_000
    assert g.n_vertices == steps**3
    assert any("point budget" in r.getMessage() for r in caplog.records)


def test_nested_torus_blocks() -> None:
    g = generate("nested-torus", 4, resolution_xi1=6, resolution_xi2=5, torus_count=3)
    assert g.vertices.shape == (90, 4)
    assert g.n_edges == 180
    # 各トーラスの辺はそのブロック内に閉じる
    block = g.edges // 30
    assert np.all(block[:, 0] == block[:, 1])


def test_nested_torus_single_eta() -> None:
    g = generate("nested-torus", 5, resolution_xi1=4, resolution_xi2=4, torus_count=1, eta=0.3)
    assert g.n_vertices == 16
    np.testing.assert_allclose(g.vertices[:, 4], 0.0)
    with pytest.raises(DomainError):
        generate("nested-torus", 4, torus_count=1, eta=2.0)


def test_nested_torus_requires_4d_and_resolution() -> None:
    with pytest.raises(DomainError, match="dimension too small"):
        generate("nested-torus", 3)
    with pytest.raises(DomainError):
        generate("nested-torus", 4, resolution_xi1=2)
    with pytest.raises(DomainError):
        generate("nested-torus", 4, torus_count=0)
