from __future__ import annotations

import numpy as np
import pytest

from engine.core.errors import DomainError
from shapes import generate
from shapes.mandelbulb import compute_escape_times


@pytest.mark.parametrize("use_numba", ["1", "0"])
def test_escape_times_inside_and_outside(env_settings, use_numba: str) -> None:
    env_settings(NDP_USE_NUMBA=use_numba)
    pts = np.array([[0.0, 0.0, 0.0], [1.5, 1.5, 1.5], [3.0, 0.0, 0.0]])
    times = compute_escape_times(pts, 10, 8.0, 2.0)
    assert times.tolist() == [10, 0, 0]


def test_escape_times_higher_dimension(env_settings) -> None:
    env_settings(NDP_USE_NUMBA="0")
    pts = np.array([[0.0, 0.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 2.5, 0.0]])
    assert compute_escape_times(pts, 6, 8.0, 2.0).tolist() == [6, 0]


def test_mandelbulb_point_cloud() -> None:
    g = generate("mandelbulb", 4, resolution=5, max_iterations=6, slice=(0.0,))
    assert g.dimension == 4
    assert g.n_edges == 0
    assert 0 < g.n_vertices < 125
    assert g.properties == {"resolution": 5, "sample_count": 125}
    assert len(g.metadata["escape_times"]) == g.n_vertices
    assert np.all(np.asarray(g.metadata["escape_times"]) == 6)


def test_mandelbulb_threshold_keeps_more_points() -> None:
    strict = generate("mandelbulb", 3, resolution=5, max_iterations=6)
    loose = generate("mandelbulb", 3, resolution=5, max_iterations=6, escape_threshold=0.0)
    assert loose.n_vertices == 125
    assert strict.n_vertices <= loose.n_vertices


@pytest.mark.parametrize(
    "params",
    [
        {"resolution": 2},
        {"max_iterations": 0},
        {"escape_radius": 0.0},
        {"escape_threshold": 1.5},
    ],
)
def test_mandelbulb_rejects_bad_params(params: dict) -> None:
    with pytest.raises(DomainError):
        generate("mandelbulb", 3, **params)


def test_quaternion_julia_is_raymarch_only() -> None:
    g = generate("quaternion-julia", 4, julia_constant=(0.1, 0.2, 0.3, 0.4))
    assert g.is_empty
    assert g.vertices.shape == (0, 4)
    assert g.metadata["julia_constant"] == (0.1, 0.2, 0.3, 0.4)
    with pytest.raises(DomainError):
        generate("quaternion-julia", 4, julia_constant=(0.1, 0.2))
