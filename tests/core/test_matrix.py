from __future__ import annotations

import numpy as np
import pytest

from engine.core.errors import DomainError
from engine.core.matrix import (
    apply_matrix,
    create_identity_matrix,
    create_scale_matrix,
    create_shear_matrix,
    create_uniform_scale_matrix,
    create_vector,
    multiply_matrices,
    multiply_matrix_vector,
)


def test_create_vector_and_identity() -> None:
    v = create_vector(5, 2.0)
    assert v.dtype == np.float64
    assert v.tolist() == [2.0] * 5
    np.testing.assert_array_equal(create_identity_matrix(4), np.eye(4))


@pytest.mark.parametrize("bad", [0, -1, 2.5, True])
def test_invalid_dimension_raises(bad) -> None:
    with pytest.raises(DomainError):
        create_identity_matrix(bad)


def test_scale_matrix_diagonal_and_length_check() -> None:
    m = create_scale_matrix(3, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(np.diag(m), [1.0, 2.0, 3.0])
    assert np.count_nonzero(m - np.diag(np.diag(m))) == 0
    with pytest.raises(DomainError):
        create_scale_matrix(3, [1.0, 2.0])


def test_uniform_scale_matrix() -> None:
    np.testing.assert_array_equal(create_uniform_scale_matrix(4, 0.5), 0.5 * np.eye(4))


def test_shear_matrix_row_is_sheared_axis() -> None:
    m = create_shear_matrix(3, 0, 1, 0.5)
    assert m[0, 1] == 0.5
    # v'[0] = v[0] + 0.5 * v[1]
    np.testing.assert_allclose(multiply_matrix_vector(m, [1.0, 2.0, 3.0]), [2.0, 2.0, 3.0])


@pytest.mark.parametrize("axes", [(0, 0), (0, 3), (-1, 1)])
def test_shear_matrix_invalid_axes(axes) -> None:
    with pytest.raises(DomainError):
        create_shear_matrix(3, axes[0], axes[1], 1.0)


def test_multiplication_dimension_mismatch() -> None:
    with pytest.raises(DomainError):
        multiply_matrix_vector(np.eye(3), [1.0, 2.0])
    with pytest.raises(DomainError):
        multiply_matrices(np.eye(3), np.eye(4))


def test_multiply_matrices_does_not_mutate_inputs() -> None:
    a = create_scale_matrix(2, [2.0, 3.0])
    b = create_shear_matrix(2, 0, 1, 1.0)
    a0, b0 = a.copy(), b.copy()
    c = multiply_matrices(a, b)
    np.testing.assert_array_equal(c, a0 @ b0)
    np.testing.assert_array_equal(a, a0)
    np.testing.assert_array_equal(b, b0)


def test_apply_matrix_batched_matches_per_vertex() -> None:
    m = create_shear_matrix(4, 1, 3, -0.25) @ create_scale_matrix(4, [1, 2, 3, 4])
    verts = np.random.rand(10, 4)
    out = apply_matrix(m, verts)
    for row, v in zip(out, verts):
        np.testing.assert_allclose(row, multiply_matrix_vector(m, v))
    assert apply_matrix(m, np.empty((0, 4))).shape == (0, 4)
    with pytest.raises(DomainError):
        apply_matrix(m, np.zeros((2, 3)))
