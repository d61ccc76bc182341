# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import math

import numpy as np
import pytest

from densemat.decomposition import (
    det,
    gauss_jordan,
    inverse,
    lu_solve,
    lup_decompose,
)
from densemat.exceptions import ShapeMismatchError, SingularMatrixError
from densemat.matrix import Matrix

logger = logging.getLogger(__name__)

A = [[1, 2], [3, 4]]
SINGULAR = [[1, 2], [2, 4]]


def _random_matrix(n, seed):
    rng = np.random.default_rng(seed)
    return Matrix.from_rows(rng.standard_normal((n, n)))


# ---------------------------------------------------------------------
# LU with partial pivoting
# ---------------------------------------------------------------------
@pytest.mark.parametrize("n", [1, 3, 10, 50])
def test_lup_reconstruction(n):
    M = _random_matrix(n, seed=n)
    L, U, P = lup_decompose(M)
    L_, U_, P_ = L.to_numpy(), U.to_numpy(), P.to_numpy()

    assert np.allclose(P_ @ M.to_numpy(), L_ @ U_, atol=1e-10)
    # L unit lower-triangular, U upper-triangular
    assert np.allclose(np.tril(L_), L_)
    assert np.allclose(np.diag(L_), 1.0)
    assert np.allclose(np.triu(U_), U_)
    # P is a permutation matrix
    assert np.allclose(P_.sum(axis=0), 1.0)
    assert np.allclose(P_.sum(axis=1), 1.0)


def test_lup_picks_largest_pivot():
    L, U, P = lup_decompose(Matrix.from_rows(A))
    assert P == Matrix.from_rows([[0, 1], [1, 0]])
    assert U[0, 0] == 3
    # multipliers never exceed 1 in magnitude
    assert abs(L[1, 0]) <= 1.0


def test_lup_singular_raises():
    with pytest.raises(SingularMatrixError) as info:
        lup_decompose(Matrix.from_rows(SINGULAR))
    assert info.value.column == 1


def test_lup_requires_square():
    with pytest.raises(ShapeMismatchError):
        lup_decompose(Matrix(2, 3))


def test_matrix_lu_method():
    M = Matrix.from_rows(A)
    L, U, P = M.lu()
    assert np.allclose((P * M).to_numpy(), (L * U).to_numpy())


# ---------------------------------------------------------------------
# determinant
# ---------------------------------------------------------------------
@pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
def test_det_identity(n):
    assert det(Matrix.identity(n)) == 1.0


def test_det_accounts_for_row_swaps():
    assert det(Matrix.from_rows([[0, 1], [1, 0]])) == -1.0
    assert math.isclose(det(Matrix.from_rows(A)), -2.0, rel_tol=1e-12)
    # three-cycle is an even permutation
    assert det(Matrix.from_rows([[0, 1, 0], [0, 0, 1], [1, 0, 0]])) == 1.0


def test_det_singular_is_zero():
    assert det(Matrix.from_rows([[1, 2], [0, 0]])) == 0.0
    assert det(Matrix.from_rows(SINGULAR)) == 0.0


def test_det_singular_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="densemat.decomposition")
    det(Matrix.from_rows(SINGULAR))
    assert "returning 0.0" in caplog.text


def test_det_small_scale_is_not_singular():
    tiny = 1e-13 * Matrix.identity(2)
    assert math.isclose(det(tiny), 1e-26, rel_tol=1e-12)
    inv = inverse(tiny)
    assert np.allclose(inv.to_numpy(), 1e13 * np.eye(2), rtol=1e-12, atol=0)
    x = lu_solve(tiny, [1e-13, 2e-13])
    assert np.allclose(x.to_numpy().ravel(), [1.0, 2.0])


def test_zero_matrix_is_singular():
    assert det(Matrix(3, 3)) == 0.0
    with pytest.raises(SingularMatrixError):
        lup_decompose(Matrix(2, 2))


def test_det_empty_matrix():
    assert det(Matrix(0, 0)) == 1.0


def test_det_requires_square():
    with pytest.raises(ShapeMismatchError):
        det(Matrix(2, 3))
    with pytest.raises(ShapeMismatchError):
        Matrix(3, 2).det()


@pytest.mark.parametrize("n", [2, 6, 20])
def test_det_matches_numpy(n):
    M = _random_matrix(n, seed=100 + n)
    ours = M.det()
    numpy_det = np.linalg.det(M.to_numpy())
    logger.debug(f"n={n} ours={ours} numpy={numpy_det}")
    assert math.isclose(ours, numpy_det, rel_tol=1e-8, abs_tol=1e-10)


# ---------------------------------------------------------------------
# Gauss-Jordan / inverse
# ---------------------------------------------------------------------
def test_inverse_exact_for_integer_matrix():
    M = Matrix.from_rows(A)
    inv = M.inverse()
    assert inv == Matrix.from_rows([[-2, 1], [1.5, -0.5]])
    assert M * inv == Matrix.identity(2)


def test_inverse_swaps_zero_pivot():
    M = Matrix.from_rows([[0, 1], [1, 0]])
    assert M * inverse(M) == Matrix.identity(2)


def test_inverse_singular_raises():
    with pytest.raises(SingularMatrixError):
        inverse(Matrix.from_rows(SINGULAR))
    with pytest.raises(SingularMatrixError):
        Matrix.from_rows([[1, 2], [0, 0]]).inverse()
    with pytest.raises(SingularMatrixError):
        Matrix(3, 3).inverse()


def test_inverse_requires_square():
    with pytest.raises(ShapeMismatchError):
        inverse(Matrix(2, 3))


@pytest.mark.parametrize("n", [3, 10, 40])
def test_inverse_matches_numpy(n):
    M = _random_matrix(n, seed=n)
    ours = inverse(M).to_numpy()
    assert np.allclose(ours, np.linalg.inv(M.to_numpy()), atol=1e-8)
    assert np.allclose(M.to_numpy() @ ours, np.eye(n), atol=1e-8)


def test_gauss_jordan_general_rhs():
    M = Matrix.from_rows([[2, 1], [1, 3]])
    X = gauss_jordan(M, Matrix.from_rows([[3, 1], [5, 0]]))
    assert X.shape == (2, 2)
    assert np.allclose(X.to_numpy(), [[0.8, 0.6], [1.4, -0.2]])


def test_gauss_jordan_rhs_rows_must_match():
    with pytest.raises(ShapeMismatchError):
        gauss_jordan(Matrix.identity(2), Matrix(3, 1))


# ---------------------------------------------------------------------
# LU solve
# ---------------------------------------------------------------------
@pytest.mark.parametrize("n", [1, 5, 30])
def test_lu_solve_matches_numpy(n):
    M = _random_matrix(n, seed=7 * n)
    rng = np.random.default_rng(n)
    b = rng.standard_normal(n)
    x = lu_solve(M, b)
    assert x.shape == (n, 1)
    assert np.allclose(x.to_numpy().ravel(), np.linalg.solve(M.to_numpy(), b))


def test_lu_solve_multiple_columns():
    M = _random_matrix(6, seed=1)
    B = _random_matrix(6, seed=2)
    X = M.solve(B)
    assert np.allclose((M * X).to_numpy(), B.to_numpy(), atol=1e-10)


def test_lu_solve_singular_raises():
    with pytest.raises(SingularMatrixError):
        lu_solve(Matrix.from_rows(SINGULAR), [1, 2])


def test_lu_solve_rhs_length_must_match():
    with pytest.raises(ShapeMismatchError):
        lu_solve(Matrix.identity(3), [1, 2])
