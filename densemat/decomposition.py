# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Elimination-based algorithms on square matrices: LU with partial
pivoting (and the determinant / solver built on it) and Gauss-Jordan
elimination (and the inverse built on it).
"""

import logging
from typing import List, Tuple

import numpy as np

from .exceptions import ShapeMismatchError, SingularMatrixError
from .matrix import Matrix
from .utils import PIVOT_THRESHOLD, permutation_sign, scale_tol

logger = logging.getLogger(__name__)


def _require_square(A: Matrix, what: str) -> None:
    if not A.is_square():
        raise ShapeMismatchError(
            f"{what} requires a square matrix, got {A.rows()}x{A.cols()}",
            expected="square",
            actual=A.shape,
        )


def _lup(A: np.ndarray) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    """
    Doolittle elimination with partial pivoting on an n by n array.

    Returns
    -------
    L    : (n, n) ndarray, unit lower-triangular
    U    : (n, n) ndarray, upper-triangular
    perm : list[int]
        Row i of U comes from original row perm[i], i.e. A[perm] = L @ U.
    Raises
    ------
    SingularMatrixError : if some column has no candidate pivot above tolerance.
    """
    U = A.astype(float, copy=True)
    n = U.shape[0]
    L = np.eye(n)
    perm = list(range(n))
    tol = scale_tol(U)

    for k in range(n):
        # Pick the largest magnitude entry on or below the diagonal
        col_slice = np.abs(U[k:, k])
        max_idx = int(col_slice.argmax())
        if col_slice[max_idx] <= tol:
            raise SingularMatrixError(
                f"matrix is singular: no usable pivot in column {k}", column=k
            )

        pivot_row = k + max_idx
        if pivot_row != k:
            U[[k, pivot_row]] = U[[pivot_row, k]]
            # multipliers already stored in L travel with their rows
            L[[k, pivot_row], :k] = L[[pivot_row, k], :k]
            perm[k], perm[pivot_row] = perm[pivot_row], perm[k]
            logger.debug(f"lup: swapped rows {k} and {pivot_row}")

        factors = U[k + 1 :, k] / U[k, k]
        L[k + 1 :, k] = factors
        U[k + 1 :, k:] -= factors[:, None] * U[k, k:]
        U[k + 1 :, k] = 0.0

    return L, U, perm


def lup_decompose(A: Matrix) -> Tuple[Matrix, Matrix, Matrix]:
    """
    LU decomposition with partial pivoting.

    Returns (L, U, P) such that P @ A == L @ U, with L unit
    lower-triangular, U upper-triangular and P a permutation matrix.
    """
    _require_square(A, "LU decomposition")
    L, U, perm = _lup(A.to_numpy())
    P = np.eye(A.rows())[perm]
    return Matrix._wrap(L), Matrix._wrap(U), Matrix._wrap(P)


def det(A: Matrix) -> float:
    """
    Determinant from the LU factors: the product of U's diagonal times
    the sign of the row permutation. Singular matrices give 0.0.
    """
    _require_square(A, "det")
    if A.rows() == 0:
        return 1.0
    try:
        _L, U, perm = _lup(A.to_numpy())
    except SingularMatrixError as e:
        logger.debug(f"det: {e}; returning 0.0")
        return 0.0
    sign = permutation_sign(perm)
    return sign * float(np.prod(np.diag(U)))


def _as_rhs(b, n: int) -> np.ndarray:
    rhs = b.to_numpy() if isinstance(b, Matrix) else np.asarray(b, dtype=float)
    if rhs.ndim == 1:
        rhs = rhs[:, None]
    if rhs.ndim != 2 or rhs.shape[0] != n:
        raise ShapeMismatchError(
            f"right-hand side needs {n} rows, got shape {rhs.shape}",
            expected=n,
            actual=rhs.shape,
        )
    return rhs.astype(float, copy=True)


def gauss_jordan(A: Matrix, B) -> Matrix:
    """
    Solve A X = B by Gauss-Jordan elimination on the augmented [A | B].

    Every pivot column is cleared above and below the pivot, so the left
    block ends as the identity and the right block holds X. The natural
    pivot is kept unless it is smaller than PIVOT_THRESHOLD times the
    largest candidate on or below it, in which case that candidate is
    swapped in (threshold pivoting).
    """
    _require_square(A, "Gauss-Jordan elimination")
    n = A.rows()
    a = A.to_numpy()
    aug = np.hstack([a, _as_rhs(B, n)])
    tol = scale_tol(a)

    for col in range(n):
        candidates = np.abs(aug[col:, col])
        max_idx = int(candidates.argmax())
        if candidates[max_idx] <= tol:
            raise SingularMatrixError(
                f"matrix is singular: no usable pivot in column {col}",
                column=col,
            )
        if candidates[0] < PIVOT_THRESHOLD * candidates[max_idx]:
            pivot_row = col + max_idx
            aug[[col, pivot_row]] = aug[[pivot_row, col]]
            logger.debug(f"gauss_jordan: swapped rows {col} and {pivot_row}")

        aug[col] /= aug[col, col]
        for r in range(n):
            if r != col and aug[r, col] != 0.0:
                aug[r] -= aug[r, col] * aug[col]

    return Matrix._wrap(aug[:, n:].copy())


def inverse(A: Matrix) -> Matrix:
    """A^-1, found by solving A X = I."""
    _require_square(A, "inverse")
    return gauss_jordan(A, Matrix.identity(A.rows()))


def lu_solve(A: Matrix, b) -> Matrix:
    """
    Solve A x = b with the LUP factors: forward substitution through L,
    then back substitution through U.

    `b` may be a Matrix with A.rows() rows or a 1-D sequence (treated as
    a single column). The result has one column per column of b.
    """
    _require_square(A, "lu_solve")
    n = A.rows()
    rhs = _as_rhs(b, n)
    L, U, perm = _lup(A.to_numpy())

    y = rhs[perm]
    for i in range(n):
        y[i] -= L[i, :i] @ y[:i]

    x = np.zeros_like(y)
    for i in reversed(range(n)):
        x[i] = (y[i] - U[i, i + 1 :] @ x[i + 1 :]) / U[i, i]

    return Matrix._wrap(x)
