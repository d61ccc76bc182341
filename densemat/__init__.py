# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densemat
========

A small dense-matrix algebra engine: a mutable two-dimensional grid of
doubles with arithmetic and structural operators, a row-major cursor,
random population helpers, and the two classical elimination algorithms
(LU with partial pivoting, Gauss-Jordan) behind `det` and `inverse`.

Public API
~~~~~~~~~~
- Containers
    - `Matrix`, `RowVector`, `ColumnVector`
- Iteration
    - `MatrixIterator`, `fill`, `equal`
- Decompositions
    - `lup_decompose`, `gauss_jordan`
- Matrix functions
    - `det`, `inverse`, `lu_solve`
- Errors
    - `MatrixError`, `InvalidShapeError`, `ShapeMismatchError`,
      `SingularMatrixError`

Example
-------
>>> import densemat as dm
>>> A = dm.Matrix.from_rows([[1, 2], [3, 4]])
>>> A * A.inverse() == dm.Matrix.identity(2)
True
"""

from importlib.metadata import version as _pkg_version

from .decomposition import (
    det,
    gauss_jordan,
    inverse,
    lu_solve,
    lup_decompose,
)
from .exceptions import (
    InvalidShapeError,
    MatrixError,
    ShapeMismatchError,
    SingularMatrixError,
)
from .iterator import MatrixIterator, equal, fill
from .matrix import Matrix
from .utils import EPS, NONSINGULAR_THRESHOLD, permutation_sign, scale_tol
from .vectors import ColumnVector, RowVector

__all__ = [
    "Matrix",
    "RowVector",
    "ColumnVector",
    "MatrixIterator",
    "fill",
    "equal",
    "lup_decompose",
    "gauss_jordan",
    "det",
    "inverse",
    "lu_solve",
    "MatrixError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "SingularMatrixError",
    "EPS",
    "NONSINGULAR_THRESHOLD",
    "scale_tol",
    "permutation_sign",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show densemat”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
