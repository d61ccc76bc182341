# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense, mutable two-dimensional matrix of float64 values.
"""

import logging
import numbers
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .exceptions import InvalidShapeError, ShapeMismatchError
from .iterator import MatrixIterator, equal, fill
from .utils import NONSINGULAR_THRESHOLD, RANDOM_HIGH, RANDOM_LOW, get_rng

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


def _is_scalar(x) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _normalize(data: np.ndarray) -> np.ndarray:
    # a matrix without rows has no columns either
    if data.shape[0] == 0:
        return np.zeros((0, 0), dtype=float)
    return data


class Matrix:
    """
    Row-major grid of doubles with value semantics.

    Every constructor copies its source, and every arithmetic operator
    returns a new Matrix. Elements are read and written with `m[i, j]`.
    """

    # keep NumPy from broadcasting over a Matrix in `np.float64(2) * m`
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise InvalidShapeError(
                f"matrix dimensions must be non-negative, got {rows}x{cols}"
            )
        self._data = _normalize(np.zeros((rows, cols), dtype=float))

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    @staticmethod
    def _wrap(data: np.ndarray) -> "Matrix":
        """Adopt `data` (already owned by the caller) without copying."""
        m = Matrix.__new__(Matrix)
        m._data = _normalize(np.asarray(data, dtype=float))
        return m

    @classmethod
    def from_rows(cls, source: Sequence[Sequence[float]]) -> "Matrix":
        """Build a Matrix from a sequence of rows (deep copy)."""
        if isinstance(source, Matrix):
            return source.copy()
        rows = [list(r) for r in source]
        if not rows:
            return Matrix(0, 0)
        width = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != width:
                raise InvalidShapeError(
                    f"row {i} has {len(r)} elements, expected {width}"
                )
        return cls._wrap(np.array(rows, dtype=float).reshape(len(rows), width))

    @classmethod
    def from_flat(cls, values: Sequence[float], rows: int, cols: int) -> "Matrix":
        """Build a rows x cols Matrix from a flat row-major sequence."""
        if rows < 0 or cols < 0:
            raise InvalidShapeError(
                f"matrix dimensions must be non-negative, got {rows}x{cols}"
            )
        flat = np.asarray(values, dtype=float).ravel()
        if flat.size < rows * cols:
            raise InvalidShapeError(
                f"need {rows * cols} values for a {rows}x{cols} matrix, got {flat.size}"
            )
        return cls._wrap(flat[: rows * cols].reshape(rows, cols).copy())

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        return Matrix(n, n).populate_identity()

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # shape and element access
    # ------------------------------------------------------------------
    def rows(self) -> int:
        return self._data.shape[0]

    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows(), self.cols()

    def is_square(self) -> bool:
        return self.rows() == self.cols()

    def _require_square(self, what: str) -> None:
        if not self.is_square():
            raise ShapeMismatchError(
                f"{what} requires a square matrix, got {self.rows()}x{self.cols()}",
                expected="square",
                actual=self.shape,
            )

    def __getitem__(self, key: Tuple[int, int]) -> float:
        i, j = key
        return float(self._data[i, j])

    def __setitem__(self, key: Tuple[int, int], value: float) -> None:
        i, j = key
        self._data[i, j] = value

    def to_list(self) -> List[List[float]]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    # ------------------------------------------------------------------
    # iteration
    # ------------------------------------------------------------------
    def begin(self) -> MatrixIterator:
        return MatrixIterator(self, 0, 0)

    def end(self) -> MatrixIterator:
        return MatrixIterator(self, self.rows(), 0)

    def __iter__(self) -> Iterator[float]:
        it, last = self.begin(), self.end()
        while it.distance_to(last) > 0:
            yield it.dereference()
            it.increment()

    # ------------------------------------------------------------------
    # structural operators
    # ------------------------------------------------------------------
    @staticmethod
    def _as_vector(values, size: Optional[int]) -> np.ndarray:
        flat = np.asarray(values, dtype=float).ravel()
        if size is not None:
            if size < 0 or flat.size < size:
                raise InvalidShapeError(
                    f"need {size} values, got {flat.size}"
                )
            flat = flat[:size]
        return flat

    def append_row(self, source, size: Optional[int] = None) -> "Matrix":
        """
        Append the rows of a Matrix, or a single row given as a sequence
        (optionally with an explicit element count `size`).
        """
        if isinstance(source, Matrix):
            block = source._data
        else:
            block = self._as_vector(source, size)[None, :]

        if block.shape[1] != self.cols():
            raise ShapeMismatchError(
                f"cannot append a row of length {block.shape[1]} "
                f"to a matrix with {self.cols()} columns",
                expected=self.cols(),
                actual=block.shape[1],
            )
        self._data = _normalize(np.vstack([self._data, block]))
        return self

    def append_col(self, source, size: Optional[int] = None) -> "Matrix":
        """
        Append the columns of a Matrix, or a single column given as a
        sequence (optionally with an explicit element count `size`).
        """
        if isinstance(source, Matrix):
            block = source._data
        else:
            block = self._as_vector(source, size)[:, None]

        if block.shape[0] != self.rows():
            raise ShapeMismatchError(
                f"cannot append a column of length {block.shape[0]} "
                f"to a matrix with {self.rows()} rows",
                expected=self.rows(),
                actual=block.shape[0],
            )
        self._data = _normalize(np.hstack([self._data, block]))
        return self

    def swap_rows(self, a: int, b: int) -> "Matrix":
        n = self.rows()
        if not (0 <= a < n and 0 <= b < n):
            raise IndexError(f"row indices ({a}, {b}) out of range for {n} rows")
        self._data[[a, b]] = self._data[[b, a]]
        return self

    def swap_cols(self, a: int, b: int) -> "Matrix":
        n = self.cols()
        if not (0 <= a < n and 0 <= b < n):
            raise IndexError(f"column indices ({a}, {b}) out of range for {n} columns")
        self._data[:, [a, b]] = self._data[:, [b, a]]
        return self

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------
    def _require_same_shape(self, other: "Matrix", op: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"cannot {op} a {other.rows()}x{other.cols()} matrix "
                f"and a {self.rows()}x{self.cols()} matrix",
                expected=self.shape,
                actual=other.shape,
            )

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "add")
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "subtract")
        return Matrix._wrap(self._data - other._data)

    def __neg__(self) -> "Matrix":
        return Matrix._wrap(-self._data)

    def matmul(self, other: "Matrix") -> "Matrix":
        """c[i, j] = sum_k a[i, k] * b[k, j]"""
        if self.cols() == 0:
            raise ShapeMismatchError(
                "matrix product needs a non-empty inner dimension",
                expected="cols > 0",
                actual=self.shape,
            )
        if self.cols() != other.rows():
            raise ShapeMismatchError(
                f"cannot multiply {self.rows()}x{self.cols()} by "
                f"{other.rows()}x{other.cols()}",
                expected=self.cols(),
                actual=other.rows(),
            )
        return Matrix._wrap(self._data @ other._data)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if _is_scalar(other):
            return Matrix._wrap(float(other) * self._data)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return Matrix._wrap(float(other) * self._data)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.rows() != other.rows() or self.cols() != other.cols():
            return False
        return equal(self.begin(), self.end(), other.begin())

    # mutable container
    __hash__ = None  # type: ignore[assignment]

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._data.T.copy())

    def trace(self) -> float:
        self._require_square("trace")
        return float(np.trace(self._data))

    # ------------------------------------------------------------------
    # decompositions (see densemat.decomposition)
    # ------------------------------------------------------------------
    def lu(self) -> Tuple["Matrix", "Matrix", "Matrix"]:
        from .decomposition import lup_decompose

        return lup_decompose(self)

    def det(self) -> float:
        from .decomposition import det

        return det(self)

    def inverse(self) -> "Matrix":
        from .decomposition import inverse

        return inverse(self)

    def solve(self, b) -> "Matrix":
        """Solve self @ x = b through the LUP factors."""
        from .decomposition import lu_solve

        return lu_solve(self, b)

    # ------------------------------------------------------------------
    # population
    # ------------------------------------------------------------------
    def populate_identity(self) -> "Matrix":
        self._require_square("populate_identity")
        fill(self.begin(), self.end(), 0.0)
        for i in range(self.rows()):
            self._data[i, i] = 1.0
        return self

    def populate_random(self, rng: RandomSource = None) -> "Matrix":
        """
        Fill with random integers in [RANDOM_LOW, RANDOM_HIGH).

        Square matrices are redrawn until |det| > NONSINGULAR_THRESHOLD.
        There is no cap on the number of draws.
        """
        gen = get_rng(rng)
        attempts = 0
        while True:
            attempts += 1
            self._data[:, :] = gen.integers(RANDOM_LOW, RANDOM_HIGH, size=self.shape)
            if not self.is_square():
                break
            if abs(self.det()) > NONSINGULAR_THRESHOLD:
                break
            logger.debug(f"populate_random: draw {attempts} is singular, redrawing")
        return self

    def populate_symmetric(self, rng: RandomSource = None) -> "Matrix":
        """
        Fill the upper triangle randomly and mirror it into the lower one,
        redrawing until the result is non-singular. No cap on draws.
        """
        self._require_square("populate_symmetric")
        gen = get_rng(rng)
        attempts = 0
        while True:
            attempts += 1
            upper = np.triu(gen.integers(RANDOM_LOW, RANDOM_HIGH, size=self.shape))
            self._data[:, :] = upper + np.triu(upper, 1).T
            if abs(self.det()) > NONSINGULAR_THRESHOLD:
                break
            logger.debug(f"populate_symmetric: draw {attempts} is singular, redrawing")
        return self

    # ------------------------------------------------------------------
    # printing
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        lines = ["["]
        for row in self._data:
            lines.append("[" + "".join(f" {v:g} " for v in row) + "]")
        lines.append("]")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_list()})"
