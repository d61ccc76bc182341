# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Bidirectional, random-access cursor over the elements of a Matrix.

The cursor walks the grid in row-major order. Position (r, c) has the
linear offset r * cols + c, begin() sits at (0, 0) and end() at the
one-past-last position (rows, 0).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .matrix import Matrix


class MatrixIterator:
    """
    Cursor holding a non-owning reference to a Matrix plus a (row, col).

    Two cursors are equal iff they refer to the *same* Matrix object and
    the same position.
    """

    __slots__ = ("matrix", "row", "col")

    def __init__(self, matrix: "Matrix", row: int = 0, col: int = 0) -> None:
        self.matrix = matrix
        self.row = row
        self.col = col

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(row={self.row}, col={self.col})"

    def copy(self) -> "MatrixIterator":
        return MatrixIterator(self.matrix, self.row, self.col)

    @property
    def offset(self) -> int:
        """Linear row-major offset of the cursor."""
        return self.row * self.matrix.cols() + self.col

    def _check_readable(self) -> None:
        if not (
            0 <= self.row < self.matrix.rows() and 0 <= self.col < self.matrix.cols()
        ):
            raise IndexError(
                f"iterator at ({self.row}, {self.col}) does not point into a "
                f"{self.matrix.rows()}x{self.matrix.cols()} matrix"
            )

    def dereference(self) -> float:
        """Value at the cursor. Raises IndexError at or past end()."""
        self._check_readable()
        return self.matrix[self.row, self.col]

    def assign(self, value: float) -> None:
        """Write `value` through the cursor."""
        self._check_readable()
        self.matrix[self.row, self.col] = value

    def equal(self, other: "MatrixIterator") -> bool:
        return (
            self.row == other.row
            and self.col == other.col
            and self.matrix is other.matrix
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixIterator):
            return NotImplemented
        return self.equal(other)

    def increment(self) -> None:
        # last column wraps to the first column of the next row
        if self.col == self.matrix.cols() - 1:
            self.col = 0
            self.row += 1
        else:
            self.col += 1

    def decrement(self) -> None:
        # first column wraps to the last column of the previous row
        if self.col == 0:
            self.col = self.matrix.cols() - 1
            self.row -= 1
        else:
            self.col -= 1

    def advance(self, n: int) -> None:
        """
        Jump by `n` elements (negative moves backwards).

        The new position is the row-major decomposition of offset + n, so
        a jump that crosses a row boundary lands on a valid column.
        """
        cols = self.matrix.cols()
        if cols == 0:
            return
        self.row, self.col = divmod(self.offset + n, cols)

    def distance_to(self, other: "MatrixIterator") -> int:
        """Number of elements from this cursor to `other`."""
        if self.matrix is not other.matrix:
            raise ValueError("iterators refer to different matrices")
        return other.offset - self.offset

    def __add__(self, n: int) -> "MatrixIterator":
        if not isinstance(n, int):
            return NotImplemented
        it = self.copy()
        it.advance(n)
        return it

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, MatrixIterator):
            return other.distance_to(self)
        if isinstance(other, int):
            return self + (-other)
        return NotImplemented


def fill(first: MatrixIterator, last: MatrixIterator, value: float) -> None:
    """Assign `value` to every element in [first, last)."""
    it = first.copy()
    while it.distance_to(last) > 0:
        it.assign(value)
        it.increment()


def equal(first1: MatrixIterator, last1: MatrixIterator, first2: MatrixIterator) -> bool:
    """
    Compare [first1, last1) element-wise against the range starting at
    first2. Comparison is exact; there is no tolerance.
    """
    a = first1.copy()
    b = first2.copy()
    while a.distance_to(last1) > 0:
        if a.dereference() != b.dereference():
            return False
        a.increment()
        b.increment()
    return True
