# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Single-row and single-column matrices with a Euclidean length.
"""

import math
from typing import Sequence

import numpy as np

from .exceptions import InvalidShapeError, ShapeMismatchError
from .matrix import Matrix


def _flat_values(values: Sequence[float]) -> np.ndarray:
    flat = np.asarray(values, dtype=float)
    if flat.ndim != 1:
        raise InvalidShapeError(
            f"vectors are built from a flat sequence, got {flat.ndim}-d input"
        )
    return flat


class RowVector(Matrix):
    """A 1 by n Matrix. Rows can not be appended."""

    def __init__(self, values: Sequence[float]) -> None:
        flat = _flat_values(values)
        super().__init__(1, flat.size)
        if flat.size:
            self._data[0, :] = flat

    @classmethod
    def from_matrix(cls, m: Matrix) -> "RowVector":
        if m.rows() != 1:
            raise ShapeMismatchError(
                f"a row vector needs exactly one row, got {m.rows()}x{m.cols()}",
                expected=(1, m.cols()),
                actual=m.shape,
            )
        return cls(m.to_numpy()[0])

    def append_row(self, source, size=None) -> "RowVector":
        raise ShapeMismatchError(
            "a row vector has exactly one row", expected=1, actual=2
        )

    def length(self) -> float:
        total = sum(self[0, j] * self[0, j] for j in range(self.cols()))
        return math.sqrt(abs(total))


class ColumnVector(Matrix):
    """An n by 1 Matrix. Columns can not be appended."""

    def __init__(self, values: Sequence[float]) -> None:
        flat = _flat_values(values)
        super().__init__(flat.size, 1)
        if flat.size:
            self._data[:, 0] = flat

    @classmethod
    def from_matrix(cls, m: Matrix) -> "ColumnVector":
        if m.cols() != 1:
            raise ShapeMismatchError(
                f"a column vector needs exactly one column, got {m.rows()}x{m.cols()}",
                expected=(m.rows(), 1),
                actual=m.shape,
            )
        return cls(m.to_numpy()[:, 0])

    def append_col(self, source, size=None) -> "ColumnVector":
        raise ShapeMismatchError(
            "a column vector has exactly one column", expected=1, actual=2
        )

    def length(self) -> float:
        total = sum(self[i, 0] * self[i, 0] for i in range(self.rows()))
        return math.sqrt(abs(total))
