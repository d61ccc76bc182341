# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for densemat.

Every error raised on purpose by the library derives from `MatrixError`.
The shape and singularity errors are also `ValueError`s so callers that
only care about "bad input" can catch the built-in type.
"""


class MatrixError(Exception):
    """Base exception for all densemat errors."""

    pass


class InvalidShapeError(MatrixError, ValueError):
    """
    A shape could not be built.

    Raised for negative dimensions, ragged row sources and flat sources
    holding fewer than rows * cols values.
    """

    pass


class ShapeMismatchError(MatrixError, ValueError):
    """
    Operand shapes are incompatible for the requested operation.

    Attributes:
        expected: The shape (or dimension) the operation required.
        actual: The shape (or dimension) it was given.
    """

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class SingularMatrixError(MatrixError, ValueError):
    """
    No usable pivot was found during elimination.

    Attributes:
        column: Column index where elimination stalled, if known.
    """

    def __init__(self, message: str, column=None):
        super().__init__(message)
        self.column = column
