# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Optional, Union

import numpy as np

EPS: float = 1e-12

# populate_random / populate_symmetric redraw until |det| exceeds this
NONSINGULAR_THRESHOLD: float = 1e-4

# random fills draw integers from [RANDOM_LOW, RANDOM_HIGH)
RANDOM_LOW: int = 0
RANDOM_HIGH: int = 10

# gauss_jordan keeps the natural pivot unless it is below this fraction
# of the largest candidate in its column
PIVOT_THRESHOLD: float = 0.1

_DEFAULT_RNG: Optional[np.random.Generator] = None


def scale_tol(A: np.ndarray) -> float:
    """
    Return a pivot tolerance relative to the matrix magnitude.

    An all-zero matrix gets 0.0, so every candidate pivot fails the
    `pivot > tol` test and the matrix is reported singular.
    """
    if A.size == 0:
        return 0.0
    return EPS * float(np.linalg.norm(A, ord=np.inf))


def permutation_sign(perm: list[int]) -> float:
    """Return +1 or –1 depending on permutation parity."""
    visited = [False] * len(perm)
    cycles = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycles += 1
            j = i
            while not visited[j]:
                visited[j] = True
                j = perm[j]
    swaps = len(perm) - cycles  # n − #cycles
    return -1.0 if swaps & 1 else 1.0


def get_rng(
    rng: Union[np.random.Generator, int, None] = None,
) -> np.random.Generator:
    """
    Resolve the random source for the populate_* utilities.

    A Generator is used as is, an int seeds a fresh one, and None falls
    back to a process-wide generator that is created (and seeded) once.
    """
    global _DEFAULT_RNG
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is not None:
        return np.random.default_rng(rng)
    if _DEFAULT_RNG is None:
        _DEFAULT_RNG = np.random.default_rng()
    return _DEFAULT_RNG
