#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time det / inverse / lu_solve against NumPy and report the error of
each kernel relative to NumPy's answer.

    python -m densemat.benchmark_inverse
"""

import time

import numpy as np
import pandas as pd

from densemat import Matrix, det, inverse, lu_solve

REPEATS = 5  # best of 5 runs
SIZES = [10, 50, 200]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def best(f, *args):
    return min(wall(f, *args) for _ in range(REPEATS))


def main():
    rng = np.random.default_rng(0)
    records = []
    for n in SIZES:
        A_np = rng.standard_normal((n, n))
        b_np = rng.standard_normal(n)
        A = Matrix.from_rows(A_np)

        t_np = best(np.linalg.det, A_np)
        t_ours = best(det, A)
        err = abs(det(A) - np.linalg.det(A_np)) / abs(np.linalg.det(A_np))
        records.append(("det", f"{n}x{n}", t_ours, t_ours / t_np, err))

        t_np = best(np.linalg.inv, A_np)
        t_ours = best(inverse, A)
        err = np.linalg.norm(inverse(A).to_numpy() - np.linalg.inv(A_np), np.inf)
        records.append(("inverse (GJ)", f"{n}x{n}", t_ours, t_ours / t_np, err))

        t_np = best(np.linalg.solve, A_np, b_np)
        t_ours = best(lu_solve, A, b_np)
        x = lu_solve(A, b_np).to_numpy().ravel()
        err = np.linalg.norm(A_np @ x - b_np, np.inf)
        records.append(("lu_solve", f"{n}x{n}", t_ours, t_ours / t_np, err))

    df = pd.DataFrame(
        records,
        columns=["kernel", "size", "sec", "sec/NumPy", "error"],
    )
    print(df.to_markdown(index=False))
    df.to_csv("bench_results.csv", index=False)


if __name__ == "__main__":
    main()
