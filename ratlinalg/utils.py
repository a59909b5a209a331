# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from collections.abc import Sequence
from typing import Optional

import numpy as np

from .errors import DimensionMismatch
from .fraction import ONE, ZERO, as_fraction

# Bounds used by Matrix.generate when none are given
DEFAULT_LOW: int = -10
DEFAULT_HIGH: int = 10

# det() falls back to cofactor expansion (O(n!)) only up to this order
MAX_COFACTOR_ORDER: int = 8


def permutation_sign(perm: list[int]) -> int:
    """Return +1 or -1 depending on permutation parity."""
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
    return -1 if swaps & 1 else 1


def to_fraction_array(values) -> np.ndarray:
    """
    Build a 2-D object array of Fractions from a nested sequence.

    Cells may be ints, NumPy integers, Fractions or scalar text.
    Raises DimensionMismatch when the input is ragged or not two-dimensional.
    """
    if isinstance(values, np.ndarray):
        if values.ndim != 2:
            raise DimensionMismatch(f"expected a 2-D array, got {values.ndim}-D")
        rows = values.tolist()
    else:
        rows = []
        for r in values:
            if isinstance(r, (str, bytes)) or not isinstance(r, (Sequence, np.ndarray)):
                raise DimensionMismatch(
                    f"each row must be a sequence of cells, got {type(r).__name__}"
                )
            if isinstance(r, np.ndarray) and r.ndim != 1:
                raise DimensionMismatch(f"expected a 1-D row, got {r.ndim}-D")
            rows.append(list(r))
    if not rows or not rows[0]:
        raise DimensionMismatch("a matrix needs at least one row and one column")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise DimensionMismatch("rows must all have the same length")

    out = np.empty((len(rows), width), dtype=object)
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            out[i, j] = as_fraction(cell)
    return out


def zeros_array(rows: int, columns: int) -> np.ndarray:
    out = np.empty((rows, columns), dtype=object)
    out.fill(ZERO)
    return out


def identity_array(n: int) -> np.ndarray:
    out = zeros_array(n, n)
    out[np.diag_indices(n)] = ONE
    return out


def random_integer_grid(
    rows: int,
    columns: int,
    low: int = DEFAULT_LOW,
    high: int = DEFAULT_HIGH,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Whole numbers drawn uniformly from [low, high] (both inclusive).

    Returns
    -------
    Matrix with int64 dtype
    """
    if low > high:
        raise ValueError("low must not exceed high")
    rng = np.random.default_rng(seed)
    return rng.integers(low, high, size=(rows, columns), endpoint=True)
