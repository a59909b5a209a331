# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidForm, NotSquare, Unsolvable
from .fraction import ONE, ZERO, Fraction
from .matrix import Matrix
from .utils import identity_array

logger = logging.getLogger(__name__)


def check_proper_form(A: Matrix) -> None:
    """
    Reject matrices elimination cannot reduce to a point solution.

    A must be square (n, n) or augmented (n, n+1).  In the n-by-n
    coefficient block no row and no column may be all zeros, and no more
    than ``n - z`` rows may share the zero pattern of a row holding
    ``z`` zeros (an approximate rank test: those rows only span n - z
    columns).

    Raises
    ------
    InvalidForm
    """
    m, n = A.shape
    if n != m and n != m + 1:
        raise InvalidForm(
            f"improper form {A.shape}: expected (n, n) or (n, n+1), no point solution"
        )

    nonzero = A.values[:, :m].astype(bool)

    empty_rows = np.flatnonzero(~nonzero.any(axis=1))
    if empty_rows.size:
        raise InvalidForm(f"empty row {int(empty_rows[0])}, no point solution")

    empty_cols = np.flatnonzero(~nonzero.any(axis=0))
    if empty_cols.size:
        raise InvalidForm(f"empty column {int(empty_cols[0])}, no point solution")

    zero_patterns = [tuple(np.flatnonzero(~nonzero[i])) for i in range(m)]
    for i, pattern in enumerate(zero_patterns):
        identical = sum(1 for p in zero_patterns if p == pattern)
        if identical > m - len(pattern):
            raise InvalidForm(
                f"too many identical rows ({identical} rows shaped like row {i}), "
                "no point solution"
            )


def order_leading_ones(
    U: np.ndarray,
    T: Optional[np.ndarray] = None,
    perm: Optional[List[int]] = None,
) -> None:
    """
    Permute the rows of U in place so that no diagonal cell is zero,
    whenever a legal swap exists.

    This is not partial pivoting: arithmetic is exact, so only structural
    zeros matter.  For a row with a zero on the diagonal, each column j
    where the row is non-zero is a candidate:

    - a row with a single non-zero entry can only go to that column, so it
      is moved there unless column j holds nothing else, and column j is
      then marked solved and never disturbed again;
    - otherwise rows i and j are exchanged when row j is non-zero in
      column i, so both land on a non-zero diagonal.

    The same swaps are applied to the rows of T and to perm.
    """
    m = U.shape[0]
    col_freq = np.count_nonzero(U[:, :m].astype(bool), axis=0)
    solved: List[int] = []

    def swap(a: int, b: int) -> None:
        U[[a, b]] = U[[b, a]]
        if T is not None:
            T[[a, b]] = T[[b, a]]
        if perm is not None:
            perm[a], perm[b] = perm[b], perm[a]
        logger.debug("swapped rows %d and %d", a, b)

    i = 0
    while i < m:
        row_freq = int(np.count_nonzero(U[i, :m].astype(bool)))
        if U[i, i] == ZERO:
            for j in range(m):
                if i == j or j in solved or U[i, j] == ZERO:
                    continue
                if row_freq == 1 and col_freq[j] != 1:
                    swap(i, j)
                    solved.append(j)
                    if U[i, i] == ZERO:
                        i -= 1  # the row swapped in needs placing too
                    break
                if U[j, i] != ZERO:
                    swap(j, i)
                    break
        i += 1


def _subtract_row_multiple(U: np.ndarray, T: np.ndarray, row: int, lead: int) -> None:
    # row lead already has a leading one at (lead, lead)
    factor = U[row, lead]
    U[row] -= factor * U[lead]
    T[row] -= factor * T[lead]


def _eliminate(A: Matrix) -> Tuple[np.ndarray, np.ndarray, List[Fraction], List[int]]:
    check_proper_form(A)

    U = A.values.copy()
    m = A.rows
    T = identity_array(m)
    perm = list(range(m))

    if any(U[i, i] == ZERO for i in range(m)):
        order_leading_ones(U, T, perm)
        logger.debug("row order after pivot reordering: %s", perm)

    pivots: List[Fraction] = []
    for i in range(m):
        for j in range(i):
            if U[i, j] != ZERO:
                _subtract_row_multiple(U, T, i, j)

        pivot = U[i, i]
        if pivot == ZERO:
            logger.debug("row %d has no usable pivot after elimination", i)
            raise Unsolvable(f"Unsolvable, row {i} contains a zero leading variable")
        pivots.append(pivot)

        if pivot != ONE:
            U[i] /= pivot
            T[i] /= pivot

    return U, T, pivots, perm


def forward_eliminate(
    A: Matrix,
) -> Tuple[Matrix, Matrix, List[Fraction], List[int]]:
    """
    Exact row-echelon reduction of a square or augmented matrix.

    Parameters
    ----------
    A : Matrix               (n, n) or (n, n+1)

    Returns
    -------
    U      : Matrix          same shape as A
        Upper-triangular with a unit diagonal.
    T      : Matrix          (n, n)
        Every row operation applied to U, applied to the identity.
    pivots : list[Fraction]
        Diagonal values just before each row was normalised.
    perm   : list[int]
        Final row order: row i of U comes from original row perm[i].

    Raises
    ------
    InvalidForm : A fails `check_proper_form`.
    Unsolvable  : a zero pivot remains after reordering and elimination.
    """
    U, T, pivots, perm = _eliminate(A)
    return Matrix._wrap(U), Matrix._wrap(T), pivots, perm


def row_echelon(A: Matrix) -> Tuple[Matrix, Matrix]:
    """Return the row echelon form of A and its tracking matrix."""
    U, T, _pivots, _perm = forward_eliminate(A)
    return U, T


def rref(A: Matrix) -> Tuple[Matrix, Matrix]:
    """
    Return the reduced row-echelon form R of A and its tracking matrix.

    For a square A the tracking matrix is A⁻¹; for an augmented A the
    last column of R is the solution and the tracking matrix is the
    inverse of the coefficient block.
    """
    R, J, _pivots, _perm = _eliminate(A)
    m = A.rows

    # backward sweep: one pass per row, from bottom to top
    for r in range(m - 2, -1, -1):
        for col in range(m - 1, r, -1):
            if R[r, col] != ZERO:
                _subtract_row_multiple(R, J, r, col)

    return Matrix._wrap(R), Matrix._wrap(J)


def inverse(A: Matrix) -> Matrix:
    """Uncached inverse; `Matrix.inverse` memoises this per instance."""
    if not A.is_square:
        raise NotSquare("the inverse is undefined for non-square matrices")
    return rref(A)[1]
