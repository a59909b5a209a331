# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .elimination import forward_eliminate
from .errors import DimensionMismatch, InvalidForm, NotSquare, Unsolvable
from .fraction import ONE, ZERO, Fraction, as_fraction
from .matrix import Matrix
from .utils import MAX_COFACTOR_ORDER, permutation_sign

logger = logging.getLogger(__name__)


def identity(n: int) -> Matrix:
    return Matrix.identity(n)


def add(A: Matrix, B: Matrix) -> Matrix:
    if A.shape != B.shape:
        raise DimensionMismatch(f"cannot add {A.shape} and {B.shape} matrices")
    return Matrix._wrap(A.values + B.values)


def subtract(A: Matrix, B: Matrix) -> Matrix:
    if A.shape != B.shape:
        raise DimensionMismatch(f"cannot subtract {B.shape} from {A.shape} matrix")
    return Matrix._wrap(A.values - B.values)


def scale(A: Matrix, k) -> Matrix:
    """Multiply every cell of A by the scalar k (int, Fraction or text)."""
    k = as_fraction(k)
    return Matrix._wrap(A.values * k)


def multiply(A: Matrix, B: Matrix) -> Matrix:
    """
    Matrix product A B.

    Each cell is an exact sum of A.columns Fraction products, so there is
    no rounding, but numerators and denominators grow with every product.
    """
    if A.columns != B.rows:
        raise DimensionMismatch(
            f"cannot multiply {A.shape} by {B.shape}: inner dimensions differ"
        )
    return Matrix._wrap(A.values @ B.values)


def power(A: Matrix, n: int) -> Matrix:
    """
    A multiplied by itself n-1 times.

    n <= 1 returns A unchanged (n == 0 is NOT the identity).
    """
    product = A
    for _ in range(1, n):
        product = multiply(A, product)
    return product


def det(A: Matrix) -> Fraction:
    """
    Determinant of a square matrix using elimination.

    The value is the product of the pivots as they were before each row
    was normalised, times the sign of the row permutation applied by the
    pivot reordering.  If elimination rejects the matrix, small matrices
    fall back to cofactor expansion.
    """
    if not A.is_square:
        raise NotSquare("The determinant is undefined for non-square matrices.")
    try:
        _U, _T, pivots, perm = forward_eliminate(A)
    except (InvalidForm, Unsolvable) as e:
        if A.rows > MAX_COFACTOR_ORDER:
            raise
        logger.warning("det(): %s; falling back to cofactor expansion – O(n!)", e)
        return cofactor_det(A)

    d = Fraction(permutation_sign(perm))
    for p in pivots:
        d = d * p
    return d


def cofactor_det(A: Matrix) -> Fraction:
    """Determinant by Laplace expansion along the first row."""
    if not A.is_square:
        raise NotSquare("The determinant is undefined for non-square matrices.")
    return _cofactor(A.values)


def _cofactor(V: np.ndarray) -> Fraction:
    n = V.shape[0]
    if n == 1:
        return V[0, 0]
    if n == 2:
        return V[0, 0] * V[1, 1] - V[0, 1] * V[1, 0]

    total = ZERO
    cols = np.arange(n)
    for j in range(n):
        if V[0, j] == ZERO:
            continue
        minor = V[1:][:, cols != j]
        sign = ONE if j % 2 == 0 else -ONE
        total = total + sign * V[0, j] * _cofactor(minor)
    return total
