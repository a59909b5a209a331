# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense matrix of exact Fractions.

Cells live in a 2-D NumPy ``object`` array that is marked read-only as
soon as the Matrix is built.  Algorithms that need to mutate rows copy
the array first, so a Matrix a caller holds never changes.
"""

import logging
import threading
from typing import List, Optional, Tuple

import numpy as np

from .errors import NotSquare
from .fraction import Fraction
from .utils import (
    DEFAULT_HIGH,
    DEFAULT_LOW,
    identity_array,
    random_integer_grid,
    to_fraction_array,
    zeros_array,
)

logger = logging.getLogger(__name__)


class Matrix:
    """
    Parameters
    ----------
    values : nested sequence or 2-D ndarray
        Rectangular grid of ints, Fractions or scalar text
        (``"3"``, ``"-1/2"``).
    """

    def __init__(self, values):
        self._setup(to_fraction_array(values))

    def _setup(self, array: np.ndarray) -> None:
        array.flags.writeable = False
        self._values = array
        self._inverse: Optional["Matrix"] = None
        self._lock = threading.Lock()

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Matrix":
        """Adopt an object array of Fractions without converting it."""
        obj = cls.__new__(cls)
        obj._setup(array)
        return obj

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, rows: int, columns: int) -> "Matrix":
        return cls._wrap(zeros_array(rows, columns))

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        return cls._wrap(identity_array(n))

    @classmethod
    def generate(
        cls,
        rows: int,
        columns: int,
        low: int = DEFAULT_LOW,
        high: int = DEFAULT_HIGH,
        seed: Optional[int] = None,
    ) -> "Matrix":
        """Random matrix of whole numbers in [low, high]."""
        return cls(random_integer_grid(rows, columns, low, high, seed))

    def clone(self) -> "Matrix":
        """Deep copy; the cached inverse is not carried over."""
        return Matrix._wrap(self._values.copy())

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def columns(self) -> int:
        return self._values.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._values.shape

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    @property
    def values(self) -> np.ndarray:
        """
        Read-only (rows, columns) object array of Fractions.

        A view: its writeable flag cannot be switched back on, since the
        array owning the cells is read-only.
        """
        return self._values.view()

    def row(self, i: int) -> np.ndarray:
        return self._values[i]

    def __getitem__(self, key):
        return self._values[key]

    def tolist(self) -> List[List[Fraction]]:
        return self._values.tolist()

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return "\n".join(" ".join(str(f) for f in row) for row in self._values)

    def __repr__(self) -> str:
        body = ", ".join(
            "[" + ", ".join(repr(str(f)) for f in row) + "]" for row in self._values
        )
        return f"{self.__class__.__name__}([{body}])"

    def to_html(self) -> str:
        return "<html>" + str(self).replace("\n", "<br/>") + "</html>"

    def write(self, fp) -> None:
        """Append the plain-text dump of this matrix to an open text file."""
        from .dump import write_matrix

        write_matrix(fp, self)

    # ------------------------------------------------------------------
    # equality
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.all(self._values == other._values)
        )

    def __hash__(self) -> int:
        return hash((self.shape, tuple(self._values.flat)))

    def __reduce__(self):
        return (self.__class__, (self._values.tolist(),))

    # ------------------------------------------------------------------
    # algebra
    # ------------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        from .matrix_functions import add

        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        from .matrix_functions import subtract

        return subtract(self, other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        from .matrix_functions import multiply

        return multiply(self, other)

    def __mul__(self, k):
        if isinstance(k, Matrix):
            return NotImplemented
        from .matrix_functions import scale

        try:
            return scale(self, k)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> "Matrix":
        return self * -1

    def __pow__(self, n: int) -> "Matrix":
        from .matrix_functions import power

        return power(self, n)

    def inverse(self) -> "Matrix":
        """
        A⁻¹ via reduced row echelon form, computed once per instance.

        Raises
        ------
        NotSquare, InvalidForm, Unsolvable
        """
        if not self.is_square:
            raise NotSquare("the inverse is undefined for non-square matrices")
        with self._lock:
            if self._inverse is None:
                from .elimination import inverse

                self._inverse = inverse(self)
                logger.debug("cached inverse of %dx%d matrix", self.rows, self.columns)
            else:
                logger.debug("inverse cache hit for %dx%d matrix", self.rows, self.columns)
            return self._inverse

    def determinant(self) -> Fraction:
        from .matrix_functions import det

        return det(self)
