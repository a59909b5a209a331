# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
ratlinalg
=========

Exact linear algebra over the rationals: every cell is a normalised
fraction, so elimination, inversion and determinants carry no rounding
error.

Public API
~~~~~~~~~~
- Scalars
    - `Fraction`, `ZERO`, `ONE`
- Matrices
    - `Matrix`, `identity`
    - `add`, `subtract`, `scale`, `multiply`, `power`
- Elimination
    - `forward_eliminate`, `row_echelon`, `rref`, `inverse`
    - `check_proper_form`, `order_leading_ones`
- Determinants
    - `det`, `cofactor_det`
- Diagnostics
    - `write_matrix`, `write_matrices`, `read_matrices`
- Expression support
    - `Workspace`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import ratlinalg as rl
>>> A = rl.Matrix([[1, 0], [0, 2]])
>>> print(A.inverse())
1 0
0 1/2
"""

from importlib.metadata import version as _pkg_version

from .dump import read_matrices, write_matrices, write_matrix
from .elimination import (
    check_proper_form,
    forward_eliminate,
    inverse,
    order_leading_ones,
    row_echelon,
    rref,
)
from .errors import (
    DimensionMismatch,
    DivisionByZero,
    InvalidForm,
    InvalidFormat,
    NotSquare,
    RationalLinAlgError,
    Undefined,
    Unsolvable,
)
from .fraction import ONE, ZERO, Fraction

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .matrix import Matrix
from .matrix_functions import (
    add,
    cofactor_det,
    det,
    identity,
    multiply,
    power,
    scale,
    subtract,
)
from .utils import permutation_sign
from .workspace import Workspace

__all__ = [
    "Fraction",
    "ZERO",
    "ONE",
    "Matrix",
    "identity",
    "add",
    "subtract",
    "scale",
    "multiply",
    "power",
    "det",
    "cofactor_det",
    "forward_eliminate",
    "row_echelon",
    "rref",
    "inverse",
    "check_proper_form",
    "order_leading_ones",
    "permutation_sign",
    "write_matrix",
    "write_matrices",
    "read_matrices",
    "Workspace",
    "RationalLinAlgError",
    "DimensionMismatch",
    "NotSquare",
    "DivisionByZero",
    "Undefined",
    "InvalidFormat",
    "InvalidForm",
    "Unsolvable",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show ratlinalg”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
