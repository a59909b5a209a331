# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by ratlinalg.

Every class also derives from the built-in exception a caller would
normally catch for the same situation, so ``except ValueError`` keeps
working.
"""


class RationalLinAlgError(Exception):
    """Base class of every error raised by this package."""


class DimensionMismatch(RationalLinAlgError, ValueError):
    """Operand shapes are incompatible (add, multiply, ragged input)."""


class NotSquare(RationalLinAlgError, ValueError):
    """Inverse or determinant requested for a non-square matrix."""


class DivisionByZero(RationalLinAlgError, ZeroDivisionError):
    """Non-zero value divided by zero."""


class Undefined(RationalLinAlgError, ZeroDivisionError):
    """The indeterminate form 0/0."""


class InvalidFormat(RationalLinAlgError, ValueError):
    """Scalar text is not ``<int>`` or ``<int>/<int>``."""


class InvalidForm(RationalLinAlgError, ValueError):
    """Matrix violates the preconditions of elimination."""


class Unsolvable(RationalLinAlgError, ValueError):
    """No usable pivot exists even after row reordering."""
