# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Named matrix storage for expression evaluators.

An evaluator for text such as ``A*B+C^2`` refers to its inputs by single
uppercase letters and keeps every intermediate product under a generated
name (``TEMP0``, ``TEMP1``, ...).  `Workspace` holds both and runs the
engine operations on them; parsing the text is left to the caller.
"""

import logging
import re
import string
from typing import Dict, Mapping, Sequence, Union

from .fraction import Fraction
from .matrix import Matrix
from .matrix_functions import add, multiply, power, scale, subtract

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Z]$")
TEMP_PREFIX = "TEMP"

OPERATIONS = {
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "scale": scale,
    "power": power,
}

Operand = Union[str, Matrix, int, Fraction]


class Workspace:
    """
    Parameters
    ----------
    matrices : sequence or mapping of Matrix
        A sequence is registered as ``A``, ``B``, ... in order; a mapping
        must be keyed by single uppercase letters.
    """

    def __init__(self, matrices: Union[Sequence[Matrix], Mapping[str, Matrix]] = ()):
        self._matrices: Dict[str, Matrix] = {}
        self._temporaries: Dict[str, Matrix] = {}
        self._next = 0

        if isinstance(matrices, Mapping):
            items = matrices.items()
        else:
            if len(matrices) > len(string.ascii_uppercase):
                raise ValueError("at most 26 matrices can be registered")
            items = zip(string.ascii_uppercase, matrices)
        for name, matrix in items:
            self.register(name, matrix)

    def register(self, name: str, matrix: Matrix) -> None:
        if not _IDENTIFIER_RE.match(name):
            raise ValueError(f"identifier must be a single uppercase letter, got {name!r}")
        if not isinstance(matrix, Matrix):
            raise TypeError(f"expected Matrix for {name}, got {type(matrix).__name__}")
        self._matrices[name] = matrix

    def lookup(self, name: str) -> Matrix:
        """Temporaries shadow registered identifiers."""
        if name in self._temporaries:
            return self._temporaries[name]
        if name in self._matrices:
            return self._matrices[name]
        raise KeyError(name)

    def __getitem__(self, name: str) -> Matrix:
        return self.lookup(name)

    def __contains__(self, name: str) -> bool:
        return name in self._temporaries or name in self._matrices

    @property
    def identifiers(self) -> Sequence[str]:
        return tuple(self._matrices)

    @property
    def temporaries(self) -> Sequence[str]:
        return tuple(self._temporaries)

    def store(self, matrix: Matrix) -> str:
        """Save an intermediate result and return its generated name."""
        name = f"{TEMP_PREFIX}{self._next}"
        self._next += 1
        self._temporaries[name] = matrix
        return name

    def clear_temporaries(self) -> None:
        self._temporaries.clear()
        self._next = 0

    def _resolve(self, operand: Operand):
        if isinstance(operand, str):
            return self.lookup(operand)
        return operand

    def apply(self, op: str, *operands: Operand) -> str:
        """
        Run one engine operation and store its result.

        Operands may be names, matrices, or plain scalars (the factor of
        ``scale`` and the exponent of ``power``).  ``scale`` accepts the
        factor on either side, as in ``2*A`` and ``A*2``.

        Returns
        -------
        name : str
            Generated name of the stored result.
        """
        try:
            func = OPERATIONS[op]
        except KeyError:
            raise ValueError(f"unknown operation {op!r}") from None

        args = [self._resolve(o) for o in operands]
        if op == "scale" and len(args) == 2 and not isinstance(args[0], Matrix):
            args.reverse()

        result = func(*args)
        name = self.store(result)
        logger.debug("%s%s -> %s", op, tuple(operands), name)
        return name
