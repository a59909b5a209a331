# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exact rational scalars.

A `Fraction` is always stored in lowest terms with a positive
denominator, and zero is always ``0/1``.  Because of that, two values are
equal exactly when their stored pairs are equal and no normalisation is
needed when comparing.
"""

import functools
import math
import numbers
import re
from typing import Optional

from .errors import DivisionByZero, InvalidFormat, Undefined

_FRACTION_RE = re.compile(r"^\s*(-?\d+)\s*(?:/\s*(-?\d+)\s*)?$")


@functools.total_ordering
class Fraction:
    """
    Immutable, normalised fraction ``numerator / denominator``.

    Parameters
    ----------
    numerator : int
    denominator : int, default 1

    Raises
    ------
    Undefined : both parts are zero.
    DivisionByZero : only the denominator is zero.
    """

    __slots__ = ("_numerator", "_denominator", "_hash")

    def __init__(self, numerator: int = 0, denominator: int = 1):
        numerator = _as_int(numerator)
        denominator = _as_int(denominator)
        if denominator == 0:
            if numerator == 0:
                raise Undefined("0/0 is undefined")
            raise DivisionByZero(f"{numerator}/0: division by zero")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        # gcd(0, d) == d, so zero collapses to 0/1 here as well
        g = math.gcd(numerator, denominator)
        self._numerator = numerator // g
        self._denominator = denominator // g
        self._hash: Optional[int] = None

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_integer(self) -> bool:
        return self._denominator == 1

    # ------------------------------------------------------------------
    # text
    # ------------------------------------------------------------------
    @classmethod
    def parse(cls, text: str) -> "Fraction":
        """Parse ``"<int>"`` or ``"<int>/<int>"``."""
        if not isinstance(text, str):
            raise InvalidFormat(f"expected text, got {type(text).__name__}")
        match = _FRACTION_RE.match(text)
        if match is None:
            raise InvalidFormat(f"inconvertible string: {text!r}")
        num, den = match.groups()
        return cls(int(num), int(den) if den is not None else 1)

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._numerator}, {self._denominator})"

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------
    def add(self, other: "Fraction") -> "Fraction":
        return Fraction(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, other: "Fraction") -> "Fraction":
        return Fraction(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: "Fraction") -> "Fraction":
        return Fraction(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def divide(self, other: "Fraction") -> "Fraction":
        return self.multiply(Fraction.reciprocal(other))

    @staticmethod
    def reciprocal(f: "Fraction") -> "Fraction":
        if f._numerator == 0:
            raise DivisionByZero("reciprocal of zero")
        return Fraction(f._denominator, f._numerator)

    def compare(self, other: "Fraction") -> int:
        """Negative, zero or positive as self is <, == or > other."""
        return self._numerator * other._denominator - other._numerator * self._denominator

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.subtract(other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.subtract(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.divide(other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.divide(self)

    def __neg__(self) -> "Fraction":
        return Fraction(-self._numerator, self._denominator)

    def __pos__(self) -> "Fraction":
        return self

    def __abs__(self) -> "Fraction":
        return Fraction(abs(self._numerator), self._denominator)

    # ------------------------------------------------------------------
    # comparison / hashing / conversion
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if isinstance(other, Fraction):
            return (
                self._numerator == other._numerator
                and self._denominator == other._denominator
            )
        if isinstance(other, numbers.Integral):
            return self._denominator == 1 and self._numerator == int(other)
        return NotImplemented

    def __lt__(self, other) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.compare(other) < 0

    def __hash__(self) -> int:
        if self._hash is None:
            # whole values hash like the int they equal
            if self._denominator == 1:
                self._hash = hash(self._numerator)
            else:
                self._hash = hash((self._numerator, self._denominator))
        return self._hash

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __int__(self) -> int:
        # truncate toward zero
        q = abs(self._numerator) // self._denominator
        return q if self._numerator >= 0 else -q

    def __reduce__(self):
        return (Fraction, (self._numerator, self._denominator))


def _as_int(value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return int(value)


def _coerce(value):
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return Fraction(int(value))
    return NotImplemented


def as_fraction(value) -> Fraction:
    """Convert an int, NumPy integer, text or Fraction to a Fraction."""
    if isinstance(value, str):
        return Fraction.parse(value)
    coerced = _coerce(value)
    if coerced is NotImplemented:
        raise TypeError(f"cannot convert {type(value).__name__} to Fraction")
    return coerced


ZERO = Fraction(0)
ONE = Fraction(1)
