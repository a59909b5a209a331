# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import pickle
import threading

import numpy as np
import pytest

from ratlinalg import elimination
from ratlinalg.errors import DimensionMismatch, InvalidFormat, NotSquare
from ratlinalg.fraction import Fraction
from ratlinalg.matrix import Matrix


def test_construct_from_mixed_cells():
    A = Matrix([[1, "1/2"], [Fraction(-2, 4), np.int64(3)]])
    assert A.shape == (2, 2)
    assert A.rows == 2 and A.columns == 2
    assert A.is_square
    assert A[0, 1] == Fraction(1, 2)
    assert A[1, 0] == Fraction(-1, 2)
    assert A.tolist() == [[1, Fraction(1, 2)], [Fraction(-1, 2), 3]]


def test_construct_from_ndarray():
    A = Matrix(np.arange(6).reshape(2, 3))
    assert A.shape == (2, 3)
    assert not A.is_square
    assert A[1, 2] == 5


@pytest.mark.parametrize(
    "values",
    [
        [[1, 2], [3]],
        [],
        [[]],
        ["12", "34"],
        [1, 2, 3],
        np.arange(3),
        np.zeros((2, 2, 2), dtype=int),
    ],
)
def test_ragged_or_empty_rejected(values):
    with pytest.raises(DimensionMismatch):
        Matrix(values)


def test_bad_cell_text_rejected():
    with pytest.raises(InvalidFormat):
        Matrix([["1", "x"]])


def test_cells_are_read_only():
    A = Matrix([[1, 2], [3, 4]])
    with pytest.raises(ValueError):
        A.values[0, 0] = Fraction(9)
    with pytest.raises(ValueError):
        A.row(1)[0] = Fraction(9)


def test_values_flag_cannot_be_reenabled():
    A = Matrix([[1, 2], [3, 4]])
    A.inverse()
    with pytest.raises(ValueError):
        A.values.flags.writeable = True
    with pytest.raises(ValueError):
        A.row(0).flags.writeable = True
    assert A[0, 0] == 1
    assert A.inverse() == Matrix([[-2, 1], ["3/2", "-1/2"]])


def test_clone_is_independent_copy():
    A = Matrix([[1, 2], [3, 4]])
    B = A.clone()
    assert A == B
    assert B.values is not A.values
    assert B.values.flags.writeable is False


def test_zeros_identity():
    Z = Matrix.zeros(2, 3)
    assert Z.shape == (2, 3)
    assert all(cell == 0 for cell in Z.values.flat)
    assert Matrix.identity(3) == Matrix([[1, 0, 0], [0, 1, 0], [0, 0, 1]])


def test_generate_bounds_and_seed():
    A = Matrix.generate(4, 5, low=-3, high=3, seed=7)
    assert A.shape == (4, 5)
    assert all(-3 <= cell <= 3 and cell.is_integer() for cell in A.values.flat)
    assert A == Matrix.generate(4, 5, low=-3, high=3, seed=7)
    with pytest.raises(ValueError):
        Matrix.generate(2, 2, low=5, high=1)


def test_rendering():
    A = Matrix([[1, "1/2"], ["-3", 0]])
    assert str(A) == "1 1/2\n-3 0"
    assert A.to_html() == "<html>1 1/2<br/>-3 0</html>"
    assert repr(A) == "Matrix([['1', '1/2'], ['-3', '0']])"
    assert eval(repr(A), {"Matrix": Matrix}) == A


def test_equality_and_hash():
    A = Matrix([[1, "2/4"]])
    B = Matrix([[1, "1/2"]])
    assert A == B
    assert hash(A) == hash(B)
    assert A != Matrix([[1, "1/2"], [0, 0]])
    assert A != Matrix([[1, "1/3"]])


def test_operators():
    A = Matrix([[1, 2], [3, 4]])
    B = Matrix([[0, 1], [1, 0]])
    assert A + B == Matrix([[1, 3], [4, 4]])
    assert A - B == Matrix([[1, 1], [2, 4]])
    assert A @ B == Matrix([[2, 1], [4, 3]])
    assert 2 * A == Matrix([[2, 4], [6, 8]])
    assert A * Fraction(1, 2) == Matrix([["1/2", 1], ["3/2", 2]])
    assert -A == Matrix([[-1, -2], [-3, -4]])
    assert A**2 == Matrix([[7, 10], [15, 22]])
    with pytest.raises(TypeError):
        A * B


def test_inverse_not_square():
    with pytest.raises(NotSquare):
        Matrix([[1, 2, 3], [4, 5, 6]]).inverse()


def test_inverse_is_cached(monkeypatch):
    calls = []
    real = elimination.inverse

    def counting(A):
        calls.append(A)
        return real(A)

    monkeypatch.setattr(elimination, "inverse", counting)
    A = Matrix([[2, 1], [1, 1]])
    first = A.inverse()
    second = A.inverse()
    assert first is second
    assert len(calls) == 1
    # a clone starts without the cache
    assert A.clone().inverse() == first
    assert len(calls) == 2


def test_inverse_cache_logs_fill_and_hit(caplog):
    A = Matrix([[2, 1], [1, 1]])
    with caplog.at_level(logging.DEBUG, logger="ratlinalg.matrix"):
        A.inverse()
        A.inverse()
    messages = [r.getMessage() for r in caplog.records if r.name == "ratlinalg.matrix"]
    assert messages == [
        "cached inverse of 2x2 matrix",
        "inverse cache hit for 2x2 matrix",
    ]


def test_inverse_cache_under_threads(monkeypatch):
    calls = []
    real = elimination.inverse

    def counting(A):
        calls.append(A)
        return real(A)

    monkeypatch.setattr(elimination, "inverse", counting)
    A = Matrix([[4, 7, 2], [3, 6, 1], [2, 5, 3]])
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(A.inverse())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(r is results[0] for r in results)


def test_pickle_roundtrip():
    A = Matrix([[1, "1/3"], [-2, 5]])
    A.inverse()
    B = pickle.loads(pickle.dumps(A))
    assert B == A
