# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import pytest

from ratlinalg.errors import DimensionMismatch
from ratlinalg.matrix import Matrix
from ratlinalg.workspace import Workspace

A = Matrix([[1, 2], [3, 4]])
B = Matrix([[0, 1], [1, 0]])
C = Matrix([[2, 0], [0, 2]])


def test_sequence_registers_letters_in_order():
    ws = Workspace([A, B, C])
    assert ws.identifiers == ("A", "B", "C")
    assert ws.lookup("B") is B
    assert "C" in ws and "D" not in ws
    with pytest.raises(KeyError):
        ws.lookup("D")


def test_mapping_and_register_validate_names():
    ws = Workspace({"X": A})
    assert ws["X"] is A
    with pytest.raises(ValueError):
        Workspace({"AB": A})
    with pytest.raises(ValueError):
        ws.register("a", A)
    with pytest.raises(TypeError):
        ws.register("Y", [[1]])
    with pytest.raises(ValueError):
        Workspace([A] * 27)


def test_store_generates_temporary_names():
    ws = Workspace([A])
    assert ws.store(B) == "TEMP0"
    assert ws.store(C) == "TEMP1"
    assert ws.temporaries == ("TEMP0", "TEMP1")
    assert ws.lookup("TEMP1") is C
    ws.clear_temporaries()
    assert ws.temporaries == ()
    assert ws.store(A) == "TEMP0"


def test_apply_chains_intermediate_results():
    # A*B + C^2
    ws = Workspace([A, B, C])
    product = ws.apply("multiply", "A", "B")
    square = ws.apply("power", "C", 2)
    total = ws.apply("add", product, square)
    assert (product, square, total) == ("TEMP0", "TEMP1", "TEMP2")
    assert ws.lookup(total) == Matrix([[6, 1], [4, 7]])


def test_apply_scale_either_side():
    ws = Workspace([A])
    left = ws.apply("scale", 3, "A")
    right = ws.apply("scale", "A", 3)
    assert ws[left] == ws[right] == Matrix([[3, 6], [9, 12]])


def test_apply_subtract_and_matrix_operands():
    ws = Workspace([A])
    name = ws.apply("subtract", "A", B)
    assert ws[name] == Matrix([[1, 1], [2, 4]])


def test_apply_errors():
    ws = Workspace([A, Matrix([[1, 2, 3]])])
    with pytest.raises(ValueError, match="unknown operation"):
        ws.apply("divide", "A", "B")
    with pytest.raises(DimensionMismatch):
        ws.apply("add", "A", "B")
    assert ws.temporaries == ()
