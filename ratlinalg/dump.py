# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Plain-text dump format used for debugging.

One matrix row per line, entries separated by a space, and a blank line
after every matrix, e.g.::

    1 1/2
    0 -3

    7

"""

from typing import Iterable, List, TextIO

from .matrix import Matrix


def write_matrix(fp: TextIO, A: Matrix) -> None:
    for row in A.values:
        fp.write(" ".join(str(f) for f in row))
        fp.write("\n")
    fp.write("\n")


def write_matrices(fp: TextIO, matrices: Iterable[Matrix]) -> None:
    for A in matrices:
        write_matrix(fp, A)


def read_matrices(fp: TextIO) -> List[Matrix]:
    """
    Parse every matrix in a dump stream.

    Raises
    ------
    InvalidFormat : a cell is not ``<int>`` or ``<int>/<int>``.
    DimensionMismatch : rows of one matrix differ in length.
    """
    matrices: List[Matrix] = []
    block: List[List[str]] = []
    for line in fp:
        cells = line.split()
        if cells:
            block.append(cells)
        elif block:
            matrices.append(Matrix(block))
            block = []
    if block:
        matrices.append(Matrix(block))
    return matrices
