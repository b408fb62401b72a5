# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from fractions import Fraction

from exactlinalg.elimination import reduce_to_rref
from exactlinalg.formatting import (
    basis_to_latex,
    format_basis,
    format_matrix,
    format_step,
    format_vector,
    matrix_to_latex,
    rational_to_latex,
    vector_to_latex,
)
from exactlinalg.matrix import as_matrix, as_vector


def test_rational_to_latex():
    assert rational_to_latex(Fraction(3)) == "3"
    assert rational_to_latex(Fraction(-1, 2)) == "-\\frac{1}{2}"
    assert rational_to_latex(Fraction(5, 3)) == "\\frac{5}{3}"


def test_plain_text():
    assert format_vector(as_vector([1, "-1/2"])) == "[1, -1/2]"
    assert format_matrix(as_matrix([[1, "-1/2"], [10, 3]])) == "[ 1  -1/2]\n[10     3]"
    assert format_matrix(as_matrix([])) == "[]"
    assert format_basis([]) == "{0}"
    assert format_basis([as_vector([1, 0]), as_vector([0, 1])]) == "{[1, 0], [0, 1]}"


def test_latex():
    A = as_matrix([[1, "-1/2"], [0, 3]])
    assert matrix_to_latex(A) == (
        "\\begin{bmatrix} 1 & -\\frac{1}{2} \\\\ 0 & 3 \\end{bmatrix}"
    )
    assert vector_to_latex(as_vector([2, -1])) == "\\begin{bmatrix} 2 \\\\ -1 \\end{bmatrix}"
    assert basis_to_latex([]) == "\\{\\mathbf{0}\\}"
    assert basis_to_latex([as_vector([1])]) == (
        "\\left\\{ \\begin{bmatrix} 1 \\end{bmatrix} \\right\\}"
    )


def test_format_step():
    step = reduce_to_rref([[1, 2], [2, 3]]).steps[1]
    assert format_step(step) == (
        "E21(-2): Add -2 times Row 1 to Row 2 to eliminate the value in the "
        "pivot column."
    )
