# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Display helpers: plain text and LaTeX renderings of exact values.

Nothing in the computational modules depends on this one.
"""

from fractions import Fraction
from typing import Sequence

import numpy as np

from .elimination import ReductionStep
from .rational import format_rational


def rational_to_latex(q: Fraction) -> str:
    """3 -> "3", -1/2 -> "-\\frac{1}{2}" """
    if q.denominator == 1:
        return str(q.numerator)
    sign = "-" if q < 0 else ""
    return f"{sign}\\frac{{{abs(q.numerator)}}}{{{q.denominator}}}"


def format_vector(v) -> str:
    return "[" + ", ".join(format_rational(x) for x in v) + "]"


def format_matrix(A) -> str:
    """Rows on separate lines, entries right-aligned per column."""
    A = np.asarray(A, dtype=object)
    if A.ndim != 2 or A.shape[0] == 0:
        return "[]"
    cells = [[format_rational(x) for x in row] for row in A]
    widths = [max((len(row[j]) for row in cells), default=0) for j in range(A.shape[1])]
    lines = ["[" + "  ".join(c.rjust(w) for c, w in zip(row, widths)) + "]" for row in cells]
    return "\n".join(lines)


def format_basis(basis: Sequence) -> str:
    """Render as "{[1, 0], [0, 1]}", or "{0}" for the zero subspace."""
    if not basis:
        return "{0}"
    return "{" + ", ".join(format_vector(v) for v in basis) + "}"


def vector_to_latex(v) -> str:
    body = " \\\\ ".join(rational_to_latex(x) for x in v)
    return f"\\begin{{bmatrix}} {body} \\end{{bmatrix}}"


def matrix_to_latex(A) -> str:
    A = np.asarray(A, dtype=object)
    rows = [" & ".join(rational_to_latex(x) for x in row) for row in A]
    return "\\begin{bmatrix} " + " \\\\ ".join(rows) + " \\end{bmatrix}"


def basis_to_latex(basis: Sequence) -> str:
    if not basis:
        return "\\{\\mathbf{0}\\}"
    return "\\left\\{ " + ", ".join(vector_to_latex(v) for v in basis) + " \\right\\}"


def format_step(step: ReductionStep) -> str:
    return f"{step.operation}: {step.description}"
