# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
The four fundamental subspaces

Column and row space bases are columns of the *original* matrix (or of its
transpose) picked at pivot positions; the RREF only says which columns to
keep. Null and left null space bases are built from the RREF, one vector
per free variable.

Row space and left null space come from a second, independent reduction of
the transpose. Pivot lists of A and of A^T are never mixed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from .elimination import RREFResult, reduce_to_rref
from .matrix import as_matrix, column, transpose
from .utils import ONE, ZERO, DimensionError

logger = logging.getLogger(__name__)


def _check_pivots(pivots: Sequence[int], rows: int, cols: int) -> List[int]:
    pivots = list(pivots)
    if any(b <= a for a, b in zip(pivots, pivots[1:])):
        raise ValueError(f"pivots must be strictly increasing, got {pivots}")
    if pivots and (pivots[0] < 0 or pivots[-1] >= cols):
        raise ValueError(f"pivot index out of range for {cols} columns: {pivots}")
    if len(pivots) > rows:
        raise ValueError(f"{len(pivots)} pivots cannot fit in {rows} rows")
    return pivots


def column_space_basis(original, pivots: Sequence[int]) -> List[np.ndarray]:
    """
    Basis of C(A): the columns of the original A at the pivot indices.

    An empty pivot list gives an empty basis, i.e. the zero subspace {0}.
    """
    A = as_matrix(original)
    pivots = _check_pivots(pivots, *A.shape)
    return [column(A, j) for j in pivots]


def null_space_basis(rref, pivots: Sequence[int], total_cols: int) -> List[np.ndarray]:
    """
    Basis of N(A) from RREF(A), ordered by free column index.

    For each free column f the vector has a 1 in slot f, 0 in the other
    free slots, and -RREF[p, f] in the slot of the pivot column of row p.
    No free columns means N(A) = {0} and the basis is empty.
    """
    R = as_matrix(rref)
    if R.shape[0] and R.shape[1] != total_cols:
        raise DimensionError(
            f"rref has {R.shape[1]} columns, expected {total_cols}"
        )
    pivots = _check_pivots(pivots, R.shape[0], total_cols)
    pivot_set = set(pivots)
    free = [j for j in range(total_cols) if j not in pivot_set]

    basis: List[np.ndarray] = []
    for f in free:
        v = np.full(total_cols, ZERO, dtype=object)
        v[f] = ONE
        for row, col in enumerate(pivots):
            v[col] = -R[row, f]
        basis.append(v)
    return basis


def row_space_basis(original) -> List[np.ndarray]:
    """
    Basis of R(A) = C(A^T): reduce A^T on its own and keep the columns of
    A^T (rows of A) at A^T's pivots.
    """
    AT = transpose(original)
    pivots_t = reduce_to_rref(AT, record_steps=False).pivots
    return column_space_basis(AT, pivots_t)


def left_null_space_basis(original) -> List[np.ndarray]:
    """Basis of N(A^T), the null space rule applied to RREF(A^T)."""
    AT = transpose(original)
    res_t = reduce_to_rref(AT, record_steps=False)
    return null_space_basis(res_t.rref, res_t.pivots, AT.shape[1])


def rref_row_space_basis(rref) -> List[np.ndarray]:
    """Alternative basis of R(A): the non-zero rows of RREF(A)."""
    R = as_matrix(rref)
    return [R[i].copy() for i in range(R.shape[0]) if any(x != ZERO for x in R[i])]


@dataclass(frozen=True, eq=False)
class FundamentalSubspaces:
    original: np.ndarray
    reduction: RREFResult
    transpose_reduction: RREFResult
    column_space: List[np.ndarray]
    null_space: List[np.ndarray]
    row_space: List[np.ndarray]
    left_null_space: List[np.ndarray]

    @property
    def rank(self) -> int:
        return self.reduction.rank

    @property
    def explanations(self) -> Dict[str, str]:
        m, n = self.original.shape
        pivot_cols = ", ".join(f"Col {j + 1}" for j in self.reduction.pivots)
        free_count = n - self.rank
        if free_count > 0:
            null_text = (
                f"There are {free_count} free variables. We find the basis "
                "vectors by setting each free variable to 1 (and others to 0) "
                "and solving for the pivot variables using the equations "
                "from RREF."
            )
        else:
            null_text = (
                "There are no free variables. The only solution to Ax=0 is "
                "the zero vector."
            )
        return {
            "column_space": (
                f"The RREF of A has pivot columns at indices: {pivot_cols}. "
                "Therefore, the corresponding columns of the original matrix "
                "A form the basis for C(A)."
                if self.rank
                else "A has no pivot columns, so C(A) = {0}."
            ),
            "null_space": null_text,
            "row_space": (
                "The row space of A is the column space of A^T. We reduce "
                "A^T separately and keep the columns of A^T (rows of A) at "
                "its pivot positions."
            ),
            "left_null_space": (
                "The left null space is the null space of A^T. We compute "
                "RREF(A^T) and find the basis for N(A^T) using the same "
                "method as for the null space."
            ),
        }


def fundamental_subspaces(A) -> FundamentalSubspaces:
    """Reduce A and A^T independently and extract all four bases."""
    A = as_matrix(A)
    AT = transpose(A)
    res = reduce_to_rref(A)
    res_t = reduce_to_rref(AT)
    logger.debug(f"rank {res.rank}, pivots {res.pivots}, transpose pivots {res_t.pivots}")
    return FundamentalSubspaces(
        original=A,
        reduction=res,
        transpose_reduction=res_t,
        column_space=column_space_basis(A, res.pivots),
        null_space=null_space_basis(res.rref, res.pivots, A.shape[1]),
        row_space=column_space_basis(AT, res_t.pivots),
        left_null_space=null_space_basis(res_t.rref, res_t.pivots, AT.shape[1]),
    )
