# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .matrix import as_matrix, augment
from .rational import format_rational
from .utils import ONE, ZERO

logger = logging.getLogger(__name__)


class StepKind(Enum):
    START = "start"
    SWAP = "swap"
    SCALE = "scale"
    ELIMINATE = "eliminate"
    COMPLETE = "complete"
    SINGULAR = "singular"


@dataclass(frozen=True, eq=False)
class ReductionStep:
    """
    One snapshot in a row reduction.

    Attributes
    ----------
    matrix : np.ndarray
        Read-only copy of the matrix after this operation.
    kind : StepKind
    operation : str
        Compact label: ``P12`` (swap rows 1, 2), ``M1(1/2)`` (scale row 1
        by 1/2), ``E21(-2)`` (add -2 times row 1 to row 2), ``Start``,
        ``Result`` or ``Singular``.
    description : str
        Sentence explaining the operation.
    is_final : bool
        True only for the terminal COMPLETE / SINGULAR step.
    """

    matrix: np.ndarray
    kind: StepKind
    operation: str
    description: str
    is_final: bool = False


@dataclass(frozen=True, eq=False)
class RREFResult:
    steps: List[ReductionStep]
    rref: np.ndarray
    pivots: List[int]

    @property
    def rank(self) -> int:
        return len(self.pivots)

    @property
    def free(self) -> List[int]:
        pivot_set = set(self.pivots)
        return [j for j in range(self.rref.shape[1]) if j not in pivot_set]


@dataclass(frozen=True)
class RankNullity:
    rank: int
    nullity: int
    rows: int
    cols: int

    @property
    def holds(self) -> bool:
        """The rank-nullity theorem: rank + nullity == number of columns."""
        return self.rank + self.nullity == self.cols

    @property
    def dimensions(self) -> str:
        return f"{self.rows} × {self.cols}"

    @property
    def theorem_check(self) -> str:
        return f"{self.rank} + {self.nullity} = {self.cols}"


# Sentence templates for the row-operation steps. Fields: ``row`` (pivot
# row), ``other`` (row swapped in), ``col`` (pivot column), ``target`` (row
# being cleared), ``pivot`` (entry before scaling), ``value`` (entry being
# cleared) and ``scalar``. Rows and columns are 1-based.
RREF_DESCRIPTIONS: Dict[StepKind, str] = {
    StepKind.SWAP: (
        "Swap Row {row} and Row {other} to bring a non-zero pivot to the "
        "current position."
    ),
    StepKind.SCALE: "Scale Row {row} by {scalar} to make the pivot element 1.",
    StepKind.ELIMINATE: (
        "Add {scalar} times Row {row} to Row {target} to eliminate the value "
        "in the pivot column."
    ),
}


def _snapshot(
    R: np.ndarray,
    kind: StepKind,
    operation: str,
    description: str,
    is_final: bool = False,
) -> ReductionStep:
    M = R.copy()
    M.flags.writeable = False
    return ReductionStep(M, kind, operation, description, is_final)


def gauss_jordan(
    A,
    stop_col: Optional[int] = None,
    record_steps: bool = True,
    start_description: str = "Initial Matrix",
    complete_description: str = "The matrix is in reduced row-echelon form.",
    descriptions: Optional[Dict[StepKind, str]] = None,
) -> Tuple[List[ReductionStep], np.ndarray, List[int], bool]:
    """
    Gauss-Jordan elimination to reduced row-echelon form in exact arithmetic.

    Columns are processed left to right. The pivot is the topmost non-zero
    entry at or below the current pivot row (exact arithmetic has no
    round-off, so there is no magnitude-based pivoting). The pivot row is
    scaled to a leading 1 and the column is cleared above and below it in
    the same pass.

    Parameters
    ----------
    A : (m, n) matrix-like
        Not modified.
    stop_col : int | None
        For augmented systems ``[A | B]``: the width of the ``A`` block. A
        column left of `stop_col` without a pivot means ``A`` is singular,
        and the reduction halts there with a SINGULAR step.
    record_steps : bool
        If False only the START and terminal steps are kept.
    start_description : str
        Description attached to the START step.
    complete_description : str
        Description attached to the COMPLETE step.
    descriptions : dict[StepKind, str] | None
        Templates for SWAP / SCALE / ELIMINATE steps, overriding the
        entries of `RREF_DESCRIPTIONS`.

    Returns
    -------
    steps    : list[ReductionStep]
        START, one entry per row operation, then COMPLETE or SINGULAR.
    R        : (m, n) ndarray
        Final matrix (the RREF unless the reduction halted as singular).
    pivots   : list[int]
        Pivot column indices, strictly increasing.
    singular : bool
    """
    R = as_matrix(A)
    m, n = R.shape
    templates = {**RREF_DESCRIPTIONS, **(descriptions or {})}
    steps = [_snapshot(R, StepKind.START, "Start", start_description)]

    def record(kind, operation, **fields):
        description = templates[kind].format(**fields)
        if record_steps:
            steps.append(_snapshot(R, kind, operation, description))
        logger.debug(f"{operation}: {description}")

    pivots: List[int] = []
    singular = False
    row = 0
    for col in range(n):
        if row == m:
            break

        pivot_row = next((r for r in range(row, m) if R[r, col] != ZERO), None)
        if pivot_row is None:
            if stop_col is not None and col < stop_col:
                logger.debug(f"no pivot in column {col + 1}; matrix is singular")
                singular = True
                break
            continue  # free column

        if pivot_row != row:
            R[[row, pivot_row]] = R[[pivot_row, row]]
            record(
                StepKind.SWAP,
                f"P{row + 1}{pivot_row + 1}",
                row=row + 1,
                other=pivot_row + 1,
                col=col + 1,
            )

        lead = R[row, col]
        if lead != ONE:
            scalar = ONE / lead
            R[row] = R[row] * scalar
            s = format_rational(scalar)
            record(
                StepKind.SCALE,
                f"M{row + 1}({s})",
                row=row + 1,
                col=col + 1,
                pivot=format_rational(lead),
                scalar=s,
            )

        # Clear the pivot column above and below the pivot
        for i in range(m):
            if i == row or R[i, col] == ZERO:
                continue
            value = R[i, col]
            scalar = -value
            R[i] = R[i] + R[row] * scalar
            s = format_rational(scalar)
            record(
                StepKind.ELIMINATE,
                f"E{i + 1}{row + 1}({s})",
                row=row + 1,
                target=i + 1,
                col=col + 1,
                value=format_rational(value),
                scalar=s,
            )

        pivots.append(col)
        row += 1

    if singular:
        steps.append(
            _snapshot(
                R,
                StepKind.SINGULAR,
                "Singular",
                "The matrix could not be reduced to Identity. "
                "It is Singular (non-invertible).",
                is_final=True,
            )
        )
    else:
        steps.append(
            _snapshot(
                R,
                StepKind.COMPLETE,
                "Result",
                complete_description,
                is_final=True,
            )
        )
    return steps, R, pivots, singular


def reduce_to_rref(A, record_steps: bool = True) -> RREFResult:
    """
    Reduce A to RREF and keep every intermediate matrix.

    The first step is the unreduced input, the last is the RREF. Every
    leading entry is exactly 1, every other entry of a pivot column is
    exactly 0 and zero rows sit at the bottom.
    """
    steps, R, pivots, _ = gauss_jordan(A, record_steps=record_steps)
    R.flags.writeable = False
    return RREFResult(steps=steps, rref=R, pivots=pivots)


def rref(A) -> Tuple[np.ndarray, List[int]]:
    """
    Return the reduced row-echelon form R of A and the
    pivot column list. R has the same shape as A.
    """
    _steps, R, pivots, _ = gauss_jordan(A, record_steps=False)
    return R, pivots


def forward_eliminate(
    A,
    b=None,
) -> Tuple[np.ndarray, Optional[np.ndarray], List[int], List[int], List[int]]:
    """
    Exact row-echelon reduction (not reduced) of an m by n matrix A.

    Parameters
    ----------
    A : (m, n) matrix-like
    b : (m,) or (m, k) matrix-like | None
        Optional right-hand side; same row swaps & updates applied.

    Returns
    -------
    U      : (m, n) ndarray
        Row-echelon form of A (upper-trapezoidal, pivots not scaled).
    c      : (m, k) ndarray | None
        b after identical row ops (None if b was None).
    pivots : list[int]
        Column indices where pivots were placed; len = rank(A).
    free   : list[int]
        Column indices of the free variables.
    perm   : list[int]
        Final row order: row i of U comes from original row perm[i].
    """
    U = as_matrix(A)
    m, n = U.shape
    c = None
    if b is not None:
        c = augment(np.empty((m, 0), dtype=object), b)

    perm = list(range(m))
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        pivot_row = next((r for r in range(row, m) if U[r, col] != ZERO), None)
        if pivot_row is None:
            free.append(col)
            continue

        if pivot_row != row:
            U[[row, pivot_row]] = U[[pivot_row, row]]
            if c is not None:
                c[[row, pivot_row]] = c[[pivot_row, row]]
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        # Eliminate entries below the pivot
        for r in range(row + 1, m):
            if U[r, col] == ZERO:
                continue
            factor = U[r, col] / U[row, col]
            U[r, col:] = U[r, col:] - U[row, col:] * factor
            if c is not None:
                c[r] = c[r] - c[row] * factor

        row += 1

    return U, c, pivots, free, perm


def pivot_indices(R) -> List[int]:
    """
    Leading-entry columns of R, one per non-zero row, in row order.

    For a matrix in RREF the list is strictly increasing. Rows that are not
    in echelon order are reported as found, e.g. ``[[0, 1], [1, 0]]`` gives
    ``[1, 0]``.
    """
    R = np.asarray(R, dtype=object)
    pivots: List[int] = []
    for row in R:
        for j, x in enumerate(row):
            if x != ZERO:
                pivots.append(j)
                break
    return pivots


def rank_elimination(A) -> int:
    """Matrix rank is the number of pivot columns"""
    pivots = forward_eliminate(A)[2]
    return len(pivots)


def nullity(A) -> int:
    A = as_matrix(A)
    return A.shape[1] - rank_elimination(A)


def rank_nullity(A) -> RankNullity:
    """Rank, nullity and shape of A, from its RREF."""
    A = as_matrix(A)
    m, n = A.shape
    rank = len(rref(A)[1])
    return RankNullity(rank=rank, nullity=n - rank, rows=m, cols=n)
