# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Linear systems A x = b
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .elimination import ReductionStep, gauss_jordan
from .matrix import as_matrix, as_vector, augment
from .subspaces import null_space_basis
from .utils import ZERO, DimensionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class LinearSystemSolution:
    """
    Attributes
    ----------
    consistent : bool
        False when RREF([A | b]) has a row [0 ... 0 | nonzero].
    particular : np.ndarray | None
        One solution, with every free variable set to 0. None if inconsistent.
    null_basis : list[np.ndarray]
        Basis of N(A); the general solution is particular + span(null_basis).
        Empty when inconsistent.
    pivots : list[int]
        Pivot columns of A (the augmented column is never listed).
    steps : list[ReductionStep]
        Reduction of the augmented matrix.
    """

    consistent: bool
    particular: Optional[np.ndarray]
    null_basis: List[np.ndarray]
    pivots: List[int]
    steps: List[ReductionStep]

    @property
    def unique(self) -> bool:
        return self.consistent and not self.null_basis


def solve(A, b, record_steps: bool = True) -> LinearSystemSolution:
    """
    Solve A x = b exactly by reducing [A | b] and back-substituting through
    every pivot and free column.

    Parameters
    ----------
    A : (m, n) matrix-like
    b : (m,) vector-like
    """
    A = as_matrix(A)
    b = as_vector(b)
    m, n = A.shape
    if b.shape[0] != m:
        raise DimensionError(f"b has length {b.shape[0]}, expected {m}")

    steps, R, pivots, _ = gauss_jordan(
        augment(A, b),
        record_steps=record_steps,
        start_description="Form the augmented matrix [A | b].",
    )

    if n in pivots:
        logger.debug("solve(): pivot in the augmented column, no solution")
        return LinearSystemSolution(
            consistent=False,
            particular=None,
            null_basis=[],
            pivots=[p for p in pivots if p != n],
            steps=steps,
        )

    x = np.full(n, ZERO, dtype=object)
    for row, col in enumerate(pivots):
        x[col] = R[row, n]

    return LinearSystemSolution(
        consistent=True,
        particular=x,
        null_basis=null_space_basis(R[:, :n], pivots, n),
        pivots=pivots,
        steps=steps,
    )
