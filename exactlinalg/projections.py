# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Projection operations
"""

import logging

import numpy as np

from .elimination import rref
from .matrix import as_matrix, as_vector, matvec, multiply, transpose, zeros
from .matrix_functions import inverse
from .subspaces import column_space_basis
from .systems import solve

logger = logging.getLogger(__name__)


def _independent_columns(A: np.ndarray) -> np.ndarray:
    """Columns of A at its pivot positions, as an (m, r) matrix."""
    pivots = rref(A)[1]
    if len(pivots) < A.shape[1]:
        logger.debug(
            "The columns of A are not independent, using a column space basis"
        )
    basis = column_space_basis(A, pivots)
    if not basis:
        return np.empty((A.shape[0], 0), dtype=object)
    return np.column_stack(basis)


def projection_matrix(A) -> np.ndarray:
    """
    P = B (B^T B)^{-1} B^T where B holds a basis of C(A).

    P is symmetric, P @ P == P, and P b is the projection of b onto C(A).
    """
    A = as_matrix(A)
    m = A.shape[0]
    B = _independent_columns(A)
    if B.shape[1] == 0:
        return zeros(m, m)
    BT = transpose(B)
    # B has independent columns, so B^T B is invertible
    return multiply(multiply(B, inverse(multiply(BT, B))), BT)


def project_onto_colspace(A, b) -> np.ndarray:
    """
    Find p = A x, the orthogonal projection of b onto
    the column-space of A.
    Returns
    -------
    p : ndarray, shape (m,) if b is (m,) or (m, k) if b is (m, k)
    """
    P = projection_matrix(A)
    if isinstance(b, np.ndarray) and b.ndim == 2:
        return multiply(P, b)
    return matvec(P, as_vector(b))


def least_squares(A, b) -> np.ndarray:
    """
    Exact least-squares solution x of A^T A x = A^T b.

    Raises
    ------
    ValueError : if the columns of A are dependent (x is not unique).
    """
    A = as_matrix(A)
    b = as_vector(b)
    if len(rref(A)[1]) < A.shape[1]:
        raise ValueError(
            "columns of A are not independent; least squares is not unique"
        )
    AT = transpose(A)
    return solve(multiply(AT, A), matvec(AT, b), record_steps=False).particular
