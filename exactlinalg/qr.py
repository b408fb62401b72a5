# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .matrix import as_matrix, columns, dot, identity, norm_squared, to_float_array
from .utils import ZERO


def gram_schmidt(A) -> Tuple[np.ndarray, np.ndarray]:
    """
    Exact Gram-Schmidt orthogonalization of the columns of A.

    The columns are made orthogonal but not normalized: a norm is usually
    irrational, its square never is.

    Parameters:
    A : (m, n) matrix-like
        Full column rank input matrix.
    Returns:
    U : (m, n) ndarray of Fraction
        Pairwise orthogonal columns spanning C(A)
    R : (n, n) ndarray of Fraction
        Unit upper-triangular, with A = U R
    """
    A = as_matrix(A)
    m, n = A.shape
    U = A.copy()
    R = identity(n)

    for j in range(n):
        v = A[:, j].copy()
        for k in range(j):
            uk = U[:, k]
            R[k, j] = dot(uk, v) / norm_squared(uk)
            v = v - uk * R[k, j]
        if all(x == ZERO for x in v):
            raise ValueError("Input vectors are linearly dependent")
        U[:, j] = v

    return U, R


def qr(A) -> Tuple[np.ndarray, np.ndarray]:
    """
    Float QR factors built from the exact Gram-Schmidt result, for display.

    Q = U D^{-1/2},  R = D^{1/2} R_exact  with D = diag(||u_j||^2)

    Returns
    -------
    Q : (m, n) float ndarray | orthonormal columns
    R : (n, n) float ndarray | upper-triangular
    """
    U, R_exact = gram_schmidt(A)
    norms = np.sqrt(np.array([float(norm_squared(u)) for u in columns(U)]))
    Q = to_float_array(U) / norms
    R = norms[:, None] * to_float_array(R_exact)
    return Q, R


def is_orthogonal_set(A) -> bool:
    """True when every pair of distinct columns of A has dot product 0."""
    cols = columns(as_matrix(A))
    return all(
        dot(cols[i], cols[j]) == ZERO
        for i in range(len(cols))
        for j in range(i + 1, len(cols))
    )
