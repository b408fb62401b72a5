# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix container

A matrix is a 2-D ``np.ndarray`` with ``dtype=object`` holding
``fractions.Fraction`` entries, so numpy slicing and row arithmetic work
while every value stays exact. Vectors are 1-D object arrays.
"""

from collections.abc import Sequence
from fractions import Fraction
from typing import List, Optional

import numpy as np

from .rational import as_rational
from .utils import ONE, ZERO, DimensionError


def as_matrix(data, cols: Optional[int] = None) -> np.ndarray:
    """
    Build an exact (m, n) matrix from nested sequences or an ndarray.

    Parameters
    ----------
    data : sequence of rows | np.ndarray
        Entries may be ints, Fractions or numeric strings.
    cols : int | None
        Column count to use when `data` has no rows (a 0 by `cols` matrix).

    Returns
    -------
    A : (m, n) ndarray of Fraction, always a fresh copy.

    Raises
    ------
    DimensionError : jagged rows, 1-D input, or `cols` disagreeing with data.
    """
    if isinstance(data, np.ndarray):
        if data.ndim == 1 and data.size == 0:
            rows = []
        elif data.ndim != 2:
            raise DimensionError(f"expected a 2-D matrix, got {data.ndim}-D")
        elif data.shape[0] == 0:
            return np.empty((0, data.shape[1]), dtype=object)
        else:
            rows = data.tolist()
    elif isinstance(data, Sequence) and not isinstance(data, str):
        rows = list(data)
    else:
        raise TypeError(f"cannot build a matrix from {type(data).__name__}")

    m = len(rows)
    if m == 0:
        return np.empty((0, cols or 0), dtype=object)

    for r, row in enumerate(rows):
        if isinstance(row, str) or not isinstance(row, (Sequence, np.ndarray)):
            raise DimensionError(f"row {r} is not a sequence")
    n = len(rows[0])
    if any(len(row) != n for row in rows):
        raise DimensionError(
            f"jagged matrix: row lengths {[len(row) for row in rows]}"
        )
    if cols is not None and cols != n:
        raise DimensionError(f"expected {cols} columns, got {n}")

    A = np.empty((m, n), dtype=object)
    for i, row in enumerate(rows):
        for j, x in enumerate(row):
            A[i, j] = as_rational(x)
    return A


def as_vector(data) -> np.ndarray:
    """Build an exact 1-D vector."""
    if isinstance(data, str):
        raise TypeError("cannot build a vector from a str")
    if isinstance(data, np.ndarray) and data.ndim != 1:
        raise DimensionError(f"expected a 1-D vector, got {data.ndim}-D")
    items = list(data)
    if not _is_flat(items):
        raise DimensionError("expected a 1-D vector, got nested data")
    v = np.empty(len(items), dtype=object)
    for i, x in enumerate(items):
        v[i] = as_rational(x)
    return v


def _is_flat(items) -> bool:
    return all(
        isinstance(x, str) or not isinstance(x, (Sequence, np.ndarray))
        for x in items
    )


def zeros(m: int, n: int) -> np.ndarray:
    return np.full((m, n), ZERO, dtype=object)


def identity(n: int) -> np.ndarray:
    I = zeros(n, n)
    for i in range(n):
        I[i, i] = ONE
    return I


def transpose(A) -> np.ndarray:
    """Return the (n, m) transpose. A 0 by n matrix becomes n by 0."""
    A = as_matrix(A)
    return A.T.copy()


def multiply(A, B) -> np.ndarray:
    """Exact matrix product A B."""
    A = as_matrix(A)
    B = as_matrix(B)
    m, k = A.shape
    k2, p = B.shape
    if k != k2:
        raise DimensionError(f"cannot multiply {m}x{k} by {k2}x{p}")
    C = zeros(m, p)
    for i in range(m):
        for j in range(p):
            C[i, j] = sum((A[i, t] * B[t, j] for t in range(k)), ZERO)
    return C


def matvec(A, v) -> np.ndarray:
    """Exact product A v for a 1-D vector v."""
    A = as_matrix(A)
    v = as_vector(v)
    m, n = A.shape
    if v.shape[0] != n:
        raise DimensionError(f"cannot multiply {m}x{n} by vector of length {len(v)}")
    out = np.empty(m, dtype=object)
    for i in range(m):
        out[i] = sum((A[i, j] * v[j] for j in range(n)), ZERO)
    return out


def dot(u, v) -> Fraction:
    u = as_vector(u)
    v = as_vector(v)
    if u.shape != v.shape:
        raise DimensionError(f"vector lengths differ: {len(u)} != {len(v)}")
    return sum((a * b for a, b in zip(u, v)), ZERO)


def norm_squared(v) -> Fraction:
    """||v||^2, which stays rational even when ||v|| does not."""
    return dot(v, v)


def augment(A, B) -> np.ndarray:
    """Return [A | B]. A 1-D `B` is treated as a single column."""
    A = as_matrix(A)
    if isinstance(B, np.ndarray):
        B = as_vector(B)[:, None] if B.ndim == 1 else as_matrix(B)
    elif len(B) and _is_flat(B):
        B = as_vector(B)[:, None]
    else:
        B = as_matrix(B)
    if A.shape[0] != B.shape[0]:
        raise DimensionError(
            f"cannot augment {A.shape[0]} rows with {B.shape[0]} rows"
        )
    return np.hstack([A, B])


def column(A: np.ndarray, j: int) -> np.ndarray:
    return A[:, j].copy()


def columns(A: np.ndarray) -> List[np.ndarray]:
    return [column(A, j) for j in range(A.shape[1])]


def matrices_equal(A, B) -> bool:
    """Exact equality of shape and every entry."""
    A = as_matrix(A)
    B = as_matrix(B)
    if A.shape != B.shape:
        return False
    return all(a == b for a, b in zip(A.flat, B.flat))


def is_zero_vector(v) -> bool:
    return all(x == 0 for x in v)


def to_float_array(A) -> np.ndarray:
    """Lossy float64 copy for geometric display."""
    return np.asarray(A, dtype=object).astype(float)
