# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from exactlinalg.matrix import matrices_equal, multiply, to_float_array
from exactlinalg.qr import gram_schmidt, is_orthogonal_set, qr

TEST_ITERATIONS = 50


def test_gram_schmidt_exact():
    A = [[1, 1, 0], [1, 0, 1], [0, 1, 1]]
    U, R = gram_schmidt(A)
    assert is_orthogonal_set(U)
    assert matrices_equal(multiply(U, R), A)
    assert matrices_equal(U[:, 1:2], [["1/2"], ["-1/2"], [1]])
    assert all(R[i, i] == 1 for i in range(3))
    assert all(R[i, j] == 0 for i in range(3) for j in range(i))


def test_gram_schmidt_random():
    rng = np.random.default_rng(10)
    for _ in range(TEST_ITERATIONS):
        A = rng.integers(-5, 6, size=(5, 3))
        if np.linalg.matrix_rank(A.astype(float)) < 3:
            continue
        U, R = gram_schmidt(A)
        assert is_orthogonal_set(U)
        assert matrices_equal(multiply(U, R), A)


def test_gram_schmidt_dependent_raises():
    with pytest.raises(ValueError):
        gram_schmidt([[1, 2], [2, 4], [3, 6]])


def test_orthogonality_qr():
    V = np.random.default_rng(11).integers(-5, 6, size=(8, 4))
    Q, R = qr(V)
    identity = Q.T @ Q
    assert np.allclose(identity, np.eye(4), atol=1e-10)
    assert np.allclose(Q @ R, V, atol=1e-10)
    assert np.allclose(R, np.triu(R))


def test_is_orthogonal_set():
    assert is_orthogonal_set([[1, 1], [1, -1]])
    assert not is_orthogonal_set([[1, 1], [0, 1]])
    np.testing.assert_allclose(to_float_array(gram_schmidt([[3], [4]])[0]), [[3.0], [4.0]])
