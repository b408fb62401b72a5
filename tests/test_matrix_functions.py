# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from fractions import Fraction

import numpy as np
import pytest

from exactlinalg.elimination import StepKind
from exactlinalg.matrix import as_matrix, identity, matrices_equal, multiply
from exactlinalg.matrix_functions import (
    adj,
    cofactor_matrix,
    det,
    det_2x2,
    det_steps,
    invert_2x2,
    invert_gauss_jordan,
    inverse,
    lu,
    minor_matrix,
)
from exactlinalg.utils import DimensionError

TEST_ITERATIONS = 30
logger = logging.getLogger(__name__)


def test_determinants():
    rng = np.random.default_rng(5)
    for _ in range(TEST_ITERATIONS):
        A = rng.integers(-5, 6, size=(4, 4))
        our_det = det(A)
        assert our_det == det(A, method="cofactor")
        assert our_det == round(np.linalg.det(A.astype(float)))


def test_det_small_cases():
    assert det(np.empty((0, 0))) == 1
    assert det([[7]]) == 7
    assert det([[1, 2], [3, 4]]) == -2
    assert det([[0, 1], [1, 0]]) == -1
    assert det([[1, 2], [2, 4]]) == 0
    assert det([["1/2", 0], [0, "2/3"]]) == Fraction(1, 3)
    assert det_2x2([[1, 3], [1, 4]]) == 1


def test_det_errors():
    with pytest.raises(DimensionError):
        det([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(ValueError):
        det([[1]], method="laplace")
    with pytest.raises(DimensionError):
        det_2x2([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


def test_det_steps_cofactor():
    A = [[2, 0, 1], [1, 3, 2], [1, 1, 2]]
    steps, value = det_steps(A)
    assert value == det(A) == 6
    # the zero entry a_12 contributes no term
    assert [s.title for s in steps] == [
        "Initial Matrix",
        "Cofactor Expansion",
        "Term 1,1",
        "Term 1,3",
        "Summation",
    ]
    assert matrices_equal(steps[2].matrix, [[3, 2], [1, 2]])
    assert matrices_equal(steps[3].matrix, [[1, 3], [1, 1]])
    assert steps[-1].math == "det(A) = + (2)(4) + (1)(-2)\n= 6"


def test_det_steps_small():
    steps, value = det_steps([[1, 2], [3, 4]])
    assert value == -2
    assert steps[-1].title == "2x2 Formula"
    assert steps[-1].math == "= (1)(4) - (2)(3)\n= 4 - 6\n= -2"

    steps, value = det_steps([["-1/2"]])
    assert value == Fraction(-1, 2)
    assert steps[-1].math == "= -1/2"

    steps, value = det_steps(np.empty((0, 0)))
    assert value == 1


def test_det_steps_sarrus():
    A = [[2, 0, 1], [1, 3, 2], [1, 1, 2]]
    steps, value = det_steps(A, method="sarrus")
    assert value == 6
    assert steps[0].title == "Initial Matrix"
    assert steps[5].math == "12 + 0 + 1 = 13"
    assert steps[-1].math == "det(A) = (13) - (7) = 6"
    with pytest.raises(DimensionError):
        det_steps([[1, 2], [3, 4]], method="sarrus")
    with pytest.raises(ValueError):
        det_steps(A, method="laplace")


def test_det_steps_random():
    rng = np.random.default_rng(12)
    for _ in range(TEST_ITERATIONS):
        n = int(rng.integers(1, 5))
        A = rng.integers(-4, 5, size=(n, n))
        assert det_steps(A)[1] == det(A)
        if n == 3:
            assert det_steps(A, method="sarrus")[1] == det(A)


def test_minor_and_cofactors():
    A = [[1, 2, 3], [4, 5, 6], [7, 8, 10]]
    assert matrices_equal(minor_matrix(A, 0, 1), [[4, 6], [7, 10]])
    C = cofactor_matrix(A)
    assert C[0, 1] == -(4 * 10 - 6 * 7)


def test_adjugate():
    rng = np.random.default_rng(6)
    for _ in range(TEST_ITERATIONS):
        A = rng.integers(-4, 5, size=(3, 3))
        if _ % 3 == 0:
            A[2] = A[0] + A[1]  # singular
        d = det(A)
        our_adj = adj(A)
        logger.debug(f"det {d}\nadj\n{our_adj}")
        assert matrices_equal(multiply(A, our_adj), identity(3) * d)
        assert matrices_equal(our_adj, cofactor_matrix(A).T)


def test_invert_2x2_nonsingular():
    res = invert_2x2([[1, 3], [1, 4]])
    assert not res.singular
    assert res.determinant == 1
    assert matrices_equal(res.inverse, [[4, -3], [-1, 1]])

    res = invert_2x2([[4, 7], [2, 6]])
    assert res.determinant == 10
    assert matrices_equal(res.inverse, [["3/5", "-7/10"], ["-1/5", "2/5"]])


def test_invert_2x2_singular():
    res = invert_2x2([[1, 2], [2, 4]])
    assert res.determinant == 0
    assert res.singular
    assert res.inverse is None


def test_invert_2x2_round_trip():
    rng = np.random.default_rng(7)
    I2 = identity(2)
    for _ in range(TEST_ITERATIONS):
        A = as_matrix(rng.integers(-6, 7, size=(2, 2)))
        res = invert_2x2(A)
        if res.singular:
            assert res.determinant == 0
            continue
        assert matrices_equal(multiply(A, res.inverse), I2)
        assert matrices_equal(multiply(res.inverse, A), I2)


def test_invert_gauss_jordan():
    res = invert_gauss_jordan([[1, 3], [1, 4]])
    assert not res.singular
    assert matrices_equal(res.inverse, [[4, -3], [-1, 1]])
    assert res.steps[0].description == (
        "Augment the matrix with the Identity Matrix [A | I]."
    )
    assert matrices_equal(res.steps[0].matrix, [[1, 3, 1, 0], [1, 4, 0, 1]])
    assert res.steps[-1].kind is StepKind.COMPLETE
    assert res.steps[-1].is_final


def test_invert_gauss_jordan_descriptions():
    res = invert_gauss_jordan([[0, 2], [1, 3]])
    assert [s.operation for s in res.steps] == [
        "Start",
        "P12",
        "M2(1/2)",
        "E12(-3)",
        "Result",
    ]
    assert matrices_equal(res.inverse, [["-3/2", 1], ["1/2", 0]])
    swap, scale, eliminate = res.steps[1:4]
    assert swap.description.startswith("Pivot Issue: ")
    assert "Swap Row 1 with Row 2" in swap.description
    assert scale.description.startswith("Normalization: ")
    assert "Currently, it is 2." in scale.description
    assert "reciprocal, 1/2." in scale.description
    assert eliminate.description.startswith("Elimination: ")
    assert "value 3 at position (1,2)" in eliminate.description
    assert "adding -3 times the pivot row (Row 2) to Row 1" in eliminate.description


def test_invert_gauss_jordan_singular():
    res = invert_gauss_jordan([[1, 2], [2, 4]])
    assert res.singular
    assert res.inverse is None
    assert res.steps[-1].kind is StepKind.SINGULAR
    assert res.steps[-1].operation == "Singular"
    assert res.steps[-1].is_final
    assert inverse([[1, 2], [2, 4]]) is None


def test_invert_gauss_jordan_random():
    rng = np.random.default_rng(8)
    for n in range(1, 6):
        A = as_matrix(rng.integers(-5, 6, size=(n, n)))
        res = invert_gauss_jordan(A)
        assert res.singular == (det(A) == 0)
        if not res.singular:
            assert matrices_equal(multiply(A, res.inverse), identity(n))
            assert matrices_equal(multiply(res.inverse, A), identity(n))


def test_invert_gauss_jordan_edge_cases():
    res = invert_gauss_jordan(np.empty((0, 0)))
    assert not res.singular
    assert res.inverse.shape == (0, 0)
    with pytest.raises(DimensionError):
        invert_gauss_jordan([[1, 2, 3]])


def test_lu():
    A = [[2, 1, 1], [4, -6, 0], [-2, 7, 2]]
    res = lu(A)
    assert res.success
    assert matrices_equal(multiply(res.L, res.U), A)
    assert matrices_equal(res.L, [[1, 0, 0], [2, 1, 0], [-1, -1, 1]])
    assert matrices_equal(res.U, [[2, 1, 1], [0, -8, -2], [0, 0, 1]])
    assert res.steps[0].title == "Start"
    assert res.steps[-1].title == "Result"


def test_lu_zero_pivot():
    res = lu([[0, 1], [1, 0]])
    assert not res.success
    assert res.steps[-1].title == "Zero Pivot"
