# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Optional, Tuple

import numpy as np

from .elimination import ReductionStep, StepKind, forward_eliminate, gauss_jordan
from .matrix import as_matrix, augment, identity, zeros
from .rational import format_rational
from .utils import COFACTOR_WARN_SIZE, ONE, ZERO, DimensionError, permutation_sign

logger = logging.getLogger(__name__)


def _square(A, what: str) -> np.ndarray:
    A = as_matrix(A)
    m, n = A.shape
    if m != n:
        raise DimensionError(f"{what} is undefined for non-square {m}x{n} matrices.")
    return A


def det(A, method: str = "elimination") -> Fraction:
    """
    Exact determinant of an n-by-n matrix A.

    method="elimination" : sign(perm) times the product of the echelon pivots.
    method="cofactor"    : expansion along the first row, O(n!).

    The determinant of the 0 by 0 matrix is 1.
    """
    A = _square(A, "The determinant")
    n = A.shape[0]
    if method == "cofactor":
        if n >= COFACTOR_WARN_SIZE:
            logger.warning(f"det(): cofactor expansion on {n}x{n} – O(n!)")
        return _det_cofactor(A)
    if method != "elimination":
        raise ValueError(f"unknown determinant method: {method!r}")

    U, _c, pivots, _free, perm = forward_eliminate(A)
    if len(pivots) < n:
        return ZERO
    d = Fraction(permutation_sign(perm))
    for i in range(n):
        d *= U[i, i]
    return d


def _det_cofactor(A: np.ndarray) -> Fraction:
    n = A.shape[0]
    if n == 0:
        return ONE
    if n == 1:
        return A[0, 0]
    if n == 2:
        return A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0]
    total = ZERO
    for j in range(n):
        if A[0, j] == ZERO:
            continue
        sign = 1 if j % 2 == 0 else -1
        total += sign * A[0, j] * _det_cofactor(minor_matrix(A, 0, j))
    return total


@dataclass(frozen=True, eq=False)
class DetStep:
    """
    One line of a worked determinant.

    `matrix` is the matrix the step refers to (the input, or a minor) and
    `math` the arithmetic shown for it; either may be None.
    """

    title: str
    description: str
    matrix: Optional[np.ndarray] = None
    math: Optional[str] = None


def _paren(q: Fraction) -> str:
    return f"({format_rational(q)})"


def det_steps(A, method: str = "cofactor") -> Tuple[List[DetStep], Fraction]:
    """
    Worked determinant of a square matrix A.

    method="cofactor" : first-row expansion; 1x1 and 2x2 matrices are
                        done directly, larger ones get one term per
                        non-zero first-row entry with its minor, then a sum.
    method="sarrus"   : rule of Sarrus, 3x3 only.

    Returns
    -------
    steps : list[DetStep]
    value : Fraction
        Equal to ``det(A)``.
    """
    A = _square(A, "The determinant")
    if method == "cofactor":
        return _cofactor_steps(A)
    if method == "sarrus":
        return _sarrus_steps(A)
    raise ValueError(f"unknown determinant method: {method!r}")


def _cofactor_steps(A: np.ndarray) -> Tuple[List[DetStep], Fraction]:
    n = A.shape[0]
    steps = [
        DetStep(
            "Initial Matrix",
            "Start with the given square matrix.",
            matrix=A.copy(),
            math="det(A)",
        )
    ]
    if n == 0:
        steps.append(
            DetStep(
                "Empty Matrix",
                "The determinant of the 0x0 matrix is 1.",
                math="= 1",
            )
        )
        return steps, ONE
    if n == 1:
        value = A[0, 0]
        steps.append(
            DetStep(
                "1x1 Determinant",
                "The determinant of a 1x1 matrix is the value itself.",
                math=f"= {format_rational(value)}",
            )
        )
        return steps, value
    if n == 2:
        a, b = A[0]
        c, d = A[1]
        value = a * d - b * c
        steps.append(
            DetStep(
                "2x2 Formula",
                "Use the formula ad - bc.",
                math=(
                    f"= {_paren(a)}{_paren(d)} - {_paren(b)}{_paren(c)}\n"
                    f"= {format_rational(a * d)} - {format_rational(b * c)}\n"
                    f"= {format_rational(value)}"
                ),
            )
        )
        return steps, value

    steps.append(DetStep("Cofactor Expansion", "Expand along the first row."))
    parts: List[str] = []
    value = ZERO
    for j in range(n):
        entry = A[0, j]
        if entry == ZERO:
            continue
        sign = "+" if j % 2 == 0 else "-"
        sub = minor_matrix(A, 0, j)
        sub_det = det(sub)
        value += (1 if j % 2 == 0 else -1) * entry * sub_det
        steps.append(
            DetStep(
                f"Term 1,{j + 1}",
                f"Element a₁,{j + 1} is {format_rational(entry)}. Sign is {sign}. "
                "Minor is the determinant of the submatrix remaining after "
                f"removing Row 1 and Col {j + 1}.",
                matrix=sub,
                math=f"{sign} {_paren(entry)} * det(M₁,{j + 1})",
            )
        )
        parts.append(f"{sign} {_paren(entry)}{_paren(sub_det)}")

    # an all-zero first row leaves nothing to add
    summed = " ".join(parts) if parts else "0"
    steps.append(
        DetStep(
            "Summation",
            "Sum up all the terms.",
            math=f"det(A) = {summed}\n= {format_rational(value)}",
        )
    )
    return steps, value


def _sarrus_steps(A: np.ndarray) -> Tuple[List[DetStep], Fraction]:
    if A.shape != (3, 3):
        raise DimensionError(
            f"the rule of Sarrus needs a 3x3 matrix, got {A.shape[0]}x{A.shape[1]}"
        )
    (a, b, c), (d, e, f), (g, h, i) = A
    steps = [
        DetStep(
            "Initial Matrix",
            "Start with the 3x3 matrix.",
            matrix=A.copy(),
            math="det(A)",
        ),
        DetStep(
            "Forward Diagonals",
            "Multiply terms along the three diagonals from top-left to "
            "bottom-right.",
            matrix=A.copy(),
        ),
    ]

    def diagonals(names, triples):
        products = []
        for name, triple in zip(names, triples):
            product = triple[0] * triple[1] * triple[2]
            products.append(product)
            steps.append(
                DetStep(
                    name,
                    name + ": " + " × ".join(_paren(x) for x in triple),
                    math=f"= {format_rational(product)}",
                )
            )
        return products

    forward = diagonals(
        ["Diagonal 1", "Diagonal 2", "Diagonal 3"],
        [(a, e, i), (b, f, g), (c, d, h)],
    )
    sum_forward = sum(forward, ZERO)
    steps.append(
        DetStep(
            "Sum of Forward Diagonals",
            "Add the results of the three forward diagonals.",
            math=" + ".join(format_rational(x) for x in forward)
            + f" = {format_rational(sum_forward)}",
        )
    )

    steps.append(
        DetStep(
            "Backward Diagonals",
            "Multiply terms along the three diagonals from bottom-left to "
            "top-right.",
        )
    )
    backward = diagonals(
        ["Anti-Diagonal 1", "Anti-Diagonal 2", "Anti-Diagonal 3"],
        [(g, e, c), (h, f, a), (i, d, b)],
    )
    sum_backward = sum(backward, ZERO)
    steps.append(
        DetStep(
            "Sum of Backward Diagonals",
            "Add the results of the three backward diagonals.",
            math=" + ".join(format_rational(x) for x in backward)
            + f" = {format_rational(sum_backward)}",
        )
    )

    value = sum_forward - sum_backward
    steps.append(
        DetStep(
            "Final Calculation",
            "Subtract the backward sum from the forward sum.",
            math=f"det(A) = {_paren(sum_forward)} - {_paren(sum_backward)} "
            f"= {format_rational(value)}",
        )
    )
    return steps, value


def det_2x2(A) -> Fraction:
    """ad - bc"""
    A = as_matrix(A)
    if A.shape != (2, 2):
        raise DimensionError(f"expected a 2x2 matrix, got {A.shape[0]}x{A.shape[1]}")
    return A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0]


def minor_matrix(A, i: int, j: int) -> np.ndarray:
    """A with row i and column j removed."""
    A = as_matrix(A)
    return np.delete(np.delete(A, i, axis=0), j, axis=1)


def cofactor_matrix(A) -> np.ndarray:
    A = _square(A, "The cofactor matrix")
    n = A.shape[0]
    C = zeros(n, n)
    for i in range(n):
        for j in range(n):
            sign = 1 if (i + j) % 2 == 0 else -1
            C[i, j] = sign * det(minor_matrix(A, i, j))
    return C


def adj(A) -> np.ndarray:
    """
    Adjugate (classical adjoint) of a square matrix A.

    Fast path (det != 0): adj(A) = det(A) · A^{-1}
    Slow path (det = 0): transpose of the cofactor matrix
    """
    A = _square(A, "The adjugate")
    d = det(A)
    if d == ZERO:
        logger.debug("adj(): singular matrix, using cofactor expansion")
        return cofactor_matrix(A).T.copy()
    return invert_gauss_jordan(A, record_steps=False).inverse * d


@dataclass(frozen=True, eq=False)
class Inverse2x2:
    determinant: Fraction
    inverse: Optional[np.ndarray]
    singular: bool


def invert_2x2(A) -> Inverse2x2:
    """
    Closed form inverse of [[a, b], [c, d]]:
    (1 / (ad - bc)) · [[d, -b], [-c, a]], or singular when ad - bc = 0.
    """
    A = as_matrix(A)
    d = det_2x2(A)
    if d == ZERO:
        return Inverse2x2(determinant=d, inverse=None, singular=True)
    a, b = A[0]
    c, e = A[1]
    inv = as_matrix([[e, -b], [-c, a]]) / d
    return Inverse2x2(determinant=d, inverse=inv, singular=False)


INVERSE_DESCRIPTIONS: Dict[StepKind, str] = {
    StepKind.SWAP: (
        "Pivot Issue: The element at the pivot position ({row},{col}) is zero. "
        "Swap Row {row} with Row {other}, which puts a non-zero value into "
        "the pivot spot."
    ),
    StepKind.SCALE: (
        "Normalization: We want the pivot at ({row},{col}) to be exactly 1. "
        "Currently, it is {pivot}. Multiply the entire Row {row} by its "
        "reciprocal, {scalar}."
    ),
    StepKind.ELIMINATE: (
        "Elimination: Clear the value {value} at position ({target},{col}) to "
        "form the Identity matrix structure by adding {scalar} times the "
        "pivot row (Row {row}) to Row {target}."
    ),
}


@dataclass(frozen=True, eq=False)
class GaussJordanInverse:
    steps: List[ReductionStep]
    inverse: Optional[np.ndarray]
    singular: bool


def invert_gauss_jordan(A, record_steps: bool = True) -> GaussJordanInverse:
    """
    Invert a square matrix by reducing [A | I].

    If some column of the A block has no pivot the reduction stops with a
    SINGULAR step and `inverse` is None. Otherwise the left block ends as I
    and the right block is A^{-1}.
    """
    A = _square(A, "The inverse")
    n = A.shape[0]
    steps, R, _pivots, singular = gauss_jordan(
        augment(A, identity(n)),
        stop_col=n,
        record_steps=record_steps,
        start_description="Augment the matrix with the Identity Matrix [A | I].",
        complete_description=(
            "The left side is now the Identity Matrix. "
            "The right side is the Inverse Matrix A⁻¹."
        ),
        descriptions=INVERSE_DESCRIPTIONS,
    )
    inverse = None if singular else R[:, n:].copy()
    return GaussJordanInverse(steps=steps, inverse=inverse, singular=singular)


def inverse(A) -> Optional[np.ndarray]:
    """A^{-1}, or None when A is singular."""
    return invert_gauss_jordan(A, record_steps=False).inverse


@dataclass(frozen=True, eq=False)
class LUStep:
    title: str
    description: str
    L: np.ndarray
    U: np.ndarray


@dataclass(frozen=True, eq=False)
class LUResult:
    L: np.ndarray
    U: np.ndarray
    steps: List[LUStep]
    success: bool


def lu(A) -> LUResult:
    """
    Doolittle LU decomposition A = L U without row exchanges.

    L is unit lower triangular and holds the multipliers. A zero pivot
    stops the factorisation with ``success=False``; L and U are then the
    partial factors at that point.
    """
    A = _square(A, "LU decomposition")
    n = A.shape[0]
    L = identity(n)
    U = A.copy()
    steps: List[LUStep] = []

    def record(title, description):
        steps.append(LUStep(title, description, L.copy(), U.copy()))

    record("Start", "Initialize L = I and U = A.")
    for k in range(n - 1):
        pivot = U[k, k]
        if pivot == ZERO:
            record(
                "Zero Pivot",
                f"Pivot at ({k + 1},{k + 1}) is zero. LU decomposition without "
                "permutation requires non-zero pivots.",
            )
            logger.debug(f"lu(): zero pivot at ({k + 1},{k + 1})")
            return LUResult(L=L, U=U, steps=steps, success=False)

        for i in range(k + 1, n):
            val = U[i, k]
            if val == ZERO:
                continue
            multiplier = val / pivot
            L[i, k] = multiplier
            U[i, k:] = U[i, k:] - U[k, k:] * multiplier
            mult = format_rational(multiplier)
            record(
                f"Eliminate ({i + 1}, {k + 1})",
                f"Multiplier m = {format_rational(val)}/{format_rational(pivot)} "
                f"= {mult}. Set L[{i + 1}][{k + 1}] = {mult}. Update U Row "
                f"{i + 1} = Row {i + 1} - ({mult}) * Row {k + 1}.",
            )

    record("Result", "LU Decomposition complete.")
    return LUResult(L=L, U=U, steps=steps, success=True)
