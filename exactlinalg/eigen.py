# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Eigenspaces and diagonalisation over the rationals

An eigenspace is the null space of the characteristic matrix lam*I - A, so
it is found with the same RREF engine and null-space rule as N(A). Only
rational eigenvalues are handled; a matrix whose characteristic polynomial
has irrational or complex roots is reported as not diagonalisable over Q.
"""

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .elimination import ReductionStep, reduce_to_rref
from .formatting import format_vector
from .matrix import as_matrix, identity, matrices_equal, multiply, zeros
from .rational import as_rational, format_rational
from .subspaces import null_space_basis
from .utils import ONE, ZERO, DimensionError

logger = logging.getLogger(__name__)


def _square(A) -> np.ndarray:
    A = as_matrix(A)
    m, n = A.shape
    if m != n:
        raise DimensionError(f"Eigenvalues need a square matrix, got {m}x{n}.")
    return A


def characteristic_matrix(A, lam) -> np.ndarray:
    """lam*I - A"""
    A = _square(A)
    return identity(A.shape[0]) * as_rational(lam) - A


def characteristic_polynomial(A) -> List[Fraction]:
    """
    Coefficients of det(xI - A), highest power first (the first one is 1).

    Faddeev-LeVerrier recursion: M_0 = 0 and for k = 1..n

        M_k     = A M_{k-1} + c_{n-k+1} I
        c_{n-k} = -tr(A M_k) / k

    which needs only matrix products and traces, so it stays exact.
    """
    A = _square(A)
    n = A.shape[0]
    coeffs = [ONE]
    M = zeros(n, n)
    I = identity(n)
    for k in range(1, n + 1):
        M = multiply(A, M) + I * coeffs[-1]
        AM = multiply(A, M)
        trace = sum((AM[i, i] for i in range(n)), ZERO)
        coeffs.append(-trace / k)
    return coeffs


def _evaluate(coeffs: Sequence[Fraction], x: Fraction) -> Fraction:
    value = ZERO
    for c in coeffs:
        value = value * x + c
    return value


def _divisors(k: int) -> List[int]:
    k = abs(k)
    small = [d for d in range(1, math.isqrt(k) + 1) if k % d == 0]
    return sorted(set(small + [k // d for d in small]))


def rational_eigenvalues(A) -> List[Fraction]:
    """
    Distinct rational roots of the characteristic polynomial, largest first.

    Uses the rational root theorem on the polynomial scaled to integer
    coefficients: a root p/q in lowest terms has p dividing the constant
    term and q dividing the leading one.
    """
    coeffs = characteristic_polynomial(A)
    roots = set()

    # a zero constant term means x = 0 is a root; divide it out
    while len(coeffs) > 1 and coeffs[-1] == ZERO:
        roots.add(ZERO)
        coeffs = coeffs[:-1]
    if len(coeffs) == 1:
        return sorted(roots, reverse=True)

    scale = math.lcm(*(c.denominator for c in coeffs))
    ints = [int(c * scale) for c in coeffs]
    for p in _divisors(ints[-1]):
        for q in _divisors(ints[0]):
            for candidate in (Fraction(p, q), Fraction(-p, q)):
                if _evaluate(coeffs, candidate) == ZERO:
                    roots.add(candidate)
    logger.debug(f"rational eigenvalues: {sorted(roots, reverse=True)}")
    return sorted(roots, reverse=True)


@dataclass(frozen=True, eq=False)
class EigenspaceResult:
    """
    Attributes
    ----------
    eigenvalue : Fraction
    steps : list[ReductionStep]
        Reduction of lam*I - A to RREF.
    rref : np.ndarray
    pivots : list[int]
    basis : list[np.ndarray]
        Basis of the eigenspace, one vector per free column. Empty when
        `eigenvalue` is not an eigenvalue of A.
    equations : list[str]
        Pivot variables in terms of the free ones, e.g. ``"x_1 = -2x_2"``.
    """

    eigenvalue: Fraction
    steps: List[ReductionStep]
    rref: np.ndarray
    pivots: List[int]
    basis: List[np.ndarray]
    equations: List[str]

    @property
    def dimension(self) -> int:
        """Geometric multiplicity."""
        return len(self.basis)


def _parameterize(R: np.ndarray, pivots: List[int]) -> List[str]:
    pivot_set = set(pivots)
    free = [j for j in range(R.shape[1]) if j not in pivot_set]
    equations = []
    for row, p in enumerate(pivots):
        terms = [
            f"{format_rational(-R[row, f])}x_{f + 1}"
            for f in free
            if R[row, f] != ZERO
        ]
        equations.append(f"x_{p + 1} = " + (" + ".join(terms) if terms else "0"))
    return equations


def eigenspace_basis(A, lam, record_steps: bool = True) -> EigenspaceResult:
    """
    Basis of the eigenspace of A for the rational value `lam`.

    lam*I - A is row reduced and its null space read off the RREF, so every
    basis vector v satisfies A v = lam v exactly.
    """
    lam = as_rational(lam)
    M = characteristic_matrix(A, lam)
    n = M.shape[0]
    res = reduce_to_rref(M, record_steps=record_steps)
    basis = null_space_basis(res.rref, res.pivots, n)
    logger.debug(f"eigenspace for {format_rational(lam)} has dimension {len(basis)}")
    return EigenspaceResult(
        eigenvalue=lam,
        steps=res.steps,
        rref=res.rref,
        pivots=res.pivots,
        basis=basis,
        equations=_parameterize(res.rref, res.pivots),
    )


@dataclass(frozen=True, eq=False)
class DiagonalizationStep:
    title: str
    description: str
    matrix: Optional[np.ndarray] = None


@dataclass(frozen=True, eq=False)
class DiagonalizationResult:
    """
    A P = P D with the eigenvectors as the columns of P and the matching
    eigenvalues on the diagonal of D. P, D, AP and PD are None when A is
    not diagonalisable.
    """

    is_diagonalizable: bool
    P: Optional[np.ndarray]
    D: Optional[np.ndarray]
    AP: Optional[np.ndarray]
    PD: Optional[np.ndarray]
    eigenpairs: List[Tuple[Fraction, np.ndarray]]
    steps: List[DiagonalizationStep]


def diagonalize(A, eigenvalues: Optional[Sequence] = None) -> DiagonalizationResult:
    """
    Diagonalise A over the rationals.

    Parameters
    ----------
    A : (n, n) matrix-like
    eigenvalues : sequence | None
        Eigenvalues to use. Duplicates are ignored. If None the rational
        roots of the characteristic polynomial are used.

    A is diagonalisable when the eigenspaces together supply n basis
    vectors; the result is then checked by comparing AP with PD.
    """
    A = _square(A)
    n = A.shape[0]
    if eigenvalues is None:
        values = rational_eigenvalues(A)
    else:
        values = sorted({as_rational(x) for x in eigenvalues}, reverse=True)

    listed = ", ".join(format_rational(x) for x in values) or "none"
    steps = [
        DiagonalizationStep(
            "1. Get Eigenvalues",
            "Find the eigenvalues by solving det(xI - A) = 0.",
        ),
        DiagonalizationStep("Eigenvalues Found", f"The eigenvalues are: {listed}"),
    ]

    eigenpairs: List[Tuple[Fraction, np.ndarray]] = []
    lines = []
    for lam in values:
        res = eigenspace_basis(A, lam, record_steps=False)
        lines.append(f"For x = {format_rational(lam)}:")
        if not res.basis:
            lines.append("No eigenvectors found.")
        for v in res.basis:
            eigenpairs.append((lam, v))
            lines.append(f"v_{len(eigenpairs)} = {format_vector(v)}^T")
    steps.append(
        DiagonalizationStep("2. Get Eigenvectors", "\n".join(lines) or "No eigenvalues.")
    )

    if len(eigenpairs) < n:
        steps.append(
            DiagonalizationStep(
                "Not Diagonalizable",
                f"Found only {len(eigenpairs)} linearly independent eigenvectors, "
                f"but {n} are needed. Therefore, A is not diagonalizable.",
            )
        )
        return DiagonalizationResult(
            is_diagonalizable=False,
            P=None,
            D=None,
            AP=None,
            PD=None,
            eigenpairs=eigenpairs,
            steps=steps,
        )

    P = zeros(n, n)
    D = zeros(n, n)
    for j, (lam, v) in enumerate(eigenpairs):
        P[:, j] = v
        D[j, j] = lam
    AP = multiply(A, P)
    PD = multiply(P, D)
    verified = matrices_equal(AP, PD)

    steps += [
        DiagonalizationStep(
            "3. Form Matrix P",
            "Construct matrix P using the eigenvectors as columns.",
            P,
        ),
        DiagonalizationStep(
            "4. Form Matrix D",
            "Construct diagonal matrix D using the corresponding eigenvalues.",
            D,
        ),
        DiagonalizationStep("5. Verify AP = PD", "Compute AP.", AP),
        DiagonalizationStep("Compute PD", "Compute PD.", PD),
    ]
    if verified:
        steps.append(
            DiagonalizationStep(
                "Conclusion",
                "Since AP = PD, we have confirmed the diagonalization. "
                "This implies P⁻¹AP = D.",
            )
        )
    else:
        logger.warning("diagonalize(): AP != PD")
        steps.append(DiagonalizationStep("Error", "Verification failed. AP != PD."))

    return DiagonalizationResult(
        is_diagonalizable=verified,
        P=P,
        D=D,
        AP=AP,
        PD=PD,
        eigenpairs=eigenpairs,
        steps=steps,
    )
