# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
exactlinalg
===========

A small, educational linear-algebra kernel in exact rational arithmetic.
Every result is a ``fractions.Fraction``, so row reductions can be shown
step by step without round-off.

Public API
~~~~~~~~~~
- Rationals
    - `parse_rational`, `as_rational`, `format_rational`
- Matrix utilities
    - `as_matrix`, `transpose`, `multiply`, `matvec`, `identity`
- Row reduction
    - `reduce_to_rref`, `rref`, `pivot_indices`, `forward_eliminate`
- Rank / subspaces
    - `rank_nullity`, `column_space_basis`, `null_space_basis`,
      `row_space_basis`, `left_null_space_basis`, `fundamental_subspaces`
- Determinants and inverses
    - `det`, `det_steps`, `adj`, `invert_2x2`, `invert_gauss_jordan`,
      `inverse`, `lu`
- Eigenspaces
    - `characteristic_polynomial`, `rational_eigenvalues`,
      `eigenspace_basis`, `diagonalize`
- Linear systems and projections
    - `solve`, `gram_schmidt`, `project_onto_colspace`, `least_squares`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import exactlinalg as la
>>> res = la.reduce_to_rref([[1, 2, -1, 3], [2, 4, 1, 6]])
>>> res.pivots
[0, 2]
>>> [la.format_rational(x) for x in res.rref[0]]
['1', '2', '0', '3']
"""

from importlib.metadata import version as _pkg_version

from .eigen import (
    characteristic_polynomial,
    diagonalize,
    eigenspace_basis,
    rational_eigenvalues,
)
from .elimination import (
    RankNullity,
    ReductionStep,
    RREFResult,
    StepKind,
    forward_eliminate,
    gauss_jordan,
    pivot_indices,
    rank_elimination,
    rank_nullity,
    reduce_to_rref,
    rref,
)
from .matrix import (
    as_matrix,
    as_vector,
    identity,
    matrices_equal,
    matvec,
    multiply,
    to_float_array,
    transpose,
)
from .matrix_functions import (
    adj,
    det,
    det_steps,
    invert_2x2,
    invert_gauss_jordan,
    inverse,
    lu,
)
from .projections import least_squares, project_onto_colspace, projection_matrix
from .qr import gram_schmidt, is_orthogonal_set

# ---------------------------------------------------------------------
# Re-export the high-level functions users are expected to call.
# Each of these names is implemented in one of the internal sub-modules.
# ---------------------------------------------------------------------
from .rational import as_rational, format_rational, parse_rational, to_float
from .subspaces import (
    column_space_basis,
    fundamental_subspaces,
    left_null_space_basis,
    null_space_basis,
    row_space_basis,
)
from .systems import solve
from .utils import DimensionError, ParseError

__all__ = [
    "parse_rational",
    "as_rational",
    "format_rational",
    "to_float",
    "as_matrix",
    "as_vector",
    "identity",
    "transpose",
    "multiply",
    "matvec",
    "matrices_equal",
    "to_float_array",
    "StepKind",
    "ReductionStep",
    "RREFResult",
    "RankNullity",
    "gauss_jordan",
    "reduce_to_rref",
    "rref",
    "forward_eliminate",
    "pivot_indices",
    "rank_elimination",
    "rank_nullity",
    "column_space_basis",
    "null_space_basis",
    "row_space_basis",
    "left_null_space_basis",
    "fundamental_subspaces",
    "det",
    "det_steps",
    "adj",
    "invert_2x2",
    "invert_gauss_jordan",
    "inverse",
    "lu",
    "characteristic_polynomial",
    "rational_eigenvalues",
    "eigenspace_basis",
    "diagonalize",
    "solve",
    "gram_schmidt",
    "is_orthogonal_set",
    "project_onto_colspace",
    "projection_matrix",
    "least_squares",
    "ParseError",
    "DimensionError",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show exactlinalg”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
