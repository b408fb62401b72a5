# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from fractions import Fraction

ZERO: Fraction = Fraction(0)
ONE: Fraction = Fraction(1)

# Cofactor expansion is O(n!), warn before running it on anything bigger.
COFACTOR_WARN_SIZE: int = 6


class ParseError(ValueError):
    """Raised when text cannot be read as an exact rational number."""


class DimensionError(ValueError):
    """Raised for jagged input or incompatible matrix shapes."""


def permutation_sign(perm: list[int]) -> int:
    """Return +1 or -1 depending on permutation parity."""
    visited = [False] * len(perm)
    cycles = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycles += 1
            j = i
            while not visited[j]:
                visited[j] = True
                j = perm[j]
    swaps = len(perm) - cycles  # n - #cycles
    return -1 if swaps & 1 else 1
