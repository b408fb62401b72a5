# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exact rational numbers.

The rational type is :class:`fractions.Fraction`. It is immutable, always
kept in lowest terms with a positive denominator, and every arithmetic
operation returns a new, re-normalised value. Division by a zero Fraction
raises ``ZeroDivisionError``; the elimination routines never trigger it
because a pivot is only used as a divisor after it has been checked
non-zero.

This module adds the pieces ``Fraction`` does not provide the way we want
them: a strict text parser, a coercion helper and a display string.
"""

import numbers
import re
from fractions import Fraction

from .utils import ParseError

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"(?P<sign>[+-]?)(?P<whole>\d*)\.(?P<frac>\d*)", re.ASCII)
_RATIO = re.compile(r"(?P<num>[+-]?\d+)\s*/\s*(?P<den>[+-]?\d+)", re.ASCII)


def parse_rational(text: str) -> Fraction:
    """
    Parse an integer, decimal or ``a/b`` token into an exact Fraction.

    Examples
    --------
    >>> parse_rational("3"), parse_rational("-1/2"), parse_rational("0.5")
    (Fraction(3, 1), Fraction(-1, 2), Fraction(1, 2))

    Raises
    ------
    ParseError : on empty or malformed text, or a zero denominator.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")
    s = text.strip()
    if not s:
        raise ParseError("empty number token")

    if _INTEGER.fullmatch(s):
        return Fraction(int(s))

    m = _DECIMAL.fullmatch(s)
    if m and (m["whole"] or m["frac"]):
        # "0.125" -> 125 / 10**3, reduced by Fraction
        digits = int((m["whole"] or "0") + m["frac"])
        value = Fraction(digits, 10 ** len(m["frac"]))
        return -value if m["sign"] == "-" else value

    m = _RATIO.fullmatch(s)
    if m:
        den = int(m["den"])
        if den == 0:
            raise ParseError(f"zero denominator in {text!r}")
        return Fraction(int(m["num"]), den)

    raise ParseError(f"invalid number: {text!r}")


def as_rational(value) -> Fraction:
    """
    Coerce an int, Fraction, numpy integer or numeric text to a Fraction.

    Floats are refused: their binary value is rarely the number the user
    typed, so pass the text ("0.1") instead.
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, str):
        return parse_rational(value)
    raise TypeError(
        f"cannot convert {type(value).__name__} to an exact rational; "
        "use an int, a Fraction or a numeric string"
    )


def to_float(q: Fraction) -> float:
    """Lossy float value, for plotting and geometry only."""
    return float(q)


def format_rational(q: Fraction) -> str:
    """Integers without a denominator ("3"), otherwise "p/q" ("-1/2")."""
    if q.denominator == 1:
        return str(q.numerator)
    return f"{q.numerator}/{q.denominator}"
