"""Scalar tolerance predicates and IEEE-style division helpers."""

from __future__ import annotations

import math

from .config import EPSILON


def iszero(x: float, tolerance: float = EPSILON) -> bool:
    """Check whether ``x`` equals zero within ``tolerance``."""
    # '<=' keeps tolerance=0 meaningful
    return abs(x) <= tolerance


def isequal(a: float, b: float, tolerance: float = EPSILON) -> bool:
    """Check whether two real numbers are equal within ``tolerance``."""
    return iszero(a - b, tolerance)


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide like IEEE 754 floats do: ``x/0`` is a signed infinity, ``0/0`` is nan."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def reciprocal(x: float) -> float:
    return ieee_divide(1.0, x)
