"""Two-component complex scalar that can populate boxed array cells."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import EPSILON
from .numeric import ieee_divide, isequal


@dataclass
class Complex:
    """Complex number with tolerance-based equality.

    Operators never modify their operands; the engine works on clones.
    """

    real: float = 0.0
    imag: float = 0.0

    @classmethod
    def from_complex(cls, value: complex) -> "Complex":
        return cls(float(value.real), float(value.imag))

    def clone(self) -> "Complex":
        return Complex(self.real, self.imag)

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    def abs(self) -> float:
        return math.hypot(self.real, self.imag)

    def inverse(self) -> "Complex":
        """Reciprocal via the conjugate: ``conj(z) / |z|^2``.

        A zero modulus yields nan/inf components instead of an error.
        """
        r = self.real
        i = self.imag
        den = r * r + i * i
        return Complex(ieee_divide(r, den), ieee_divide(-i, den))

    def is_equal(self, other: "Complex", tolerance: float = EPSILON) -> bool:
        return isequal(self.real, other.real, tolerance) and isequal(self.imag, other.imag, tolerance)

    def to_string(self, precision: int = 4) -> str:
        sign = "+" if self.imag >= 0 else "-"
        return f"({self.real:.{precision}f}{sign}{abs(self.imag):.{precision}f}i)"

    def __str__(self) -> str:
        return self.to_string()

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)
