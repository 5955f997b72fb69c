"""Structured error types for array and arithmetic failures."""

from __future__ import annotations

from dataclasses import dataclass


class NDKitError(Exception):
    """Base class for structured ndkit errors."""


class NDShapeError(NDKitError):
    """Shape, rank, length or index compatibility failure."""


class NDTypeError(NDKitError):
    """Value-kind or datatype compatibility failure."""


class InvalidShapeError(NDShapeError):
    """A shape has a negative or non-integer dimension, or does not fit its data."""


class ShapeMismatchError(NDShapeError):
    """Elementwise operation between arrays of unequal shape."""


class RankMismatchError(NDShapeError):
    """Operand has the wrong number of axes for the operation."""


class LengthMismatchError(NDShapeError):
    """Vector operands have incompatible lengths."""


@dataclass(eq=False)
class IndexOutOfBoundsError(NDShapeError):
    """Index outside ``[0, size)`` on some axis.

    ``axis`` is ``None`` when the failure is about the number of indices
    (or a flat offset) rather than a single axis.
    """

    message: str
    axis: int | None = None
    index: int | None = None
    size: int | None = None

    def __str__(self) -> str:
        if self.axis is None:
            return self.message
        return f"{self.message} (axis {self.axis}: index {self.index} not in [0, {self.size}))"


class TypeMismatchError(NDTypeError):
    """Value cannot be stored in, or combined with, the target type."""


class DivisionByArrayError(NDTypeError):
    """Division where the divisor is an NDArray."""


class UnsupportedOperationError(NDKitError):
    """Operation is outside the elementwise engine (e.g. matrix product)."""
