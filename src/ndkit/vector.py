"""Rank-1 vector operations: dot, cross, length and direction."""

from __future__ import annotations

import math

import jax.numpy as jnp

from .arithmetic import div
from .config import x64_enabled
from .errors import LengthMismatchError, RankMismatchError, TypeMismatchError
from .ndarray import NDArray
from .storage import NumericStorage, is_real


def _require_vector(value: object, name: str) -> NDArray:
    if not isinstance(value, NDArray):
        raise TypeMismatchError(f"{name} must be an NDArray, got {type(value).__name__}")
    if value.rank != 1:
        raise RankMismatchError(f"{name} is not a 1D array (shape {value.shape})")
    return value


def _real_cells(vector: NDArray, name: str) -> list[float]:
    cells = vector.to_flat_list()
    for idx, cell in enumerate(cells):
        if not is_real(cell):
            raise TypeMismatchError(f"{name}[{idx}] is {type(cell).__name__}; vector operations need real cells")
    return cells


def _leading_components(vector: NDArray, name: str) -> list[float]:
    components = [vector.get_n(i) for i in range(3)]
    for idx, cell in enumerate(components):
        if not is_real(cell):
            raise TypeMismatchError(f"{name}[{idx}] is {type(cell).__name__}; cross product needs real cells")
    return components


def dot(A: NDArray, B: NDArray) -> float:
    """Dot product of two equal-length 1D arrays, accumulated in float64."""
    _require_vector(A, "A")
    _require_vector(B, "B")
    if A.length != B.length:
        raise LengthMismatchError(f"A and B are of different length ({A.length} vs {B.length})")
    if x64_enabled() and isinstance(A.storage, NumericStorage) and isinstance(B.storage, NumericStorage):
        a = jnp.asarray(A.storage.array, dtype=jnp.float64)
        b = jnp.asarray(B.storage.array, dtype=jnp.float64)
        return float(jnp.dot(a, b))
    total = 0.0
    for x, y in zip(_real_cells(A, "A"), _real_cells(B, "B")):
        total += float(x) * float(y)
    return total


def cross(A: NDArray, B: NDArray) -> NDArray:
    """Cross product using the first three components of each 1D array."""
    _require_vector(A, "A")
    _require_vector(B, "B")
    if A.length < 3 or B.length < 3:
        raise LengthMismatchError("A or B is less than 3 in length")
    a1, a2, a3 = _leading_components(A, "A")
    b1, b2, b3 = _leading_components(B, "B")
    return NDArray([
        a2 * b3 - a3 * b2,
        a3 * b1 - a1 * b3,
        a1 * b2 - a2 * b1,
    ])


def length(A: NDArray) -> float:
    """Euclidean length of a 1D array."""
    _require_vector(A, "A")
    return math.sqrt(dot(A, A))


def dir(A: NDArray) -> NDArray:
    """Unit vector along ``A``; a zero-length ``A`` gives nan cells."""
    _require_vector(A, "A")
    return div(A, length(A))
