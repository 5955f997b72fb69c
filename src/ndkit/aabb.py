"""Axis-aligned bounding box over rank-1 NDArray corners."""

from __future__ import annotations

import math
import numbers

from .config import EPSILON
from .errors import LengthMismatchError, RankMismatchError, TypeMismatchError
from .ndarray import NDArray
from .storage import is_real


def _real_cells(cells: list, name: str) -> list:
    for idx, cell in enumerate(cells):
        if not is_real(cell):
            raise TypeMismatchError(f"{name}[{idx}] is {type(cell).__name__}; bounding boxes need real cells")
    return cells


def _corner(values, name: str) -> NDArray:
    if isinstance(values, NDArray):
        if values.rank != 1:
            raise RankMismatchError(f"{name} corner must be 1D, got shape {values.shape}")
        cells = values.to_flat_list()
    else:
        cells = list(values)
    return NDArray(_real_cells(cells, name))


def _coordinate_cells(coordinate, dim: int) -> list:
    if isinstance(coordinate, NDArray):
        if coordinate.rank != 1:
            raise RankMismatchError(f"coordinate must be 1D, got shape {coordinate.shape}")
        cells = coordinate.to_flat_list()
    else:
        cells = list(coordinate)
    if len(cells) < dim:
        raise LengthMismatchError(f"coordinate has {len(cells)} components, box needs {dim}")
    return _real_cells(cells, "coordinate")


# nan in either operand propagates instead of being dropped
def _lower(a, b):
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return min(a, b)


def _upper(a, b):
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


class AABB:
    """Axis-aligned bounding box.

    ``AABB(3)`` is an empty 3D box (``min`` all ``+inf``, ``max`` all
    ``-inf``) that grows through :meth:`update` and :meth:`merge`.
    ``AABB(min_corner, max_corner)`` starts from explicit corners; the
    corners are copied and must have the same length, but ``min <= max`` is
    not checked.
    """

    def __init__(self, arg0, arg1=None) -> None:
        if isinstance(arg0, numbers.Integral) and not isinstance(arg0, bool):
            if arg1 is not None:
                raise TypeMismatchError("AABB(dim) takes no second corner")
            dim = int(arg0)
            self._min = NDArray(shape=(dim,), fill=math.inf)
            self._max = NDArray(shape=(dim,), fill=-math.inf)
            return
        if arg1 is None:
            raise TypeMismatchError("AABB needs a dimension or both min and max corners")
        self._min = _corner(arg0, "min")
        self._max = _corner(arg1, "max")
        if self._min.length != self._max.length:
            raise LengthMismatchError(
                f"min corner has {self._min.length} components, max corner has {self._max.length}"
            )

    @property
    def min(self) -> NDArray:
        return self._min

    @property
    def max(self) -> NDArray:
        return self._max

    @property
    def dim(self) -> int:
        return self._min.length

    def update(self, coordinate) -> None:
        """Grow the box to include ``coordinate`` (sequence or 1D NDArray)."""
        cells = _coordinate_cells(coordinate, self.dim)
        for i in range(self.dim):
            self._min.set(i, _lower(self._min.get(i), cells[i]))
            self._max.set(i, _upper(self._max.get(i), cells[i]))

    def merge(self, other: "AABB") -> None:
        """Grow the box to enclose ``other`` as well."""
        if other.dim != self.dim:
            raise LengthMismatchError(f"Cannot merge {other.dim}D box into {self.dim}D box")
        for i in range(self.dim):
            self._min.set(i, _lower(self._min.get(i), other.min.get(i)))
            self._max.set(i, _upper(self._max.get(i), other.max.get(i)))

    def is_empty(self) -> bool:
        return any(lo > hi for lo, hi in zip(self._min.to_flat_list(), self._max.to_flat_list()))

    def contains(self, coordinate, tolerance: float = EPSILON) -> bool:
        cells = _coordinate_cells(coordinate, self.dim)
        return all(
            lo - tolerance <= cells[i] <= hi + tolerance
            for i, (lo, hi) in enumerate(zip(self._min.to_flat_list(), self._max.to_flat_list()))
        )

    def __repr__(self) -> str:
        return f"AABB(min={self._min.to_flat_list()!r}, max={self._max.to_flat_list()!r})"
