"""Array constructors and cell counting."""

from __future__ import annotations

import builtins
import numbers

import numpy as np

from .complex import Complex
from .config import EPSILON
from .dtypes import DataType
from .errors import InvalidShapeError
from .ndarray import NDArray, cells_equal


def _shape_arg(arg0) -> tuple[int, ...]:
    if isinstance(arg0, numbers.Integral) and not isinstance(arg0, bool):
        return (int(arg0),)
    return tuple(arg0)


def zeros(arg0, datatype: DataType | str | None = None) -> NDArray:
    """Array of zeros.

    ``zeros(2)`` is a length-2 vector, ``zeros([2, 2, 2])`` a 2x2x2 array and
    ``zeros(2, "i16")`` a vector of two 16-bit integers.
    """
    return NDArray(shape=_shape_arg(arg0), datatype=datatype, fill=0)


def empty(arg0, datatype: DataType | str | None = None) -> NDArray:
    """Array of the given shape (or length) with default-initialised cells."""
    return NDArray(shape=_shape_arg(arg0), datatype=datatype)


def arr(values, datatype: DataType | str | None = None) -> NDArray:
    """Shorthand for ``NDArray(values, datatype=datatype)``."""
    return NDArray(values, datatype=datatype)


def eye(arg0, datatype: DataType | str | None = None) -> NDArray:
    """Rank-2 identity-like array.

    ``eye(2)`` and ``eye([2, 2])`` are 2x2; ``eye([2, 3])`` is 2x3 with the
    main diagonal set to 1.
    """
    if isinstance(arg0, numbers.Integral) and not isinstance(arg0, bool):
        n = m = int(arg0)
    else:
        dims = list(arg0)
        if not dims or len(dims) > 2:
            raise InvalidShapeError(f"eye() expects n or [n, m], got {arg0!r}")
        n = dims[0]
        m = dims[1] if len(dims) > 1 else n
    kind = DataType.coerce(datatype)
    A = NDArray(shape=(n, m), datatype=kind, fill=0)
    if kind.is_numeric:
        A.storage.assign(np.eye(n, m))
        return A
    for i in builtins.range(min(n, m)):
        A.set(i, i, 1)
    return A


def range(a: int, b: int | None = None) -> NDArray:
    """32-bit integer sequence ``[a, b)``, or ``[0, a)`` when ``b`` is omitted.

    The upper bound is clamped at zero, so ``range(-3)`` and ``range(5, 2)``
    are empty.
    """
    if b is None:
        a, b = 0, a
    b = max(b, 0)
    return NDArray(np.arange(a, max(a, b), dtype=np.int32), datatype=DataType.I32)


def count(array: NDArray, item, tolerance: float = EPSILON) -> int:
    """Number of cells of ``array`` within ``tolerance`` of ``item``."""
    if isinstance(item, complex):
        item = Complex.from_complex(item)
    n = 0

    def visit(value, *_index) -> None:
        nonlocal n
        if cells_equal(item, value, tolerance):
            n += 1

    array.for_each(visit)
    return n
