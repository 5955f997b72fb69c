"""Multi-dimensional array over a flat row-major store."""

from __future__ import annotations

import math
import numbers
import operator
from collections.abc import Callable
from itertools import product

import numpy as np

from .complex import Complex
from .config import EPSILON
from .dtypes import DataType
from .errors import IndexOutOfBoundsError, InvalidShapeError, TypeMismatchError
from .numeric import isequal
from .storage import BoxedStorage, NumericStorage, Storage


def normalize_shape(shape) -> tuple[int, ...]:
    if isinstance(shape, numbers.Integral) and not isinstance(shape, bool):
        shape = (shape,)
    try:
        dims = tuple(shape)
    except TypeError:
        raise InvalidShapeError(f"Shape must be a sequence of sizes, got {type(shape).__name__}") from None
    for axis, dim in enumerate(dims):
        if isinstance(dim, bool) or not isinstance(dim, numbers.Integral):
            raise InvalidShapeError(f"Dimension {axis} must be an integer, got {dim!r}")
        if dim < 0:
            raise InvalidShapeError(f"Dimension {axis} is negative: {dim}")
    return tuple(int(dim) for dim in dims)


def _is_buffer(values: object) -> bool:
    return hasattr(values, "dtype") and hasattr(values, "shape") and not isinstance(values, (list, tuple))


def _is_nested(item: object) -> bool:
    return isinstance(item, (list, tuple))


def _flatten_nested(values) -> tuple[list, tuple[int, ...]]:
    items = list(values)
    if not any(_is_nested(item) for item in items):
        return items, (len(items),)
    if not all(_is_nested(item) for item in items):
        raise InvalidShapeError("Nested values mix sequences and scalars at the same depth")
    parts = [_flatten_nested(item) for item in items]
    inner = parts[0][1]
    for cells, sub_shape in parts:
        if sub_shape != inner:
            raise InvalidShapeError(f"Ragged nested values: {sub_shape} does not match {inner}")
    flat = [cell for cells, _ in parts for cell in cells]
    return flat, (len(items),) + inner


def _row_major_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
    strides = [1] * len(shape)
    for axis in range(len(shape) - 2, -1, -1):
        strides[axis] = strides[axis + 1] * shape[axis + 1]
    return tuple(strides)


def _nest(flat: list, shape: tuple[int, ...]):
    if not shape:
        return flat[0]
    if len(shape) == 1:
        return list(flat)
    step = math.prod(shape[1:])
    return [_nest(flat[i * step : (i + 1) * step], shape[1:]) for i in range(shape[0])]


def cells_equal(a, b, tolerance: float = EPSILON) -> bool:
    if isinstance(a, Complex) or isinstance(b, Complex):
        left = a if isinstance(a, Complex) else Complex(float(a), 0.0)
        right = b if isinstance(b, Complex) else Complex(float(b), 0.0)
        return left.is_equal(right, tolerance)
    # exact match first so equal infinities compare equal
    return a == b or isequal(a, b, tolerance)


class NDArray:
    """N-dimensional array with fixed-width numeric or boxed generic cells.

    Construct from a shape (``NDArray(shape=(2, 3), datatype="f64", fill=0)``),
    from flat or nested Python sequences (``NDArray([[1, 2], [3, 4]])``) or
    from a typed buffer such as a jax or numpy array. Omitting ``datatype``
    for sequences selects boxed storage, whose cells may hold real numbers
    and :class:`Complex` values side by side.
    """

    def __init__(
        self,
        values=None,
        *,
        shape=None,
        datatype: DataType | str | None = None,
        fill=None,
    ) -> None:
        if values is None:
            if shape is None:
                raise InvalidShapeError("NDArray needs either values or a shape")
            self._shape = normalize_shape(shape)
            kind = DataType.coerce(datatype)
            count = math.prod(self._shape)
            storage: Storage = NumericStorage.zeros(count, kind) if kind.is_numeric else BoxedStorage.zeros(count)
        else:
            if _is_buffer(values):
                kind = DataType.from_dtype(values.dtype) if datatype is None else DataType.coerce(datatype)
                inferred = tuple(int(d) for d in values.shape)
                if kind.is_numeric:
                    storage = NumericStorage(np.asarray(values), kind)
                else:
                    storage = BoxedStorage.from_values(np.ravel(np.asarray(values)).tolist())
            elif isinstance(values, (list, tuple)):
                kind = DataType.coerce(datatype)
                cells, inferred = _flatten_nested(values)
                storage = NumericStorage.from_values(cells, kind) if kind.is_numeric else BoxedStorage.from_values(cells)
            else:
                raise TypeMismatchError(
                    f"NDArray values must be a sequence or typed buffer, got {type(values).__name__}"
                )
            if shape is None:
                self._shape = inferred
            else:
                self._shape = normalize_shape(shape)
                if math.prod(self._shape) != len(storage):
                    raise InvalidShapeError(
                        f"Shape {self._shape} needs {math.prod(self._shape)} cells, got {len(storage)}"
                    )
        self._storage = storage
        self._strides = _row_major_strides(self._shape)
        if fill is not None:
            self._storage.fill(fill)

    @classmethod
    def from_shape(cls, shape, datatype: DataType | str | None = None, fill=None) -> "NDArray":
        return cls(shape=shape, datatype=datatype, fill=fill)

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def datatype(self) -> DataType:
        return self._storage.datatype

    @property
    def length(self) -> int:
        return len(self._storage)

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def data(self):
        if isinstance(self._storage, NumericStorage):
            return self._storage.readonly_view()
        return tuple(self._storage.tolist())

    def _offset(self, indices: tuple) -> int:
        if len(indices) != len(self._shape):
            raise IndexOutOfBoundsError(f"Expected {len(self._shape)} indices, got {len(indices)}")
        offset = 0
        for axis, (raw, size, stride) in enumerate(zip(indices, self._shape, self._strides)):
            index = operator.index(raw)
            if index < 0 or index >= size:
                raise IndexOutOfBoundsError("Index out of bounds", axis=axis, index=index, size=size)
            offset += index * stride
        return offset

    def _flat_offset(self, flat_index) -> int:
        index = operator.index(flat_index)
        if index < 0 or index >= len(self._storage):
            raise IndexOutOfBoundsError(f"Flat index {index} not in [0, {len(self._storage)})")
        return index

    def get(self, *indices):
        return self._storage.get(self._offset(indices))

    def set(self, *args) -> None:
        """``set(i0, i1, ..., value)``: write ``value`` at the given indices."""
        if not args:
            raise TypeError("set() needs indices followed by a value")
        *indices, value = args
        self._storage.set(self._offset(tuple(indices)), value)

    def get_n(self, flat_index: int):
        return self._storage.get(self._flat_offset(flat_index))

    def set_n(self, flat_index: int, value) -> None:
        self._storage.set(self._flat_offset(flat_index), value)

    def fill(self, value) -> None:
        self._storage.fill(value)

    def for_each(self, callback: Callable[..., object]) -> None:
        """Call ``callback(value, *indices)`` once per cell in row-major order."""
        cells = self._storage.tolist()
        for value, index in zip(cells, product(*(range(dim) for dim in self._shape))):
            callback(value, *index)

    def clone(self) -> "NDArray":
        copy = NDArray.__new__(NDArray)
        copy._shape = self._shape
        copy._strides = self._strides
        copy._storage = self._storage.clone()
        return copy

    def is_shape_equal(self, other: "NDArray") -> bool:
        return self._shape == other.shape

    def is_equal(self, other: "NDArray", tolerance: float = EPSILON) -> bool:
        if not self.is_shape_equal(other):
            return False
        return all(
            cells_equal(a, b, tolerance)
            for a, b in zip(self._storage.tolist(), other.storage.tolist())
        )

    def to_flat_list(self) -> list:
        return self._storage.tolist()

    def tolist(self):
        return _nest(self._storage.tolist(), self._shape)

    def __repr__(self) -> str:
        return f"NDArray(shape={self._shape}, datatype={self.datatype.value!r}, data={self.tolist()!r})"
