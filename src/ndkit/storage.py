"""Flat backing stores for NDArray: fixed-width numeric or boxed cells."""

from __future__ import annotations

import numbers
from collections.abc import Iterable

import numpy as np

from .complex import Complex
from .dtypes import DataType
from .errors import TypeMismatchError


def is_real(value: object) -> bool:
    return isinstance(value, numbers.Real)


class Storage:
    """Indexed-access capability set shared by both backends.

    Offsets are flat row-major positions already validated by the caller.
    """

    datatype: DataType

    def __len__(self) -> int:
        raise NotImplementedError

    def get(self, offset: int):
        raise NotImplementedError

    def set(self, offset: int, value) -> None:
        raise NotImplementedError

    def fill(self, value) -> None:
        raise NotImplementedError

    def clone(self) -> "Storage":
        raise NotImplementedError

    def tolist(self) -> list:
        raise NotImplementedError

    def assign_cells(self, cells: list) -> None:
        """Overwrite every cell from a row-major list of the same length."""
        raise NotImplementedError


class NumericStorage(Storage):
    """Fixed-width cells in a flat host buffer.

    The buffer is a mutable numpy array owned by this storage, so single
    cells are read and written in place. jax only sees it when a vectorised
    kernel runs.
    """

    def __init__(self, data, datatype: DataType) -> None:
        if not datatype.is_numeric:
            raise TypeMismatchError("NumericStorage requires a fixed-width datatype")
        self.datatype = datatype
        self._data = np.ravel(np.asarray(data)).astype(datatype.dtype)

    @classmethod
    def zeros(cls, length: int, datatype: DataType) -> "NumericStorage":
        return cls(np.zeros((length,), dtype=datatype.dtype), datatype)

    @classmethod
    def from_values(cls, values: Iterable, datatype: DataType) -> "NumericStorage":
        cells = list(values)
        for idx, item in enumerate(cells):
            if not is_real(item):
                raise TypeMismatchError(
                    f"Cell {idx} of type {type(item).__name__} cannot be stored as {datatype.value}"
                )
        # Convert at natural width first so out-of-range ints wrap instead of overflowing.
        return cls(np.asarray(cells), datatype)

    @property
    def array(self) -> np.ndarray:
        return self._data

    def readonly_view(self) -> np.ndarray:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def assign(self, data) -> None:
        """Replace every cell at once, converting to this storage's width."""
        flat = np.ravel(np.asarray(data))
        if flat.shape != self._data.shape:
            raise ValueError(f"assign expects {self._data.shape[0]} cells, got {flat.shape[0]}")
        self._data[...] = flat.astype(self.datatype.dtype)

    def assign_cells(self, cells: list) -> None:
        replacement = NumericStorage.from_values(cells, self.datatype)
        self.assign(replacement.array)

    def _convert(self, value) -> np.ndarray:
        if not is_real(value):
            raise TypeMismatchError(
                f"Cannot store value of type {type(value).__name__} in {self.datatype.value} array"
            )
        return np.asarray(value).astype(self.datatype.dtype)

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def get(self, offset: int):
        return self._data[offset].item()

    def set(self, offset: int, value) -> None:
        self._data[offset] = self._convert(value)

    def fill(self, value) -> None:
        self._data[...] = self._convert(value)

    def clone(self) -> "NumericStorage":
        return NumericStorage(self._data, self.datatype)

    def tolist(self) -> list:
        return self._data.tolist()


class BoxedStorage(Storage):
    """Generic cells in a Python list; numbers and Complex may be mixed."""

    datatype = DataType.UNTYPED

    def __init__(self, cells: list) -> None:
        self._cells = cells

    @classmethod
    def zeros(cls, length: int) -> "BoxedStorage":
        return cls([0] * length)

    @classmethod
    def from_values(cls, values: Iterable) -> "BoxedStorage":
        return cls([_box(item) for item in values])

    def __len__(self) -> int:
        return len(self._cells)

    def get(self, offset: int):
        return self._cells[offset]

    def set(self, offset: int, value) -> None:
        self._cells[offset] = _box(value)

    def fill(self, value) -> None:
        boxed = _box(value)
        self._cells = [_copy_cell(boxed) for _ in self._cells]

    def clone(self) -> "BoxedStorage":
        return BoxedStorage([_copy_cell(item) for item in self._cells])

    def tolist(self) -> list:
        return [_copy_cell(item) for item in self._cells]

    def assign_cells(self, cells: list) -> None:
        if len(cells) != len(self._cells):
            raise ValueError(f"assign_cells expects {len(self._cells)} cells, got {len(cells)}")
        self._cells = [_box(item) for item in cells]


def _box(value):
    if isinstance(value, Complex):
        return value.clone()
    if isinstance(value, complex):
        return Complex.from_complex(value)
    if is_real(value):
        return value
    raise TypeMismatchError(f"Cannot store value of type {type(value).__name__} in untyped array")


def _copy_cell(value):
    return value.clone() if isinstance(value, Complex) else value
