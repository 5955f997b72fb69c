"""Datatype enumeration for fixed-width numeric storage."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .errors import TypeMismatchError


class DataType(str, Enum):
    I8 = "i8"
    UI8 = "ui8"
    I16 = "i16"
    UI16 = "ui16"
    I32 = "i32"
    UI32 = "ui32"
    F32 = "f32"
    F64 = "f64"
    UNTYPED = "untyped"

    @property
    def is_numeric(self) -> bool:
        return self is not DataType.UNTYPED

    @property
    def is_integer(self) -> bool:
        return self.is_numeric and self not in (DataType.F32, DataType.F64)

    @property
    def dtype(self) -> np.dtype:
        if not self.is_numeric:
            raise TypeMismatchError("untyped storage has no fixed-width dtype")
        return _HOST_DTYPES[self]

    @classmethod
    def coerce(cls, value: "DataType | str | None") -> "DataType":
        if value is None:
            return cls.UNTYPED
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise TypeMismatchError(f"Unknown datatype {value!r}; expected one of {names}") from None

    @classmethod
    def from_dtype(cls, dtype) -> "DataType":
        key = np.dtype(dtype)
        for member, candidate in _HOST_DTYPES.items():
            if candidate == key:
                return member
        raise TypeMismatchError(f"Buffer dtype {key} has no fixed-width datatype; pass datatype= to convert it")


_HOST_DTYPES = {
    DataType.I8: np.dtype(np.int8),
    DataType.UI8: np.dtype(np.uint8),
    DataType.I16: np.dtype(np.int16),
    DataType.UI16: np.dtype(np.uint16),
    DataType.I32: np.dtype(np.int32),
    DataType.UI32: np.dtype(np.uint32),
    DataType.F32: np.dtype(np.float32),
    DataType.F64: np.dtype(np.float64),
}
