"""Operand classification for the arithmetic dispatch engine."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum

from .complex import Complex
from .dtypes import DataType
from .errors import TypeMismatchError
from .ndarray import NDArray

Operand = float | int | Complex | NDArray


class OperandKind(str, Enum):
    NUMBER = "number"
    COMPLEX = "complex"
    ARRAY = "array"


@dataclass(frozen=True)
class OperandInfo:
    kind: OperandKind
    shape: tuple[int, ...]
    rank: int
    datatype: DataType | None


def as_operand(value: object, *, where: str = "operand") -> Operand:
    """Return ``value`` as an engine operand, converting builtin ``complex``."""
    if isinstance(value, (NDArray, Complex)):
        return value
    if isinstance(value, complex):
        return Complex.from_complex(value)
    if isinstance(value, numbers.Real):
        return value
    raise TypeMismatchError(f"{where} has unsupported type {type(value).__name__}")


def kind_of(value: object) -> OperandKind:
    if isinstance(value, NDArray):
        return OperandKind.ARRAY
    if isinstance(value, Complex):
        return OperandKind.COMPLEX
    if isinstance(value, numbers.Real):
        return OperandKind.NUMBER
    raise TypeMismatchError(f"Unsupported operand type {type(value).__name__}")


def operand_info(value: object) -> OperandInfo:
    kind = kind_of(value)
    if kind is OperandKind.ARRAY:
        return OperandInfo(kind=kind, shape=value.shape, rank=value.rank, datatype=value.datatype)
    return OperandInfo(kind=kind, shape=(), rank=0, datatype=None)


def is_identity(value: object, identity: int) -> bool:
    """True for a plain number equal to ``identity`` (never for Complex or arrays)."""
    return kind_of(value) is OperandKind.NUMBER and value == identity
