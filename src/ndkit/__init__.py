"""ndkit public API."""

import logging

from .config import EPSILON
from .errors import (
    DivisionByArrayError,
    IndexOutOfBoundsError,
    InvalidShapeError,
    LengthMismatchError,
    NDKitError,
    NDShapeError,
    NDTypeError,
    RankMismatchError,
    ShapeMismatchError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from .complex import Complex
from .dtypes import DataType
from .ndarray import NDArray
from .aabb import AABB
from .numeric import isequal, iszero
from .arithmetic import add, div, mul, sub
from .vector import cross, dir, dot, length
from .construct import arr, count, empty, eye, range, zeros

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EPSILON",
    "NDArray",
    "Complex",
    "AABB",
    "DataType",
    "eye",
    "zeros",
    "empty",
    "arr",
    "range",
    "iszero",
    "isequal",
    "add",
    "mul",
    "sub",
    "div",
    "dot",
    "cross",
    "length",
    "dir",
    "count",
    "NDKitError",
    "NDShapeError",
    "NDTypeError",
    "InvalidShapeError",
    "IndexOutOfBoundsError",
    "TypeMismatchError",
    "ShapeMismatchError",
    "RankMismatchError",
    "LengthMismatchError",
    "UnsupportedOperationError",
    "DivisionByArrayError",
]
