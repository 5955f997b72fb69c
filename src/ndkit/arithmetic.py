"""Polymorphic elementwise arithmetic over numbers, Complex and NDArray.

Every binary step classifies both operands as ``number``, ``complex`` or
``array`` and resolves the pair through a closed table:

* number/complex with number/complex: scalar arithmetic, promoting a plain
  number to Complex when the other side is Complex;
* array with number/complex: the scalar is broadcast over every cell;
* array with array: cells are combined pairwise and shapes must match.

Results are new values; operands are never modified. The variadic ``add``
and ``mul`` fold left to right and skip the identity literals ``0`` and
``1`` by returning the other operand unchanged.
"""

from __future__ import annotations

import logging
import numbers
from functools import lru_cache
from typing import Callable, Final

import jax
import jax.numpy as jnp
import numpy as np

from .complex import Complex
from .config import KERNEL_CACHE_MAX, USE_VECTORIZED_FAST_PATH, x64_enabled
from .errors import DivisionByArrayError, ShapeMismatchError, UnsupportedOperationError
from .ndarray import NDArray
from .numeric import reciprocal
from .storage import NumericStorage
from .values import Operand, OperandKind, as_operand, is_identity, kind_of, operand_info

_LOGGER = logging.getLogger(__name__)

_NO_FAST_PATH: Final = object()

_NUMBER = OperandKind.NUMBER
_COMPLEX = OperandKind.COMPLEX

ScalarOp = Callable[[object, object], object]

_SCALAR_OPS: Final[dict[str, dict[tuple[OperandKind, OperandKind], ScalarOp]]] = {
    "add": {
        (_NUMBER, _NUMBER): lambda a, b: a + b,
        (_NUMBER, _COMPLEX): lambda a, b: Complex(b.real + a, b.imag),
        (_COMPLEX, _NUMBER): lambda a, b: Complex(a.real + b, a.imag),
        (_COMPLEX, _COMPLEX): lambda a, b: Complex(a.real + b.real, a.imag + b.imag),
    },
    "mul": {
        (_NUMBER, _NUMBER): lambda a, b: a * b,
        (_NUMBER, _COMPLEX): lambda a, b: Complex(b.real * a, b.imag * a),
        (_COMPLEX, _NUMBER): lambda a, b: Complex(a.real * b, a.imag * b),
        (_COMPLEX, _COMPLEX): lambda a, b: Complex(
            a.real * b.real - a.imag * b.imag,
            a.imag * b.real + a.real * b.imag,
        ),
    },
}

_BASE_BINARY_OPS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    "add": lambda w, x: w + x,
    "mul": lambda w, x: w * x,
}


@lru_cache(maxsize=KERNEL_CACHE_MAX)
def _jitted_binary_kernel(op: str) -> Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]:
    _LOGGER.debug("compiling elementwise kernel %r", op)
    return jax.jit(_BASE_BINARY_OPS[op])


def _combine_scalars(op: str, a, b):
    return _SCALAR_OPS[op][(kind_of(a), kind_of(b))](a, b)


def _fast_elementwise(op: str, array: NDArray, other, *, array_first: bool):
    """Vectorised combination for numeric storage, or ``_NO_FAST_PATH``.

    Works at 64-bit width and leaves the cast to the result datatype to the
    caller, which matches converting each cell individually.
    """
    if not USE_VECTORIZED_FAST_PATH or not isinstance(array.storage, NumericStorage):
        return _NO_FAST_PATH
    if not x64_enabled():
        _LOGGER.debug("%s: jax_enable_x64 is off, using cell-by-cell path", op)
        return _NO_FAST_PATH
    info = operand_info(other)
    if info.kind is _COMPLEX:
        _LOGGER.debug("%s: complex operand, using cell-by-cell path", op)
        return _NO_FAST_PATH
    if info.kind is OperandKind.ARRAY:
        if not info.datatype.is_numeric:
            _LOGGER.debug("%s: boxed operand, using cell-by-cell path", op)
            return _NO_FAST_PATH
        integral = array.datatype.is_integer and info.datatype.is_integer
        x = other.storage.array
    else:
        integral = array.datatype.is_integer and isinstance(other, numbers.Integral)
        x = other

    wide = jnp.int64 if integral else jnp.float64
    w = jnp.asarray(array.storage.array, dtype=wide)
    x = jnp.asarray(x, dtype=wide)
    kernel = _jitted_binary_kernel(op)
    return np.asarray(kernel(w, x) if array_first else kernel(x, w))


def _combine_array_scalar(op: str, array: NDArray, scalar, *, array_first: bool) -> NDArray:
    result = array.clone()
    fast = _fast_elementwise(op, array, scalar, array_first=array_first)
    if fast is not _NO_FAST_PATH:
        result.storage.assign(fast)
        return result
    if array_first:
        cells = [_combine_scalars(op, value, scalar) for value in array.to_flat_list()]
    else:
        cells = [_combine_scalars(op, scalar, value) for value in array.to_flat_list()]
    result.storage.assign_cells(cells)
    return result


def _combine_arrays(op: str, a: NDArray, b: NDArray) -> NDArray:
    if op == "mul":
        raise UnsupportedOperationError(
            "NDArray*NDArray is not supported; use a linear-algebra package for matrix products"
        )
    if not a.is_shape_equal(b):
        left, right = operand_info(a), operand_info(b)
        raise ShapeMismatchError(
            f"Elementwise {op} of NDArrays with mismatched shapes {left.shape} ({left.datatype.value}) "
            f"and {right.shape} ({right.datatype.value})"
        )
    result = a.clone()
    fast = _fast_elementwise(op, a, b, array_first=True)
    if fast is not _NO_FAST_PATH:
        result.storage.assign(fast)
        return result
    cells = [_combine_scalars(op, av, bv) for av, bv in zip(a.to_flat_list(), b.to_flat_list())]
    result.storage.assign_cells(cells)
    return result


def _combine_two(op: str, a: Operand, b: Operand) -> Operand:
    a_kind = kind_of(a)
    b_kind = kind_of(b)
    if a_kind is OperandKind.ARRAY:
        if b_kind is OperandKind.ARRAY:
            return _combine_arrays(op, a, b)
        return _combine_array_scalar(op, a, b, array_first=True)
    if b_kind is OperandKind.ARRAY:
        return _combine_array_scalar(op, b, a, array_first=False)
    return _combine_scalars(op, a, b)


def _add_two(a: Operand, b: Operand) -> Operand:
    if is_identity(a, 0):
        return b
    if is_identity(b, 0):
        return a
    return _combine_two("add", a, b)


def _mul_two(a: Operand, b: Operand) -> Operand:
    if is_identity(a, 1):
        return b
    if is_identity(b, 1):
        return a
    return _combine_two("mul", a, b)


def _fold(name: str, combine: Callable[[Operand, Operand], Operand], operands: tuple) -> Operand:
    if not operands:
        raise TypeError(f"{name}() needs at least one operand")
    values = [as_operand(value, where=f"{name}() operand {idx}") for idx, value in enumerate(operands)]
    acc = values[0]
    for value in values[1:]:
        acc = combine(acc, value)
    return acc


def add(*operands) -> Operand:
    """Add operands left to right.

    Any mix of numbers, Complex and NDArray is accepted; arrays taking part
    in the same sum must share a shape.
    """
    return _fold("add", _add_two, operands)


def mul(*operands) -> Operand:
    """Multiply operands left to right; at most one side of each step may be an array."""
    return _fold("mul", _mul_two, operands)


def sub(a, b) -> Operand:
    """``a - b``, computed as ``add(a, mul(-1, b))``."""
    a = as_operand(a, where="sub() operand 0")
    b = as_operand(b, where="sub() operand 1")
    return _add_two(a, _mul_two(-1, b))


def inverse(value) -> float | Complex:
    value = as_operand(value, where="divisor")
    if isinstance(value, NDArray):
        raise DivisionByArrayError("Cannot divide by an NDArray")
    if isinstance(value, Complex):
        return value.inverse()
    return reciprocal(value)


def div(a, b) -> Operand:
    """``a / b`` for a scalar or Complex divisor ``b``; ``b`` may not be an array."""
    a = as_operand(a, where="div() operand 0")
    return _mul_two(a, inverse(b))
