"""
Input validation utilities for PyMathPack.

Shared by the value-type constructors, the matrix procedures and the
solvers. Each check tests one property and raises on the first violation;
nothing is clipped or coerced beyond np.asarray + float64. Messages start
with the name of the offending argument or routine.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymathpack.core.exceptions import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real data"
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionMismatchError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionMismatchError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            actual=array.shape,
        )


def check_size(array: NDArray[np.floating[Any]], size: int, name: str) -> None:
    """
    Verify array holds exactly `size` elements.

    Raises:
        DimensionMismatchError: If the element count differs
    """
    if array.size != size:
        raise DimensionMismatchError(
            f"{name}: expected {size} elements, got {array.size}",
            expected=(size,),
            actual=(array.size,),
        )


def check_positive_dims(*dims: int, name: str) -> None:
    """
    Verify every dimension is a positive integer.

    Raises:
        DimensionMismatchError: If any dimension is < 1
    """
    for d in dims:
        if int(d) != d or d < 1:
            raise DimensionMismatchError(
                f"{name}: dimensions must be positive integers, got {dims}",
                actual=tuple(dims),
            )


def check_square(rows: int, cols: int, name: str) -> None:
    """
    Verify a matrix shape is square.

    Raises:
        DimensionMismatchError: If rows != cols
    """
    if rows != cols:
        raise DimensionMismatchError(
            f"{name}: expected a square matrix, got {rows} x {cols}",
            expected=(rows, rows),
            actual=(rows, cols),
        )


def check_index(index: int, bound: int, name: str) -> int:
    """
    Verify 0 <= index < bound.

    Negative indices are out of range; there is no wrap-around.

    Returns:
        The index as a Python int

    Raises:
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfRangeError(
            f"{name}: index must be an integer, got {type(index).__name__}",
            index=None,
            bound=bound,
        )
    if index < 0 or index >= bound:
        raise IndexOutOfRangeError(
            f"{name}: index {index} out of range [0, {bound})",
            index=int(index),
            bound=bound,
        )
    return int(index)
