"""
Input validation utilities for pylinsolve.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Nothing is validated after a
buffer has been touched.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinsolve.core.exceptions import ConfigurationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (ragged nesting, mixed types) or a non-numeric dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ConfigurationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ConfigurationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ConfigurationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ConfigurationError(
            f"{name}: complex dtype {result.dtype} is not supported, expected real data"
        )

    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ConfigurationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ConfigurationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_nonempty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array has at least one element.

    Raises:
        DimensionError: If array is empty
    """
    if array.size == 0:
        raise DimensionError(f"{name}: empty array with shape {array.shape}")


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Raises:
        DimensionError: If the number of rows differs from the number of columns
    """
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected a square matrix, got shape {array.shape}"
        )


def check_length(array: NDArray[np.floating[Any]], n: int, name: str) -> None:
    """
    Verify a 1D array has exactly n elements.

    Raises:
        DimensionError: If the length differs from n
    """
    if array.shape[0] != n:
        raise DimensionError(
            f"{name}: expected length {n} to match the factorization order, "
            f"got {array.shape[0]}"
        )


def check_stride(n: int, ndim: int, size: int, name: str) -> None:
    """
    Verify a row stride describes a usable sub-block of a flat buffer.

    Requires ndim >= n >= 1 and a buffer holding at least n rows of
    ndim elements.

    Args:
        n: Logical order of the matrix
        ndim: Row stride (leading dimension) of the buffer
        size: Number of elements in the flat buffer
        name: Parameter name for error messages

    Raises:
        ConfigurationError: If the order, stride or buffer size is inconsistent
    """
    if n < 1:
        raise ConfigurationError(f"{name}: order must be at least 1, got n={n}")
    if ndim < n:
        raise ConfigurationError(
            f"{name}: row stride must be at least the order, got ndim={ndim} < n={n}"
        )
    if size < n * ndim:
        raise ConfigurationError(
            f"{name}: buffer holds {size} elements, need at least "
            f"n*ndim = {n * ndim}"
        )
