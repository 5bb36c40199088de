"""
Input validation utilities for pylinsolve.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinsolve.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[Any]:
    """
    Validate and convert input to a real numeric numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric
    data) and complex inputs. The dtype is returned unchanged; scalar
    type resolution happens in precision.resolve_scalar_type.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a real numeric or boolean dtype

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result


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


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_ndim(array: NDArray[Any], min_ndim: int, name: str) -> None:
    """
    Verify array has at least the specified number of dimensions.

    Args:
        array: Array to check
        min_ndim: Minimum number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has too few dimensions
    """
    if array.ndim < min_ndim:
        raise DimensionError(
            f"{name}: expected at least {min_ndim}D array, "
            f"got {array.ndim}D with shape {array.shape}"
        )


def check_same_ndim(
    first: NDArray[Any],
    second: NDArray[Any],
    names: tuple[str, str],
) -> None:
    """
    Verify two arrays have the same number of dimensions.

    Raises:
        DimensionError: If the ranks differ
    """
    if first.ndim != second.ndim:
        raise DimensionError(
            f"Input tensors must have the same number of dimensions: "
            f"{names[0]} is {first.ndim}D, {names[1]} is {second.ndim}D"
        )


def check_batch_dims(
    first: NDArray[Any],
    second: NDArray[Any],
    names: tuple[str, str],
) -> None:
    """
    Verify two stacks of matrices share the same leading (batch) dimensions.

    Both arrays must already be at least 2D; only shape[:-2] is compared.

    Raises:
        DimensionError: If the leading dimensions differ
    """
    if first.shape[:-2] != second.shape[:-2]:
        raise DimensionError(
            f"Batch dimensions do not match: {names[0]} has {first.shape[:-2]}, "
            f"{names[1]} has {second.shape[:-2]}"
        )


def check_choice(value: str, choices: tuple[str, ...], name: str) -> None:
    """
    Verify an option string is one of the accepted values.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name}: must be one of {choices}, got {value!r}"
        )
