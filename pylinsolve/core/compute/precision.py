"""
Scalar types and precision utilities.

pylinsolve computes in exactly one of two scalar types, float32 or float64.
Every call resolves its inputs to one of them up front and then does all
of its arithmetic in that type.
"""

import numpy as np
from numpy.typing import DTypeLike

from pylinsolve.core.exceptions import ValidationError


# Scalar types a solve can run in
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (np.dtype(np.float32), np.dtype(np.float64))


def _promote_one(dtype: np.dtype) -> np.dtype:
    if dtype == np.bool_ or np.issubdtype(dtype, np.integer):
        return np.dtype(np.float64)
    if dtype == np.float16:
        return np.dtype(np.float32)
    return dtype


def check_supported_dtype(dtype: DTypeLike, name: str = 'dtype') -> np.dtype:
    """
    Normalize dtype and verify it is float32 or float64.

    Raises:
        ValidationError: For any other type
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a dtype: {dtype!r}") from e
    if resolved not in SUPPORTED_DTYPES:
        raise ValidationError(
            f"{name}: unsupported scalar type {resolved}, expected float32 or float64"
        )
    return resolved


def resolve_scalar_type(
    *dtypes: np.dtype,
    override: DTypeLike | None = None,
) -> np.dtype:
    """
    Pick the single scalar type a solve will run in.

    Rules:
        - override, when given, wins (and must be float32 or float64)
        - integer and bool inputs count as float64
        - float16 counts as float32
        - the remaining types are combined with np.result_type

    Args:
        *dtypes: dtypes of the input arrays
        override: Explicit scalar type requested by the caller

    Returns:
        np.dtype('float32') or np.dtype('float64')

    Raises:
        ValidationError: If the inputs resolve to anything else (longdouble)
    """
    if override is not None:
        return check_supported_dtype(override)
    if not dtypes:
        return np.dtype(np.float64)
    promoted = np.result_type(*(_promote_one(np.dtype(d)) for d in dtypes))
    return check_supported_dtype(promoted, name='inputs')
