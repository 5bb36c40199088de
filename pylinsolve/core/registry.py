"""
Named operation registry.

Operations are registered under a (name, scalar type) key, the way a
tensor framework routes an op name plus dtype to a concrete kernel. The
registry holds factories; get_op builds a fresh op instance on each call,
so callers never share op state.

Usage:
    from pylinsolve.core.registry import get_op

    op = get_op('BatchMatrixSolve', np.float32)
    outcome = op(A, B)
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import DTypeLike

from pylinsolve.core.compute.precision import check_supported_dtype

OpKey = tuple[str, np.dtype]

_REGISTRY: dict[OpKey, Callable[[], Any]] = {}


def _key(name: str, dtype: DTypeLike) -> OpKey:
    return (name, check_supported_dtype(dtype))


def register_op(name: str, dtype: DTypeLike, factory: Callable[[], Any]) -> None:
    """
    Register an op factory under (name, dtype).

    Raises:
        ValueError: If (name, dtype) is already registered
        ValidationError: If dtype is not float32 or float64
    """
    key = _key(name, dtype)
    if key in _REGISTRY:
        raise ValueError(f"Op {name!r} is already registered for {key[1]}")
    _REGISTRY[key] = factory


def get_op(name: str, dtype: DTypeLike) -> Any:
    """
    Build the op registered under (name, dtype).

    Raises:
        KeyError: If nothing is registered under that key, listing what is
    """
    key = _key(name, dtype)
    if key not in _REGISTRY:
        available = sorted(f"{n}[{d}]" for n, d in _REGISTRY)
        raise KeyError(
            f"No op registered as {name!r} for {key[1]}. Available: {available}"
        )
    return _REGISTRY[key]()


def registered_ops() -> list[tuple[str, str]]:
    """All registered (name, dtype name) pairs, sorted."""
    return sorted((n, d.name) for n, d in _REGISTRY)
