"""Floating-point dtypes and comparison tolerances for curve evaluation."""

from functools import cache
from typing import Any, NamedTuple, cast

import numpy as np
from numpy import typing as npt


class _TolerancePreset(NamedTuple):
    """Tolerance values for the supported floating-point types."""

    float32: float
    float64: float


_DEFAULT_TOLERANCE = _TolerancePreset(1e-6, 1e-12)


@cache
def _ensure_float_dtype_by_name(name: str) -> np.dtype[np.floating[Any]]:
    """Cached validator returning a supported floating dtype from its canonical name.

    Args:
        name (str): Canonical NumPy dtype name (e.g., "float64").

    Returns:
        np.dtype[np.floating[Any]]: Validated floating-point dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    dtype_obj = np.dtype(name)
    if dtype_obj.type not in (np.float32, np.float64):
        raise ValueError(f"Unsupported dtype: {name}. dtype must be float32 or float64")
    return cast(np.dtype[np.floating[Any]], dtype_obj)


def ensure_float_dtype(dtype: npt.DTypeLike) -> np.dtype[np.floating[Any]]:
    """Normalize and validate a dtype-like into a supported floating dtype.

    Curves are evaluated in the dtype of their knots, and the compiled
    evaluation kernels exist for float32 and float64 only.

    Args:
        dtype (npt.DTypeLike): Any dtype-like object.

    Returns:
        np.dtype[np.floating[Any]]: The validated dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    try:
        dtype_obj = np.dtype(dtype)
    except TypeError as exc:
        raise ValueError(f"Unsupported dtype: {dtype!r}") from exc
    return _ensure_float_dtype_by_name(dtype_obj.name)


def get_default_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a reasonable tolerance for comparing evaluated curve points.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.

    Returns:
        float: Recommended tolerance for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.

    Example:
        >>> get_default_tolerance(np.float32)
        1e-06
        >>> get_default_tolerance("float64")
        1e-12
    """
    dtype_obj = ensure_float_dtype(dtype)
    if dtype_obj.type == np.float32:
        return _DEFAULT_TOLERANCE.float32
    return _DEFAULT_TOLERANCE.float64


def get_machine_epsilon(dtype: npt.DTypeLike) -> float:
    """Get machine epsilon for a given floating-point dtype.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.

    Returns:
        float: Machine epsilon for the given dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    return float(np.finfo(ensure_float_dtype(dtype)).eps)
