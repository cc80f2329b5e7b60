"""Numba kernels for knot vector validation and knot span lookup.

These functions expect pre-validated, C-contiguous 1D arrays of float32 or
float64 and perform no validation of their own; `capstan.knotvec` is the
checked entry point.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _find_first_decrease_impl(knots: npt.NDArray[np.float32 | np.float64]) -> int:
    """Find the first position where the knot sequence decreases.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Knot sequence.

    Returns:
        int: Smallest index ``i`` such that ``knots[i] > knots[i + 1]``,
            or -1 if the sequence is non-decreasing.
    """
    for i in range(knots.size - 1):
        if knots[i] > knots[i + 1]:
            return i
    return -1


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _is_clamped_impl(knots: npt.NDArray[np.float32 | np.float64], degree: int) -> bool:
    """Check whether both end knots have multiplicity ``degree + 1``.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Non-decreasing knot vector.
        degree (int): Non-negative B-spline degree.

    Returns:
        bool: True if the first and last ``degree + 1`` knots are repeated,
            False otherwise, including when there are fewer than
            ``2 * degree + 2`` knots.
    """
    n = knots.size
    if n < 2 * (degree + 1):
        return False

    first, last = knots[0], knots[n - 1]
    for i in range(degree + 1):
        if knots[i] != first or knots[n - 1 - i] != last:
            return False
    return True


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _find_spans_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    pts: npt.NDArray[np.float32 | np.float64],
) -> npt.NDArray[np.int_]:
    """Find the knot span containing each point.

    The domain is ``[knots[degree], knots[-degree - 1]]``. For a point ``u``
    strictly below the domain end, the span ``k`` satisfies
    ``knots[k] <= u < knots[k + 1]``. For ``u`` equal to the domain end, the
    last span of non-zero length is returned, i.e. the largest ``k`` with
    ``knots[k] < u``.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Non-decreasing knot vector
            with at least ``2 * degree + 2`` entries and a non-empty domain.
        degree (int): Non-negative B-spline degree.
        pts (npt.NDArray[np.float32 | np.float64]): Points (1D array) to locate.

    Returns:
        npt.NDArray[np.int_]: Span index for every point, or -1 for points
            outside the domain (NaN included).
    """
    lower = knots[degree]
    upper = knots[knots.size - degree - 1]

    right = np.searchsorted(knots, pts, side="right") - 1
    left = np.searchsorted(knots, pts, side="left") - 1

    spans = np.empty(pts.size, dtype=np.intp)
    for pt_id in range(pts.size):
        pt = pts[pt_id]
        if not (lower <= pt <= upper):
            spans[pt_id] = -1
        elif pt == upper:
            spans[pt_id] = left[pt_id]
        else:
            spans[pt_id] = right[pt_id]
    return spans


def _readonly(array: npt.NDArray[Any]) -> npt.NDArray[Any]:
    """Return ``array`` with its writeable flag cleared."""
    array.flags.writeable = False
    return array


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call.

    Knot vectors are stored read-only, so the kernels are warmed up with
    read-only arrays, matching the types seen at runtime.
    """
    knots_dummy = _readonly(np.array([0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0], dtype=np.float64))
    pts_dummy = np.array([0.25, 1.0], dtype=np.float64)
    degree_dummy = 2

    _find_first_decrease_impl(knots_dummy)
    _is_clamped_impl(knots_dummy, degree_dummy)
    _find_spans_impl(knots_dummy, degree_dummy, pts_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_find_first_decrease_impl",
    "_find_spans_impl",
    "_is_clamped_impl",
    "_readonly",
    "nb_jit",
]
