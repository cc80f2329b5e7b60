"""Numba kernels for rational curve evaluation.

Inputs are assumed to be correct (no validation performed); see
`capstan.curve.Curve` for the checked entry points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from ._knots_impl import _find_spans_impl, _readonly, nb_jit


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _homogeneous_lift_impl(
    control_points: npt.NDArray[np.float32 | np.float64],
    weights: npt.NDArray[np.float32 | np.float64],
) -> npt.NDArray[np.float32 | np.float64]:
    """Lift weighted control points to homogeneous coordinates.

    Args:
        control_points (npt.NDArray[np.float32 | np.float64]): Array of shape
            ``(n, dim)``.
        weights (npt.NDArray[np.float32 | np.float64]): Array of shape ``(n,)``.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of shape ``(n, dim + 1)``
            whose rows are ``[P_i * w_i, w_i]``.
    """
    n, dim = control_points.shape
    lifted = np.empty((n, dim + 1), dtype=control_points.dtype)
    for i in range(n):
        w = weights[i]
        for c in range(dim):
            lifted[i, c] = control_points[i, c] * w
        lifted[i, dim] = w
    return lifted


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _eval_rational_de_Boor_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    homogeneous_points: npt.NDArray[np.float32 | np.float64],
    spans: npt.NDArray[np.int_],
    pts: npt.NDArray[np.float32 | np.float64],
) -> npt.NDArray[np.float32 | np.float64]:
    """Run the de Boor recurrence on homogeneous control points.

    For each point ``u`` with span ``k``, the working values start as the
    homogeneous control points ``k - degree, ..., k``. At round ``r`` (from 1
    to ``degree``) and for ``i`` from ``k`` down to ``k - degree + r``::

        alpha = (u - t[i]) / (t[i + degree - r + 1] - t[i])
        d[i] = (1 - alpha) * d[i - 1] + alpha * d[i]

    with ``alpha = 0`` when the denominator is exactly zero.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Knot vector.
        degree (int): Curve degree.
        homogeneous_points (npt.NDArray[np.float32 | np.float64]): Lifted control
            points of shape ``(n, dim + 1)``.
        spans (npt.NDArray[np.int_]): Knot span of every point.
        pts (npt.NDArray[np.float32 | np.float64]): Parameter values (1D array).

    Returns:
        npt.NDArray[np.float32 | np.float64]: Homogeneous curve points of shape
            ``(pts.size, dim + 1)``. The last column holds the blended weight.
    """
    dtype = knots.dtype
    zero = dtype.type(0.0)
    one = dtype.type(1.0)

    n_coords = homogeneous_points.shape[1]
    out = np.empty((pts.size, n_coords), dtype=dtype)
    d = np.empty((degree + 1, n_coords), dtype=dtype)

    for pt_id in range(pts.size):
        u = pts[pt_id]
        first = spans[pt_id] - degree

        for j in range(degree + 1):
            for c in range(n_coords):
                d[j, c] = homogeneous_points[first + j, c]

        for r in range(1, degree + 1):
            for j in range(degree, r - 1, -1):
                i = first + j
                denom = knots[i + degree - r + 1] - knots[i]
                alpha = zero if denom == zero else (u - knots[i]) / denom
                beta = one - alpha
                for c in range(n_coords):
                    d[j, c] = beta * d[j - 1, c] + alpha * d[j, c]

        for c in range(n_coords):
            out[pt_id, c] = d[degree, c]

    return out


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call."""
    knots_dummy = _readonly(np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0], dtype=np.float64))
    points_dummy = _readonly(np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]], dtype=np.float64))
    weights_dummy = _readonly(np.ones(3, dtype=np.float64))
    pts_dummy = np.array([0.5], dtype=np.float64)
    degree_dummy = 2

    lifted = _readonly(_homogeneous_lift_impl(points_dummy, weights_dummy))
    spans = _find_spans_impl(knots_dummy, degree_dummy, pts_dummy)
    _eval_rational_de_Boor_impl(knots_dummy, degree_dummy, lifted, spans, pts_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_eval_rational_de_Boor_impl",
    "_homogeneous_lift_impl",
]
