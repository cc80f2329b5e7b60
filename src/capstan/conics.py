"""Exact rational representations of circles and circular arcs."""

import numpy as np
import numpy.typing as npt

from .curve import Curve
from .knotvec import KnotVec, create_uniform_clamped_knot_vector
from .tolerance import ensure_float_dtype


def circular_arc(radius: float, angle: float, dtype: npt.DTypeLike = np.float64) -> Curve:
    """Create a degree 2 rational curve tracing an exact circular arc.

    The arc is centred at the origin, starts at ``(radius, 0)`` and runs
    counter-clockwise. It is split into the fewest segments spanning at most
    a quarter turn each; the middle control point of every segment has weight
    ``cos(delta / 2)``, ``delta`` being the segment angle.

    Args:
        radius (float): Arc radius. Must be finite and positive.
        angle (float): Swept angle in radians. Values above ``2 * pi`` are
            clipped to a full circle.
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        Curve: The arc, parametrised over ``[0, 1]``.

    Raises:
        ValueError: If radius is not positive or angle is not positive.

    Example:
        >>> arc = circular_arc(2.0, np.pi / 2)
        >>> arc.num_control_points
        3
    """
    dtype_obj = ensure_float_dtype(dtype)
    if not np.isfinite(radius) or radius <= 0:
        raise ValueError(f"radius must be finite and positive, got {radius}")
    if not angle > 0:
        raise ValueError(f"angle must be positive, got {angle}")
    angle = min(float(angle), 2.0 * np.pi)

    # Quarter turns up to rounding need a single segment each.
    num_segments = max(int(np.ceil(angle / (0.5 * np.pi) - 1e-9)), 1)
    delta = angle / num_segments
    half_cos = np.cos(0.5 * delta)

    ends = np.linspace(0.0, angle, num_segments + 1)
    mids = ends[:-1] + 0.5 * delta

    control_points = np.empty((2 * num_segments + 1, 2), dtype=np.float64)
    control_points[0::2] = radius * np.column_stack([np.cos(ends), np.sin(ends)])
    control_points[1::2] = (radius / half_cos) * np.column_stack([np.cos(mids), np.sin(mids)])

    weights = np.ones(2 * num_segments + 1, dtype=np.float64)
    weights[1::2] = half_cos

    knots = create_uniform_clamped_knot_vector(num_segments, 2, continuity=0, dtype=dtype_obj)
    return Curve(2, control_points.astype(dtype_obj), weights.astype(dtype_obj), knots)


def unit_circle(dtype: npt.DTypeLike = np.float64) -> Curve:
    """Create the unit circle from a square control polygon.

    Nine control points at the corners and edge midpoints of the square
    ``[-1, 1]^2`` (the first repeated at the end), weights alternating ``1``
    and ``sqrt(2) / 2``, and knots ``[0, 0, 0, .25, .25, .5, .5, .75, .75, 1, 1, 1]``.

    Args:
        dtype (npt.DTypeLike): float32 or float64. Defaults to float64.

    Returns:
        Curve: The circle, with ``evaluate(0.5) == (-1, 0)``.
    """
    dtype_obj = ensure_float_dtype(dtype)
    r = np.sqrt(2.0) / 2.0
    control_points = [
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0],
        [-1.0, 1.0],
        [-1.0, 0.0],
        [-1.0, -1.0],
        [0.0, -1.0],
        [1.0, -1.0],
        [1.0, 0.0],
    ]
    weights = [1.0, r, 1.0, r, 1.0, r, 1.0, r, 1.0]
    knots = KnotVec(
        np.array([0.0, 0.0, 0.0, 0.25, 0.25, 0.5, 0.5, 0.75, 0.75, 1.0, 1.0, 1.0], dtype=dtype_obj)
    )
    return Curve(2, control_points, weights, knots)
