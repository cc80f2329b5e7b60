"""Rational B-spline (NURBS) curves and their evaluation."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from ._curve_impl import _eval_rational_de_Boor_impl, _homogeneous_lift_impl
from ._knots_impl import _readonly
from .errors import (
    ControlPointWeightCountMismatchError,
    DegenerateWeightError,
    InvalidDegreeError,
    InvalidKnotVecError,
    KnotCountMismatchError,
    NonPositiveWeightError,
)
from .knotvec import KnotVec, _as_degree

logger = logging.getLogger(__name__)


def _as_dtype_array(values: npt.ArrayLike, name: str, dtype: np.dtype[Any]) -> npt.NDArray[Any]:
    """Copy ``values`` into a contiguous array of the curve dtype.

    Python sequences and integer arrays are converted. Floating-point arrays of
    another precision are rejected rather than silently widened or narrowed.

    Args:
        values (npt.ArrayLike): Input values.
        name (str): Argument name used in error messages.
        dtype (np.dtype): Target floating dtype (the knot dtype).

    Returns:
        npt.NDArray: A private C-contiguous copy of ``values``.

    Raises:
        TypeError: If ``values`` is a floating-point array of another dtype.
    """
    if isinstance(values, np.ndarray) and values.dtype.kind == "f" and values.dtype != dtype:
        raise TypeError(
            f"The {name} must have the same dtype as the knots. "
            f"Got {values.dtype} {name} and {dtype} knots."
        )
    return np.array(values, dtype=dtype, order="C")


class Curve:
    """A non-uniform rational B-spline curve.

    The curve is defined by its degree, ``n`` control points in ``dim``
    dimensions, one positive weight per control point and a knot vector with
    ``n + degree + 1`` knots (full-multiplicity convention). All data is
    validated once, at construction, and stored in read-only arrays of the knot
    dtype; evaluation is computed in that dtype.

    Example:
        >>> curve = Curve(
        ...     2, [[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]], [1.0, 1.0, 1.0],
        ...     [0.0, 0.0, 0.0, 1.0, 1.0, 1.0],
        ... )
        >>> curve.evaluate(0.5)
        array([1. , 0.5])

    Attributes:
        _degree (int): Polynomial degree.
        _knots (KnotVec): Knot vector.
        _control_points (npt.NDArray[np.float32 | np.float64]): Control points,
            shape ``(n, dim)``.
        _weights (npt.NDArray[np.float32 | np.float64]): Weights, shape ``(n,)``.
        _homogeneous_points (npt.NDArray[np.float32 | np.float64]): Lifted control
            points ``[P_i * w_i, w_i]``, shape ``(n, dim + 1)``.
    """

    _degree: int
    _knots: KnotVec
    _control_points: npt.NDArray[np.float32 | np.float64]
    _weights: npt.NDArray[np.float32 | np.float64]
    _homogeneous_points: npt.NDArray[np.float32 | np.float64]

    def __init__(
        self,
        degree: int,
        control_points: npt.ArrayLike,
        weights: npt.ArrayLike,
        knots: KnotVec | npt.ArrayLike,
    ) -> None:
        """Initialize a curve.

        Args:
            degree (int): Polynomial degree. Must be non-negative.
            control_points (npt.ArrayLike): Control points of shape ``(n, dim)``.
                A 1D sequence of length ``n`` is taken as ``dim == 1``.
            weights (npt.ArrayLike): One finite, positive weight per control point.
            knots (KnotVec | npt.ArrayLike): Knot vector with
                ``n + degree + 1`` entries.

        Raises:
            InvalidKnotVecError: If the knots are invalid or the curve domain
                ``[knots[degree], knots[n]]`` is empty.
            InvalidDegreeError: If the degree is negative or there are fewer than
                ``degree + 1`` control points.
            ControlPointWeightCountMismatchError: If the number of weights differs
                from the number of control points.
            NonPositiveWeightError: If a weight is not finite or not positive.
            KnotCountMismatchError: If the number of knots is not
                ``n + degree + 1``.
            TypeError: If degree is not an integer, or control points or weights
                are float arrays of a dtype different from the knots.
            ValueError: If control points or weights have an invalid shape, or
                control points are not finite.
        """
        knot_vec = knots if isinstance(knots, KnotVec) else KnotVec(knots)

        degree = _as_degree(degree)
        if degree < 0:
            raise InvalidDegreeError("degree must be non-negative", degree)

        points = _as_dtype_array(control_points, "control points", knot_vec.dtype)
        if points.ndim == 1:
            points = points.reshape(-1, 1)
        if points.ndim != 2 or points.shape[1] == 0:  # noqa: PLR2004
            raise ValueError(
                f"control points must have shape (n, dim), got shape {points.shape}"
            )
        num_points = points.shape[0]

        if num_points < degree + 1:
            raise InvalidDegreeError(
                f"Insufficient control points were supplied (N={num_points}) for a curve "
                f"of degree {degree}; at least {degree + 1} are required.",
                degree,
                num_points,
            )

        weights_array = _as_dtype_array(weights, "weights", knot_vec.dtype)
        if weights_array.ndim != 1:
            raise ValueError(f"weights must be a 1D sequence, got shape {weights_array.shape}")
        if weights_array.size != num_points:
            raise ControlPointWeightCountMismatchError(num_points, weights_array.size)

        invalid = np.flatnonzero(~(np.isfinite(weights_array) & (weights_array > 0)))
        if invalid.size > 0:
            index = int(invalid[0])
            raise NonPositiveWeightError(index, float(weights_array[index]))

        num_expected = num_points + degree + 1
        if len(knot_vec) != num_expected:
            raise KnotCountMismatchError(len(knot_vec), num_expected)

        lower, upper = knot_vec.domain(degree)
        if lower == upper:
            raise InvalidKnotVecError(
                f"The curve domain [{lower}, {upper}] is empty; "
                f"knots[{degree}] must be smaller than knots[{num_points}]."
            )

        if not np.all(np.isfinite(points)):
            raise ValueError("control points must be finite")

        self._degree = degree
        self._knots = knot_vec
        self._control_points = _readonly(points)
        self._weights = _readonly(weights_array)
        self._homogeneous_points = _readonly(_homogeneous_lift_impl(points, weights_array))

        logger.debug(
            "Built degree %d curve with %d control points in %d dimensions (%s)",
            degree,
            num_points,
            points.shape[1],
            knot_vec.dtype.name,
        )

    @property
    def degree(self) -> int:
        """The polynomial degree of the curve."""
        return self._degree

    @property
    def knots(self) -> KnotVec:
        """The knot vector."""
        return self._knots

    @property
    def control_points(self) -> npt.NDArray[np.float32 | np.float64]:
        """The (read-only) control points, shape ``(n, dim)``."""
        return self._control_points

    @property
    def weights(self) -> npt.NDArray[np.float32 | np.float64]:
        """The (read-only) weights, shape ``(n,)``."""
        return self._weights

    @property
    def homogeneous_control_points(self) -> npt.NDArray[np.float32 | np.float64]:
        """The (read-only) control points lifted to ``[P_i * w_i, w_i]``, shape ``(n, dim + 1)``."""
        return self._homogeneous_points

    @property
    def num_control_points(self) -> int:
        """The number of control points."""
        return int(self._control_points.shape[0])

    @property
    def dim(self) -> int:
        """The dimension of the space the curve lives in."""
        return int(self._control_points.shape[1])

    @property
    def dtype(self) -> np.dtype[Any]:
        """The floating-point dtype used for storage and evaluation."""
        return self._knots.dtype

    @property
    def domain(self) -> tuple[np.floating[Any], np.floating[Any]]:
        """The parameter domain ``(knots[degree], knots[n])``."""
        return self._knots.domain(self._degree)

    @property
    def min_u(self) -> np.floating[Any]:
        """The smallest valid parameter value."""
        return self.domain[0]

    @property
    def max_u(self) -> np.floating[Any]:
        """The largest valid parameter value."""
        return self.domain[1]

    @property
    def is_clamped(self) -> bool:
        """Whether the knot vector is clamped for the curve degree.

        A clamped curve interpolates its first and last control points.
        """
        return self._knots.is_clamped(self._degree)

    @property
    def is_rational(self) -> bool:
        """Whether the weights differ, i.e. the curve is not a plain B-spline."""
        return bool(np.any(self._weights != self._weights[0]))

    def __repr__(self) -> str:
        return (
            f"Curve(degree={self._degree}, num_control_points={self.num_control_points}, "
            f"dim={self.dim}, dtype={self.dtype.name})"
        )

    def _evaluate_points(self, pts: npt.NDArray[Any]) -> npt.NDArray[np.float32 | np.float64]:
        """Evaluate the curve at a 1D array of parameters.

        Args:
            pts (npt.NDArray): Parameter values as given by the caller. They are
                range checked before being converted to the curve dtype.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Curve points, shape ``(pts.size, dim)``.

        Raises:
            ParameterOutOfRangeError: If any parameter is outside the domain.
            DegenerateWeightError: If a blended weight is zero.
        """
        spans = self._knots.find_spans(pts, self._degree)
        params = np.ascontiguousarray(pts, dtype=self.dtype)
        homogeneous = _eval_rational_de_Boor_impl(
            self._knots.knots, self._degree, self._homogeneous_points, spans, params
        )

        weights = homogeneous[:, -1]
        degenerate = np.flatnonzero(weights == 0)
        if degenerate.size > 0:
            raise DegenerateWeightError(float(params[degenerate[0]]))

        return homogeneous[:, :-1] / weights[:, np.newaxis]

    def evaluate(self, u: float) -> npt.NDArray[np.float32 | np.float64]:
        """Evaluate the curve at a single parameter value.

        Uses the de Boor algorithm on the homogeneous control points followed
        by the perspective division by the blended weight.

        Args:
            u (float): Parameter value within `domain`. It is converted to the
                curve dtype only after the range check.

        Returns:
            npt.NDArray[np.float32 | np.float64]: The curve point, shape ``(dim,)``.

        Raises:
            TypeError: If ``u`` is not a scalar.
            ParameterOutOfRangeError: If ``u`` is outside the domain. The
                parameter is never clamped.
            DegenerateWeightError: If the blended weight at ``u`` is zero.
        """
        pts = np.asarray(u)
        if pts.ndim != 0:
            raise TypeError("u must be a scalar; use tabulate for arrays")
        return self._evaluate_points(pts.reshape(1))[0]

    def tabulate(self, pts: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
        """Evaluate the curve at many parameter values.

        Args:
            pts (npt.ArrayLike): Parameter values of any shape.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Curve points of shape
                ``(*pts.shape, dim)``. A scalar input gives shape ``(dim,)``.

        Raises:
            ParameterOutOfRangeError: If any parameter is outside the domain.
            DegenerateWeightError: If a blended weight is zero.
        """
        pts_array = np.asarray(pts)
        return self._evaluate_points(pts_array.ravel()).reshape(*pts_array.shape, self.dim)

    def sample(self, num_points: int) -> npt.NDArray[np.float32 | np.float64]:
        """Sample the curve at uniformly spaced parameters across its domain.

        Args:
            num_points (int): Number of samples, at least 2. The first and last
                samples lie at the domain ends.

        Returns:
            npt.NDArray[np.float32 | np.float64]: Polyline of shape ``(num_points, dim)``.

        Raises:
            ValueError: If ``num_points`` is smaller than 2.
        """
        if num_points < 2:  # noqa: PLR2004
            raise ValueError(f"num_points must be at least 2, got {num_points}")
        lower, upper = self.domain
        pts = np.linspace(lower, upper, int(num_points), dtype=self.dtype)
        return self._evaluate_points(pts)

    def with_control_points(self, control_points: npt.ArrayLike) -> Curve:
        """Create a new curve with the same degree, weights and knots.

        Args:
            control_points (npt.ArrayLike): Replacement control points.

        Returns:
            Curve: The new, validated curve.
        """
        return Curve(self._degree, control_points, self._weights, self._knots)

    def with_weights(self, weights: npt.ArrayLike) -> Curve:
        """Create a new curve with the same degree, control points and knots.

        Args:
            weights (npt.ArrayLike): Replacement weights.

        Returns:
            Curve: The new, validated curve.
        """
        return Curve(self._degree, self._control_points, weights, self._knots)

    def uniform_scale(self, scale_factor: float) -> Curve:
        """Create a copy of the curve scaled about the origin.

        Args:
            scale_factor (float): Scale applied to every control point.

        Returns:
            Curve: The scaled curve.
        """
        factor = self.dtype.type(scale_factor)
        return self.with_control_points(self._control_points * factor)
