"""Knot vectors: validated, immutable, non-decreasing sequences of knots.

Knot values live in the parameter space of a curve. Together with a degree
they partition the parameter range into spans over which a single set of
``degree + 1`` control points is active.

The full-multiplicity convention is used throughout: a curve of degree ``p``
with ``n`` control points has ``n + p + 1`` knots, and its domain is
``[knots[p], knots[n]]``. The reduced convention with two fewer knots is not
supported.
"""

from __future__ import annotations

from collections.abc import Iterator
from numbers import Integral
from typing import Any, overload

import numpy as np
import numpy.typing as npt

from ._knots_impl import _find_first_decrease_impl, _find_spans_impl, _is_clamped_impl, _readonly
from .errors import InvalidDegreeError, InvalidKnotVecError, ParameterOutOfRangeError
from .tolerance import ensure_float_dtype


def _as_degree(degree: int) -> int:
    """Convert an integral degree to a Python int.

    Args:
        degree (int): B-spline degree.

    Returns:
        int: The degree.

    Raises:
        TypeError: If degree is not an integer (bools included).
    """
    if not isinstance(degree, Integral) or isinstance(degree, bool):
        raise TypeError(f"degree must be an integer, got {type(degree).__name__}")
    return int(degree)


class KnotVec:
    """An immutable, non-decreasing knot vector.

    A knot vector must satisfy the following criteria:

    * it contains at least 2 finite values,
    * it is non-decreasing,
    * it spans a non-zero range (the last knot differs from the first).

    The knots are stored as a read-only float32 or float64 array. Integer
    input is promoted to float64.

    Example:
        >>> knots = KnotVec([0.0, 0.0, 0.5, 1.0, 1.0])
        >>> knots.find_span(0.6, 1)
        2
    """

    _knots: npt.NDArray[np.float32 | np.float64]

    def __init__(self, knots: npt.ArrayLike) -> None:
        """Create a knot vector.

        Args:
            knots (npt.ArrayLike): Knot values in non-decreasing order.

        Raises:
            InvalidKnotVecError: If the knots are not a 1D sequence of at least
                two finite, non-decreasing values spanning a non-zero range.
            ValueError: If the knots have an unsupported floating dtype.
        """
        self._knots = _readonly(KnotVec._validate_input(knots))

    @staticmethod
    def _validate_input(knots: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
        """Validate and copy the knot input.

        Args:
            knots (npt.ArrayLike): Knot values to validate.

        Returns:
            npt.NDArray[np.float32 | np.float64]: A private contiguous copy of the knots.

        Raises:
            InvalidKnotVecError: If the knots are invalid.
            ValueError: If the knots have an unsupported floating dtype.
        """
        if isinstance(knots, KnotVec):
            return knots.knots.copy()

        array = np.array(knots)
        if array.dtype.kind in "iub":
            array = array.astype(np.float64)
        elif array.dtype.kind != "f":
            raise InvalidKnotVecError(f"knots must be real numbers, got dtype {array.dtype}")
        dtype = ensure_float_dtype(array.dtype)
        array = np.ascontiguousarray(array, dtype=dtype)

        if array.ndim != 1:
            raise InvalidKnotVecError("knots must be a 1D sequence")
        if array.size < 2:  # noqa: PLR2004
            raise InvalidKnotVecError("knots must have at least 2 elements")
        if not np.all(np.isfinite(array)):
            raise InvalidKnotVecError("knots must be finite")

        decrease = _find_first_decrease_impl(array)
        if decrease >= 0:
            raise InvalidKnotVecError(
                f"knots must be non-decreasing: knots[{decrease}]={array[decrease]} > "
                f"knots[{decrease + 1}]={array[decrease + 1]}"
            )
        if array[0] == array[-1]:
            raise InvalidKnotVecError("knots must span a non-zero range")

        return array

    @property
    def knots(self) -> npt.NDArray[np.float32 | np.float64]:
        """Get the (read-only) knot values.

        Returns:
            npt.NDArray[np.float32 | np.float64]: The knot vector.
        """
        return self._knots

    @property
    def dtype(self) -> np.dtype[Any]:
        """Get the data type of the knots (and used in computations).

        Returns:
            np.dtype: The numpy data type of the knots.
        """
        return self._knots.dtype

    @property
    def min_u(self) -> np.floating[Any]:
        """The first knot value."""
        return self._knots[0]

    @property
    def max_u(self) -> np.floating[Any]:
        """The last knot value."""
        return self._knots[-1]

    def __len__(self) -> int:
        return int(self._knots.size)

    @overload
    def __getitem__(self, index: int) -> np.floating[Any]: ...

    @overload
    def __getitem__(self, index: slice) -> npt.NDArray[np.float32 | np.float64]: ...

    def __getitem__(
        self, index: int | slice
    ) -> np.floating[Any] | npt.NDArray[np.float32 | np.float64]:
        return self._knots[index]  # type: ignore[no-any-return]

    def __iter__(self) -> Iterator[np.floating[Any]]:
        return iter(self._knots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnotVec):
            return NotImplemented
        return self.dtype == other.dtype and bool(np.array_equal(self._knots, other._knots))

    def __hash__(self) -> int:
        # Adding zero maps -0.0 to 0.0, which compare equal.
        return hash((self.dtype.str, (self._knots + 0.0).tobytes()))

    def __repr__(self) -> str:
        return f"KnotVec({self._knots.tolist()!r}, dtype={self.dtype.name})"

    def _check_degree(self, degree: int) -> int:
        """Validate a degree against the knot count.

        Args:
            degree (int): B-spline degree.

        Returns:
            int: The degree as a Python int.

        Raises:
            TypeError: If degree is not an integer.
            InvalidDegreeError: If degree is negative or the knot vector has
                fewer than ``2 * degree + 2`` knots.
        """
        degree = _as_degree(degree)
        if degree < 0:
            raise InvalidDegreeError("degree must be non-negative", degree)
        if len(self) < 2 * (degree + 1):
            raise InvalidDegreeError(
                f"A degree {degree} domain requires at least {2 * (degree + 1)} knots, "
                f"got {len(self)}",
                degree,
            )
        return degree

    def domain(self, degree: int) -> tuple[np.floating[Any], np.floating[Any]]:
        """Get the valid parameter domain for a given degree.

        Args:
            degree (int): B-spline degree.

        Returns:
            tuple[np.floating, np.floating]: ``(knots[degree], knots[-degree - 1])``.

        Raises:
            InvalidDegreeError: If the degree is negative or too large for this
                knot vector.
        """
        degree = self._check_degree(degree)
        return self._knots[degree], self._knots[-degree - 1]

    def is_clamped(self, degree: int) -> bool:
        """Check if the knot vector is clamped for a given degree.

        A knot vector is clamped if the first knot is repeated ``degree + 1``
        times at the start and the last knot is repeated ``degree + 1`` times
        at the end. A degree too large for the number of knots yields False.

        Args:
            degree (int): B-spline degree.

        Returns:
            bool: True if clamped, False otherwise.

        Raises:
            TypeError: If degree is not an integer.
            ValueError: If degree is negative.
        """
        degree = _as_degree(degree)
        if degree < 0:
            raise ValueError("degree must be non-negative")
        return bool(_is_clamped_impl(self._knots, degree))

    def clamp(self, u: float, degree: int = 0) -> np.floating[Any]:
        """Clamp a parameter value into the domain for ``degree``.

        Evaluation never clamps; this is an explicit opt-in for callers that
        prefer truncation over a `ParameterOutOfRangeError`.

        Args:
            u (float): Parameter value.
            degree (int): B-spline degree defining the domain. Defaults to 0,
                i.e. the full ``[min_u, max_u]`` range.

        Returns:
            np.floating: ``u`` clipped to the domain, in the knot dtype.
        """
        lower, upper = self.domain(degree)
        return self.dtype.type(np.clip(self.dtype.type(u), lower, upper))  # type: ignore[no-any-return]

    def find_span(self, u: float, degree: int) -> int:
        """Find the index of the knot span containing the parameter ``u``.

        The returned index ``k`` satisfies::

            knots[k] <= u < knots[k + 1], when u < knots[-degree - 1]
            knots[k] < u == knots[k + 1], when u == knots[-degree - 1]

        At an interior knot the span starting at that knot is returned.

        Args:
            u (float): Parameter value. The range check is done on ``u`` as
                given, before it is converted to the knot dtype.
            degree (int): B-spline degree.

        Returns:
            int: Knot span index.

        Raises:
            TypeError: If ``u`` is not a scalar or degree is not an integer.
            InvalidDegreeError: If the degree is negative or too large for this
                knot vector.
            InvalidKnotVecError: If the domain for ``degree`` is empty.
            ParameterOutOfRangeError: If ``u`` is outside the domain.

        Example:
            >>> knots = KnotVec([0.0, 0.0, 1.0, 2.0, 3.0, 4.0, 4.0, 5.0, 5.0])
            >>> knots.find_span(0.0, 1), knots.find_span(4.0, 1), knots.find_span(5.0, 1)
            (1, 6, 6)
        """
        pts = np.asarray(u)
        if pts.ndim != 0:
            raise TypeError("u must be a scalar; use find_spans for arrays")
        return int(self.find_spans(pts.reshape(1), degree)[0])

    def find_spans(self, pts: npt.ArrayLike, degree: int) -> npt.NDArray[np.intp]:
        """Find the knot span containing each parameter in ``pts``.

        Vectorized counterpart of `find_span`, with the same conventions.

        Args:
            pts (npt.ArrayLike): Parameter values of any shape. The range check
                is done in float64 on the values as given, so a value outside
                the domain is rejected even if it would round onto a domain
                end in the knot dtype.
            degree (int): B-spline degree.

        Returns:
            npt.NDArray[np.intp]: Span indices with the same shape as ``pts``.

        Raises:
            TypeError: If degree is not an integer.
            InvalidDegreeError: If the degree is negative or too large for this
                knot vector.
            InvalidKnotVecError: If the domain for ``degree`` is empty.
            ParameterOutOfRangeError: If any parameter is outside the domain.
        """
        degree = self._check_degree(degree)
        lower, upper = self.domain(degree)
        if lower == upper:
            raise InvalidKnotVecError(f"knots have an empty domain for degree {degree}")

        pts_array = np.asarray(pts)
        wide = pts_array.ravel().astype(np.float64)
        outside = np.flatnonzero(~((wide >= float(lower)) & (wide <= float(upper))))
        if outside.size > 0:
            raise ParameterOutOfRangeError(float(wide[outside[0]]), float(lower), float(upper))

        # Rounding to the knot dtype is monotonic, so in-range values stay in range.
        flat = np.ascontiguousarray(pts_array.ravel(), dtype=self.dtype)
        spans = _find_spans_impl(self._knots, degree, flat)
        return spans.reshape(pts_array.shape)


def create_uniform_clamped_knot_vector(
    num_intervals: int,
    degree: int,
    continuity: int | None = None,
    domain: tuple[float, float] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> KnotVec:
    """Create a clamped knot vector with uniformly spaced unique knots.

    The first and last knots are repeated ``degree + 1`` times, so the curve
    interpolates its first and last control points.

    Args:
        num_intervals (int): Number of non-empty spans. Must be at least 1.
        degree (int): B-spline degree. Must be non-negative.
        continuity (int | None): Continuity at interior knots, between -1 and
            ``degree - 1``. Interior knots get multiplicity ``degree - continuity``.
            Defaults to ``degree - 1`` (maximum continuity).
        domain (tuple[float, float] | None): Domain as ``(start, end)``.
            Defaults to ``(0.0, 1.0)``.
        dtype (npt.DTypeLike | None): float32 or float64. Defaults to float64.

    Returns:
        KnotVec: The clamped knot vector.

    Raises:
        ValueError: If any parameter is invalid.

    Example:
        >>> create_uniform_clamped_knot_vector(2, 2).knots
        array([0. , 0. , 0. , 0.5, 1. , 1. , 1. ])
    """
    dtype_obj = ensure_float_dtype(np.float64 if dtype is None else dtype)
    start, end = (0.0, 1.0) if domain is None else domain
    start, end = dtype_obj.type(start), dtype_obj.type(end)
    continuity = degree - 1 if continuity is None else continuity

    if not start < end:
        raise ValueError("domain[0] must be less than domain[1]")
    if num_intervals < 1:
        raise ValueError("num_intervals must be at least 1")
    if degree < 0:
        raise ValueError("degree must be non-negative")
    if continuity < -1 or continuity >= degree:
        raise ValueError(f"Continuity must be between -1 and {degree - 1} for degree {degree}.")

    unique_knots = np.linspace(start, end, num_intervals + 1, dtype=dtype_obj)
    interior_multiplicity = degree - continuity

    knots = np.concatenate(
        [
            np.full(degree + 1, start, dtype=dtype_obj),
            np.repeat(unique_knots[1:-1], interior_multiplicity),
            np.full(degree + 1, end, dtype=dtype_obj),
        ]
    )
    return KnotVec(knots)
