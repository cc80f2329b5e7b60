"""Exception types raised by knot vector and curve validation and evaluation.

All errors derive from :class:`NurbsError`, itself a :class:`ValueError`, so
callers may catch either the specific error, the package base class, or the
builtin ``ValueError`` that plain argument validation raises.
"""


class NurbsError(ValueError):
    """Base class for all knot vector and curve errors."""


class InvalidKnotVecError(NurbsError):
    """The knot sequence is too short, unordered, non-finite or degenerate."""


class InvalidDegreeError(NurbsError):
    """The degree is negative or incompatible with the number of control points.

    Attributes:
        degree (int): Requested degree.
        num_control_points (int | None): Number of control points supplied, if known.
    """

    def __init__(self, message: str, degree: int, num_control_points: int | None = None) -> None:
        super().__init__(message)
        self.degree = degree
        self.num_control_points = num_control_points


class ControlPointWeightCountMismatchError(NurbsError):
    """The number of weights differs from the number of control points."""

    def __init__(self, num_control_points: int, num_weights: int) -> None:
        super().__init__(
            f"Expected one weight per control point: got {num_weights} weights "
            f"for {num_control_points} control points."
        )
        self.num_control_points = num_control_points
        self.num_weights = num_weights


class NonPositiveWeightError(NurbsError):
    """A weight is zero, negative or not finite."""

    def __init__(self, index: int, weight: float) -> None:
        super().__init__(f"Weights must be finite and positive: weight {index} is {weight}.")
        self.index = index
        self.weight = weight


class KnotCountMismatchError(NurbsError):
    """The knot count does not match ``num_control_points + degree + 1``."""

    def __init__(self, num_received: int, num_expected: int) -> None:
        super().__init__(f"Expected {num_expected} knot values, but received {num_received}.")
        self.num_received = num_received
        self.num_expected = num_expected


class ParameterOutOfRangeError(NurbsError):
    """The evaluation parameter lies outside the curve domain."""

    def __init__(self, u: float, lower: float, upper: float) -> None:
        super().__init__(f"Parameter u={u} is outside the required range {lower} <= u <= {upper}.")
        self.u = u
        self.lower = lower
        self.upper = upper


class DegenerateWeightError(NurbsError):
    """The blended homogeneous weight vanished during evaluation."""

    def __init__(self, u: float) -> None:
        super().__init__(f"The rational weight at u={u} is zero; the curve is degenerate there.")
        self.u = u


__all__ = [
    "ControlPointWeightCountMismatchError",
    "DegenerateWeightError",
    "InvalidDegreeError",
    "InvalidKnotVecError",
    "KnotCountMismatchError",
    "NonPositiveWeightError",
    "NurbsError",
    "ParameterOutOfRangeError",
]
