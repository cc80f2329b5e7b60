"""Public API surface for capstan.

NURBS curve evaluation: validated knot vectors, rational B-spline curves
evaluated with the de Boor algorithm, and exact conic constructions.
"""

import logging
from typing import Final

from .conics import circular_arc, unit_circle
from .curve import Curve
from .errors import (
    ControlPointWeightCountMismatchError,
    DegenerateWeightError,
    InvalidDegreeError,
    InvalidKnotVecError,
    KnotCountMismatchError,
    NonPositiveWeightError,
    NurbsError,
    ParameterOutOfRangeError,
)
from .knotvec import KnotVec, create_uniform_clamped_knot_vector
from .tolerance import ensure_float_dtype, get_default_tolerance, get_machine_epsilon

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "ControlPointWeightCountMismatchError",
    "Curve",
    "DegenerateWeightError",
    "InvalidDegreeError",
    "InvalidKnotVecError",
    "KnotCountMismatchError",
    "KnotVec",
    "NonPositiveWeightError",
    "NurbsError",
    "ParameterOutOfRangeError",
    "__license__",
    "__version__",
    "circular_arc",
    "create_uniform_clamped_knot_vector",
    "ensure_float_dtype",
    "get_default_tolerance",
    "get_machine_epsilon",
    "unit_circle",
]
