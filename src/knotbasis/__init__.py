"""Public API surface for knotbasis.

Defines package metadata and exported interfaces.
"""

from typing import Final

from .basis import (
    MAX_BASIS_SLOTS,
    KnotVectorKind,
    compute_derivative_basis,
    compute_open_basis,
    compute_open_derivative_basis,
    compute_periodic_derivative_basis,
    tabulate_derivative_basis,
    tabulate_open_basis,
)
from .errors import (
    BasisError,
    CapacityExceededError,
    DegenerateKnotSpanError,
    InvalidInputError,
)
from .tolerance import (
    get_conservative_tolerance,
    get_default_tolerance,
    get_finite_difference_step,
    get_machine_epsilon,
    get_strict_tolerance,
)

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"
__author__: Final[str] = "Pablo Antolin <pablo.antolin@epfl.ch>"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "MAX_BASIS_SLOTS",
    "BasisError",
    "CapacityExceededError",
    "DegenerateKnotSpanError",
    "InvalidInputError",
    "KnotVectorKind",
    "__author__",
    "__license__",
    "__version__",
    "compute_derivative_basis",
    "compute_open_basis",
    "compute_open_derivative_basis",
    "compute_periodic_derivative_basis",
    "get_conservative_tolerance",
    "get_default_tolerance",
    "get_finite_difference_step",
    "get_machine_epsilon",
    "get_strict_tolerance",
    "tabulate_derivative_basis",
    "tabulate_open_basis",
]
