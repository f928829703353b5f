"""Smoke tests for package metadata.

Validates public attributes exposed via the package API.
"""

from __future__ import annotations

import importlib
from typing import Final

import knotbasis


def test_package_all_exports() -> None:
    """Ensure all expected symbols are exported."""
    expected_metadata: Final[set[str]] = {"__version__", "__license__", "__author__"}
    expected_public_api: Final[set[str]] = {
        # Evaluators
        "KnotVectorKind",
        "MAX_BASIS_SLOTS",
        "compute_derivative_basis",
        "compute_open_basis",
        "compute_open_derivative_basis",
        "compute_periodic_derivative_basis",
        "tabulate_derivative_basis",
        "tabulate_open_basis",
        # Errors
        "BasisError",
        "CapacityExceededError",
        "DegenerateKnotSpanError",
        "InvalidInputError",
        # Tolerance
        "get_conservative_tolerance",
        "get_default_tolerance",
        "get_finite_difference_step",
        "get_machine_epsilon",
        "get_strict_tolerance",
    }

    assert set(knotbasis.__all__) == expected_metadata | expected_public_api
    for name in knotbasis.__all__:
        assert hasattr(knotbasis, name)


def test_package_metadata_values() -> None:
    """Validate the package metadata constants."""
    assert knotbasis.__version__ == "0.1.0"
    assert knotbasis.__license__ == "MIT"
    assert knotbasis.MAX_BASIS_SLOTS == 36  # noqa: PLR2004


def test_metadata_import_stability() -> None:
    """Verify metadata survives module reloads."""
    module = importlib.reload(knotbasis)
    assert module.__version__ == "0.1.0"
