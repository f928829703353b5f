"""Floating-point tolerances for comparing basis evaluations."""

from functools import cache
from typing import Any, NamedTuple, cast

import numpy as np
from numpy import typing as npt


@cache
def _ensure_float_dtype_by_name(name: str) -> np.dtype[np.floating[Any]]:
    """Return the floating dtype with the given canonical name.

    Args:
        name (str): Canonical NumPy dtype name (e.g., "float64").

    Returns:
        np.dtype[np.floating[Any]]: Validated floating-point dtype.

    Raises:
        ValueError: If dtype is not float32 or float64.
    """
    dtype_obj = np.dtype(name)
    if dtype_obj.type not in (np.float32, np.float64):
        raise ValueError(f"Unsupported dtype: {name}")
    return cast(np.dtype[np.floating[Any]], dtype_obj)


def _ensure_float_dtype(dtype: npt.DTypeLike) -> np.dtype[np.floating[Any]]:
    return _ensure_float_dtype_by_name(np.dtype(dtype).name)


class _TolerancePreset(NamedTuple):
    """Tolerance values for the floating-point types the kernels support."""

    float32: float
    float64: float


_TOLERANCE_PRESETS = {
    "default": _TolerancePreset(1e-6, 1e-12),
    "strict": _TolerancePreset(1e-7, 1e-15),
    "conservative": _TolerancePreset(1e-5, 1e-10),
}


def _get_tolerance(dtype: npt.DTypeLike, preset: _TolerancePreset) -> float:
    dtype_obj = _ensure_float_dtype(dtype)
    if dtype_obj.type == np.float32:
        return preset.float32
    return preset.float64


def get_default_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a reasonable default tolerance for comparing basis values.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type (float32 or float64).

    Returns:
        float: Recommended tolerance value for the given dtype.

    Raises:
        ValueError: If dtype is not a supported floating-point type.

    Example:
        >>> get_default_tolerance(np.float32)
        1e-06
        >>> get_default_tolerance("float64")
        1e-12
    """
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["default"])


def get_strict_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a strict tolerance, e.g. for exact reproductions such as partition of unity."""
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["strict"])


def get_conservative_tolerance(dtype: npt.DTypeLike) -> float:
    """Get a conservative tolerance, used where round-off accumulates across orders."""
    return _get_tolerance(dtype, _TOLERANCE_PRESETS["conservative"])


def get_machine_epsilon(dtype: npt.DTypeLike) -> float:
    """Get machine epsilon for a given floating-point dtype.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.

    Returns:
        float: Machine epsilon for the given dtype.

    Raises:
        ValueError: If dtype is not a supported floating-point type.
    """
    return float(np.finfo(_ensure_float_dtype(dtype)).eps)


def get_finite_difference_step(dtype: npt.DTypeLike, scale: float = 1.0) -> float:
    """Get a step size for central finite differences of basis functions.

    The step balances truncation error, which is O(h**2) for central
    differences, against round-off, which grows as eps / h. The optimum is
    close to the cubic root of the machine epsilon.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.
        scale (float): Characteristic length of the knot spans. Defaults to 1.0.

    Returns:
        float: Step size for central finite differences.

    Raises:
        ValueError: If dtype is not a supported floating-point type or if
            `scale` is not positive.
    """
    if scale <= 0.0:
        raise ValueError("scale must be positive")
    return float(np.cbrt(get_machine_epsilon(dtype))) * scale


__all__ = [
    "get_conservative_tolerance",
    "get_default_tolerance",
    "get_finite_difference_step",
    "get_machine_epsilon",
    "get_strict_tolerance",
]
