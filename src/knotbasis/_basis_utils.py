"""Input normalization and validation for the basis evaluators."""

from __future__ import annotations

import numpy as np
from numpy import typing as npt

from .errors import CapacityExceededError, InvalidInputError

MAX_BASIS_SLOTS: int = 36
"""Number of slots in the derivative evaluators' working rows.

It allows for at most ``MAX_BASIS_SLOTS - 1`` control points.
"""


def _normalize_knots(knots: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64]:
    """Normalize a knot vector to a contiguous 1D float array.

    Types different from float32 or float64 (e.g. integer knots) are
    converted to float64.

    Args:
        knots (npt.ArrayLike): Knot vector.

    Returns:
        npt.NDArray[np.float32 | np.float64]: The knot vector as a 1D array.

    Raises:
        InvalidInputError: If the knots are not a non-empty 1D sequence of finite,
            non-decreasing numbers.
    """
    try:
        knots = np.ascontiguousarray(knots)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError("knots must be a 1D sequence of numbers") from exc

    if knots.dtype not in (np.float32, np.float64):
        if knots.dtype.kind not in "biuf":
            raise InvalidInputError("knots must be a 1D sequence of numbers")
        knots = knots.astype(np.float64)

    if knots.ndim != 1:
        raise InvalidInputError("knots must be a 1D array")
    if knots.size == 0:
        raise InvalidInputError("knots must not be empty")
    if not np.all(np.isfinite(knots)):
        raise InvalidInputError("knots must be finite")
    if not np.all(np.diff(knots) >= knots.dtype.type(0.0)):
        raise InvalidInputError("knots must be non-decreasing")

    return knots


def _check_basis_input(
    order: int,
    n_points: int,
    knots: npt.NDArray[np.float32 | np.float64],
    capacity: int | None = None,
) -> None:
    """Check the consistency of order, number of points and knot vector.

    Args:
        order (int): Order of the B-spline (degree + 1).
        n_points (int): Number of control points.
        knots (npt.NDArray[np.float32 | np.float64]): Normalized knot vector.
        capacity (int | None): Maximum allowed value of ``n_points + order``.
            If None, no capacity bound is enforced. Defaults to None.

    Raises:
        InvalidInputError: If `order` or `n_points` are smaller than one or
            the knot vector length is not ``n_points + order``.
        CapacityExceededError: If ``n_points + order`` exceeds `capacity`.
    """
    if order < 1:
        raise InvalidInputError("order must be at least 1")
    if n_points < 1:
        raise InvalidInputError("n_points must be at least 1")
    if capacity is not None and n_points + order > capacity:
        raise CapacityExceededError(
            f"n_points + order must not exceed {capacity}. "
            f"Got n_points={n_points} and order={order}."
        )
    if knots.size != n_points + order:
        raise InvalidInputError(
            f"incompatible knot vector: expected {n_points + order} knots for "
            f"n_points={n_points} and order={order}, got {knots.size}"
        )


def _normalize_parameter(
    t: float, dtype: np.dtype[np.float32] | np.dtype[np.float64]
) -> np.float32 | np.float64:
    """Convert a scalar parameter value to the knots' dtype.

    Raises:
        InvalidInputError: If `t` is not a finite real scalar.
    """
    value = np.asarray(t)
    if value.ndim != 0 or value.dtype.kind not in "biuf":
        raise InvalidInputError("t must be a real scalar")
    value = dtype.type(value)
    if not np.isfinite(value):
        raise InvalidInputError("t must be finite")
    return value


def _normalize_points_1D(
    pts: npt.ArrayLike, dtype: np.dtype[np.float32] | np.dtype[np.float64]
) -> npt.NDArray[np.float32 | np.float64]:
    """Normalize parameter values to a contiguous 1D array of the given dtype.

    Zero-dimensional arrays (scalars) are converted to 1D arrays with a single
    element. Multi-dimensional arrays are flattened.

    Raises:
        InvalidInputError: If the values are not finite real numbers.
    """
    pts = np.asarray(pts)
    if pts.dtype.kind not in "biuf":
        raise InvalidInputError("pts must be real numbers")
    pts = np.ascontiguousarray(pts, dtype=dtype).ravel()
    if not np.all(np.isfinite(pts)):
        raise InvalidInputError("pts must be finite")
    return pts


def _compute_final_output_shape_1D(input_shape: tuple[int, ...], n_basis: int) -> tuple[int, ...]:
    """Compute the shape of tabulated basis values.

    Args:
        input_shape (tuple[int, ...]): The shape of the input points (before normalization).
        n_basis (int): The number of basis functions (control points).

    Returns:
        tuple[int, ...]: ``(n_basis,)`` for scalar input, ``(*input_shape, n_basis)``
        otherwise.
    """
    if len(input_shape) == 0:
        return (n_basis,)
    return (*input_shape, n_basis)
