"""B-spline basis evaluation for open and periodic knot vectors.

The evaluators follow the Cox-de Boor recursion and return, for a knot
vector of length ``n_points + order``, the weight that each of the
``n_points`` control points contributes at a parameter value. The
derivative evaluators additionally return first and second derivatives.

Every call is independent: working rows are allocated per call and nothing
is shared between invocations.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from ._basis_core import (
    _compute_derivative_basis_core,
    _compute_open_basis_core,
    _tabulate_derivative_basis_core,
    _tabulate_open_basis_core,
)
from ._basis_utils import (
    MAX_BASIS_SLOTS,
    _check_basis_input,
    _compute_final_output_shape_1D,
    _normalize_knots,
    _normalize_parameter,
    _normalize_points_1D,
)
from .errors import DegenerateKnotSpanError

if TYPE_CHECKING:
    from typing import TypeAlias

    BasisArray: TypeAlias = npt.NDArray[np.float32 | np.float64]
    DerivativeBasis: TypeAlias = tuple[BasisArray, BasisArray, BasisArray]


class KnotVectorKind(Enum):
    """Knot vector semantics, selecting the end-of-domain handling.

    Attributes:
        OPEN (KnotVectorKind): Clamped knot vector, boundary knots repeated
            `order` times. The domain ends at the last knot.
        PERIODIC (KnotVectorKind): Uniform unclamped knot vector. The domain
            ends at ``knots[n_points]``.
    """

    OPEN = "open"
    PERIODIC = "periodic"


def _resolve_kind(kind: KnotVectorKind | str) -> KnotVectorKind:
    try:
        return KnotVectorKind(kind)
    except ValueError:
        raise ValueError(
            f"Unknown knot vector kind {kind!r}. "
            f"Expected one of {[member.value for member in KnotVectorKind]}."
        ) from None


def compute_open_basis(order: int, t: float, n_points: int, knots: npt.ArrayLike) -> BasisArray:
    """Evaluate the B-spline basis functions of an open knot vector at `t`.

    Builds the order-1 indicator functions of the half-open knot spans and
    combines them order by order with the Cox-de Boor recursion. When `t`
    equals the last knot the last basis function is set to one, as the
    half-open spans would otherwise make the whole basis vanish there.

    Parameters outside the knot vector range produce an all-zero basis.

    Args:
        order (int): Order of the B-spline (degree + 1). Must be at least 1.
        t (float): Parameter value.
        n_points (int): Number of control points. Must be at least 1.
        knots (npt.ArrayLike): Non-decreasing knot vector of length
            ``n_points + order``. Types different from float32 or float64 are
            converted to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Array of `n_points` basis values,
        with the dtype of the knots.

    Raises:
        InvalidInputError: If `order` or `n_points` are smaller than one, if
            the knot vector is not a non-decreasing 1D sequence of length
            ``n_points + order``, or if `t` is not finite.

    Example:
        >>> compute_open_basis(3, 1.5, 5, [0, 0, 0, 1, 2, 3, 3, 3])
        array([0.   , 0.125, 0.75 , 0.125, 0.   ])
    """
    knots = _normalize_knots(knots)
    _check_basis_input(order, n_points, knots)
    t = _normalize_parameter(t, knots.dtype)

    work = np.zeros(n_points + order, dtype=knots.dtype)
    out = np.empty(n_points, dtype=knots.dtype)
    _compute_open_basis_core(order, t, n_points, knots, work, out)
    return out


def compute_derivative_basis(
    order: int,
    t: float,
    n_points: int,
    knots: npt.ArrayLike,
    kind: KnotVectorKind | str = KnotVectorKind.OPEN,
) -> DerivativeBasis:
    """Evaluate B-spline basis functions and their first two derivatives at `t`.

    The value, first derivative and second derivative rows are advanced
    together, order by order, using the product-rule expansion of the
    Cox-de Boor recursion. Open and periodic knot vectors share the
    recursion and only differ in how the end of the domain is handled
    (see :class:`KnotVectorKind`).

    Args:
        order (int): Order of the B-spline (degree + 1). Must be at least 1.
        t (float): Parameter value.
        n_points (int): Number of control points. Must be at least 1.
        knots (npt.ArrayLike): Non-decreasing knot vector of length
            ``n_points + order``.
        kind (KnotVectorKind | str): Knot vector semantics. Defaults to
            ``KnotVectorKind.OPEN``.

    Returns:
        tuple[BasisArray, BasisArray, BasisArray]: Basis values, first
        derivatives and second derivatives, each of length `n_points`.

    Raises:
        ValueError: If `kind` is not a valid knot vector kind.
        InvalidInputError: If the inputs are inconsistent (see
            :func:`compute_open_basis`).
        CapacityExceededError: If ``n_points + order`` exceeds
            ``MAX_BASIS_SLOTS``.
        DegenerateKnotSpanError: If a nonzero term of the recursion falls on a
            zero-length knot span.
    """
    periodic = _resolve_kind(kind) is KnotVectorKind.PERIODIC
    knots = _normalize_knots(knots)
    _check_basis_input(order, n_points, knots, capacity=MAX_BASIS_SLOTS)
    t = _normalize_parameter(t, knots.dtype)

    work = np.zeros((3, MAX_BASIS_SLOTS), dtype=knots.dtype)
    out = np.empty((3, n_points), dtype=knots.dtype)
    try:
        _compute_derivative_basis_core(
            order, t, n_points, knots, periodic, work, out[0], out[1], out[2]
        )
    except ZeroDivisionError as exc:
        raise DegenerateKnotSpanError(
            f"zero-length knot span reached with nonzero basis at t={t}"
        ) from exc

    return out[0].copy(), out[1].copy(), out[2].copy()


def compute_open_derivative_basis(
    order: int, t: float, n_points: int, knots: npt.ArrayLike
) -> DerivativeBasis:
    """Evaluate basis values and derivatives for an open (clamped) knot vector.

    When `t` equals the last knot the order-1 basis of the last control
    point is switched on, so values and derivatives at the end of the
    domain are the limits from the left.

    See :func:`compute_derivative_basis` for arguments, return values and errors.

    Example:
        >>> values, d1, d2 = compute_open_derivative_basis(3, 0.5, 3, [0, 0, 0, 1, 1, 1])
        >>> values
        array([0.25, 0.5 , 0.25])
        >>> d1
        array([-1.,  0.,  1.])
        >>> d2
        array([ 2., -4.,  2.])
    """
    return compute_derivative_basis(order, t, n_points, knots, KnotVectorKind.OPEN)


def compute_periodic_derivative_basis(
    order: int, t: float, n_points: int, knots: npt.ArrayLike
) -> DerivativeBasis:
    """Evaluate basis values and derivatives for a periodic (uniform) knot vector.

    The domain of a periodic knot vector ends at ``knots[n_points]``. At that
    parameter the order-1 basis of the last control point is switched on
    and the one of the following span, whose support has wrapped around,
    is cleared.

    See :func:`compute_derivative_basis` for arguments, return values and errors.
    """
    return compute_derivative_basis(order, t, n_points, knots, KnotVectorKind.PERIODIC)


def tabulate_open_basis(
    order: int, pts: npt.ArrayLike, n_points: int, knots: npt.ArrayLike
) -> BasisArray:
    """Evaluate the open knot vector basis at several parameter values.

    Args:
        order (int): Order of the B-spline (degree + 1).
        pts (npt.ArrayLike): Parameter values. Can be a scalar, list, or numpy array.
        n_points (int): Number of control points.
        knots (npt.ArrayLike): Knot vector of length ``n_points + order``.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Basis values with the shape of
        `pts` plus a trailing axis of length `n_points`.

    Raises:
        InvalidInputError: If the inputs are inconsistent or `pts` are not finite.

    Example:
        >>> tabulate_open_basis(2, [0.0, 0.5, 1.0], 2, [0.0, 0.0, 1.0, 1.0])
        array([[1. , 0. ],
               [0.5, 0.5],
               [0. , 1. ]])
    """
    knots = _normalize_knots(knots)
    _check_basis_input(order, n_points, knots)

    input_shape = np.shape(pts)
    pts = _normalize_points_1D(pts, knots.dtype)

    work = np.zeros(n_points + order, dtype=knots.dtype)
    out = np.empty((pts.size, n_points), dtype=knots.dtype)
    _tabulate_open_basis_core(order, pts, n_points, knots, work, out)
    return out.reshape(_compute_final_output_shape_1D(input_shape, n_points))


def tabulate_derivative_basis(
    order: int,
    pts: npt.ArrayLike,
    n_points: int,
    knots: npt.ArrayLike,
    kind: KnotVectorKind | str = KnotVectorKind.OPEN,
) -> DerivativeBasis:
    """Evaluate basis values and derivatives at several parameter values.

    Args:
        order (int): Order of the B-spline (degree + 1).
        pts (npt.ArrayLike): Parameter values. Can be a scalar, list, or numpy array.
        n_points (int): Number of control points.
        knots (npt.ArrayLike): Knot vector of length ``n_points + order``.
        kind (KnotVectorKind | str): Knot vector semantics. Defaults to
            ``KnotVectorKind.OPEN``.

    Returns:
        tuple[BasisArray, BasisArray, BasisArray]: Basis values, first and
        second derivatives, each with the shape of `pts` plus a trailing axis
        of length `n_points`.

    Raises:
        ValueError: If `kind` is not a valid knot vector kind.
        InvalidInputError: If the inputs are inconsistent or `pts` are not finite.
        CapacityExceededError: If ``n_points + order`` exceeds ``MAX_BASIS_SLOTS``.
        DegenerateKnotSpanError: If a nonzero term of the recursion falls on a
            zero-length knot span.
    """
    periodic = _resolve_kind(kind) is KnotVectorKind.PERIODIC
    knots = _normalize_knots(knots)
    _check_basis_input(order, n_points, knots, capacity=MAX_BASIS_SLOTS)

    input_shape = np.shape(pts)
    pts = _normalize_points_1D(pts, knots.dtype)

    work = np.zeros((3, MAX_BASIS_SLOTS), dtype=knots.dtype)
    out = np.empty((3, pts.size, n_points), dtype=knots.dtype)
    try:
        _tabulate_derivative_basis_core(
            order, pts, n_points, knots, periodic, work, out[0], out[1], out[2]
        )
    except ZeroDivisionError as exc:
        raise DegenerateKnotSpanError(
            "zero-length knot span reached with nonzero basis"
        ) from exc

    final_shape = _compute_final_output_shape_1D(input_shape, n_points)
    return (
        out[0].reshape(final_shape),
        out[1].reshape(final_shape),
        out[2].reshape(final_shape),
    )


__all__ = [
    "MAX_BASIS_SLOTS",
    "KnotVectorKind",
    "compute_derivative_basis",
    "compute_open_basis",
    "compute_open_derivative_basis",
    "compute_periodic_derivative_basis",
    "tabulate_derivative_basis",
    "tabulate_open_basis",
]
