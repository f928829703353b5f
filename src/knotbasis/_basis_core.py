"""Numba-compiled Cox-de Boor kernels.

The kernels sweep the recursion bottom-up over increasing order, keeping
only one rolling row per quantity (values, first and second derivatives).
A term of the recursion is only evaluated when the lower-order factor it
multiplies is nonzero, which also avoids 0/0 at repeated knots.

All kernels write into caller-provided arrays and assume validated inputs.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

from ._basis_utils import MAX_BASIS_SLOTS

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _fill_first_order_basis(
    knots: npt.NDArray[np.float32 | np.float64],
    t: float,
    num_slots: int,
    row: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Write the order-1 (indicator) basis of the half-open spans into `row`.

    ``row[i]`` is one if ``knots[i] <= t < knots[i + 1]`` and zero otherwise,
    for ``i`` in ``[0, num_slots)``.
    """
    zero = row.dtype.type(0.0)
    one = row.dtype.type(1.0)
    for i in range(num_slots):
        if t >= knots[i] and t < knots[i + 1]:
            row[i] = one
        else:
            row[i] = zero


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _compute_open_basis_core(
    order: int,
    t: float,
    n_points: int,
    knots: npt.NDArray[np.float32 | np.float64],
    work: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate the B-spline basis of an open knot vector at `t`.

    Args:
        order (int): B-spline order (degree + 1).
        t (float): Parameter value.
        n_points (int): Number of control points.
        knots (npt.NDArray[np.float32 | np.float64]): Knot vector of length
            ``n_points + order``.
        work (npt.NDArray[np.float32 | np.float64]): Scratch row with at least
            ``n_points + order - 1`` entries.
        out (npt.NDArray[np.float32 | np.float64]): Output array of length `n_points`.

    Note:
        Inputs are assumed to be correct (no validation performed).
    """
    zero = work.dtype.type(0.0)
    one = work.dtype.type(1.0)

    # n_points + order - 1 indicators feed order - 1 rounds of combination.
    num_slots = n_points + order - 1
    _fill_first_order_basis(knots, t, num_slots, work)

    for deg in range(2, order + 1):
        for i in range(num_slots + 1 - deg):
            direct = zero
            if work[i] != zero:
                direct = ((t - knots[i]) * work[i]) / (knots[i + deg - 1] - knots[i])

            forward = zero
            if work[i + 1] != zero:
                forward = ((knots[i + deg] - t) * work[i + 1]) / (knots[i + deg] - knots[i + 1])

            work[i] = direct + forward

    # The half-open spans leave the basis empty at the last knot.
    if t == knots[-1]:
        work[n_points - 1] = one

    for i in range(n_points):
        out[i] = work[i]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _correct_domain_end(
    knots: npt.NDArray[np.float32 | np.float64],
    t: float,
    n_points: int,
    periodic: bool,
    row: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Fix the order-1 basis when `t` sits on the right end of the domain.

    For open knot vectors the end is the last knot. For periodic ones it is
    the knot ``knots[n_points]``, and the indicator of the following span
    must be cleared too, since its support has already wrapped around.
    """
    one = row.dtype.type(1.0)
    if periodic:
        if t == knots[n_points]:
            row[n_points - 1] = one
            row[n_points] = row.dtype.type(0.0)
    elif t == knots[-1]:
        row[n_points - 1] = one


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _compute_derivative_basis_core(  # noqa: PLR0913
    order: int,
    t: float,
    n_points: int,
    knots: npt.NDArray[np.float32 | np.float64],
    periodic: bool,
    work: npt.NDArray[np.float32 | np.float64],
    out_basis: npt.NDArray[np.float32 | np.float64],
    out_first: npt.NDArray[np.float32 | np.float64],
    out_second: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate B-spline basis values and their first two derivatives at `t`.

    Args:
        order (int): B-spline order (degree + 1).
        t (float): Parameter value.
        n_points (int): Number of control points.
        knots (npt.NDArray[np.float32 | np.float64]): Knot vector of length
            ``n_points + order``.
        periodic (bool): Whether `knots` is a periodic knot vector.
        work (npt.NDArray[np.float32 | np.float64]): Scratch array of shape
            (3, MAX_BASIS_SLOTS) holding the value, first and second derivative rows.
        out_basis (npt.NDArray[np.float32 | np.float64]): Output basis values,
            of length `n_points`.
        out_first (npt.NDArray[np.float32 | np.float64]): Output first derivatives,
            of length `n_points`.
        out_second (npt.NDArray[np.float32 | np.float64]): Output second derivatives,
            of length `n_points`.

    Raises:
        ZeroDivisionError: If a nonzero lower-order term lies on a zero-length span.

    Note:
        Inputs are assumed to be correct (no validation performed).
    """
    zero = work.dtype.type(0.0)
    two = work.dtype.type(2.0)

    values = work[0]
    first = work[1]
    second = work[2]
    work.fill(zero)

    num_knots = n_points + order
    _fill_first_order_basis(knots, t, num_knots - 1, values)
    _correct_domain_end(knots, t, n_points, periodic, values)

    for k in range(2, order + 1):
        for i in range(num_knots - k):
            # Rows at i and i + 1 still hold order k - 1 here.
            val_i, val_j = values[i], values[i + 1]
            der_i, der_j = first[i], first[i + 1]
            sec_i, sec_j = second[i], second[i + 1]

            left = knots[i + k - 1] - knots[i]
            right = knots[i + k] - knots[i + 1]
            t_left = t - knots[i]
            t_right = knots[i + k] - t

            b1 = zero
            f1 = zero
            if val_i != zero:
                b1 = (t_left * val_i) / left
                f1 = val_i / left

            b2 = zero
            f2 = zero
            if val_j != zero:
                b2 = (t_right * val_j) / right
                f2 = -val_j / right

            f3 = zero
            s1 = zero
            if der_i != zero:
                f3 = (t_left * der_i) / left
                s1 = (two * der_i) / left

            f4 = zero
            s2 = zero
            if der_j != zero:
                f4 = (t_right * der_j) / right
                s2 = (-two * der_j) / right

            s3 = zero
            if sec_i != zero:
                s3 = (t_left * sec_i) / left

            s4 = zero
            if sec_j != zero:
                s4 = (t_right * sec_j) / right

            values[i] = b1 + b2
            first[i] = f1 + f2 + f3 + f4
            second[i] = s1 + s2 + s3 + s4

    for i in range(n_points):
        out_basis[i] = values[i]
        out_first[i] = first[i]
        out_second[i] = second[i]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _tabulate_open_basis_core(
    order: int,
    pts: npt.NDArray[np.float32 | np.float64],
    n_points: int,
    knots: npt.NDArray[np.float32 | np.float64],
    work: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate the open basis at every point of `pts`.

    `out` must have shape (len(pts), n_points). The scratch row `work` is
    overwritten by every evaluation, so no state carries over between points.
    """
    for j in range(pts.shape[0]):
        _compute_open_basis_core(order, pts[j], n_points, knots, work, out[j])


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _tabulate_derivative_basis_core(  # noqa: PLR0913
    order: int,
    pts: npt.NDArray[np.float32 | np.float64],
    n_points: int,
    knots: npt.NDArray[np.float32 | np.float64],
    periodic: bool,
    work: npt.NDArray[np.float32 | np.float64],
    out_basis: npt.NDArray[np.float32 | np.float64],
    out_first: npt.NDArray[np.float32 | np.float64],
    out_second: npt.NDArray[np.float32 | np.float64],
) -> None:
    """Evaluate values and derivatives at every point of `pts`.

    The output arrays must have shape (len(pts), n_points) and `work` shape
    (3, MAX_BASIS_SLOTS).
    """
    for j in range(pts.shape[0]):
        _compute_derivative_basis_core(
            order,
            pts[j],
            n_points,
            knots,
            periodic,
            work,
            out_basis[j],
            out_first[j],
            out_second[j],
        )


def _warmup_numba_functions() -> None:
    """Precompile the kernels with float64 signatures for a faster first call."""
    knots_dummy = np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0], dtype=np.float64)
    pts_dummy = np.array([0.5], dtype=np.float64)
    order_dummy = 3
    n_points_dummy = 3
    out_dummy = np.empty((pts_dummy.size, n_points_dummy), dtype=np.float64)

    _tabulate_open_basis_core(
        order_dummy,
        pts_dummy,
        n_points_dummy,
        knots_dummy,
        np.empty(n_points_dummy + order_dummy, dtype=np.float64),
        out_dummy,
    )
    _tabulate_derivative_basis_core(
        order_dummy,
        pts_dummy,
        n_points_dummy,
        knots_dummy,
        False,
        np.empty((3, MAX_BASIS_SLOTS), dtype=np.float64),
        out_dummy,
        np.empty_like(out_dummy),
        np.empty_like(out_dummy),
    )


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_compute_derivative_basis_core",
    "_compute_open_basis_core",
    "_tabulate_derivative_basis_core",
    "_tabulate_open_basis_core",
]
