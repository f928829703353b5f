"""Tests for input normalization helpers and the compiled kernels."""

from __future__ import annotations

import numpy as np
import numpy.testing as nptest
import pytest

from knotbasis._basis_core import _compute_derivative_basis_core, _compute_open_basis_core
from knotbasis._basis_utils import (
    MAX_BASIS_SLOTS,
    _check_basis_input,
    _compute_final_output_shape_1D,
    _normalize_knots,
    _normalize_parameter,
    _normalize_points_1D,
)
from knotbasis.errors import BasisError, CapacityExceededError, InvalidInputError


class TestNormalizeKnots:
    """Tests for _normalize_knots."""

    def test_integer_knots_to_float64(self) -> None:
        knots = _normalize_knots([0, 0, 1, 2, 2])
        assert knots.dtype == np.float64
        nptest.assert_array_equal(knots, [0.0, 0.0, 1.0, 2.0, 2.0])

    def test_float32_preserved(self) -> None:
        knots = _normalize_knots(np.array([0.0, 1.0], dtype=np.float32))
        assert knots.dtype == np.float32

    def test_empty(self) -> None:
        with pytest.raises(InvalidInputError, match="knots must not be empty"):
            _normalize_knots([])

    def test_ragged(self) -> None:
        with pytest.raises(InvalidInputError):
            _normalize_knots([[0.0], [1.0, 2.0]])

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(BasisError):
            _normalize_knots([1.0, 0.0])


class TestCheckBasisInput:
    """Tests for _check_basis_input."""

    def test_valid(self) -> None:
        _check_basis_input(2, 3, np.zeros(5), capacity=MAX_BASIS_SLOTS)

    def test_capacity_is_optional(self) -> None:
        _check_basis_input(2, 40, np.zeros(42))

    def test_capacity_checked_before_length(self) -> None:
        with pytest.raises(CapacityExceededError):
            _check_basis_input(2, 40, np.zeros(3), capacity=MAX_BASIS_SLOTS)


class TestNormalizeValues:
    """Tests for parameter and point normalization."""

    def test_parameter_cast_to_knots_dtype(self) -> None:
        value = _normalize_parameter(1, np.dtype(np.float32))
        assert isinstance(value, np.float32)
        assert value == 1.0

    def test_parameter_not_numeric(self) -> None:
        with pytest.raises(InvalidInputError, match="t must be a real scalar"):
            _normalize_parameter("a", np.dtype(np.float64))  # type: ignore[arg-type]

    def test_points_flattened(self) -> None:
        pts = _normalize_points_1D([[0, 1], [2, 3]], np.dtype(np.float64))
        assert pts.shape == (4,)
        assert pts.dtype == np.float64

    def test_points_not_numeric(self) -> None:
        with pytest.raises(InvalidInputError, match="pts must be real numbers"):
            _normalize_points_1D(["a"], np.dtype(np.float64))

    @pytest.mark.parametrize(
        ("input_shape", "expected"),
        [((), (4,)), ((3,), (3, 4)), ((2, 5), (2, 5, 4))],
    )
    def test_final_output_shape(
        self, input_shape: tuple[int, ...], expected: tuple[int, ...]
    ) -> None:
        assert _compute_final_output_shape_1D(input_shape, 4) == expected


class TestKernels:
    """Direct calls to the compiled kernels with caller-provided buffers."""

    def test_open_kernel_reuses_work_row(self) -> None:
        knots = np.array([0.0, 0.0, 0.0, 1.0, 2.0, 3.0, 3.0, 3.0])
        work = np.full(8, 7.0)
        out = np.empty(5)
        _compute_open_basis_core(3, 3.0, 5, knots, work, out)
        nptest.assert_array_equal(out, [0.0, 0.0, 0.0, 0.0, 1.0])
        _compute_open_basis_core(3, 1.5, 5, knots, work, out)
        nptest.assert_allclose(out, [0.0, 0.125, 0.75, 0.125, 0.0])

    def test_derivative_kernel_clears_work_rows(self) -> None:
        knots = np.array([0.0, 0.0, 1.0, 1.0])
        work = np.full((3, MAX_BASIS_SLOTS), 5.0)
        out = np.empty((3, 2))
        _compute_derivative_basis_core(2, 0.25, 2, knots, False, work, out[0], out[1], out[2])
        nptest.assert_allclose(out[0], [0.75, 0.25])
        nptest.assert_allclose(out[1], [-1.0, 1.0])
        nptest.assert_array_equal(out[2], [0.0, 0.0])
