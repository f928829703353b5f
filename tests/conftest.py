"""Pytest configuration and shared knot vector fixtures.

Makes `src` importable without installing the package.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import numpy as np
import numpy.typing as npt
import pytest


def _ensure_src_on_sys_path() -> None:
    """Prepend the repository `src` directory to `sys.path` if missing."""
    repo_root: Path = Path(__file__).resolve().parents[1]
    src_path: Path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_sys_path()

KnotsFactory = Callable[..., npt.NDArray[np.float32 | np.float64]]


@pytest.fixture
def quadratic_open_knots() -> list[float]:
    """Clamped quadratic knot vector with five control points."""
    return [0.0, 0.0, 0.0, 1.0, 2.0, 3.0, 3.0, 3.0]


@pytest.fixture
def open_knots() -> KnotsFactory:
    """Factory of clamped knot vectors on [0, num_intervals] with unit spacing.

    The resulting knot vector has ``num_intervals + 2 * order - 1`` entries,
    i.e. ``num_intervals + order - 1`` control points.
    """

    def factory(
        order: int, num_intervals: int, dtype: npt.DTypeLike = np.float64
    ) -> npt.NDArray[np.float32 | np.float64]:
        return np.concatenate(
            [
                np.zeros(order - 1),
                np.arange(num_intervals + 1),
                np.full(order - 1, num_intervals),
            ]
        ).astype(dtype)

    return factory


@pytest.fixture
def periodic_knots() -> KnotsFactory:
    """Factory of uniform unclamped knot vectors 0, 1, ..., n_points + order - 1."""

    def factory(
        order: int, n_points: int, dtype: npt.DTypeLike = np.float64
    ) -> npt.NDArray[np.float32 | np.float64]:
        return np.arange(n_points + order).astype(dtype)

    return factory
