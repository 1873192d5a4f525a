################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validation helpers for matrix, vector and quaternion inputs."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import EmptyMatrixError
from ..geometry_errors import InvalidValueError
from ..geometry_errors import NotSquareError


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise InvalidValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise InvalidValueError(f"{name} must be finite")


def _as_float_array(values: Any, name: str) -> NDArray[np.float64]:
    try:
        return np.array(values, dtype=np.float64)
    except ValueError as exc:
        # Ragged nested sequences cannot form a rectangular array
        raise DimensionMismatchError(f"{name} must be rectangular") from exc
    except TypeError as exc:
        raise InvalidValueError(f"{name} must contain numbers") from exc


def as_matrix(values: Any, name: str = "matrix") -> NDArray[np.float64]:
    """Return a finite 2D float64 copy of a matrix-like input."""
    matrix: NDArray[np.float64] = _as_float_array(values, name)
    if matrix.size == 0:
        raise EmptyMatrixError(f"{name} must have at least one row and column")
    if matrix.ndim != 2:
        raise DimensionMismatchError(f"{name} must be 2D, got {matrix.ndim}D")
    assert_finite(matrix, name)
    return matrix


def as_square_matrix(values: Any, name: str = "matrix") -> NDArray[np.float64]:
    """Return a finite square float64 copy of a matrix-like input."""
    matrix: NDArray[np.float64] = as_matrix(values, name)
    rows: int = matrix.shape[0]
    cols: int = matrix.shape[1]
    if rows != cols:
        raise NotSquareError(f"{name} must be square, got {rows}x{cols}")
    return matrix


def as_matrix_shape(
    values: Any, shape: tuple[int, int], name: str = "matrix"
) -> NDArray[np.float64]:
    """Return a finite float64 matrix with the exact expected shape."""
    matrix: NDArray[np.float64] = as_matrix(values, name)
    if matrix.shape != shape:
        raise DimensionMismatchError(
            f"{name} must have shape {shape}, got {matrix.shape}"
        )
    return matrix


def as_vector(
    values: Any, name: str = "vector", size: int | None = None
) -> NDArray[np.float64]:
    """Return a finite 1D float64 copy of a vector-like input."""
    vector: NDArray[np.float64] = _as_float_array(values, name)
    if vector.ndim != 1:
        raise DimensionMismatchError(f"{name} must be 1D, got {vector.ndim}D")
    if vector.size == 0:
        raise DimensionMismatchError(f"{name} must not be empty")
    if size is not None and vector.shape != (size,):
        raise DimensionMismatchError(
            f"{name} must have length {size}, got {vector.shape[0]}"
        )
    assert_finite(vector, name)
    return vector


def as_scalar(value: Any, name: str) -> float:
    """Return a finite float from a scalar input."""
    try:
        scalar: float = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(f"{name} must be a number") from exc
    if not np.isfinite(scalar):
        raise InvalidValueError(f"{name} must be finite")
    return scalar
