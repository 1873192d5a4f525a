################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structural matrix helpers: construction, transpose and products."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from ..config.geometry_params import MATRIX_EQUALS_TOLERANCE
from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import InvalidValueError
from .validation import as_matrix
from .validation import as_square_matrix


class MatrixOps:
    """General matrix container operations."""

    @staticmethod
    def identity(size: int) -> NDArray[np.float64]:
        """Return the size x size identity matrix."""
        if size < 1:
            raise InvalidValueError("size must be positive")
        return np.eye(size, dtype=float)

    @staticmethod
    def transpose(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return a transposed copy of a matrix."""
        mat: NDArray[np.float64] = as_matrix(matrix, "matrix")
        return np.array(mat.T, dtype=float)

    @staticmethod
    def multiply(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the matrix product a @ b."""
        a_mat: NDArray[np.float64] = as_matrix(a, "a")
        b_mat: NDArray[np.float64] = as_matrix(b, "b")
        if a_mat.shape[1] != b_mat.shape[0]:
            raise DimensionMismatchError(
                f"cannot multiply {a_mat.shape} by {b_mat.shape}"
            )
        return a_mat @ b_mat

    @staticmethod
    def scale(matrix: NDArray[np.float64], factor: float) -> NDArray[np.float64]:
        """Return the matrix scaled by a factor."""
        return as_matrix(matrix, "matrix") * float(factor)

    @staticmethod
    def trace(matrix: NDArray[np.float64]) -> float:
        """Return the sum of the diagonal of a square matrix."""
        return float(np.trace(as_square_matrix(matrix, "matrix")))

    @staticmethod
    def equals(
        a: NDArray[np.float64],
        b: NDArray[np.float64],
        tolerance: float = MATRIX_EQUALS_TOLERANCE,
    ) -> bool:
        """Check element-wise equality within an absolute tolerance."""
        if tolerance < 0.0:
            raise InvalidValueError("tolerance must be non-negative")
        a_mat: NDArray[np.float64] = as_matrix(a, "a")
        b_mat: NDArray[np.float64] = as_matrix(b, "b")
        if a_mat.shape != b_mat.shape:
            return False
        return bool(np.all(np.abs(a_mat - b_mat) <= tolerance))

    @staticmethod
    def canonical_zero(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return a copy with negative zeros replaced by positive zeros."""
        mat: NDArray[np.float64] = np.asarray(matrix, dtype=float)
        return np.where(mat == 0.0, 0.0, mat)
