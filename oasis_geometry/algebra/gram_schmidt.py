################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Gram-Schmidt orthogonalization of matrix columns

Columns are processed left to right. A column whose residual falls below the
tolerance is replaced by the first standard basis vector e0, e1, ... that
still has a residual above the tolerance, so rank-deficient input always
yields a full orthonormal set when the space allows it.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from ..config.geometry_params import GRAM_SCHMIDT_TOLERANCE
from ..geometry_errors import InvalidValueError
from ..geometry_errors import NullSpaceExhaustedError
from ..math_utils.validation import as_matrix
from ..math_utils.vector_ops import Vec


_LOG: logging.Logger = logging.getLogger(__name__)


def gram_schmidt(
    matrix: NDArray[np.float64],
    tolerance: float = GRAM_SCHMIDT_TOLERANCE,
) -> NDArray[np.float64]:
    """
    Orthonormalize the columns of a matrix

    Args:
        matrix: Matrix whose columns are the vectors to orthogonalize
        tolerance: Residual norm at or below which a column is dependent

    Returns:
        Matrix of the same shape with orthonormal columns

    Raises:
        NullSpaceExhaustedError: If a dependent column cannot be replaced
    """

    if not tolerance > 0.0:
        raise InvalidValueError("tolerance must be positive")

    mat: NDArray[np.float64] = as_matrix(matrix, "matrix")
    rows: int = mat.shape[0]
    cols: int = mat.shape[1]

    basis: list[NDArray[np.float64]] = []
    for col in range(cols):
        residual: NDArray[np.float64] = _reject(mat[:, col], basis)
        norm: float = _norm(residual)
        if norm > tolerance:
            basis.append(residual / norm)
        else:
            _LOG.debug(
                "Column %d is dependent (residual %.3e), completing null space",
                col,
                norm,
            )
            basis.append(_complete_basis(basis, rows, tolerance))

    result: NDArray[np.float64] = np.zeros((rows, cols), dtype=float)
    for col, vector in enumerate(basis):
        result[:, col] = vector
    return result


def _complete_basis(
    basis: list[NDArray[np.float64]], rows: int, tolerance: float
) -> NDArray[np.float64]:
    # Standard basis candidates are tried strictly in index order
    for trial in range(rows):
        candidate: NDArray[np.float64] = np.zeros(rows, dtype=float)
        candidate[trial] = 1.0
        residual: NDArray[np.float64] = _reject(candidate, basis)
        norm: float = _norm(residual)
        if norm > tolerance:
            return residual / norm

    raise NullSpaceExhaustedError("Unable to find orthonormal vector for null space")


def _reject(
    vector: NDArray[np.float64], basis: list[NDArray[np.float64]]
) -> NDArray[np.float64]:
    residual: NDArray[np.float64] = np.array(vector, dtype=float)
    for unit in basis:
        residual = Vec.subtract(residual, Vec.project(residual, unit))
    return residual


def _norm(vector: NDArray[np.float64]) -> float:
    return math.sqrt(float(np.dot(vector, vector)))
