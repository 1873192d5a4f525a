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
Matrix decompositions built on the Gram-Schmidt engine

Conventions:
    * LU is Doolittle without pivoting: L is unit lower triangular
    * A pivot with magnitude below the pivot tolerance is singular
    * QR takes Q from ``gram_schmidt`` and R = triu(Q^T A), so A = Q R holds
      for rank-deficient input when dependent columns are allowed
    * Eigenvalues come from unshifted QR iteration and are only meaningful
      for matrices with real eigenvalues
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..config.geometry_params import EIGEN_CONVERGENCE_TOLERANCE
from ..config.geometry_params import EIGEN_MAX_ITERATIONS
from ..config.geometry_params import GRAM_SCHMIDT_TOLERANCE
from ..config.geometry_params import PIVOT_TOLERANCE
from ..geometry_errors import DependentColumnsError
from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import InvalidValueError
from ..geometry_errors import NotPositiveDefiniteError
from ..geometry_errors import SingularMatrixError
from ..math_utils.validation import as_matrix
from ..math_utils.validation import as_square_matrix
from ..math_utils.validation import as_vector
from .gram_schmidt import gram_schmidt


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LUDecomposition:
    """A = L @ U with unit lower triangular L."""

    L: NDArray[np.float64]
    U: NDArray[np.float64]


@dataclass(frozen=True)
class QRDecomposition:
    """A = Q @ R with orthonormal columns in Q and upper triangular R."""

    Q: NDArray[np.float64]
    R: NDArray[np.float64]


@dataclass(frozen=True)
class EigenDecomposition:
    """Eigenvalues and the matching eigenvectors stored as columns."""

    eigenvalues: NDArray[np.float64]
    eigenvectors: NDArray[np.float64]
    iterations: int
    converged: bool


def lu(
    matrix: NDArray[np.float64], pivot_tolerance: float = PIVOT_TOLERANCE
) -> LUDecomposition:
    """
    Factor a square matrix with Doolittle's method

    Raises:
        NotSquareError: If the matrix is not square
        SingularMatrixError: If a pivot magnitude is below the tolerance
    """

    mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
    size: int = mat.shape[0]
    lower: NDArray[np.float64] = np.eye(size, dtype=float)
    upper: NDArray[np.float64] = np.zeros((size, size), dtype=float)

    for i in range(size):
        for j in range(i, size):
            upper[i, j] = mat[i, j] - float(np.dot(lower[i, :i], upper[:i, j]))

        pivot: float = float(upper[i, i])
        if abs(pivot) < pivot_tolerance:
            raise SingularMatrixError(f"Zero pivot at row {i} ({pivot:.3e})")

        for j in range(i + 1, size):
            acc: float = mat[j, i] - float(np.dot(lower[j, :i], upper[:i, i]))
            lower[j, i] = acc / pivot

    return LUDecomposition(L=lower, U=upper)


def solve(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    pivot_tolerance: float = PIVOT_TOLERANCE,
) -> NDArray[np.float64]:
    """
    Solve A x = b using the LU factors of A

    Raises:
        DimensionMismatchError: If b does not have one entry per row of A
        SingularMatrixError: If A has a zero pivot
    """

    mat: NDArray[np.float64] = as_square_matrix(a, "a")
    rhs: NDArray[np.float64] = as_vector(b, "b")
    size: int = mat.shape[0]
    if rhs.shape[0] != size:
        raise DimensionMismatchError(f"b must have length {size}, got {rhs.shape[0]}")

    factors: LUDecomposition = lu(mat, pivot_tolerance)

    y: NDArray[np.float64] = _forward_sub(factors.L, rhs)
    return _backward_sub(factors.U, y)


def qr(
    matrix: NDArray[np.float64],
    allow_dependent_columns: bool = False,
    tolerance: float = GRAM_SCHMIDT_TOLERANCE,
) -> QRDecomposition:
    """
    Factor an m x n matrix with m >= n into Q R

    Args:
        matrix: Matrix to factor
        allow_dependent_columns: Keep going when a column is dependent. Its
            Q column is then a completed null-space vector and its R
            diagonal is zero
        tolerance: Residual norm at or below which a column is dependent

    Raises:
        DimensionMismatchError: If the matrix has fewer rows than columns
        DependentColumnsError: If a column is dependent and that is not allowed
    """

    mat: NDArray[np.float64] = as_matrix(matrix, "matrix")
    rows: int = mat.shape[0]
    cols: int = mat.shape[1]
    if rows < cols:
        raise DimensionMismatchError(
            f"QR needs at least as many rows as columns, got {rows}x{cols}"
        )

    q: NDArray[np.float64] = gram_schmidt(mat, tolerance)
    r: NDArray[np.float64] = np.triu(q.T @ mat)

    for k in range(cols):
        if r[k, k] > tolerance:
            continue
        if not allow_dependent_columns:
            raise DependentColumnsError(
                f"Column {k} is linearly dependent on previous columns"
            )
        _LOG.debug("QR column %d is dependent (r = %.3e)", k, r[k, k])
        r[k, k] = 0.0

    return QRDecomposition(Q=q, R=r)


def cholesky(
    matrix: NDArray[np.float64], pivot_tolerance: float = PIVOT_TOLERANCE
) -> NDArray[np.float64]:
    """
    Return lower triangular L with A = L @ L.T

    Only the lower triangle of A is read.

    Raises:
        NotPositiveDefiniteError: If a diagonal term is not positive
    """

    mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
    size: int = mat.shape[0]
    lower: NDArray[np.float64] = np.zeros((size, size), dtype=float)

    for i in range(size):
        for j in range(i + 1):
            acc: float = mat[i, j] - float(np.dot(lower[i, :j], lower[j, :j]))
            if i == j:
                if acc <= 0.0:
                    raise NotPositiveDefiniteError(
                        f"Matrix is not positive definite at [{i}, {j}]"
                    )
                lower[i, j] = math.sqrt(acc)
            else:
                if lower[j, j] < pivot_tolerance:
                    raise NotPositiveDefiniteError(
                        f"Matrix is not positive definite at [{j}, {j}]"
                    )
                lower[i, j] = acc / lower[j, j]

    return lower


def eigen_qr_iteration(
    matrix: NDArray[np.float64],
    max_iterations: int = EIGEN_MAX_ITERATIONS,
    tolerance: float = EIGEN_CONVERGENCE_TOLERANCE,
) -> EigenDecomposition:
    """
    Estimate eigenvalues and eigenvectors by unshifted QR iteration

    Each step factors A_k = Q R and sets A_{k+1} = R Q. Iteration stops when
    every entry above the diagonal is within the tolerance. The eigenvalues
    are the diagonal of the final A_k and the eigenvectors are the columns of
    the accumulated product of the Q factors.
    """

    if max_iterations < 1:
        raise InvalidValueError("max_iterations must be positive")

    current: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
    size: int = current.shape[0]
    q_total: NDArray[np.float64] = np.eye(size, dtype=float)

    iterations: int = 0
    converged: bool = False
    while iterations < max_iterations and not converged:
        factors: QRDecomposition = qr(current, allow_dependent_columns=True)
        current = factors.R @ factors.Q
        q_total = q_total @ factors.Q
        iterations += 1
        converged = _upper_converged(current, tolerance)

    if converged:
        _LOG.debug("QR iteration converged after %d iterations", iterations)
    else:
        _LOG.debug("QR iteration stopped after %d iterations", iterations)

    return EigenDecomposition(
        eigenvalues=np.diag(current).copy(),
        eigenvectors=q_total,
        iterations=iterations,
        converged=converged,
    )


def _upper_converged(matrix: NDArray[np.float64], tolerance: float) -> bool:
    upper: NDArray[np.float64] = np.triu(matrix, k=1)
    return bool(np.all(np.abs(upper) <= tolerance))


def _forward_sub(
    lower: NDArray[np.float64], b: NDArray[np.float64]
) -> NDArray[np.float64]:
    # L has a unit diagonal
    size: int = lower.shape[0]
    y: NDArray[np.float64] = np.zeros(size, dtype=float)
    for i in range(size):
        y[i] = b[i] - float(np.dot(lower[i, :i], y[:i]))
    return y


def _backward_sub(
    upper: NDArray[np.float64], y: NDArray[np.float64]
) -> NDArray[np.float64]:
    size: int = upper.shape[0]
    x: NDArray[np.float64] = np.zeros(size, dtype=float)
    for i in range(size - 1, -1, -1):
        acc: float = y[i] - float(np.dot(upper[i, i + 1 :], x[i + 1 :]))
        x[i] = acc / upper[i, i]
    return x
