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
Determinant, cofactor, adjoint and inverse of small square matrices

Conventions:
    * ``x`` is a column index and ``y`` is a row index
    * Sizes 1, 2 and 3 use closed forms; larger sizes expand cofactors along
      row 0, so cost grows factorially with size
    * Singularity is exact: only a determinant of exactly 0.0 is rejected
    * Cofactor, adjoint and inverse results never contain negative zeros
"""

from __future__ import annotations

import logging
import numbers

import numpy as np
from numpy.typing import NDArray

from ..geometry_errors import IndexOutOfRangeError
from ..geometry_errors import SingularMatrixError
from ..math_utils.matrix_ops import MatrixOps
from ..math_utils.validation import as_square_matrix


_LOG: logging.Logger = logging.getLogger(__name__)


class MatrixAlgebra:
    """Cofactor-based matrix algebra."""

    @staticmethod
    def determinant(matrix: NDArray[np.float64]) -> float:
        """Return the determinant of a square matrix.

        Args:
            matrix: Square matrix of any size n >= 1

        Returns:
            Signed determinant

        Raises:
            NotSquareError: If the matrix is not square
            EmptyMatrixError: If the matrix has no elements
        """
        mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
        return MatrixAlgebra._determinant(mat)

    @staticmethod
    def minor(matrix: NDArray[np.float64], x: int, y: int) -> float:
        """Return the determinant of the matrix without row y and column x.

        Args:
            matrix: Square matrix of size n >= 2
            x: Column index to remove
            y: Row index to remove

        Returns:
            Minor value

        Raises:
            IndexOutOfRangeError: If the matrix is 1x1 or an index is invalid
        """
        mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
        return MatrixAlgebra._minor(mat, x, y)

    @staticmethod
    def cofactor_element(matrix: NDArray[np.float64], x: int, y: int) -> float:
        """Return the signed minor (-1)^(x+y) * minor(matrix, x, y)."""
        mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
        return MatrixAlgebra._cofactor_element(mat, x, y)

    @staticmethod
    def cofactor_matrix(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the matrix of cofactors.

        Position (row, col) holds ``cofactor_element(matrix, col, row)``.

        A 1x1 matrix has no minors, so ``cofactor_element`` rejects it. Its
        cofactor matrix is instead defined as [[1.0]], the determinant of the
        empty minor, which keeps ``adjoint`` and ``inverse`` usable for 1x1
        input.
        """
        mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
        size: int = mat.shape[0]
        if size == 1:
            return np.ones((1, 1), dtype=float)

        result: NDArray[np.float64] = np.zeros((size, size), dtype=float)
        for row in range(size):
            for col in range(size):
                result[row, col] = MatrixAlgebra._cofactor_element(mat, col, row)
        return MatrixOps.canonical_zero(result)

    @staticmethod
    def adjoint(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the adjugate, the transpose of the cofactor matrix."""
        cofactors: NDArray[np.float64] = MatrixAlgebra.cofactor_matrix(matrix)
        return MatrixOps.canonical_zero(MatrixOps.transpose(cofactors))

    @staticmethod
    def inverse(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the inverse of a square matrix.

        Args:
            matrix: Non-singular square matrix

        Returns:
            adjoint(matrix) scaled by 1 / determinant(matrix)

        Raises:
            SingularMatrixError: If the determinant is exactly zero
        """
        mat: NDArray[np.float64] = as_square_matrix(matrix, "matrix")
        det: float = MatrixAlgebra._determinant(mat)
        if det == 0.0:
            raise SingularMatrixError("Matrix is not invertible (determinant is zero)")

        inv_det: float = 1.0 / det
        adj: NDArray[np.float64] = MatrixAlgebra.adjoint(mat)
        return MatrixOps.canonical_zero(adj * inv_det)

    @staticmethod
    def _determinant(mat: NDArray[np.float64]) -> float:
        size: int = mat.shape[0]

        if size == 1:
            return float(mat[0, 0])

        if size == 2:
            return float(mat[0, 0] * mat[1, 1] - mat[0, 1] * mat[1, 0])

        if size == 3:
            a00: float = float(mat[0, 0])
            a01: float = float(mat[0, 1])
            a02: float = float(mat[0, 2])
            a10: float = float(mat[1, 0])
            a11: float = float(mat[1, 1])
            a12: float = float(mat[1, 2])
            a20: float = float(mat[2, 0])
            a21: float = float(mat[2, 1])
            a22: float = float(mat[2, 2])
            return (
                a00 * (a11 * a22 - a12 * a21)
                - a01 * (a10 * a22 - a12 * a20)
                + a02 * (a10 * a21 - a11 * a20)
            )

        _LOG.debug("Expanding %dx%d determinant along row 0", size, size)
        det: float = 0.0
        for col in range(size):
            det += float(mat[0, col]) * MatrixAlgebra._cofactor_element(mat, col, 0)
        return det

    @staticmethod
    def _minor(mat: NDArray[np.float64], x: int, y: int) -> float:
        size: int = mat.shape[0]
        if size < 2:
            raise IndexOutOfRangeError("Matrix must be at least 2x2 to compute minor")
        _check_index(x, size, "x")
        _check_index(y, size, "y")

        sub: NDArray[np.float64] = np.delete(np.delete(mat, y, axis=0), x, axis=1)
        return MatrixAlgebra._determinant(sub)

    @staticmethod
    def _cofactor_element(mat: NDArray[np.float64], x: int, y: int) -> float:
        minor: float = MatrixAlgebra._minor(mat, x, y)
        sign: float = -1.0 if (x + y) % 2 else 1.0
        return sign * minor


def _check_index(index: int, size: int, name: str) -> None:
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise IndexOutOfRangeError(f"{name} must be an integer index")
    if index < 0 or index >= size:
        raise IndexOutOfRangeError(f"{name} must be in range [0, {size})")
