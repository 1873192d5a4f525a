################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for LU, QR, Cholesky, linear solves and QR eigen iteration."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_geometry.algebra.decompositions import EigenDecomposition
from oasis_geometry.algebra.decompositions import LUDecomposition
from oasis_geometry.algebra.decompositions import QRDecomposition
from oasis_geometry.algebra.decompositions import cholesky
from oasis_geometry.algebra.decompositions import eigen_qr_iteration
from oasis_geometry.algebra.decompositions import lu
from oasis_geometry.algebra.decompositions import qr
from oasis_geometry.algebra.decompositions import solve
from oasis_geometry.config.geometry_config import GeometryConfig
from oasis_geometry.geometry_errors import DependentColumnsError
from oasis_geometry.geometry_errors import DimensionMismatchError
from oasis_geometry.geometry_errors import InvalidValueError
from oasis_geometry.geometry_errors import NotPositiveDefiniteError
from oasis_geometry.geometry_errors import NotSquareError
from oasis_geometry.geometry_errors import SingularMatrixError


def _assert_orthonormal_columns(Q: NDArray[np.float64]) -> None:
    gram: NDArray[np.float64] = Q.T @ Q
    assert np.allclose(gram, np.eye(Q.shape[1]), atol=1e-9)


def test_lu_known_matrix() -> None:
    """Checks Doolittle factors of a 3x3 matrix."""
    A: NDArray[np.float64] = np.array(
        [
            [2.0, -1.0, -2.0],
            [-4.0, 6.0, 3.0],
            [-4.0, -2.0, 8.0],
        ]
    )
    factors: LUDecomposition = lu(A)
    expected_L: NDArray[np.float64] = np.array(
        [
            [1.0, 0.0, 0.0],
            [-2.0, 1.0, 0.0],
            [-2.0, -1.0, 1.0],
        ]
    )
    expected_U: NDArray[np.float64] = np.array(
        [
            [2.0, -1.0, -2.0],
            [0.0, 4.0, -1.0],
            [0.0, 0.0, 3.0],
        ]
    )
    assert np.allclose(factors.L, expected_L)
    assert np.allclose(factors.U, expected_U)
    assert np.allclose(factors.L @ factors.U, A)


def test_lu_random_reconstructs() -> None:
    """Checks L is unit lower triangular, U is upper and L @ U == A."""
    rng: np.random.Generator = np.random.default_rng(11)
    for size in (1, 2, 4, 6):
        A: NDArray[np.float64] = rng.normal(size=(size, size)) + size * np.eye(size)
        factors: LUDecomposition = lu(A)
        assert np.array_equal(np.diag(factors.L), np.ones(size))
        assert np.array_equal(factors.L, np.tril(factors.L))
        assert np.array_equal(factors.U, np.triu(factors.U))
        assert np.allclose(factors.L @ factors.U, A)


def test_lu_zero_pivot() -> None:
    """Checks a zero leading pivot is singular even for invertible input."""
    with pytest.raises(SingularMatrixError):
        lu([[0.0, 1.0], [1.0, 0.0]])
    with pytest.raises(SingularMatrixError):
        lu([[1.0, 2.0], [2.0, 4.0]])
    with pytest.raises(NotSquareError):
        lu(np.ones((2, 3)))


def test_solve_known_system() -> None:
    """Checks a 3x3 system against its known solution."""
    A: NDArray[np.float64] = np.array(
        [
            [2.0, 1.0, -1.0],
            [-3.0, -1.0, 2.0],
            [-2.0, 1.0, 2.0],
        ]
    )
    b: NDArray[np.float64] = np.array([8.0, -11.0, -3.0])
    x: NDArray[np.float64] = solve(A, b)
    assert np.allclose(x, [2.0, 3.0, -1.0])
    assert np.allclose(A @ x, b)


def test_solve_matches_numpy() -> None:
    """Checks random diagonally dominant systems agree with numpy."""
    rng: np.random.Generator = np.random.default_rng(12)
    A: NDArray[np.float64] = rng.normal(size=(5, 5)) + 5.0 * np.eye(5)
    b: NDArray[np.float64] = rng.normal(size=5)
    assert np.allclose(solve(A, b), np.linalg.solve(A, b))


def test_solve_errors() -> None:
    """Checks length mismatches and singular systems are rejected."""
    with pytest.raises(DimensionMismatchError):
        solve(np.eye(3), [1.0, 2.0])
    with pytest.raises(SingularMatrixError):
        solve([[1.0, 1.0], [1.0, 1.0]], [1.0, 2.0])


def test_qr_random_tall() -> None:
    """Checks Q has orthonormal columns, R is upper and Q @ R == A."""
    rng: np.random.Generator = np.random.default_rng(13)
    for rows, cols in ((3, 3), (5, 3), (6, 6)):
        A: NDArray[np.float64] = rng.normal(size=(rows, cols))
        factors: QRDecomposition = qr(A)
        assert factors.Q.shape == (rows, cols)
        assert factors.R.shape == (cols, cols)
        _assert_orthonormal_columns(factors.Q)
        assert np.array_equal(factors.R, np.triu(factors.R))
        assert np.all(np.diag(factors.R) > 0.0)
        assert np.allclose(factors.Q @ factors.R, A)


def test_qr_dependent_column() -> None:
    """Checks dependent columns raise unless explicitly allowed."""
    A: NDArray[np.float64] = np.array(
        [
            [1.0, 2.0, 0.0],
            [0.0, 0.0, 1.0],
            [1.0, 2.0, 1.0],
        ]
    )
    with pytest.raises(DependentColumnsError):
        qr(A)

    factors: QRDecomposition = qr(A, allow_dependent_columns=True)
    _assert_orthonormal_columns(factors.Q)
    assert factors.R[1, 1] == 0.0
    assert np.allclose(factors.Q @ factors.R, A)


def test_qr_wide_matrix() -> None:
    """Checks fewer rows than columns is rejected."""
    with pytest.raises(DimensionMismatchError):
        qr(np.ones((2, 3)))


def test_qr_uses_configured_tolerance() -> None:
    """Checks the dependency threshold follows the tolerance argument."""
    A: NDArray[np.float64] = np.array([[1.0, 1.0], [0.0, 1e-6]])
    config: GeometryConfig = GeometryConfig.defaults()
    factors: QRDecomposition = qr(A, tolerance=config.gram_schmidt_tolerance())
    assert factors.R[1, 1] == pytest.approx(1e-6)
    with pytest.raises(DependentColumnsError):
        qr(A, tolerance=1e-3)


def test_cholesky_spd() -> None:
    """Checks L @ L.T reconstructs a symmetric positive definite matrix."""
    A: NDArray[np.float64] = np.array(
        [
            [4.0, 12.0, -16.0],
            [12.0, 37.0, -43.0],
            [-16.0, -43.0, 98.0],
        ]
    )
    L: NDArray[np.float64] = cholesky(A)
    expected: NDArray[np.float64] = np.array(
        [
            [2.0, 0.0, 0.0],
            [6.0, 1.0, 0.0],
            [-8.0, 5.0, 3.0],
        ]
    )
    assert np.allclose(L, expected)
    assert np.allclose(L @ L.T, A)


def test_cholesky_not_positive_definite() -> None:
    """Checks indefinite and semidefinite matrices are rejected."""
    with pytest.raises(NotPositiveDefiniteError):
        cholesky([[1.0, 2.0], [2.0, 1.0]])
    with pytest.raises(NotPositiveDefiniteError):
        cholesky([[1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(NotPositiveDefiniteError):
        cholesky([[-1.0]])


def test_eigen_symmetric_2x2() -> None:
    """Checks eigenpairs of [[2, 1], [1, 2]]."""
    A: NDArray[np.float64] = np.array([[2.0, 1.0], [1.0, 2.0]])
    result: EigenDecomposition = eigen_qr_iteration(A)
    assert result.converged
    assert np.allclose(np.sort(result.eigenvalues), [1.0, 3.0])
    for index, value in enumerate(result.eigenvalues):
        v: NDArray[np.float64] = result.eigenvectors[:, index]
        assert np.allclose(A @ v, value * v, atol=1e-8)
    _assert_orthonormal_columns(result.eigenvectors)


def test_eigen_symmetric_matches_numpy() -> None:
    """Checks a 3x3 symmetric matrix against numpy."""
    A: NDArray[np.float64] = np.array(
        [
            [4.0, 1.0, 0.5],
            [1.0, 3.0, 0.2],
            [0.5, 0.2, 1.0],
        ]
    )
    result: EigenDecomposition = eigen_qr_iteration(A, max_iterations=500)
    assert result.converged
    assert np.allclose(np.sort(result.eigenvalues), np.linalg.eigvalsh(A), atol=1e-6)


def test_eigen_rank_deficient() -> None:
    """Checks a singular matrix falls back to completed QR factors."""
    A: NDArray[np.float64] = np.array([[1.0, 1.0], [1.0, 1.0]])
    result: EigenDecomposition = eigen_qr_iteration(A)
    assert result.converged
    assert np.allclose(np.sort(result.eigenvalues), [0.0, 2.0])


def test_eigen_reports_non_convergence() -> None:
    """Checks an exhausted iteration budget is reported."""
    A: NDArray[np.float64] = np.array([[2.0, 1.0], [1.0, 2.0]])
    result: EigenDecomposition = eigen_qr_iteration(A, max_iterations=1)
    assert result.iterations == 1
    assert not result.converged
    with pytest.raises(InvalidValueError):
        eigen_qr_iteration(A, max_iterations=0)
