################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured tolerance schema for the geometry toolkit."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Absolute tolerance used when comparing matrices element-wise
MATRIX_EQUALS_TOLERANCE: float = 1e-8
# Residual norm below which a Gram-Schmidt column counts as dependent
GRAM_SCHMIDT_TOLERANCE: float = 1e-10
# Pivot magnitude below which LU and Cholesky treat a matrix as singular
PIVOT_TOLERANCE: float = 1e-12
# Off-diagonal magnitude at which QR eigenvalue iteration has converged
EIGEN_CONVERGENCE_TOLERANCE: float = 1e-10
# Maximum number of QR eigenvalue iterations
EIGEN_MAX_ITERATIONS: int = 50

# Magnitude below which a quaternion cannot be normalized or inverted
QUATERNION_MAGNITUDE_TOLERANCE: float = 1e-10
# Allowed deviation of |q| from 1 for rotation quaternions
QUATERNION_NORMALIZED_TOLERANCE: float = 1e-6
# sin(angle / 2) below which axis extraction is degenerate
QUATERNION_ANGLE_TOLERANCE: float = 1e-6
# Component tolerance for approximate quaternion equality
QUATERNION_EQUALS_TOLERANCE: float = 1e-6

# Dot product above which SLERP falls back to linear interpolation
SLERP_DOT_THRESHOLD: float = 0.9995
# Vector-part length below which quaternion log/exp return identity values
QUATERNION_LOG_TOLERANCE: float = 1e-6
# Default interpolation method for quaternion paths
PATH_METHOD: str = "slerp"

# Tolerance for orthonormality and determinant checks on rotation matrices
ROTATION_MATRIX_TOLERANCE: float = 1e-6


class GeometryParamsError(Exception):
    """Raised when geometry parameter validation fails."""


def _require_positive(value: float, name: str) -> None:
    """Require a finite positive value."""
    if not math.isfinite(value) or value <= 0.0:
        raise GeometryParamsError(f"{name} must be positive")


def _require_unit_interval(value: float, name: str) -> None:
    """Require a value in the closed interval [0, 1]."""
    if not math.isfinite(value) or value < 0.0 or value > 1.0:
        raise GeometryParamsError(f"{name} must be in [0, 1]")


@dataclass(frozen=True)
class MatrixParams:
    """Tolerances for the matrix algebra engine."""

    # Element-wise tolerance for matrix comparison
    equals_tolerance: float = MATRIX_EQUALS_TOLERANCE
    # Dependent-column threshold for Gram-Schmidt
    gram_schmidt_tolerance: float = GRAM_SCHMIDT_TOLERANCE
    # Zero-pivot threshold for LU and Cholesky
    pivot_tolerance: float = PIVOT_TOLERANCE
    # Convergence threshold for QR eigenvalue iteration
    eigen_convergence_tolerance: float = EIGEN_CONVERGENCE_TOLERANCE
    # Iteration budget for QR eigenvalue iteration
    eigen_max_iterations: int = EIGEN_MAX_ITERATIONS


@dataclass(frozen=True)
class QuaternionParams:
    """Tolerances for quaternion algebra."""

    # Minimum magnitude for normalize and inverse
    magnitude_tolerance: float = QUATERNION_MAGNITUDE_TOLERANCE
    # Allowed |q| deviation for rotation quaternions
    normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE
    # Degenerate axis-angle threshold
    angle_tolerance: float = QUATERNION_ANGLE_TOLERANCE
    # Component tolerance for almost_equal
    equals_tolerance: float = QUATERNION_EQUALS_TOLERANCE


@dataclass(frozen=True)
class InterpolationParams:
    """Quaternion interpolation parameters."""

    # Linear fallback threshold for SLERP
    slerp_dot_threshold: float = SLERP_DOT_THRESHOLD
    # Identity threshold for quaternion log/exp
    log_tolerance: float = QUATERNION_LOG_TOLERANCE
    # Interpolation method for quaternion paths
    path_method: str = PATH_METHOD


@dataclass(frozen=True)
class RotationParams:
    """Rotation matrix validity parameters."""

    # Orthonormality and determinant tolerance
    rotation_matrix_tolerance: float = ROTATION_MATRIX_TOLERANCE


@dataclass(frozen=True)
class GeometryParams:
    """Complete tolerance tree for the geometry toolkit."""

    matrix: MatrixParams
    quaternion: QuaternionParams
    interpolation: InterpolationParams
    rotation: RotationParams

    @classmethod
    def defaults(cls) -> GeometryParams:
        """Return the default geometry parameter tree."""
        return cls(
            matrix=MatrixParams(),
            quaternion=QuaternionParams(),
            interpolation=InterpolationParams(),
            rotation=RotationParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants."""
        _require_positive(self.matrix.equals_tolerance, "matrix.equals_tolerance")
        _require_positive(
            self.matrix.gram_schmidt_tolerance, "matrix.gram_schmidt_tolerance"
        )
        _require_positive(self.matrix.pivot_tolerance, "matrix.pivot_tolerance")
        _require_positive(
            self.matrix.eigen_convergence_tolerance,
            "matrix.eigen_convergence_tolerance",
        )
        if self.matrix.eigen_max_iterations < 1:
            raise GeometryParamsError("matrix.eigen_max_iterations must be positive")

        _require_positive(
            self.quaternion.magnitude_tolerance, "quaternion.magnitude_tolerance"
        )
        _require_positive(
            self.quaternion.normalized_tolerance, "quaternion.normalized_tolerance"
        )
        _require_positive(self.quaternion.angle_tolerance, "quaternion.angle_tolerance")
        _require_positive(
            self.quaternion.equals_tolerance, "quaternion.equals_tolerance"
        )

        _require_unit_interval(
            self.interpolation.slerp_dot_threshold,
            "interpolation.slerp_dot_threshold",
        )
        _require_positive(
            self.interpolation.log_tolerance, "interpolation.log_tolerance"
        )
        if not self.interpolation.path_method:
            raise GeometryParamsError("interpolation.path_method must be set")

        _require_positive(
            self.rotation.rotation_matrix_tolerance,
            "rotation.rotation_matrix_tolerance",
        )

    def replace(self, **namespace_overrides: Any) -> GeometryParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
