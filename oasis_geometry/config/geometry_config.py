################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for the geometry toolkit."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry_params import GeometryParams
from .geometry_params import GeometryParamsError


# Interpolation methods understood by quaternion paths
PATH_METHODS: frozenset[str] = frozenset({"slerp", "nlerp", "squad"})


class GeometryConfigError(Exception):
    """Raised when geometry configuration validation fails."""


@dataclass(frozen=True)
class GeometryConfig:
    """Convenience wrapper around geometry parameters."""

    params: GeometryParams

    def __init__(self, params: GeometryParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> GeometryConfig:
        """Return a configuration built from default parameters."""
        return cls(GeometryParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants and cross-namespace policies."""
        try:
            self.params.validate()
        except GeometryParamsError as exc:
            raise GeometryConfigError(str(exc)) from exc

        if self.params.interpolation.path_method not in PATH_METHODS:
            raise GeometryConfigError(
                "interpolation.path_method must be slerp, nlerp, or squad"
            )

        threshold: float = self.params.interpolation.slerp_dot_threshold
        if threshold <= 0.0 or threshold >= 1.0:
            raise GeometryConfigError(
                "interpolation.slerp_dot_threshold must be strictly inside (0, 1)"
            )

    def matrix_equals_tolerance(self) -> float:
        """Return the element-wise matrix comparison tolerance."""
        return self.params.matrix.equals_tolerance

    def gram_schmidt_tolerance(self) -> float:
        """Return the Gram-Schmidt dependent-column threshold."""
        return self.params.matrix.gram_schmidt_tolerance

    def pivot_tolerance(self) -> float:
        """Return the zero-pivot threshold for LU and Cholesky."""
        return self.params.matrix.pivot_tolerance

    def eigen_convergence_tolerance(self) -> float:
        """Return the QR eigenvalue iteration convergence threshold."""
        return self.params.matrix.eigen_convergence_tolerance

    def eigen_max_iterations(self) -> int:
        """Return the QR eigenvalue iteration budget."""
        return self.params.matrix.eigen_max_iterations

    def magnitude_tolerance(self) -> float:
        """Return the minimum magnitude for quaternion normalize and inverse."""
        return self.params.quaternion.magnitude_tolerance

    def normalized_tolerance(self) -> float:
        """Return the allowed |q| deviation for rotation quaternions."""
        return self.params.quaternion.normalized_tolerance

    def angle_tolerance(self) -> float:
        """Return the degenerate axis-angle threshold."""
        return self.params.quaternion.angle_tolerance

    def quaternion_equals_tolerance(self) -> float:
        """Return the component tolerance for quaternion comparison."""
        return self.params.quaternion.equals_tolerance

    def slerp_dot_threshold(self) -> float:
        """Return the SLERP linear fallback threshold."""
        return self.params.interpolation.slerp_dot_threshold

    def log_tolerance(self) -> float:
        """Return the identity threshold for quaternion log and exp."""
        return self.params.interpolation.log_tolerance

    def path_method(self) -> str:
        """Return the configured quaternion path method."""
        return self.params.interpolation.path_method

    def rotation_matrix_tolerance(self) -> float:
        """Return the rotation matrix validity tolerance."""
        return self.params.rotation.rotation_matrix_tolerance
