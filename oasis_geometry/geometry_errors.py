################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Error types raised by the geometry toolkit."""

from __future__ import annotations


class GeometryError(ValueError):
    """Base class for geometry failures."""


class NotSquareError(GeometryError):
    """Raised when a square matrix is required."""


class EmptyMatrixError(GeometryError):
    """Raised when a matrix has no rows or no columns."""


class DimensionMismatchError(GeometryError):
    """Raised when an input has the wrong shape."""


class IndexOutOfRangeError(GeometryError):
    """Raised when a row or column index is outside the matrix."""


class SingularMatrixError(GeometryError):
    """Raised when a matrix has a zero determinant or pivot."""


class NullSpaceExhaustedError(GeometryError):
    """Raised when no basis vector can complete an orthonormal set."""


class NotNormalizedError(GeometryError):
    """Raised when a unit quaternion or vector is required."""


class InvalidValueError(GeometryError):
    """Raised when a value is NaN, infinite, or otherwise unusable."""


class DependentColumnsError(GeometryError):
    """Raised when a decomposition requires linearly independent columns."""


class NotPositiveDefiniteError(GeometryError):
    """Raised when a Cholesky factor does not exist."""
