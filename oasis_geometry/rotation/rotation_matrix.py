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
Conversions between quaternions and rotation or transformation matrices

Matrix to quaternion conversion uses Shepperd's method: the component with
the largest magnitude is solved first from the diagonal so that the divisor
``s`` stays well away from zero, then the remaining components follow from
off-diagonal sums and differences.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from ..algebra.matrix_algebra import MatrixAlgebra
from ..config.geometry_params import QUATERNION_NORMALIZED_TOLERANCE
from ..config.geometry_params import ROTATION_MATRIX_TOLERANCE
from ..math_utils.validation import as_matrix_shape
from .quaternion import Quaternion


_LOG: logging.Logger = logging.getLogger(__name__)


class ShepperdBranch(enum.Enum):
    """Dominant component solved first when extracting a quaternion."""

    W = "w"
    X = "x"
    Y = "y"
    Z = "z"


def quaternion_to_rotation_matrix(
    q: Quaternion, normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE
) -> NDArray[np.float64]:
    """Return the 3x3 rotation matrix of a unit quaternion."""
    q.require_normalized(normalized_tolerance)
    x: float = q.x
    y: float = q.y
    z: float = q.z
    w: float = q.w
    return np.array(
        [
            [
                1.0 - 2.0 * (y * y + z * z),
                2.0 * (x * y - w * z),
                2.0 * (x * z + w * y),
            ],
            [
                2.0 * (x * y + w * z),
                1.0 - 2.0 * (x * x + z * z),
                2.0 * (y * z - w * x),
            ],
            [
                2.0 * (x * z - w * y),
                2.0 * (y * z + w * x),
                1.0 - 2.0 * (x * x + y * y),
            ],
        ],
        dtype=float,
    )


def select_shepperd_branch(R: NDArray[np.float64]) -> ShepperdBranch:
    """Return the Shepperd branch used for a 3x3 rotation matrix.

    Ties between diagonal entries fall through to the later branch.
    """
    mat: NDArray[np.float64] = as_matrix_shape(R, (3, 3), "R")
    m00: float = float(mat[0, 0])
    m11: float = float(mat[1, 1])
    m22: float = float(mat[2, 2])

    if m00 + m11 + m22 > 0.0:
        return ShepperdBranch.W
    if m00 > m11 and m00 > m22:
        return ShepperdBranch.X
    if m11 > m22:
        return ShepperdBranch.Y
    return ShepperdBranch.Z


def quaternion_from_rotation_matrix(R: NDArray[np.float64]) -> Quaternion:
    """Return the unit quaternion of a 3x3 rotation matrix."""
    mat: NDArray[np.float64] = as_matrix_shape(R, (3, 3), "R")
    branch: ShepperdBranch = select_shepperd_branch(mat)
    _LOG.debug("Extracting quaternion with Shepperd branch %s", branch.value)
    return _SHEPPERD_EXTRACTORS[branch](mat).normalized()


def is_valid_rotation_matrix(
    R: NDArray[np.float64], tolerance: float = ROTATION_MATRIX_TOLERANCE
) -> bool:
    """Check for orthonormal columns and a determinant of +1.

    Reflections (determinant -1) are rejected.
    """
    mat: NDArray[np.float64] = as_matrix_shape(R, (3, 3), "R")
    columns: list[NDArray[np.float64]] = [mat[:, col] for col in range(3)]

    for column in columns:
        if abs(float(np.dot(column, column)) - 1.0) > tolerance:
            return False

    for i, j in ((0, 1), (0, 2), (1, 2)):
        if abs(float(np.dot(columns[i], columns[j]))) > tolerance:
            return False

    det: float = MatrixAlgebra.determinant(mat)
    return abs(det - 1.0) <= tolerance


def quaternion_to_transformation_matrix(
    q: Quaternion, normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE
) -> NDArray[np.float64]:
    """Return a 4x4 transformation matrix with zero translation."""
    transform: NDArray[np.float64] = np.eye(4, dtype=float)
    transform[:3, :3] = quaternion_to_rotation_matrix(q, normalized_tolerance)
    return transform


def quaternion_from_transformation_matrix(T: NDArray[np.float64]) -> Quaternion:
    """Return the rotation of a 4x4 transformation matrix.

    Translation is ignored and the last row is assumed to be [0, 0, 0, 1].
    """
    mat: NDArray[np.float64] = as_matrix_shape(T, (4, 4), "T")
    return quaternion_from_rotation_matrix(mat[:3, :3])


def _extract_w_dominant(mat: NDArray[np.float64]) -> Quaternion:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _entries(mat)
    # s = 4 * qw
    s: float = math.sqrt(m00 + m11 + m22 + 1.0) * 2.0
    return Quaternion.from_xyzw(
        (m21 - m12) / s,
        (m02 - m20) / s,
        (m10 - m01) / s,
        0.25 * s,
    )


def _extract_x_dominant(mat: NDArray[np.float64]) -> Quaternion:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _entries(mat)
    # s = 4 * qx
    s: float = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
    return Quaternion.from_xyzw(
        0.25 * s,
        (m01 + m10) / s,
        (m02 + m20) / s,
        (m21 - m12) / s,
    )


def _extract_y_dominant(mat: NDArray[np.float64]) -> Quaternion:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _entries(mat)
    # s = 4 * qy
    s: float = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
    return Quaternion.from_xyzw(
        (m01 + m10) / s,
        0.25 * s,
        (m12 + m21) / s,
        (m02 - m20) / s,
    )


def _extract_z_dominant(mat: NDArray[np.float64]) -> Quaternion:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _entries(mat)
    # s = 4 * qz
    s: float = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
    return Quaternion.from_xyzw(
        (m02 + m20) / s,
        (m12 + m21) / s,
        0.25 * s,
        (m10 - m01) / s,
    )


def _entries(mat: NDArray[np.float64]) -> tuple[float, ...]:
    return tuple(float(value) for value in mat.reshape(9))


_Extractor = Callable[[NDArray[np.float64]], Quaternion]

_SHEPPERD_EXTRACTORS: dict[ShepperdBranch, _Extractor] = {
    ShepperdBranch.W: _extract_w_dominant,
    ShepperdBranch.X: _extract_x_dominant,
    ShepperdBranch.Y: _extract_y_dominant,
    ShepperdBranch.Z: _extract_z_dominant,
}
