################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Quaternion algebra using the xyzw convention."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..config.geometry_params import QUATERNION_ANGLE_TOLERANCE
from ..config.geometry_params import QUATERNION_EQUALS_TOLERANCE
from ..config.geometry_params import QUATERNION_MAGNITUDE_TOLERANCE
from ..config.geometry_params import QUATERNION_NORMALIZED_TOLERANCE
from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import InvalidValueError
from ..geometry_errors import NotNormalizedError
from ..math_utils.validation import as_scalar
from ..math_utils.validation import as_vector
from ..math_utils.validation import assert_finite
from ..math_utils.vector_ops import Vec


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Quaternion:
    """Quaternion stored in xyzw order, w being the scalar part.

    Instances are immutable: the component array is a private read-only copy.
    Equality and hashing are exact over the four components; use
    ``almost_equal`` for tolerant comparison.
    """

    xyzw: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion inputs and copy storage."""
        try:
            xyzw: NDArray[np.float64] = np.array(self.xyzw, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidValueError("xyzw must contain numbers") from exc
        if xyzw.shape != (4,):
            raise DimensionMismatchError("xyzw must be shape (4,)")
        assert_finite(xyzw, "xyzw")
        xyzw.flags.writeable = False
        object.__setattr__(self, "xyzw", xyzw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return tuple(self.xyzw) == tuple(other.xyzw)

    def __hash__(self) -> int:
        return hash(tuple(self.xyzw))

    @property
    def x(self) -> float:
        return float(self.xyzw[0])

    @property
    def y(self) -> float:
        return float(self.xyzw[1])

    @property
    def z(self) -> float:
        return float(self.xyzw[2])

    @property
    def w(self) -> float:
        return float(self.xyzw[3])

    @staticmethod
    def identity() -> Quaternion:
        """Return the identity quaternion."""
        return Quaternion.from_xyzw(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_xyzw(x: float, y: float, z: float, w: float) -> Quaternion:
        """Create a quaternion from components."""
        return Quaternion(np.array([x, y, z, w], dtype=float))

    @staticmethod
    def from_axis_angle(axis: NDArray[np.float64], angle: float) -> Quaternion:
        """Create a rotation quaternion from an axis and an angle in radians.

        The axis is normalized internally and must be non-zero.
        """
        unit_axis: NDArray[np.float64] = Vec.normalize(as_vector(axis, "axis", size=3))
        half_angle: float = as_scalar(angle, "angle") * 0.5
        sin_half: float = math.sin(half_angle)
        cos_half: float = math.cos(half_angle)
        return Quaternion.from_xyzw(
            float(unit_axis[0]) * sin_half,
            float(unit_axis[1]) * sin_half,
            float(unit_axis[2]) * sin_half,
            cos_half,
        )

    @staticmethod
    def from_axis_angle_vector(axis_angle: Sequence[float]) -> Quaternion:
        """Create a rotation quaternion from packed (ax, ay, az, angle)."""
        packed: NDArray[np.float64] = as_vector(axis_angle, "axis_angle", size=4)
        return Quaternion.from_axis_angle(packed[:3], float(packed[3]))

    @staticmethod
    def from_euler(roll: float, pitch: float, yaw: float) -> Quaternion:
        """Create a quaternion from roll, pitch and yaw in radians.

        The rotation is R = Rz(yaw) * Ry(pitch) * Rx(roll).
        """
        half_roll: float = 0.5 * as_scalar(roll, "roll")
        half_pitch: float = 0.5 * as_scalar(pitch, "pitch")
        half_yaw: float = 0.5 * as_scalar(yaw, "yaw")

        cr: float = math.cos(half_roll)
        sr: float = math.sin(half_roll)
        cp: float = math.cos(half_pitch)
        sp: float = math.sin(half_pitch)
        cy: float = math.cos(half_yaw)
        sy: float = math.sin(half_yaw)

        return Quaternion.from_xyzw(
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
            cr * cp * cy + sr * sp * sy,
        )

    @staticmethod
    def rotation_x(angle: float) -> Quaternion:
        """Return a rotation about the x axis."""
        return Quaternion.from_axis_angle(np.array([1.0, 0.0, 0.0]), angle)

    @staticmethod
    def rotation_y(angle: float) -> Quaternion:
        """Return a rotation about the y axis."""
        return Quaternion.from_axis_angle(np.array([0.0, 1.0, 0.0]), angle)

    @staticmethod
    def rotation_z(angle: float) -> Quaternion:
        """Return a rotation about the z axis."""
        return Quaternion.from_axis_angle(np.array([0.0, 0.0, 1.0]), angle)

    def magnitude(self) -> float:
        """Return the Euclidean norm of the quaternion."""
        return math.sqrt(float(np.dot(self.xyzw, self.xyzw)))

    def is_normalized(self, tolerance: float = QUATERNION_NORMALIZED_TOLERANCE) -> bool:
        """Check whether the quaternion has unit norm within a tolerance."""
        return abs(self.magnitude() - 1.0) <= tolerance

    def require_normalized(
        self, tolerance: float = QUATERNION_NORMALIZED_TOLERANCE
    ) -> None:
        """Raise NotNormalizedError unless the quaternion has unit norm."""
        magnitude: float = self.magnitude()
        if abs(magnitude - 1.0) > tolerance:
            raise NotNormalizedError(
                f"Quaternion must be normalized, got magnitude {magnitude}"
            )

    def normalized(
        self, tolerance: float = QUATERNION_MAGNITUDE_TOLERANCE
    ) -> Quaternion:
        """Return a unit quaternion with the same direction."""
        norm: float = self.magnitude()
        if norm < tolerance:
            raise InvalidValueError("Quaternion norm is too small")
        return Quaternion(self.xyzw / norm)

    def conjugate(self) -> Quaternion:
        """Return the conjugate (-x, -y, -z, w)."""
        return Quaternion.from_xyzw(-self.x, -self.y, -self.z, self.w)

    def inverse(
        self, tolerance: float = QUATERNION_MAGNITUDE_TOLERANCE
    ) -> Quaternion:
        """Return the multiplicative inverse conjugate / |q|^2."""
        norm_sq: float = float(np.dot(self.xyzw, self.xyzw))
        if norm_sq < tolerance:
            raise InvalidValueError("Cannot invert quaternion with zero magnitude")
        return Quaternion(self.conjugate().xyzw / norm_sq)

    def multiply(self, other: Quaternion) -> Quaternion:
        """Return the Hamilton product self * other.

        The product applies other's rotation first, then self's.
        """
        ax: float = self.x
        ay: float = self.y
        az: float = self.z
        aw: float = self.w
        bx: float = other.x
        by: float = other.y
        bz: float = other.z
        bw: float = other.w
        return Quaternion.from_xyzw(
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Multiply two quaternions using the Hamilton product."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.multiply(other)

    def __neg__(self) -> Quaternion:
        """Return the rotation-equivalent quaternion -q."""
        return Quaternion(-self.xyzw)

    def dot(self, other: Quaternion) -> float:
        """Return the 4D dot product with another quaternion."""
        return float(np.dot(self.xyzw, other.xyzw))

    def to_axis_angle(
        self,
        angle_tolerance: float = QUATERNION_ANGLE_TOLERANCE,
        normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
    ) -> tuple[NDArray[np.float64], float]:
        """Return the rotation axis and angle in radians.

        Identity and near-identity rotations return the x axis and angle 0.
        The angle is 2 * acos(|w|), in [0, pi], and the axis is xyz divided
        by sin(angle / 2). For w < 0 the axis therefore points opposite to the
        rotation axis of q.
        """
        self.require_normalized(normalized_tolerance)
        x: float = self.x
        y: float = self.y
        z: float = self.z
        w: float = self.w

        if abs(w) >= 1.0:
            return np.array([1.0, 0.0, 0.0]), 0.0

        angle: float = 2.0 * math.acos(min(1.0, abs(w)))
        sin_half: float = math.sqrt(1.0 - w * w)
        if sin_half < angle_tolerance:
            _LOG.debug("Degenerate axis-angle, sin(angle/2) = %.3e", sin_half)
            return np.array([1.0, 0.0, 0.0]), 0.0

        return np.array([x / sin_half, y / sin_half, z / sin_half]), angle

    def to_euler(
        self, normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE
    ) -> tuple[float, float, float]:
        """Return (roll, pitch, yaw) in radians.

        Pitch saturates at +/-pi/2 at the gimbal-lock boundary.
        """
        self.require_normalized(normalized_tolerance)
        x: float = self.x
        y: float = self.y
        z: float = self.z
        w: float = self.w

        sinr_cosp: float = 2.0 * (w * x + y * z)
        cosr_cosp: float = 1.0 - 2.0 * (x * x + y * y)
        roll: float = math.atan2(sinr_cosp, cosr_cosp)

        sinp: float = 2.0 * (w * y - z * x)
        if abs(sinp) >= 1.0:
            pitch: float = math.copysign(math.pi / 2.0, sinp)
        else:
            pitch = math.asin(sinp)

        siny_cosp: float = 2.0 * (w * z + x * y)
        cosy_cosp: float = 1.0 - 2.0 * (y * y + z * z)
        yaw: float = math.atan2(siny_cosp, cosy_cosp)

        return (roll, pitch, yaw)

    def rotate(
        self,
        v: NDArray[np.float64],
        normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
    ) -> NDArray[np.float64]:
        """Rotate a 3-vector by this unit quaternion.

        Uses v' = v + 2 * cross(q.xyz, cross(q.xyz, v) + w * v).
        """
        self.require_normalized(normalized_tolerance)
        vec: NDArray[np.float64] = as_vector(v, "v", size=3)
        q_vec: NDArray[np.float64] = self.xyzw[:3]
        inner: NDArray[np.float64] = Vec.cross(q_vec, vec) + self.w * vec
        return vec + 2.0 * Vec.cross(q_vec, inner)

    def to_xyzw(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components."""
        return np.array(self.xyzw, dtype=float)

    def almost_equal(
        self,
        other: Quaternion,
        tolerance: float = QUATERNION_EQUALS_TOLERANCE,
        check_equivalence: bool = False,
    ) -> bool:
        """Check component-wise equality, optionally accepting -q as equal."""
        diff: NDArray[np.float64] = np.abs(self.xyzw - other.xyzw)
        if bool(np.all(diff <= tolerance)):
            return True
        if not check_equivalence:
            return False
        return bool(np.all(np.abs(self.xyzw + other.xyzw) <= tolerance))
