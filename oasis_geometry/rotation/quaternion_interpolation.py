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
Interpolation between unit quaternions

Conventions:
    * All inputs must be unit quaternions
    * Interpolation follows the shorter arc: b is negated when a . b < 0
    * SLERP clamps t to [0, 1] only in its nearly-parallel linear branch; the
      spherical branch extrapolates along the great circle for t outside
      [0, 1]
    * NLERP always clamps t; SQUAD and paths reject t outside [0, 1]
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..config.geometry_config import GeometryConfig
from ..config.geometry_params import QUATERNION_LOG_TOLERANCE
from ..config.geometry_params import QUATERNION_NORMALIZED_TOLERANCE
from ..config.geometry_params import SLERP_DOT_THRESHOLD
from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import InvalidValueError
from ..math_utils.validation import as_scalar
from ..math_utils.validation import as_vector
from ..math_utils.vector_ops import Vec
from .quaternion import Quaternion


_LOG: logging.Logger = logging.getLogger(__name__)


def slerp(
    a: Quaternion,
    b: Quaternion,
    t: float,
    dot_threshold: float = SLERP_DOT_THRESHOLD,
    normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
) -> Quaternion:
    """
    Spherical linear interpolation from a (t = 0) to b (t = 1)
    """

    a.require_normalized(normalized_tolerance)
    b.require_normalized(normalized_tolerance)
    t = as_scalar(t, "t")

    b_xyzw: NDArray[np.float64] = b.xyzw
    dot: float = a.dot(b)
    if dot < 0.0:
        b_xyzw = -b_xyzw
        dot = -dot

    if dot > dot_threshold:
        _LOG.debug("SLERP inputs nearly parallel (dot %.6f), using lerp", dot)
        clamped_t: float = Vec.clamp(t, 0.0, 1.0)
        return Quaternion(a.xyzw + clamped_t * (b_xyzw - a.xyzw)).normalized()

    theta: float = math.acos(min(1.0, dot))
    sin_theta: float = math.sin(theta)
    factor_a: float = math.sin((1.0 - t) * theta) / sin_theta
    factor_b: float = math.sin(t * theta) / sin_theta
    return Quaternion(factor_a * a.xyzw + factor_b * b_xyzw)


def nlerp(
    a: Quaternion,
    b: Quaternion,
    t: float,
    normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
) -> Quaternion:
    """
    Normalized linear interpolation along the shorter arc, t clamped to [0, 1]
    """

    a.require_normalized(normalized_tolerance)
    b.require_normalized(normalized_tolerance)
    clamped_t: float = Vec.clamp(as_scalar(t, "t"), 0.0, 1.0)

    b_xyzw: NDArray[np.float64] = b.xyzw
    if a.dot(b) < 0.0:
        b_xyzw = -b_xyzw

    return Quaternion(a.xyzw + clamped_t * (b_xyzw - a.xyzw)).normalized()


def squad(
    q0: Quaternion,
    q1: Quaternion,
    q2: Quaternion,
    q3: Quaternion,
    t: float,
    dot_threshold: float = SLERP_DOT_THRESHOLD,
    normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
    log_tolerance: float = QUATERNION_LOG_TOLERANCE,
) -> Quaternion:
    """
    Spherical quadrangle interpolation between q1 (t = 0) and q2 (t = 1)

    q0 and q3 are the neighbouring keyframes used to shape the tangents.
    """

    for q in (q0, q1, q2, q3):
        q.require_normalized(normalized_tolerance)
    t = _require_unit_interval(t)

    s1: Quaternion = _squad_control_point(
        q0, q1, q2, normalized_tolerance, log_tolerance
    )
    s2: Quaternion = _squad_control_point(
        q1, q2, q3, normalized_tolerance, log_tolerance
    )

    outer: Quaternion = slerp(q1, q2, t, dot_threshold, normalized_tolerance)
    inner: Quaternion = slerp(s1, s2, t, dot_threshold, normalized_tolerance)
    return slerp(outer, inner, 2.0 * t * (1.0 - t), dot_threshold, normalized_tolerance)


class QuaternionPath:
    """
    Piecewise interpolation through a sequence of unit quaternions

    The method and tolerances come from a GeometryConfig, the defaults when
    none is given. An explicit method overrides the configured one.
    """

    METHODS: tuple[str, ...] = ("slerp", "nlerp", "squad")

    def __init__(
        self,
        keyframes: Sequence[Quaternion],
        method: str | None = None,
        config: GeometryConfig | None = None,
    ) -> None:
        if config is None:
            config = GeometryConfig.defaults()
        if method is None:
            method = config.path_method()

        if len(keyframes) < 2:
            raise DimensionMismatchError("A path needs at least two quaternions")
        if method not in self.METHODS:
            raise InvalidValueError(f"Unknown interpolation method: {method}")

        self._normalized_tolerance: float = config.normalized_tolerance()
        self._dot_threshold: float = config.slerp_dot_threshold()
        self._log_tolerance: float = config.log_tolerance()

        for keyframe in keyframes:
            keyframe.require_normalized(self._normalized_tolerance)

        self._keyframes: tuple[Quaternion, ...] = tuple(keyframes)
        self._method: str = method

    @property
    def method(self) -> str:
        return self._method

    @property
    def segment_count(self) -> int:
        return len(self._keyframes) - 1

    def __call__(self, t: float) -> Quaternion:
        """Return the path orientation at t in [0, 1]."""
        t = _require_unit_interval(t)

        if t == 0.0:
            return self._keyframes[0]
        if t == 1.0:
            return self._keyframes[-1]

        segments: int = self.segment_count
        segment_length: float = 1.0 / segments
        segment_index: int = int(math.floor(t / segment_length))
        current: int = min(segment_index, segments - 1)
        following: int = current + 1
        segment_t: float = (t - current * segment_length) / segment_length

        q1: Quaternion = self._keyframes[current]
        q2: Quaternion = self._keyframes[following]

        if self._method == "nlerp":
            return nlerp(q1, q2, segment_t, self._normalized_tolerance)
        if self._method == "squad":
            q0: Quaternion = self._keyframes[max(0, current - 1)]
            q3: Quaternion = self._keyframes[min(segments, following + 1)]
            return squad(
                q0,
                q1,
                q2,
                q3,
                Vec.clamp(segment_t, 0.0, 1.0),
                self._dot_threshold,
                self._normalized_tolerance,
                self._log_tolerance,
            )
        return slerp(
            q1, q2, segment_t, self._dot_threshold, self._normalized_tolerance
        )


def quaternion_log(
    q: Quaternion,
    tolerance: float = QUATERNION_LOG_TOLERANCE,
    normalized_tolerance: float = QUATERNION_NORMALIZED_TOLERANCE,
) -> NDArray[np.float64]:
    """
    Return log(q) of a unit quaternion as a pure quaternion in xyzw order
    """

    q.require_normalized(normalized_tolerance)
    vector: NDArray[np.float64] = q.xyzw[:3]
    vector_length: float = math.sqrt(float(np.dot(vector, vector)))
    if vector_length < tolerance:
        return np.zeros(4, dtype=float)

    angle: float = math.atan2(vector_length, q.w)
    scale: float = angle / vector_length
    return np.array([*(vector * scale), 0.0], dtype=float)


def quaternion_exp(
    xyzw: NDArray[np.float64], tolerance: float = QUATERNION_LOG_TOLERANCE
) -> Quaternion:
    """
    Return exp(p) for a quaternion given in xyzw order

    Raises DimensionMismatchError unless p has four components and
    InvalidValueError for non-finite components.
    """

    p: NDArray[np.float64] = as_vector(xyzw, "xyzw", size=4)
    vector: NDArray[np.float64] = p[:3]
    vector_length: float = math.sqrt(float(np.dot(vector, vector)))
    if vector_length < tolerance:
        return Quaternion.identity()

    exp_w: float = math.exp(float(p[3]))
    scale: float = exp_w * math.sin(vector_length) / vector_length
    return Quaternion(np.array([*(vector * scale), exp_w * math.cos(vector_length)]))


def _squad_control_point(
    q_prev: Quaternion,
    q: Quaternion,
    q_next: Quaternion,
    normalized_tolerance: float,
    log_tolerance: float,
) -> Quaternion:
    q_inv: Quaternion = q.inverse()
    log_prev: NDArray[np.float64] = quaternion_log(
        q_inv * q_prev, log_tolerance, normalized_tolerance
    )
    log_next: NDArray[np.float64] = quaternion_log(
        q_inv * q_next, log_tolerance, normalized_tolerance
    )
    return q * quaternion_exp(-0.25 * (log_prev + log_next), log_tolerance)


def _require_unit_interval(t: float) -> float:
    value: float = as_scalar(t, "t")
    if value < 0.0 or value > 1.0:
        raise InvalidValueError(f"t must be in [0, 1], got {value}")
    return value
