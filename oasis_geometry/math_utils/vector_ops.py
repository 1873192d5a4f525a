################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Vector primitives used by the algebra engines."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from ..geometry_errors import DimensionMismatchError
from ..geometry_errors import InvalidValueError
from .validation import as_vector


# Norm below which a vector cannot be normalized or projected onto
VECTOR_NORM_EPS: float = 1e-12


class Vec:
    """Vector utilities for arbitrary-length vectors."""

    @staticmethod
    def dot(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
        """Return the dot product of two equal-length vectors."""
        u_vec: NDArray[np.float64] = as_vector(u, "u")
        v_vec: NDArray[np.float64] = as_vector(v, "v")
        Vec._ensure_same_length(u_vec, v_vec)
        return float(np.dot(u_vec, v_vec))

    @staticmethod
    def cross(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the cross product of two 3-vectors."""
        u_vec: NDArray[np.float64] = as_vector(u, "u", size=3)
        v_vec: NDArray[np.float64] = as_vector(v, "v", size=3)
        ux: float = float(u_vec[0])
        uy: float = float(u_vec[1])
        uz: float = float(u_vec[2])
        vx: float = float(v_vec[0])
        vy: float = float(v_vec[1])
        vz: float = float(v_vec[2])
        return np.array(
            [
                uy * vz - uz * vy,
                uz * vx - ux * vz,
                ux * vy - uy * vx,
            ],
            dtype=float,
        )

    @staticmethod
    def subtract(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return u - v."""
        u_vec: NDArray[np.float64] = as_vector(u, "u")
        v_vec: NDArray[np.float64] = as_vector(v, "v")
        Vec._ensure_same_length(u_vec, v_vec)
        return u_vec - v_vec

    @staticmethod
    def scale(v: NDArray[np.float64], factor: float) -> NDArray[np.float64]:
        """Return the vector scaled by a factor."""
        return as_vector(v, "v") * float(factor)

    @staticmethod
    def magnitude(v: NDArray[np.float64]) -> float:
        """Return the Euclidean norm of a vector."""
        vec: NDArray[np.float64] = as_vector(v, "v")
        return math.sqrt(float(np.dot(vec, vec)))

    @staticmethod
    def normalize(
        v: NDArray[np.float64],
        eps: float = VECTOR_NORM_EPS,
    ) -> NDArray[np.float64]:
        """Return the unit vector in the direction of v."""
        vec: NDArray[np.float64] = as_vector(v, "v")
        norm: float = math.sqrt(float(np.dot(vec, vec)))
        if norm < eps:
            raise InvalidValueError("v has near-zero norm")
        return vec / norm

    @staticmethod
    def project(
        v: NDArray[np.float64],
        onto: NDArray[np.float64],
        eps: float = VECTOR_NORM_EPS,
    ) -> NDArray[np.float64]:
        """Return the projection of v onto another vector."""
        v_vec: NDArray[np.float64] = as_vector(v, "v")
        onto_vec: NDArray[np.float64] = as_vector(onto, "onto")
        Vec._ensure_same_length(v_vec, onto_vec)
        onto_sq: float = float(np.dot(onto_vec, onto_vec))
        if onto_sq < eps * eps:
            raise InvalidValueError("onto has near-zero norm")
        return (float(np.dot(v_vec, onto_vec)) / onto_sq) * onto_vec

    @staticmethod
    def clamp(value: float, lower: float, upper: float) -> float:
        """Clamp a scalar to [lower, upper]."""
        if lower > upper:
            raise InvalidValueError("lower must be <= upper")
        return max(lower, min(upper, value))

    @staticmethod
    def _ensure_same_length(u: NDArray[np.float64], v: NDArray[np.float64]) -> None:
        if u.shape != v.shape:
            raise DimensionMismatchError(
                f"vector lengths differ: {u.shape[0]} and {v.shape[0]}"
            )
