################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for SLERP, NLERP, SQUAD and quaternion paths."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_geometry.config.geometry_config import GeometryConfig
from oasis_geometry.config.geometry_params import GeometryParams
from oasis_geometry.config.geometry_params import InterpolationParams
from oasis_geometry.config.geometry_params import QuaternionParams
from oasis_geometry.geometry_errors import DimensionMismatchError
from oasis_geometry.geometry_errors import InvalidValueError
from oasis_geometry.geometry_errors import NotNormalizedError
from oasis_geometry.rotation.quaternion import Quaternion
from oasis_geometry.rotation.quaternion_interpolation import QuaternionPath
from oasis_geometry.rotation.quaternion_interpolation import nlerp
from oasis_geometry.rotation.quaternion_interpolation import quaternion_exp
from oasis_geometry.rotation.quaternion_interpolation import quaternion_log
from oasis_geometry.rotation.quaternion_interpolation import slerp
from oasis_geometry.rotation.quaternion_interpolation import squad


def test_slerp_same_input() -> None:
    """Checks slerp(q, q, t) returns q."""
    q: Quaternion = Quaternion.from_euler(0.2, -0.1, 0.7)
    for t in (0.0, 0.3, 1.0):
        assert slerp(q, q, t).almost_equal(q, tolerance=1e-12)


def test_slerp_endpoints() -> None:
    """Checks t = 0 gives a and t = 1 gives b up to sign."""
    a: Quaternion = Quaternion.rotation_x(0.4)
    b: Quaternion = Quaternion.rotation_y(1.3)
    assert slerp(a, b, 0.0).almost_equal(a, tolerance=1e-12)
    assert slerp(a, b, 1.0).almost_equal(b, tolerance=1e-12, check_equivalence=True)


def test_slerp_midpoint_about_axis() -> None:
    """Checks halfway between two z rotations is the mean angle."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(1.0)
    assert slerp(a, b, 0.5).almost_equal(Quaternion.rotation_z(0.5), tolerance=1e-12)


def test_slerp_takes_shorter_arc() -> None:
    """Checks -b is interpolated the same way as b."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(1.0)
    assert slerp(a, -b, 0.5).almost_equal(slerp(a, b, 0.5), tolerance=1e-12)


def test_slerp_extrapolates_on_spherical_branch() -> None:
    """Checks t outside [0, 1] is not clamped for distinct inputs."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(1.0)
    beyond: Quaternion = slerp(a, b, 1.5)
    assert not beyond.almost_equal(b, check_equivalence=True)
    assert beyond.almost_equal(Quaternion.rotation_z(1.5), tolerance=1e-12)
    assert beyond.is_normalized()


def test_slerp_clamps_on_linear_branch() -> None:
    """Checks nearly parallel inputs clamp t to [0, 1]."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(0.01)
    assert slerp(a, b, 2.0).almost_equal(b, tolerance=1e-12)
    assert slerp(a, b, -1.0).almost_equal(a, tolerance=1e-12)


def test_slerp_requires_unit_inputs() -> None:
    """Checks non-unit inputs raise NotNormalizedError."""
    with pytest.raises(NotNormalizedError):
        slerp(Quaternion.from_xyzw(0.0, 0.0, 0.0, 2.0), Quaternion.identity(), 0.5)


def test_nlerp_midpoint_and_clamp() -> None:
    """Checks nlerp bisects and clamps t."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(1.0)
    assert nlerp(a, b, 0.5).almost_equal(Quaternion.rotation_z(0.5), tolerance=1e-12)
    assert nlerp(a, b, -3.0).almost_equal(a, tolerance=1e-12)
    assert nlerp(a, b, 3.0).almost_equal(b, tolerance=1e-12)


def test_log_exp_roundtrip() -> None:
    """Checks exp(log(q)) == q."""
    q: Quaternion = Quaternion.rotation_x(1.0)
    log_q: NDArray[np.float64] = quaternion_log(q)
    assert np.allclose(log_q, [0.5, 0.0, 0.0, 0.0])
    assert quaternion_exp(log_q).almost_equal(q, tolerance=1e-12)


def test_log_of_identity_is_zero() -> None:
    """Checks log(identity) is the zero quaternion."""
    assert np.array_equal(quaternion_log(Quaternion.identity()), np.zeros(4))
    assert quaternion_exp(np.zeros(4)).almost_equal(Quaternion.identity())


def test_exp_validates_input() -> None:
    """Checks exp rejects wrong lengths and non-finite components."""
    with pytest.raises(DimensionMismatchError):
        quaternion_exp(np.array([0.1, 0.2, 0.3]))
    with pytest.raises(DimensionMismatchError):
        quaternion_exp(np.zeros((2, 2)))
    with pytest.raises(InvalidValueError):
        quaternion_exp(np.array([0.1, math.nan, 0.0, 0.0]))
    with pytest.raises(InvalidValueError):
        quaternion_exp(np.array([0.0, 0.0, 0.0, math.inf]))


def test_log_tolerance_override() -> None:
    """Checks a larger log tolerance treats small rotations as identity."""
    q: Quaternion = Quaternion.rotation_x(1e-3)
    assert np.allclose(quaternion_log(q), [5e-4, 0.0, 0.0, 0.0])
    assert np.array_equal(quaternion_log(q, tolerance=1e-2), np.zeros(4))
    assert quaternion_exp(np.array([1e-3, 0.0, 0.0, 0.0]), tolerance=1e-2) == (
        Quaternion.identity()
    )


def test_interpolation_normalized_tolerance_override() -> None:
    """Checks slightly non-unit inputs pass with a looser tolerance."""
    a: Quaternion = Quaternion.from_xyzw(0.0, 0.0, 0.0, 1.001)
    b: Quaternion = Quaternion.rotation_z(1.0)
    with pytest.raises(NotNormalizedError):
        slerp(a, b, 0.5)
    with pytest.raises(NotNormalizedError):
        nlerp(a, b, 0.5)

    mid: Quaternion = slerp(a, b, 0.5, normalized_tolerance=1e-2)
    assert mid.almost_equal(Quaternion.rotation_z(0.5), tolerance=1e-2)
    mid = nlerp(a, b, 0.5, normalized_tolerance=1e-2)
    assert mid.almost_equal(Quaternion.rotation_z(0.5), tolerance=1e-2)
    assert mid.is_normalized()


def test_squad_endpoints() -> None:
    """Checks squad passes through q1 at t = 0 and q2 at t = 1."""
    q0: Quaternion = Quaternion.rotation_x(-0.3)
    q1: Quaternion = Quaternion.identity()
    q2: Quaternion = Quaternion.from_euler(0.2, 0.4, 0.6)
    q3: Quaternion = Quaternion.rotation_y(1.1)
    assert squad(q0, q1, q2, q3, 0.0).almost_equal(q1, tolerance=1e-9)
    assert squad(q0, q1, q2, q3, 1.0).almost_equal(
        q2, tolerance=1e-9, check_equivalence=True
    )


def test_squad_uniform_rotation_matches_slerp() -> None:
    """Checks evenly spaced rotations about one axis reduce to slerp."""
    frames: list[Quaternion] = [Quaternion.rotation_z(0.5 * i) for i in range(4)]
    result: Quaternion = squad(frames[0], frames[1], frames[2], frames[3], 0.5)
    assert result.almost_equal(Quaternion.rotation_z(0.75), tolerance=1e-9)


def test_squad_rejects_t_outside_unit_interval() -> None:
    """Checks squad rejects t outside [0, 1]."""
    q: Quaternion = Quaternion.identity()
    with pytest.raises(InvalidValueError):
        squad(q, q, q, q, 1.5)



def test_squad_forwards_tolerances() -> None:
    """Checks squad applies the caller normalized tolerance to every keyframe."""
    frames: list[Quaternion] = [Quaternion.rotation_z(0.5 * i) for i in range(4)]
    loose: Quaternion = Quaternion.from_xyzw(0.0, 0.0, 0.0, 1.001)
    with pytest.raises(NotNormalizedError):
        squad(loose, frames[1], frames[2], frames[3], 0.5)

    result: Quaternion = squad(
        loose,
        frames[1],
        frames[2],
        frames[3],
        0.5,
        normalized_tolerance=1e-2,
        log_tolerance=1e-9,
    )
    assert result.is_normalized(1e-2)


def test_path_endpoints_are_exact() -> None:
    """Checks a path returns its first and last keyframes exactly."""
    frames: list[Quaternion] = [
        Quaternion.identity(),
        Quaternion.rotation_x(0.8),
        Quaternion.rotation_y(1.4),
    ]
    for method in QuaternionPath.METHODS:
        path: QuaternionPath = QuaternionPath(frames, method=method)
        assert path.method == method
        assert path.segment_count == 2
        assert path(0.0) is frames[0]
        assert path(1.0) is frames[-1]


def test_path_two_keyframes_matches_slerp() -> None:
    """Checks a single-segment path is plain slerp."""
    a: Quaternion = Quaternion.identity()
    b: Quaternion = Quaternion.rotation_z(math.pi / 3.0)
    path: QuaternionPath = QuaternionPath([a, b])
    assert path(0.5).almost_equal(slerp(a, b, 0.5), tolerance=1e-15)


def test_path_segment_boundary() -> None:
    """Checks the path reaches the inner keyframe at the segment boundary."""
    frames: list[Quaternion] = [
        Quaternion.identity(),
        Quaternion.rotation_z(0.6),
        Quaternion.rotation_z(1.2),
    ]
    for method in QuaternionPath.METHODS:
        path: QuaternionPath = QuaternionPath(frames, method=method)
        assert path(0.5).almost_equal(frames[1], tolerance=1e-9)

    # Without squad tangents, mid-segment is the mean angle
    for method in ("slerp", "nlerp"):
        path = QuaternionPath(frames, method=method)
        assert path(0.25).almost_equal(Quaternion.rotation_z(0.3), tolerance=1e-9)


def test_path_errors() -> None:
    """Checks invalid paths and parameters are rejected."""
    q: Quaternion = Quaternion.identity()
    with pytest.raises(DimensionMismatchError):
        QuaternionPath([q])
    with pytest.raises(InvalidValueError):
        QuaternionPath([q, q], method="cubic")
    with pytest.raises(NotNormalizedError):
        QuaternionPath([q, Quaternion.from_xyzw(1.0, 1.0, 0.0, 0.0)])

    path: QuaternionPath = QuaternionPath([q, Quaternion.rotation_x(0.5)])
    with pytest.raises(InvalidValueError):
        path(-0.1)
    with pytest.raises(InvalidValueError):
        path(1.1)


def test_path_method_from_config() -> None:
    """Checks the configured method is used unless one is passed."""
    frames: list[Quaternion] = [Quaternion.identity(), Quaternion.rotation_x(0.5)]
    params: GeometryParams = GeometryParams.defaults().replace(
        interpolation=InterpolationParams(path_method="nlerp")
    )
    config: GeometryConfig = GeometryConfig(params)
    assert QuaternionPath(frames).method == "slerp"
    assert QuaternionPath(frames, config=config).method == "nlerp"
    assert QuaternionPath(frames, method="squad", config=config).method == "squad"


def test_path_normalized_tolerance_from_config() -> None:
    """Checks the configured normalized tolerance admits loose keyframes."""
    loose: Quaternion = Quaternion.from_xyzw(0.0, 0.0, 0.0, 1.001)
    frames: list[Quaternion] = [loose, Quaternion.rotation_z(1.0)]
    with pytest.raises(NotNormalizedError):
        QuaternionPath(frames)

    params: GeometryParams = GeometryParams.defaults().replace(
        quaternion=QuaternionParams(normalized_tolerance=1e-2)
    )
    config: GeometryConfig = GeometryConfig(params)
    for method in QuaternionPath.METHODS:
        path: QuaternionPath = QuaternionPath(frames, method=method, config=config)
        assert path(0.5).almost_equal(Quaternion.rotation_z(0.5), tolerance=1e-2)
