################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Quaternion algebra and rotation conversions."""

from oasis_geometry.rotation.quaternion import Quaternion
from oasis_geometry.rotation.quaternion_interpolation import QuaternionPath
from oasis_geometry.rotation.quaternion_interpolation import nlerp
from oasis_geometry.rotation.quaternion_interpolation import slerp
from oasis_geometry.rotation.quaternion_interpolation import squad
from oasis_geometry.rotation.rotation_matrix import ShepperdBranch
from oasis_geometry.rotation.rotation_matrix import is_valid_rotation_matrix
from oasis_geometry.rotation.rotation_matrix import quaternion_from_rotation_matrix
from oasis_geometry.rotation.rotation_matrix import (
    quaternion_from_transformation_matrix,
)
from oasis_geometry.rotation.rotation_matrix import quaternion_to_rotation_matrix
from oasis_geometry.rotation.rotation_matrix import (
    quaternion_to_transformation_matrix,
)
from oasis_geometry.rotation.rotation_matrix import select_shepperd_branch


__all__ = [
    "Quaternion",
    "QuaternionPath",
    "ShepperdBranch",
    "is_valid_rotation_matrix",
    "nlerp",
    "quaternion_from_rotation_matrix",
    "quaternion_from_transformation_matrix",
    "quaternion_to_rotation_matrix",
    "quaternion_to_transformation_matrix",
    "select_shepperd_branch",
    "slerp",
    "squad",
]
