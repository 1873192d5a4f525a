################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Matrix, quaternion and rotation algebra for OASIS."""

from oasis_geometry.algebra import MatrixAlgebra
from oasis_geometry.algebra import gram_schmidt
from oasis_geometry.geometry_errors import DependentColumnsError
from oasis_geometry.geometry_errors import DimensionMismatchError
from oasis_geometry.geometry_errors import EmptyMatrixError
from oasis_geometry.geometry_errors import GeometryError
from oasis_geometry.geometry_errors import IndexOutOfRangeError
from oasis_geometry.geometry_errors import InvalidValueError
from oasis_geometry.geometry_errors import NotNormalizedError
from oasis_geometry.geometry_errors import NotPositiveDefiniteError
from oasis_geometry.geometry_errors import NotSquareError
from oasis_geometry.geometry_errors import NullSpaceExhaustedError
from oasis_geometry.geometry_errors import SingularMatrixError
from oasis_geometry.rotation import Quaternion


__all__ = [
    "DependentColumnsError",
    "DimensionMismatchError",
    "EmptyMatrixError",
    "GeometryError",
    "IndexOutOfRangeError",
    "InvalidValueError",
    "MatrixAlgebra",
    "NotNormalizedError",
    "NotPositiveDefiniteError",
    "NotSquareError",
    "NullSpaceExhaustedError",
    "Quaternion",
    "SingularMatrixError",
    "gram_schmidt",
]
