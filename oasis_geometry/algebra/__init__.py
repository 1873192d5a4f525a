################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Matrix algebra engines."""

from oasis_geometry.algebra.decompositions import EigenDecomposition
from oasis_geometry.algebra.decompositions import LUDecomposition
from oasis_geometry.algebra.decompositions import QRDecomposition
from oasis_geometry.algebra.decompositions import cholesky
from oasis_geometry.algebra.decompositions import eigen_qr_iteration
from oasis_geometry.algebra.decompositions import lu
from oasis_geometry.algebra.decompositions import qr
from oasis_geometry.algebra.decompositions import solve
from oasis_geometry.algebra.gram_schmidt import gram_schmidt
from oasis_geometry.algebra.matrix_algebra import MatrixAlgebra


__all__ = [
    "EigenDecomposition",
    "LUDecomposition",
    "MatrixAlgebra",
    "QRDecomposition",
    "cholesky",
    "eigen_qr_iteration",
    "gram_schmidt",
    "lu",
    "qr",
    "solve",
]
