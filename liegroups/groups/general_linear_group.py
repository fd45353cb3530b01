################################################################################
#                                                                              #
#   This file is part of the liegroups library                                 #
#       see $LIEGROUPS/README.md                                               #
#                                                                              #
#   Copyright (C) 2025 Zuse Institute Berlin                                   #
#                                                                              #
#   liegroups is distributed under the terms of the MIT License.               #
#       see $LIEGROUPS/LICENSE                                                 #
#                                                                              #
################################################################################

from liegroups.groups.lie_group import LieGroup
from liegroups.groups.operation import MatrixMultiplicationOperation
from liegroups.manifold import GLpn


class GeneralLinearGroup(LieGroup):
    """Group GL^+(n) of invertible nxn matrices with positive determinant under matrix multiplication.

    Exponential and logarithm are the matrix exponential and the (principal) matrix logarithm.
    """

    def __init__(self, n=3):
        self._n = n
        super().__init__(GLpn(n), MatrixMultiplicationOperation())

    def __str__(self):
        return f'GeneralLinearGroup({self._n})'
