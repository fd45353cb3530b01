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
from liegroups.groups.operation import AdditionOperation
from liegroups.manifold import Euclidean


class TranslationGroup(LieGroup):
    """Group of translations of R^(n_1 x ... x n_d), i.e. Euclidean space under addition.

        G = TranslationGroup(n_1, ..., n_d)
    """

    def __init__(self, *shape):
        self._shape = tuple(shape)
        super().__init__(Euclidean(self._shape), AdditionOperation())

    def __str__(self):
        return f'TranslationGroup({", ".join(map(str, self._shape))})'
