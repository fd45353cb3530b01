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

from .operation import GroupOperation, AdditionOperation, MatrixMultiplicationOperation
from .identity import Identity
from .lie_algebra import LieAlgebra
from .lie_group import LieGroup
from .power_group import PowerGroupOperation, PowerLieGroup

# Standard groups
from .translation_group import TranslationGroup
from .general_linear_group import GeneralLinearGroup
from .special_orthogonal_group import SpecialOrthogonalGroup
from .special_euclidean_group import SpecialEuclideanGroup
