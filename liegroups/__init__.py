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

import jax

# double precision for all numerical kernels
jax.config.update("jax_enable_x64", True)

from liegroups.errors import (LieGroupError, InvalidElementError, DimensionMismatchError, IncompatibleIdentityError,
                              UnsupportedOperationError)
from liegroups.manifold import Manifold, Euclidean, GLpn, SOn, SEn, PowerManifold
from liegroups.groups import (GroupOperation, AdditionOperation, MatrixMultiplicationOperation, PowerGroupOperation,
                              Identity, LieAlgebra, LieGroup, PowerLieGroup, TranslationGroup, GeneralLinearGroup,
                              SpecialOrthogonalGroup, SpecialEuclideanGroup)
