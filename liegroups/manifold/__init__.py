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

from .manifold import Manifold
from .euclidean import Euclidean
from .gl_p_n import GLpn
from .so_n import SOn
from .se_n import SEn
from .power_manifold import PowerManifold
