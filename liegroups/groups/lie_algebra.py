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

from liegroups.groups.identity import Identity
from liegroups.manifold.util import DEFAULT_ATOL


class LieAlgebra:
    """Lie algebra of a Lie group G, i.e. the tangent space at the identity, with the Lie bracket.

    Its points are the tangent vectors of G.
    """

    def __init__(self, G):
        self._group = G

    def __str__(self):
        return f'LieAlgebra({self._group})'

    @property
    def group(self):
        return self._group

    @property
    def dim(self) -> int:
        return self._group.dim

    def zero_vector(self, out=None):
        return self._group.zero_vector(out)

    def is_point(self, X, error='none', atol=DEFAULT_ATOL) -> bool:
        return self._group.is_vector(X, error, atol)

    def isapprox(self, X, Y, atol=DEFAULT_ATOL) -> bool:
        return self._group.manifold.isapprox(X, Y, atol)

    def lie_bracket(self, X, Y, out=None):
        return self._group.lie_bracket(X, Y, out)

    def get_coordinates(self, X, out=None):
        return self._group.vee(X, out)

    def get_vector(self, c, out=None):
        return self._group.hat(c, out)

    vee = get_coordinates
    hat = get_vector

    def rand(self, key: jax.Array):
        """Random element of the Lie algebra.

        :param key: a PRNG key
        """
        return self._group.rand(key, vector_at=Identity(self._group))
