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

import numpy as np

import jax

from liegroups.manifold import Manifold


class Euclidean(Manifold):
    """The Euclidean space
    """

    def __init__(self, point_shape=(3,)):
        point_shape = tuple(point_shape)
        name = 'Euclidean space of dimension ' + 'x'.join(map(str, point_shape))
        dimension = int(np.prod(point_shape))
        super().__init__(name, dimension, point_shape)

    def tree_flatten(self):
        children, aux = super().tree_flatten()
        return children, aux+(self.point_shape,)

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Specifies an unflattening recipe for PyTree registration."""
        *_, shape = aux_data
        return cls(shape)

    def rand(self, key: jax.Array):
        return jax.random.normal(key, self.point_shape)

    def randvec(self, X, key: jax.Array):
        return jax.random.normal(key, self.point_shape)

    def proj(self, x, X):
        return X
