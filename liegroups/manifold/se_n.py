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
import jax.numpy as jnp

from liegroups.errors import InvalidElementError
from liegroups.manifold import Manifold, SOn
from liegroups.manifold.util import DEFAULT_ATOL, write


class SEn(Manifold):
    """Returns the manifold SE(n), i.e., rigid body motions of n-dimensional space.

     manifold = SEn(n)

     Elements of SE(n) are represented as matrices of size (n+1)x(n+1), where the upper-left nxn block is the
     rotational part, the upper-right nx1 part is the translational part, and the lowest row is [0 ... 0 1].
     Tangent vectors, consequently, follow the same ‘layout‘ (with vanishing last row).

     To improve efficiency, tangent vectors are always represented in the Lie Algebra.
     """

    def __init__(self, n=3):
        self._n = n
        self._rotations = SOn(n)
        name = f'Rigid motions SE({n})'
        dimension = self._rotations.dim + n
        super().__init__(name, dimension, (n + 1, n + 1))

    def tree_flatten(self):
        children, aux = super().tree_flatten()
        return children, aux+(self._n,)

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Specifies an unflattening recipe for PyTree registration."""
        *_, n = aux_data
        return cls(n)

    @property
    def n(self):
        return self._n

    @property
    def rotations(self) -> SOn:
        return self._rotations

    def rotation(self, P):
        """get SO(n)-part of P in SE(n) or se(n)"""
        return P[:self._n, :self._n]

    def translation(self, P):
        """get R^n-part of P in SE(n) or se(n)"""
        return P[:self._n, self._n]

    def homogeneous_coords(self, R, t):
        """create SE(n)-element from R in SO(n) and t in R^n"""
        n = self._n
        return jnp.zeros(self.point_shape) \
                   .at[:n, :n].set(R) \
                   .at[:n, n].set(t) \
                   .at[n, n].set(1.)

    def check_point(self, P, atol=DEFAULT_ATOL):
        super().check_point(P, atol)
        P = np.asarray(P)
        last = np.zeros(self._n + 1)
        last[-1] = 1.
        if np.max(np.abs(P[-1] - last)) > atol:
            raise InvalidElementError(f'{self}: the last row of the point has to be [0 ... 0 1], got {P[-1]}.')
        self._rotations.check_point(self.rotation(P), atol)

    def check_vector(self, P, X, atol=DEFAULT_ATOL):
        super().check_vector(P, X, atol)
        X = np.asarray(X)
        if np.max(np.abs(X[-1])) > atol:
            raise InvalidElementError(f'{self}: the last row of the vector has to vanish, got {X[-1]}.')
        self._rotations.check_vector(self.rotation(P), self.rotation(X), atol)

    def rand(self, key: jax.Array):
        k1, k2 = jax.random.split(key, 2)
        return self.homogeneous_coords(self._rotations.rand(k1), jax.random.normal(k2, (self._n,)))

    def randvec(self, P, key: jax.Array):
        k1, k2 = jax.random.split(key, 2)
        n = self._n
        return jnp.zeros(self.point_shape) \
                   .at[:n, :n].set(self._rotations.randvec(None, k1)) \
                   .at[:n, n].set(jax.random.normal(k2, (n,)))

    def proj(self, P, X):
        n = self._n
        X = jnp.asarray(X)
        X = X.at[:n, :n].set(self._rotations.proj(None, X[:n, :n]))
        return X.at[n, :].set(0)

    def get_coordinates(self, P, X, out=None):
        X = jnp.asarray(X)
        c = jnp.concatenate((self._rotations.get_coordinates(None, self.rotation(X)), self.translation(X)))
        return write(out, c)

    def get_vector(self, P, c, out=None):
        c = jnp.asarray(c)
        n, d = self._n, self._rotations.dim
        X = jnp.zeros(self.point_shape) \
            .at[:n, :n].set(self._rotations.get_vector(None, c[:d])) \
            .at[:n, n].set(c[d:])
        return write(out, X)
