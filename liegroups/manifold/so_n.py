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
from jax.scipy.linalg import expm

from liegroups.errors import InvalidElementError
from liegroups.manifold import Manifold
from liegroups.manifold.util import DEFAULT_ATOL, multiskew as skew, write


class SOn(Manifold):
    """Returns the manifold SO(n), i.e., the set of rotations of n-dimensional space.

     manifold = SOn(n)

     Elements of SO(n) are represented as orthogonal nxn matrices, i.e., matrices R with R * R^T = eye(n) and
     det(R) = 1.

     To improve efficiency, tangent vectors are always represented in the Lie Algebra, i.e., as skew-symmetric
     matrices. Their coordinates are the entries below the diagonal; for n = 3 they are ordered such that they
     coincide with the axis-angle representation.
     """

    def __init__(self, n=3):
        if n < 2:
            raise ValueError(f'SO(n) requires n >= 2, got {n}.')
        self._n = n
        name = f'Rotations manifold SO({n})'
        super().__init__(name, n * (n - 1) // 2, (n, n))

        if n == 3:
            pairs = [(2, 1), (0, 2), (1, 0)]
        else:
            pairs = [(j, i) for i in range(n) for j in range(i + 1, n)]
        self._rows, self._cols = map(np.array, zip(*pairs))

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

    def check_point(self, R, atol=DEFAULT_ATOL):
        super().check_point(R, atol)
        R = np.asarray(R)
        err = np.max(np.abs(R @ R.T - np.eye(self._n)))
        if err > atol:
            raise InvalidElementError(f'{self}: the point is not orthogonal (deviation {err}).')
        if np.linalg.det(R) < 0:
            raise InvalidElementError(f'{self}: the point has negative determinant.')

    def check_vector(self, R, X, atol=DEFAULT_ATOL):
        super().check_vector(R, X, atol)
        X = np.asarray(X)
        err = np.max(np.abs(X + X.T))
        if err > atol:
            raise InvalidElementError(f'{self}: the vector is not skew-symmetric (deviation {err}).')

    def rand(self, key: jax.Array):
        return expm(self.randvec(None, key))

    def randvec(self, X, key: jax.Array):
        S = jax.random.normal(key, self.point_shape)
        return skew(S)

    def proj(self, X, H):
        """Orthogonal (with respect to the Euclidean inner product) projection of ambient
        vector onto the Lie algebra"""
        return skew(H)

    def get_coordinates(self, R, X, out=None):
        return write(out, jnp.asarray(X)[self._rows, self._cols])

    def get_vector(self, R, c, out=None):
        c = jnp.asarray(c)
        X = jnp.zeros(self.point_shape)
        X = X.at[self._rows, self._cols].set(c)
        X = X.at[self._cols, self._rows].set(-c)
        return write(out, X)
