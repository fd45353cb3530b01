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
import jax.numpy as jnp
from jax.scipy.linalg import expm

from liegroups.groups.lie_group import LieGroup
from liegroups.groups.operation import MatrixMultiplicationOperation
from liegroups.groups.special_orthogonal_group import so3_expm, so3_logm
from liegroups.manifold import SEn
from liegroups.manifold.gl_p_n import logm
from liegroups.manifold.util import write


class SpecialEuclideanGroup(LieGroup):
    """Group SE(n) of rigid body motions in homogeneous coordinates under matrix multiplication.

        G = SpecialEuclideanGroup(n)

    Uses the closed form of the inverse and, for n = 3, of the group exponential and logarithm.
    """

    def __init__(self, n=3):
        self._n = n
        super().__init__(SEn(n), MatrixMultiplicationOperation())

    def __str__(self):
        return f'SpecialEuclideanGroup({self._n})'

    def _inverse_raw(self, h, g):
        return write(h, se_inverse(jnp.asarray(g)))

    def _diff_conjugate_raw(self, Y, g, h, X):
        g = jnp.asarray(g)
        return write(Y, g @ jnp.asarray(X) @ se_inverse(g))

    def _exponential_raw(self, g, X, t=1.):
        X = t * jnp.asarray(X)
        return write(g, se3_expm(X) if self._n == 3 else expm(X))

    def _logarithm_raw(self, X, g):
        g = jnp.asarray(g)
        Y = se3_logm(g) if self._n == 3 else logm(g)
        # the last row of the Lie algebra element vanishes
        return write(X, Y.at[-1].set(0.))


def se_inverse(P):
    n = P.shape[0] - 1
    Rt = P[:n, :n].T
    return P.at[:n, :n].set(Rt) \
            .at[:n, n].set(-Rt @ P[:n, n])


def se3_logm(P):
    """
    Blanco, J. L. (2010). A tutorial on SE(3) transformation parameterizations and on-manifold optimization.
    University of Malaga, Tech. Rep, 3, 6.
    """
    w = so3_logm(P[:3, :3])

    theta2 = .5 * jnp.sum(w ** 2)
    theta = jnp.sqrt(theta2 + jnp.finfo(jnp.float64).eps)

    Vinv = (jnp.eye(3) - .5 * w
            + jax.lax.cond(theta < 1e-6,
                           lambda _, _theta2: 1 / 12 + _theta2 / 720 + _theta2 ** 2 / 30240,
                           lambda _theta, _theta2: (1 - jnp.cos(.5 * _theta) / jnp.sinc(
                               .5 * _theta / jnp.pi)) / _theta2,
                           theta,
                           theta2)
            * (w @ w))

    return P.at[:3, :3].set(w) \
            .at[:3, 3].set(jnp.einsum('ij,j', Vinv, P[:3, 3])) \
            .at[3, 3].set(0)


def se3_expm(X):
    """
    Blanco, J. L. (2010). "A tutorial on SE(3) transformation parameterizations and on-manifold optimization."
    University of Malaga, Tech. Rep, 3, 6.
    """
    R = so3_expm(X[:3, :3])

    theta2 = .5 * jnp.sum(X[:3, :3] ** 2)
    theta = jnp.sqrt(theta2 + jnp.finfo(jnp.float64).eps)

    V = (jnp.eye(3)
         + jax.lax.cond(theta < 1e-6,
                        lambda _, _theta2: .5 - _theta2 / 24 + _theta2 ** 2 / 720,
                        lambda _theta, _theta2: (1.0 - jnp.cos(_theta)) / _theta2, theta, theta2)
         * X[:3, :3]
         + jax.lax.cond(theta < 1e-6,
                        lambda _, _theta2: 1 / 6 - _theta2 / 120 + _theta2 ** 2 / 5040,
                        lambda _theta, _theta2: (_theta - jnp.sin(_theta)) / (_theta2 * _theta), theta, theta2)
         * (X[:3, :3] @ X[:3, :3]))

    return X.at[:3, :3].set(R) \
            .at[:3, 3].set(jnp.einsum('ij,j', V, X[:3, 3])) \
            .at[3, 3].set(1)
