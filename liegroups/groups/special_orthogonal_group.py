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

from liegroups.groups.lie_group import LieGroup
from liegroups.groups.operation import MatrixMultiplicationOperation
from liegroups.manifold import SOn
from liegroups.manifold.gl_p_n import logm
from liegroups.manifold.util import multiskew as skew, write

I = np.eye(3)
O = np.zeros(3)
versor2skew = jnp.array([[O, -I[2], I[1]], [I[2], O, -I[0]], [-I[1], I[0], O]])


class SpecialOrthogonalGroup(LieGroup):
    """Rotation group SO(n) under matrix multiplication.

        G = SpecialOrthogonalGroup(n)

    Uses closed forms of the inverse (transpose) and, for n = 2 and n = 3, of the group exponential and logarithm.
    """

    def __init__(self, n=3):
        self._n = n
        super().__init__(SOn(n), MatrixMultiplicationOperation())

    def __str__(self):
        return f'SpecialOrthogonalGroup({self._n})'

    def _inverse_raw(self, h, g):
        return write(h, jnp.asarray(g).T)

    def _diff_conjugate_raw(self, Y, g, h, X):
        g = jnp.asarray(g)
        return write(Y, g @ jnp.asarray(X) @ g.T)

    def _exponential_raw(self, g, X, t=1.):
        X = t * jnp.asarray(X)
        if self._n == 2:
            R = so2_expm(X)
        elif self._n == 3:
            R = so3_expm(X)
        else:
            R = expm(X)
        return write(g, R)

    def _logarithm_raw(self, X, g):
        g = jnp.asarray(g)
        if self._n == 2:
            Y = so2_logm(g)
        elif self._n == 3:
            Y = so3_logm(g)
        else:
            Y = skew(logm(g))
        return write(X, Y)


def so2_expm(X):
    c, s = jnp.cos(X[1, 0]), jnp.sin(X[1, 0])
    return jnp.array([[c, -s], [s, c]])


def so2_logm(R):
    angle = jnp.arctan2(R[1, 0], R[0, 0])
    return jnp.array([[0., -angle], [angle, 0.]])


def so3_logm(R):
    """Logarithm of a rotation in 3D via its unit quaternion."""
    decision_vector = R.diagonal()
    decision_vector = jnp.hstack([decision_vector, decision_vector.sum()])

    i = decision_vector.argmax()
    j = (i + 1) % 3
    k = (j + 1) % 3

    q1 = jnp.empty_like(decision_vector)
    q1 = q1.at[i].set(1 - decision_vector[-1] + 2 * R[i, i])
    q1 = q1.at[j].set(R[j, i] + R[i, j])
    q1 = q1.at[k].set(R[k, i] + R[i, k])
    q1 = q1.at[3].set(R[k, j] - R[j, k])

    q2 = jnp.empty_like(decision_vector)
    q2 = q2.at[0].set(R[2, 1] - R[1, 2])
    q2 = q2.at[1].set(R[0, 2] - R[2, 0])
    q2 = q2.at[2].set(R[1, 0] - R[0, 1])
    q2 = q2.at[3].set(1 + decision_vector[-1])

    quat = jax.lax.cond(i == 3, lambda _: q2, lambda _: q1, i)

    quat = quat / jnp.linalg.norm(quat)
    # w > 0 to ensure 0 <= angle <= pi
    quat = quat * jax.lax.cond(quat[3] < 0, lambda _: -1., lambda _: 1., i)

    def get_scale(s2):
        s = jnp.sqrt(s2 + jnp.finfo(jnp.float64).eps)
        angle = 2 * jnp.arctan2(s, quat[3])
        return angle / jnp.sin(angle / 2)

    sin2 = jnp.sum(quat[:3] ** 2)
    scale = jax.lax.cond(sin2 < 1e-6, lambda _: 2.0, lambda s: get_scale(s), sin2)
    versors = scale * quat[:3]
    return jnp.einsum('ijk,k', versor2skew, versors)


def so3_expm(X):
    """Exponential of a skew-symmetric 3x3 matrix via the corresponding unit quaternion."""

    def quaternion(sqn):
        norms = jnp.sqrt(sqn + jnp.finfo(jnp.float64).eps)
        scale = .5 * jnp.sin(norms / 2) / norms
        x = scale * (X[2, 1] - X[1, 2])
        y = scale * (X[0, 2] - X[2, 0])
        z = scale * (X[1, 0] - X[0, 1])
        w = jnp.cos(norms / 2)
        return jnp.stack([x, y, z, w])

    def quaternion_truncated(sqn):
        scale = 0.25 - sqn / 96 + sqn ** 2 / 7680
        x = scale * (X[2, 1] - X[1, 2])
        y = scale * (X[0, 2] - X[2, 0])
        z = scale * (X[1, 0] - X[0, 1])
        w = 1 - sqn / 8 + sqn ** 2 / 384
        return jnp.stack([x, y, z, w])

    sq_norms = .5 * jnp.einsum('ij,ij', X, X)
    x, y, z, w = jnp.where(sq_norms <= 1e-3 ** 2, quaternion_truncated(sq_norms), quaternion(sq_norms))

    # to rotation matrix
    return jnp.array([[w * w + x * x - y * y - z * z, 2 * (x * y - z * w), 2 * (x * z + y * w)],
                      [2 * (x * y + z * w), w * w - x * x + y * y - z * z, 2 * (y * z - x * w)],
                      [2 * (x * z - y * w), 2 * (y * z + x * w), w * w - x * x - y * y + z * z]])
