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

import jax.numpy as jnp
from jax.scipy.linalg import expm

from liegroups.errors import UnsupportedOperationError
from liegroups.manifold.gl_p_n import logm
from liegroups.manifold.util import multiprod, write


class GroupOperation:
    """
    Stateless tag selecting the composition law of a Lie group.

    Tags are compared (and hashed) by type only. Each tag carries the op-level raw algorithms. They take the
    group as first argument and write their result into the (writeable) output buffer that follows. Arguments are
    never Identity sentinels; these are resolved by the group beforehand. All primitives of this base class raise
    UnsupportedOperationError.
    """

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f'{type(self).__name__}()'

    def check_manifold(self, M):
        """Raises UnsupportedOperationError if the operation is not defined for the points of M."""

    def _unsupported(self, name, G):
        raise UnsupportedOperationError(f'{name} is not implemented for {self!r} on {G}.')

    def identity_element(self, G, e):
        self._unsupported('identity_element', G)

    def compose(self, G, k, g, h):
        self._unsupported('compose', G)

    def inverse(self, G, h, g):
        self._unsupported('inverse', G)

    def exponential(self, G, g, X, t=1.):
        self._unsupported('exponential', G)

    def logarithm(self, G, X, g):
        self._unsupported('logarithm', G)

    def diff_conjugate(self, G, Y, g, h, X):
        self._unsupported('diff_conjugate', G)

    def diff_inv(self, G, Y, g, X):
        self._unsupported('diff_inv', G)

    def diff_left_compose(self, G, Y, g, h, X):
        self._unsupported('diff_left_compose', G)

    def diff_right_compose(self, G, Y, h, g, X):
        self._unsupported('diff_right_compose', G)

    def lie_bracket(self, G, Z, X, Y):
        self._unsupported('lie_bracket', G)


class AdditionOperation(GroupOperation):
    """Entry-wise addition, i.e. the group of translations. The Lie algebra coincides with the group."""

    def identity_element(self, G, e):
        return write(e, jnp.zeros(G.manifold.point_shape))

    def compose(self, G, k, g, h):
        return write(k, jnp.add(g, h))

    def inverse(self, G, h, g):
        return write(h, jnp.negative(g))

    def exponential(self, G, g, X, t=1.):
        return write(g, t * jnp.asarray(X))

    def logarithm(self, G, X, g):
        return write(X, g)

    def diff_conjugate(self, G, Y, g, h, X):
        return write(Y, X)

    def diff_inv(self, G, Y, g, X):
        return write(Y, jnp.negative(X))

    def diff_left_compose(self, G, Y, g, h, X):
        return write(Y, X)

    def diff_right_compose(self, G, Y, h, g, X):
        return write(Y, X)

    def lie_bracket(self, G, Z, X, Y):
        return write(Z, jnp.zeros(G.manifold.point_shape))


class MatrixMultiplicationOperation(GroupOperation):
    """
    Matrix multiplication for groups of square matrices.

    Tangent vectors are left-trivialized, i.e. a tangent vector at g is represented as the Lie algebra element
    g^-1 X. The differentials below act on this representation.
    """

    def check_manifold(self, M):
        shape = M.point_shape
        if len(shape) != 2 or shape[0] != shape[1]:
            raise UnsupportedOperationError(f'{self!r} requires square matrices, but points of {M} have shape {shape}.')

    def identity_element(self, G, e):
        return write(e, jnp.eye(G.manifold.point_shape[0]))

    def compose(self, G, k, g, h):
        return write(k, multiprod(g, h))

    def inverse(self, G, h, g):
        return write(h, jnp.linalg.inv(jnp.asarray(g)))

    def exponential(self, G, g, X, t=1.):
        return write(g, expm(t * jnp.asarray(X)))

    def logarithm(self, G, X, g):
        return write(X, logm(g))

    def diff_conjugate(self, G, Y, g, h, X):
        g = jnp.asarray(g)
        return write(Y, g @ jnp.asarray(X) @ jnp.linalg.inv(g))

    def diff_inv(self, G, Y, g, X):
        g = jnp.asarray(g)
        return write(Y, -g @ jnp.asarray(X) @ jnp.linalg.inv(g))

    def diff_left_compose(self, G, Y, g, h, X):
        return write(Y, X)

    def diff_right_compose(self, G, Y, h, g, X):
        g = jnp.asarray(g)
        return write(Y, jnp.linalg.inv(g) @ jnp.asarray(X) @ g)

    def lie_bracket(self, G, Z, X, Y):
        return write(Z, multiprod(X, Y) - multiprod(Y, X))
