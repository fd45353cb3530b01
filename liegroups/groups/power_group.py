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

import logging

import jax

from liegroups.errors import UnsupportedOperationError
from liegroups.groups.identity import Identity
from liegroups.groups.lie_group import LieGroup
from liegroups.groups.operation import GroupOperation
from liegroups.manifold import PowerManifold

logger = logging.getLogger(__name__)


class PowerGroupOperation(GroupOperation):
    """
    Operation of a power group, i.e. the operation op of the base group applied independently per index.

    Every primitive loops over the index set of the power manifold and calls the identity resolution layer of the
    base group on the components, writing into the components of the output. A (compound) Identity sentinel is
    passed on per index as Identity(op).
    """

    def __init__(self, op: GroupOperation):
        self._op = op

    @property
    def op(self) -> GroupOperation:
        """Return the operation of the base group"""
        return self._op

    def __eq__(self, other):
        return type(self) is type(other) and self._op == other._op

    def __hash__(self):
        return hash((PowerGroupOperation, self._op))

    def __repr__(self):
        return f'PowerGroupOperation({self._op!r})'

    def check_manifold(self, M):
        if not isinstance(M, PowerManifold):
            raise UnsupportedOperationError(f'{self!r} requires a power manifold, got {M}.')
        self._op.check_manifold(M.atom_manifold)

    def _base_group(self, G) -> LieGroup:
        B = getattr(G, 'base_group', None)
        if B is None:
            B = LieGroup(G.manifold.atom_manifold, self._op)
        return B

    def _components(self, G, name, *args):
        """Yields the tuples of i-th components of args for all indices i of the power."""
        M = G.manifold
        logger.debug('Lifting %s to %d components of %s', name, M.k, G)
        e = Identity(self._op)
        for i in M.get_iterator():
            yield tuple(e if isinstance(a, Identity) else M.ith_component(a, i) for a in args)

    def identity_element(self, G, e):
        B = self._base_group(G)
        for e_i, in self._components(G, 'identity_element', e):
            B._identity_element(e_i)
        return e

    def compose(self, G, k, g, h):
        B = self._base_group(G)
        for k_i, g_i, h_i in self._components(G, 'compose', k, g, h):
            B._compose(k_i, g_i, h_i)
        return k

    def inverse(self, G, h, g):
        B = self._base_group(G)
        for h_i, g_i in self._components(G, 'inverse', h, g):
            B._inverse(h_i, g_i)
        return h

    def exponential(self, G, g, X, t=1.):
        B = self._base_group(G)
        for g_i, X_i in self._components(G, 'exponential', g, X):
            B._exponential(g_i, X_i, t)
        return g

    def logarithm(self, G, X, g):
        B = self._base_group(G)
        for X_i, g_i in self._components(G, 'logarithm', X, g):
            B._logarithm(X_i, g_i)
        return X

    def diff_conjugate(self, G, Y, g, h, X):
        B = self._base_group(G)
        for Y_i, g_i, h_i, X_i in self._components(G, 'diff_conjugate', Y, g, h, X):
            B._diff_conjugate(Y_i, g_i, h_i, X_i)
        return Y

    def diff_inv(self, G, Y, g, X):
        B = self._base_group(G)
        for Y_i, g_i, X_i in self._components(G, 'diff_inv', Y, g, X):
            B._diff_inv(Y_i, g_i, X_i)
        return Y

    def diff_left_compose(self, G, Y, g, h, X):
        B = self._base_group(G)
        for Y_i, g_i, h_i, X_i in self._components(G, 'diff_left_compose', Y, g, h, X):
            B._diff_left_compose(Y_i, g_i, h_i, X_i)
        return Y

    def diff_right_compose(self, G, Y, h, g, X):
        B = self._base_group(G)
        for Y_i, h_i, g_i, X_i in self._components(G, 'diff_right_compose', Y, h, g, X):
            B._diff_right_compose(Y_i, h_i, g_i, X_i)
        return Y

    def lie_bracket(self, G, Z, X, Y):
        B = self._base_group(G)
        for Z_i, X_i, Y_i in self._components(G, 'lie_bracket', Z, X, Y):
            B._lie_bracket(Z_i, X_i, Y_i)
        return Z


class PowerLieGroup(LieGroup):
    """
    Power G^size of a Lie group G, i.e. copies of G indexed by a grid of the given size and composed per index.

        P = PowerLieGroup(G, n, m)   # or G ** (n, m)

    Points are stored according to representation (see PowerManifold); nesting powers is supported.
    """

    def __init__(self, G: LieGroup, *size, representation='array'):
        if len(size) == 1 and isinstance(size[0], (tuple, list)):
            size = tuple(size[0])
        self._base_group = G
        M = PowerManifold(G.manifold, *size, representation=representation)
        super().__init__(M, PowerGroupOperation(G.op))

    def __str__(self):
        return f'PowerLieGroup({self._base_group}, {self.size})'

    @property
    def base_group(self) -> LieGroup:
        """Return the base group G"""
        return self._base_group

    @property
    def size(self) -> tuple:
        return self.manifold.size

    @property
    def representation(self) -> str:
        return self.manifold.representation

    def rand(self, key: jax.Array, vector_at=None):
        """Random point (or tangent vector if vector_at is given), sampled per index with the base group.

        :param key: a PRNG key
        """
        M, B = self.manifold, self._base_group
        if vector_at is None:
            out = M.allocate_point()
        else:
            self._check_point(vector_at)
            out = M.zerovec()
        e = Identity(B.op)
        keys = jax.random.split(key, M.k)
        for j, i in enumerate(M.get_iterator()):
            if vector_at is None:
                x = B.rand(keys[j])
            else:
                x = B.rand(keys[j], vector_at=e if isinstance(vector_at, Identity) else M.ith_component(vector_at, i))
            M.atom_manifold.copyto(M.ith_component(out, i), x)
        return out

    def _get_coordinates_raw(self, c, X):
        M, B = self.manifold, self._base_group
        d, e = B.dim, Identity(B.op)
        for j, i in enumerate(M.get_iterator()):
            B._get_coordinates(c[j * d:(j + 1) * d], e, M.ith_component(X, i))
        return c

    def _get_vector_raw(self, X, c):
        M, B = self.manifold, self._base_group
        d, e = B.dim, Identity(B.op)
        for j, i in enumerate(M.get_iterator()):
            B._get_vector(M.ith_component(X, i), e, c[j * d:(j + 1) * d])
        return X
