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

import functools
import itertools
import operator

import numpy as np

import jax
import jax.numpy as jnp

from liegroups.errors import DimensionMismatchError, InvalidElementError
from liegroups.manifold import Manifold
from liegroups.manifold.util import DEFAULT_ATOL, shape_of, write

REPRESENTATIONS = ('array', 'nested')


class PowerManifold(Manifold):
    """ Power manifold M^(n_1 x ... x n_d) consisting of copies of a single (atom) manifold M, indexed by a grid of
    the given size.

    Two storage layouts are supported:
        'array':  points are arrays of shape (*size, *M.point_shape); components are views into them
        'nested': points are nested lists (of depth len(size)) holding the points of M
    """

    def __init__(self, M: Manifold, *size, representation: str = 'array'):
        if len(size) == 1 and isinstance(size[0], (tuple, list)):
            size = tuple(size[0])
        size = tuple(int(s) for s in size)
        if not size or min(size) < 1:
            raise ValueError(f'Invalid size {size} for a power manifold.')
        if representation not in REPRESENTATIONS:
            raise ValueError(f'Unknown representation {representation!r}, expected one of {REPRESENTATIONS}.')
        if representation == 'array' and getattr(M, 'representation', 'array') == 'nested':
            raise ValueError('The array representation requires array-valued points of the atom manifold.')

        k = int(np.prod(size))
        point_shape = size + tuple(M.point_shape)
        name = f'Product of {"x".join(map(str, size))} copies of ' + M.__str__()
        super().__init__(name, M.dim * k, point_shape)
        self._atom_manifold = M
        self._size = size
        self._k = k
        self._representation = representation

    def tree_flatten(self):
        children, aux = super().tree_flatten()
        return children + (self.atom_manifold,), aux + (self.size, self.representation)

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        """Specifies an unflattening recipe for PyTree registration."""
        *_, size, representation = aux_data
        *_, M = children
        return cls(M, *size, representation=representation)

    @property
    def atom_manifold(self) -> Manifold:
        """Return the atom manifold M"""
        return self._atom_manifold

    @property
    def size(self) -> tuple:
        """Return the size of the index grid"""
        return self._size

    @property
    def k(self) -> int:
        """Return the number of copies of M"""
        return self._k

    @property
    def representation(self) -> str:
        return self._representation

    def get_iterator(self):
        """Iterator over all (multi-)indices of the power, in row-major order."""
        return itertools.product(*(range(s) for s in self._size))

    def ith_component(self, x, i):
        """Projection to the i-th element for both points and tangent vectors of M^size.

        For writeable x, the result is a view (array representation) or the stored element itself (nested
        representation), i.e. writing to it changes x.
        """
        if self._representation == 'array':
            return x[i]
        return functools.reduce(operator.getitem, i, x)

    def _nested(self, fn, size=None, index=()):
        """Nested lists of size self.size with fn(i) at (multi-)index i."""
        size = self._size if size is None else size
        if not size:
            return fn(index)
        return [self._nested(fn, size[1:], index + (j,)) for j in range(size[0])]

    def _check_nesting(self, p, size):
        if not size:
            return
        if not isinstance(p, list) or len(p) != size[0]:
            raise DimensionMismatchError(f'{self}: expected nested lists of size {self._size}.')
        for q in p:
            self._check_nesting(q, size[1:])

    #### validation ####

    def check_size(self, p):
        if self._representation == 'array':
            if not isinstance(p, (np.ndarray, jax.Array)) or shape_of(p) != self.point_shape:
                raise DimensionMismatchError(
                    f'{self}: expected an array of shape {self.point_shape}, '
                    f'got {type(p).__name__} of shape {shape_of(p)}.')
            return
        self._check_nesting(p, self._size)
        for i in self.get_iterator():
            try:
                self._atom_manifold.check_size(self.ith_component(p, i))
            except InvalidElementError as err:
                raise DimensionMismatchError(f'{self}: component {i} has the wrong size. {err}') from err

    def check_buffer(self, out):
        if self._representation == 'array':
            return super().check_buffer(out)
        self.check_size(out)
        for i in self.get_iterator():
            self._atom_manifold.check_buffer(self.ith_component(out, i))

    def check_point(self, p, atol=DEFAULT_ATOL):
        self.check_size(p)
        for i in self.get_iterator():
            try:
                self._atom_manifold.check_point(self.ith_component(p, i), atol)
            except InvalidElementError as err:
                raise type(err)(f'{self}: component {i} is not a valid point. {err}') from err

    def check_vector(self, p, X, atol=DEFAULT_ATOL):
        self.check_size(X)
        for i in self.get_iterator():
            try:
                self._atom_manifold.check_vector(self.ith_component(p, i), self.ith_component(X, i), atol)
            except InvalidElementError as err:
                raise type(err)(f'{self}: component {i} is not a valid tangent vector. {err}') from err

    #### allocation ####

    def allocate_point(self):
        if self._representation == 'array':
            return super().allocate_point()
        return self._nested(lambda i: self._atom_manifold.allocate_point())

    def zerovec(self):
        """Zero vector in any tangent space
        """
        if self._representation == 'array':
            return super().zerovec()
        return self._nested(lambda i: self._atom_manifold.zerovec())

    def copyto(self, out, p):
        if self._representation == 'array':
            return write(out, p)
        for i in self.get_iterator():
            self._atom_manifold.copyto(self.ith_component(out, i), self.ith_component(p, i))
        return out

    def isapprox(self, p, q, atol=DEFAULT_ATOL) -> bool:
        if shape_of(p) != shape_of(q):
            return False
        return all(self._atom_manifold.isapprox(self.ith_component(p, i), self.ith_component(q, i), atol)
                   for i in self.get_iterator())

    #### basis ####

    def _base_point(self, p, i):
        return None if p is None else self.ith_component(p, i)

    def get_coordinates(self, p, X, out=None):
        """Coordinates w.r.t. the product basis, i.e., the coordinates of all components concatenated in the order
        of get_iterator()."""
        c = np.zeros(self.dim) if out is None else out
        d = self._atom_manifold.dim
        for j, i in enumerate(self.get_iterator()):
            self._atom_manifold.get_coordinates(self._base_point(p, i), self.ith_component(X, i),
                                                out=c[j * d:(j + 1) * d])
        return c

    def get_vector(self, p, c, out=None):
        X = self.zerovec() if out is None else out
        d = self._atom_manifold.dim
        for j, i in enumerate(self.get_iterator()):
            self._atom_manifold.get_vector(self._base_point(p, i), c[j * d:(j + 1) * d],
                                           out=self.ith_component(X, i))
        return X

    #### sampling ####

    def rand(self, key: jax.Array):
        """ Random element of the power manifold
        :param key: a PRNG key
        """
        subkeys = jax.random.split(key, self._k)
        if self._representation == 'array':
            return jax.vmap(self.atom_manifold.rand)(subkeys).reshape(self.point_shape)
        return self._nested(lambda i: self.atom_manifold.rand(subkeys[np.ravel_multi_index(i, self._size)]))

    def randvec(self, p, key: jax.Array):
        """Random vector in the tangent space of the point p

        :param p: element of M^size
        :param key: a PRNG key
        :return: random tangent vector at p
        """
        subkeys = jax.random.split(key, self._k)
        if self._representation == 'array':
            p = jnp.reshape(jnp.asarray(p), (self._k,) + self.atom_manifold.point_shape)
            return jax.vmap(self.atom_manifold.randvec)(p, subkeys).reshape(self.point_shape)
        return self._nested(lambda i: self.atom_manifold.randvec(
            self.ith_component(p, i), subkeys[np.ravel_multi_index(i, self._size)]))

    def proj(self, p, z):
        """Project ambient vector onto the power manifold

        :param p: element of M^size
        :param z: ambient vector
        :return: projection of z to the tangent space at p
        """
        if self._representation == 'array':
            shape = (self._k,) + self.atom_manifold.point_shape
            X = jax.vmap(self.atom_manifold.proj)(jnp.reshape(jnp.asarray(p), shape), jnp.reshape(jnp.asarray(z), shape))
            return X.reshape(self.point_shape)
        return self._nested(lambda i: self.atom_manifold.proj(self.ith_component(p, i), self.ith_component(z, i)))
