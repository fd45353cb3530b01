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

import abc
import operator as op

import numpy as np
import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node

from liegroups.errors import InvalidElementError
from liegroups.manifold.util import DEFAULT_ATOL, report, shape_of, write


class ManifoldMeta(abc.ABCMeta):
    """Metaclass for abstract base class for which subclasses are to be registered as jax PyTree"""
    def __new__(mcls, name, bases, namespace, **kwargs):
        cls = super().__new__(mcls, name, bases, namespace, **kwargs)
        register_pytree_node(cls, op.methodcaller('tree_flatten'), cls.tree_unflatten)
        return cls


class Manifold(metaclass=ManifoldMeta):
    """
    Abstract base class setting out a template for the spaces underlying Lie groups.

    A manifold provides validity checks for points and tangent vectors, allocation of (writeable) buffers,
    approximate comparison, and the conversion between tangent vectors and their coordinates w.r.t. a basis of
    the tangent space at a given base point. Points and tangent vectors are arrays of shape point_shape unless
    stated otherwise.
    """

    def __init__(self, name, dimension: int, point_shape):
        self._name = name
        self._dimension = dimension
        self._point_shape = tuple(point_shape)

    @classmethod
    @abc.abstractmethod
    def tree_unflatten(cls, aux_data, children):
        """Specifies an unflattening recipe for PyTree registration."""

    def tree_flatten(self):
        """Specifies a flattening recipe for PyTree registration."""
        return (), ()

    def __str__(self):
        return self._name

    def __repr__(self):
        return self._name

    @property
    def dim(self):
        """The dimension of the manifold"""
        return self._dimension

    @property
    def point_shape(self):
        """Dimensions of elements of the manifold.

        Tuple of dimension, e.g., if an element is given by a 3-by-3 matrix, then its point shape is (3, 3).
        """
        return self._point_shape

    @abc.abstractmethod
    def rand(self, key: jax.Array):
        """Returns a random point of the manifold."""

    @abc.abstractmethod
    def randvec(self, p, key: jax.Array):
        """Returns a random vector in the tangent space at p."""

    @abc.abstractmethod
    def proj(self, p, X):
        """Projects a vector X in the ambient space on the tangent space at
        p.
        """

    #### validation ####

    def check_size(self, p):
        """Raises InvalidElementError if p does not have the shape of a point (or tangent vector)."""
        if shape_of(p) != self.point_shape:
            raise InvalidElementError(f'{self}: expected an array of shape {self.point_shape}, got {shape_of(p)}.')

    def check_buffer(self, out):
        """Raises InvalidElementError if out cannot serve as output buffer for a point (or tangent vector)."""
        self.check_size(out)
        if not isinstance(out, np.ndarray) or not out.flags.writeable:
            raise InvalidElementError(f'{self}: output buffers must be writeable numpy arrays, got {type(out)}.')

    def check_point(self, p, atol=DEFAULT_ATOL):
        """Raises InvalidElementError if p is not a point of the manifold."""
        self.check_size(p)

    def check_vector(self, p, X, atol=DEFAULT_ATOL):
        """Raises InvalidElementError if X is not a tangent vector at p."""
        self.check_size(X)

    def is_point(self, p, error='none', atol=DEFAULT_ATOL) -> bool:
        """Checks whether p is a point of the manifold.

        :param error: what to do if the check fails; 'none', 'info', 'warn', or 'error'
        """
        try:
            self.check_point(p, atol)
        except InvalidElementError as err:
            return report(err, error)
        return True

    def is_vector(self, p, X, error='none', atol=DEFAULT_ATOL) -> bool:
        """Checks whether X is a tangent vector at p (see is_point for error)."""
        try:
            self.check_vector(p, X, atol)
        except InvalidElementError as err:
            return report(err, error)
        return True

    #### allocation ####

    def allocate_point(self):
        """Returns a zero-initialized, writeable buffer for a point."""
        return np.zeros(self.point_shape)

    def zerovec(self):
        """Returns the zero vector in any tangent space."""
        return np.zeros(self.point_shape)

    def copyto(self, out, p):
        """Copies the point (or tangent vector) p into out."""
        return write(out, p)

    def isapprox(self, p, q, atol=DEFAULT_ATOL) -> bool:
        """Whether p and q coincide up to the absolute tolerance atol (entry-wise)."""
        if shape_of(p) != shape_of(q):
            return False
        return bool(jnp.allclose(jnp.asarray(p), jnp.asarray(q), rtol=0., atol=atol))

    #### basis ####

    def get_coordinates(self, p, X, out=None):
        """Coordinates of the tangent vector X at p w.r.t. the default orthogonal basis.

        The default implementation reads off the entries of X, which is an orthonormal basis whenever the
        dimension of the manifold coincides with the number of entries.
        """
        return write(out, jnp.reshape(jnp.asarray(X), -1))

    def get_vector(self, p, c, out=None):
        """Tangent vector at p given by the coordinates c (inverse of get_coordinates)."""
        return write(out, jnp.reshape(jnp.asarray(c), self.point_shape))
