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

# postponed evaluation of annotations to circumvent cyclic dependencies (will be default behavior in Python 4.0)
from __future__ import annotations

import logging

import numpy as np
import jax

from liegroups.errors import IncompatibleIdentityError, InvalidElementError
from liegroups.groups.identity import Identity
from liegroups.groups.lie_algebra import LieAlgebra
from liegroups.groups.operation import GroupOperation
from liegroups.manifold import Manifold
from liegroups.manifold.util import DEFAULT_ATOL, report, shape_of, shares_memory

logger = logging.getLogger(__name__)


class LieGroup:
    """
    Lie group given by an underlying manifold and a group operation tag.

        G = LieGroup(M, op)

    Every operation is dispatched in three layers:
        public methods (compose, exp, ...) validate their arguments and allocate the output if none is given,
        identity resolution (_compose, _exp, ...) rewrites calls involving Identity sentinels,
        raw primitives (_compose_raw, _exponential_raw, ...) do the numerical work and delegate to the operation tag.
    Concrete groups only override raw primitives.

    All public methods take an optional writeable buffer out; the result is written into and returned as out. Tangent
    vectors are always represented in the Lie algebra.
    """

    def __init__(self, manifold: Manifold, op: GroupOperation):
        """ Construct group.
        :param manifold: underlying manifold
        :param op: group operation tag
        """
        if not isinstance(op, GroupOperation):
            raise TypeError(f'Expected a group operation, got {type(op)}.')
        op.check_manifold(manifold)
        self._manifold = manifold
        self._op = op
        logger.debug('Constructed %s of dimension %d', self, self.dim)

    def __str__(self):
        return f'LieGroup({self._manifold}, {self._op!r})'

    def __repr__(self):
        return self.__str__()

    def __pow__(self, size):
        from liegroups.groups.power_group import PowerLieGroup
        size = size if isinstance(size, tuple) else (size,)
        return PowerLieGroup(self, *size)

    @property
    def manifold(self) -> Manifold:
        """Return the underlying manifold"""
        return self._manifold

    @property
    def op(self) -> GroupOperation:
        """Return the group operation tag"""
        return self._op

    @property
    def dim(self) -> int:
        """The dimension of the group"""
        return self._manifold.dim

    @property
    def algebra(self) -> LieAlgebra:
        """The Lie algebra, i.e. the tangent space at the identity."""
        return LieAlgebra(self)

    #### validation ####

    def _check_identity(self, e):
        if e.op != self._op:
            raise IncompatibleIdentityError(f'{e!r} is not the identity of {self}.')

    def _check_point(self, g):
        if isinstance(g, Identity):
            self._check_identity(g)
        else:
            self._manifold.check_point(g, DEFAULT_ATOL)

    def _check_vector(self, X):
        self._manifold.check_vector(self.identity_element(), X, DEFAULT_ATOL)

    def _check_out(self, out):
        """Output buffers for points may also be Identity sentinels."""
        if out is None:
            return
        if isinstance(out, Identity):
            self._check_identity(out)
        else:
            self._manifold.check_buffer(out)

    def _check_vector_out(self, out):
        if out is not None:
            self._manifold.check_buffer(out)

    def _check_coordinates(self, c):
        if shape_of(c) != (self.dim,):
            raise InvalidElementError(f'{self}: expected coordinates of shape {(self.dim,)}, got {shape_of(c)}.')

    def _check_coordinates_out(self, out):
        if out is None:
            return
        self._check_coordinates(out)
        if not isinstance(out, np.ndarray) or not out.flags.writeable:
            raise InvalidElementError(f'{self}: output buffers must be writeable numpy arrays, got {type(out)}.')

    def is_point(self, g, error='none', atol=DEFAULT_ATOL) -> bool:
        """Checks whether g is an element of the group.

        :param error: what to do if the check fails; 'none', 'info', 'warn', or 'error'
        """
        if isinstance(g, Identity):
            try:
                self._check_identity(g)
            except IncompatibleIdentityError as err:
                return report(err, error)
            return True
        return self._manifold.is_point(g, error, atol)

    def is_vector(self, X, error='none', atol=DEFAULT_ATOL) -> bool:
        """Checks whether X is an element of the Lie algebra (see is_point for error)."""
        return self._manifold.is_vector(self.identity_element(), X, error, atol)

    def is_identity(self, g, atol=DEFAULT_ATOL) -> bool:
        """Whether g is the identity. Identity sentinels of other groups are not."""
        if isinstance(g, Identity):
            return g.op == self._op
        return self._manifold.isapprox(g, self.identity_element(), atol)

    def isapprox(self, g, h, atol=DEFAULT_ATOL) -> bool:
        """Whether g and h coincide up to the absolute tolerance atol. A sentinel of another operation is never
        close to anything."""
        if isinstance(g, Identity):
            g, h = h, g
        if isinstance(h, Identity):
            if h.op != self._op:
                return False
            return self.is_identity(g, atol)
        return self._manifold.isapprox(g, h, atol)

    #### identity and copies ####

    def identity_element(self, out=None):
        """Returns the identity as a point, i.e. a materialized numerical representation of it."""
        if out is None:
            out = self._manifold.allocate_point()
        else:
            self._manifold.check_buffer(out)
        return self._identity_element(out)

    def _identity_element(self, e):
        return self._identity_element_raw(e)

    def _materialize(self, g):
        if isinstance(g, Identity):
            return self._identity_element(self._manifold.allocate_point())
        return g

    def copyto(self, h, g):
        """Copies the point g into h."""
        self._check_point(g)
        self._check_out(h)
        return self._copyto(h, g)

    def _copyto(self, h, g):
        if isinstance(h, Identity):
            if isinstance(g, Identity) or self.is_identity(g):
                return h
            raise InvalidElementError(f'{self}: cannot store a point that is not the identity in {h!r}.')
        if isinstance(g, Identity):
            return self._identity_element(h)
        return self._manifold.copyto(h, g)

    def zero_vector(self, out=None):
        """Zero vector of the Lie algebra"""
        if out is None:
            return self._manifold.zerovec()
        self._manifold.check_buffer(out)
        return self._zero_vector(out)

    def _zero_vector(self, X):
        return self._manifold.copyto(X, self._manifold.zerovec())

    def rand(self, key: jax.Array, vector_at=None):
        """Random point of the group, or random tangent vector if a base point vector_at is given.

        :param key: a PRNG key
        """
        if vector_at is None:
            return self._manifold.copyto(self._manifold.allocate_point(), self._manifold.rand(key))
        self._check_point(vector_at)
        X = self._manifold.randvec(self._materialize(vector_at), key)
        return self._manifold.copyto(self._manifold.zerovec(), X)

    #### composition ####

    def compose(self, g, h, out=None):
        """Group operation g∘h. The output may coincide with g or h."""
        self._check_point(g)
        self._check_point(h)
        self._check_out(out)
        if out is None:
            if isinstance(g, Identity):
                return h
            if isinstance(h, Identity):
                return g
            out = self._manifold.allocate_point()
        return self._compose(out, g, h)

    def _compose(self, k, g, h):
        if isinstance(g, Identity):
            return self._copyto(k, h)
        if isinstance(h, Identity):
            return self._copyto(k, g)
        if isinstance(k, Identity):
            return self._copyto(k, self._compose_raw(self._manifold.allocate_point(), g, h))
        return self._compose_raw(k, g, h)

    def inverse(self, g, out=None):
        """Inverse g^-1 of g. The output may coincide with g."""
        self._check_point(g)
        self._check_out(out)
        if out is None:
            if isinstance(g, Identity):
                return g
            out = self._manifold.allocate_point()
        return self._inverse(out, g)

    def _inverse(self, h, g):
        if isinstance(g, Identity):
            return self._copyto(h, g)
        if isinstance(h, Identity):
            return self._copyto(h, self._inverse_raw(self._manifold.allocate_point(), g))
        return self._inverse_raw(h, g)

    def inv_left_compose(self, g, h, out=None):
        """Compose the inverse of g with h, i.e. g^-1∘h."""
        self._check_point(g)
        self._check_point(h)
        self._check_out(out)
        if out is None:
            if isinstance(g, Identity):
                return h
            out = self._manifold.allocate_point()
        return self._inv_left_compose(out, g, h)

    def _inv_left_compose(self, k, g, h):
        if isinstance(g, Identity):
            return self._copyto(k, h)
        if isinstance(h, Identity):
            return self._inverse(k, g)
        if isinstance(k, Identity) or shares_memory(k, h):
            return self._copyto(k, self._inv_left_compose(self._manifold.allocate_point(), g, h))
        self._inverse(k, g)
        return self._compose(k, k, h)

    def inv_right_compose(self, g, h, out=None):
        """Compose h with the inverse of g, i.e. h∘g^-1."""
        self._check_point(g)
        self._check_point(h)
        self._check_out(out)
        if out is None:
            if isinstance(g, Identity):
                return h
            out = self._manifold.allocate_point()
        return self._inv_right_compose(out, g, h)

    def _inv_right_compose(self, k, g, h):
        if isinstance(g, Identity):
            return self._copyto(k, h)
        if isinstance(h, Identity):
            return self._inverse(k, g)
        if isinstance(k, Identity) or shares_memory(k, h):
            return self._copyto(k, self._inv_right_compose(self._manifold.allocate_point(), g, h))
        self._inverse(k, g)
        return self._compose(k, h, k)

    def conjugate(self, g, h, out=None):
        """Conjugation g∘h∘g^-1 of h by g."""
        self._check_point(g)
        self._check_point(h)
        self._check_out(out)
        if out is None:
            if isinstance(g, Identity) or isinstance(h, Identity):
                return h
            out = self._manifold.allocate_point()
        return self._conjugate(out, g, h)

    def _conjugate(self, k, g, h):
        if isinstance(g, Identity) or isinstance(h, Identity):
            return self._copyto(k, h)
        # the buffer is overwritten before g and h are read for the last time
        if isinstance(k, Identity) or shares_memory(k, g) or shares_memory(k, h):
            return self._copyto(k, self._conjugate(self._manifold.allocate_point(), g, h))
        self._inverse(k, g)
        self._compose(k, h, k)
        return self._compose(k, g, k)

    #### exponential and logarithm ####

    def exponential(self, X, t=1., out=None):
        """Group exponential exp(tX) of the Lie algebra element X."""
        self._check_vector(X)
        self._check_out(out)
        if out is None:
            out = self._manifold.allocate_point()
        return self._exponential(out, X, t)

    def _exponential(self, g, X, t=1.):
        if isinstance(g, Identity):
            return self._copyto(g, self._exponential_raw(self._manifold.allocate_point(), X, t))
        return self._exponential_raw(g, X, t)

    def logarithm(self, g, out=None):
        """Group logarithm of g, i.e. the inverse of exponential near the identity."""
        self._check_point(g)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._logarithm(out, g)

    def _logarithm(self, X, g):
        if isinstance(g, Identity):
            return self._zero_vector(X)
        return self._logarithm_raw(X, g)

    def exp(self, g, X, t=1., out=None):
        """Exponential map g∘exp(tX) at g."""
        self._check_point(g)
        self._check_vector(X)
        self._check_out(out)
        if out is None:
            out = self._manifold.allocate_point()
        return self._exp(out, g, X, t)

    def _exp(self, h, g, X, t=1.):
        if isinstance(g, Identity):
            return self._exponential(h, X, t)
        if isinstance(h, Identity):
            return self._copyto(h, self._exp(self._manifold.allocate_point(), g, X, t))
        if shares_memory(h, g):
            g = self._manifold.copyto(self._manifold.allocate_point(), g)
        self._exponential(h, X, t)
        return self._compose(h, g, h)

    def log(self, g, h, out=None):
        """Logarithmic map at g, i.e. logarithm(g^-1∘h)."""
        self._check_point(g)
        self._check_point(h)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._log(out, g, h)

    def _log(self, X, g, h):
        if isinstance(g, Identity):
            return self._logarithm(X, h)
        return self._logarithm(X, self._inv_left_compose(self._manifold.allocate_point(), g, h))

    #### differentials ####

    def adjoint(self, g, X, out=None):
        """Adjoint action Ad_g(X) of g on the Lie algebra element X."""
        self._check_point(g)
        self._check_vector(X)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._adjoint(out, g, X)

    def _adjoint(self, Y, g, X):
        return self._diff_conjugate(Y, g, Identity(self._op), X)

    def diff_conjugate(self, g, h, X, out=None):
        """Differential of the conjugation by g, evaluated at h in direction X."""
        self._check_point(g)
        self._check_point(h)
        self._check_vector(X)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._diff_conjugate(out, g, h, X)

    def _diff_conjugate(self, Y, g, h, X):
        return self._diff_conjugate_raw(Y, self._materialize(g), h, X)

    def diff_inv(self, g, X, out=None):
        """Differential of the inversion, evaluated at g in direction X."""
        self._check_point(g)
        self._check_vector(X)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._diff_inv(out, g, X)

    def _diff_inv(self, Y, g, X):
        return self._diff_inv_raw(Y, self._materialize(g), X)

    def diff_left_compose(self, g, h, X, out=None):
        """Differential of the left translation by g, evaluated at h in direction X."""
        self._check_point(g)
        self._check_point(h)
        self._check_vector(X)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._diff_left_compose(out, g, h, X)

    def _diff_left_compose(self, Y, g, h, X):
        return self._diff_left_compose_raw(Y, self._materialize(g), h, X)

    def diff_right_compose(self, h, g, X, out=None):
        """Differential of the right translation by g, evaluated at h in direction X."""
        self._check_point(h)
        self._check_point(g)
        self._check_vector(X)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._diff_right_compose(out, h, g, X)

    def _diff_right_compose(self, Y, h, g, X):
        return self._diff_right_compose_raw(Y, h, self._materialize(g), X)

    def jacobian_conjugate(self, g, h=None, out=None):
        """Matrix of diff_conjugate(g, h, .) w.r.t. the default basis of the Lie algebra (h defaults to the identity).
        """
        h = Identity(self._op) if h is None else h
        self._check_point(g)
        self._check_point(h)
        d = self.dim
        if out is None:
            out = np.zeros((d, d))
        elif shape_of(out) != (d, d) or not isinstance(out, np.ndarray) or not out.flags.writeable:
            raise InvalidElementError(f'{self}: expected a writeable {d}x{d} numpy array, got {shape_of(out)}.')
        g = self._materialize(g)
        e = Identity(self._op)
        X, Y = self._manifold.zerovec(), self._manifold.zerovec()
        for i, c in enumerate(np.eye(d)):
            self._get_vector(X, e, c)
            self._diff_conjugate(Y, g, h, X)
            self._get_coordinates(out[:, i], e, Y)
        return out

    #### Lie algebra ####

    def lie_bracket(self, X, Y, out=None):
        """Lie bracket [X, Y] of the Lie algebra."""
        self._check_vector(X)
        self._check_vector(Y)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._lie_bracket(out, X, Y)

    def _lie_bracket(self, Z, X, Y):
        return self._lie_bracket_raw(Z, X, Y)

    def get_coordinates(self, g, X, out=None):
        """Coordinates of the tangent vector X at g w.r.t. the default (orthogonal) basis of the Lie algebra."""
        self._check_point(g)
        self._check_vector(X)
        self._check_coordinates_out(out)
        if out is None:
            out = np.zeros(self.dim)
        return self._get_coordinates(out, g, X)

    def _get_coordinates(self, c, g, X):
        # tangent vectors live in the Lie algebra, so the base point does not enter
        return self._get_coordinates_raw(c, X)

    def get_vector(self, g, c, out=None):
        """Tangent vector at g with coordinates c (inverse of get_coordinates)."""
        self._check_point(g)
        self._check_coordinates(c)
        self._check_vector_out(out)
        if out is None:
            out = self._manifold.zerovec()
        return self._get_vector(out, g, c)

    def _get_vector(self, X, g, c):
        return self._get_vector_raw(X, c)

    def vee(self, X, out=None):
        """Coordinates of the Lie algebra element X."""
        return self.get_coordinates(Identity(self._op), X, out)

    def hat(self, c, out=None):
        """Lie algebra element with coordinates c."""
        return self.get_vector(Identity(self._op), c, out)

    #### raw primitives ####

    def _identity_element_raw(self, e):
        return self._op.identity_element(self, e)

    def _compose_raw(self, k, g, h):
        return self._op.compose(self, k, g, h)

    def _inverse_raw(self, h, g):
        return self._op.inverse(self, h, g)

    def _exponential_raw(self, g, X, t=1.):
        return self._op.exponential(self, g, X, t)

    def _logarithm_raw(self, X, g):
        return self._op.logarithm(self, X, g)

    def _diff_conjugate_raw(self, Y, g, h, X):
        return self._op.diff_conjugate(self, Y, g, h, X)

    def _diff_inv_raw(self, Y, g, X):
        return self._op.diff_inv(self, Y, g, X)

    def _diff_left_compose_raw(self, Y, g, h, X):
        return self._op.diff_left_compose(self, Y, g, h, X)

    def _diff_right_compose_raw(self, Y, h, g, X):
        return self._op.diff_right_compose(self, Y, h, g, X)

    def _lie_bracket_raw(self, Z, X, Y):
        return self._op.lie_bracket(self, Z, X, Y)

    def _get_coordinates_raw(self, c, X):
        return self._manifold.get_coordinates(self.identity_element(), X, out=c)

    def _get_vector_raw(self, X, c):
        return self._manifold.get_vector(self.identity_element(), c, out=X)
