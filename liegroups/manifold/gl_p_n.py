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
from scipy.linalg import logm as scipy_logm

from liegroups.errors import InvalidElementError
from liegroups.manifold import Manifold
from liegroups.manifold.util import DEFAULT_ATOL


class GLpn(Manifold):
    """Returns the manifold GL^+(n), i.e., the set of n-by-n matrices each with positive determinant.

     manifold = GLpn(n)

     Elements of GL^+(n) are represented as arrays of size nxn.

     # NOTE: Tangent vectors are represented as left translations in the Lie algebra, i.e., a tangent vector X at g is
     represented as d_gL_{g^(-1)}(X)
     """

    def __init__(self, n=3):
        self._n = n

        name = 'Orientation preserving maps of R^' + str(n)

        super().__init__(name, n**2, point_shape=(n, n))

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

    def check_point(self, p, atol=DEFAULT_ATOL):
        super().check_point(p, atol)
        det = np.linalg.det(np.asarray(p))
        if not det > atol:
            raise InvalidElementError(f'{self}: the determinant of the point is {det}, but has to be positive.')

    def rand(self, key: jax.Array):
        """Returns a random point in the Lie group. This does not
        follow a specific distribution."""
        A = jax.random.normal(key, self.point_shape)
        return expm(A)

    def randvec(self, A, key: jax.Array):
        """Returns a random vector in the tangent space at A.
        """
        return jax.random.normal(key, self.point_shape)

    def proj(self, p, X):
        return X


@jax.custom_jvp
def logm(m):
    """Computes the (principal) matrix logarithm of m."""
    m = jnp.asarray(m)

    # Promote the input to inexact (float/complex).
    # Note that jnp.result_type() accounts for the enable_x64 flag.
    m = m.astype(jnp.result_type(float, m.dtype))

    # Wrap scipy function to return the expected dtype (imaginary parts vanish for the real logarithm).
    _scipy_logm = lambda a: np.real(scipy_logm(a)).astype(m.dtype)

    # Define the expected shape & dtype of output.
    result_shape_dtype = jax.ShapeDtypeStruct(
        shape=jnp.broadcast_shapes(m.shape),
        dtype=m.dtype)

    # Use vmap_method="sequential" because scipy's logm does not handle broadcasted inputs.
    return jax.pure_callback(_scipy_logm, result_shape_dtype, m, vmap_method="sequential")

@logm.defjvp
def logm_jvp(primals, tangents):
    """Evaluate the derivative of the matrix logarithm at
    X in direction G.
    """
    m, = primals
    x, = tangents

    n = m.shape[1]
    # set up [[m, x], [0, m]]
    W = jnp.vstack((jnp.hstack((m, x)), jnp.hstack((jnp.zeros_like(m), m))))
    logW = logm(W)
    return logW[:n, :n], logW[:n, n:]
