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

import numpy as np
import jax.numpy as jnp

logger = logging.getLogger(__name__)

# default absolute tolerance for validity checks and approximate comparisons
DEFAULT_ATOL = 1e-8

_REPORT_MODES = ('none', 'info', 'warn', 'error')


def write(out, value):
    """Store value in the (writeable) buffer out and return out.

    If out is None, a new numpy array holding a copy of value is returned instead.
    """
    if out is None:
        return np.array(value)
    np.copyto(out, np.asarray(value))
    return out


def shares_memory(a, b) -> bool:
    """Whether writing to a might change b (numpy arrays as well as nested lists thereof)."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) and isinstance(b, np.ndarray):
        return np.shares_memory(a, b)
    if isinstance(a, list) and isinstance(b, list):
        return any(shares_memory(x, y) for x, y in zip(a, b))
    return False


def report(err: Exception, error: str = 'none') -> bool:
    """Handle a failed validity check according to error (one of 'none', 'info', 'warn', 'error').

    :return: False, unless err is raised
    """
    if error not in _REPORT_MODES:
        raise ValueError(f'Unknown error mode {error!r}, expected one of {_REPORT_MODES}.')
    if error == 'error':
        raise err
    if error == 'info':
        logger.info(str(err))
    elif error == 'warn':
        logger.warning(str(err))
    return False


def multiprod(A, B):
    # vectorized matrix - matrix multiplication
    return jnp.einsum('...ij,...jk', A, B)


def multiskew(A):
    return 0.5 * (A - jnp.einsum('...ij->...ji', A))


def shape_of(p):
    """Shape of the array p, or None if p is not (convertible to) a regular array."""
    try:
        return np.shape(p)
    except ValueError:
        return None
