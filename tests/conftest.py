"""
Pytest configuration and fixtures
"""

import numpy as np
import pytest

import jax

from liegroups import (GeneralLinearGroup, PowerLieGroup, SpecialEuclideanGroup, SpecialOrthogonalGroup,
                       TranslationGroup)

GROUPS = [
    TranslationGroup(3),
    TranslationGroup(2, 2),
    GeneralLinearGroup(3),
    SpecialOrthogonalGroup(2),
    SpecialOrthogonalGroup(3),
    SpecialOrthogonalGroup(4),
    SpecialEuclideanGroup(2),
    SpecialEuclideanGroup(3),
    SpecialOrthogonalGroup(2) ** 3,
    PowerLieGroup(SpecialOrthogonalGroup(3), 2, 2, representation='nested'),
    (SpecialEuclideanGroup(3) ** 2) ** 2,
]


@pytest.fixture
def key():
    """Reproducible PRNG key."""
    return jax.random.PRNGKey(42)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture(params=GROUPS, ids=str)
def group(request):
    return request.param


@pytest.fixture
def points(group, key):
    """Three random points of group."""
    return [group.rand(k) for k in jax.random.split(key, 3)]


@pytest.fixture
def small_vector(group, rng):
    """A tangent vector close to zero, such that exponential and logarithm are mutually inverse."""
    return group.hat(0.3 * rng.uniform(-1., 1., group.dim))


@pytest.fixture
def so2():
    return SpecialOrthogonalGroup(2)


@pytest.fixture
def quarter_turn():
    return np.array([[0., -1.], [1., 0.]])
