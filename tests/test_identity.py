"""Identity sentinel and the identity short-circuits of the public layer."""

import logging

import numpy as np
import pytest

from liegroups import (AdditionOperation, GeneralLinearGroup, Identity, IncompatibleIdentityError, InvalidElementError,
                       MatrixMultiplicationOperation, SpecialOrthogonalGroup, TranslationGroup)


def test_equality():
    G = SpecialOrthogonalGroup(3)
    assert Identity(G) == Identity(MatrixMultiplicationOperation())
    assert Identity(G) == Identity(GeneralLinearGroup(2))
    assert Identity(G) != Identity(AdditionOperation())
    assert hash(Identity(G)) == hash(Identity(G.op))
    assert len({Identity(G), Identity(G.op), Identity(TranslationGroup(3))}) == 2
    assert repr(Identity(G)) == 'Identity(MatrixMultiplicationOperation())'
    with pytest.raises(TypeError):
        Identity(np.eye(3))


def test_is_identity(so2, quarter_turn):
    assert so2.is_identity(Identity(so2))
    assert so2.is_identity(np.eye(2))
    assert not so2.is_identity(quarter_turn)
    # sentinels of other operations are not the identity
    assert not so2.is_identity(Identity(AdditionOperation()))


def test_is_point(so2, caplog):
    e = Identity(AdditionOperation())
    assert so2.is_point(Identity(so2))
    assert not so2.is_point(e)
    with pytest.raises(IncompatibleIdentityError):
        so2.is_point(e, error='error')
    with caplog.at_level(logging.WARNING, logger='liegroups'):
        assert not so2.is_point(e, error='warn')
    assert 'Identity(AdditionOperation())' in caplog.text
    with pytest.raises(ValueError):
        so2.is_point(e, error='raise')


def test_foreign_identity_is_rejected(so2, quarter_turn):
    e = Identity(AdditionOperation())
    out = np.full((2, 2), 3.)
    with pytest.raises(IncompatibleIdentityError):
        so2.compose(quarter_turn, e, out=out)
    with pytest.raises(IncompatibleIdentityError):
        so2.inverse(e)
    with pytest.raises(IncompatibleIdentityError):
        so2.adjoint(e, so2.hat(np.ones(1)))
    with pytest.raises(IncompatibleIdentityError):
        so2.compose(quarter_turn, quarter_turn, out=e)
    np.testing.assert_array_equal(out, np.full((2, 2), 3.))


def test_short_circuits(so2, quarter_turn):
    e = Identity(so2)
    g = quarter_turn
    assert so2.compose(e, g) is g
    assert so2.compose(g, e) is g
    assert so2.compose(e, e) is e
    assert so2.inverse(e) is e
    assert so2.conjugate(e, g) is g
    assert so2.conjugate(g, e) is e
    np.testing.assert_array_equal(so2.logarithm(e), np.zeros((2, 2)))
    np.testing.assert_array_equal(so2.log(e, e), np.zeros((2, 2)))


def test_materialization(so2, quarter_turn):
    e = Identity(so2)
    out = np.full((2, 2), 3.)
    so2.compose(e, e, out=out)
    np.testing.assert_array_equal(out, np.eye(2))
    so2.compose(e, quarter_turn, out=out)
    np.testing.assert_array_equal(out, quarter_turn)
    so2.inverse(e, out=out)
    np.testing.assert_array_equal(out, np.eye(2))
    so2.copyto(out, e)
    np.testing.assert_array_equal(out, np.eye(2))
    np.testing.assert_array_equal(so2.identity_element(), np.eye(2))


def test_identity_as_output(so2, quarter_turn):
    e = Identity(so2)
    assert so2.compose(quarter_turn, so2.inverse(quarter_turn), out=e) is e
    assert so2.copyto(e, np.eye(2)) is e
    with pytest.raises(InvalidElementError):
        so2.compose(quarter_turn, quarter_turn, out=e)
    with pytest.raises(InvalidElementError):
        so2.copyto(e, quarter_turn)


def test_isapprox(so2, quarter_turn):
    e = Identity(so2)
    assert so2.isapprox(e, np.eye(2))
    assert so2.isapprox(np.eye(2), e)
    assert so2.isapprox(e, e)
    assert not so2.isapprox(e, quarter_turn)


def test_isapprox_with_foreign_identity(so2):
    f = Identity(AdditionOperation())
    assert not so2.isapprox(Identity(so2), f)
    assert not so2.isapprox(f, np.eye(2))
    assert not so2.isapprox(np.eye(2), f)


def test_exponential_of_zero(so2):
    assert so2.is_identity(so2.exponential(so2.zero_vector()))
    assert so2.algebra.isapprox(so2.logarithm(np.eye(2)), so2.zero_vector())
