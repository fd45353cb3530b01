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

class LieGroupError(Exception):
    """Base class of all errors raised by the liegroups library."""


class InvalidElementError(LieGroupError, ValueError):
    """An argument is not a valid point (or tangent vector) of the stated group or manifold."""


class DimensionMismatchError(InvalidElementError):
    """The shape of an argument disagrees with the declared index layout of a power manifold."""


class IncompatibleIdentityError(LieGroupError, ValueError):
    """An Identity was passed whose operation does not match the one of the group."""


class UnsupportedOperationError(LieGroupError, NotImplementedError):
    """A (raw) primitive is not available for the group operation at hand."""
