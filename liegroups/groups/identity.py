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

from liegroups.groups.operation import GroupOperation


class Identity:
    """
    Identity element of a Lie group without a numeric representation.

        e = Identity(G)   # or Identity(G.op)

    The sentinel only knows the operation tag of its group. Two sentinels are equal iff their tags are equal. Groups
    accept it wherever a point is expected and resolve it before any numerical work.
    """

    __slots__ = ('_op',)

    def __init__(self, op):
        if not isinstance(op, GroupOperation):
            op = getattr(op, 'op', None)
        if not isinstance(op, GroupOperation):
            raise TypeError('Identity requires a group operation or a Lie group.')
        self._op = op

    @property
    def op(self) -> GroupOperation:
        return self._op

    def __eq__(self, other):
        if not isinstance(other, Identity):
            return NotImplemented
        return self._op == other._op

    def __hash__(self):
        return hash((Identity, self._op))

    def __repr__(self):
        return f'Identity({self._op!r})'
