"""Operator kinds and their algebraic traits."""

__all__ = ["OperatorKind", "Traits", "TRAITS", "get_kind", "get_traits"]

import enum
from dataclasses import dataclass

import numpy as np

from .._sigpy import linop


class OperatorKind(enum.Enum):
    """Closed set of operator kinds known to the encoding algebra."""

    IDENTITY = "identity"
    SCALED = "scaled"
    FOURIER = "fourier"
    SENSITIVITY = "sensitivity"
    SUBSAMPLING = "subsampling"
    BATCH = "batch"
    TAGGED = "tagged"
    COMPOSED = "composed"
    OTHER = "other"


@dataclass(frozen=True)
class Traits:
    """
    Algebraic properties of an operator.

    Attributes
    ----------
    is_linear : bool
        Operator is linear.
    is_diagonal : bool
        Operator acts element-wise (possibly broadcasting over coils).
    is_orthogonal : bool
        Operator is a multiple of a unitary map (``A^H A = c I``).
    has_fast_adjoint : bool
        Adjoint is available in closed form at the cost of the forward.
    is_thread_safe : bool
        Operator holds no mutable state during application.

    """

    is_linear: bool = True
    is_diagonal: bool = False
    is_orthogonal: bool = False
    has_fast_adjoint: bool = True
    is_thread_safe: bool = True

    def __and__(self, other):
        return Traits(
            self.is_linear and other.is_linear,
            self.is_diagonal and other.is_diagonal,
            self.is_orthogonal and other.is_orthogonal,
            self.has_fast_adjoint and other.has_fast_adjoint,
            self.is_thread_safe and other.is_thread_safe,
        )


TRAITS = {
    OperatorKind.IDENTITY: Traits(is_diagonal=True, is_orthogonal=True),
    OperatorKind.SCALED: Traits(is_diagonal=True, is_orthogonal=True),
    OperatorKind.FOURIER: Traits(is_orthogonal=True),
    OperatorKind.SENSITIVITY: Traits(is_diagonal=True),
    OperatorKind.SUBSAMPLING: Traits(),
    OperatorKind.OTHER: Traits(has_fast_adjoint=False, is_thread_safe=False),
}


def get_kind(op: linop.Linop) -> OperatorKind:
    """Classify a Linop into one of the known kinds."""
    kind = getattr(op, "kind", None)
    if kind is not None:
        return kind
    if isinstance(op, linop.Identity):
        return OperatorKind.IDENTITY
    if isinstance(op, linop.Compose):
        return OperatorKind.COMPOSED
    if isinstance(op, linop.Multiply) and np.isscalar(op.mult):
        return OperatorKind.SCALED
    return OperatorKind.OTHER


def get_traits(op: linop.Linop) -> Traits:
    """
    Look up the traits of a Linop.

    Composite operators combine the traits of their factors;
    wrappers forward to the operator they wrap.

    """
    kind = get_kind(op)
    if kind == OperatorKind.COMPOSED:
        traits = TRAITS[OperatorKind.IDENTITY]
        for factor in op.linops:
            traits = traits & get_traits(factor)
        return traits
    if kind in (OperatorKind.BATCH, OperatorKind.TAGGED):
        return get_traits(op.linop)
    return TRAITS[kind]
