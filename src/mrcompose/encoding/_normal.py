"""Normal operator of encoding operators."""

__all__ = ["get_normal_operator"]

from .._sigpy.linop import Compose, Identity, Linop

from ..base import OperatorKind, get_kind, get_traits
from ..gadgets import Batch, NamedDimsOp

from ._opnorm import _closed_form_norm


def get_normal_operator(op: Linop, optimize: bool = True) -> Linop:
    """
    Build ``op^H op``.

    With ``optimize``, scalar factors are pulled out and leading factors
    that are multiples of a unitary map (e.g. the fully sampled Fourier
    transform) collapse to a constant, so that ``(F S)^H (F S)`` becomes
    ``n * S^H S``, a single voxel-wise multiplication. Without it, the
    normal operator applies ``op`` and then its adjoint.

    Parameters
    ----------
    op : Linop
        Encoding operator (possibly batched or tagged).
    optimize : bool, optional
        Simplify the product. The default is ``True``.

    Returns
    -------
    Linop
        Normal operator on ``op.ishape``.

    """
    if not optimize:
        return op.H * op
    return _normal(op)


# %% utils
def _normal(op):
    kind = get_kind(op)
    if kind == OperatorKind.TAGGED:
        return NamedDimsOp(_normal(op.linop), op.idims, op.idims)
    if kind == OperatorKind.BATCH:
        return Batch(_normal(op.linop), op.batch_shape)
    if kind != OperatorKind.COMPOSED:
        return op.N

    weight = 1.0
    factors = []
    for factor in op.linops:
        if get_kind(factor) == OperatorKind.SCALED:
            weight *= abs(factor.mult) ** 2
        else:
            factors.append(factor)

    # outermost factors with A^H A = c I
    while factors and get_traits(factors[0]).is_orthogonal:
        value = _closed_form_norm(factors[0])
        if value is None:
            break
        weight *= value**2
        factors.pop(0)

    if not factors:
        normal = Identity(op.ishape)
    elif len(factors) == 1:
        normal = _normal(factors[0])
    else:
        normal = Compose(factors).N
    if weight == 1.0:
        return normal
    return weight * normal
