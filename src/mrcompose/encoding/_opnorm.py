"""Operator norm and normalization."""

__all__ = ["operator_norm", "normalize_operator"]

import math
import warnings

import numpy as np

from .._sigpy import get_device
from .._sigpy.app import MaxEig
from .._sigpy.linop import Linop

from ..base import OperatorKind, get_kind, get_traits

ESTIMATE_POWER_ITER = 30
EXACT_POWER_ITER = 300


def operator_norm(op: Linop, exact: bool = False, dtype=np.complex128) -> float:
    """
    Spectral norm of a linear operator.

    Closed forms are used for identity, scaled identity, Fourier,
    sensitivity and subsampling operators, and for compositions where all
    factors but one are orthogonal. Anything else falls back to power
    iteration on the normal operator.

    Parameters
    ----------
    op : Linop
        Linear operator.
    exact : bool, optional
        Run the power iteration to convergence instead of a quick estimate.
        The default is ``False``.
    dtype : optional
        Data type of the power iteration. The default is ``np.complex128``.

    Returns
    -------
    float
        Operator norm.

    """
    value = _closed_form_norm(op)
    if value is not None:
        return value
    max_iter = EXACT_POWER_ITER if exact else ESTIMATE_POWER_ITER
    max_eig = MaxEig(op.N, dtype=dtype, max_iter=max_iter, show_pbar=False).run()
    return math.sqrt(abs(float(max_eig)))


def normalize_operator(
    op: Linop, exact: bool = False, dtype=np.complex128
) -> tuple[Linop, float]:
    """
    Scale an operator to unit norm.

    Returns
    -------
    Linop
        ``op / L``, or ``op`` itself if the norm vanishes.
    float
        Norm ``L`` (``1.0`` if it vanishes).

    """
    L = operator_norm(op, exact, dtype)
    if L == 0 or not math.isfinite(L):
        warnings.warn(
            f"operator norm is {L}; skipping operator normalization", RuntimeWarning
        )
        return op, 1.0
    return (1.0 / L) * op, L


# %% utils
def _closed_form_norm(op):
    kind = get_kind(op)
    if kind in (OperatorKind.BATCH, OperatorKind.TAGGED):
        return _closed_form_norm(op.linop)
    if kind == OperatorKind.IDENTITY:
        return 1.0
    if kind == OperatorKind.SCALED:
        return float(abs(op.mult))
    if kind == OperatorKind.FOURIER:
        return float(op.norm_factor)
    if kind == OperatorKind.SENSITIVITY:
        xp = get_device(op.smaps).xp
        energy = xp.sum(xp.abs(op.smaps) ** 2, axis=op.spatial_ndim)
        return math.sqrt(float(energy.max())) if energy.size else 0.0
    if kind == OperatorKind.SUBSAMPLING:
        if op.duplicate_entries:
            return None
        return 1.0 if math.prod(op.counts) > 0 else 0.0
    if kind == OperatorKind.COMPOSED:
        loose = [f for f in op.linops if not get_traits(f).is_orthogonal]
        if len(loose) > 1:
            return None
        norm = 1.0
        for factor in op.linops:
            value = _closed_form_norm(factor)
            if value is None:
                return None
            norm *= value
        return norm
    return None
