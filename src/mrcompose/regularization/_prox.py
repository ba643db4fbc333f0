"""Proximal operators missing from sigpy."""

__all__ = ["IsotropicL1", "NuclearNorm", "RankProjection"]

import numpy as np

from .._sigpy import get_device
from .._sigpy.prox import Prox


class IsotropicL1(Prox):
    r"""
    Proximal operator of the mixed L2-L1 norm over the leading axis.

    .. math::
        \min_x \frac{1}{2} \|x - u\|_2^2 + \lambda \sum_v \|u[:, v]\|_2

    Used for isotropic total variation, where the leading axis indexes
    finite-difference directions.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Input shape ``(ndirections, ...)``.
    lamda : float
        Threshold.

    """

    def __init__(self, shape, lamda):
        self.lamda = lamda
        super().__init__(shape)

    def _prox(self, alpha, input):
        xp = get_device(input).xp
        norm = xp.sqrt(xp.sum(xp.abs(input) ** 2, axis=0, keepdims=True))
        shrunk = xp.maximum(norm - alpha * self.lamda, 0)
        return input * (shrunk / xp.maximum(norm, np.finfo(norm.dtype).tiny))


class NuclearNorm(Prox):
    r"""
    Singular value soft thresholding of Casorati matrices.

    The input ``(nspace, ntime, ...)`` is treated as a stack of
    ``nspace x ntime`` matrices over the trailing axes.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Input shape.
    lamda : float
        Threshold.

    """

    def __init__(self, shape, lamda):
        self.lamda = lamda
        super().__init__(shape)

    def _prox(self, alpha, input):
        return _svd_apply(input, lambda s: _soft(s, alpha * self.lamda))


class RankProjection(Prox):
    """
    Projection of Casorati matrices onto matrices of rank at most ``max_rank``.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Input shape ``(nspace, ntime, ...)``.
    max_rank : int
        Rank bound.

    """

    def __init__(self, shape, max_rank):
        self.max_rank = max_rank
        super().__init__(shape)

    def _prox(self, alpha, input):
        return _svd_apply(input, self._truncate)

    def _truncate(self, s):
        s = s.copy()
        s[..., self.max_rank :] = 0
        return s


# %% utils
def _soft(s, threshold):
    xp = get_device(s).xp
    return xp.maximum(s - threshold, 0)


def _svd_apply(input, func):
    xp = get_device(input).xp
    nspace, ntime = input.shape[:2]
    matrices = xp.moveaxis(input.reshape(nspace, ntime, -1), -1, 0)
    u, s, vh = xp.linalg.svd(matrices, full_matrices=False)
    s = func(s).astype(u.dtype)
    output = (u * s[..., None, :]) @ vh
    return xp.moveaxis(output, 0, -1).reshape(input.shape)


def singular_values(input):
    """Singular values of the Casorati matrices of ``input``."""
    xp = get_device(input).xp
    nspace, ntime = input.shape[:2]
    matrices = xp.moveaxis(input.reshape(nspace, ntime, -1), -1, 0)
    return xp.linalg.svd(matrices, compute_uv=False)
