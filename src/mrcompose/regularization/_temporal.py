"""Regularization terms coupling a temporal axis."""

__all__ = ["TemporalFourier", "LowRank", "RankLimit"]

import math
from dataclasses import dataclass

import numpy as np

from .._sigpy import get_device
from .._sigpy import linop, prox
from .._utils import get_thread_budget

from ..acquisition import dim_index, get_time_dim
from ..base import FFT

from ._base import Regularization
from ._prox import NuclearNorm, RankProjection, singular_values


@dataclass(frozen=True)
class TemporalFourier(Regularization):
    r"""
    Sparsity of the temporal spectrum :math:`\lambda \|F_t x\|_1`.

    ``F_t`` is the unnormalized DFT along the time axis. It is applied as
    an orthonormal transform, with the threshold scaled by ``sqrt(ntime)``.

    Parameters
    ----------
    lamda : float
        Regularization strength.
    time_dim : int | str | None, optional
        Temporal axis. The default is ``None`` (the ``"time"`` axis).

    """

    lamda: float
    time_dim: int | str | None = None

    is_unitary = True

    def _linop(self, shape, dims, threaded):
        axis = dim_index(get_time_dim(self.time_dim, dims), dims)
        return FFT(
            shape,
            axes=(axis,),
            norm="ortho",
            workers=get_thread_budget(threaded),
        )

    def _output_dims(self, dims):
        time_dim = get_time_dim(self.time_dim, dims)
        return tuple("frequency" if dim == time_dim else dim for dim in dims)

    def get_prox(self, op):
        return prox.L1Reg(op.oshape, self._threshold(op))

    def get_affected_dims(self, info, image_dims):
        return (get_time_dim(self.time_dim, image_dims),)

    def _penalty(self, value, op):
        return self._threshold(op) * get_device(value).xp.abs(value).sum()

    def _threshold(self, op):
        while not isinstance(op, FFT):
            op = op.linop
        return self.lamda * math.sqrt(op.npoints)


class _CasoratiTerm(Regularization):
    """Term acting on the Casorati matrix ``(space, time, ...)`` of the image."""

    is_unitary = True

    def _time_axis(self, dims):
        return dim_index(get_time_dim(self.time_dim, dims), dims)

    def _linop(self, shape, dims, threaded):
        axis = self._time_axis(dims)
        oshape = [math.prod(shape[:axis]), shape[axis]] + list(shape[axis + 1 :])
        return linop.Reshape(oshape, shape)

    def _output_dims(self, dims):
        return ("space",) + tuple(dims[self._time_axis(dims) :])

    def get_affected_dims(self, info, image_dims):
        return tuple(image_dims[: self._time_axis(image_dims) + 1])


@dataclass(frozen=True)
class LowRank(_CasoratiTerm):
    r"""
    Nuclear norm of the Casorati matrix :math:`\lambda \|C(x)\|_*`.

    The Casorati matrix stacks every axis before the temporal one into rows
    and the temporal axis into columns; later axes index separate matrices.

    Parameters
    ----------
    lamda : float
        Regularization strength.
    time_dim : int | str | None, optional
        Temporal axis. The default is ``None`` (the ``"time"`` axis).

    """

    lamda: float
    time_dim: int | str | None = None

    def get_prox(self, op):
        return NuclearNorm(op.oshape, self.lamda)

    def _penalty(self, value, op):
        return self.lamda * singular_values(value).sum()


@dataclass(frozen=True)
class RankLimit(_CasoratiTerm):
    """
    Hard rank constraint on the Casorati matrix.

    Parameters
    ----------
    max_rank : int
        Maximum rank.
    time_dim : int | str | None, optional
        Temporal axis. The default is ``None`` (the ``"time"`` axis).

    """

    max_rank: int
    time_dim: int | str | None = None

    def get_prox(self, op):
        return RankProjection(op.oshape, self.max_rank)

    def _penalty(self, value, op):
        s = singular_values(value)
        if s.size == 0:
            return 0.0
        xp = get_device(s).xp
        tol = s[..., :1] * max(value.shape[:2]) * np.finfo(s.dtype).eps
        return math.inf if bool(xp.any(s[..., self.max_rank :] > tol)) else 0.0
