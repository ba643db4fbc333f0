"""Spatial regularization terms."""

__all__ = [
    "Tikhonov",
    "L1Image",
    "L1Wavelet2D",
    "L1Wavelet3D",
    "TotalVariation2D",
    "TotalVariation3D",
]

from dataclasses import dataclass

from .._sigpy import get_device
from .._sigpy import linop, prox

from ._base import Regularization
from ._prox import IsotropicL1


@dataclass(frozen=True)
class Tikhonov(Regularization):
    r"""
    Tikhonov regularization :math:`\lambda^2 \|x\|_2^2`.

    Parameters
    ----------
    lamda : float
        Regularization strength.

    """

    lamda: float

    is_quadratic = True
    is_unitary = True

    @property
    def damp(self) -> float:
        """Damping of the normal equations."""
        return 2 * self.lamda**2

    def _linop(self, shape, dims, threaded):
        return linop.Identity(shape)

    def get_prox(self, op):
        return prox.L2Reg(op.oshape, self.damp)

    def get_affected_dims(self, info, image_dims):
        return ()

    def _penalty(self, value, op):
        xp = get_device(value).xp
        return self.lamda**2 * xp.sum(xp.abs(value) ** 2)


@dataclass(frozen=True)
class L1Image(Regularization):
    r"""
    Image-domain sparsity :math:`\lambda \|x\|_1`.

    Parameters
    ----------
    lamda : float
        Regularization strength.

    """

    lamda: float

    is_unitary = True

    def _linop(self, shape, dims, threaded):
        return linop.Identity(shape)

    def get_prox(self, op):
        return prox.L1Reg(op.oshape, self.lamda)

    def get_affected_dims(self, info, image_dims):
        return ()

    def _penalty(self, value, op):
        return self.lamda * get_device(value).xp.abs(value).sum()


@dataclass(frozen=True)
class L1Wavelet2D(Regularization):
    r"""
    Wavelet sparsity over the two in-plane axes :math:`\lambda \|W x\|_1`.

    Parameters
    ----------
    lamda : float
        Regularization strength.
    wavelet : str, optional
        Wavelet name. The default is ``"db2"``.
    levels : int | None, optional
        Decomposition levels. The default is ``2``.

    """

    lamda: float
    wavelet: str = "db2"
    levels: int | None = 2

    is_unitary = True
    naxes = 2

    def _linop(self, shape, dims, threaded):
        return linop.Wavelet(
            shape,
            axes=tuple(range(self.naxes)),
            wave_name=self.wavelet,
            level=self.levels,
        )

    def _output_dims(self, dims):
        dims = tuple(dims)
        return tuple(f"w{dim}" for dim in dims[: self.naxes]) + dims[self.naxes :]

    def get_prox(self, op):
        return prox.L1Reg(op.oshape, self.lamda)

    def get_affected_dims(self, info, image_dims):
        return tuple(image_dims[: self.naxes])

    def _penalty(self, value, op):
        return self.lamda * get_device(value).xp.abs(value).sum()


@dataclass(frozen=True)
class L1Wavelet3D(L1Wavelet2D):
    """Wavelet sparsity over the three spatial axes."""

    naxes = 3


@dataclass(frozen=True)
class TotalVariation2D(Regularization):
    r"""
    Isotropic total variation over the two in-plane axes.

    .. math::
        \lambda \sum_v \sqrt{\sum_d |(D_d x)_v|^2}

    Parameters
    ----------
    lamda : float
        Regularization strength.

    """

    lamda: float

    naxes = 2

    def _linop(self, shape, dims, threaded):
        return linop.FiniteDifference(shape, axes=tuple(range(self.naxes)))

    def _output_dims(self, dims):
        return ("direction",) + tuple(dims)

    def get_prox(self, op):
        return IsotropicL1(op.oshape, self.lamda)

    def get_affected_dims(self, info, image_dims):
        return tuple(image_dims[: self.naxes])

    def _penalty(self, value, op):
        xp = get_device(value).xp
        return self.lamda * xp.sqrt(xp.sum(xp.abs(value) ** 2, axis=0)).sum()


@dataclass(frozen=True)
class TotalVariation3D(TotalVariation2D):
    """Isotropic total variation over the three spatial axes."""

    naxes = 3
