"""Coil sensitivity weighting."""

__all__ = ["Sensitivity", "CoilCombine"]

from numpy.typing import NDArray

from .._sigpy import get_device
from .._sigpy.linop import Linop, Multiply

from ._traits import OperatorKind


class Sensitivity(Linop):
    """
    Sensitivity map linear operator.

    Broadcasts a single image into a coil-stacked image by per-coil
    element-wise multiplication.

    Parameters
    ----------
    smaps : NDArray[complex]
        Sensitivity maps of shape ``(*spatial, ncoils, *extra)``, where
        ``extra`` is either empty or a single slice axis (2D multi-slice).
    spatial_ndim : int
        Number of spatial axes preceding the coil axis.

    """

    kind = OperatorKind.SENSITIVITY

    def __init__(self, smaps: NDArray[complex], spatial_ndim: int):
        self.smaps = smaps
        self.spatial_ndim = spatial_ndim
        oshape = list(smaps.shape)
        ishape = oshape[:spatial_ndim] + oshape[spatial_ndim + 1 :]
        super().__init__(oshape, ishape)

    @property
    def ncoils(self) -> int:
        return self.smaps.shape[self.spatial_ndim]

    def _apply(self, input):
        device = get_device(input)
        xp = device.xp
        with device:
            return xp.expand_dims(input, self.spatial_ndim) * self.smaps

    def _adjoint_linop(self):
        return CoilCombine(self.smaps, self.spatial_ndim)

    def _normal_linop(self):
        return Multiply(self.ishape, _sum_of_squares(self.smaps, self.spatial_ndim))


class CoilCombine(Linop):
    """
    Adjoint of the sensitivity weighting: ``sum_c conj(s_c) * y_c``.

    Parameters
    ----------
    smaps : NDArray[complex]
        Sensitivity maps of shape ``(*spatial, ncoils, *extra)``.
    spatial_ndim : int
        Number of spatial axes preceding the coil axis.

    """

    kind = OperatorKind.SENSITIVITY

    def __init__(self, smaps: NDArray[complex], spatial_ndim: int):
        self.smaps = smaps
        self.spatial_ndim = spatial_ndim
        ishape = list(smaps.shape)
        oshape = ishape[:spatial_ndim] + ishape[spatial_ndim + 1 :]
        super().__init__(oshape, ishape)

    def _apply(self, input):
        device = get_device(input)
        xp = device.xp
        with device:
            return xp.sum(self.smaps.conj() * input, axis=self.spatial_ndim)

    def _adjoint_linop(self):
        return Sensitivity(self.smaps, self.spatial_ndim)


def _sum_of_squares(smaps, coil_axis):
    xp = get_device(smaps).xp
    return xp.sum(xp.abs(smaps) ** 2, axis=coil_axis)
