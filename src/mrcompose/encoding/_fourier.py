"""Fourier operator builder."""

__all__ = ["get_fourier_operator"]

from .._errors import OperatorConstructionError
from .._utils import is_tagged
from .._sigpy.linop import Linop

from ..acquisition import get_spatial_ndim, get_transform_count
from ..acquisition._dims import IMAGE_TAGS, KSPACE_TAGS
from ..base import FFT
from ..gadgets import NamedDimsOp


def get_fourier_operator(info, num_threads: int = 1) -> Linop | NamedDimsOp:
    """
    Build the Fourier transform of an acquisition.

    The transform acts on the leading 2 (or 3) axes of the fully sampled
    grid ``image_size + kspace_data.shape[ntransform:]``; trailing axes
    (coil, batch) are left untouched. Frequency axes not listed in
    ``info.shifted_kspace_dims`` are fftshifted, image axes listed in
    ``info.shifted_image_dims`` are ifftshifted; both shifts are fused
    with the transform.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor.
    num_threads : int, optional
        Thread budget of the transform. The default is ``1``.

    Returns
    -------
    Linop | NamedDimsOp
        Fourier operator (tagged if the k-space data is).

    """
    ksp = _require_kspace(info)
    ndim = get_spatial_ndim(info)
    ntransform = get_transform_count(info)
    shape = tuple(info.image_size) + tuple(ksp.shape[ntransform:])

    oshift = tuple(ax for ax in range(ndim) if ax not in info.shifted_kspace_dims)
    F = FFT(
        shape,
        axes=tuple(range(ndim)),
        ishift=info.shifted_image_dims,
        oshift=oshift,
        workers=num_threads,
    )
    if not is_tagged(ksp):
        return F

    trailing = tuple(ksp.dims[ntransform:])
    return NamedDimsOp(F, IMAGE_TAGS[:ndim] + trailing, KSPACE_TAGS[:ndim] + trailing)


def _require_kspace(info):
    if info.kspace_data is None:
        raise OperatorConstructionError(
            "kspace_data is required to build encoding operators"
        )
    return info.kspace_data
