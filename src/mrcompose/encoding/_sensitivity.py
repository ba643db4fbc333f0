"""Sensitivity map operator builder."""

__all__ = ["get_sensitivity_map_operator"]

from .._utils import is_tagged, unwrap
from .._sigpy.linop import Linop

from ..acquisition import get_batch_shape, get_image_dims, get_spatial_ndim
from ..acquisition import get_transform_count
from ..acquisition._dims import IMAGE_TAGS
from ..base import Sensitivity
from ..gadgets import Batch, NamedDimsOp

from ._fourier import _require_kspace


def get_sensitivity_map_operator(info) -> Linop | NamedDimsOp:
    """
    Build the coil sensitivity weighting of an acquisition.

    The per-coil multiplication is broadcast over the batch axes with an
    explicit ``Batch`` loop. Multi-slice maps ``(nx, ny, ncoils, nz)``
    consume the slice axis themselves.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor with sensitivity maps.

    Returns
    -------
    Linop | NamedDimsOp
        Sensitivity operator from image to coil images.

    """
    ksp = _require_kspace(info)
    ndim = get_spatial_ndim(info)
    smaps = unwrap(info.sensitivity_maps)

    batch_shape = get_batch_shape(info)
    multislice = smaps.ndim == ndim + 2
    if multislice:
        batch_shape = batch_shape[1:]

    S = Batch(Sensitivity(smaps, ndim), batch_shape)
    if not is_tagged(ksp):
        return S

    coil_dims = tuple(ksp.dims[get_transform_count(info) :])
    return NamedDimsOp(S, get_image_dims(info), IMAGE_TAGS[:ndim] + coil_dims)
