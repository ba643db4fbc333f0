"""Subsampling operator builder."""

__all__ = ["get_subsampling_operator", "get_full_kspace"]

import xarray as xr
from numpy.typing import NDArray

from .._utils import is_tagged
from .._sigpy.linop import Linop

from ..acquisition import get_spatial_ndim, get_subsampling_indices
from ..acquisition._dims import KSPACE_TAGS
from ..base import Subsample
from ..gadgets import NamedDimsOp

from ._fourier import _require_kspace


def get_subsampling_operator(info) -> Linop | NamedDimsOp:
    """
    Build the k-space subsampling of an acquisition.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor with a subsampling pattern.

    Returns
    -------
    Linop | NamedDimsOp
        Operator from the full k-space grid to the measured samples.

    """
    ksp = _require_kspace(info)
    ntransform = len(info.subsampling)
    indexes, counts, duplicate_entries = get_subsampling_indices(
        info.subsampling, info.image_size
    )
    G = Subsample(
        indexes,
        info.image_size,
        counts,
        batch_shape=ksp.shape[ntransform:],
        duplicate_entries=duplicate_entries,
    )
    if not is_tagged(ksp):
        return G

    ndim = get_spatial_ndim(info)
    trailing = tuple(ksp.dims[ntransform:])
    return NamedDimsOp(G, KSPACE_TAGS[:ndim] + trailing, tuple(ksp.dims))


def get_full_kspace(info) -> NDArray[complex] | xr.DataArray:
    """
    Zero-fill the measured samples onto the full k-space grid.

    Returns the data unchanged when the acquisition is fully sampled.

    """
    ksp = _require_kspace(info)
    if info.subsampling is None:
        return ksp
    return get_subsampling_operator(info).H.apply(ksp)
