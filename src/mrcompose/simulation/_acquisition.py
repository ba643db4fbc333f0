"""Simulated acquisitions."""

__all__ = ["simulate_acquisition"]

import numpy as np
import xarray as xr
from numpy.typing import NDArray

from .._utils import get_array_module, is_tagged, unwrap

from ..acquisition import AcquisitionInfo, COIL_TAG, IMAGE_TAGS, KSPACE_TAGS, SLICE_TAG
from ..acquisition import get_subsampled_dim_names, get_subsampling_indices
from ..acquisition import normalize_subsampling
from ..encoding import get_encoding_operator


def simulate_acquisition(
    image: NDArray[complex] | xr.DataArray,
    sensitivity_maps: NDArray[complex] | xr.DataArray | None = None,
    subsampling=None,
    is_3d: bool = False,
    shifted_kspace_dims: tuple = (),
    shifted_image_dims: tuple = (),
) -> AcquisitionInfo:
    """
    Simulate the k-space data of an image.

    The forward model ``E = G * F * S`` of the described acquisition is
    applied to ``image`` and the result is stored as the k-space data of
    the returned descriptor.

    Parameters
    ----------
    image : NDArray[complex] | xr.DataArray
        Ground truth, shaped ``(x, y[, z], *batch)``. For a tagged image,
        the batch tags are carried to the k-space data.
    sensitivity_maps : NDArray[complex] | xr.DataArray | None, optional
        Coil maps (see ``AcquisitionInfo``). Untagged maps next to a tagged
        image receive the canonical axis tags. The default is ``None``.
    subsampling : object, optional
        Subsampling pattern. The default is ``None`` (fully sampled).
    is_3d : bool, optional
        3D encoding. The default is ``False``.
    shifted_kspace_dims : tuple, optional
        Frequency axes whose zero frequency sits at index 0.
    shifted_image_dims : tuple, optional
        Image axes requiring an fftshift.

    Returns
    -------
    AcquisitionInfo
        Acquisition descriptor holding the simulated k-space data.

    Examples
    --------
    >>> import numpy as np
    >>> from mrcompose.simulation import coil_sensitivities, simulate_acquisition
    >>> image = np.ones((32, 32), dtype=np.complex64)
    >>> info = simulate_acquisition(image, coil_sensitivities((32, 32), 4))
    >>> info.kspace_data.shape
    (32, 32, 4)

    """
    ndim = 3 if is_3d else 2
    if image.ndim < ndim:
        raise ValueError(
            f"image must have at least {ndim} axes, got shape {tuple(image.shape)}"
        )
    image_size = tuple(image.shape[:ndim])
    batch_shape = tuple(image.shape[ndim:])

    pattern = normalize_subsampling(subsampling)
    if pattern is None:
        counts = image_size
        kspace_tags = KSPACE_TAGS[:ndim]
    else:
        _, counts, _ = get_subsampling_indices(pattern, image_size)
        kspace_tags = get_subsampled_dim_names(pattern, ndim)

    coil_shape, coil_tags = (), ()
    dtype = np.complex128
    if sensitivity_maps is not None:
        ncoils = sensitivity_maps.shape[ndim]
        coil_shape, coil_tags = (ncoils,), (COIL_TAG,)
        dtype = sensitivity_maps.dtype

    xp = get_array_module(unwrap(image))
    placeholder = xp.zeros(tuple(counts) + coil_shape + batch_shape, dtype=dtype)
    if is_tagged(image):
        dims = tuple(kspace_tags) + coil_tags + tuple(image.dims[ndim:])
        placeholder = xr.DataArray(placeholder, dims=dims)
        if sensitivity_maps is not None and not is_tagged(sensitivity_maps):
            sensitivity_maps = xr.DataArray(
                sensitivity_maps, dims=_map_tags(ndim, sensitivity_maps.ndim)
            )

    info = AcquisitionInfo(
        kspace_data=placeholder,
        is_3d=is_3d,
        image_size=image_size,
        sensitivity_maps=sensitivity_maps,
        subsampling=subsampling,
        shifted_kspace_dims=shifted_kspace_dims,
        shifted_image_dims=shifted_image_dims,
    )

    E = get_encoding_operator(info)
    ksp = E.apply(image.astype(dtype, copy=False))
    return info.replace(kspace_data=ksp)


# %% utils
def _map_tags(ndim, map_ndim):
    if ndim == 2 and map_ndim == 4:
        return IMAGE_TAGS[:2] + (COIL_TAG, SLICE_TAG)
    return IMAGE_TAGS[:ndim] + (COIL_TAG,)
