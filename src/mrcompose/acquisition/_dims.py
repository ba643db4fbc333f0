"""Dimension bookkeeping for acquisition descriptors."""

__all__ = [
    "get_spatial_ndim",
    "get_transform_count",
    "get_kspace_dims",
    "get_fourier_kspace_dims",
    "get_fourier_image_dims",
    "get_coil_dim",
    "get_nonfourier_kspace_dims",
    "get_image_dims",
    "get_image_size",
    "get_batch_shape",
    "get_time_dim",
    "dim_index",
    "KSPACE_TAGS",
    "IMAGE_TAGS",
    "COIL_TAG",
    "SLICE_TAG",
    "TIME_TAG",
]

from .._errors import ConfigurationError
from .._utils import is_tagged

KSPACE_TAGS = ("kx", "ky", "kz")
IMAGE_TAGS = ("x", "y", "z")
COIL_TAG = "coil"
SLICE_TAG = "z"
TIME_TAG = "time"


def get_spatial_ndim(info) -> int:
    return 3 if info.is_3d else 2


def get_transform_count(info) -> int:
    """Number of leading k-space axes touched by the transform."""
    if info.subsampling is not None:
        return len(info.subsampling)
    return get_spatial_ndim(info)


def get_kspace_dims(info) -> tuple:
    """Axis tags of the k-space data (axis positions if untagged)."""
    ksp = info.kspace_data
    if is_tagged(ksp):
        return tuple(ksp.dims)
    return tuple(range(ksp.ndim))


def get_fourier_kspace_dims(info) -> tuple:
    """Frequency axes of the fully sampled k-space."""
    ndim = get_spatial_ndim(info)
    if is_tagged(info.kspace_data):
        return KSPACE_TAGS[:ndim]
    return tuple(range(ndim))


def get_fourier_image_dims(info) -> tuple:
    """Spatial axes of the image."""
    ndim = get_spatial_ndim(info)
    if is_tagged(info.kspace_data):
        return IMAGE_TAGS[:ndim]
    return tuple(range(ndim))


def get_coil_dim(info):
    """Coil axis of the k-space data, or ``None`` without sensitivity maps."""
    if info.sensitivity_maps is None:
        return None
    return get_kspace_dims(info)[get_transform_count(info)]


def get_nonfourier_kspace_dims(info) -> tuple:
    """K-space axes beyond the transform and coil axes."""
    start = get_transform_count(info)
    if info.sensitivity_maps is not None:
        start += 1
    return get_kspace_dims(info)[start:]


def get_image_dims(info) -> tuple:
    """
    Axis tags of the reconstructed image.

    Spatial axes followed by the non-Fourier k-space axes, in their
    original order. Untagged data yields axis positions.

    """
    spatial = get_fourier_image_dims(info)
    batch = get_nonfourier_kspace_dims(info)
    if is_tagged(info.kspace_data):
        return spatial + batch
    return tuple(range(len(spatial) + len(batch)))


def get_batch_shape(info) -> tuple[int, ...]:
    """Shape of the image axes beyond the spatial ones."""
    start = get_transform_count(info)
    if info.sensitivity_maps is not None:
        start += 1
    return tuple(info.kspace_data.shape[start:])


def get_image_size(info) -> tuple[int, ...]:
    """Full image shape (spatial size plus batch axes)."""
    if info.kspace_data is None:
        return tuple(info.image_size)
    return tuple(info.image_size) + get_batch_shape(info)


def get_time_dim(time_dim, image_dims):
    """
    Resolve the temporal axis of an image.

    Parameters
    ----------
    time_dim : int | str | None
        Axis position or tag. ``None`` selects the ``"time"`` tag.
    image_dims : tuple
        Image axis tags (or positions).

    Returns
    -------
    int | str
        Temporal axis, as given or as the ``"time"`` tag.

    """
    if time_dim is None:
        if TIME_TAG not in image_dims:
            raise ConfigurationError(
                f"time_dim not given and no '{TIME_TAG}' axis among image dims {tuple(image_dims)}"
            )
        return TIME_TAG
    if isinstance(time_dim, str):
        if time_dim not in image_dims:
            raise ConfigurationError(
                f"time_dim '{time_dim}' not among image dims {tuple(image_dims)}"
            )
        return time_dim
    if not 0 <= time_dim < len(image_dims):
        raise ConfigurationError(
            f"time_dim {time_dim} out of range for {len(image_dims)} image dims"
        )
    return int(time_dim)


def dim_index(dim, dims) -> int:
    """Position of an axis given by tag or position."""
    if isinstance(dim, str):
        dims = tuple(dims)
        if dim not in dims:
            raise ConfigurationError(f"axis '{dim}' not among {dims}")
        return dims.index(dim)
    return int(dim)
