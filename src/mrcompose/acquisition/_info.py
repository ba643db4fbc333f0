"""Acquisition descriptor."""

__all__ = ["AcquisitionInfo"]

import dataclasses
from dataclasses import dataclass

import numpy as np
import xarray as xr
from numpy.typing import NDArray

from .._errors import ConfigurationError, OperatorConstructionError
from .._utils import ensure_tuple, is_tagged, unwrap

from ._dims import COIL_TAG, IMAGE_TAGS, KSPACE_TAGS, SLICE_TAG
from ._subsampling import (
    get_image_size_from_subsampling,
    get_subsampled_dim_names,
    get_subsampling_indices,
    normalize_subsampling,
)

_3D_KSPACE_TAGS = ("kz", "kyz", "kxyz")


@dataclass(frozen=True, eq=False, repr=False)
class AcquisitionInfo:
    """
    Validated description of an MRI acquisition.

    All cross-field checks run at construction; an inconsistent combination
    raises ``ConfigurationError`` naming the violated rule and the
    conflicting values. Instances are immutable: use ``replace`` to derive
    a modified copy.

    Parameters
    ----------
    kspace_data : NDArray[complex] | xr.DataArray | None, optional
        Measured samples, shaped ``(*transform, [coil], *batch)``. Tagged
        arrays must start with the canonical frequency tags (``kx``, ``ky``,
        ``kz``, or the subsampled tags, e.g. ``kxy``), followed by ``coil``
        when sensitivity maps are given.
    is_3d : bool | None, optional
        3D encoding. Inferred from ``image_size``, from the k-space tags or
        from 3-axis sensitivity maps when omitted.
    image_size : list[int] | tuple[int] | None, optional
        Spatial image size. Inferred from the fully sampled data, from the
        subsampling pattern or from the sensitivity maps when omitted.
    sensitivity_maps : NDArray[complex] | xr.DataArray | None, optional
        Coil maps shaped ``(x, y, coil)``, ``(x, y, z, coil)`` (3D) or
        ``(x, y, coil, z)`` (2D multi-slice).
    subsampling : object, optional
        Subsampling pattern (see ``normalize_subsampling``).
        The default is ``None`` (fully sampled).
    shifted_kspace_dims : int | str | tuple, optional
        Frequency axes whose zero frequency sits at index 0.
    shifted_image_dims : int | str | tuple, optional
        Image axes requiring an fftshift.

    """

    kspace_data: NDArray[complex] | xr.DataArray | None = None
    is_3d: bool | None = None
    image_size: tuple[int, ...] | None = None
    sensitivity_maps: NDArray[complex] | xr.DataArray | None = None
    subsampling: object = None
    shifted_kspace_dims: tuple = ()
    shifted_image_dims: tuple = ()

    def __post_init__(self):
        ksp = _as_array(self.kspace_data)
        smaps = _as_array(self.sensitivity_maps)
        subsampling = normalize_subsampling(self.subsampling)
        image_size = _as_size(self.image_size)

        # image size implied by the pattern
        if subsampling is not None:
            guessed = get_image_size_from_subsampling(
                subsampling, None if ksp is None else ksp.shape
            )
            if image_size is None:
                if guessed is None and ksp is not None:
                    raise ConfigurationError(
                        "image_size cannot be inferred from the subsampling pattern "
                        f"{_describe_subsampling(subsampling)}; pass image_size explicitly"
                    )
                image_size = guessed
            elif guessed is not None and guessed != image_size:
                raise ConfigurationError(
                    f"image_size {image_size} does not match size {guessed} "
                    "implied by the subsampling pattern"
                )

        is_3d = self._resolve_is_3d(ksp, smaps, image_size)
        ndim = 3 if is_3d else 2

        if image_size is None:
            image_size = self._fallback_image_size(ksp, smaps, subsampling, ndim)
        elif ksp is not None and subsampling is None:
            if tuple(ksp.shape[:ndim]) != image_size:
                raise ConfigurationError(
                    f"image_size {image_size} does not match the k-space "
                    f"grid {tuple(ksp.shape[:ndim])}"
                )

        if ksp is not None:
            _check_kspace(ksp, smaps, subsampling, image_size, ndim)
        elif subsampling is not None:
            # validates the pattern against the grid
            get_subsampling_indices(subsampling, image_size)
        if smaps is not None:
            _check_sensitivity_maps(smaps, ksp, subsampling, image_size, ndim)

        shifted_kspace_dims = _normalize_shifted_dims(
            self.shifted_kspace_dims, ndim, KSPACE_TAGS, "shifted_kspace_dims"
        )
        shifted_image_dims = _normalize_shifted_dims(
            self.shifted_image_dims, ndim, IMAGE_TAGS, "shifted_image_dims"
        )

        object.__setattr__(self, "kspace_data", ksp)
        object.__setattr__(self, "sensitivity_maps", smaps)
        object.__setattr__(self, "subsampling", subsampling)
        object.__setattr__(self, "image_size", image_size)
        object.__setattr__(self, "is_3d", is_3d)
        object.__setattr__(self, "shifted_kspace_dims", shifted_kspace_dims)
        object.__setattr__(self, "shifted_image_dims", shifted_image_dims)

    def replace(self, **changes) -> "AcquisitionInfo":
        """
        Copy the descriptor, overriding the given fields.

        The copy is validated again.

        """
        known = {field.name for field in dataclasses.fields(self)}
        for key in changes:
            if key not in known:
                raise ConfigurationError(f"Unknown keyword argument: {key}")
        return dataclasses.replace(self, **changes)

    @property
    def is_tagged(self) -> bool:
        return is_tagged(self.kspace_data)

    @property
    def ncoils(self) -> int | None:
        if self.sensitivity_maps is None:
            return None
        return self.sensitivity_maps.shape[3 if self.is_3d else 2]

    def __repr__(self):
        fields = [
            f"kspace_data={_describe_array(self.kspace_data)}",
            f"encoding={'3D' if self.is_3d else '2D'}",
            f"image_size={self.image_size}",
            f"sensitivity_maps={_describe_array(self.sensitivity_maps)}",
            f"subsampling={_describe_subsampling(self.subsampling)}",
            f"shifted_kspace_dims={self.shifted_kspace_dims}",
            f"shifted_image_dims={self.shifted_image_dims}",
        ]
        return f"AcquisitionInfo({', '.join(fields)})"

    # %% resolution helpers
    def _resolve_is_3d(self, ksp, smaps, image_size):
        is_3d = self.is_3d
        if image_size is not None:
            if len(image_size) not in (2, 3):
                raise ConfigurationError(
                    f"image_size must have 2 or 3 entries, got {image_size}"
                )
            if is_3d is None:
                return len(image_size) == 3
            if bool(is_3d) != (len(image_size) == 3):
                raise ConfigurationError(
                    f"is_3d={is_3d} conflicts with image_size {image_size}"
                )
            return bool(is_3d)
        if is_3d is not None:
            return bool(is_3d)
        if is_tagged(ksp):
            return any(tag in ksp.dims for tag in _3D_KSPACE_TAGS)
        if smaps is not None and smaps.ndim == 3:
            return False
        raise ConfigurationError(
            "cannot infer 2D/3D encoding: pass is_3d or image_size, "
            "or tag the k-space axes"
        )

    @staticmethod
    def _fallback_image_size(ksp, smaps, subsampling, ndim):
        if ksp is not None and subsampling is None:
            if ksp.ndim < ndim:
                raise OperatorConstructionError(
                    f"{ndim}D encoding requires at least {ndim} k-space axes, "
                    f"got shape {tuple(ksp.shape)}"
                )
            return tuple(int(n) for n in ksp.shape[:ndim])
        if smaps is not None:
            return tuple(int(n) for n in smaps.shape[:ndim])
        raise ConfigurationError(
            "image_size cannot be derived: no fully sampled k-space data, "
            "sensitivity maps or subsampling mask to infer it from"
        )


# %% validation
def _check_kspace(ksp, smaps, subsampling, image_size, ndim):
    if subsampling is None:
        ntransform = ndim
        expected_tags = KSPACE_TAGS[:ndim]
    else:
        ntransform = len(subsampling)
        expected_tags = get_subsampled_dim_names(subsampling, ndim)

    required = ntransform + (1 if smaps is not None else 0)
    if ksp.ndim < required:
        raise OperatorConstructionError(
            f"{ndim}D encoding with {ntransform} transform axes"
            f"{' and a coil axis' if smaps is not None else ''} requires at least "
            f"{required} k-space axes, got shape {tuple(ksp.shape)}"
        )

    if is_tagged(ksp):
        leading = tuple(ksp.dims[:ntransform])
        if leading != expected_tags:
            raise ConfigurationError(
                f"k-space axes must start with {expected_tags}, got {tuple(ksp.dims)}"
            )
        if smaps is not None and ksp.dims[ntransform] != COIL_TAG:
            raise ConfigurationError(
                f"k-space axis '{COIL_TAG}' must immediately follow {expected_tags} "
                f"when sensitivity maps are given, got {tuple(ksp.dims)}"
            )

    if subsampling is not None:
        _, counts, _ = get_subsampling_indices(subsampling, image_size)
        if tuple(ksp.shape[:ntransform]) != counts:
            raise ConfigurationError(
                f"k-space leading shape {tuple(ksp.shape[:ntransform])} does not "
                f"match the {counts} samples selected by the subsampling pattern"
            )


def _check_sensitivity_maps(smaps, ksp, subsampling, image_size, ndim):
    if ndim == 3:
        if smaps.ndim != 4:
            raise ConfigurationError(
                "3D encoding requires 4-axis sensitivity maps (x, y, z, coil), "
                f"got shape {tuple(smaps.shape)}"
            )
        expected_tags = ("x", "y", "z", COIL_TAG)
    elif smaps.ndim == 3:
        expected_tags = ("x", "y", COIL_TAG)
    elif smaps.ndim == 4:
        expected_tags = ("x", "y", COIL_TAG, SLICE_TAG)
    else:
        raise ConfigurationError(
            "2D encoding requires 3-axis (x, y, coil) or 4-axis multi-slice "
            f"(x, y, coil, z) sensitivity maps, got shape {tuple(smaps.shape)}"
        )

    if is_tagged(ksp) and not is_tagged(smaps):
        raise ConfigurationError(
            f"tagged k-space {tuple(ksp.dims)} requires sensitivity maps tagged "
            f"{expected_tags}, got an untagged array of shape {tuple(smaps.shape)}"
        )
    if is_tagged(smaps) and tuple(smaps.dims) != expected_tags:
        raise ConfigurationError(
            f"sensitivity map axes must be {expected_tags}, got {tuple(smaps.dims)}"
        )

    spatial = tuple(smaps.shape[:ndim])
    if spatial != tuple(image_size):
        raise ConfigurationError(
            f"sensitivity map spatial shape {spatial} does not match "
            f"image_size {tuple(image_size)} (maps {tuple(smaps.shape)})"
        )

    if ksp is None:
        return

    coil_axis = ndim if subsampling is None else len(subsampling)
    ncoils = smaps.shape[ndim]
    if ksp.shape[coil_axis] != ncoils:
        raise ConfigurationError(
            f"k-space has {ksp.shape[coil_axis]} coils on axis {coil_axis}, "
            f"sensitivity maps have {ncoils}"
        )

    if ndim == 2 and smaps.ndim == 4:
        slice_axis = coil_axis + 1
        nslices = smaps.shape[3]
        if ksp.ndim <= slice_axis or ksp.shape[slice_axis] != nslices:
            raise ConfigurationError(
                f"multi-slice sensitivity maps have {nslices} slices, but k-space "
                f"shape {tuple(ksp.shape)} has no matching slice axis after the coil axis"
            )
        if is_tagged(ksp) and ksp.dims[slice_axis] != SLICE_TAG:
            raise ConfigurationError(
                f"k-space axis '{SLICE_TAG}' must follow '{COIL_TAG}' for multi-slice "
                f"sensitivity maps, got {tuple(ksp.dims)}"
            )

    ksp_dtype = unwrap(ksp).dtype
    smaps_dtype = unwrap(smaps).dtype
    if ksp_dtype != smaps_dtype:
        raise ConfigurationError(
            f"sensitivity map dtype {smaps_dtype} does not match k-space dtype {ksp_dtype}"
        )


def _normalize_shifted_dims(dims, ndim, tags, context):
    output = set()
    for dim in ensure_tuple(dims):
        if isinstance(dim, str):
            if dim not in tags[:ndim]:
                raise ConfigurationError(
                    f"{context} contains invalid axis '{dim}' (expected one of {tags[:ndim]})"
                )
            output.add(tags.index(dim))
        elif isinstance(dim, (int, np.integer)) and not isinstance(dim, bool):
            if not 0 <= dim < ndim:
                raise ConfigurationError(
                    f"{context} contains invalid axis {dim} for {ndim}D encoding"
                )
            output.add(int(dim))
        else:
            raise ConfigurationError(
                f"{context} contains invalid axis {dim!r} (must be int or str)"
            )
    return tuple(sorted(output))


# %% utils
def _as_array(array):
    if array is None or is_tagged(array):
        return array
    if isinstance(array, (list, tuple)):
        return np.asarray(array)
    return array


def _as_size(size):
    if size is None:
        return None
    return tuple(int(n) for n in ensure_tuple(size))


def _describe_array(array):
    if array is None:
        return "None"
    dtype = unwrap(array).dtype
    shape = ", ".join(
        f"{dim}={n}" for dim, n in zip(array.dims, array.shape)
    ) if is_tagged(array) else ", ".join(str(n) for n in array.shape)
    return f"{dtype}[{shape}]"


def _describe_subsampling(subsampling):
    if subsampling is None:
        return "None"
    parts = []
    for selector in subsampling:
        if isinstance(selector, (slice, range)):
            parts.append(repr(selector))
        elif selector.dtype == bool:
            parts.append(f"mask{'x'.join(str(n) for n in selector.shape)}({int(selector.sum())})")
        elif selector.ndim == 2:
            parts.append(f"coords({selector.shape[0]}x{selector.shape[1]})")
        else:
            parts.append(f"indices({selector.shape[0]})")
    return "(" + ", ".join(parts) + ")"
