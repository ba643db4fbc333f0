"""Acquisition descriptor validation test."""

import pytest

import numpy as np
import xarray as xr

from mrcompose import AcquisitionInfo, ConfigurationError, OperatorConstructionError
from mrcompose.acquisition import get_batch_shape, get_image_dims, get_image_size


def test_fully_sampled_inference():
    """Test that geometry is read from fully sampled data."""
    ksp = np.zeros((32, 32, 4, 10), dtype=complex)
    smaps = np.ones((32, 32, 4), dtype=complex)
    info = AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)
    assert info.is_3d is False
    assert info.image_size == (32, 32)
    assert info.ncoils == 4
    assert get_batch_shape(info) == (10,)
    assert get_image_size(info) == (32, 32, 10)
    assert get_image_dims(info) == (0, 1, 2)


def test_is_3d_from_image_size():
    """Test that a 3-entry image size selects 3D encoding."""
    info = AcquisitionInfo(kspace_data=np.zeros((8, 8, 8)), image_size=(8, 8, 8))
    assert info.is_3d is True


def test_is_3d_from_tags():
    """Test 3D inference from the k-space tags."""
    ksp = xr.DataArray(np.zeros((8, 8, 4), dtype=complex), dims=("kx", "ky", "kz"))
    assert AcquisitionInfo(kspace_data=ksp).is_3d is True

    ksp = xr.DataArray(np.zeros((8, 8, 4), dtype=complex), dims=("kx", "ky", "time"))
    assert AcquisitionInfo(kspace_data=ksp).is_3d is False


def test_is_3d_cannot_be_inferred():
    """Test that untagged data without hints is rejected."""
    with pytest.raises(ConfigurationError, match="cannot infer 2D/3D encoding"):
        AcquisitionInfo(kspace_data=np.zeros((8, 8, 4)))


def test_is_3d_conflicts_with_image_size():
    """Test that an explicit flag must agree with the image size."""
    with pytest.raises(ConfigurationError, match="conflicts with image_size"):
        AcquisitionInfo(kspace_data=np.zeros((8, 8)), is_3d=True, image_size=(8, 8))


def test_sensitivity_map_size_mismatch():
    """Test that maps must match the image grid."""
    ksp = np.zeros((32, 32, 8), dtype=complex)
    smaps = np.zeros((64, 64, 8), dtype=complex)
    with pytest.raises(ConfigurationError, match=r"\(64, 64\)"):
        AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)


def test_coil_count_mismatch():
    """Test that the coil axis must match the maps."""
    ksp = np.zeros((16, 16, 4), dtype=complex)
    smaps = np.zeros((16, 16, 8), dtype=complex)
    with pytest.raises(ConfigurationError, match="4 coils"):
        AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)


def test_dtype_mismatch():
    """Test that k-space and maps must share their dtype."""
    ksp = np.zeros((16, 16, 4), dtype=np.complex64)
    smaps = np.zeros((16, 16, 4), dtype=np.complex128)
    with pytest.raises(ConfigurationError, match="dtype"):
        AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)


def test_multislice_maps_need_slice_axis():
    """Test that multi-slice maps need a matching slice axis after the coils."""
    smaps = np.zeros((16, 16, 4, 5), dtype=complex)
    info = AcquisitionInfo(
        kspace_data=np.zeros((16, 16, 4, 5), dtype=complex),
        is_3d=False,
        sensitivity_maps=smaps,
    )
    assert get_image_size(info) == (16, 16, 5)

    with pytest.raises(ConfigurationError, match="5 slices"):
        AcquisitionInfo(
            kspace_data=np.zeros((16, 16, 4, 3), dtype=complex),
            is_3d=False,
            sensitivity_maps=smaps,
        )


def test_kspace_rank_too_small():
    """Test that missing transform axes are reported."""
    with pytest.raises(OperatorConstructionError, match="requires at least"):
        AcquisitionInfo(
            kspace_data=np.zeros((16, 16), dtype=complex),
            is_3d=False,
            sensitivity_maps=np.zeros((16, 16, 4), dtype=complex),
        )


def test_subsampled_leading_shape():
    """Test that the k-space leading shape must match the pattern."""
    pattern = (slice(None), np.array([0, 2, 4]))
    info = AcquisitionInfo(
        kspace_data=np.zeros((16, 3)), image_size=(16, 16), subsampling=pattern
    )
    assert info.image_size == (16, 16)

    with pytest.raises(ConfigurationError, match="does not match"):
        AcquisitionInfo(
            kspace_data=np.zeros((16, 4)), image_size=(16, 16), subsampling=pattern
        )


def test_image_size_from_mask():
    """Test that a mask provides the image grid."""
    mask = np.zeros((12, 10), dtype=bool)
    mask[::2] = True
    info = AcquisitionInfo(kspace_data=np.zeros((60, 2)), subsampling=mask)
    assert info.image_size == (12, 10)
    assert info.is_3d is False


def test_image_size_required_for_index_patterns():
    """Test that index patterns without geometry need an explicit size."""
    with pytest.raises(ConfigurationError, match="pass image_size explicitly"):
        AcquisitionInfo(
            kspace_data=np.zeros((16, 3)),
            subsampling=(slice(None), np.array([0, 2, 4])),
        )


def test_tagged_kspace_leading_axes():
    """Test that tagged data must start with the canonical tags."""
    ksp = xr.DataArray(np.zeros((8, 8, 2), dtype=complex), dims=("ky", "kx", "coil"))
    smaps = np.zeros((8, 8, 2), dtype=complex)
    with pytest.raises(ConfigurationError, match="must start with"):
        AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)


def test_tagged_subsampled_kspace():
    """Test the tags of subsampled k-space data."""
    mask = np.ones((8, 8), dtype=bool)
    ksp = xr.DataArray(np.zeros((64, 2), dtype=complex), dims=("kxy", "coil"))
    smaps = xr.DataArray(np.zeros((8, 8, 2), dtype=complex), dims=("x", "y", "coil"))
    info = AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps, subsampling=mask)
    assert info.is_tagged
    assert get_image_dims(info) == ("x", "y")


def test_shifted_dims_normalization():
    """Test that shifted axes accept positions and tags."""
    info = AcquisitionInfo(
        kspace_data=np.zeros((8, 8)),
        is_3d=False,
        shifted_kspace_dims=("ky", 0),
        shifted_image_dims=1,
    )
    assert info.shifted_kspace_dims == (0, 1)
    assert info.shifted_image_dims == (1,)

    with pytest.raises(ConfigurationError, match="invalid axis"):
        info.replace(shifted_kspace_dims=("kz",))


def test_replace_revalidates():
    """Test that replace builds a validated copy."""
    info = AcquisitionInfo(kspace_data=np.zeros((8, 8), dtype=complex), is_3d=False)
    other = info.replace(kspace_data=np.ones((8, 8), dtype=complex))
    assert other is not info
    assert other.image_size == (8, 8)

    with pytest.raises(ConfigurationError, match="Unknown keyword argument: coils"):
        info.replace(coils=4)


def test_repr_is_compact():
    """Test that the description summarizes arrays."""
    info = AcquisitionInfo(kspace_data=np.zeros((8, 8), dtype=complex), is_3d=False)
    text = repr(info)
    assert text.startswith("AcquisitionInfo(")
    assert "encoding=2D" in text
    assert "\n" not in text


def test_tagged_kspace_requires_tagged_maps():
    """Test that tagged k-space data rejects untagged sensitivity maps."""
    ksp = xr.DataArray(np.zeros((8, 8, 2), dtype=complex), dims=("kx", "ky", "coil"))
    smaps = np.ones((8, 8, 2), dtype=complex)
    with pytest.raises(ConfigurationError, match="requires sensitivity maps tagged"):
        AcquisitionInfo(kspace_data=ksp, sensitivity_maps=smaps)

    info = AcquisitionInfo(
        kspace_data=ksp, sensitivity_maps=xr.DataArray(smaps, dims=("x", "y", "coil"))
    )
    assert info.is_tagged
