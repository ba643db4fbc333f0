"""Simulation helpers test."""

import pytest

import numpy as np
import xarray as xr

from mrcompose.encoding import get_encoding_operator
from mrcompose.simulation import (
    coil_sensitivities,
    create_sampling_pattern,
    poisson_mask,
    simulate_acquisition,
    uniform_random_mask,
    variable_density_mask,
)


def test_coil_sensitivities_are_normalized():
    """Test unit root-sum-of-squares of the maps."""
    smaps = coil_sensitivities((24, 20), 6)
    assert smaps.shape == (24, 20, 6)
    assert smaps.dtype == np.complex64
    rss = np.sqrt(np.sum(np.abs(smaps) ** 2, axis=-1))
    np.testing.assert_allclose(rss, 1.0, rtol=1e-5)


def test_coil_sensitivities_3d():
    """Test that 3D maps repeat the in-plane profile."""
    smaps = coil_sensitivities((8, 8, 3), 2)
    assert smaps.shape == (8, 8, 3, 2)
    np.testing.assert_array_equal(smaps[:, :, 0], smaps[:, :, 2])

    with pytest.raises(ValueError, match="2 or 3 entries"):
        coil_sensitivities((8,), 2)


@pytest.mark.parametrize("generator", [uniform_random_mask, variable_density_mask])
def test_random_masks(generator):
    """Test sample count, center and reproducibility of random masks."""
    mask = generator((32, 32), 4, center_fraction=0.1, seed=3)
    assert mask.dtype == bool
    assert mask.sum() == 256
    assert mask[15:17, 15:17].all()
    np.testing.assert_array_equal(mask, generator((32, 32), 4, center_fraction=0.1, seed=3))


def test_polynomial_density():
    """Test the polynomial density option."""
    mask = variable_density_mask((16, 16), 2, distribution="polynomial", seed=0)
    assert mask.sum() == 128

    with pytest.raises(ValueError, match="distribution must be"):
        variable_density_mask((16, 16), 2, distribution="cauchy")


def test_invalid_acceleration():
    """Test that accelerations below one are rejected."""
    with pytest.raises(ValueError, match="acceleration must be >= 1"):
        uniform_random_mask((8, 8), 0.5)


def test_poisson_mask():
    """Test the Poisson-disc mask."""
    mask = poisson_mask((32, 32), 3, seed=1)
    assert mask.shape == (32, 32)
    assert mask.dtype == bool
    assert 0 < mask.sum() < 32 * 32

    with pytest.raises(ValueError, match="2D"):
        poisson_mask((8, 8, 8), 3)


def test_sampling_pattern_keeps_readout():
    """Test that the readout axis is not subsampled by default."""
    pattern = create_sampling_pattern((32, 24, 16), 4, seed=0)
    assert pattern[0] == slice(None)
    assert pattern[1].shape == (24, 16)

    mask = create_sampling_pattern((32, 24), 2, kind="uniform", subsample_freq_encoding=True, seed=0)
    assert mask.shape == (32, 24)


def test_simulate_fully_sampled():
    """Test the adjoint of simulated data against the ground truth."""
    image = np.zeros((16, 16), dtype=np.complex64)
    image[4:12, 6:10] = 1.0
    smaps = coil_sensitivities((16, 16), 4)
    info = simulate_acquisition(image, smaps)

    assert info.kspace_data.shape == (16, 16, 4)
    assert info.kspace_data.dtype == np.complex64
    E = get_encoding_operator(info)
    np.testing.assert_allclose(E.H(info.kspace_data) / 256, image, atol=1e-4)


def test_simulate_subsampled_tagged():
    """Test tags and shapes of subsampled multi-frame data."""
    image = xr.DataArray(np.ones((16, 16, 3), dtype=complex), dims=("x", "y", "time"))
    smaps = coil_sensitivities((16, 16), 2, dtype=np.complex128)
    pattern = (slice(None), np.arange(0, 16, 2))
    info = simulate_acquisition(image, smaps, subsampling=pattern)

    assert info.kspace_data.dims == ("kx", "ky", "coil", "time")
    assert info.kspace_data.shape == (16, 8, 2, 3)
    assert info.sensitivity_maps.dims == ("x", "y", "coil")
    assert info.image_size == (16, 16)


def test_simulate_mask_names():
    """Test the tags of mask-subsampled data."""
    image = xr.DataArray(np.ones((8, 8), dtype=complex), dims=("x", "y"))
    mask = np.zeros((8, 8), dtype=bool)
    mask[::2] = True
    info = simulate_acquisition(image, subsampling=mask)
    assert info.kspace_data.dims == ("kxy",)
    assert info.kspace_data.shape == (32,)
