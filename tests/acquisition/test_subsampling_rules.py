"""Subsampling pattern rules test."""

import pytest

import numpy as np

from mrcompose import ConfigurationError, OperatorConstructionError
from mrcompose.acquisition import (
    get_image_size_from_subsampling,
    get_subsampled_dim_names,
    get_subsampled_dims_count,
    get_subsampling_indices,
    normalize_subsampling,
)


def test_normalize_wraps_single_selector():
    """Test that a bare selector becomes a 1-tuple and lists become arrays."""
    pattern = normalize_subsampling([0, 2, 4])
    assert isinstance(pattern, tuple) and len(pattern) == 1
    assert isinstance(pattern[0], np.ndarray)
    assert normalize_subsampling(None) is None


@pytest.mark.parametrize(
    "selector",
    [np.zeros((2, 2, 2, 2), dtype=bool), np.zeros((4, 4), dtype=int), np.ones(3)],
)
def test_normalize_rejects_unsupported_selectors(selector):
    """Test that selectors of unsupported rank or dtype are rejected."""
    with pytest.raises(OperatorConstructionError, match="unsupported subsampling selector"):
        normalize_subsampling((selector,))


@pytest.mark.parametrize(
    "pattern, n_axes, counts, names",
    [
        ((slice(None), np.array([0, 2])), 2, (1, 1), ("kx", "ky")),
        ((np.ones((4, 4), dtype=bool),), 2, (2,), ("kxy",)),
        ((np.ones((4, 4, 4), dtype=bool),), 3, (3,), ("kxyz",)),
        ((slice(None), np.ones((4, 4), dtype=bool)), 3, (1, 2), ("kx", "kyz")),
        ((np.array([0, 5, 7]),), 2, (2,), ("kxy",)),
        ((slice(None), np.array([0, 5, 7])), 3, (1, 2), ("kx", "kyz")),
        ((np.array([[0, 1], [2, 3]]), slice(None)), 3, (2, 1), ("kxy", "kz")),
    ],
)
def test_consumed_axes_and_names(pattern, n_axes, counts, names):
    """Test axis consumption and canonical tags of common patterns."""
    pattern = normalize_subsampling(pattern)
    assert get_subsampled_dims_count(pattern, n_axes) == counts
    assert get_subsampled_dim_names(pattern, n_axes) == names


def test_flat_index_requires_geometry():
    """Test that a lone flat index without image size is an error."""
    pattern = normalize_subsampling(np.array([0, 1, 2]))
    with pytest.raises(ConfigurationError, match="image_size must be supplied"):
        get_subsampled_dims_count(pattern)


def test_unsupported_combination():
    """Test that patterns covering a single axis are rejected."""
    pattern = normalize_subsampling((slice(None),))
    with pytest.raises(OperatorConstructionError, match="2 or 3 transform axes"):
        get_subsampled_dims_count(pattern)


def test_image_size_from_mask_and_full_slices():
    """Test geometry inference from masks and full slices."""
    mask = np.ones((6, 4), dtype=bool)
    pattern = normalize_subsampling((slice(None), mask))
    assert get_image_size_from_subsampling(pattern, (8, 10)) == (8, 6, 4)
    assert get_image_size_from_subsampling(pattern) is None

    pattern = normalize_subsampling((slice(None), np.array([0, 1])))
    assert get_image_size_from_subsampling(pattern, (8, 2)) is None


def test_separable_indices():
    """Test the outer product of separable selectors."""
    pattern = normalize_subsampling((slice(None), np.array([1, 3])))
    indexes, counts, duplicates = get_subsampling_indices(pattern, (4, 5))
    assert counts == (4, 2)
    assert not duplicates

    grid = np.arange(20).reshape(4, 5)
    np.testing.assert_array_equal(grid[indexes], grid[:, [1, 3]])


def test_mask_indices_follow_c_order():
    """Test that mask samples are listed in C order."""
    mask = np.zeros((3, 3), dtype=bool)
    mask[0, 2] = mask[2, 0] = mask[1, 1] = True
    indexes, counts, _ = get_subsampling_indices(normalize_subsampling(mask), (3, 3))
    assert counts == (3,)

    grid = np.arange(9).reshape(3, 3)
    np.testing.assert_array_equal(grid[indexes], [2, 4, 6])


def test_duplicate_entries_detected():
    """Test that repeated samples are flagged."""
    pattern = normalize_subsampling((slice(None), np.array([1, 1, 2])))
    _, counts, duplicates = get_subsampling_indices(pattern, (4, 4))
    assert counts == (4, 3)
    assert duplicates


def test_out_of_range_samples():
    """Test that samples outside the grid are rejected."""
    pattern = normalize_subsampling((slice(None), np.array([0, 7])))
    with pytest.raises(OperatorConstructionError, match="outside the grid"):
        get_subsampling_indices(pattern, (4, 4))


def test_mask_shape_mismatch():
    """Test that a mask must match the grid it covers."""
    pattern = normalize_subsampling(np.ones((3, 3), dtype=bool))
    with pytest.raises(OperatorConstructionError, match="does not match grid"):
        get_subsampling_indices(pattern, (4, 4))
