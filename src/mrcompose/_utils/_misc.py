"""Small helpers shared across subpackages."""

__all__ = ["ensure_tuple", "unwrap", "is_tagged"]

import numpy as np
import xarray as xr


def ensure_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    return (value,)


def is_tagged(array) -> bool:
    return isinstance(array, xr.DataArray)


def unwrap(array):
    """Strip axis tags, returning the underlying array."""
    if isinstance(array, xr.DataArray):
        return array.data
    if array is None:
        return None
    return np.asarray(array) if isinstance(array, (list, tuple)) else array
