"""Subsampling pattern rules."""

__all__ = [
    "normalize_subsampling",
    "get_subsampled_dims_count",
    "get_subsampled_dim_names",
    "get_image_size_from_subsampling",
    "get_subsampling_indices",
]

import math

import numpy as np
from numpy.typing import NDArray

from .._errors import ConfigurationError, OperatorConstructionError

_AXIS_LETTERS = "xyz"


def normalize_subsampling(subsampling) -> tuple | None:
    """
    Normalize a subsampling pattern to a tuple of selectors.

    Accepted selectors are ``slice`` and ``range`` objects, boolean masks
    (1D, 2D or 3D), 1D integer index arrays and 2D ``(nsamples, naxes)``
    integer coordinate arrays. Lists are converted to arrays. A pattern that
    is not a tuple is wrapped into a 1-tuple.

    Parameters
    ----------
    subsampling : object
        Subsampling pattern (or ``None`` for fully sampled data).

    Returns
    -------
    tuple | None
        Normalized pattern.

    """
    if subsampling is None:
        return None
    if not isinstance(subsampling, tuple):
        subsampling = (subsampling,)
    if len(subsampling) == 0:
        raise OperatorConstructionError("subsampling pattern must not be empty")
    return tuple(_normalize_selector(selector) for selector in subsampling)


def get_subsampled_dims_count(
    subsampling: tuple, n_axes: int | None = None
) -> tuple[int, ...]:
    """
    Number of transform axes consumed by each selector of a pattern.

    Boolean masks consume as many axes as they have dimensions, coordinate
    arrays as many as their width, ``slice``/``range`` objects one. A 1D
    integer array consumes one axis, except when it is the only selector
    (flat index over the whole grid) or the only one left to fill the
    remaining axes (flat index over the remaining sub-grid).

    Parameters
    ----------
    subsampling : tuple
        Normalized pattern.
    n_axes : int | None, optional
        Number of transform axes, when known. The default is ``None``.

    Returns
    -------
    tuple[int, ...]
        Consumed axes per selector.

    """
    counts = [_fixed_count(selector) for selector in subsampling]
    flexible = [n for n, count in enumerate(counts) if count is None]
    fixed = sum(count for count in counts if count is not None)

    if flexible:
        if len(subsampling) == 1:
            if n_axes is None:
                raise ConfigurationError(
                    "a flat index subsampling pattern carries no geometry: "
                    "image_size must be supplied"
                )
            counts[0] = n_axes
        elif n_axes is None or fixed + len(flexible) == n_axes:
            for n in flexible:
                counts[n] = 1
        elif len(flexible) == 1:
            counts[flexible[0]] = n_axes - fixed
        else:
            raise OperatorConstructionError(
                f"ambiguous subsampling pattern: {len(flexible)} index lists "
                f"cannot be distributed over {n_axes - fixed} remaining axes"
            )

    total = sum(counts)
    if n_axes is not None and total != n_axes:
        raise OperatorConstructionError(
            f"subsampling pattern consumes {total} transform axes, expected {n_axes}"
        )
    if total not in (2, 3) or min(counts) < 1:
        raise OperatorConstructionError(
            f"unsupported subsampling pattern shape combination {tuple(counts)}: "
            "selectors must cover 2 or 3 transform axes"
        )
    return tuple(counts)


def get_subsampled_dim_names(
    subsampling: tuple, n_axes: int | None = None
) -> tuple[str, ...]:
    """
    Canonical k-space tags produced by a pattern.

    Each selector yields ``"k"`` followed by the letters of the axes it
    consumes, e.g. ``("kx", "ky")`` for two separable selectors, ``("kxy",)``
    for a 2D mask and ``("kx", "kyz")`` for a 1D + 2D hybrid.

    """
    counts = get_subsampled_dims_count(subsampling, n_axes)
    names = []
    offset = 0
    for count in counts:
        names.append("k" + _AXIS_LETTERS[offset : offset + count])
        offset += count
    return tuple(names)


def get_image_size_from_subsampling(
    subsampling: tuple, kspace_shape: list[int] | tuple[int] | None = None
) -> tuple[int, ...] | None:
    """
    Image size implied by a pattern, if any.

    Only boolean masks and full ``slice(None)`` selectors carry geometry;
    the extent of a full selector is read from the k-space axis at the same
    position. Any other selector makes the size unknown.

    """
    size = []
    for position, selector in enumerate(subsampling):
        if _is_mask(selector):
            size.extend(selector.shape)
        elif isinstance(selector, slice) and selector == slice(None):
            if kspace_shape is None or len(kspace_shape) <= position:
                return None
            size.append(int(kspace_shape[position]))
        else:
            return None
    return tuple(size)


def get_subsampling_indices(
    subsampling: tuple, image_size: list[int] | tuple[int]
) -> tuple[tuple[NDArray[int], ...], tuple[int, ...], bool]:
    """
    Outer index arrays selecting the sampled grid points.

    Parameters
    ----------
    subsampling : tuple
        Normalized pattern.
    image_size : list[int] | tuple[int]
        Cartesian grid shape.

    Returns
    -------
    indexes : tuple[NDArray[int], ...]
        One index array per grid axis, broadcasting to ``counts``.
    counts : tuple[int, ...]
        Number of samples per selector.
    duplicate_entries : bool
        Whether some grid point is selected more than once.

    """
    image_size = tuple(int(n) for n in image_size)
    naxes = get_subsampled_dims_count(subsampling, len(image_size))
    ncomponents = len(subsampling)

    indexes, counts = [], []
    duplicate_entries = False
    offset = 0
    for n, (selector, count) in enumerate(zip(subsampling, naxes)):
        grid = image_size[offset : offset + count]
        coords = _coordinates(selector, grid)
        if coords.shape[0] > 0:
            if (coords < 0).any() or (coords >= np.asarray(grid)).any():
                raise OperatorConstructionError(
                    f"subsampling selector {n} addresses points outside the grid {grid}"
                )
            if coords.shape[0] > 1 and len(np.unique(coords, axis=0)) < len(coords):
                duplicate_entries = True
        shape = [1] * ncomponents
        shape[n] = coords.shape[0]
        for axis in range(count):
            indexes.append(coords[:, axis].reshape(shape))
        counts.append(coords.shape[0])
        offset += count

    return tuple(indexes), tuple(counts), duplicate_entries


# %% utils
def _normalize_selector(selector):
    if isinstance(selector, (slice, range)):
        return selector
    array = np.asarray(selector)
    if array.ndim == 1 and array.size == 0:
        return array.astype(int)
    if array.dtype == bool and 1 <= array.ndim <= 3:
        return array
    if np.issubdtype(array.dtype, np.integer):
        if array.ndim == 1:
            return array
        if array.ndim == 2 and 1 <= array.shape[1] <= 3:
            return array
    raise OperatorConstructionError(
        f"unsupported subsampling selector: {type(selector).__name__} "
        f"with dtype {array.dtype} and shape {array.shape}"
    )


def _is_mask(selector) -> bool:
    return isinstance(selector, np.ndarray) and selector.dtype == bool


def _fixed_count(selector) -> int | None:
    if isinstance(selector, (slice, range)):
        return 1
    if _is_mask(selector):
        return selector.ndim
    if selector.ndim == 2:
        return selector.shape[1]
    return None


def _coordinates(selector, grid):
    if isinstance(selector, slice):
        return np.arange(*selector.indices(grid[0]))[:, None]
    if isinstance(selector, range):
        return np.asarray(selector, dtype=int).reshape(-1, 1)
    if _is_mask(selector):
        if selector.shape != grid:
            raise OperatorConstructionError(
                f"subsampling mask shape {selector.shape} does not match grid {grid}"
            )
        return np.argwhere(selector)
    if selector.ndim == 2:
        return selector.astype(int, copy=False)
    if len(grid) == 1:
        return selector.astype(int, copy=False).reshape(-1, 1)

    # flat (C-order) index over a sub-grid
    npoints = math.prod(grid)
    if selector.size and (selector.min() < 0 or selector.max() >= npoints):
        raise OperatorConstructionError(
            f"flat subsampling indices must lie in [0, {npoints}) for grid {grid}"
        )
    return np.stack(np.unravel_index(selector, grid), axis=-1)
