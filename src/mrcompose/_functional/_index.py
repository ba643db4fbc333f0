"""Indexing."""

__all__ = ["subsample", "zerofill"]

from numpy.typing import NDArray

from .._utils import get_array_module, with_numpy_cupy


@with_numpy_cupy
def subsample(
    input: NDArray[complex | float],
    indexes: tuple[NDArray[int], ...],
) -> NDArray[complex | float]:
    """
    Extract samples over the leading Cartesian axes of input.

    Parameters
    ----------
    input : NDArray[complex | float]
        Input ``(*shape, ...)`` data array, with ``shape`` the Cartesian grid
        and ``...`` a tuple of batch axes.
    indexes : tuple[NDArray[int], ...]
        One index array per Cartesian axis. Arrays broadcast to the
        sampled shape ``(k_1, ..., k_m)``.

    Returns
    -------
    NDArray[complex | float]
        Selected data with shape ``(k_1, ..., k_m, ...)``.

    """
    return input[tuple(indexes)]


@with_numpy_cupy
def zerofill(
    input: NDArray[complex | float],
    indexes: tuple[NDArray[int], ...],
    shape: list[int] | tuple[int],
    duplicate_entries: bool = False,
) -> NDArray[complex | float]:
    """
    Grid samples back onto the Cartesian grid, leaving unsampled points at zero.

    Parameters
    ----------
    input : NDArray[complex | float]
        Sampled data with shape ``(k_1, ..., k_m, ...)``.
    indexes : tuple[NDArray[int], ...]
        One index array per Cartesian axis (see ``subsample``).
    shape : list[int] | tuple[int]
        Cartesian grid shape.
    duplicate_entries : bool, optional
        Accumulate samples hitting the same grid point.
        The default is ``False``.

    Returns
    -------
    NDArray[complex | float]
        Zero-filled data with shape ``(*shape, ...)``.

    Notes
    -----
    Adjoint of subsample.

    """
    xp = get_array_module(input)
    shape = tuple(shape)
    nsampled = max(idx.ndim for idx in indexes)
    output = xp.zeros(shape + input.shape[nsampled:], dtype=input.dtype)
    if duplicate_entries:
        xp.add.at(output, tuple(indexes), input)
    else:
        output[tuple(indexes)] = input
    return output
