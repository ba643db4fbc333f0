"""Simulated coil sensitivity maps."""

__all__ = ["coil_sensitivities"]

import numpy as np
from numpy.typing import NDArray


def coil_sensitivities(
    shape: list[int] | tuple[int], ncoils: int, dtype=np.complex64
) -> NDArray[complex]:
    """
    Generate smooth sensitivity maps of a circular receiver array.

    Coil ``i`` is centered at ``(cos, sin)(2 pi i / ncoils)`` on a ``[-1, 1]``
    grid with a Gaussian magnitude profile (``sigma = 0.6``) and a linear
    phase ramp ``exp(i (0.5 x + 0.3 y))``. Maps are normalized to unit
    root-sum-of-squares.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Spatial shape ``(nx, ny)`` or ``(nx, ny, nz)``. 3D maps repeat the
        in-plane profile along ``z``.
    ncoils : int
        Number of coils.
    dtype : optional
        Output data type. The default is ``np.complex64``.

    Returns
    -------
    NDArray[complex]
        Maps of shape ``(nx, ny, ncoils)`` or ``(nx, ny, nz, ncoils)``.

    """
    shape = tuple(shape)
    if len(shape) not in (2, 3):
        raise ValueError(f"shape must have 2 or 3 entries, got {shape}")
    nx, ny = shape[:2]
    X, Y = np.meshgrid(np.linspace(-1, 1, nx), np.linspace(-1, 1, ny), indexing="ij")

    sigma = 0.6
    phase = np.exp(1j * (0.5 * X + 0.3 * Y))
    smaps = np.empty((nx, ny, ncoils), dtype=dtype)
    for i in range(ncoils):
        cx, cy = np.cos(2 * np.pi * i / ncoils), np.sin(2 * np.pi * i / ncoils)
        magnitude = np.exp(-((X - cx) ** 2 + (Y - cy) ** 2) / (2 * sigma**2))
        smaps[..., i] = magnitude * phase

    rss = np.sqrt(np.sum(np.abs(smaps) ** 2, axis=-1, keepdims=True))
    smaps /= rss + np.finfo(np.float32).eps

    if len(shape) == 3:
        smaps = np.repeat(smaps[:, :, None, :], shape[2], axis=2)
    return smaps
