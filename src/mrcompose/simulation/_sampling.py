"""Cartesian sampling pattern generators."""

__all__ = [
    "uniform_random_mask",
    "variable_density_mask",
    "poisson_mask",
    "create_sampling_pattern",
]

import math

import numpy as np
import scipy.fft
from numpy.typing import NDArray

from .._sigpy import mri


def uniform_random_mask(
    shape: list[int] | tuple[int],
    acceleration: float,
    center_fraction: float = 0.1,
    seed: int | None = None,
) -> NDArray[bool]:
    """
    Uniformly random mask with a fully sampled center.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Mask shape.
    acceleration : float
        Undersampling factor (``>= 1``).
    center_fraction : float, optional
        Fraction of points in the fully sampled center. The default is ``0.1``.
    seed : int | None, optional
        Random seed. The default is ``None``.

    Returns
    -------
    NDArray[bool]
        Sampling mask.

    """
    shape = tuple(shape)
    return _random_mask(np.ones(shape), acceleration, center_fraction, seed)


def variable_density_mask(
    shape: list[int] | tuple[int],
    acceleration: float,
    center_fraction: float = 0.1,
    distribution: str = "gaussian",
    std: float = 1 / 3,
    p: float = 4.0,
    seed: int | None = None,
) -> NDArray[bool]:
    """
    Random mask with a density decaying away from the k-space center.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Mask shape.
    acceleration : float
        Undersampling factor (``>= 1``).
    center_fraction : float, optional
        Fraction of points in the fully sampled center. The default is ``0.1``.
    distribution : str, optional
        ``"gaussian"`` (``exp(-r^2 / (2 std^2))``) or ``"polynomial"``
        (``(1 - r)^p``), with ``r`` the normalized distance from the center.
        The default is ``"gaussian"``.
    std : float, optional
        Width of the Gaussian density. The default is ``1 / 3``.
    p : float, optional
        Exponent of the polynomial density. The default is ``4``.
    seed : int | None, optional
        Random seed. The default is ``None``.

    Returns
    -------
    NDArray[bool]
        Sampling mask.

    """
    shape = tuple(shape)
    grids = np.meshgrid(
        *[(np.arange(n) - n / 2) / (0.5 * n) for n in shape], indexing="ij"
    )
    radius = np.sqrt(sum(g**2 for g in grids))
    if distribution == "gaussian":
        weights = np.exp(-0.5 * radius**2 / std**2)
    elif distribution == "polynomial":
        weights = np.clip(1 - radius, 0, None) ** p
    else:
        raise ValueError(
            f"distribution must be 'gaussian' or 'polynomial', got {distribution!r}"
        )
    return _random_mask(weights, acceleration, center_fraction, seed)


def poisson_mask(
    shape: list[int] | tuple[int],
    acceleration: float,
    center_fraction: float = 0.1,
    seed: int = 0,
) -> NDArray[bool]:
    """
    2D Poisson-disc mask (``sigpy.mri.poisson``) with a fully sampled center.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        2D mask shape.
    acceleration : float
        Undersampling factor (``>= 1``).
    center_fraction : float, optional
        Fraction of points in the fully sampled center. The default is ``0.1``.
    seed : int, optional
        Random seed. The default is ``0``.

    Returns
    -------
    NDArray[bool]
        Sampling mask.

    """
    shape = tuple(shape)
    if len(shape) != 2:
        raise ValueError(f"Poisson-disc masks are 2D, got shape {shape}")
    _check(acceleration, center_fraction)
    width = _center_width(shape, center_fraction)
    calib = (int(round(width)),) * 2 if center_fraction > 0 else (0, 0)
    mask = mri.poisson(shape, acceleration, calib=calib, seed=seed)
    return np.abs(mask) > 0


def create_sampling_pattern(
    image_size: list[int] | tuple[int],
    acceleration: float,
    kind: str = "variable_density",
    subsample_freq_encoding: bool = False,
    number_of_trials: int = 5,
    seed: int | None = None,
    **kwargs,
) -> tuple | NDArray[bool]:
    """
    Build a subsampling pattern for an image grid.

    Without frequency-encoding subsampling, the mask covers the phase
    encoding axes only and the readout axis is kept whole, giving the
    pattern ``(slice(None), mask)``. Random masks are drawn
    ``number_of_trials`` times, keeping the one with the lowest
    point-spread-function sidelobe-to-peak ratio.

    Parameters
    ----------
    image_size : list[int] | tuple[int]
        Image grid (2D or 3D).
    acceleration : float
        Undersampling factor.
    kind : str, optional
        ``"uniform"``, ``"variable_density"`` or ``"poisson"``.
        The default is ``"variable_density"``.
    subsample_freq_encoding : bool, optional
        Subsample the readout axis too. The default is ``False``.
    number_of_trials : int, optional
        Random draws. The default is ``5``.
    seed : int | None, optional
        Random seed. The default is ``None``.
    **kwargs
        Forwarded to the mask generator.

    Returns
    -------
    tuple | NDArray[bool]
        Subsampling pattern.

    """
    image_size = tuple(image_size)
    if len(image_size) not in (2, 3):
        raise ValueError(f"image_size must have 2 or 3 entries, got {image_size}")
    shape = image_size if subsample_freq_encoding else image_size[1:]

    rng = np.random.default_rng(seed)
    if kind == "poisson":
        if len(shape) != 2:
            raise ValueError(
                "Poisson-disc patterns need a 2D mask: use subsample_freq_encoding "
                "for 2D images and keep the readout whole for 3D images"
            )
        mask = poisson_mask(shape, acceleration, seed=int(rng.integers(2**31)), **kwargs)
    elif kind in ("uniform", "variable_density"):
        generator = uniform_random_mask if kind == "uniform" else variable_density_mask
        masks = [
            generator(shape, acceleration, seed=int(rng.integers(2**31)), **kwargs)
            for _ in range(max(number_of_trials, 1))
        ]
        mask = min(masks, key=_sidelobe_to_peak_ratio)
    else:
        raise ValueError(
            f"kind must be 'uniform', 'variable_density' or 'poisson', got {kind!r}"
        )

    if subsample_freq_encoding:
        return mask
    return (slice(None), mask)


# %% utils
def _check(acceleration, center_fraction):
    if acceleration < 1:
        raise ValueError(f"acceleration must be >= 1, got {acceleration}")
    if not 0 <= center_fraction < 1:
        raise ValueError(f"center_fraction must be in [0, 1), got {center_fraction}")


def _center_width(shape, center_fraction):
    return (math.prod(shape) * center_fraction) ** (1 / len(shape))


def _center_region(shape, center_fraction):
    if center_fraction == 0:
        return None
    width = _center_width(shape, center_fraction)
    return tuple(
        slice(int(round(n / 2 - width / 2)), int(round(n / 2 + width / 2)))
        for n in shape
    )


def _random_mask(weights, acceleration, center_fraction, seed):
    _check(acceleration, center_fraction)
    rng = np.random.default_rng(seed)
    mask = np.zeros(weights.shape, dtype=bool)
    nsamples = int(round(weights.size / acceleration))

    weights = weights.astype(float)
    region = _center_region(weights.shape, center_fraction)
    if region is not None:
        mask[region] = True
        weights[region] = 0
        nsamples -= int(mask.sum())

    candidates = np.flatnonzero(weights > 0)
    nsamples = min(max(nsamples, 0), candidates.size)
    if nsamples > 0:
        p = weights.ravel()[candidates]
        picked = rng.choice(candidates, size=nsamples, replace=False, p=p / p.sum())
        mask.ravel()[picked] = True
    return mask


def _sidelobe_to_peak_ratio(mask):
    psf = np.abs(scipy.fft.ifftn(mask.astype(float))).ravel()
    if psf[0] == 0 or psf.size == 1:
        return math.inf
    return psf[1:].max() / psf[0]
