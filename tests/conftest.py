"""Common fixtures."""

import pytest

import numpy as np

from mrcompose.acquisition import AcquisitionInfo, get_subsampling_indices
from mrcompose.acquisition import normalize_subsampling
from mrcompose.simulation import coil_sensitivities

NX, NY, NZ, NCOILS = 8, 6, 4, 3


def _crandn(rng, shape):
    return rng.standard_normal(shape) + 1j * rng.standard_normal(shape)


def _mask(rng, shape):
    mask = rng.random(shape) > 0.5
    mask.flat[0] = True
    return mask


def _pattern(geometry, sampling, rng):
    if sampling == "full":
        return None
    if geometry == "3d":
        if sampling == "mask":
            return (slice(None), _mask(rng, (NY, NZ)))
        return (slice(None), np.array([0, 2, 3, 5]), slice(None))
    if sampling == "mask":
        return _mask(rng, (NX, NY))
    return (slice(None), np.array([0, 2, 3, 5]))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def crandn(rng):
    """Complex standard normal samples."""

    def _sample(shape):
        return _crandn(rng, shape)

    return _sample


@pytest.fixture
def dot_test(crandn):
    """Check ``<A x, y> == <x, A^H y>`` on random vectors."""

    def _check(A, rtol=1e-10):
        x = crandn(tuple(A.ishape))
        y = crandn(tuple(A.oshape))
        lhs = np.vdot(A(x), y)
        rhs = np.vdot(x, A.H(y))
        np.testing.assert_allclose(lhs, rhs, rtol=rtol)

    return _check


@pytest.fixture
def make_info(rng):
    """
    Build random acquisitions.

    ``geometry`` is one of ``"nomaps"``, ``"2d"``, ``"3d"`` or
    ``"multislice"``; ``sampling`` one of ``"full"``, ``"mask"`` or
    ``"separable"``.

    """

    def _make(geometry, sampling):
        is_3d = geometry == "3d"
        image_size = (NX, NY, NZ) if is_3d else (NX, NY)
        pattern = _pattern(geometry, sampling, rng)
        if pattern is None:
            counts = image_size
        else:
            _, counts, _ = get_subsampling_indices(
                normalize_subsampling(pattern), image_size
            )

        if geometry == "nomaps":
            smaps, trailing = None, (2,)
        elif geometry == "2d":
            smaps = coil_sensitivities((NX, NY), NCOILS, dtype=np.complex128)
            trailing = (NCOILS, 2)
        elif geometry == "3d":
            smaps = coil_sensitivities((NX, NY, NZ), NCOILS, dtype=np.complex128)
            trailing = (NCOILS,)
        else:
            smaps = coil_sensitivities((NX, NY, NZ), NCOILS, dtype=np.complex128)
            smaps = np.moveaxis(smaps, -1, 2) * np.linspace(0.5, 1.0, NZ)
            trailing = (NCOILS, NZ)

        ksp = _crandn(rng, tuple(counts) + trailing)
        return AcquisitionInfo(
            kspace_data=ksp,
            is_3d=is_3d,
            image_size=image_size,
            sensitivity_maps=smaps,
            subsampling=pattern,
        )

    return _make
