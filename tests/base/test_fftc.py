"""Fused-shift FFT test."""

import pytest

import numpy as np

from mrcompose._functional import fft, ifft
from mrcompose.base import FFT, IFFT, OperatorKind, get_kind


def _reference(x, axes, inverse):
    transform = np.fft.ifftn if inverse else np.fft.fftn
    y = np.fft.ifftshift(x, axes=axes)
    y = transform(y, axes=axes)
    return np.fft.fftshift(y, axes=axes)


@pytest.mark.parametrize("shape", [(8, 6), (7, 9), (6, 5, 3)])
@pytest.mark.parametrize("inverse", [False, True])
def test_fused_shift_matches_numpy(crandn, shape, inverse):
    """Test that sign-alternation shifts match explicit fftshift/ifftshift."""
    x = crandn(shape)
    axes = (0, 1)
    transform = ifft if inverse else fft
    out = transform(x, axes=axes, ishift=axes, oshift=axes)
    np.testing.assert_allclose(out, _reference(x, axes, inverse), atol=1e-10)


def test_partial_shift(crandn):
    """Test shifting only one of the transformed axes."""
    x = crandn((8, 7))
    out = fft(x, axes=(0, 1), ishift=(1,), oshift=(0,))
    expected = np.fft.fftshift(
        np.fft.fftn(np.fft.ifftshift(x, axes=(1,)), axes=(0, 1)), axes=(0,)
    )
    np.testing.assert_allclose(out, expected, atol=1e-10)


def test_input_not_modified(crandn):
    """Test that the input is left untouched."""
    x = crandn((8, 8))
    x0 = x.copy()
    fft(x, ishift=(0, 1), oshift=(0, 1))
    np.testing.assert_array_equal(x, x0)


def test_real_input_promoted():
    """Test that real input yields a complex result of matching precision."""
    x = np.ones((4, 4), dtype=np.float32)
    assert fft(x).dtype == np.complex64


@pytest.mark.parametrize("norm", ["backward", "ortho", "forward"])
def test_fft_operator_adjoint(dot_test, norm):
    """Test the FFT operator against its adjoint."""
    F = FFT((8, 6, 3), axes=(0, 1), ishift=(0,), oshift=(0, 1), norm=norm)
    dot_test(F)
    assert isinstance(F.H, IFFT)


def test_fft_normal_operator(crandn):
    """Test that the normal operator of the unnormalized FFT is N times identity."""
    F = FFT((8, 6), ishift=(0, 1), oshift=(0, 1))
    x = crandn((8, 6))
    np.testing.assert_allclose(F.N(x), 48 * x, atol=1e-10)
    np.testing.assert_allclose(F.H(F(x)), 48 * x, atol=1e-10)
    assert F.norm_factor == pytest.approx(np.sqrt(48))
    assert get_kind(F) == OperatorKind.FOURIER


def test_ortho_fft_is_unitary(crandn):
    """Test that the orthonormal transform preserves the norm."""
    F = FFT((5, 4), axes=(1,), norm="ortho")
    x = crandn((5, 4))
    np.testing.assert_allclose(np.linalg.norm(F(x)), np.linalg.norm(x))
    assert F.norm_factor == 1.0


def test_invalid_norm():
    """Test that an unknown normalization is rejected."""
    with pytest.raises(ValueError, match="norm must be one of"):
        FFT((4, 4), norm="unitary")


@pytest.mark.parametrize("shape", [(6, 6), (10, 4), (6, 5)])
@pytest.mark.parametrize("inverse", [False, True])
def test_single_axis_shifted_on_both_sides(crandn, shape, inverse):
    """Test an even axis shifted before and after the transform alone."""
    x = crandn(shape)
    transform = ifft if inverse else fft
    reference = np.fft.ifftn if inverse else np.fft.fftn
    out = transform(x, axes=(0, 1), ishift=(0,), oshift=(0, 1))
    expected = np.fft.fftshift(
        reference(np.fft.ifftshift(x, axes=(0,)), axes=(0, 1)), axes=(0, 1)
    )
    np.testing.assert_allclose(out, expected, atol=1e-10)


def test_fft_operator_without_image_shift():
    """Test the k-space-centered FFT with no image shift (empty shift tuple)."""
    F = FFT((8, 8), axes=(0, 1), ishift=(), oshift=(0, 1))
    delta = np.zeros((8, 8), dtype=complex)
    delta[0, 0] = 1
    np.testing.assert_allclose(F(delta), np.ones((8, 8)), atol=1e-12)
    np.testing.assert_allclose(F.H(F(delta)), 64 * delta, atol=1e-10)
