"""Proximal solvers test."""

import numpy as np

from mrcompose import _sigpy as sp
from mrcompose.linalg import fista, pdhg


def _soft(x, threshold):
    magnitude = np.abs(x)
    return np.where(magnitude > threshold, (1 - threshold / np.maximum(magnitude, 1e-30)) * x, 0)


def test_fista_denoising(crandn):
    """Test FISTA on l1 denoising, solved by soft-thresholding."""
    b = crandn((16,))
    A = sp.linop.Identity((16,))
    proxg = sp.prox.L1Reg((16,), 0.5)
    x = fista(A, b, proxg, max_iter=50, alpha=1.0)
    np.testing.assert_allclose(x, _soft(b, 0.5), atol=1e-8)


def test_fista_least_squares(overdetermined_system):
    """Test that FISTA with a vanishing penalty solves least squares."""
    A, _, x0, b = overdetermined_system
    proxg = sp.prox.L1Reg(A.ishape, 0.0)
    x = fista(A, b, proxg, max_iter=2000)
    np.testing.assert_allclose(x, x0, atol=1e-4)


def test_fista_keeps_initial_guess(crandn):
    """Test that the initial guess is not modified."""
    b = crandn((8,))
    x_init = np.zeros(8, dtype=complex)
    fista(sp.linop.Identity((8,)), b, sp.prox.L1Reg((8,), 0.1), x=x_init, alpha=1.0)
    np.testing.assert_array_equal(x_init, 0)


def test_pdhg_denoising(crandn):
    """Test PDHG on l1 denoising through an explicit operator."""
    b = crandn((16,))
    A = sp.linop.Identity((16,))
    G = sp.linop.Identity((16,))
    proxg = sp.prox.L1Reg((16,), 0.5)
    x = pdhg(A, b, proxg, G, max_iter=1000)
    np.testing.assert_allclose(x, _soft(b, 0.5), atol=1e-3)
