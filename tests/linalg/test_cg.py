"""Conjugate Gradient solver test."""

import pytest

import numpy as np

from mrcompose.linalg import ConjugateGradient, cg


def test_cg_basic(simple_system):
    """Test CG solver on a simple system."""
    A, x0, b = simple_system
    x = cg(A, b, max_iter=10, tol=1e-6)
    np.testing.assert_allclose(x, x0, atol=1e-6)


def test_cg_with_damping(simple_system):
    """Test CG solver with damping (Tikhonov regularization)."""
    A, x0, b = simple_system
    x = cg(A, b, damp=0.001, max_iter=10, tol=1e-6)

    # small damping barely moves the solution
    np.testing.assert_allclose(x, x0, atol=1e-2)


def test_cg_damping_matches_normal_equations(overdetermined_system):
    """Test that damp solves (A^H A + damp I) x = A^H b."""
    A, matrix, _, b = overdetermined_system
    damp = 0.5
    x = cg(A, b, damp=damp, max_iter=50, tol=1e-12)

    lhs = matrix.conj().T @ matrix + damp * np.eye(4)
    expected = np.linalg.solve(lhs, matrix.conj().T @ b)
    np.testing.assert_allclose(x, expected, atol=1e-8)


def test_cg_with_initial_guess(simple_system):
    """Test CG solver with an initial guess."""
    A, x0, b = simple_system
    x_init = np.array([0.1, 0.1], dtype=complex)
    x = cg(A, b, x=x_init, max_iter=10, tol=1e-6)
    np.testing.assert_allclose(x, x0, atol=1e-6)


def test_cg_zero_iterations(simple_system):
    """Test that no iterations return the initial guess."""
    A, _, b = simple_system
    x_init = np.array([0.1, 0.1], dtype=complex)
    x = cg(A, b, x=x_init, max_iter=0)
    np.testing.assert_array_equal(x, x_init)


def test_cg_monitor(simple_system):
    """Test that verbose runs print and record the cost."""
    A, _, b = simple_system
    lines = []
    solver = ConjugateGradient(
        A, b, max_iter=5, verbose=True, freq=1, printfunc=lines.append
    )
    solver.run()
    assert lines
    assert lines[0].startswith("Iteration: 0 | Cost:")
    assert len(solver.alg.history) == len(lines)


def test_cg_negative_damping(simple_system):
    """Test that negative damping is rejected."""
    A, _, b = simple_system
    with pytest.raises(ValueError, match="damp"):
        cg(A, b, damp=-1.0)
