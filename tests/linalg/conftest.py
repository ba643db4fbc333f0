"""Common solvers fixtures."""

import pytest

import numpy as np

from mrcompose import _sigpy as sp


class MockLinearOperator(sp.linop.Linop):
    def __init__(self, matrix):
        self._matrix = matrix
        super().__init__([self._matrix.shape[0]], [self._matrix.shape[1]])

    def _apply(self, input):
        return self._matrix @ input

    def _adjoint_linop(self):
        return self.__class__(self._matrix.conj().T)

    def _normal_linop(self):
        return self.__class__(self._matrix.conj().T @ self._matrix)


@pytest.fixture
def simple_system():
    """Small well-conditioned system ``(A, x, A @ x)``."""
    A_matrix = np.array([[4, 1], [1, 3]], dtype=complex)
    x = np.array([1, 2], dtype=complex)
    return MockLinearOperator(A_matrix), x, A_matrix @ x


@pytest.fixture
def overdetermined_system(rng):
    """Tall random system ``(A, matrix, x, A @ x)``."""
    matrix = rng.standard_normal((12, 4)) + 1j * rng.standard_normal((12, 4))
    x = rng.standard_normal(4) + 1j * rng.standard_normal(4)
    return MockLinearOperator(matrix), matrix, x, matrix @ x

