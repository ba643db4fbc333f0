"""Damped normal equations."""

__all__ = ["build_damped_normal_system"]

from numpy.typing import NDArray
from scipy.sparse.linalg import LinearOperator

from .._sigpy.linop import Linop, Identity

from ..interop import aslinearoperator


def build_damped_normal_system(
    E: Linop, y: NDArray[complex], damp: float = 0.0
) -> tuple[LinearOperator, NDArray[complex]]:
    """
    Build ``(E^H E + damp * I, E^H y)`` acting on raveled images.

    Parameters
    ----------
    E : Linop
        Encoding operator.
    y : NDArray[complex]
        Measured data.
    damp : float, optional
        Identity damping. Negative values are rejected.
        The default is ``0.0``.

    Returns
    -------
    LinearOperator
        Damped normal operator.
    NDArray[complex]
        Raveled right-hand side.

    """
    if damp < 0:
        raise ValueError(f"damp must be non-negative, got {damp}")
    N = E.N
    if damp:
        N = N + damp * Identity(E.ishape)
    return aslinearoperator(N, y), E.H(y).ravel()
