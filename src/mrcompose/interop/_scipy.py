"""Expose SigPy operators to scipy / cupyx.scipy iterative solvers."""

__all__ = ["aslinearoperator", "SigpyLinearOperator"]

import math

from numpy.typing import NDArray

import scipy.sparse.linalg as spla

from .._utils import CUPY_AVAILABLE, get_array_module
from .._sigpy.linop import Linop

if CUPY_AVAILABLE:
    import cupyx.scipy.sparse.linalg as cupy_spla


def aslinearoperator(A: Linop, like: NDArray) -> spla.LinearOperator:
    """
    Wrap a Linop as a LinearOperator acting on raveled arrays.

    Parameters
    ----------
    A : Linop
        Operator to wrap.
    like : NDArray
        Array on the target device. Its dtype becomes the operator dtype.

    Returns
    -------
    LinearOperator
        ``scipy`` operator for numpy arrays, ``cupyx.scipy`` operator for
        cupy arrays.

    """
    if get_array_module(like).__name__ == "numpy":
        return SigpyLinearOperator(A, like.dtype)
    return CupyLinearOperator(A, like.dtype)


class _RaveledLinop:  # noqa
    def __init__(self, linop, dtype=None):
        self.linop = linop
        self.ishape = tuple(linop.ishape)
        self.oshape = tuple(linop.oshape)
        shape = (math.prod(self.oshape), math.prod(self.ishape))
        super().__init__(dtype=dtype, shape=shape)

    def _matvec(self, x):
        return self.linop.apply(x.reshape(self.ishape)).ravel()

    def _rmatvec(self, y):
        return self.linop.H.apply(y.reshape(self.oshape)).ravel()


class SigpyLinearOperator(_RaveledLinop, spla.LinearOperator):  # noqa
    """SciPy LinearOperator view of a Linop."""


if CUPY_AVAILABLE:

    class CupyLinearOperator(_RaveledLinop, cupy_spla.LinearOperator):  # noqa
        """CuPy LinearOperator view of a Linop."""

    __all__.append("CupyLinearOperator")
