"""Conjugate Gradient solver for quadratic reconstructions."""

__all__ = ["cg", "ConjugateGradient"]

from typing import Callable

from numpy.typing import NDArray

from scipy.sparse.linalg import cg as scipy_cg

from .._utils import CUPY_AVAILABLE, get_array_module, with_numpy_cupy

if CUPY_AVAILABLE:
    from cupyx.scipy.sparse.linalg import cg as cupy_cg

from .._sigpy.app import App
from .._sigpy.alg import Alg
from .._sigpy.linop import Linop

from ._monitor import Monitor
from ._reginversion import build_damped_normal_system


def cg(
    E: Linop,
    y: NDArray[complex],
    damp: float = 0.0,
    x: NDArray[complex] | None = None,
    max_iter: int = 10,
    tol: float = 0.0,
    verbose: bool = False,
    freq: int = 1,
    printfunc: Callable = print,
) -> NDArray[complex]:
    r"""
    Conjugate gradient on damped normal equations.

    Solves::

        (E^H E + damp * I) x = E^H y

    i.e. the minimizer of ``0.5 * ||E x - y||^2 + 0.5 * damp * ||x||^2``.
    A Tikhonov term ``lamda^2 ||x||^2`` corresponds to ``damp = 2 lamda^2``.

    Parameters
    ----------
    E : Linop
        Encoding operator.
    y : NDArray[complex]
        Measured k-space data.
    damp : float, optional
        Damping of the identity. The default is ``0.0``.
    x : NDArray[complex] | None, optional
        Initial guess. The default is ``None`` (zeros).
    max_iter : int, optional
        Maximum number of iterations. ``0`` returns the initial guess.
        The default is ``10``.
    tol : float, optional
        Absolute residual tolerance. The default is ``0.0``.
    verbose : bool, optional
        Print the cost while iterating. The default is ``False``.
    freq : int, optional
        Print every ``freq`` iterations. The default is ``1``.
    printfunc : Callable, optional
        Progress printer. The default is ``print``.

    Returns
    -------
    NDArray[complex]
        Solution, shaped like ``E.ishape``.

    """
    solver = ConjugateGradient(E, y, damp, x, max_iter, tol, verbose, freq, printfunc)
    return solver.run()


class ConjugateGradient(App):
    """
    Conjugate gradient app.

    Same arguments as ``cg``. After ``run()``, ``alg.history`` holds the
    cost recorded by the monitor (verbose runs only).

    """

    def __init__(
        self,
        E: Linop,
        y: NDArray[complex],
        damp: float = 0.0,
        x: NDArray[complex] | None = None,
        max_iter: int = 10,
        tol: float = 0.0,
        verbose: bool = False,
        freq: int = 1,
        printfunc: Callable = print,
    ):
        _alg = _ConjugateGradient(E, y, damp, x, max_iter, tol, verbose, freq, printfunc)
        super().__init__(_alg, False, False, False)

    def _output(self):
        return self.alg.x


# %% utils
class _ConjugateGradient(Alg):
    def __init__(self, E, y, damp, x, max_iter, tol, verbose, freq, printfunc):
        self.ishape = tuple(E.ishape)
        self.A, self.b = build_damped_normal_system(E, y, damp)
        self.x = x
        self.tol = tol
        self._finished = False
        self._verbose = verbose
        self._freq = freq
        self._printfunc = printfunc
        self.history = None

        super().__init__(max_iter)

    def update(self):  # noqa
        x0 = 0 * self.b if self.x is None else self.x.ravel()
        monitor = Monitor(self.A, self.b, self._verbose, self._freq, self._printfunc)
        monitor.start_timer()
        x = _cg(
            self.A,
            self.b,
            x0,
            tol=self.tol,
            maxiter=self.max_iter,
            callback=monitor if self._verbose else None,
        )
        monitor.stop_timer()
        self.x = x.reshape(self.ishape)
        self.history = monitor.history
        self._finished = True

    def _done(self):
        return self._finished


@with_numpy_cupy
def _cg(A, b, x0, *, tol=0, maxiter=None, callback=None):
    if not maxiter:
        return x0
    if get_array_module(b).__name__ == "numpy":
        return scipy_cg(A, b, x0, atol=tol, rtol=tol, maxiter=maxiter, callback=callback)[0]
    return cupy_cg(A, b, x0, atol=tol, maxiter=maxiter, callback=callback)[0]
