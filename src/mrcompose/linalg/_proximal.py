"""Proximal solvers."""

__all__ = ["fista", "pdhg"]

from numpy.typing import NDArray

from .._sigpy.app import LinearLeastSquares
from .._sigpy.linop import Linop
from .._sigpy.prox import Prox


def fista(
    A: Linop,
    b: NDArray[complex],
    proxg: Prox,
    x: NDArray[complex] | None = None,
    max_iter: int = 100,
    tol: float = 0.0,
    alpha: float | None = None,
    show_pbar: bool = False,
) -> NDArray[complex]:
    r"""
    Accelerated proximal gradient method.

    Solves::

        minimize 0.5 * || A @ x - b ||^2_2 + g(x)

    where ``g`` is given through its proximal operator.

    Parameters
    ----------
    A : Linop
        Encoding operator.
    b : NDArray[complex]
        Measured data.
    proxg : Prox
        Proximal operator of ``g``.
    x : NDArray[complex] | None, optional
        Initial guess (not modified). The default is ``None`` (zeros).
    max_iter : int, optional
        Maximum number of iterations. The default is ``100``.
    tol : float, optional
        Stopping tolerance on the update norm. The default is ``0.0``.
    alpha : float | None, optional
        Step size. The default is ``None`` (``1 / ||A||^2`` by power iteration).
    show_pbar : bool, optional
        Show a progress bar. The default is ``False``.

    Returns
    -------
    NDArray[complex]
        Solution to the problem.

    """
    app = LinearLeastSquares(
        A,
        b,
        x=None if x is None else x.copy(),
        proxg=proxg,
        solver="GradientMethod",
        max_iter=max_iter,
        alpha=alpha,
        tol=tol,
        show_pbar=show_pbar,
    )
    return app.run()


def pdhg(
    A: Linop,
    b: NDArray[complex],
    proxg: Prox,
    G: Linop,
    x: NDArray[complex] | None = None,
    max_iter: int = 100,
    tol: float = 0.0,
    show_pbar: bool = False,
) -> NDArray[complex]:
    r"""
    Primal-dual hybrid gradient method.

    Solves::

        minimize 0.5 * || A @ x - b ||^2_2 + g(G @ x)

    Parameters
    ----------
    A : Linop
        Encoding operator.
    b : NDArray[complex]
        Measured data.
    proxg : Prox
        Proximal operator of ``g``, defined on ``G.oshape``.
    G : Linop
        Regularization operator.
    x : NDArray[complex] | None, optional
        Initial guess (not modified). The default is ``None`` (zeros).
    max_iter : int, optional
        Maximum number of iterations. The default is ``100``.
    tol : float, optional
        Stopping tolerance. The default is ``0.0``.
    show_pbar : bool, optional
        Show a progress bar. The default is ``False``.

    Returns
    -------
    NDArray[complex]
        Solution to the problem.

    """
    app = LinearLeastSquares(
        A,
        b,
        x=None if x is None else x.copy(),
        proxg=proxg,
        G=G,
        solver="PrimalDualHybridGradient",
        max_iter=max_iter,
        tol=tol,
        show_pbar=show_pbar,
    )
    return app.run()
