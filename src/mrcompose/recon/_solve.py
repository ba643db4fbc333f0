"""Solver dispatch."""

__all__ = ["solve"]

from numpy.typing import NDArray

from .._errors import ConfigurationError
from .._sigpy import linop, prox

from ..base import OperatorKind, get_kind
from ..encoding import get_normal_operator
from ..linalg import cg, fista, pdhg


def solve(
    E: linop.Linop,
    y: NDArray[complex],
    regularization: list | tuple,
    x: NDArray[complex],
    config,
    tol: float = 0.0,
    normalized: bool = False,
    dims: tuple | None = None,
) -> NDArray[complex]:
    """
    Solve a regularized least squares problem.

    Quadratic terms only are solved by conjugate gradient on the normal
    equations; a single term with a unitary operator by FISTA; anything
    else by PDHG on the stacked regularization operators.

    Parameters
    ----------
    E : Linop
        Encoding operator.
    y : NDArray[complex]
        Measured data.
    regularization : list | tuple
        Regularization terms.
    x : NDArray[complex]
        Initial guess (not modified).
    config : Config
        Reconstruction options (``maxit``, ``solver``, printing).
    tol : float, optional
        Absolute stopping tolerance. The default is ``0.0``.
    normalized : bool, optional
        ``E`` has unit norm, so FISTA can use a unit step.
        The default is ``False``.
    dims : tuple | None, optional
        Image axis tags, used to locate the axes named by the terms.
        The default is ``None`` (axis positions).

    Returns
    -------
    NDArray[complex]
        Solution.

    Notes
    -----
    The normal operator of ``E`` is replaced according to
    ``config.disable_normalop_optimization``.

    """
    solver = config.solver or _choose_solver(regularization)
    show_pbar = config.verbose

    # sigpy solvers read the normal operator from this cache
    E.normal = get_normal_operator(E, not config.disable_normalop_optimization)

    if solver == "cg":
        if not all(term.is_quadratic for term in regularization):
            raise ConfigurationError(
                "solver 'cg' requires quadratic (Tikhonov) regularization only, "
                f"got {_names(regularization)}"
            )
        damp = sum(term.damp for term in regularization)
        return cg(
            E,
            y,
            damp=damp,
            x=x,
            max_iter=config.maxit,
            tol=tol,
            verbose=config.verbose,
            freq=config.print_freq,
            printfunc=config.printfunc,
        )

    ops = [term.get_operator(x, config.threaded, dims) for term in regularization]
    proxes = [term.get_prox(op) for term, op in zip(regularization, ops)]

    if solver == "fista":
        if len(regularization) != 1 or not regularization[0].is_unitary:
            raise ConfigurationError(
                "solver 'fista' requires a single regularization term with a "
                f"unitary operator, got {_names(regularization)}"
            )
        op, proxg = ops[0], proxes[0]
        if get_kind(op) != OperatorKind.IDENTITY:
            proxg = prox.UnitaryTransform(proxg, op)
        return fista(
            E,
            y,
            proxg,
            x=x,
            max_iter=config.maxit,
            tol=tol,
            alpha=1.0 if normalized else None,
            show_pbar=show_pbar,
        )

    if len(ops) == 1:
        G, proxg = ops[0], proxes[0]
    else:
        G, proxg = linop.Vstack(ops), prox.Stack(proxes)
    return pdhg(E, y, proxg, G, x=x, max_iter=config.maxit, tol=tol, show_pbar=show_pbar)


# %% utils
def _choose_solver(regularization):
    if all(term.is_quadratic for term in regularization):
        return "cg"
    if len(regularization) == 1 and regularization[0].is_unitary:
        return "fista"
    return "pdhg"


def _names(regularization):
    return tuple(type(term).__name__ for term in regularization)
