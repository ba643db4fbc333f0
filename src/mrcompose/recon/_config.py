"""Reconstruction options."""

__all__ = ["Config", "construct_config"]

import dataclasses
from dataclasses import dataclass
from typing import Callable

from .._errors import ConfigurationError
from .._utils import get_thread_budget

from ._executors import EXECUTORS, ReconstructionExecutor
from ._progress import get_reasonable_freq
from ._scaling import Normalization, get_normalization

SOLVERS = (None, "cg", "fista", "pdhg")


@dataclass(frozen=True)
class Config:
    """
    Flat set of reconstruction options.

    Parameters
    ----------
    normalization : str | Normalization, optional
        Data scaling: ``"bart"``, ``"measurement"``, ``"none"`` or a
        ``Normalization`` instance. The default is ``"bart"``.
    tol : float, optional
        Relative solver tolerance (``0`` runs ``maxit`` iterations).
        The default is ``1e-4``.
    maxit : int, optional
        Maximum number of solver iterations. The default is ``100``.
    freq : int | None, optional
        Printing frequency of the iterative solvers. The default is ``None``
        (about 20 lines per solve).
    verbose : bool, optional
        Print progress. The default is ``True``.
    threaded : bool, optional
        Enable multi-threading. The default is ``True``.
    num_threads : int | None, optional
        Thread budget. The default is ``None`` (all cores).
    exact_opnorm : bool, optional
        Converge the power iteration for the operator norm.
        The default is ``False``.
    solver : str | None, optional
        Force ``"cg"``, ``"fista"`` or ``"pdhg"``. The default is ``None``
        (picked from the regularization terms).
    decomposition_executor : str | ReconstructionExecutor | None, optional
        Force ``"sequential"``, ``"multithreading"`` or an executor instance.
        The default is ``None`` (picked from the plan).
    disable_inverse_scale_output : bool, optional
        Return the solution in scaled units. The default is ``False``.
    disable_problem_decomposition : bool, optional
        Always solve the whole problem at once. The default is ``False``.
    disable_operator_normalization : bool, optional
        Skip the unit-norm scaling of the encoding operator.
        The default is ``False``.
    disable_normalop_optimization : bool, optional
        Apply the normal operator ``E^H E`` as the encoding followed by its
        adjoint, without collapsing unitary factors. The default is ``False``.
    printfunc : Callable, optional
        Progress printer. The default is ``print``.

    """

    normalization: str | Normalization = "bart"
    tol: float = 1e-4
    maxit: int = 100
    freq: int | None = None
    verbose: bool = True
    threaded: bool = True
    num_threads: int | None = None
    exact_opnorm: bool = False
    solver: str | None = None
    decomposition_executor: str | ReconstructionExecutor | None = None
    disable_inverse_scale_output: bool = False
    disable_problem_decomposition: bool = False
    disable_operator_normalization: bool = False
    disable_normalop_optimization: bool = False
    printfunc: Callable = print

    def __post_init__(self):
        get_normalization(self.normalization)
        if self.solver not in SOLVERS:
            raise ConfigurationError(
                f"solver must be one of {SOLVERS}, got {self.solver!r}"
            )
        executor = self.decomposition_executor
        if not (
            executor is None
            or isinstance(executor, ReconstructionExecutor)
            or executor in EXECUTORS
        ):
            raise ConfigurationError(
                f"decomposition_executor must be one of {tuple(EXECUTORS)} or a "
                f"ReconstructionExecutor instance, got {executor!r}"
            )
        if self.tol < 0:
            raise ConfigurationError(f"tol must be non-negative, got {self.tol}")
        if self.maxit < 0:
            raise ConfigurationError(f"maxit must be non-negative, got {self.maxit}")
        if self.freq is not None and self.freq < 1:
            raise ConfigurationError(f"freq must be positive, got {self.freq}")
        if self.num_threads is not None and self.num_threads < 1:
            raise ConfigurationError(
                f"num_threads must be positive, got {self.num_threads}"
            )

    @property
    def thread_budget(self) -> int:
        """Number of threads operators and executors may use."""
        return get_thread_budget(self.threaded, self.num_threads)

    @property
    def print_freq(self) -> int:
        if self.freq is None:
            return get_reasonable_freq(self.maxit)
        return self.freq

    def replace(self, **kwargs) -> "Config":
        """Copy the options, overriding the given ones."""
        return construct_config(self, **kwargs)

    def log(self, *args):
        if self.verbose:
            self.printfunc(*args)


def construct_config(config: Config | None = None, **kwargs) -> Config:
    """
    Build reconstruction options strictly.

    Parameters
    ----------
    config : Config | None, optional
        Base options. The default is ``None`` (defaults).
    **kwargs
        Option overrides.

    Returns
    -------
    Config
        Options.

    Raises
    ------
    ConfigurationError
        If an option name is unknown.

    """
    names = {field.name for field in dataclasses.fields(Config)}
    for key in kwargs:
        if key not in names:
            raise ConfigurationError(f"Unknown keyword argument: {key}")
    if config is None:
        return Config(**kwargs)
    return dataclasses.replace(config, **kwargs)
