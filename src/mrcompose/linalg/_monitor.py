"""Callback for optimizers."""

__all__ = ["Monitor"]

import time

from dataclasses import dataclass, field
from typing import Callable

from numpy.typing import NDArray
from scipy.sparse.linalg import LinearOperator

from .._utils import get_array_module


@dataclass
class Monitor:
    """
    Record the least squares cost at each iteration of a solver.

    The cost is printed through ``printfunc`` every ``freq`` iterations
    when ``verbose`` is set.

    """

    A_reg: LinearOperator
    b_reg: NDArray
    verbose: bool = False
    freq: int = 1
    printfunc: Callable = print
    _cost: list[float] = field(default_factory=list)
    _iter: int = 0
    _start: float = 0.0
    _time: float | None = None

    def __call__(self, input):
        xp = get_array_module(input)
        residual = self.A_reg @ input - self.b_reg
        self._cost.append(0.5 * float(xp.linalg.norm(residual)) ** 2)
        if self.verbose and self._iter % max(self.freq, 1) == 0:
            self.printfunc(f"Iteration: {self._iter} | Cost: {self._cost[-1]:.6e}")
        self._iter += 1

    def start_timer(self):
        self._start = time.perf_counter()

    def stop_timer(self):
        self._time = time.perf_counter() - self._start

    @property
    def time(self) -> float | None:
        return self._time

    @property
    def history(self) -> list[float]:
        return self._cost
