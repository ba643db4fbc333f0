"""Backend utilities."""

__all__ = [
    "CUPY_AVAILABLE",
    "with_numpy_cupy",
    "get_array_module",
    "get_thread_budget",
]

import os

from mrinufft._array_compat import (
    CUPY_AVAILABLE,
    get_array_module,
    with_numpy_cupy,
)


def get_thread_budget(threaded: bool = True, num_threads: int | None = None) -> int:
    """
    Resolve the number of threads an operator or executor may use.

    Parameters
    ----------
    threaded : bool, optional
        Toggle multi-threading. The default is ``True``.
    num_threads : int | None, optional
        Explicit budget. The default is ``None`` (all available cores).

    Returns
    -------
    int
        Thread budget (``1`` when threading is disabled).

    """
    if not threaded:
        return 1
    if num_threads is not None:
        if num_threads < 1:
            raise ValueError(f"num_threads must be positive, got {num_threads}")
        return int(num_threads)
    return os.cpu_count() or 1
