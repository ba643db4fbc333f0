"""Execution strategies for decomposed reconstructions."""

__all__ = [
    "ReconstructionExecutor",
    "SequentialExecutor",
    "MultiThreadingExecutor",
    "suggest_executor",
    "execute",
]

import abc
from typing import Callable, Iterator

import numpy as np
import xarray as xr
from joblib import Parallel, delayed
from tqdm.auto import tqdm

from .._utils import get_array_module, is_tagged, unwrap

from ..acquisition import get_image_dims


class ReconstructionExecutor(abc.ABC):
    """Strategy running the per-slice solves of a decomposition plan."""

    @abc.abstractmethod
    def map(self, func: Callable, items: list, config) -> Iterator:
        """Apply ``func`` to every item, yielding results in item order."""
        pass

    def slice_options(self, config) -> dict:
        """Option overrides of the per-slice reconstructions."""
        return {}


class SequentialExecutor(ReconstructionExecutor):
    """Solve slices one after the other."""

    def map(self, func, items, config):
        for item in tqdm(items, desc="Slices", disable=not config.verbose):
            yield func(item)


class MultiThreadingExecutor(ReconstructionExecutor):
    """
    Solve slices concurrently on a joblib thread pool.

    Slices run single-threaded to avoid nested parallelism.

    Parameters
    ----------
    n_jobs : int | None, optional
        Number of workers. The default is ``None`` (the configured thread budget).

    """

    def __init__(self, n_jobs: int | None = None):
        self.n_jobs = n_jobs

    def map(self, func, items, config):
        n_jobs = self.n_jobs or config.thread_budget
        results = Parallel(n_jobs=n_jobs, prefer="threads", return_as="generator")(
            delayed(func)(item) for item in items
        )
        with tqdm(total=len(items), desc="Slices", disable=not config.verbose) as pbar:
            for result in results:
                pbar.update(1)
                yield result

    def slice_options(self, config):
        return {"threaded": False}


EXECUTORS = {
    "sequential": SequentialExecutor,
    "multithreading": MultiThreadingExecutor,
}


def suggest_executor(plan, config) -> ReconstructionExecutor:
    """
    Pick an execution strategy.

    A forced executor wins. Otherwise slices run on a thread pool when
    threading is enabled and there are more slices than threads.

    """
    executor = config.decomposition_executor
    if isinstance(executor, ReconstructionExecutor):
        return executor
    if executor is not None:
        return EXECUTORS[executor]()
    if config.threaded and len(plan) > config.thread_budget:
        return MultiThreadingExecutor()
    return SequentialExecutor()


def execute(
    plan,
    info,
    config,
    solve: Callable,
    executor: ReconstructionExecutor | None = None,
):
    """
    Run a decomposed reconstruction and reassemble the image.

    Parameters
    ----------
    plan : DecompositionPlan
        Decomposition plan.
    info : AcquisitionInfo
        Full acquisition descriptor.
    config : Config
        Reconstruction options.
    solve : Callable
        ``solve(info, config) -> (image, scale)`` for a single slice.
    executor : ReconstructionExecutor | None, optional
        Execution strategy. The default is ``None`` (``suggest_executor``).

    Returns
    -------
    image : NDArray | xr.DataArray
        Reassembled image (tagged if the k-space data is).
    scale : float
        Median per-slice data scale.

    """
    if executor is None:
        executor = suggest_executor(plan, config)
    indices = list(np.ndindex(*plan.batch_shape))
    overrides = executor.slice_options(config)

    def run(index):
        local_info = _slice_info(plan, info, index)
        local_config = config.replace(
            verbose=False,
            printfunc=_prefixed(config.printfunc, plan.slice_id(index)),
            **overrides,
        )
        return solve(local_info, local_config)

    output = None
    scales = []
    for index, (image, scale) in zip(indices, executor.map(run, indices, config)):
        image = unwrap(image)
        if output is None:
            xp = get_array_module(image)
            output = xp.zeros(plan.image_size, dtype=image.dtype)
        output[plan.image_index(index)] = image
        scales.append(scale)

    if output is None:
        output = np.zeros(plan.image_size, dtype=unwrap(info.kspace_data).dtype)
    scale = float(np.median(scales)) if scales else 1.0
    if is_tagged(info.kspace_data):
        output = xr.DataArray(output, dims=get_image_dims(info))
    return output, scale


# %% utils
def _slice_info(plan, info, index):
    kspace_data = info.kspace_data[plan.kspace_index(index)]
    sensitivity_maps = info.sensitivity_maps
    if plan.slices_sensitivity_maps:
        z = index[plan.image_batch_dims.index(2)]
        sensitivity_maps = sensitivity_maps[..., z]
    return info.replace(kspace_data=kspace_data, sensitivity_maps=sensitivity_maps)


def _prefixed(printfunc, prefix):
    def _print(*args, **kwargs):
        printfunc(prefix, *args, **kwargs)

    return _print
