"""Reconstruction entry point."""

__all__ = ["reconstruct"]

import time

import numpy as np
import xarray as xr
from numpy.typing import NDArray

from .._utils import ensure_tuple, get_array_module, is_tagged, unwrap

from ..acquisition import get_image_dims
from ..encoding import get_encoding_operator, normalize_operator
from ..gadgets import NamedDimsOp

from ._config import Config, construct_config
from ._decomposition import get_problem_decomposition_plan
from ._executors import execute
from ._progress import format_time, step
from ._scaling import get_scale
from ._solve import solve


def reconstruct(
    info,
    regularization=(),
    x0: NDArray[complex] | xr.DataArray | None = None,
    config: Config | None = None,
    **options,
) -> NDArray[complex] | xr.DataArray:
    """
    Reconstruct an image from an acquisition.

    Without regularization this is the adjoint reconstruction ``E^H y``.
    With regularization, the data and the encoding operator are scaled,
    the problem is solved (per slice, when it decouples over batch axes)
    and the solution is scaled back.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor with k-space data.
    regularization : Regularization | list | tuple, optional
        Regularization terms. The default is ``()``.
    x0 : NDArray[complex] | xr.DataArray | None, optional
        Initial guess. Disables decomposition. The default is ``None``.
    config : Config | None, optional
        Base options. The default is ``None``.
    **options
        Option overrides (see ``Config``). Unknown names are an error.

    Returns
    -------
    NDArray[complex] | xr.DataArray
        Reconstructed image, tagged with the image axes if the k-space
        data is tagged.

    """
    config = construct_config(config, **options)
    regularization = ensure_tuple(regularization)
    start = time.perf_counter()

    plan = get_problem_decomposition_plan(info, regularization, config, x0)
    if plan is None:
        output, _ = _reconstruct(info, regularization, config, x0)
    else:
        config.log(f"Decomposition plan: {plan}")

        def _solve(local_info, local_config):
            return _reconstruct(local_info, regularization, local_config)

        output, scale = execute(plan, info, config, _solve)
        config.log(f"Median scale: {scale:.4e}")

    config.log(f"Total time: {format_time(time.perf_counter() - start)}")
    return output


def _reconstruct(info, regularization, config, x0=None):
    with step("building encoding operator", config):
        E = get_encoding_operator(info, config.thread_budget)
    if isinstance(E, NamedDimsOp):
        E = E.linop

    y = unwrap(info.kspace_data)
    with step("adjoint", config):
        x_adj = E.H(y)
    scale = get_scale(config.normalization, x_adj, y)
    config.log(f"Scale: {scale:.4e}")

    if not regularization:
        x = x_adj / scale if config.disable_inverse_scale_output else x_adj
        return _wrap(x, info), scale

    y = y / scale
    L = 1.0
    if not config.disable_operator_normalization:
        with step("operator normalization", config):
            E, L = normalize_operator(E, config.exact_opnorm, dtype=y.dtype)
        config.log(f"Operator norm: {L:.4e}")

    if x0 is None:
        x_init = x_adj / (L * scale)
    else:
        x_init = unwrap(x0) * (L / scale)
    tol = _get_tolerance(config.tol, x_init)

    with step("solve", config, announce=True):
        x = solve(
            E,
            y,
            regularization,
            x_init,
            config,
            tol=tol,
            normalized=not config.disable_operator_normalization,
            dims=get_image_dims(info),
        )
    x = x / L
    if not config.disable_inverse_scale_output:
        x = x * scale
    return _wrap(x, info), scale


# %% utils
def _get_tolerance(tol, x_init):
    if tol == 0:
        return 0.0
    xp = get_array_module(x_init)
    eps = np.finfo(x_init.dtype).eps
    peak = float(xp.abs(x_init).max()) if x_init.size else 0.0
    return max(10 * eps, tol * peak)


def _wrap(x, info):
    if is_tagged(info.kspace_data):
        return xr.DataArray(x, dims=get_image_dims(info))
    return x
