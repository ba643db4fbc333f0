"""Decomposition executors test."""

import pytest

import numpy as np
import xarray as xr

from mrcompose import AcquisitionInfo, Config, L1Image
from mrcompose._utils import unwrap
from mrcompose.recon import (
    MultiThreadingExecutor,
    SequentialExecutor,
    execute,
    get_problem_decomposition_plan,
    suggest_executor,
)

QUIET = Config(verbose=False)


@pytest.fixture
def stacked_info():
    ksp = np.stack([np.full((8, 8), k, dtype=complex) for k in range(3)], axis=-1)
    return AcquisitionInfo(kspace_data=ksp, is_3d=False)


def _echo(info, config):
    """Return the slice data as the image and its index plus one as the scale."""
    ksp = unwrap(info.kspace_data)
    return ksp.copy(), float(ksp[0, 0].real) + 1


@pytest.mark.parametrize("executor", [SequentialExecutor(), MultiThreadingExecutor(2)])
def test_results_keep_item_order(executor):
    """Test that executors yield results in item order."""
    out = list(executor.map(lambda n: n * n, list(range(20)), QUIET))
    assert out == [n * n for n in range(20)]


def test_suggest_executor(stacked_info):
    """Test the execution strategy choice."""
    plan = get_problem_decomposition_plan(stacked_info, [L1Image(0.1)], QUIET)

    forced = MultiThreadingExecutor()
    assert suggest_executor(plan, QUIET.replace(decomposition_executor=forced)) is forced
    assert isinstance(
        suggest_executor(plan, QUIET.replace(decomposition_executor="sequential")),
        SequentialExecutor,
    )
    assert isinstance(suggest_executor(plan, QUIET.replace(threaded=False)), SequentialExecutor)
    assert isinstance(
        suggest_executor(plan, QUIET.replace(num_threads=2)), MultiThreadingExecutor
    )
    assert isinstance(suggest_executor(plan, QUIET.replace(num_threads=3)), SequentialExecutor)


@pytest.mark.parametrize("name", ["sequential", "multithreading"])
def test_execute_reassembles_slices(stacked_info, name):
    """Test that slices land at their position and the median scale is reported."""
    config = QUIET.replace(decomposition_executor=name)
    plan = get_problem_decomposition_plan(stacked_info, [L1Image(0.1)], config)
    output, scale = execute(plan, stacked_info, config, _echo)
    np.testing.assert_array_equal(output, stacked_info.kspace_data)
    assert scale == 2.0


def test_slice_options(stacked_info):
    """Test the options handed to every slice."""
    seen = []

    def solve(info, config):
        seen.append(config)
        config.printfunc("done")
        return _echo(info, config)

    lines = []

    def printer(*args):
        lines.append(" ".join(str(arg) for arg in args))

    config = Config(printfunc=printer, num_threads=4)
    plan = get_problem_decomposition_plan(stacked_info, [L1Image(0.1)], config.replace(verbose=False))
    execute(plan, stacked_info, config, solve, executor=MultiThreadingExecutor(2))

    assert all(not c.verbose for c in seen)
    assert all(not c.threaded for c in seen)
    assert sorted(lines) == ["[:, :, 0] done", "[:, :, 1] done", "[:, :, 2] done"]


def test_execute_tagged():
    """Test that tagged data yields a tagged image."""
    ksp = xr.DataArray(np.zeros((8, 8, 2), dtype=complex), dims=("kx", "ky", "echo"))
    info = AcquisitionInfo(kspace_data=ksp)
    plan = get_problem_decomposition_plan(info, [L1Image(0.1)], QUIET)
    output, _ = execute(plan, info, QUIET, _echo)
    assert output.dims == ("x", "y", "echo")


def test_execute_tagged_multislice(make_info):
    """Test that tagged multi-slice data and maps are sliced together."""
    base = make_info("multislice", "full")
    ksp, smaps = base.kspace_data, base.sensitivity_maps
    info = AcquisitionInfo(
        kspace_data=xr.DataArray(ksp, dims=("kx", "ky", "coil", "z")),
        sensitivity_maps=xr.DataArray(smaps, dims=("x", "y", "coil", "z")),
    )
    plan = get_problem_decomposition_plan(info, [L1Image(0.1)], QUIET)
    assert plan.slices_sensitivity_maps

    seen = []

    def solve(local_info, local_config):
        seen.append(local_info)
        maps = unwrap(local_info.sensitivity_maps)
        return np.sum(np.conj(maps) * unwrap(local_info.kspace_data), axis=2), 1.0

    output, _ = execute(plan, info, QUIET, solve, executor=SequentialExecutor())

    assert len(seen) == ksp.shape[-1]
    assert all(local.kspace_data.dims == ("kx", "ky", "coil") for local in seen)
    assert all(local.sensitivity_maps.dims == ("x", "y", "coil") for local in seen)
    assert output.dims == ("x", "y", "z")
    np.testing.assert_allclose(output.data, np.sum(np.conj(smaps) * ksp, axis=2))


def test_execute_tagged_time_series_keeps_maps():
    """Test that a tagged time axis is sliced while shared maps are kept."""
    ksp = np.stack([np.full((8, 8, 2), t, dtype=complex) for t in range(4)], axis=-1)
    smaps = np.ones((8, 8, 2), dtype=complex)
    info = AcquisitionInfo(
        kspace_data=xr.DataArray(ksp, dims=("kx", "ky", "coil", "time")),
        sensitivity_maps=xr.DataArray(smaps, dims=("x", "y", "coil")),
    )
    plan = get_problem_decomposition_plan(info, [L1Image(0.1)], QUIET)
    assert not plan.slices_sensitivity_maps

    def solve(local_info, local_config):
        assert local_info.sensitivity_maps.shape == (8, 8, 2)
        return unwrap(local_info.kspace_data).sum(axis=2), 1.0

    output, _ = execute(plan, info, QUIET, solve, executor=SequentialExecutor())
    assert output.dims == ("x", "y", "time")
    np.testing.assert_allclose(output.data, ksp.sum(axis=2))
