"""Progress reporting helpers."""

__all__ = ["format_time", "step", "get_reasonable_freq"]

import time
from contextlib import contextmanager

_FREQS = (1, 5, 10, 20, 50, 100)


def format_time(seconds: float) -> str:
    """Render a duration with a readable unit."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.1f} µs"
    if seconds < 1.0:
        return f"{seconds * 1e3:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    if seconds < 3600.0:
        return f"{seconds / 60.0:.2f} min"
    return f"{seconds / 3600.0:.2f} h"


@contextmanager
def step(name: str, config, announce: bool = False):
    """
    Time a reconstruction step.

    Prints ``"<Name>: <elapsed>"`` when the step ends, or
    ``"Starting <name>..."`` and ``"Finished <name> in <elapsed>"``
    when ``announce`` is set. Nothing is printed unless ``config.verbose``.

    """
    if announce and config.verbose:
        config.printfunc(f"Starting {name}...")
    start = time.perf_counter()
    yield
    elapsed = format_time(time.perf_counter() - start)
    if not config.verbose:
        return
    if announce:
        config.printfunc(f"Finished {name} in {elapsed}")
    else:
        config.printfunc(f"{name[:1].upper()}{name[1:]}: {elapsed}")


def get_reasonable_freq(maxit: int) -> int:
    """Printing frequency giving roughly 20 progress lines."""
    target = maxit // 20
    for freq in _FREQS:
        if freq >= target:
            return freq
    return _FREQS[-1]
