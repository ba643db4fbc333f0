"""Data scaling strategies."""

__all__ = [
    "Normalization",
    "NoScaling",
    "BartScaling",
    "MeasurementBasedScaling",
    "get_normalization",
    "get_scale",
]

import abc
import math
import warnings

from numpy.typing import NDArray

from .._errors import ConfigurationError
from .._utils import get_array_module


class Normalization(abc.ABC):
    """Strategy computing the data scale from the adjoint image and the data."""

    @abc.abstractmethod
    def __call__(self, x_adj: NDArray, y: NDArray) -> float:
        pass


class NoScaling(Normalization):
    """Unit scale."""

    def __call__(self, x_adj, y):
        return 1.0


class BartScaling(Normalization):
    """
    Scale from the magnitude distribution of the adjoint image.

    Uses the 90th percentile of ``|x_adj|``, or its maximum when the upper
    tail is long (``max - p90 >= 2 * (p90 - median)``).

    """

    def __call__(self, x_adj, y):
        xp = get_array_module(x_adj)
        magnitude = xp.abs(x_adj).ravel()
        if magnitude.size == 0:
            return 0.0
        median = float(xp.median(magnitude))
        p90 = float(xp.quantile(magnitude, 0.9))
        peak = float(magnitude.max())
        if peak - p90 < 2 * (p90 - median):
            return p90
        return peak


class MeasurementBasedScaling(Normalization):
    """Mean magnitude of the measured samples, ``||y||_1 / size(y)``."""

    def __call__(self, x_adj, y):
        if y.size == 0:
            return 0.0
        xp = get_array_module(y)
        return float(xp.abs(y).sum()) / y.size


_NORMALIZATIONS = {
    "none": NoScaling,
    "bart": BartScaling,
    "measurement": MeasurementBasedScaling,
}


def get_normalization(value: str | Normalization) -> Normalization:
    """Resolve a normalization name to a strategy."""
    if isinstance(value, Normalization):
        return value
    if value in _NORMALIZATIONS:
        return _NORMALIZATIONS[value]()
    raise ConfigurationError(
        f"normalization must be one of {tuple(_NORMALIZATIONS)} or a Normalization "
        f"instance, got {value!r}"
    )


def get_scale(normalization: str | Normalization, x_adj: NDArray, y: NDArray) -> float:
    """
    Compute the data scale.

    A zero or non-finite scale is reported and replaced by ``1.0``.

    """
    scale = float(get_normalization(normalization)(x_adj, y))
    if scale == 0 or not math.isfinite(scale):
        warnings.warn(f"data scale is {scale}; using 1.0 instead", RuntimeWarning)
        return 1.0
    return scale
