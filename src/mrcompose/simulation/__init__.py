"""Synthetic coil maps, sampling patterns and acquisitions."""

__all__ = []

from . import _sensitivities  # noqa
from . import _sampling  # noqa
from . import _acquisition  # noqa

from ._sensitivities import *  # noqa
from ._sampling import *  # noqa
from ._acquisition import *  # noqa

__all__.extend(_sensitivities.__all__)
__all__.extend(_sampling.__all__)
__all__.extend(_acquisition.__all__)
