"""Utilities."""

__all__ = []

from ._backend import *  # noqa
from ._misc import *  # noqa

from . import _backend  # noqa
from . import _misc  # noqa

__all__.extend(_backend.__all__)
__all__.extend(_misc.__all__)
