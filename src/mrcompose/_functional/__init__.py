"""Functional kernels."""

__all__ = []

from ._fftc import *  # noqa
from ._index import *  # noqa

from . import _fftc  # noqa
from . import _index  # noqa

__all__.extend(_fftc.__all__)
__all__.extend(_index.__all__)
