"""Add functionalities to encoding operators."""

__all__ = []

from . import _batched  # noqa
from . import _named  # noqa

from ._batched import *  # noqa
from ._named import *  # noqa

__all__.extend(_batched.__all__)
__all__.extend(_named.__all__)
