"""Regularization terms."""

__all__ = []

from . import _base  # noqa
from . import _prox  # noqa
from . import _spatial  # noqa
from . import _temporal  # noqa

from ._base import *  # noqa
from ._prox import *  # noqa
from ._spatial import *  # noqa
from ._temporal import *  # noqa

__all__.extend(_base.__all__)
__all__.extend(_prox.__all__)
__all__.extend(_spatial.__all__)
__all__.extend(_temporal.__all__)
