"""Linear solvers."""

__all__ = []

from . import _cg  # noqa
from . import _proximal  # noqa

from ._cg import *  # noqa
from ._proximal import *  # noqa

__all__.extend(_cg.__all__)
__all__.extend(_proximal.__all__)
