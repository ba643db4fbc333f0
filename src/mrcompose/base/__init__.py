"""Basic Linear operators for MRI encoding."""

__all__ = []

from . import _traits  # noqa
from . import _fft_op  # noqa
from . import _index_op  # noqa
from . import _mult_op  # noqa

from ._traits import *  # noqa
from ._fft_op import *  # noqa
from ._index_op import *  # noqa
from ._mult_op import *  # noqa

__all__.extend(_traits.__all__)
__all__.extend(_fft_op.__all__)
__all__.extend(_index_op.__all__)
__all__.extend(_mult_op.__all__)
