"""Acquisition descriptor and subsampling patterns."""

__all__ = []

from . import _subsampling  # noqa
from . import _dims  # noqa
from . import _info  # noqa

from ._subsampling import *  # noqa
from ._dims import *  # noqa
from ._info import *  # noqa

__all__.extend(_subsampling.__all__)
__all__.extend(_dims.__all__)
__all__.extend(_info.__all__)
