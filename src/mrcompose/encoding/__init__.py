"""Encoding operator builders."""

__all__ = []

from . import _fourier  # noqa
from . import _sensitivity  # noqa
from . import _subsampling  # noqa
from . import _encoding  # noqa
from . import _opnorm  # noqa
from . import _normal  # noqa

from ._fourier import *  # noqa
from ._sensitivity import *  # noqa
from ._subsampling import *  # noqa
from ._encoding import *  # noqa
from ._opnorm import *  # noqa
from ._normal import *  # noqa

__all__.extend(_fourier.__all__)
__all__.extend(_sensitivity.__all__)
__all__.extend(_subsampling.__all__)
__all__.extend(_encoding.__all__)
__all__.extend(_opnorm.__all__)
__all__.extend(_normal.__all__)
