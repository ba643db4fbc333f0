"""Reconstruction pipeline."""

__all__ = []

from . import _progress  # noqa
from . import _scaling  # noqa
from . import _executors  # noqa
from . import _config  # noqa
from . import _decomposition  # noqa
from . import _solve  # noqa
from . import _reconstruct  # noqa

from ._progress import *  # noqa
from ._scaling import *  # noqa
from ._executors import *  # noqa
from ._config import *  # noqa
from ._decomposition import *  # noqa
from ._solve import *  # noqa
from ._reconstruct import *  # noqa

__all__.extend(_progress.__all__)
__all__.extend(_scaling.__all__)
__all__.extend(_executors.__all__)
__all__.extend(_config.__all__)
__all__.extend(_decomposition.__all__)
__all__.extend(_solve.__all__)
__all__.extend(_reconstruct.__all__)
