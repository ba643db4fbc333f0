"""Main MRCompose API."""

__all__ = []

from . import acquisition  # noqa
from . import base  # noqa
from . import encoding  # noqa
from . import gadgets  # noqa
from . import interop  # noqa
from . import linalg  # noqa
from . import recon  # noqa
from . import regularization  # noqa
from . import simulation  # noqa

from . import _errors  # noqa

from ._errors import *  # noqa
from .acquisition import AcquisitionInfo  # noqa
from .encoding import get_encoding_operator  # noqa
from .recon import Config, reconstruct  # noqa
from .regularization import (  # noqa
    L1Image,
    L1Wavelet2D,
    L1Wavelet3D,
    LowRank,
    RankLimit,
    TemporalFourier,
    Tikhonov,
    TotalVariation2D,
    TotalVariation3D,
)

__all__.extend(_errors.__all__)
__all__.extend(
    [
        "AcquisitionInfo",
        "get_encoding_operator",
        "Config",
        "reconstruct",
        "Tikhonov",
        "L1Image",
        "L1Wavelet2D",
        "L1Wavelet3D",
        "TotalVariation2D",
        "TotalVariation3D",
        "TemporalFourier",
        "LowRank",
        "RankLimit",
    ]
)
