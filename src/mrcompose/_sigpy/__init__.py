"""SigPy import."""

from . import alg, app, backend, linop, mri, prox  # noqa

from .backend import *  # noqa

__all__ = ["alg", "app", "linop", "mri", "prox"]
__all__.extend(backend.__all__)
