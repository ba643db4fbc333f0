"""Quiet import of sigpy.alg."""

import warnings

with warnings.catch_warnings():
    warnings.simplefilter("ignore")
    from sigpy.alg import *  # noqa
    from sigpy.alg import Alg  # noqa
