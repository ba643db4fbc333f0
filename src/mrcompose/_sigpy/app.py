"""Quiet import of sigpy.app."""

import warnings

with warnings.catch_warnings():
    warnings.simplefilter("ignore")
    from sigpy.app import *  # noqa
    from sigpy.app import App, LinearLeastSquares, MaxEig  # noqa
