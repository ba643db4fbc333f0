"""Quiet import of sigpy.backend."""

__all__ = ["get_array_module", "get_device"]

import warnings

with warnings.catch_warnings():
    warnings.simplefilter("ignore")
    from sigpy.backend import get_array_module, get_device  # noqa
