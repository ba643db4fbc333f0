"""Quiet import of sigpy.mri sampling utilities."""

import warnings

with warnings.catch_warnings():
    warnings.simplefilter("ignore")
    from sigpy.mri import poisson  # noqa
