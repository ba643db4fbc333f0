"""Patched import of sigpy.linop."""

import warnings

with warnings.catch_warnings():
    warnings.simplefilter("ignore")
    import sigpy.linop as original_linop


# Allow empty axes (e.g. a mask without samples).
def _patched_check_shape_positive(shape):
    if not all(s >= 0 for s in shape):
        raise ValueError("Shapes must be non-negative, got {}".format(shape))


original_linop._check_shape_positive = _patched_check_shape_positive

from sigpy.linop import *  # noqa

_check_shape_positive = original_linop._check_shape_positive
