"""Batched Encoding Operator."""

__all__ = ["Batch"]

import numpy as np

from .._sigpy import get_device
from .._sigpy import linop

from ..base import OperatorKind


class Batch(linop.Linop):
    """
    Apply an operator independently to every element of a trailing batch.

    Parameters
    ----------
    encoding : Linop
        Single-element operator.
    batch_shape : list[int] | tuple[int]
        Shape of the trailing batch axes.

    """

    kind = OperatorKind.BATCH

    def __init__(self, encoding: linop.Linop, batch_shape: list[int] | tuple[int]):
        self.linop = encoding
        self.batch_shape = tuple(batch_shape)
        nbatch = len(self.batch_shape)
        super().__init__(
            list(encoding.oshape) + list(self.batch_shape),
            list(encoding.ishape) + list(self.batch_shape),
            repr_str=f"Batched[{nbatch}] " + encoding.repr_str,
        )

    def _apply(self, input):
        if not self.batch_shape:
            return self.linop(input)
        device = get_device(input)
        xp = device.xp
        output = None
        with device:
            for idx in np.ndindex(*self.batch_shape):
                index = (Ellipsis,) + idx
                value = self.linop(input[index])
                if output is None:
                    output = xp.empty(self.oshape, dtype=value.dtype)
                output[index] = value
            if output is None:
                output = xp.zeros(self.oshape, dtype=input.dtype)
        return output

    def _adjoint_linop(self):
        return Batch(self.linop.H, self.batch_shape)

    def _normal_linop(self):
        return Batch(self.linop.N, self.batch_shape)
