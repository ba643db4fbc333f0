"""Dimension-tagged Linear Operator."""

__all__ = ["NamedDimsOp", "check_dims"]

import numpy as np
import xarray as xr

from .._errors import DimensionTagError
from .._sigpy import linop

from ..base import OperatorKind, get_kind


class NamedDimsOp(linop.Linop):
    """
    Linear operator carrying axis tags on its domain and codomain.

    Applying the operator to an ``xarray.DataArray`` checks the input tags
    against ``idims`` and returns a DataArray tagged with ``odims``; plain
    arrays are handled positionally.

    Parameters
    ----------
    encoding : Linop
        Untagged operator.
    idims : list[str] | tuple[str]
        Domain (input) axis tags.
    odims : list[str] | tuple[str] | None, optional
        Codomain (output) axis tags. The default is ``None`` (same as ``idims``).

    """

    kind = OperatorKind.TAGGED

    def __init__(
        self,
        encoding: linop.Linop,
        idims: list[str] | tuple[str],
        odims: list[str] | tuple[str] | None = None,
    ):
        idims = tuple(idims)
        odims = idims if odims is None else tuple(odims)
        if len(idims) != len(encoding.ishape):
            raise DimensionTagError(
                f"domain tags {idims} do not match input shape {tuple(encoding.ishape)}"
            )
        if len(odims) != len(encoding.oshape):
            raise DimensionTagError(
                f"codomain tags {odims} do not match output shape {tuple(encoding.oshape)}"
            )
        self.linop = encoding
        self.idims = idims
        self.odims = odims
        super().__init__(encoding.oshape, encoding.ishape, repr_str=encoding.repr_str)

    @property
    def domain(self) -> tuple[str, ...]:
        return self.idims

    @property
    def codomain(self) -> tuple[str, ...]:
        return self.odims

    def apply(self, input):
        if isinstance(input, xr.DataArray):
            check_dims(input.dims, self.idims, "input")
            return xr.DataArray(self.linop.apply(input.data), dims=self.odims)
        return super().apply(input)

    def _apply(self, input):
        return self.linop.apply(input)

    def _adjoint_linop(self):
        return NamedDimsOp(self.linop.H, self.odims, self.idims)

    def _normal_linop(self):
        return NamedDimsOp(self.linop.N, self.idims, self.idims)

    def __mul__(self, input):
        if isinstance(input, NamedDimsOp):
            return self._compose(input)
        if isinstance(input, xr.DataArray):
            return self.apply(input)
        if np.isscalar(input):
            return self._scale(input)
        return super().__mul__(input)

    def __rmul__(self, input):
        if np.isscalar(input):
            return self._scale(input)
        return NotImplemented

    def _compose(self, other):
        if other.odims != self.idims:
            raise DimensionTagError(
                f"cannot compose operators: codomain {other.odims} of the inner "
                f"operator does not match domain {self.idims} of the outer operator"
            )
        if get_kind(self.linop) == OperatorKind.IDENTITY:
            return NamedDimsOp(other.linop, other.idims, self.odims)
        if get_kind(other.linop) == OperatorKind.IDENTITY:
            return NamedDimsOp(self.linop, other.idims, self.odims)
        return NamedDimsOp(
            linop.Compose([self.linop, other.linop]), other.idims, self.odims
        )

    def _scale(self, value):
        scaled = linop.Multiply(self.linop.oshape, value) * self.linop
        return NamedDimsOp(scaled, self.idims, self.odims)


def check_dims(actual, expected, context: str = "input"):
    """Raise if two tag tuples differ."""
    if tuple(actual) != tuple(expected):
        raise DimensionTagError(
            f"{context} tags {tuple(actual)} do not match expected {tuple(expected)}"
        )
