"""Indexing Linear Operator."""

__all__ = ["Subsample", "ZeroFill"]

from numpy.typing import NDArray

from .._sigpy.linop import Linop

from .._functional import subsample, zerofill

from ._traits import OperatorKind


class Subsample(Linop):
    """
    Subsampling linear operator.

    Selects k-space samples over the leading Cartesian axes; trailing
    batch axes are passed through untouched.

    Parameters
    ----------
    indexes : tuple[NDArray[int], ...]
        One index array per Cartesian axis, broadcasting to ``counts``.
    shape : list[int] | tuple[int]
        Cartesian grid shape.
    counts : list[int] | tuple[int]
        Sampled shape (one entry per pattern component).
    batch_shape : list[int] | tuple[int], optional
        Trailing batch shape. The default is ``()``.
    duplicate_entries : bool, optional
        Some grid points are sampled more than once. The default is ``False``.

    """

    kind = OperatorKind.SUBSAMPLING

    def __init__(
        self,
        indexes: tuple[NDArray[int], ...],
        shape: list[int] | tuple[int],
        counts: list[int] | tuple[int],
        batch_shape: list[int] | tuple[int] = (),
        duplicate_entries: bool = False,
    ):
        self.indexes = tuple(indexes)
        self.shape = tuple(shape)
        self.counts = tuple(counts)
        self.batch_shape = tuple(batch_shape)
        self.duplicate_entries = duplicate_entries
        super().__init__(self.counts + self.batch_shape, self.shape + self.batch_shape)

    def _apply(self, input):
        return subsample(input, self.indexes)

    def _adjoint_linop(self):
        return ZeroFill(
            self.indexes,
            self.shape,
            self.counts,
            self.batch_shape,
            self.duplicate_entries,
        )


class ZeroFill(Linop):
    """
    Zero-filling linear operator (adjoint of ``Subsample``).

    Parameters
    ----------
    indexes : tuple[NDArray[int], ...]
        One index array per Cartesian axis, broadcasting to ``counts``.
    shape : list[int] | tuple[int]
        Cartesian grid shape.
    counts : list[int] | tuple[int]
        Sampled shape.
    batch_shape : list[int] | tuple[int], optional
        Trailing batch shape. The default is ``()``.
    duplicate_entries : bool, optional
        Accumulate repeated samples. The default is ``False``.

    """

    kind = OperatorKind.SUBSAMPLING

    def __init__(
        self,
        indexes: tuple[NDArray[int], ...],
        shape: list[int] | tuple[int],
        counts: list[int] | tuple[int],
        batch_shape: list[int] | tuple[int] = (),
        duplicate_entries: bool = False,
    ):
        self.indexes = tuple(indexes)
        self.shape = tuple(shape)
        self.counts = tuple(counts)
        self.batch_shape = tuple(batch_shape)
        self.duplicate_entries = duplicate_entries
        super().__init__(self.shape + self.batch_shape, self.counts + self.batch_shape)

    def _apply(self, input):
        return zerofill(input, self.indexes, self.shape, self.duplicate_entries)

    def _adjoint_linop(self):
        return Subsample(
            self.indexes,
            self.shape,
            self.counts,
            self.batch_shape,
            self.duplicate_entries,
        )
