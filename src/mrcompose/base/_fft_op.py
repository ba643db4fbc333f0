"""Fast Fourier Transform Linear Operator."""

__all__ = ["FFT", "IFFT"]

import math

from .._sigpy.linop import Linop, Identity, Multiply
from .._functional import fft, ifft

from ._traits import OperatorKind

_ADJOINT_NORM = {"backward": "forward", "forward": "backward", "ortho": "ortho"}


class FFT(Linop):
    """
    FFT linear operator.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Input shape.
    axes : list[int] | tuple[int] | None, optional
        Axes over which to compute the FFT.
        The default is ``None`` (all axes).
    ishift : list[int] | tuple[int], optional
        Image-side axes to ifftshift before the transform.
        The default is ``()``.
    oshift : list[int] | tuple[int], optional
        Frequency-side axes to fftshift after the transform.
        The default is ``()``.
    norm : str, optional
        Normalization mode. The default is ``"backward"``
        (unnormalized, ``E^H E = N I``).
    workers : int, optional
        Thread budget. The default is ``1``.

    """

    kind = OperatorKind.FOURIER

    def __init__(
        self,
        shape: list[int] | tuple[int],
        axes: list[int] | tuple[int] | None = None,
        ishift: list[int] | tuple[int] = (),
        oshift: list[int] | tuple[int] = (),
        norm: str = "backward",
        workers: int = 1,
    ):
        if norm not in _ADJOINT_NORM:
            raise ValueError(f"norm must be one of {tuple(_ADJOINT_NORM)}, got {norm}")
        self.axes = tuple(range(len(shape))) if axes is None else tuple(axes)
        self.ishift = tuple(ishift)
        self.oshift = tuple(oshift)
        self.norm = norm
        self.workers = workers
        super().__init__(shape, shape)

    @property
    def npoints(self) -> int:
        return math.prod(self.ishape[ax] for ax in self.axes)

    @property
    def norm_factor(self) -> float:
        """Operator norm of the transform."""
        return _norm_factor(self.norm, self.npoints)

    def _apply(self, input):
        return fft(
            input,
            axes=self.axes,
            ishift=self.ishift,
            oshift=self.oshift,
            norm=self.norm,
            workers=self.workers,
        )

    def _adjoint_linop(self):
        return IFFT(
            self.ishape,
            axes=self.axes,
            ishift=self.oshift,
            oshift=self.ishift,
            norm=_ADJOINT_NORM[self.norm],
            workers=self.workers,
        )

    def _normal_linop(self):
        return _scaled_identity(self.ishape, self.norm_factor**2)


class IFFT(Linop):
    """
    IFFT linear operator.

    Parameters
    ----------
    shape : list[int] | tuple[int]
        Input shape.
    axes : list[int] | tuple[int] | None, optional
        Axes over which to compute the IFFT.
        The default is ``None`` (all axes).
    ishift : list[int] | tuple[int], optional
        Frequency-side axes to ifftshift before the transform.
        The default is ``()``.
    oshift : list[int] | tuple[int], optional
        Image-side axes to fftshift after the transform.
        The default is ``()``.
    norm : str, optional
        Normalization mode. The default is ``"forward"``
        (unnormalized inverse, adjoint of the default ``FFT``).
    workers : int, optional
        Thread budget. The default is ``1``.

    """

    kind = OperatorKind.FOURIER

    def __init__(
        self,
        shape: list[int] | tuple[int],
        axes: list[int] | tuple[int] | None = None,
        ishift: list[int] | tuple[int] = (),
        oshift: list[int] | tuple[int] = (),
        norm: str = "forward",
        workers: int = 1,
    ):
        if norm not in _ADJOINT_NORM:
            raise ValueError(f"norm must be one of {tuple(_ADJOINT_NORM)}, got {norm}")
        self.axes = tuple(range(len(shape))) if axes is None else tuple(axes)
        self.ishift = tuple(ishift)
        self.oshift = tuple(oshift)
        self.norm = norm
        self.workers = workers
        super().__init__(shape, shape)

    @property
    def npoints(self) -> int:
        return math.prod(self.ishape[ax] for ax in self.axes)

    @property
    def norm_factor(self) -> float:
        # norm of the inverse transform mirrors the forward one
        return _norm_factor(_ADJOINT_NORM[self.norm], self.npoints)

    def _apply(self, input):
        return ifft(
            input,
            axes=self.axes,
            ishift=self.ishift,
            oshift=self.oshift,
            norm=self.norm,
            workers=self.workers,
        )

    def _adjoint_linop(self):
        return FFT(
            self.ishape,
            axes=self.axes,
            ishift=self.oshift,
            oshift=self.ishift,
            norm=_ADJOINT_NORM[self.norm],
            workers=self.workers,
        )

    def _normal_linop(self):
        return _scaled_identity(self.ishape, self.norm_factor**2)


# %% utils
def _norm_factor(norm, npoints):
    if norm == "backward":
        return math.sqrt(npoints)
    if norm == "forward":
        return 1.0 / math.sqrt(npoints)
    return 1.0


def _scaled_identity(shape, value):
    if value == 1.0:
        return Identity(shape)
    return Multiply(shape, value)
