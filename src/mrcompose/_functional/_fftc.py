"""Fast Fourier Transform with fused shifts."""

__all__ = ["fft", "ifft"]

import numpy as np
from numpy.typing import NDArray

import scipy.fft

from .._utils import get_array_module


def fft(
    input: NDArray[complex],
    axes: int | list[int] | tuple[int] | None = None,
    ishift: list[int] | tuple[int] = (),
    oshift: list[int] | tuple[int] = (),
    norm: str = "backward",
    workers: int = 1,
) -> NDArray[complex]:
    """
    FFT function with optional ifftshift on input and fftshift on output.

    Computes ``fftshift(fftn(ifftshift(input, ishift)), oshift)`` where the
    shifts act on the listed axes only. Shifts over even-length axes are
    applied as sign alternations in the dual domain, so that shifting and
    transforming happen in a single pass.

    Parameters
    ----------
    input : NDArray[complex]
        Input array.
    axes :  int | list[int] | tuple[int] | None, optional
        Axes over which to compute the FFT.
        The default is ``None`` (all axes).
    ishift : list[int] | tuple[int], optional
        Axes to ifftshift before the transform. The default is ``()``.
    oshift : list[int] | tuple[int], optional
        Axes to fftshift after the transform. The default is ``()``.
    norm : str, optional
        Normalization mode (``"backward"``, ``"ortho"`` or ``"forward"``).
        The default is ``"backward"`` (unnormalized forward transform).
    workers : int, optional
        Thread budget for the transform. The default is ``1``.

    Returns
    -------
    NDArray[complex]
        FFT result.

    """
    return _fused(input, axes, ishift, oshift, norm, workers, inverse=False)


def ifft(
    input: NDArray[complex],
    axes: int | list[int] | tuple[int] | None = None,
    ishift: list[int] | tuple[int] = (),
    oshift: list[int] | tuple[int] = (),
    norm: str = "backward",
    workers: int = 1,
) -> NDArray[complex]:
    """
    IFFT function with optional ifftshift on input and fftshift on output.

    Parameters
    ----------
    input : NDArray[complex]
        Input array.
    axes :  int | list[int] | tuple[int] | None, optional
        Axes over which to compute the IFFT.
        The default is ``None`` (all axes).
    ishift : list[int] | tuple[int], optional
        Axes to ifftshift before the transform. The default is ``()``.
    oshift : list[int] | tuple[int], optional
        Axes to fftshift after the transform. The default is ``()``.
    norm : str, optional
        Normalization mode. The default is ``"backward"``
        (``1 / n`` scaling on the inverse).
    workers : int, optional
        Thread budget for the transform. The default is ``1``.

    Returns
    -------
    NDArray[complex]
        IFFT result.

    """
    return _fused(input, axes, ishift, oshift, norm, workers, inverse=True)


# %% local subroutines
def _fused(input, axes, ishift, oshift, norm, workers, inverse):
    xp = get_array_module(input)
    ndim = input.ndim
    if axes is None:
        axes = tuple(range(ndim))
    elif np.isscalar(axes):
        axes = (axes,)
    axes = tuple(ax % ndim for ax in axes)
    ishift = tuple(ax % ndim for ax in ishift)
    oshift = tuple(ax % ndim for ax in oshift)

    if not xp.iscomplexobj(input):
        input = input.astype(xp.complex64 if input.dtype == xp.float32 else xp.complex128)

    # a shift after the transform is a sign alternation of the input,
    # a shift before the transform is a sign alternation of the output
    pre_sign = [ax for ax in oshift if input.shape[ax] % 2 == 0]
    post_sign = [ax for ax in ishift if input.shape[ax] % 2 == 0]
    pre_roll = [ax for ax in ishift if input.shape[ax] % 2 != 0]
    post_roll = [ax for ax in oshift if input.shape[ax] % 2 != 0]

    tmp = input
    owned = False
    for ax in pre_sign:
        tmp = _alternate(tmp, ax, in_place=owned)
        owned = True
    if pre_roll:
        tmp = xp.fft.ifftshift(tmp, axes=pre_roll)
        owned = True

    if xp.__name__ == "numpy":
        transform = scipy.fft.ifftn if inverse else scipy.fft.fftn
        output = transform(tmp, axes=axes, norm=norm, workers=workers, overwrite_x=owned)
    else:
        transform = xp.fft.ifftn if inverse else xp.fft.fftn
        output = transform(tmp, axes=axes, norm=norm)

    for ax in post_sign:
        output = _alternate(output, ax, in_place=True)

    # an even axis shifted on both sides picks up (-1)^(n/2)
    flips = sum(input.shape[ax] // 2 for ax in set(pre_sign) & set(post_sign))
    if flips % 2:
        output *= -1
    if post_roll:
        output = xp.fft.fftshift(output, axes=post_roll)

    if output.dtype != input.dtype:
        output = output.astype(input.dtype, copy=False)

    return output


def _alternate(input, axis, in_place):
    xp = get_array_module(input)
    shape = [1] * input.ndim
    shape[axis] = input.shape[axis]
    sign = xp.ones(input.shape[axis], dtype=input.real.dtype)
    sign[1::2] = -1
    sign = sign.reshape(shape)
    if in_place:
        input *= sign
        return input
    return input * sign
