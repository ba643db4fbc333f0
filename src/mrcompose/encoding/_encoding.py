"""Encoding operator builder."""

__all__ = ["get_encoding_operator"]

from .._sigpy.linop import Linop

from ..gadgets import NamedDimsOp

from ._fourier import _require_kspace, get_fourier_operator
from ._sensitivity import get_sensitivity_map_operator
from ._subsampling import get_subsampling_operator


def get_encoding_operator(info, num_threads: int = 1) -> Linop | NamedDimsOp:
    """
    Build the forward model ``E = G * F * S`` of an acquisition.

    Sensitivity weighting ``S`` is applied first, then the Fourier transform
    ``F``, then the subsampling ``G``. ``S`` and ``G`` are omitted when the
    acquisition has no sensitivity maps or no subsampling pattern.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor.
    num_threads : int, optional
        Thread budget of the Fourier transform. The default is ``1``.

    Returns
    -------
    Linop | NamedDimsOp
        Encoding operator. For tagged k-space data, its domain is
        ``("x", "y"[, "z"], *batch)`` and its codomain the k-space tags.

    """
    _require_kspace(info)
    E = get_fourier_operator(info, num_threads)
    if info.sensitivity_maps is not None:
        E = E * get_sensitivity_map_operator(info)
    if info.subsampling is not None:
        E = get_subsampling_operator(info) * E
    return E
