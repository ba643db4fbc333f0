"""Regularization term interface."""

__all__ = ["Regularization", "get_operator", "get_affected_dims"]

import abc

import xarray as xr
from numpy.typing import NDArray

from .._utils import is_tagged, unwrap
from .._sigpy.linop import Linop
from .._sigpy.prox import Prox

from ..gadgets import NamedDimsOp


class Regularization(abc.ABC):
    """
    Base class of regularization terms.

    A term couples image axes through a linear operator ``R`` and penalizes
    ``R x`` through a proximal operator. The planner only queries
    ``get_affected_dims``, computed from static metadata.

    Attributes
    ----------
    is_quadratic : bool
        The penalty is a squared L2 norm of ``x`` (solvable by CG).
    is_unitary : bool
        ``R`` is unitary, so the proximal operator of ``g(R x)`` is available
        in closed form.

    """

    is_quadratic = False
    is_unitary = False

    @abc.abstractmethod
    def _linop(self, shape: tuple[int, ...], dims: tuple, threaded: bool) -> Linop:
        pass

    @abc.abstractmethod
    def get_prox(self, op: Linop) -> Prox:
        """Proximal operator on the output of ``op``."""
        pass

    @abc.abstractmethod
    def get_affected_dims(self, info, image_dims: tuple) -> tuple:
        """Image axes coupled by the term."""
        pass

    @abc.abstractmethod
    def _penalty(self, value: NDArray, op: Linop) -> float:
        pass

    def _output_dims(self, dims: tuple) -> tuple:
        return tuple(dims)

    def get_operator(
        self, x: NDArray | xr.DataArray, threaded: bool = True, dims: tuple | None = None
    ) -> Linop | NamedDimsOp:
        """
        Operator of the term for images shaped like ``x``.

        Tagged samples yield a tagged operator. ``dims`` names the axes of
        an untagged ``x``.

        """
        if is_tagged(x):
            dims = tuple(x.dims)
        elif dims is None:
            dims = tuple(range(x.ndim))
        op = self._linop(tuple(x.shape), tuple(dims), threaded)
        if is_tagged(x):
            return NamedDimsOp(op, dims, self._output_dims(dims))
        return op

    def evaluate(self, x: NDArray | xr.DataArray) -> float:
        """Value of the penalty at ``x``."""
        op = self.get_operator(x, threaded=False)
        if isinstance(op, NamedDimsOp):
            op = op.linop
        return float(self._penalty(op(unwrap(x)), op))


def get_operator(
    term: Regularization,
    x: NDArray | xr.DataArray,
    threaded: bool = True,
    dims: tuple | None = None,
) -> Linop | NamedDimsOp:
    """Operator of a regularization term for images shaped like ``x``."""
    return term.get_operator(x, threaded, dims)


def get_affected_dims(term: Regularization, info, image_dims: tuple) -> tuple:
    """Image axes coupled by a regularization term."""
    return tuple(term.get_affected_dims(info, tuple(image_dims)))
