"""Problem decomposition planner."""

__all__ = ["DecompositionPlan", "get_problem_decomposition_plan"]

import math
from dataclasses import dataclass

from ..acquisition import dim_index, get_image_dims, get_image_size
from ..acquisition import get_spatial_ndim, get_transform_count
from ..regularization import get_affected_dims


@dataclass(frozen=True)
class DecompositionPlan:
    """
    Split of a reconstruction into independent slices.

    Attributes
    ----------
    image_size : tuple[int, ...]
        Full image shape.
    image_batch_dims : tuple[int, ...]
        Image axes the problem is split over.
    kspace_size : tuple[int, ...]
        Full k-space shape.
    kspace_batch_dims : tuple[int, ...]
        K-space axes matching ``image_batch_dims``.
    slices_sensitivity_maps : bool
        Multi-slice sensitivity maps are split along their slice axis too.

    """

    image_size: tuple[int, ...]
    image_batch_dims: tuple[int, ...]
    kspace_size: tuple[int, ...]
    kspace_batch_dims: tuple[int, ...]
    slices_sensitivity_maps: bool = False

    @property
    def batch_shape(self) -> tuple[int, ...]:
        return tuple(self.image_size[d] for d in self.image_batch_dims)

    def __len__(self):
        return math.prod(self.batch_shape)

    def __str__(self):
        image = _mark(self.image_size, self.image_batch_dims)
        kspace = _mark(self.kspace_size, self.kspace_batch_dims)
        maps = ", sliced sensitivity maps" if self.slices_sensitivity_maps else ""
        return f"DecompositionPlan(image={image}, kspace={kspace}{maps})"

    def image_index(self, index: tuple[int, ...]) -> tuple:
        """Selector of one slice of the image."""
        return _selector(len(self.image_size), self.image_batch_dims, index)

    def kspace_index(self, index: tuple[int, ...]) -> tuple:
        """Selector of one slice of the k-space data."""
        return _selector(len(self.kspace_size), self.kspace_batch_dims, index)

    def slice_id(self, index: tuple[int, ...]) -> str:
        """Readable slice label, e.g. ``"[:, :, 3]"``."""
        selector = self.image_index(index)
        labels = [":" if isinstance(s, slice) else str(s) for s in selector]
        return "[" + ", ".join(labels) + "]"


def get_problem_decomposition_plan(
    info, regularization, config, x0=None
) -> DecompositionPlan | None:
    """
    Find the image axes over which a reconstruction decouples.

    Candidate axes are the image axes beyond the spatial ones; each
    regularization term removes the axes it couples. No plan is returned
    when decomposition is disabled, without regularization, with an initial
    guess, or when no candidate survives.

    Parameters
    ----------
    info : AcquisitionInfo
        Acquisition descriptor.
    regularization : list | tuple
        Regularization terms.
    config : Config
        Reconstruction options.
    x0 : optional
        Initial guess. The default is ``None``.

    Returns
    -------
    DecompositionPlan | None
        Plan, or ``None`` if the problem is solved as a whole.

    """
    if config.disable_problem_decomposition or not regularization:
        return None
    if x0 is not None or info.kspace_data is None:
        return None

    ndim = get_spatial_ndim(info)
    image_dims = get_image_dims(info)
    candidates = list(range(ndim, len(image_dims)))
    for term in regularization:
        for dim in get_affected_dims(term, info, image_dims):
            position = dim_index(dim, image_dims)
            if position in candidates:
                candidates.remove(position)
    if not candidates:
        return None

    has_maps = info.sensitivity_maps is not None
    offset = ndim - get_transform_count(info) - (1 if has_maps else 0)
    multislice = has_maps and not info.is_3d and info.sensitivity_maps.ndim == 4

    plan = DecompositionPlan(
        image_size=get_image_size(info),
        image_batch_dims=tuple(candidates),
        kspace_size=tuple(info.kspace_data.shape),
        kspace_batch_dims=tuple(d - offset for d in candidates),
        slices_sensitivity_maps=multislice and 2 in candidates,
    )
    for d in candidates:
        config.log(
            f"Decomposing problem over dimension {d} with size {plan.image_size[d]}"
        )
    return plan


# %% utils
def _mark(shape, dims):
    return "(" + ", ".join(f"_{n}_" if d in dims else str(n) for d, n in enumerate(shape)) + ")"


def _selector(ndim, dims, index):
    selector = [slice(None)] * ndim
    for d, i in zip(dims, index):
        selector[d] = i
    return tuple(selector)
