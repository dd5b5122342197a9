"""pystagger.immersed.mask
Overwrite field values at immersed nodes.

Masking runs after a field has been updated and before anything consumes
it (for example as a right-hand side of the pressure solve). It only writes
interior storage and is idempotent.
"""
from __future__ import annotations
import logging
from typing import Callable, Mapping, Optional

import numpy as np

from pystagger.core.immersed import (
    boundary_node, immersed_cell, inactive_node, peripheral_node,
)
from pystagger.core.topology import Center, Face, normalize_location_triple
from pystagger.kernels.launch import ExecutionContext
from pystagger.kernels.masking import (
    BOUNDARY, IMMERSED_CELL, INACTIVE, PERIPHERAL,
    _mask_level, _mask_volume, _node_mask,
)

logger = logging.getLogger(__name__)

# predicates that have a vectorised kernel counterpart
_KERNEL_KINDS = {
    inactive_node: INACTIVE,
    peripheral_node: PERIPHERAL,
    boundary_node: BOUNDARY,
    immersed_cell: IMMERSED_CELL,
}


def _has_immersed_boundary(grid) -> bool:
    return getattr(grid, "immersed_boundary", None) is not None


def node_mask(grid, location, immersed_function: Callable = peripheral_node, *,
              k: Optional[int] = None, context: Optional[ExecutionContext] = None) -> np.ndarray:
    """
    Boolean flags of the interior nodes at ``location`` for which
    ``immersed_function(i, j, k, grid, LX, LY, LZ)`` holds.

    Returns shape ``(nx, ny, nz)``, or ``(nx, ny, 1)`` when a level ``k`` is given.
    A reduced axis (location None) is classified as a Center.
    """
    context = context or ExecutionContext()
    loc = tuple(Center if l is None else l for l in normalize_location_triple(location))
    nx, ny, nz = (grid.interior_points(d, l) for d, l in enumerate(loc))
    if k is not None:
        if not 1 <= int(k) <= nz:
            raise ValueError(f"Level k={k} outside 1..{nz}.")
        k0, nz = int(k) - 1, 1
    else:
        k0 = 0

    kind = _KERNEL_KINDS.get(immersed_function)
    if kind is None or not _has_immersed_boundary(grid):
        out = np.empty((nx, ny, nz), dtype=bool)
        for a, b, c in np.ndindex(out.shape):
            out[a, b, c] = bool(immersed_function(a + 1, b + 1, c + 1 + k0, grid, *loc))
        return out

    key = (kind, loc)
    cached = grid.cached_node_mask(key)
    if cached is not None:
        logger.debug(f"node mask cache hit {key}")
        return cached.array[:, :, k0:k0 + nz]

    fx, fy, fz = (1 if l == Face else 0 for l in loc)
    out = np.empty((nx, ny, nz), dtype=np.bool_)
    context.launch(_node_mask, grid.inactive_cells.array, fx, fy, fz, kind, k0, out)
    if k is not None:
        return out
    return grid.cache_node_mask(key, out).array


def mask_immersed_field(field, value=0, *, immersed_function: Callable = peripheral_node,
                        context: Optional[ExecutionContext] = None) -> None:
    """
    Set ``field[i, j, k] = value`` wherever ``immersed_function`` holds at the
    field's location. No-op on a grid without an immersed boundary.
    A reduced axis holds a single level, written when the predicate holds at
    any grid level along that axis.
    """
    grid = field.grid
    if not _has_immersed_boundary(grid):
        logger.debug("mask_immersed_field: grid has no immersed boundary, skipping")
        return None
    context = context or ExecutionContext()
    mask = node_mask(grid, field.location, immersed_function, context=context)
    # a reduced axis stores one level: it is masked if any grid level is
    reduced = tuple(d for d in range(3) if field.is_reduced(d))
    if reduced:
        mask = mask.any(axis=reduced, keepdims=True)
    mask = np.ascontiguousarray(mask)
    hx, hy, hz = field.halo
    context.launch(_mask_volume, field.data, mask, field.data.dtype.type(value), hx, hy, hz)
    return None


def mask_immersed_reduced_field_xy(field, value=0, *, k: int,
                                   immersed_function: Callable = peripheral_node,
                                   context: Optional[ExecutionContext] = None) -> None:
    """
    Mask the plane ``[:, :, k]`` only. On a z-reduced field the single stored
    level is written, classified against grid level ``k``.
    """
    grid = field.grid
    if not _has_immersed_boundary(grid):
        logger.debug("mask_immersed_reduced_field_xy: grid has no immersed boundary, skipping")
        return None
    context = context or ExecutionContext()
    mask = node_mask(grid, field.location, immersed_function, k=k, context=context)
    mask = mask[:, :, 0]
    reduced = tuple(d for d in range(2) if field.is_reduced(d))
    if reduced:
        mask = mask.any(axis=reduced, keepdims=True)
    mask = np.ascontiguousarray(mask)
    hx, hy, hz = field.halo
    kz = 0 if field.is_reduced(2) else int(k) - 1 + hz
    context.launch(_mask_level, field.data, mask, field.data.dtype.type(value), hx, hy, kz)
    return None


def mask_immersed_velocities(velocities, value=0, *, immersed_function: Callable = peripheral_node,
                             context: Optional[ExecutionContext] = None) -> None:
    """Mask each velocity component (tuple or mapping) at its own location."""
    components = velocities.values() if isinstance(velocities, Mapping) else velocities
    components = tuple(components)
    if not components or not _has_immersed_boundary(components[0].grid):
        return None
    context = context or ExecutionContext()
    for q in components:
        mask_immersed_field(q, value, immersed_function=immersed_function, context=context)
    return None
