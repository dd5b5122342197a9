"""pystagger.core.immersed
Grid-fitted immersed boundaries and the node predicates built on them.

A predicate has the signature ``f(i, j, k, grid, LX, LY, LZ) -> bool`` with
1-based indices. A node at a Face is surrounded by the two cells that share
that face along the axis; a node at a Center by its own cell.
"""
from __future__ import annotations
from typing import Callable, Sequence, Union

import numpy as np

from pystagger.core.topology import Bounded, Center, Collapsed, Face, Periodic


class AbstractImmersedBoundary:
    """Abstract base class"""
    def immersed_cells(self, grid) -> np.ndarray:
        """Boolean array of shape ``grid.size``; True marks a solid cell."""
        raise NotImplementedError


class GridFittedBoundary(AbstractImmersedBoundary):
    """
    Solid region given cell by cell.

    ``mask`` is either a boolean array of shape (Nx, Ny, Nz) or a callable
    ``mask(x, y, z)`` evaluated (vectorised) at cell centres.
    """
    def __init__(self, mask: Union[np.ndarray, Callable]):
        self.mask = mask

    def immersed_cells(self, grid) -> np.ndarray:
        if callable(self.mask):
            X, Y, Z = _center_mesh(grid)
            return np.broadcast_to(np.asarray(self.mask(X, Y, Z), dtype=bool), grid.size).copy()
        mask = np.asarray(self.mask, dtype=bool)
        if mask.shape != grid.size:
            raise ValueError(f"Mask of shape {mask.shape} does not match grid size {grid.size}.")
        return mask.copy()


class GridFittedBottom(AbstractImmersedBoundary):
    """
    Solid below a bottom height ``h(x, y)`` (callable or (Nx, Ny) array).
    A cell is immersed when its centre lies at or below the bottom.
    """
    def __init__(self, bottom_height: Union[np.ndarray, Callable, float]):
        self.bottom_height = bottom_height

    def immersed_cells(self, grid) -> np.ndarray:
        X, Y, Z = _center_mesh(grid)
        if callable(self.bottom_height):
            h = np.asarray(self.bottom_height(X[:, :, 0], Y[:, :, 0]), dtype=float)
        else:
            h = np.asarray(self.bottom_height, dtype=float)
        h = np.broadcast_to(h, grid.size[:2])
        return Z <= h[:, :, None]


def _center_mesh(grid):
    xs = [grid.nodes(d, Center) for d in range(3)]
    return np.meshgrid(*xs, indexing="ij")


def pad_inactive_cells(solid: np.ndarray, topology: Sequence[str]) -> np.ndarray:
    """Pad the solid-cell flags by one cell per side: wrap on Periodic axes,
    mark the outside inactive on Bounded axes, repeat on Collapsed axes."""
    out = np.asarray(solid, dtype=bool)
    for d, topo in enumerate(topology):
        pad = [(0, 0)] * 3
        pad[d] = (1, 1)
        if topo == Periodic:
            out = np.pad(out, pad, mode="wrap")
        elif topo == Bounded:
            out = np.pad(out, pad, mode="constant", constant_values=True)
        else:
            out = np.pad(out, pad, mode="edge")
    return out


# ---- node predicates --------------------------------------------------------
def _surrounding_cells(i, j, k, LX, LY, LZ):
    ranges = []
    for n, loc in zip((i, j, k), (LX, LY, LZ)):
        ranges.append((n - 1, n) if loc == Face else (n,))
    return [(a, b, c) for a in ranges[0] for b in ranges[1] for c in ranges[2]]


def _inactive(grid, i, j, k) -> bool:
    inactive = getattr(grid, "inactive_cells", None)
    if inactive is None:
        # no immersed boundary: only cells past a Bounded edge are inactive
        for n, N, topo in zip((i, j, k), grid.size, grid.topology):
            if topo == Bounded and (n < 1 or n > N):
                return True
        return False
    return bool(inactive[i, j, k])


def inactive_cell(i, j, k, grid) -> bool:
    """True for cells that are immersed or lie past a Bounded edge."""
    return _inactive(grid, i, j, k)


def immersed_cell(i, j, k, grid, LX=Center, LY=Center, LZ=Center) -> bool:
    """True for interior cells flagged solid by the immersed boundary."""
    if getattr(grid, "inactive_cells", None) is None:
        return False
    return _inactive(grid, i, j, k)


def inactive_node(i, j, k, grid, LX, LY, LZ) -> bool:
    """All cells around the node are inactive."""
    return all(_inactive(grid, *c) for c in _surrounding_cells(i, j, k, LX, LY, LZ))


def peripheral_node(i, j, k, grid, LX, LY, LZ) -> bool:
    """At least one cell around the node is inactive (walls and immersed faces)."""
    return any(_inactive(grid, *c) for c in _surrounding_cells(i, j, k, LX, LY, LZ))


def boundary_node(i, j, k, grid, LX, LY, LZ) -> bool:
    """Peripheral but not inactive: the node separates active from inactive cells."""
    return peripheral_node(i, j, k, grid, LX, LY, LZ) and not inactive_node(i, j, k, grid, LX, LY, LZ)
