"""pystagger.core.grid
Rectilinear staggered grids with per-axis topology, and the immersed
boundary grid that owns solid-region geometry.
"""
from __future__ import annotations
import logging
from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np

from pystagger.core.exceptions import ConfigurationError
from pystagger.core.topology import (
    AXES, Bounded, Center, Collapsed, Face, Periodic,
    axis_index, normalize_location, normalize_topology,
)
from pystagger.core.immersed import pad_inactive_cells
from pystagger.utils.bitset import BitSet

logger = logging.getLogger(__name__)


def _triple(value, name: str) -> Tuple:
    if np.isscalar(value):
        return (value, value, value)
    value = tuple(value)
    if len(value) != 3:
        raise ConfigurationError(f"{name} must have three entries (x, y, z), got {value!r}.")
    return value


class RectilinearGrid:
    """
    Uniformly spaced C-grid on a box.

    Interior indices are 1-based: cell ``i`` spans ``[x0 + (i-1)Δx, x0 + iΔx]``
    and face ``i`` sits on its left edge, so a Bounded axis carries faces
    ``1 .. N+1``. Storage for every field adds ``halo`` points on both ends of
    each non-collapsed axis.
    """

    def __init__(self,
                 size: Sequence[int],
                 extent: Sequence[float] = (1.0, 1.0, 1.0),
                 *,
                 halo: Union[int, Sequence[int]] = 3,
                 topology: Sequence[str] = (Periodic, Periodic, Bounded),
                 origin: Sequence[float] = (0.0, 0.0, 0.0)):
        topo = tuple(normalize_topology(t) for t in _triple(topology, "topology"))
        size = tuple(int(n) for n in _triple(size, "size"))
        halo = tuple(int(h) for h in _triple(halo, "halo"))
        extent = tuple(float(L) for L in _triple(extent, "extent"))
        origin = tuple(float(o) for o in _triple(origin, "origin"))

        for d, (t, n, h, L) in enumerate(zip(topo, size, halo, extent)):
            if t == Collapsed:
                if n != 1:
                    raise ConfigurationError(f"Collapsed axis {AXES[d]} must have exactly one cell, got {n}.")
                continue
            if n < 1:
                raise ConfigurationError(f"Axis {AXES[d]} needs at least one cell, got {n}.")
            if h < 1:
                raise ConfigurationError(f"Axis {AXES[d]} needs a halo of at least one point, got {h}.")
            if not np.isfinite(L) or L <= 0.0:
                raise ConfigurationError(f"Extent along {AXES[d]} must be positive and finite, got {L}.")

        self._topology = topo
        self._size = size
        # collapsed axes never carry halo points
        self._halo = tuple(0 if t == Collapsed else h for t, h in zip(topo, halo))
        self._extent = extent
        self._origin = origin
        self._spacing = tuple(L / n for L, n in zip(extent, size))

    # ---- read-only metadata ------------------------------------------
    @property
    def topology(self) -> Tuple[str, str, str]:
        return self._topology

    @property
    def size(self) -> Tuple[int, int, int]:
        return self._size

    @property
    def halo(self) -> Tuple[int, int, int]:
        return self._halo

    @property
    def extent(self) -> Tuple[float, float, float]:
        return self._extent

    @property
    def origin(self) -> Tuple[float, float, float]:
        return self._origin

    @property
    def Nx(self) -> int: return self._size[0]
    @property
    def Ny(self) -> int: return self._size[1]
    @property
    def Nz(self) -> int: return self._size[2]

    @property
    def Hx(self) -> int: return self._halo[0]
    @property
    def Hy(self) -> int: return self._halo[1]
    @property
    def Hz(self) -> int: return self._halo[2]

    @property
    def Δx(self) -> float: return self._spacing[0]
    @property
    def Δy(self) -> float: return self._spacing[1]
    @property
    def Δz(self) -> float: return self._spacing[2]

    @property
    def spacing(self) -> Tuple[float, float, float]:
        return self._spacing

    immersed_boundary = None

    def axis_size(self, axis) -> int:
        return self._size[axis_index(axis)]

    def is_bounded(self, axis) -> bool:
        return self._topology[axis_index(axis)] == Bounded

    def interior_points(self, axis, location: Optional[str]) -> int:
        """Number of interior points of a field at ``location`` along ``axis``."""
        d = axis_index(axis)
        loc = normalize_location(location)
        if loc is None or self._topology[d] == Collapsed:
            return 1
        if loc == Face and self._topology[d] == Bounded:
            return self._size[d] + 1
        return self._size[d]

    # ---- coordinates ---------------------------------------------------
    def nodes(self, axis, location: str) -> np.ndarray:
        """Interior node coordinates along ``axis`` (1-based node i -> entry i-1)."""
        d = axis_index(axis)
        loc = normalize_location(location)
        if self._topology[d] == Collapsed or loc is None:
            return np.array([self._origin[d]], dtype=float)
        n = self.interior_points(d, loc)
        shift = 0.0 if loc == Face else 0.5
        return self._origin[d] + (np.arange(n, dtype=float) + shift) * self._spacing[d]

    def node(self, i: int, j: int, k: int, location=(Center, Center, Center)) -> Tuple[float, float, float]:
        out = []
        for d, (idx, loc) in enumerate(zip((i, j, k), location)):
            loc = normalize_location(loc)
            if self._topology[d] == Collapsed or loc is None:
                out.append(self._origin[d])
                continue
            shift = 1.0 if loc == Face else 0.5
            out.append(self._origin[d] + (idx - shift) * self._spacing[d])
        return tuple(out)

    # ---- setup-time validation -------------------------------------------
    def validate_halo(self, scheme) -> None:
        """Reject schemes whose stencils would reach past the halo."""
        required = int(scheme.required_halo)
        for d, (t, h) in enumerate(zip(self._topology, self._halo)):
            if t == Collapsed:
                continue
            if h < required:
                raise ConfigurationError(
                    f"Halo along {AXES[d]} is {h} but {scheme!r} needs at least {required} points.")

    def __repr__(self):
        return (f"{type(self).__name__}(size={self._size}, extent={self._extent}, "
                f"halo={self._halo}, topology={self._topology})")


class ImmersedBoundaryGrid(RectilinearGrid):
    """
    A grid that owns an immersed boundary.

    The boundary is turned into a boolean array of *inactive* cells once, at
    construction. The array is padded by one cell on every side (Periodic axes
    wrap, Bounded axes count the outside as inactive) so that node predicates
    at faces never index past it.
    """

    def __init__(self, grid: RectilinearGrid, immersed_boundary):
        if isinstance(grid, ImmersedBoundaryGrid):
            raise ConfigurationError("The underlying grid already owns an immersed boundary.")
        super().__init__(grid.size, grid.extent, halo=grid.halo,
                         topology=grid.topology, origin=grid.origin)
        self.underlying_grid = grid
        self._immersed_boundary = immersed_boundary

        solid = np.asarray(immersed_boundary.immersed_cells(grid), dtype=bool)
        if solid.shape != grid.size:
            raise ConfigurationError(
                f"Immersed boundary produced a mask of shape {solid.shape}, grid size is {grid.size}.")
        self._inactive = BitSet(pad_inactive_cells(solid, grid.topology))
        self._node_masks: Dict[tuple, BitSet] = {}
        logger.info(f"Materialized {type(immersed_boundary).__name__}: "
                    f"{int(solid.sum())}/{solid.size} immersed cells.")

    @property
    def immersed_boundary(self):
        return self._immersed_boundary

    @property
    def inactive_cells(self) -> BitSet:
        """Padded inactive-cell flags, index ``[i, j, k]`` for 1-based cell (i, j, k)."""
        return self._inactive

    def cached_node_mask(self, key):
        return self._node_masks.get(key)

    def cache_node_mask(self, key, mask: np.ndarray) -> BitSet:
        bs = BitSet(mask)
        self._node_masks[key] = bs
        return bs

    def __repr__(self):
        return f"ImmersedBoundaryGrid({self.underlying_grid!r}, {type(self._immersed_boundary).__name__})"
