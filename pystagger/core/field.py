"""pystagger.core.field
Staggered fields: dense storage with halos and 1-based interior indexing.
"""
from __future__ import annotations
from typing import Callable, Optional, Tuple, Union

import numpy as np

from pystagger.core.exceptions import ConfigurationError
from pystagger.core.topology import (
    Bounded, Center, Collapsed, Face, Periodic, normalize_location_triple,
)


class Field:
    """
    Values at one staggering location ``(LX, LY, LZ)`` of a grid.

    ``field[i, j, k]`` uses the grid's 1-based interior indexing; indices
    ``1 - H .. n + H`` are valid along an axis with ``n`` interior points and
    halo ``H``. A reduced axis (location ``None``) stores a single level and
    ignores the index given for it.
    """

    def __init__(self, grid, location=(Center, Center, Center), data: Optional[np.ndarray] = None,
                 dtype=float):
        self.grid = grid
        self.location = normalize_location_triple(location)

        halo = []
        interior = []
        for d, loc in enumerate(self.location):
            n = grid.interior_points(d, loc)
            h = 0 if (loc is None or grid.topology[d] == Collapsed) else grid.halo[d]
            interior.append(n)
            halo.append(h)
        self._interior_shape = tuple(interior)
        self._halo = tuple(halo)
        shape = tuple(n + 2 * h for n, h in zip(interior, halo))

        if data is None:
            self.data = np.zeros(shape, dtype=dtype)
        else:
            data = np.asarray(data)
            if data.shape != shape:
                raise ConfigurationError(f"Field storage must have shape {shape}, got {data.shape}.")
            self.data = data

    # ---- shape information -------------------------------------------
    @property
    def interior_shape(self) -> Tuple[int, int, int]:
        return self._interior_shape

    @property
    def halo(self) -> Tuple[int, int, int]:
        return self._halo

    @property
    def dtype(self):
        return self.data.dtype

    def is_reduced(self, axis: int) -> bool:
        return self.location[axis] is None

    # ---- element access -------------------------------------------------
    def _storage_index(self, idx) -> Tuple[int, int, int]:
        i, j, k = idx
        out = []
        for d, n in enumerate((i, j, k)):
            if self._interior_shape[d] == 1 and self._halo[d] == 0:
                out.append(0)
            else:
                out.append(int(n) - 1 + self._halo[d])
        return tuple(out)

    def __getitem__(self, idx):
        return self.data[self._storage_index(idx)]

    def __setitem__(self, idx, value):
        self.data[self._storage_index(idx)] = value

    def interior(self) -> np.ndarray:
        """Writable view of the interior points."""
        sl = tuple(slice(h, h + n) for h, n in zip(self._halo, self._interior_shape))
        return self.data[sl]

    # ---- population ----------------------------------------------------
    def set(self, value: Union[float, np.ndarray, Callable]) -> "Field":
        """Fill the interior from a constant, an interior-shaped array, or
        ``f(x, y, z)`` evaluated at this field's nodes."""
        view = self.interior()
        if callable(value):
            xs = [self.grid.nodes(d, loc if loc is not None else Center)[:n]
                  for d, (loc, n) in enumerate(zip(self.location, self._interior_shape))]
            X, Y, Z = np.meshgrid(*xs, indexing="ij")
            view[...] = np.broadcast_to(value(X, Y, Z), view.shape)
        elif np.isscalar(value):
            view[...] = value
        else:
            arr = np.asarray(value)
            if arr.shape != view.shape:
                raise ValueError(f"Array of shape {arr.shape} does not match the interior {view.shape}.")
            view[...] = arr
        return self

    def fill_halo_regions(self) -> "Field":
        """Periodic axes wrap around; Bounded axes repeat the outermost interior value."""
        for d, (topo, h, n) in enumerate(zip(self.grid.topology, self._halo, self._interior_shape)):
            if h == 0:
                continue
            src = np.arange(-h, n + h)
            if topo == Periodic:
                src = src % n
            elif topo == Bounded:
                src = np.clip(src, 0, n - 1)
            else:
                continue
            moved = np.moveaxis(self.data, d, 0)
            moved[...] = moved[src + h]
        return self

    def copy(self) -> "Field":
        return Field(self.grid, self.location, data=self.data.copy())

    def __repr__(self):
        return f"Field(location={self.location}, interior={self._interior_shape}, halo={self._halo})"


def CenterField(grid, **kw) -> Field:
    return Field(grid, (Center, Center, Center), **kw)


def XFaceField(grid, **kw) -> Field:
    return Field(grid, (Face, Center, Center), **kw)


def YFaceField(grid, **kw) -> Field:
    return Field(grid, (Center, Face, Center), **kw)


def ZFaceField(grid, **kw) -> Field:
    return Field(grid, (Center, Center, Face), **kw)
