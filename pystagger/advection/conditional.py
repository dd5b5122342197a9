"""pystagger.advection.conditional
Topologically conditional interpolation.

``_symmetric_interpolate_xfaa(i, j, k, grid, scheme, psi, *args)`` either

    1. calls the scheme's native stencil if x is Periodic or Collapsed, or if
       the scheme is low order; or
    2. calls the native stencil if x is Bounded and ``i`` is outside the
       boundary buffer, and otherwise retries with ``scheme.boundary_scheme``.

One such function exists for every bias, axis and location; the codes
``faa``/``caa``, ``afa``/``aca`` and ``aaf``/``aac`` name the axis and
whether the target is a face or a centre. Each function only looks at its
own axis, so a grid bounded in several directions composes them.
"""
from __future__ import annotations
import logging
from typing import Callable, Dict, Tuple

from pystagger.advection.buffers import BUFFER_PREDICATES
from pystagger.core.topology import (
    AXES, BIASES, Bounded, Center, Face,
    axis_index, location_code, normalize_bias, normalize_location,
)

logger = logging.getLogger(__name__)


def _dispatch(bias, d, loc, i, j, k, grid, scheme, psi, args):
    if scheme.is_high_order and grid.topology[d] == Bounded:
        outside = BUFFER_PREDICATES[(bias, loc)]
        if not outside((i, j, k)[d], grid.size[d], scheme.boundary_buffer):
            return _dispatch(bias, d, loc, i, j, k, grid, scheme.boundary_scheme, psi, args)
    return scheme.native_interpolate(bias, d, loc, i, j, k, grid, psi, *args)


def conditional_interpolate(bias, axis, location, i, j, k, grid, scheme, psi, *args):
    """Runtime-parameterised form of the generated functions below."""
    return _dispatch(normalize_bias(bias), axis_index(axis), normalize_location(location),
                     i, j, k, grid, scheme, psi, args)


def _make_native(bias: str, d: int, loc: str) -> Callable:
    def interpolate(i, j, k, grid, scheme, psi, *args):
        return scheme.native_interpolate(bias, d, loc, i, j, k, grid, psi, *args)
    interpolate.__name__ = interpolate.__qualname__ = f"{bias}_interpolate_{AXES[d]}{location_code(d, loc)}"
    interpolate.__doc__ = f"{bias} interpolation along {AXES[d]} to a {loc.lower()}, never degraded."
    return interpolate


def _make_conditional(bias: str, d: int, loc: str) -> Callable:
    def interpolate(i, j, k, grid, scheme, psi, *args):
        return _dispatch(bias, d, loc, i, j, k, grid, scheme, psi, args)
    interpolate.__name__ = interpolate.__qualname__ = f"_{bias}_interpolate_{AXES[d]}{location_code(d, loc)}"
    interpolate.__doc__ = (f"{bias} interpolation along {AXES[d]} to a {loc.lower()}, "
                           f"degraded near Bounded {AXES[d]} edges.")
    return interpolate


NATIVE_INTERPOLATORS: Dict[Tuple[str, str, str], Callable] = {}
CONDITIONAL_INTERPOLATORS: Dict[Tuple[str, str, str], Callable] = {}

for _bias in BIASES:
    for _d, _ξ in enumerate(AXES):
        for _loc in (Center, Face):
            _native = _make_native(_bias, _d, _loc)
            _cond = _make_conditional(_bias, _d, _loc)
            NATIVE_INTERPOLATORS[(_bias, _ξ, _loc)] = _native
            CONDITIONAL_INTERPOLATORS[(_bias, _ξ, _loc)] = _cond
            globals()[_native.__name__] = _native
            globals()[_cond.__name__] = _cond

del _bias, _d, _ξ, _loc, _native, _cond


def get_interpolator(bias, axis, location, *, conditional: bool = True) -> Callable:
    d = axis_index(axis)
    key = (normalize_bias(bias), AXES[d], normalize_location(location))
    table = CONDITIONAL_INTERPOLATORS if conditional else NATIVE_INTERPOLATORS
    return table[key]


def specialize_interpolator(grid, bias, axis, location) -> Callable:
    """
    Resolve the axis topology once: on a Periodic or Collapsed axis return
    the native interpolator (no edge test per call), on a Bounded axis the
    conditional one.
    """
    d = axis_index(axis)
    bounded = grid.topology[d] == Bounded
    fn = get_interpolator(bias, d, location, conditional=bounded)
    logger.debug(f"specialized {fn.__name__} for {grid.topology[d]} {AXES[d]}")
    return fn
