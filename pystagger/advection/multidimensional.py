"""pystagger.advection.multidimensional
Two-dimensional (vector-invariant) reconstructions and their boundary switch.

``multi_dimensional_interpolate_x`` combines one-dimensional reconstructions
``func(i', j, k, grid, one_dimensional_scheme, *args)`` taken at the
neighbouring x positions ``i-h .. i+h``; ``func`` itself works along the
other axis. Near a Bounded x edge the conditional form drops the x
combination and returns ``func`` at ``i`` alone.
"""
from __future__ import annotations

from pystagger.advection.buffers import outside_multi_dimensional_buffer
from pystagger.core.topology import Bounded


def _combine(d, i, j, k, grid, coeff, scheme, func, args):
    h = scheme.boundary_buffer
    coeff = scheme.coefficients if coeff is None else coeff
    if len(coeff) != 2 * h + 1:
        raise ValueError(f"{scheme!r} combines {2 * h + 1} reconstructions, got {len(coeff)} coefficients.")
    one_d = scheme.one_dimensional_scheme
    total = 0.0
    for n, c in enumerate(coeff):
        idx = [i, j, k]
        idx[d] += n - h
        total += c * func(idx[0], idx[1], idx[2], grid, one_d, *args)
    return total


def multi_dimensional_interpolate_x(i, j, k, grid, coeff, scheme, func, *args):
    return _combine(0, i, j, k, grid, coeff, scheme, func, args)


def multi_dimensional_interpolate_y(i, j, k, grid, coeff, scheme, func, *args):
    return _combine(1, i, j, k, grid, coeff, scheme, func, args)


def _multi_dimensional_interpolate_x(i, j, k, grid, coeff, scheme, func, *args):
    if grid.topology[0] == Bounded and not outside_multi_dimensional_buffer(i, grid.Nx, scheme):
        return func(i, j, k, grid, scheme.one_dimensional_scheme, *args)
    return multi_dimensional_interpolate_x(i, j, k, grid, coeff, scheme, func, *args)


def _multi_dimensional_interpolate_y(i, j, k, grid, coeff, scheme, func, *args):
    if grid.topology[1] == Bounded and not outside_multi_dimensional_buffer(j, grid.Ny, scheme):
        return func(i, j, k, grid, scheme.one_dimensional_scheme, *args)
    return multi_dimensional_interpolate_y(i, j, k, grid, coeff, scheme, func, *args)
