"""pystagger.advection.fluxes
Advective tracer fluxes through cell faces, one dispatcher call per face.
"""
from pystagger.advection.conditional import (
    _left_biased_interpolate_xfaa, _left_biased_interpolate_yafa, _left_biased_interpolate_zaaf,
    _right_biased_interpolate_xfaa, _right_biased_interpolate_yafa, _right_biased_interpolate_zaaf,
    _symmetric_interpolate_xfaa, _symmetric_interpolate_yafa, _symmetric_interpolate_zaaf,
)
from pystagger.advection.schemes import Centered


def upwind_biased_product(u, ψL, ψR):
    """u ψ with ψ taken from the upwind side."""
    return ((u + abs(u)) * ψL + (u - abs(u)) * ψR) / 2


def _flux(sym, left, right, area, i, j, k, grid, scheme, U, c):
    u = U[i, j, k]
    if isinstance(scheme, Centered):
        return area * u * sym(i, j, k, grid, scheme, c)
    cL = left(i, j, k, grid, scheme, c)
    cR = right(i, j, k, grid, scheme, c)
    return area * upwind_biased_product(u, cL, cR)


def advective_tracer_flux_x(i, j, k, grid, scheme, U, c):
    return _flux(_symmetric_interpolate_xfaa, _left_biased_interpolate_xfaa, _right_biased_interpolate_xfaa,
                 grid.Δy * grid.Δz, i, j, k, grid, scheme, U, c)


def advective_tracer_flux_y(i, j, k, grid, scheme, V, c):
    return _flux(_symmetric_interpolate_yafa, _left_biased_interpolate_yafa, _right_biased_interpolate_yafa,
                 grid.Δx * grid.Δz, i, j, k, grid, scheme, V, c)


def advective_tracer_flux_z(i, j, k, grid, scheme, W, c):
    return _flux(_symmetric_interpolate_zaaf, _left_biased_interpolate_zaaf, _right_biased_interpolate_zaaf,
                 grid.Δx * grid.Δy, i, j, k, grid, scheme, W, c)
