import numpy as np
import pytest

from pystagger.advection import (
    Centered, UpwindBiased, WENO, WENOVectorInvariant, DefaultStencil, VelocityStencil,
    CONDITIONAL_INTERPOLATORS, NATIVE_INTERPOLATORS, conditional_interpolate, specialize_interpolator,
)
from pystagger.advection import conditional
from pystagger.advection.schemes import AbstractAdvectionScheme
from pystagger.core import (
    Bounded, Center, CenterField, Collapsed, Face, Periodic, RectilinearGrid, XFaceField,
)

BIASES = ("symmetric", "left_biased", "right_biased")
SENTINEL = -999.0


class SentinelScheme(AbstractAdvectionScheme):
    """Buffer-1 fallback whose output marks that it was reached."""
    def __init__(self):
        super().__init__(1, 1, None)
        self.calls = 0

    def _hit(self, *args):
        self.calls += 1
        return SENTINEL

    symmetric_interpolate = left_biased_interpolate = right_biased_interpolate = _hit


def test_generated_names_exist():
    assert len(CONDITIONAL_INTERPOLATORS) == 18
    assert len(NATIVE_INTERPOLATORS) == 18
    for name in ("_symmetric_interpolate_xfaa", "_left_biased_interpolate_yaca",
                 "_right_biased_interpolate_zaaf", "symmetric_interpolate_xcaa"):
        assert callable(getattr(conditional, name))
    assert CONDITIONAL_INTERPOLATORS[("left_biased", "y", Center)].__name__ == "_left_biased_interpolate_yaca"


def test_bounded_x_routes_to_fallback_near_the_edge():
    grid = RectilinearGrid((8, 4, 4), halo=3, topology=(Bounded, Periodic, Periodic))
    c = CenterField(grid)
    c.set(lambda x, y, z: np.sin(2 * np.pi * x))
    c.fill_halo_regions()
    fallback = SentinelScheme()
    scheme = Centered(6, boundary_scheme=fallback)

    assert conditional._symmetric_interpolate_xfaa(1, 1, 1, grid, scheme, c) == SENTINEL
    assert fallback.calls == 1
    native = scheme.symmetric_interpolate(0, Face, 4, 1, 1, grid, c)
    assert conditional._symmetric_interpolate_xfaa(4, 1, 1, grid, scheme, c) == native
    assert native != SENTINEL
    assert fallback.calls == 1


@pytest.mark.parametrize("scheme", [Centered(6), UpwindBiased(5), WENO(5)])
@pytest.mark.parametrize("bias", BIASES)
def test_periodic_axis_never_degrades(scheme, bias, rng):
    grid = RectilinearGrid((8, 1, 1), halo=3, topology=(Periodic, Collapsed, Collapsed))
    c = CenterField(grid)
    c.set(rng.normal(size=c.interior_shape))
    c.fill_halo_regions()
    u = XFaceField(grid)
    u.set(rng.normal(size=u.interior_shape))
    u.fill_halo_regions()
    for i in range(1, 9):
        for loc, psi in ((Face, c), (Center, u)):
            expected = scheme.native_interpolate(bias, 0, loc, i, 1, 1, grid, psi)
            got = conditional_interpolate(bias, "x", loc, i, 1, 1, grid, scheme, psi)
            assert got == expected


def test_collapsed_axis_never_degrades():
    grid = RectilinearGrid((4, 4, 1), halo=3, topology=(Periodic, Periodic, Collapsed))
    scheme = Centered(6, boundary_scheme=SentinelScheme())
    psi = lambda i, j, k, grid: 2.0
    assert conditional._symmetric_interpolate_zaaf(1, 1, 1, grid, scheme, psi) == pytest.approx(2.0)


@pytest.mark.parametrize("scheme", [Centered(6), UpwindBiased(5), WENO(5)])
@pytest.mark.parametrize("N", [6, 7, 11])
def test_chain_terminates_without_reading_past_the_edge(scheme, N, rng):
    grid = RectilinearGrid((N, 1, 1), halo=3, topology=(Bounded, Collapsed, Collapsed))
    c = CenterField(grid)
    u = XFaceField(grid)
    # untrusted halos: any read of them shows up as NaN
    c.data[:] = np.nan
    u.data[:] = np.nan
    c.set(rng.normal(size=c.interior_shape))
    u.set(rng.normal(size=u.interior_shape))
    for bias in BIASES:
        interp_f = CONDITIONAL_INTERPOLATORS[(bias, "x", Face)]
        interp_c = CONDITIONAL_INTERPOLATORS[(bias, "x", Center)]
        # faces 1 and N+1 are walls; their fluxes come from boundary conditions
        for i in range(2, N + 1):
            assert np.isfinite(interp_f(i, 1, 1, grid, scheme, c))
        for i in range(1, N + 1):
            assert np.isfinite(interp_c(i, 1, 1, grid, scheme, u))


def test_axes_are_checked_independently():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Bounded, Bounded, Periodic))
    psi = lambda i, j, k, grid: float(i + 10 * j)
    scheme = Centered(6, boundary_scheme=SentinelScheme())
    # j=1 is next to the y wall but the x interpolation does not care
    assert conditional._symmetric_interpolate_xfaa(4, 1, 1, grid, scheme, psi) != SENTINEL
    assert conditional._symmetric_interpolate_yafa(4, 1, 1, grid, scheme, psi) == SENTINEL
    assert conditional._symmetric_interpolate_yafa(1, 4, 1, grid, scheme, psi) != SENTINEL


def test_specialization_resolves_topology_once():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Periodic, Bounded, Bounded))
    assert specialize_interpolator(grid, "symmetric", "x", Face).__name__ == "symmetric_interpolate_xfaa"
    assert specialize_interpolator(grid, "left_biased", "y", Center).__name__ == "_left_biased_interpolate_yaca"
    fn = specialize_interpolator(grid, "right_biased", 2, "f")
    assert fn is CONDITIONAL_INTERPOLATORS[("right_biased", "z", Face)]


@pytest.mark.parametrize("stencil", [DefaultStencil(), VelocityStencil()])
def test_vector_invariant_reconstruction(stencil, rng):
    grid = RectilinearGrid((8, 8, 1), halo=3, topology=(Bounded, Periodic, Collapsed))
    u, v = XFaceField(grid), CenterField(grid)
    u.set(rng.normal(size=u.interior_shape))
    v.set(rng.normal(size=v.interior_shape))
    u.fill_halo_regions()
    v.fill_halo_regions()
    zeta = lambda i, j, k, grid, u, v: 2.0 * i
    scheme = WENOVectorInvariant(5)
    interp = conditional._left_biased_interpolate_xfaa
    for i in range(3, 8):
        # linear data: every candidate stencil is exact, whatever the weights
        assert interp(i, 1, 1, grid, scheme, zeta, stencil, u, v) == pytest.approx(2.0 * i - 1.0)
    # next to the walls the first-order fallback returns the upwind cell
    for i in (1, 2, 8):
        assert interp(i, 1, 1, grid, scheme, zeta, stencil, u, v) == pytest.approx(2.0 * (i - 1))
