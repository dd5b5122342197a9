import numpy as np
import pytest

from pystagger.advection import Centered, MultiDimensionalScheme, UpwindBiased, WENO
from pystagger.core import (
    Bounded, Center, Collapsed, ConfigurationError, Face, GridFittedBoundary,
    ImmersedBoundaryGrid, Periodic, RectilinearGrid,
)
from pystagger.core.immersed import AbstractImmersedBoundary


class WrongShape(AbstractImmersedBoundary):
    def immersed_cells(self, grid):
        return np.zeros((2, 2, 2), dtype=bool)


def test_metadata():
    grid = RectilinearGrid((8, 4, 2), extent=(2.0, 1.0, 4.0), halo=(3, 2, 1),
                           topology=("periodic", "Bounded", "bounded"))
    assert grid.topology == (Periodic, Bounded, Bounded)
    assert (grid.Nx, grid.Ny, grid.Nz) == (8, 4, 2)
    assert (grid.Hx, grid.Hy, grid.Hz) == (3, 2, 1)
    assert grid.spacing == pytest.approx((0.25, 0.25, 2.0))
    assert grid.is_bounded("y") and not grid.is_bounded(0)
    assert grid.axis_size("z") == 2


def test_flat_is_an_alias_for_collapsed():
    grid = RectilinearGrid((8, 1, 4), halo=3, topology=(Periodic, "Flat", Bounded))
    assert grid.topology[1] == Collapsed
    assert grid.halo == (3, 0, 3)


@pytest.mark.parametrize("kwargs", [
    dict(size=(8, 2, 4), topology=(Periodic, Collapsed, Bounded)),
    dict(size=(0, 4, 4)),
    dict(size=(4, 4, 4), halo=0),
    dict(size=(4, 4, 4), extent=(1.0, -1.0, 1.0)),
    dict(size=(4, 4)),
    dict(size=(4, 4, 4), topology=(Periodic, "Sideways", Bounded)),
])
def test_invalid_configuration(kwargs):
    with pytest.raises((ConfigurationError, ValueError)):
        RectilinearGrid(**kwargs)


def test_face_points_on_bounded_axes():
    grid = RectilinearGrid((8, 4, 1), topology=(Bounded, Periodic, Collapsed))
    assert grid.interior_points(0, Face) == 9
    assert grid.interior_points(0, Center) == 8
    assert grid.interior_points(1, Face) == 4
    assert grid.interior_points(2, Face) == 1
    assert grid.interior_points(0, None) == 1


def test_coordinates():
    grid = RectilinearGrid((4, 2, 2), extent=(1.0, 2.0, 2.0), origin=(-1.0, 0.0, 0.0),
                           topology=(Bounded, Periodic, Bounded))
    np.testing.assert_allclose(grid.nodes("x", Face), [-1.0, -0.75, -0.5, -0.25, 0.0])
    np.testing.assert_allclose(grid.nodes("x", Center), [-0.875, -0.625, -0.375, -0.125])
    assert grid.node(1, 1, 1) == pytest.approx((-0.875, 0.5, 0.5))
    assert grid.node(1, 2, 3, (Face, Center, Face)) == pytest.approx((-1.0, 1.5, 2.0))


def test_halo_validation():
    grid = RectilinearGrid((8, 8, 8), halo=2)
    grid.validate_halo(Centered(4))
    grid.validate_halo(UpwindBiased(3))
    for scheme in (Centered(6), WENO(5), MultiDimensionalScheme(WENO(5))):
        with pytest.raises(ConfigurationError):
            grid.validate_halo(scheme)


def test_collapsed_axes_need_no_halo():
    grid = RectilinearGrid((8, 1, 1), halo=3, topology=(Periodic, Collapsed, Collapsed))
    grid.validate_halo(WENO(5))


def test_immersed_grid_pads_inactive_cells():
    solid = np.zeros((4, 3, 2), dtype=bool)
    solid[0, 1, 0] = True
    base = RectilinearGrid((4, 3, 2), topology=(Periodic, Bounded, Bounded))
    grid = ImmersedBoundaryGrid(base, GridFittedBoundary(solid))
    inactive = grid.inactive_cells
    assert inactive.shape == (6, 5, 4)
    assert inactive[1, 2, 1]
    # periodic x wraps: padded cell 5 is cell 1
    assert inactive[5, 2, 1]
    # bounded y and z: outside is inactive
    assert inactive[2, 0, 1] and inactive[2, 4, 1] and inactive[2, 1, 0]
    assert not inactive[2, 2, 1]
    assert grid.size == base.size and grid.topology == base.topology
    assert grid.immersed_boundary is not None


def test_immersed_grid_rejects_bad_input():
    base = RectilinearGrid((4, 3, 2))
    with pytest.raises(ConfigurationError):
        ImmersedBoundaryGrid(base, WrongShape())
    grid = ImmersedBoundaryGrid(base, GridFittedBoundary(np.zeros((4, 3, 2), dtype=bool)))
    with pytest.raises(ConfigurationError):
        ImmersedBoundaryGrid(grid, GridFittedBoundary(np.zeros((4, 3, 2), dtype=bool)))
