import pytest

from pystagger.advection import (
    MultiDimensionalScheme, UpwindBiased, WENO,
    multi_dimensional_interpolate_x, _multi_dimensional_interpolate_x, _multi_dimensional_interpolate_y,
)
from pystagger.core import Bounded, Periodic, RectilinearGrid


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, i, j, k, grid, scheme, *args):
        self.calls.append((i, j, k, scheme))
        return float(i + 100 * j)


def test_coefficients_sum_to_one():
    for order in (3, 5, 7):
        s = MultiDimensionalScheme(UpwindBiased(3), order=order)
        assert s.boundary_buffer == (order - 1) // 2
        assert sum(s.coefficients) == pytest.approx(1.0)


def test_bounded_edge_switches_to_one_dimensional_scheme():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Bounded, Periodic, Periodic))
    one_d = WENO(5)
    scheme = MultiDimensionalScheme(one_d, order=5)
    for i in range(1, 9):
        func = Recorder()
        _multi_dimensional_interpolate_x(i, 4, 1, grid, None, scheme, func)
        if 3 <= i <= 5:
            assert [c[0] for c in func.calls] == [i - 2, i - 1, i, i + 1, i + 2]
        else:
            assert func.calls == [(i, 4, 1, one_d)]
        assert all(c[3] is one_d for c in func.calls)


def test_periodic_axis_always_combines():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Periodic, Periodic, Periodic))
    scheme = MultiDimensionalScheme(UpwindBiased(3), order=3)
    func = Recorder()
    got = _multi_dimensional_interpolate_x(1, 2, 1, grid, None, scheme, func)
    assert len(func.calls) == 3
    assert got == pytest.approx(multi_dimensional_interpolate_x(1, 2, 1, grid, None, scheme, Recorder()))
    # the reconstruction of a linear profile is the point value
    assert got == pytest.approx(201.0)


def test_y_variant_checks_only_y():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Periodic, Bounded, Periodic))
    scheme = MultiDimensionalScheme(UpwindBiased(3), order=3)
    func = Recorder()
    _multi_dimensional_interpolate_y(1, 1, 1, grid, None, scheme, func)
    assert len(func.calls) == 1
    func = Recorder()
    _multi_dimensional_interpolate_y(1, 4, 1, grid, None, scheme, func)
    assert [c[1] for c in func.calls] == [3, 4, 5]


def test_explicit_coefficients_must_match_the_stencil():
    grid = RectilinearGrid((8, 8, 4), halo=3, topology=(Periodic, Periodic, Periodic))
    scheme = MultiDimensionalScheme(UpwindBiased(3), order=3)
    assert multi_dimensional_interpolate_x(4, 1, 1, grid, (0.0, 1.0, 0.0), scheme, Recorder()) == 4.0
    with pytest.raises(ValueError):
        multi_dimensional_interpolate_x(4, 1, 1, grid, (0.5, 0.5), scheme, Recorder())
