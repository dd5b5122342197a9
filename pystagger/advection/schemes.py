"""pystagger.advection.schemes
Interpolation schemes and their boundary degradation chains.

Every scheme has a ``boundary_buffer`` (points it needs on each side of the
reconstruction point) and a ``boundary_scheme`` with a strictly smaller
buffer to use near a Bounded edge. Chains end at a buffer-1 scheme.
"""
from __future__ import annotations
from typing import Optional, Sequence

import numpy as np

from pystagger.core.exceptions import ConfigurationError
from pystagger.core.topology import (
    Face, LeftBiased, RightBiased, Symmetric, normalize_bias,
)
from pystagger.advection import stencils


# ---- smoothness stencils for vector-invariant WENO ------------------------
class SmoothnessStencil:
    def __repr__(self):
        return f"{type(self).__name__}()"


class DefaultStencil(SmoothnessStencil):
    """Smoothness measured on the reconstructed quantity itself."""


class VelocityStencil(SmoothnessStencil):
    """Smoothness measured on the velocity components passed after the stencil marker."""


def _strip_markers(args):
    return tuple(a for a in args if not isinstance(a, SmoothnessStencil))


# ---- reading operands --------------------------------------------------------
def stencil_start(bias: str, location: str, N: int) -> int:
    """
    Offset of the first stencil point from the target index.

    A face i lies between cells i-1 and i; a centre i between faces i and i+1,
    so centre stencils are shifted by one.
    """
    shift = 0 if location == Face else 1
    if bias == RightBiased:
        return -N + 1 + shift
    return -N + shift


def operand_value(psi, i, j, k, grid, args):
    """``psi`` is a Field (indexed) or a callable ``psi(i, j, k, grid, *args)``."""
    if callable(psi):
        return psi(i, j, k, grid, *_strip_markers(args))
    return psi[i, j, k]


def stencil_values(d: int, start: int, width: int, i, j, k, grid, psi, args) -> np.ndarray:
    idx = [i, j, k]
    base = idx[d]
    vals = np.empty(width, dtype=float)
    for n in range(width):
        idx[d] = base + start + n
        vals[n] = operand_value(psi, idx[0], idx[1], idx[2], grid, args)
    return vals


# ---- schemes --------------------------------------------------------------
class AbstractAdvectionScheme:
    """Abstract base class"""
    low_order = False

    def __init__(self, order: int, buffer: int, boundary_scheme=None):
        self._order = int(order)
        self._buffer = int(buffer)
        if boundary_scheme is not None and not isinstance(boundary_scheme, AbstractAdvectionScheme):
            raise ConfigurationError(f"boundary_scheme must be a scheme, got {boundary_scheme!r}.")
        self._boundary_scheme = boundary_scheme

    @property
    def order(self) -> int:
        return self._order

    @property
    def boundary_buffer(self) -> int:
        return self._buffer

    @property
    def boundary_scheme(self) -> Optional["AbstractAdvectionScheme"]:
        return self._boundary_scheme

    @property
    def is_high_order(self) -> bool:
        """Whether Bounded axes have to check this scheme against the edge."""
        return not self.low_order and self._buffer > 1

    @property
    def required_halo(self) -> int:
        return self._buffer

    def native_interpolate(self, bias, d, loc, i, j, k, grid, psi, *args):
        if bias == Symmetric:
            return self.symmetric_interpolate(d, loc, i, j, k, grid, psi, *args)
        if bias == LeftBiased:
            return self.left_biased_interpolate(d, loc, i, j, k, grid, psi, *args)
        if bias == RightBiased:
            return self.right_biased_interpolate(d, loc, i, j, k, grid, psi, *args)
        return self.native_interpolate(normalize_bias(bias), d, loc, i, j, k, grid, psi, *args)

    def symmetric_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        raise NotImplementedError

    def left_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        raise NotImplementedError

    def right_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(order={self._order})"


def validate_scheme_chain(scheme: AbstractAdvectionScheme) -> None:
    """Reject fallback chains that cycle, do not shrink, or stop above buffer 1."""
    seen = set()
    s = scheme
    while s is not None:
        if id(s) in seen:
            raise ConfigurationError(f"Boundary scheme chain of {scheme!r} is cyclic.")
        seen.add(id(s))
        nxt = s.boundary_scheme
        if nxt is None:
            if s.boundary_buffer != 1:
                raise ConfigurationError(
                    f"Boundary scheme chain of {scheme!r} ends at {s!r} with buffer "
                    f"{s.boundary_buffer}; it must end at a buffer-1 scheme.")
        elif nxt.boundary_buffer >= s.boundary_buffer:
            raise ConfigurationError(
                f"{s!r} (buffer {s.boundary_buffer}) falls back to {nxt!r} "
                f"(buffer {nxt.boundary_buffer}); buffers must strictly decrease.")
        s = nxt


class Centered(AbstractAdvectionScheme):
    """Centred interpolation of even order 2N over 2N points, buffer N."""

    def __init__(self, order: int = 2, *, boundary_scheme=None):
        if order < 2 or order % 2:
            raise ConfigurationError(f"Centered schemes have even order >= 2, got {order}.")
        if boundary_scheme is None and order > 2:
            boundary_scheme = Centered(order - 2)
        super().__init__(order, order // 2, boundary_scheme)
        self.coefficients = stencils.centered_coefficients(order)
        validate_scheme_chain(self)

    def symmetric_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        N = self._buffer
        vals = stencil_values(d, stencil_start(Symmetric, loc, N), 2 * N, i, j, k, grid, psi, args)
        return float(self.coefficients @ vals)

    # a centred scheme has no upwind side
    left_biased_interpolate = symmetric_interpolate
    right_biased_interpolate = symmetric_interpolate


class UpwindBiased(AbstractAdvectionScheme):
    """Upwind-biased interpolation of odd order 2N-1 over 2N-1 points, buffer N."""

    def __init__(self, order: int = 3, *, boundary_scheme=None):
        if order < 1 or order % 2 == 0:
            raise ConfigurationError(f"UpwindBiased schemes have odd order >= 1, got {order}.")
        if boundary_scheme is None and order > 1:
            boundary_scheme = UpwindBiased(order - 2)
        super().__init__(order, (order + 1) // 2, boundary_scheme)
        self.advecting_velocity_scheme = Centered(order + 1)
        self.left_coefficients = stencils.left_biased_coefficients(order)
        self.right_coefficients = stencils.right_biased_coefficients(order)
        validate_scheme_chain(self)

    def symmetric_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self.advecting_velocity_scheme.symmetric_interpolate(d, loc, i, j, k, grid, psi, *args)

    def left_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        N = self._buffer
        vals = stencil_values(d, stencil_start(LeftBiased, loc, N), 2 * N - 1, i, j, k, grid, psi, args)
        return float(self.left_coefficients @ vals)

    def right_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        N = self._buffer
        vals = stencil_values(d, stencil_start(RightBiased, loc, N), 2 * N - 1, i, j, k, grid, psi, args)
        return float(self.right_coefficients @ vals)


class WENO(AbstractAdvectionScheme):
    """
    Weighted essentially non-oscillatory reconstruction of odd order 2N-1
    (Jiang & Shu weights). Symmetric interpolation uses Centered(2N).
    """

    def __init__(self, order: int = 5, *, boundary_scheme=None, epsilon: float = 1e-8):
        if order < 3 or order % 2 == 0:
            raise ConfigurationError(f"WENO schemes have odd order >= 3, got {order}.")
        if boundary_scheme is None:
            boundary_scheme = type(self)(order - 2, epsilon=epsilon) if order > 3 else UpwindBiased(1)
        super().__init__(order, (order + 1) // 2, boundary_scheme)
        N = self._buffer
        self.epsilon = float(epsilon)
        self.advecting_velocity_scheme = Centered(order + 1)
        self.candidate_coefficients = tuple(stencils.reconstruction_coefficients(-N + r, N) for r in range(N))
        self.optimal_weights = stencils.weno_optimal_weights(N)
        self.smoothness_matrices = stencils.weno_smoothness_matrices(N)
        validate_scheme_chain(self)

    def _reconstruct(self, values: np.ndarray, smoothness: Sequence[np.ndarray]) -> float:
        """Left-biased reconstruction from 2N-1 values in upwind orientation."""
        N = self._buffer
        q = np.array([c @ values[r:r + N] for r, c in enumerate(self.candidate_coefficients)])
        beta = np.zeros(N)
        for s in smoothness:
            for r, B in enumerate(self.smoothness_matrices):
                w = s[r:r + N]
                beta[r] += w @ B @ w
        beta /= len(smoothness)
        alpha = self.optimal_weights / (self.epsilon + beta) ** 2
        return float(alpha @ q / alpha.sum())

    def _smoothness_sets(self, d, start, width, i, j, k, grid, values, args):
        return (values,)

    def _biased(self, bias, d, loc, i, j, k, grid, psi, args):
        N = self._buffer
        start = stencil_start(bias, loc, N)
        values = stencil_values(d, start, 2 * N - 1, i, j, k, grid, psi, args)
        sets = self._smoothness_sets(d, start, 2 * N - 1, i, j, k, grid, values, args)
        if bias == RightBiased:
            return self._reconstruct(values[::-1], [s[::-1] for s in sets])
        return self._reconstruct(values, sets)

    def symmetric_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self.advecting_velocity_scheme.symmetric_interpolate(d, loc, i, j, k, grid, psi, *args)

    def left_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self._biased(LeftBiased, d, loc, i, j, k, grid, psi, args)

    def right_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self._biased(RightBiased, d, loc, i, j, k, grid, psi, args)


class WENOVectorInvariant(WENO):
    """
    WENO for vector-invariant momentum terms. The operand is a callable such
    as the vorticity ``zeta(i, j, k, grid, u, v)``; the arguments are
    ``(stencil, *velocities)`` with ``stencil`` a DefaultStencil or a
    VelocityStencil.
    """

    def _smoothness_sets(self, d, start, width, i, j, k, grid, values, args):
        if args and isinstance(args[0], VelocityStencil):
            fields = [a for a in args[1:] if not callable(a)]
            if fields:
                return tuple(stencil_values(d, start, width, i, j, k, grid, u, ()) for u in fields)
        return (values,)


class VectorInvariant(AbstractAdvectionScheme):
    """Second-order energy-conserving vector-invariant form; never degraded."""
    low_order = True

    def __init__(self):
        super().__init__(2, 1, None)
        self._centered = Centered(2)
        self._upwind = UpwindBiased(1)

    def symmetric_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self._centered.symmetric_interpolate(d, loc, i, j, k, grid, psi, *args)

    def left_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self._upwind.left_biased_interpolate(d, loc, i, j, k, grid, psi, *args)

    def right_biased_interpolate(self, d, loc, i, j, k, grid, psi, *args):
        return self._upwind.right_biased_interpolate(d, loc, i, j, k, grid, psi, *args)


class MultiDimensionalScheme(AbstractAdvectionScheme):
    """
    Genuinely two-dimensional reconstruction: combines 2h+1 one-dimensional
    reconstructions taken at neighbouring positions across the axis
    (order = 2h+1). Near a Bounded edge it switches to the one-dimensional
    scheme alone instead of a narrower two-dimensional stencil.
    """

    def __init__(self, one_dimensional_scheme: AbstractAdvectionScheme, order: int = 3):
        if order < 3 or order % 2 == 0:
            raise ConfigurationError(f"Multi-dimensional schemes have odd order >= 3, got {order}.")
        if not isinstance(one_dimensional_scheme, AbstractAdvectionScheme) or \
                isinstance(one_dimensional_scheme, MultiDimensionalScheme):
            raise ConfigurationError("one_dimensional_scheme must be a one-dimensional scheme.")
        super().__init__(order, (order - 1) // 2, None)
        self.one_dimensional_scheme = one_dimensional_scheme
        self.coefficients = stencils.average_to_point_coefficients(order)

    @property
    def is_high_order(self) -> bool:
        return True

    @property
    def required_halo(self) -> int:
        return max(self._buffer, self.one_dimensional_scheme.required_halo)

    def __repr__(self):
        return f"MultiDimensionalScheme({self.one_dimensional_scheme!r}, order={self._order})"
