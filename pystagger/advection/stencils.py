"""pystagger.advection.stencils
Exact stencil coefficients derived with SymPy.

Offsets are measured in cells relative to the reconstruction point, which
sits at x = 0: the cell at offset m spans [m, m+1]. For a face the cell at
offset -1 is the one on its left.
"""
from functools import lru_cache
from typing import Tuple

import numpy as np
import sympy as sp


@lru_cache(maxsize=None)
def _reconstruction_rationals(start: int, npoints: int) -> Tuple[sp.Rational, ...]:
    """Weights c_m with sum_m c_m * avg_m = p(0), p the degree npoints-1
    polynomial whose cell averages over cells start..start+npoints-1 match."""
    x = sp.symbols('x')
    nodes = list(range(start, start + npoints + 1))
    # derivative at 0 of the Lagrange basis for the primitive
    dL = []
    for a in nodes:
        num, den = sp.Integer(1), sp.Integer(1)
        for b in nodes:
            if a == b:
                continue
            num *= (x - b)
            den *= (a - b)
        dL.append(sp.diff(num / den, x).subs(x, 0))
    coeffs = []
    for m in range(npoints):
        coeffs.append(sp.nsimplify(sum(dL[m + 1:])))
    return tuple(coeffs)


@lru_cache(maxsize=None)
def reconstruction_coefficients(start: int, npoints: int) -> np.ndarray:
    return np.array([float(c) for c in _reconstruction_rationals(start, npoints)], dtype=float)


def centered_coefficients(order: int) -> np.ndarray:
    """Order-2N centred weights over offsets -N .. N-1."""
    N = order // 2
    return reconstruction_coefficients(-N, 2 * N)


def left_biased_coefficients(order: int) -> np.ndarray:
    """Order-(2N-1) weights over offsets -N .. N-2 (upwind for positive velocity)."""
    N = (order + 1) // 2
    return reconstruction_coefficients(-N, 2 * N - 1)


def right_biased_coefficients(order: int) -> np.ndarray:
    """Order-(2N-1) weights over offsets -N+1 .. N-1 (upwind for negative velocity)."""
    N = (order + 1) // 2
    return reconstruction_coefficients(-N + 1, 2 * N - 1)


@lru_cache(maxsize=None)
def weno_optimal_weights(N: int) -> np.ndarray:
    """Linear weights d_r combining the N candidate stencils of width N into
    the left-biased stencil of width 2N-1."""
    d = sp.symbols(f'd0:{N}')
    full = _reconstruction_rationals(-N, 2 * N - 1)
    expr = [sp.Integer(0)] * (2 * N - 1)
    for r in range(N):
        sub = _reconstruction_rationals(-N + r, N)
        for m, c in enumerate(sub):
            expr[r + m] += d[r] * c
    sol = sp.solve([e - f for e, f in zip(expr, full)], d, dict=True)[0]
    return np.array([float(sol[s]) for s in d], dtype=float)


@lru_cache(maxsize=None)
def weno_smoothness_matrices(N: int) -> Tuple[np.ndarray, ...]:
    """
    Jiang-Shu smoothness indicators as quadratic forms: beta_r = v_r^T B_r v_r
    with v_r the N cell averages of candidate r, integrated over the upwind
    cell [-1, 0].
    """
    x = sp.symbols('x')
    v = sp.symbols(f'v0:{N}')
    mats = []
    for r in range(N):
        start = -N + r
        nodes = list(range(start, start + N + 1))
        # primitive through the cell interfaces, differentiated once
        Q = sp.interpolate(list(zip(nodes, [sum(v[:m]) for m in range(N + 1)])), x)
        p = sp.diff(Q, x)
        beta = sp.Integer(0)
        for l in range(1, N):
            beta += sp.integrate(sp.diff(p, x, l) ** 2, (x, -1, 0))
        beta = sp.expand(beta)
        B = np.empty((N, N), dtype=float)
        for a in range(N):
            for b in range(N):
                c = beta.coeff(v[a], 1).coeff(v[b], 1) if a != b else beta.coeff(v[a], 2)
                B[a, b] = float(c) / 2.0 if a != b else float(c)
        mats.append(B)
    return tuple(mats)


@lru_cache(maxsize=None)
def average_to_point_coefficients(order: int) -> np.ndarray:
    """Weights over offsets -h .. h (order = 2h+1) turning cell averages into
    the point value at the centre of cell 0."""
    h = (order - 1) // 2
    x = sp.symbols('x')
    nodes = list(range(-h, h + 2))
    coeffs = []
    for m in range(2 * h + 1):
        # primitive Lagrange basis differentiated at the cell centre x = 1/2
        total = sp.Integer(0)
        for a in nodes[m + 1:]:
            num, den = sp.Integer(1), sp.Integer(1)
            for b in nodes:
                if a == b:
                    continue
                num *= (x - b)
                den *= (a - b)
            total += sp.diff(num / den, x).subs(x, sp.Rational(1, 2))
        coeffs.append(float(total))
    return np.array(coeffs, dtype=float)
