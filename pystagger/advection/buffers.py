"""pystagger.advection.buffers
Is an index far enough from both ends of a Bounded axis for a full stencil?

Indices are 1-based. Face- and centre-staggered stencils are offset by half
a cell (a centre stencil looks one point further right), and biased stencils
need one point less on their downwind side.
"""
from typing import Union

from pystagger.core.topology import (
    Center, Face, LeftBiased, RightBiased, Symmetric, normalize_bias, normalize_location,
)


def _width(buffer) -> int:
    return int(getattr(buffer, "boundary_buffer", buffer))


def outside_symmetric_buffer_f(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b and i < N + 1 - b


def outside_symmetric_buffer_c(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b - 1 and i < N + 1 - b


def outside_left_biased_buffer_f(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b and i < N + 1 - (b - 1)


def outside_left_biased_buffer_c(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b - 1 and i < N + 1 - (b - 1)


def outside_right_biased_buffer_f(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b - 1 and i < N + 1 - b


def outside_right_biased_buffer_c(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b - 2 and i < N + 1 - b


def outside_multi_dimensional_buffer(i, N, buffer) -> bool:
    b = _width(buffer)
    return i > b and i < N - b


BUFFER_PREDICATES = {
    (Symmetric, Face): outside_symmetric_buffer_f,
    (Symmetric, Center): outside_symmetric_buffer_c,
    (LeftBiased, Face): outside_left_biased_buffer_f,
    (LeftBiased, Center): outside_left_biased_buffer_c,
    (RightBiased, Face): outside_right_biased_buffer_f,
    (RightBiased, Center): outside_right_biased_buffer_c,
}


def outside_buffer(i: int, N: int, buffer: Union[int, object], bias: str, location: str) -> bool:
    """``buffer`` is a width or anything with a ``boundary_buffer``."""
    return BUFFER_PREDICATES[(normalize_bias(bias), normalize_location(location))](i, N, buffer)
