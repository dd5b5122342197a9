"""pystagger.core.topology
Axis topology tags, staggering locations and the small helpers that
normalise user input to them.
"""
from __future__ import annotations
from typing import Optional, Tuple, Union

# ---- axis topologies --------------------------------------------------
Periodic = "Periodic"
Bounded = "Bounded"
Collapsed = "Collapsed"
TOPOLOGIES = (Periodic, Bounded, Collapsed)

_TOPOLOGY_ALIASES = {
    "periodic": Periodic,
    "bounded": Bounded,
    "collapsed": Collapsed,
    "flat": Collapsed,
}

# ---- staggering locations ---------------------------------------------
Center = "Center"
Face = "Face"
LOCATIONS = (Center, Face)

_LOCATION_ALIASES = {
    "center": Center, "c": Center,
    "face": Face, "f": Face,
}

# ---- interpolation biases ---------------------------------------------
Symmetric = "symmetric"
LeftBiased = "left_biased"
RightBiased = "right_biased"
BIASES = (Symmetric, LeftBiased, RightBiased)

AXES = ("x", "y", "z")


def normalize_topology(tag: str) -> str:
    try:
        return _TOPOLOGY_ALIASES[str(tag).strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown axis topology {tag!r}; expected one of {TOPOLOGIES}.") from None


def normalize_location(loc: Optional[str]) -> Optional[str]:
    """Map 'c'/'center'/'Center' (and the face spellings) to a location tag.
    ``None`` marks a reduced axis and passes through unchanged."""
    if loc is None:
        return None
    try:
        return _LOCATION_ALIASES[str(loc).strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown staggering location {loc!r}; expected one of {LOCATIONS} or None.") from None


def normalize_bias(bias: str) -> str:
    b = str(bias).strip().lower().replace("-", "_")
    if b in BIASES:
        return b
    raise ValueError(f"Unknown interpolation bias {bias!r}; expected one of {BIASES}.")


def axis_index(axis: Union[str, int]) -> int:
    """'x'/'y'/'z' or 0/1/2 -> 0/1/2."""
    if isinstance(axis, str):
        try:
            return AXES.index(axis.lower())
        except ValueError:
            raise ValueError(f"Unknown axis {axis!r}; expected one of {AXES}.") from None
    d = int(axis)
    if d not in (0, 1, 2):
        raise ValueError(f"Axis index must be 0, 1 or 2, got {axis!r}.")
    return d


def location_code(d: int, loc: str) -> str:
    """Three-letter code of an interpolation target, e.g. (0, Face) -> 'faa'."""
    code = ["a", "a", "a"]
    code[d] = "f" if loc == Face else "c"
    return "".join(code)


def normalize_location_triple(loc) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    if isinstance(loc, str) or loc is None or len(loc) != 3:
        raise ValueError(f"A field location is a triple (LX, LY, LZ), got {loc!r}.")
    return tuple(normalize_location(l) for l in loc)
