"""pystagger
Boundary-aware stencil selection and immersed-boundary masking on
staggered (Arakawa C) grids.
"""
from pystagger.core import *  # noqa: F401,F403
from pystagger.advection import (
    Centered, UpwindBiased, WENO, WENOVectorInvariant, VectorInvariant, MultiDimensionalScheme,
    DefaultStencil, VelocityStencil, outside_buffer, conditional_interpolate, specialize_interpolator,
)
from pystagger.immersed import (
    mask_immersed_field, mask_immersed_reduced_field_xy, mask_immersed_velocities,
)
from pystagger.kernels import ExecutionContext

__version__ = "0.1.0"
