from .schemes import (
    AbstractAdvectionScheme, Centered, UpwindBiased, WENO, WENOVectorInvariant, VectorInvariant,
    MultiDimensionalScheme, DefaultStencil, VelocityStencil, validate_scheme_chain,
)
from .buffers import outside_buffer, outside_multi_dimensional_buffer, BUFFER_PREDICATES
from .conditional import (
    conditional_interpolate, get_interpolator, specialize_interpolator,
    CONDITIONAL_INTERPOLATORS, NATIVE_INTERPOLATORS,
)
from .multidimensional import (
    multi_dimensional_interpolate_x, multi_dimensional_interpolate_y,
    _multi_dimensional_interpolate_x, _multi_dimensional_interpolate_y,
)
from .fluxes import advective_tracer_flux_x, advective_tracer_flux_y, advective_tracer_flux_z, upwind_biased_product
