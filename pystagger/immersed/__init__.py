from .mask import (
    mask_immersed_field, mask_immersed_reduced_field_xy, mask_immersed_velocities, node_mask,
)
__all__ = ['mask_immersed_field', 'mask_immersed_reduced_field_xy', 'mask_immersed_velocities', 'node_mask']
