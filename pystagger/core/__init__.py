from .topology import Periodic, Bounded, Collapsed, Center, Face
from .exceptions import ConfigurationError
from .grid import RectilinearGrid, ImmersedBoundaryGrid
from .field import Field, CenterField, XFaceField, YFaceField, ZFaceField
from .immersed import (
    GridFittedBoundary, GridFittedBottom,
    immersed_cell, inactive_cell, inactive_node, peripheral_node, boundary_node,
)
__all__ = ['Periodic', 'Bounded', 'Collapsed', 'Center', 'Face', 'ConfigurationError',
           'RectilinearGrid', 'ImmersedBoundaryGrid',
           'Field', 'CenterField', 'XFaceField', 'YFaceField', 'ZFaceField',
           'GridFittedBoundary', 'GridFittedBottom',
           'immersed_cell', 'inactive_cell', 'inactive_node', 'peripheral_node', 'boundary_node']
