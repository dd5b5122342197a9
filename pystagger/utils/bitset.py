"""pystagger.utils.bitset"""
import numpy as np


class BitSet:
    """
    Frozen boolean flags over cells or nodes of a grid.

    The array is contiguous and read-only, so it can be handed to JIT
    kernels and shared between cached node masks without copying.
    """

    def __init__(self, mask):
        self.mask = np.ascontiguousarray(mask, dtype=bool).view()
        self.mask.setflags(write=False)

    @property
    def shape(self):
        return self.mask.shape

    @property
    def array(self) -> np.ndarray:
        return self.mask

    def __getitem__(self, idx):
        return self.mask[idx]

    def __contains__(self, idx):
        return bool(self.mask[idx])

    def __repr__(self):
        return f'<BitSet {int(self.mask.sum())}/{self.mask.size} shape={self.shape}>'
