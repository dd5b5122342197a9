"""pystagger.kernels.masking
Parallel kernels that classify nodes against the inactive-cell array and
overwrite masked field entries.
"""
import numba

from pystagger.kernels.launch import kernel

# node classification codes
INACTIVE = 0
PERIPHERAL = 1
BOUNDARY = 2
IMMERSED_CELL = 3


@kernel
def _node_mask(inactive, fx, fy, fz, kind, k0, out):
    """
    out[a, b, c] classifies node (a+1, b+1, c+1+k0) of a field whose location
    has Face flags (fx, fy, fz). ``inactive`` is padded by one cell, so the
    padded index of 1-based cell n is n.
    """
    nx, ny, nz = out.shape
    for a in numba.prange(nx):
        for b in range(ny):
            for c in range(nz):
                kk = c + k0
                if kind == IMMERSED_CELL:
                    out[a, b, c] = inactive[a + 1, b + 1, kk + 1]
                    continue
                any_inactive = False
                all_inactive = True
                for p in range(a + 1 - fx, a + 2):
                    for q in range(b + 1 - fy, b + 2):
                        for r in range(kk + 1 - fz, kk + 2):
                            if inactive[p, q, r]:
                                any_inactive = True
                            else:
                                all_inactive = False
                if kind == INACTIVE:
                    out[a, b, c] = all_inactive
                elif kind == PERIPHERAL:
                    out[a, b, c] = any_inactive
                else:
                    out[a, b, c] = any_inactive and not all_inactive


@kernel
def _mask_volume(data, mask, value, hx, hy, hz):
    nx, ny, nz = mask.shape
    for a in numba.prange(nx):
        for b in range(ny):
            for c in range(nz):
                if mask[a, b, c]:
                    data[a + hx, b + hy, c + hz] = value


@kernel
def _mask_level(data, mask, value, hx, hy, kz):
    nx, ny = mask.shape
    for a in numba.prange(nx):
        for b in range(ny):
            if mask[a, b]:
                data[a + hx, b + hy, kz] = value
