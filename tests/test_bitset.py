import numpy as np
import pytest

from pystagger.utils.bitset import BitSet


def test_bitset_is_a_frozen_view():
    m = np.zeros((2, 3, 4), dtype=bool)
    m[1, 2, 3] = True
    bs = BitSet(m)
    assert bs.shape == (2, 3, 4)
    assert (1, 2, 3) in bs and (0, 0, 0) not in bs
    assert bs[1, 2, 3]
    assert bs.array.flags.c_contiguous
    with pytest.raises(ValueError):
        bs.array[0, 0, 0] = True


def test_bitset_converts_to_bool():
    bs = BitSet([[0, 2], [1, 0]])
    assert bs.array.dtype == np.bool_
    assert bs.array.tolist() == [[False, True], [True, False]]
